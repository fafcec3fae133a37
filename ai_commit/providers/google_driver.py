from __future__ import annotations

from .base import BaseDriver


class GoogleDriver(BaseDriver):
    """Driver for Google Gemini ``generateContent``."""

    provider_name = "Google Gemini"

    def complete(self, system: str, user: str) -> str:
        url = f"{self.base_url}/models/{self.model}:generateContent"
        headers = {
            "x-goog-api-key": self.provider.api_key or "",
            "content-type": "application/json",
        }
        payload = {
            "systemInstruction": {"parts": [{"text": system}]},
            "contents": [{"role": "user", "parts": [{"text": user}]}],
            "generationConfig": {"temperature": self.temperature},
        }
        data = self._post_json(url, headers, payload)
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(str(p.get("text", "")) for p in parts if isinstance(p, dict))
