from __future__ import annotations

from .base import BaseDriver


class OllamaDriver(BaseDriver):
    """Driver for a local Ollama server (``/api/chat``, non-streaming)."""

    provider_name = "Ollama"

    def complete(self, system: str, user: str) -> str:
        url = self.base_url + "/api/chat"
        payload = {
            "model": self.model,
            "stream": False,
            "options": {"temperature": self.temperature},
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        }
        data = self._post_json(url, {"content-type": "application/json"}, payload)
        message = data.get("message") or {}
        return str(message.get("content") or "")
