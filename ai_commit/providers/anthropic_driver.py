from __future__ import annotations

from .base import BaseDriver


class AnthropicDriver(BaseDriver):
    """Driver handling Anthropic API calls (messages endpoint)."""

    provider_name = "Anthropic"
    API_VERSION = "2023-06-01"
    MAX_TOKENS = 1024

    def complete(self, system: str, user: str) -> str:
        url = self.base_url + "/v1/messages"
        headers = {
            "x-api-key": self.provider.api_key or "",
            "anthropic-version": self.API_VERSION,
            "content-type": "application/json",
        }
        payload = {
            "model": self.model,
            "max_tokens": self.MAX_TOKENS,
            "temperature": self.temperature,
            "system": system,
            "messages": [
                {
                    "role": "user",
                    "content": [{"type": "text", "text": user}],
                }
            ],
        }
        data = self._post_json(url, headers, payload)
        texts = []
        for chunk in data.get("content") or []:
            if isinstance(chunk, dict) and chunk.get("type") == "text":
                texts.append(chunk.get("text", ""))
        return "\n".join(filter(None, texts))
