from __future__ import annotations

from typing import Any, Optional

import openai

from ..config import DEFAULT_REQUEST_TIMEOUT, DEFAULT_TEMPERATURE, ProviderConfig
from ..exceptions import LLMError
from .base import BaseDriver


class OpenAIDriver(BaseDriver):
    """Driver for OpenAI and OpenAI-compatible chat completion APIs.

    Any server speaking the chat completions protocol (OpenRouter, Together,
    a self-hosted gateway) works by pointing ``OPENAI_BASE_URL`` at it.
    """

    provider_name = "OpenAI"

    def __init__(
        self,
        provider: ProviderConfig,
        temperature: float = DEFAULT_TEMPERATURE,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        client: Optional[Any] = None,
    ) -> None:
        super().__init__(provider, temperature, request_timeout)
        self._client = client or openai.OpenAI(
            base_url=self.base_url or None,
            api_key=provider.api_key,
            timeout=request_timeout,
        )

    def complete(self, system: str, user: str) -> str:
        messages = [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ]
        try:
            resp = self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
            )
        except Exception as e:  # noqa: BLE001 - SDK raises many error types
            raise LLMError(f"{self.provider_name} client error: {e}") from e
        try:
            choice0 = resp.choices[0]
        except (AttributeError, IndexError):
            raise LLMError(f"Missing choices in {self.provider_name} response") from None

        # Content is a plain string on current SDKs, a fragment list on some
        # compatible servers.
        content = getattr(getattr(choice0, "message", None), "content", "")
        if isinstance(content, list):
            fragments: list[str] = []
            for part in content:
                if isinstance(part, dict):
                    fragments.append(str(part.get("text") or ""))
                else:
                    fragments.append(str(getattr(part, "text", "") or ""))
            content = "".join(fragments)
        return content or ""
