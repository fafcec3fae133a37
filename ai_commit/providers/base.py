from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx

from ..config import DEFAULT_REQUEST_TIMEOUT, DEFAULT_TEMPERATURE, ProviderConfig
from ..exceptions import LLMError


class BaseDriver(ABC):
    """Abstract base for provider-specific completions.

    Each driver encapsulates one provider's HTTP/client call pattern and
    response shape. Prompt content and error classification stay in
    :class:`ai_commit.commit.CommitGenerator` so every provider behaves the
    same way from the workflow's point of view.
    """

    provider_name = "base"

    def __init__(
        self,
        provider: ProviderConfig,
        temperature: float = DEFAULT_TEMPERATURE,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self.provider = provider
        self.temperature = temperature
        self.request_timeout = request_timeout

    @property
    def model(self) -> str:
        return self.provider.model or ""

    @property
    def base_url(self) -> str:
        return (self.provider.base_url or "").rstrip("/")

    @abstractmethod
    def complete(self, system: str, user: str) -> str:
        """Return the provider's text completion for one system+user turn.

        Transport failures must be raised as :class:`LLMError` chained to the
        original exception.
        """
        raise NotImplementedError

    def _post_json(
        self, url: str, headers: dict[str, str], payload: dict[str, Any]
    ) -> dict[str, Any]:
        try:
            response = httpx.post(
                url,
                headers=headers,
                json=payload,
                timeout=self.request_timeout,
            )
        except httpx.HTTPError as e:
            raise LLMError(
                f"{self.provider_name} network error during request: {e}"
            ) from e
        status = getattr(response, "status_code", 200)
        if status and int(status) >= 400:
            raise LLMError(
                "{} error {}: {}".format(
                    self.provider_name,
                    status,
                    getattr(response, "text", "<no body>"),
                )
            )
        try:
            data = response.json()
        except ValueError as e:
            raise LLMError(f"{self.provider_name} returned invalid JSON: {e}") from e
        return data if isinstance(data, dict) else {}
