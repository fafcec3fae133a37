from __future__ import annotations

from .openai_driver import OpenAIDriver

# DeepSeek serves an OpenAI-compatible API, so the only difference is the
# endpoint and default model carried by its ProviderConfig. Kept as its own
# class so log lines and error messages name the right provider.


class DeepSeekDriver(OpenAIDriver):
    """Driver for the DeepSeek chat API (OpenAI-compatible)."""

    provider_name = "Deepseek"
