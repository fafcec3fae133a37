"""Provider selection for ai-commit.

Providers are tried in a fixed priority order and the first one with a
non-blank credential wins:

    OpenAI > Anthropic > Google > Deepseek > Ollama
"""

from __future__ import annotations

import logging
from typing import Callable, Dict

from .config import DEFAULT_MODELS, Config, ProviderConfig, describe_provider
from .exceptions import ConfigError
from .providers.anthropic_driver import AnthropicDriver
from .providers.base import BaseDriver
from .providers.deepseek_driver import DeepSeekDriver
from .providers.google_driver import GoogleDriver
from .providers.ollama_driver import OllamaDriver
from .providers.openai_driver import OpenAIDriver

logger = logging.getLogger(__name__)

DriverFactory = Callable[..., BaseDriver]

DRIVERS: Dict[str, DriverFactory] = {
    "openai": OpenAIDriver,
    "anthropic": AnthropicDriver,
    "google": GoogleDriver,
    "deepseek": DeepSeekDriver,
    "ollama": OllamaDriver,
}


def no_provider_message() -> str:
    """Explain every supported provider and the variables it needs."""
    lines = ["No AI provider configured. Please set one of the following:", ""]
    for index, (name, meta) in enumerate(DEFAULT_MODELS.items(), start=1):
        lines.append(f"    {index}. {meta['label']}:")
        if meta["key_env"]:
            lines.append(f'       export {meta["key_env"]}="your-api-key"')
            if meta["model_env"]:
                lines.append(
                    f'       export {meta["model_env"]}="{meta["model"]}"  # optional'
                )
        else:
            lines.append(f'       export {meta["model_env"]}="llama3"')
        if meta["endpoint_env"]:
            lines.append(
                f'       export {meta["endpoint_env"]}="{meta["endpoint"]}"  # optional'
            )
        lines.append("")
    lines.append("Run 'ai-commit --help' for more information.")
    return "\n".join(lines)


def select_provider(config: Config) -> ProviderConfig:
    """Return the highest-priority configured provider."""
    for provider in config.providers():
        if provider.is_configured:
            return provider
    raise ConfigError(no_provider_message())


def select_driver(config: Config) -> BaseDriver:
    """Construct the driver for the first configured provider."""
    provider = select_provider(config)
    label = DEFAULT_MODELS[provider.name]["label"]
    logger.info("Using %s provider", label)
    logger.debug(
        "%s. Base URL: %s. Model: %s",
        describe_provider(provider.name),
        provider.base_url,
        provider.model,
    )
    factory = DRIVERS[provider.name]
    return factory(
        provider,
        temperature=config.temperature,
        request_timeout=config.request_timeout,
    )
