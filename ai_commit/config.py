"""Configuration management for ai-commit."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

DEFAULT_TEMPERATURE = 0.1
DEFAULT_COMMAND_TIMEOUT = 30
DEFAULT_REQUEST_TIMEOUT = 60.0

# Ordered by selection priority.
DEFAULT_MODELS: Dict[str, Dict[str, Optional[str]]] = {
    "openai": {
        "label": "OpenAI / OpenAI-compatible",
        "model": "gpt-4o-mini",
        "endpoint": "https://api.openai.com/v1",
        "key_env": "OPENAI_API_KEY",
        "model_env": "OPENAI_MODEL",
        "endpoint_env": "OPENAI_BASE_URL",
    },
    "anthropic": {
        "label": "Anthropic Claude",
        "model": "claude-sonnet-4-0",
        "endpoint": "https://api.anthropic.com",
        "key_env": "ANTHROPIC_API_KEY",
        "model_env": "ANTHROPIC_MODEL",
        "endpoint_env": None,
    },
    "google": {
        "label": "Google Gemini",
        "model": "gemini-2.0-flash",
        "endpoint": "https://generativelanguage.googleapis.com/v1beta",
        "key_env": "GOOGLE_API_KEY",
        "model_env": "GOOGLE_MODEL",
        "endpoint_env": None,
    },
    "deepseek": {
        "label": "Deepseek",
        "model": "deepseek-chat",
        "endpoint": "https://api.deepseek.com",
        "key_env": "DEEPSEEK_API_KEY",
        "model_env": "DEEPSEEK_MODEL",
        "endpoint_env": None,
    },
    "ollama": {
        "label": "Ollama (local)",
        "model": None,
        "endpoint": "http://localhost:11434",
        # Ollama needs no key; the model name is what marks it configured.
        "key_env": None,
        "model_env": "OLLAMA_MODEL",
        "endpoint_env": "OLLAMA_BASE_URL",
    },
}


@dataclass(frozen=True)
class ProviderConfig:
    """Credentials and endpoint for one AI backend."""

    name: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: Optional[str] = None

    @property
    def credential(self) -> Optional[str]:
        if self.name == "ollama":
            return self.model
        return self.api_key

    @property
    def is_configured(self) -> bool:
        return bool(self.credential and self.credential.strip())


@dataclass(frozen=True)
class Config:
    """Runtime configuration for ai-commit, built once per invocation."""

    openai: ProviderConfig
    anthropic: ProviderConfig
    google: ProviderConfig
    deepseek: ProviderConfig
    ollama: ProviderConfig
    temperature: float = DEFAULT_TEMPERATURE
    command_timeout: int = DEFAULT_COMMAND_TIMEOUT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def providers(self) -> list[ProviderConfig]:
        """Provider configs in selection priority order."""
        return [getattr(self, name) for name in DEFAULT_MODELS]


def _get(env: Mapping[str, str], key: Optional[str]) -> Optional[str]:
    if not key:
        return None
    value = env.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse_temperature(raw: Optional[str]) -> float:
    try:
        value = float(raw) if raw else DEFAULT_TEMPERATURE
    except ValueError:
        return DEFAULT_TEMPERATURE
    return value if 0.0 <= value <= 2.0 else DEFAULT_TEMPERATURE


def _parse_command_timeout(raw: Optional[str]) -> int:
    try:
        value = int(raw) if raw else DEFAULT_COMMAND_TIMEOUT
    except ValueError:
        return DEFAULT_COMMAND_TIMEOUT
    return value if 0 < value < 3600 else DEFAULT_COMMAND_TIMEOUT


def _parse_request_timeout(raw: Optional[str]) -> float:
    try:
        value = float(raw) if raw else DEFAULT_REQUEST_TIMEOUT
    except ValueError:
        return DEFAULT_REQUEST_TIMEOUT
    return value if value > 0 else DEFAULT_REQUEST_TIMEOUT


def _provider_from_env(name: str, env: Mapping[str, str]) -> ProviderConfig:
    defaults = DEFAULT_MODELS[name]
    return ProviderConfig(
        name=name,
        api_key=_get(env, defaults["key_env"]),
        base_url=_get(env, defaults["endpoint_env"]) or defaults["endpoint"],
        model=_get(env, defaults["model_env"]) or defaults["model"],
    )


def load_config(env: Optional[Mapping[str, str]] = None) -> Config:
    """Build configuration from environment variables."""
    env_map: Mapping[str, str] = os.environ if env is None else env
    providers = {name: _provider_from_env(name, env_map) for name in DEFAULT_MODELS}
    return Config(
        **providers,
        temperature=_parse_temperature(_get(env_map, "AI_TEMPERATURE")),
        command_timeout=_parse_command_timeout(
            _get(env_map, "AI_COMMAND_TIMEOUT") or _get(env_map, "AI_TIMEOUT")
        ),
        request_timeout=_parse_request_timeout(_get(env_map, "AI_REQUEST_TIMEOUT")),
    )


def describe_provider(name: str) -> str:
    meta = DEFAULT_MODELS.get(name)
    if not meta:
        return name
    if meta["model"]:
        return f"{meta['label']} (default model: {meta['model']})"
    return str(meta["label"])
