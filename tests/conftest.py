from collections.abc import Generator
from pathlib import Path

import pytest

from fakes import FakeRepo

PROVIDER_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_MODEL",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "GOOGLE_API_KEY",
    "GOOGLE_MODEL",
    "DEEPSEEK_API_KEY",
    "DEEPSEEK_MODEL",
    "OLLAMA_MODEL",
    "OLLAMA_BASE_URL",
    "AI_TEMPERATURE",
    "AI_TIMEOUT",
    "AI_COMMAND_TIMEOUT",
    "AI_REQUEST_TIMEOUT",
)


@pytest.fixture(autouse=True)
def isolated_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    # No real credentials or user preferences leak into tests
    for name in PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AI_COMMIT_CONFIG_HOME", str(tmp_path / "ai-commit-config"))
    yield


@pytest.fixture
def fake_repo() -> FakeRepo:
    return FakeRepo()
