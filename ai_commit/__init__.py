"""ai-commit - AI-generated conventional commit messages for staged changes."""

from importlib import import_module
from typing import TYPE_CHECKING

__version__ = "1.0.0"

# Public API (lazy-exported so `--version` never imports provider SDKs)
__all__ = [
    # Config
    "Config", "ProviderConfig", "load_config",
    # Process / Git
    "CommandResult", "run_command", "GitRepo",
    # Preferences
    "UserPreferences", "JsonPreferenceStore", "MemoryPreferenceStore",
    # Providers
    "select_driver",
    # Commit generation
    "CommitGenerator",
    # Core workflow
    "CommitWorkflow", "WorkflowChoice", "WorkflowOutcome",
    # Exceptions
    "AiCommitError", "ConfigError", "GitError", "LLMError",
    "NoStagedChangesError",
]


def __getattr__(name: str):
    """Lazy attribute loader to avoid importing heavy modules at package import time."""
    mapping = {
        # Config
        "Config": ("ai_commit.config", "Config"),
        "ProviderConfig": ("ai_commit.config", "ProviderConfig"),
        "load_config": ("ai_commit.config", "load_config"),
        # Process / Git
        "CommandResult": ("ai_commit.process", "CommandResult"),
        "run_command": ("ai_commit.process", "run_command"),
        "GitRepo": ("ai_commit.git", "GitRepo"),
        # Preferences
        "UserPreferences": ("ai_commit.preferences", "UserPreferences"),
        "JsonPreferenceStore": ("ai_commit.preferences", "JsonPreferenceStore"),
        "MemoryPreferenceStore": ("ai_commit.preferences", "MemoryPreferenceStore"),
        # Providers
        "select_driver": ("ai_commit.llm", "select_driver"),
        # Commit generation
        "CommitGenerator": ("ai_commit.commit", "CommitGenerator"),
        # Core workflow
        "CommitWorkflow": ("ai_commit.core", "CommitWorkflow"),
        "WorkflowChoice": ("ai_commit.core", "WorkflowChoice"),
        "WorkflowOutcome": ("ai_commit.core", "WorkflowOutcome"),
        # Exceptions
        "AiCommitError": ("ai_commit.exceptions", "AiCommitError"),
        "ConfigError": ("ai_commit.exceptions", "ConfigError"),
        "GitError": ("ai_commit.exceptions", "GitError"),
        "LLMError": ("ai_commit.exceptions", "LLMError"),
        "NoStagedChangesError": ("ai_commit.exceptions", "NoStagedChangesError"),
    }
    if name in mapping:
        mod_name, attr = mapping[name]
        mod = import_module(mod_name)
        value = getattr(mod, attr)
        globals()[name] = value  # cache for future access
        return value
    raise AttributeError(f"module 'ai_commit' has no attribute {name!r}")


if TYPE_CHECKING:
    from .commit import CommitGenerator
    from .config import Config, ProviderConfig, load_config
    from .core import CommitWorkflow, WorkflowChoice, WorkflowOutcome
    from .exceptions import (
        AiCommitError,
        ConfigError,
        GitError,
        LLMError,
        NoStagedChangesError,
    )
    from .git import GitRepo
    from .llm import select_driver
    from .preferences import (
        JsonPreferenceStore,
        MemoryPreferenceStore,
        UserPreferences,
    )
    from .process import CommandResult, run_command
