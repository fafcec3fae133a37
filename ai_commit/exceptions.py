"""Exception types for ai-commit."""

from __future__ import annotations

from typing import Optional, Sequence


class AiCommitError(Exception):
    """Base exception for ai-commit errors."""


class ConfigError(AiCommitError):
    """Raised when configuration is missing or invalid."""


class NoStagedChangesError(AiCommitError):
    """Raised when there is nothing staged to commit."""


class GitError(AiCommitError):
    """Raised when a git operation fails."""


class ProcessError(GitError):
    """Base for failures of an external command."""

    def __init__(self, message: str, command: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.command = list(command)


class ProcessTimeoutError(ProcessError):
    """The command did not finish within its time budget."""


class ProcessExitError(ProcessError):
    """The command finished with a non-zero exit code."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        returncode: int = 1,
        stderr: Optional[str] = None,
    ) -> None:
        super().__init__(message, command)
        self.returncode = returncode
        self.stderr = stderr or ""


class ProcessLaunchError(ProcessError):
    """The executable could not be started."""


class ProcessInterruptedError(KeyboardInterrupt):
    """The wait for a command was interrupted.

    Subclasses ``KeyboardInterrupt`` so the interruption keeps unwinding the
    caller like any other cancellation.
    """

    def __init__(self, message: str, command: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.command = list(command)


class LLMError(AiCommitError):
    """Raised when a provider call fails."""


class EmptyResponseError(LLMError):
    """The provider answered with no usable text."""


class ProviderConnectionError(LLMError):
    """The provider could not be reached."""


class GenerationError(LLMError):
    """Any other failure while generating a commit message."""
