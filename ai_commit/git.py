"""Git operations for ai-commit."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .exceptions import ProcessError
from .process import run_command

logger = logging.getLogger(__name__)

GIT_ENV = {"GIT_PAGER": "cat"}
DEFAULT_TIMEOUT = 30


def resolve_working_dir(repo_path: Optional[str] = None) -> Path:
    """Return the directory git commands should run in.

    Prefers an explicit path, then the invoking shell's ``PWD``, then the
    process working directory. A relocated or frozen executable can report a
    different ``os.getcwd()`` than the shell it was started from.
    """
    if repo_path:
        return Path(repo_path).expanduser().resolve(strict=False)
    shell_dir = os.environ.get("PWD", "").strip()
    if shell_dir and Path(shell_dir).is_dir():
        return Path(shell_dir)
    return Path.cwd()


class GitRepo:
    """Handles the git operations needed to commit staged changes."""

    def __init__(
        self,
        repo_path: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.repo_path = resolve_working_dir(repo_path)
        self.timeout = timeout

    def _run_git_command(self, args: list[str]) -> str:
        """Run a git command and return its trimmed stdout."""
        result = run_command(
            ["git"] + args,
            cwd=str(self.repo_path),
            timeout=self.timeout,
            env=GIT_ENV,
        )
        return result.stdout

    def get_staged_diff(self) -> str:
        """Get the diff of staged changes."""
        logger.debug("Retrieving staged changes...")
        return self._run_git_command(["diff", "--staged"])

    def has_staged_changes(self) -> bool:
        """Check if there are staged changes.

        Failures (not a repository, git missing, timeout) read as "nothing
        staged"; the caller cannot tell the two apart.
        """
        logger.debug("Checking for staged changes...")
        try:
            return bool(self.get_staged_diff())
        except ProcessError as exc:
            logger.debug("Failed to check for staged changes: %s", exc)
            return False

    def commit(self, message: str) -> str:
        """Create a commit with the given message."""
        logger.debug("Committing changes...")
        return self._run_git_command(["commit", "--message", message])

    def push(self) -> str:
        """Push the current branch to its configured upstream."""
        logger.debug("Pushing changes...")
        return self._run_git_command(["push"])
