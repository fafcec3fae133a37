"""Command-line interface for ai-commit."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, TextIO

from . import __version__
from .commit import CommitGenerator
from .config import load_config
from .core import CommitWorkflow
from .exceptions import AiCommitError
from .git import GitRepo
from .llm import select_driver
from .preferences import UserPreferences

logger = logging.getLogger(__name__)

PROG = "ai-commit"

ENVIRONMENT_HELP = """\
environment variables:
  AI provider (choose ONE):

    1. OpenAI / OpenAI-compatible APIs (OpenRouter, Together, etc.):
       OPENAI_API_KEY       Your API key (required)
       OPENAI_MODEL         Model name (default: gpt-4o-mini)
       OPENAI_BASE_URL      API endpoint (default: https://api.openai.com/v1)

    2. Anthropic:
       ANTHROPIC_API_KEY    Your API key (required)
       ANTHROPIC_MODEL      Model name (default: claude-sonnet-4-0)

    3. Google Gemini:
       GOOGLE_API_KEY       Your API key (required)
       GOOGLE_MODEL         Model name (default: gemini-2.0-flash)

    4. Deepseek:
       DEEPSEEK_API_KEY     Your API key (required)
       DEEPSEEK_MODEL       Model name (default: deepseek-chat)

    5. Ollama (local models):
       OLLAMA_MODEL         Model name (required, e.g. llama3, qwen2.5)
       OLLAMA_BASE_URL      Server URL (default: http://localhost:11434)

  Optional settings:
    AI_LOG_LEVEL            ERROR, WARNING, INFO, DEBUG (default: WARNING)
    AI_TEMPERATURE          Model temperature 0.0-2.0 (default: 0.1)
    AI_COMMAND_TIMEOUT      Git command timeout seconds (default: 30)
    AI_REQUEST_TIMEOUT      Provider request timeout seconds (default: 60)

priority order:
  If multiple providers are configured: OpenAI > Anthropic > Google >
  Deepseek > Ollama

configuration:
  ai-commit config --show              # View settings
  ai-commit config --auto-commit on    # Enable auto-commit
  ai-commit config --auto-push on      # Enable auto-push
"""

CONFIG_HELP = """\
examples:
  ai-commit config --show
  ai-commit config --auto-commit on
  ai-commit config --auto-push on
  ai-commit config --auto-commit off
  ai-commit config --reset

notes:
  - Settings persist across runs
  - Auto-commit skips regenerate/edit/cancel options
  - If AI generation fails, auto-commit won't proceed
"""


def configure_logging(level_name: Optional[str] = None) -> None:
    """Configure the root logger from ``AI_LOG_LEVEL`` (default WARNING)."""
    raw = (level_name or os.environ.get("AI_LOG_LEVEL") or "WARNING").upper()
    if raw == "WARN":
        raw = "WARNING"
    level = getattr(logging, raw, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _parse_switch(value: str) -> bool:
    return value.strip().lower() in {"on", "true"}


def _state(flag: bool) -> str:
    return "enabled" if flag else "disabled"


class CLI:
    """Parses arguments and dispatches to the workflow or preference commands."""

    def __init__(
        self,
        preferences: Optional[UserPreferences] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self._preferences = preferences
        self._out = stdout or sys.stdout
        self._err = stderr or sys.stderr
        self.parser = self._build_parser()

    @property
    def preferences(self) -> UserPreferences:
        if self._preferences is None:
            self._preferences = UserPreferences()
        return self._preferences

    def _build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog=PROG,
            description="Generate conventional commit messages for staged "
            "changes using AI.",
            epilog=ENVIRONMENT_HELP,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        parser.add_argument(
            "-v",
            "--version",
            action="store_true",
            help="Show version information",
        )
        subparsers = parser.add_subparsers(dest="command")
        config_parser = subparsers.add_parser(
            "config",
            help="Show or change persisted settings",
            description="AI Commit - Configuration Management",
            epilog=CONFIG_HELP,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        group = config_parser.add_mutually_exclusive_group()
        group.add_argument("--show", action="store_true", help="Show current settings")
        group.add_argument(
            "--auto-commit",
            dest="auto_commit",
            nargs="?",
            const="",
            metavar="on|off",
            help="Enable/disable auto-commit",
        )
        group.add_argument(
            "--auto-push",
            dest="auto_push",
            nargs="?",
            const="",
            metavar="on|off",
            help="Enable/disable auto-push",
        )
        group.add_argument(
            "--reset", action="store_true", help="Reset all settings to defaults"
        )
        self.config_parser = config_parser
        return parser

    def run(self, args: Optional[list[str]] = None) -> int:
        effective_args = args if args is not None else sys.argv[1:]
        try:
            parsed = self.parser.parse_args(effective_args)
        except SystemExit as exc:
            # argparse exits for --help and usage errors
            return int(exc.code or 0)

        if parsed.version:
            self._print(f"{PROG} version {__version__}")
            return 0
        if parsed.command == "config":
            return self._handle_config(parsed)

        configure_logging()
        return self._run_workflow()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def _run_workflow(self) -> int:
        try:
            config = load_config()
            git_repo = GitRepo(timeout=config.command_timeout)
            generator = CommitGenerator(select_driver(config))
            workflow = CommitWorkflow(
                git_repo,
                generator,
                self.preferences,
                stdout=self._out,
                stderr=self._err,
            )
            workflow.generate_and_commit()
        except AiCommitError as e:
            self._print_err(f"\nAn error occurred: {e}")
            return 1
        except KeyboardInterrupt:
            self._print_err("\nInterrupted.")
            return 130
        except Exception as e:  # noqa: BLE001 - last-resort boundary
            logger.error("Unexpected error occurred: %s", e, exc_info=True)
            self._print_err(f"\nAn error occurred: {e}")
            return 1
        return 0

    def _handle_config(self, parsed: argparse.Namespace) -> int:
        prefs = self.preferences
        if parsed.show:
            self._print(prefs.display_settings())
        elif parsed.auto_commit is not None:
            if not parsed.auto_commit:
                self._print(f"Current: {_state(prefs.auto_commit_enabled())}")
                self._print(f"Usage: {PROG} config --auto-commit [on|off]")
                return 0
            enable = _parse_switch(parsed.auto_commit)
            prefs.set_auto_commit(enable)
            self._print(f"Auto-commit {_state(enable)}")
            if enable:
                self._print(
                    "\nWarning: You won't be able to regenerate, edit, or "
                    "cancel commits."
                )
        elif parsed.auto_push is not None:
            if not parsed.auto_push:
                self._print(f"Current: {_state(prefs.auto_push_enabled())}")
                self._print(f"Usage: {PROG} config --auto-push [on|off]")
                return 0
            enable = _parse_switch(parsed.auto_push)
            prefs.set_auto_push(enable)
            self._print(f"Auto-push {_state(enable)}")
            if enable:
                self._print(
                    "\nChanges will be pushed automatically after successful "
                    "commits."
                )
                if not prefs.auto_commit_enabled():
                    self._print(
                        "Note: You'll still see commit prompts (auto-commit is off)."
                    )
        elif parsed.reset:
            prefs.reset()
            self._print("All settings have been reset to the default (off)")
        else:
            self._print(
                f"Usage: {PROG} config [--show|--auto-commit|--auto-push|--reset]"
            )
            self._print(f"Run '{PROG} config --help' for more information")
        return 0

    def _print(self, text: str) -> None:
        print(text, file=self._out)

    def _print_err(self, text: str) -> None:
        print(text, file=self._err)


def main(argv: Optional[list[str]] = None) -> int:
    return CLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
