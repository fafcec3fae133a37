"""Core commit workflow for ai-commit."""

from __future__ import annotations

import enum
import logging
import sys
from dataclasses import dataclass
from typing import Optional, Protocol, TextIO, Union

from .exceptions import AiCommitError, NoStagedChangesError
from .preferences import UserPreferences

logger = logging.getLogger(__name__)

RESET = "\033[0m"
BOLD = "\033[1m"
CYAN = "\033[96m"
GREEN = "\033[92m"
YELLOW = "\033[93m"

RULE_WIDTH = 60


class Repository(Protocol):
    def has_staged_changes(self) -> bool: ...

    def get_staged_diff(self) -> str: ...

    def commit(self, message: str) -> str: ...

    def push(self) -> str: ...


class MessageGenerator(Protocol):
    def generate(self, diff: str) -> str: ...


class WorkflowChoice(enum.Enum):
    """A reviewer's decision about the generated message."""

    ACCEPT = "y"
    REGENERATE = "r"
    EDIT = "e"
    CANCEL = "c"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["WorkflowChoice"]:
        """Map user input to a choice; blank means accept, unknown is None."""
        text = (raw or "").strip().lower()
        if not text:
            return cls.ACCEPT
        for choice in cls:
            if text == choice.value or text == _CHOICE_WORDS[choice]:
                return choice
        return None


_CHOICE_WORDS = {
    WorkflowChoice.ACCEPT: "yes",
    WorkflowChoice.REGENERATE: "regenerate",
    WorkflowChoice.EDIT: "edit",
    WorkflowChoice.CANCEL: "cancel",
}


# Interactive loop states
@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class HaveMessage:
    message: str


@dataclass(frozen=True)
class Committed:
    message: str


@dataclass(frozen=True)
class Cancelled:
    pass


State = Union[Idle, HaveMessage, Committed, Cancelled]


@dataclass
class WorkflowOutcome:
    """What a single ``generate_and_commit`` call did."""

    committed: bool = False
    message: Optional[str] = None
    pushed: bool = False
    push_error: Optional[str] = None
    cancelled: bool = False


class CommitWorkflow:
    """Generate a commit message for staged changes and commit it.

    With auto-commit enabled the generated message is committed straight
    away. Otherwise the user reviews it and may accept, regenerate, edit or
    cancel. Either way a successful commit is followed by a push when
    auto-push is enabled; a failed push is reported and never undoes the
    commit.
    """

    def __init__(
        self,
        git_repo: Repository,
        generator: MessageGenerator,
        preferences: UserPreferences,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self.git_repo = git_repo
        self.generator = generator
        self.preferences = preferences
        self._in = stdin or sys.stdin
        self._out = stdout or sys.stdout
        self._err = stderr or sys.stderr
        self._color = bool(getattr(self._out, "isatty", lambda: False)())

    def generate_and_commit(self) -> WorkflowOutcome:
        """Run the workflow once.

        Raises:
            NoStagedChangesError: nothing is staged (or not a repository).
            LLMError: message generation failed; nothing was committed.
            GitError: the commit itself failed.
        """
        logger.info("Checking for staged changes...")
        if not self.git_repo.has_staged_changes():
            raise NoStagedChangesError(
                "No staged changes found! Use 'git add' to stage changes first."
            )

        diff = self.git_repo.get_staged_diff()
        auto_commit = self.preferences.auto_commit_enabled()
        auto_push = self.preferences.auto_push_enabled()

        if auto_commit:
            logger.info("Auto-commit is enabled. Generating commit message.")
            outcome = self._auto_commit(diff)
        else:
            outcome = self._interactive_commit(diff)

        if outcome.committed:
            self._handle_auto_push(auto_push, outcome)
        return outcome

    # ------------------------------------------------------------------
    # Flows
    # ------------------------------------------------------------------
    def _auto_commit(self, diff: str) -> WorkflowOutcome:
        try:
            message = self._generate(diff)
        except AiCommitError as e:
            self._print_err(f"\nFailed to generate commit message: {e}")
            self._print_err("Auto-commit aborted. No changes were committed.")
            logger.error("Auto-commit failed: %s", e)
            raise
        self._display_message(message)
        self._print("\nAuto-committing...")
        self._commit(message)
        return WorkflowOutcome(committed=True, message=message)

    def _interactive_commit(self, diff: str) -> WorkflowOutcome:
        state: State = Idle()
        while not isinstance(state, (Committed, Cancelled)):
            if isinstance(state, Idle):
                state = HaveMessage(self._generate(diff))
                continue
            self._display_message(state.message)
            state = self._transition(state, self._prompt_choice())

        if isinstance(state, Cancelled):
            return WorkflowOutcome(cancelled=True)
        return WorkflowOutcome(committed=True, message=state.message)

    def _transition(self, state: HaveMessage, choice: WorkflowChoice) -> State:
        if choice is WorkflowChoice.ACCEPT:
            self._commit(state.message)
            return Committed(state.message)
        if choice is WorkflowChoice.REGENERATE:
            logger.info("Regenerating commit message...")
            return Idle()
        if choice is WorkflowChoice.EDIT:
            message = self._edit_message(state.message)
            logger.info("Using edited message as commit message...")
            self._commit(message)
            return Committed(message)
        self._print("\nCancelling commit...")
        return Cancelled()

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    def _generate(self, diff: str) -> str:
        logger.info("Generating commit message with AI...")
        return self.generator.generate(diff)

    def _commit(self, message: str) -> None:
        logger.info("Committing changes...")
        output = self.git_repo.commit(message)
        self._display_git_output(output)
        logger.info("Committed changes successfully.")

    def _handle_auto_push(self, auto_push: bool, outcome: WorkflowOutcome) -> None:
        if not auto_push:
            logger.debug("Auto-push is disabled.")
            return
        logger.debug("Auto-push enabled.")
        self._print("\nAuto-pushing...")
        try:
            output = self.git_repo.push()
        except AiCommitError as e:
            outcome.push_error = str(e)
            self._print_err(self._paint(f"\nFailed to push: {e}", YELLOW))
            self._print_err("Commit was successful, but push failed.")
            logger.warning("Push failed: %s", e)
            return
        outcome.pushed = True
        self._display_git_output(output)
        logger.info("Pushed changes successfully.")

    # ------------------------------------------------------------------
    # Terminal interaction
    # ------------------------------------------------------------------
    def _read_line(self) -> Optional[str]:
        try:
            line = self._in.readline()
        except (OSError, ValueError) as e:
            logger.error("Failed to read user input: %s", e)
            return None
        return line if line else None

    def _prompt_choice(self) -> WorkflowChoice:
        while True:
            self._print(
                "\nCommit with this message? "
                "(y)es / (r)egenerate / (e)dit / (c)ancel [y]: "
            )
            self._out.flush()
            choice = WorkflowChoice.parse(self._read_line())
            if choice is not None:
                return choice
            self._print("Invalid choice. Please try again.")

    def _edit_message(self, original: str) -> str:
        self._print("\n" + "=" * RULE_WIDTH)
        self._print("Current message:")
        self._print(original)
        self._print("=" * RULE_WIDTH)
        self._print("\nEnter new commit message or press Enter to keep current one:")
        self._print("> ")
        self._out.flush()
        edited = self._read_line()
        if edited is None or not edited.strip():
            self._print("Empty message. Using original commit message.")
            return original
        return edited.strip()

    def _display_message(self, message: str) -> None:
        self._print("\n" + self._paint("AI generated commit message:", BOLD + CYAN))
        self._print("-" * RULE_WIDTH)
        self._print(message)
        self._print("-" * RULE_WIDTH)

    def _display_git_output(self, output: str) -> None:
        if output:
            self._print("\n" + self._paint(output, GREEN))

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self._color else text

    def _print(self, text: str) -> None:
        print(text, file=self._out)

    def _print_err(self, text: str) -> None:
        print(text, file=self._err)
