"""Test doubles shared across the workflow and CLI tests."""


class FakeRepo:
    """Records git calls made by the workflow."""

    def __init__(
        self,
        staged: bool = True,
        diff: str = "diff --git a/x b/x\n+hello",
        push_error: Exception = None,
    ) -> None:
        self.staged = staged
        self.diff = diff
        self.push_error = push_error
        self.diff_reads = 0
        self.commits: list[str] = []
        self.pushes = 0
        self.calls: list[str] = []

    def has_staged_changes(self) -> bool:
        self.calls.append("has_staged_changes")
        return self.staged

    def get_staged_diff(self) -> str:
        self.calls.append("get_staged_diff")
        self.diff_reads += 1
        return self.diff

    def commit(self, message: str) -> str:
        self.calls.append("commit")
        self.commits.append(message)
        return "[main abc1234] " + message.splitlines()[0]

    def push(self) -> str:
        self.calls.append("push")
        self.pushes += 1
        if self.push_error is not None:
            raise self.push_error
        return "To origin\n   abc1234..def5678  main -> main"


class FakeGenerator:
    """Returns queued messages (or raises queued exceptions) in order."""

    def __init__(self, *results) -> None:
        self.results = list(results)
        self.diffs: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.diffs)

    def generate(self, diff: str) -> str:
        self.diffs.append(diff)
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, BaseException):
            raise result
        return result


