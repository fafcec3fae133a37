"""Commit message generation for ai-commit."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .exceptions import (
    EmptyResponseError,
    GenerationError,
    ProviderConnectionError,
)
from .providers.base import BaseDriver

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are an expert software engineer and a strict maintainer of a large-scale \
project. You are reviewing a contribution and your sole task is to write the \
final commit message for it.
Analyze the provided git diff and generate a single, professional commit \
message that adheres perfectly to the Conventional Commits specification.

Rules (Must be followed step-by-step):

1. Format: The commit message MUST be structured as:
<type>(<scope>): <description>

[optional body]

[optional footer]

2. Type (The Prefix):
You MUST determine the correct type by analyzing the diff's intent. The \
allowed types are:
- feat: (A new feature)
- fix: (A bug fix)
- refactor: (A code change that neither fixes a bug nor adds a feature)
- docs: (Documentation-only changes)
- test: (Adding missing tests or correcting existing tests)
- style: (Changes that do not affect the meaning of the code: white-space, \
formatting, missing semi-colons, etc.)
- chore: (Changes to the build process, auxiliary tools, or dependencies)

3. Scope:
You MUST infer an optional (scope) from the diff. The scope should be a noun \
describing the section of the codebase that was changed (e.g., (api), (auth), \
(database), (ui)). If no single, clear scope exists, you MUST omit it.

4. Description (The Subject Line):
- The description MUST be brief (max 50 characters).
- It MUST be written in the imperative mood (e.g., "add feature", not "added \
feature" or "adds feature").
- It MUST not be capitalized.

5. Body:
- A blank line MUST separate the subject from the body.
- The body is optional. You should only include a body if the changes are \
complex and require further explanation of the "what" and "why."
- You MUST wrap all body lines at 72 characters.

6. Breaking Changes:
If the diff introduces a breaking change, you MUST append a ! to the \
type(scope) (e.g., refactor(api)!: ...). You MUST also add a BREAKING CHANGE: \
footer at the end of the message, followed by a description of the breaking \
change.

7. Output Constraint (CRITICAL):
Your response MUST contain only the raw, formatted commit message and nothing \
else.
- DO NOT include any preamble like "Here is the commit message:".
- DO NOT include any markdown formatting like ```.
- The very first character of your response must be the first letter of the \
type.
"""

CONNECTION_ERRORS = (ConnectionRefusedError, httpx.ConnectError)


def _iter_causes(exc: BaseException):
    """Yield ``exc`` and every exception chained beneath it."""
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def is_connection_failure(exc: BaseException) -> bool:
    return any(isinstance(e, CONNECTION_ERRORS) for e in _iter_causes(exc))


class CommitGenerator:
    """Turns a staged diff into a commit message via the selected driver."""

    def __init__(self, driver: BaseDriver, system_prompt: str = SYSTEM_PROMPT) -> None:
        self.driver = driver
        self.system_prompt = system_prompt

    def generate(self, diff: str) -> str:
        """Return a trimmed, non-empty commit message for ``diff``.

        Raises:
            EmptyResponseError: the provider answered with blank text.
            ProviderConnectionError: the provider could not be reached.
            GenerationError: any other provider failure.
        """
        try:
            message = self.driver.complete(self.system_prompt, diff)
        except Exception as e:  # noqa: BLE001 - classified below
            logger.error("Failed to generate a commit message: %s", e, exc_info=True)
            if is_connection_failure(e):
                raise ProviderConnectionError(
                    "Cannot connect to AI provider. Check your internet "
                    "connection and verify the provider is accessible."
                ) from e
            raise GenerationError(f"Failed to generate a commit message: {e}") from e

        if message is None or not message.strip():
            raise EmptyResponseError("AI returned an empty commit message")
        return message.strip()
