"""Strategies for deciding whether a source issue already exists in the target."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MatchKeyStrategy(Protocol):
    """Computes the key under which two issues count as the same logical issue."""

    def compute_key(self, issue: Any) -> str:
        """Return the match key for an issue."""
        ...


class TitleMatchKey:
    """Match issues by exact title.

    No trimming or case folding is applied, so "Fix login bug" and
    "Fix login bug " are different issues. Two unrelated issues that happen
    to share a title are treated as the same one.
    """

    def compute_key(self, issue: Any) -> str:
        """Return the issue title unchanged."""
        return issue.title
