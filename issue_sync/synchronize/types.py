"""Type aliases shared by the synchronization services."""

from typing import Any, Awaitable, Callable, Protocol, runtime_checkable

from githubkit.versions.latest.models import Issue


@runtime_checkable
class HasName(Protocol):
    """Anything carrying a label name, such as githubkit's label models."""

    name: str


LabelType = str | dict[str, Any] | HasName
"""Issue labels come back from GitHub as objects, dicts or bare names."""

IssueCallback = Callable[[Issue, Issue | None], Awaitable[None] | None]
"""Progress hook called with the source issue and the created issue (None when skipped)."""
