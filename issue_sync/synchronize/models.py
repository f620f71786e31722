"""Pydantic models describing what to synchronize."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class IssueState(str, Enum):
    """Issue states accepted by GitHub's issue listing."""

    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


class LabelMatchMode(str, Enum):
    """How a set of label names restricts retrieved issues."""

    ANY = "any"
    ALL = "all"


class SyncFilter(BaseModel):
    """Filter applied when retrieving issues from the source repository.

    ``labels`` accepts a comma-separated string, as typed on a command line,
    or any iterable of names. Whitespace around each name is stripped and
    blank names are dropped, so ``" bug , urgent ,"`` selects ``bug`` and
    ``urgent``; names are otherwise matched exactly, case included. With ``label_match=any`` an issue matches when it
    carries at least one of the names; with ``all`` it must carry every one.
    """

    model_config = ConfigDict(frozen=True)

    state: IssueState = IssueState.OPEN
    labels: frozenset[str] = frozenset()
    label_match: LabelMatchMode = LabelMatchMode.ANY
    include_pull_requests: bool = False

    @field_validator("labels", mode="before")
    @classmethod
    def split_label_names(cls, value: Any) -> Any:
        """Split comma-separated label input into a set of names."""
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = value.split(",")
        return frozenset(name.strip() for name in value if name and name.strip())


UNFILTERED = SyncFilter(state=IssueState.ALL, include_pull_requests=True)
"""Every issue and pull request in a repository, used to build the dedup set."""
