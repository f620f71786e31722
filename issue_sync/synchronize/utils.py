"""Contains utility functions for synchronization actions."""

from typing import Any, Sequence

from issue_sync.synchronize.types import HasName, LabelType
from issue_sync.utils.constants import COMMENT_ATTRIBUTION_FOOTER, GHOST_LOGIN, ISSUE_PROVENANCE_FOOTER


def extract_label_name(label: LabelType) -> str | None:
    """Extract the name from a GitHub label object, string, or dict."""
    if isinstance(label, str):
        return label
    elif isinstance(label, dict):
        return label.get("name")
    elif isinstance(label, HasName):
        return label.name
    return None


def extract_label_names(labels: Sequence[LabelType] | None) -> list[str]:
    """Extract label names in order, dropping unnamed labels and repeats."""
    names: list[str] = []
    for label in labels or []:
        name = extract_label_name(label)
        if name and name not in names:
            names.append(name)
    return names


def is_pull_request(issue: Any) -> bool:
    """Return True if an item from the issues endpoint is really a pull request."""
    return getattr(issue, "pull_request", None) is not None


def author_login(item: Any) -> str:
    """Return the login of an issue or comment author, or ghost for deleted accounts."""
    user = getattr(item, "user", None)
    login = getattr(user, "login", None)
    return login or GHOST_LOGIN


def build_synchronized_issue_body(body: str | None, source_owner: str, source_repo: str, source_number: int) -> str:
    """Append the provenance footer that names the source issue."""
    return (body or "") + ISSUE_PROVENANCE_FOOTER.format(owner=source_owner, repo=source_repo, number=source_number)


def build_mirrored_comment_body(body: str | None, login: str) -> str:
    """Append the attribution line that names the original comment author."""
    return (body or "") + COMMENT_ATTRIBUTION_FOOTER.format(login=login)
