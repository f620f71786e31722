"""Exceptions raised while retrieving and synchronizing issues.

Each error keeps the identifiers needed to diagnose the failure and re-run
safely. The original exception is always chained as ``__cause__`` and kept on
``cause``.
"""

from typing import TYPE_CHECKING, Any

from issue_sync.exceptions import IssueSyncError

if TYPE_CHECKING:
    from issue_sync.synchronize.results import SyncResult


class RetrievalError(IssueSyncError):
    """Raised when a paginated fetch from a repository fails."""

    def __init__(self, owner: str, repo: str, cause: BaseException) -> None:
        """Initialize the error with the repository being read."""
        super().__init__(f"Error retrieving issues from {owner}/{repo}: {cause}")
        self.owner = owner
        self.repo = repo
        self.cause = cause


class EnsureLabelsError(IssueSyncError):
    """Raised when labels in the target repository cannot be listed or created.

    ``label_name`` is None when listing the existing labels failed.
    """

    def __init__(self, owner: str, repo: str, label_name: str | None, cause: BaseException) -> None:
        """Initialize the error with the repository and label involved."""
        if label_name is None:
            message = f"Error listing labels in {owner}/{repo}: {cause}"
        else:
            message = f"Error creating label '{label_name}' in {owner}/{repo}: {cause}"
        super().__init__(message)
        self.owner = owner
        self.repo = repo
        self.label_name = label_name
        self.cause = cause


class ItemCreationError(IssueSyncError):
    """Raised when the target repository rejects an issue creation."""

    def __init__(self, source_issue: Any, cause: BaseException) -> None:
        """Initialize the error with the source issue that could not be copied."""
        super().__init__(f"Error creating issue for source issue #{source_issue.number} '{source_issue.title}': {cause}")
        self.source_issue = source_issue
        self.cause = cause


class MirrorError(IssueSyncError):
    """Raised when a comment cannot be copied to the target issue.

    The target issue stays in place, along with any comments in ``mirrored``.
    """

    def __init__(self, source_number: int, target_number: int, cause: BaseException, mirrored: list[Any] | None = None) -> None:
        """Initialize the error with the issue pair being mirrored."""
        super().__init__(f"Error syncing comments from issue #{source_number} to issue #{target_number}: {cause}")
        self.source_number = source_number
        self.target_number = target_number
        self.cause = cause
        self.mirrored = mirrored or []


class SyncError(IssueSyncError):
    """Raised when a sync run aborts.

    ``source_issue`` is the issue being processed when the run failed, or None
    if retrieval failed. ``result`` holds what was accomplished before the
    failure, so callers can report partial progress.
    """

    def __init__(self, message: str, result: "SyncResult", source_issue: Any | None = None) -> None:
        """Initialize the error with the partial result."""
        super().__init__(message)
        self.result = result
        self.source_issue = source_issue


class SyncCancelledError(SyncError):
    """Raised when a sync run stops because its cancel event was set."""

    pass
