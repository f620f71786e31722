"""Root exception for the issue_sync package."""


class IssueSyncError(Exception):
    """Base class for every error raised by issue_sync."""

    pass
