"""Contains results of issue synchronization."""

from typing import Any


class SyncResult:
    """Contains results of synchronizing issues from one repository to another.

    ``created`` holds the issues created in the target (or, on a dry run, the
    source issues that would be created), ``skipped`` the source issues whose
    match key already existed in the target, and ``total`` the number of
    source issues that matched the filter.
    """

    def __init__(
        self,
        created: list[Any] | None = None,
        skipped: list[Any] | None = None,
        total: int = 0,
        mirrored_comments: dict[int, list[Any]] | None = None,
        failed_comments: dict[int, list[Any]] | None = None,
        dry_run: bool = False,
    ) -> None:
        """Initialize the result with created and skipped issues."""
        self.created = created if created is not None else []
        self.skipped = skipped if skipped is not None else []
        self.total = total
        self.mirrored_comments = mirrored_comments if mirrored_comments is not None else {}
        self.failed_comments = failed_comments if failed_comments is not None else {}
        self.dry_run = dry_run

    @property
    def processed(self) -> int:
        """Number of source issues that reached a create or skip decision."""
        return len(self.created) + len(self.skipped)

    @property
    def is_complete(self) -> bool:
        """True once every source issue has been either created or skipped."""
        return self.processed == self.total

    def __repr__(self) -> str:
        """Summarize the result without dumping whole issues."""
        return f"SyncResult(created={len(self.created)}, skipped={len(self.skipped)}, total={self.total}, dry_run={self.dry_run})"
