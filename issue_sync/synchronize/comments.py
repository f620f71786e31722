"""Contains mirroring logic for GitHub issue comments."""

from functools import partial
from typing import Any

import structlog
from githubkit.versions.latest.models import IssueComment

from issue_sync.github.abc import GitHubClientBase
from issue_sync.github.pagination import fetch_all_pages
from issue_sync.synchronize.exceptions import MirrorError
from issue_sync.synchronize.utils import author_login, build_mirrored_comment_body
from issue_sync.utils.constants import MAX_PER_PAGE

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class CommentMirrorResult:
    """Contains the comments created on the target issue and the source comments that could not be copied."""

    def __init__(self, mirrored: list[IssueComment], failed: list[IssueComment] | None = None) -> None:
        """Initialize the result with mirrored and failed comments."""
        self.mirrored = mirrored
        self.failed = failed or []


class CommentMirror:
    """Copies the comment thread of a source issue onto a target issue.

    Comments already on the target issue are never inspected, so mirroring
    the same pair twice duplicates the thread. Mirroring is only meant to run
    right after the target issue was created.

    With ``skip_failed_comments`` set, a comment that cannot be created is
    logged and recorded as failed instead of aborting the thread.
    """

    def __init__(self, github_adapter: GitHubClientBase, per_page: int = MAX_PER_PAGE, skip_failed_comments: bool = False) -> None:
        """Initialize the mirror with the adapter it reads and writes through."""
        self.github_adapter = github_adapter
        self.per_page = per_page
        self.skip_failed_comments = skip_failed_comments

    async def mirror_comments(
        self,
        source_owner: str,
        source_repo: str,
        source_number: int,
        target_owner: str,
        target_repo: str,
        target_number: int,
    ) -> CommentMirrorResult:
        """Copy every comment from the source issue to the target issue, oldest first.

        Each copied body ends with a line attributing the original author.

        Raises:
            MirrorError: If the source comments cannot be listed, or a comment
                cannot be created and failed comments are not being skipped.
        """
        fetch_page = partial(self._fetch_page, owner=source_owner, repo=source_repo, issue_number=source_number)
        try:
            source_comments = await fetch_all_pages(fetch_page, key=lambda comment: comment.id, owner=source_owner, repo=source_repo)
        except Exception as exc:
            logger.error("Failed to list source comments", owner=source_owner, repo=source_repo, issue_number=source_number, error=str(exc))
            raise MirrorError(source_number, target_number, exc) from exc

        logger.info(
            "Mirroring comments",
            source=f"{source_owner}/{source_repo}#{source_number}",
            target=f"{target_owner}/{target_repo}#{target_number}",
            comment_count=len(source_comments),
        )
        mirrored: list[IssueComment] = []
        failed: list[IssueComment] = []
        for comment in source_comments:
            body = build_mirrored_comment_body(comment.body, author_login(comment))
            try:
                mirrored.append(await self.github_adapter.create_comment(target_owner, target_repo, target_number, body))
            except Exception as exc:
                if not self.skip_failed_comments:
                    logger.error("Failed to mirror comment", comment_id=comment.id, target_number=target_number, error=str(exc))
                    raise MirrorError(source_number, target_number, exc, mirrored=mirrored) from exc
                logger.warning("Skipping comment that could not be mirrored", comment_id=comment.id, target_number=target_number, error=str(exc))
                failed.append(comment)
        return CommentMirrorResult(mirrored, failed)

    async def _fetch_page(self, page: int, owner: str, repo: str, issue_number: int) -> Any:
        return await self.github_adapter.list_comments_page(owner, repo, issue_number, page=page, per_page=self.per_page)
