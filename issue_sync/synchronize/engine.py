"""Contains the engine that copies new issues from one repository to another."""

import asyncio
import inspect
import time

import structlog
from githubkit.versions.latest.models import Issue

from issue_sync.github.abc import GitHubClientBase
from issue_sync.synchronize.comments import CommentMirror
from issue_sync.synchronize.exceptions import (
    EnsureLabelsError,
    ItemCreationError,
    MirrorError,
    RetrievalError,
    SyncCancelledError,
    SyncError,
)
from issue_sync.synchronize.issues import IssueRetriever
from issue_sync.synchronize.labels import LabelReconciler
from issue_sync.synchronize.matching import MatchKeyStrategy, TitleMatchKey
from issue_sync.synchronize.models import SyncFilter
from issue_sync.synchronize.results import SyncResult
from issue_sync.synchronize.types import IssueCallback
from issue_sync.synchronize.utils import build_synchronized_issue_body, extract_label_names

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def _notify(callback: IssueCallback | None, source_issue: Issue, target_issue: Issue | None) -> None:
    """Invoke an optional progress callback, awaiting it if it is a coroutine function."""
    if callback is None:
        return
    outcome = callback(source_issue, target_issue)
    if inspect.isawaitable(outcome):
        await outcome


class IssueSynchronizer:
    """Copies issues that are missing from a target repository, one at a time.

    An issue counts as present in the target when its match key (the exact
    title by default) equals the key of any issue or pull request there,
    whatever its state. Present issues are skipped and never modified.

    Issues are processed strictly in retrieval order and each one, including
    its labels and comments, is finished before the next starts.
    """

    def __init__(
        self,
        github_adapter: GitHubClientBase,
        retriever: IssueRetriever | None = None,
        label_reconciler: LabelReconciler | None = None,
        comment_mirror: CommentMirror | None = None,
        match_key: MatchKeyStrategy | None = None,
    ) -> None:
        """Initialize the synchronizer, building default services around the adapter when none are given."""
        self.github_adapter = github_adapter
        self.retriever = retriever or IssueRetriever(github_adapter)
        self.label_reconciler = label_reconciler or LabelReconciler(github_adapter)
        self.comment_mirror = comment_mirror or CommentMirror(github_adapter)
        self.match_key = match_key or TitleMatchKey()

    async def sync(
        self,
        source_owner: str,
        source_repo: str,
        target_owner: str,
        target_repo: str,
        sync_filter: SyncFilter | None = None,
        sync_comments: bool = True,
        *,
        dry_run: bool = False,
        concurrent_retrieval: bool = False,
        cancel_event: asyncio.Event | None = None,
        on_issue_created: IssueCallback | None = None,
        on_issue_skipped: IssueCallback | None = None,
    ) -> SyncResult:
        """Create every filtered source issue whose match key is missing from the target.

        Created issues keep the source title and labels; their body gets a
        footer naming the source issue. With ``sync_comments`` the source
        comment thread is copied onto each created issue.

        Args:
            dry_run: Decide what would be created without writing anything.
                ``created`` then holds the source issues.
            concurrent_retrieval: Fetch source and target issues at the same
                time. The target is then read even if the source is empty.
            cancel_event: Checked before each source issue; once set, the run
                stops with SyncCancelledError.
            on_issue_created: Called with (source issue, created issue) after
                each creation. May be a coroutine function.
            on_issue_skipped: Called with (source issue, None) for each skip.

        Raises:
            SyncError: If retrieval, label creation, issue creation or comment
                mirroring fails. ``error.result`` holds the partial result and
                the original error is chained as ``__cause__``.
        """
        sync_filter = sync_filter or SyncFilter()
        result = SyncResult(dry_run=dry_run)
        self.label_reconciler.forget()

        start_time = time.time()
        logger.info(
            "Synchronizing issues",
            source=f"{source_owner}/{source_repo}",
            target=f"{target_owner}/{target_repo}",
            state=sync_filter.state.value,
            labels=sorted(sync_filter.labels),
            sync_comments=sync_comments,
            dry_run=dry_run,
        )

        try:
            if concurrent_retrieval:
                source_issues, target_issues = await self._fetch_concurrently(
                    source_owner, source_repo, sync_filter, target_owner, target_repo
                )
            else:
                source_issues = await self.retriever.fetch_issues(source_owner, source_repo, sync_filter)
                target_issues = []
                if source_issues:
                    target_issues = await self.retriever.fetch_all_issues(target_owner, target_repo)
        except RetrievalError as exc:
            raise SyncError(f"Error synchronizing issues: {exc}", result) from exc

        result.total = len(source_issues)
        if not source_issues:
            logger.info("No source issues matched the filter", source=f"{source_owner}/{source_repo}")
            return result

        target_keys: set[str] = {self.match_key.compute_key(issue) for issue in target_issues}
        logger.info("Built target match keys", target_issue_count=len(target_issues), distinct_key_count=len(target_keys))

        for source_issue in source_issues:
            if cancel_event is not None and cancel_event.is_set():
                logger.warning("Synchronization cancelled", processed=result.processed, total=result.total)
                raise SyncCancelledError(
                    f"Synchronization cancelled after {result.processed} of {result.total} issues ({len(result.created)} created)", result
                )

            key = self.match_key.compute_key(source_issue)
            if key in target_keys:
                logger.info("Issue already exists in target, skipping", issue_number=source_issue.number, match_key=key)
                result.skipped.append(source_issue)
                await _notify(on_issue_skipped, source_issue, None)
                continue

            if dry_run:
                logger.info("Issue would be created (dry run)", issue_number=source_issue.number, match_key=key)
                result.created.append(source_issue)
                continue

            try:
                target_issue = await self._copy_issue(source_issue, source_owner, source_repo, target_owner, target_repo, sync_comments, result)
            except (EnsureLabelsError, ItemCreationError, MirrorError) as exc:
                raise SyncError(
                    f"Error synchronizing issue #{source_issue.number} '{source_issue.title}' "
                    f"after creating {len(result.created)} of {result.total} issues: {exc}",
                    result,
                    source_issue=source_issue,
                ) from exc
            await _notify(on_issue_created, source_issue, target_issue)

        logger.info(
            "Synchronized issues",
            source=f"{source_owner}/{source_repo}",
            target=f"{target_owner}/{target_repo}",
            duration=round(time.time() - start_time, 2),
            created=len(result.created),
            skipped=len(result.skipped),
            total=result.total,
        )
        return result

    async def _fetch_concurrently(
        self,
        source_owner: str,
        source_repo: str,
        sync_filter: SyncFilter,
        target_owner: str,
        target_repo: str,
    ) -> tuple[list[Issue], list[Issue]]:
        """Fetch source and target issues at the same time.

        If either listing fails, the other one is cancelled and awaited before
        the error propagates, so no request outlives the call.
        """
        source_task = asyncio.create_task(self.retriever.fetch_issues(source_owner, source_repo, sync_filter))
        target_task = asyncio.create_task(self.retriever.fetch_all_issues(target_owner, target_repo))
        tasks = (source_task, target_task)
        try:
            source_issues, target_issues = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return source_issues, target_issues

    async def _copy_issue(
        self,
        source_issue: Issue,
        source_owner: str,
        source_repo: str,
        target_owner: str,
        target_repo: str,
        sync_comments: bool,
        result: SyncResult,
    ) -> Issue:
        """Create one source issue in the target, with its labels and optionally its comments.

        The created issue is added to ``result.created`` before comments are
        mirrored, so a mirroring failure still reports it.
        """
        label_names = extract_label_names(source_issue.labels)
        if label_names:
            await self.label_reconciler.ensure_labels(target_owner, target_repo, source_issue.labels)

        body = build_synchronized_issue_body(source_issue.body, source_owner, source_repo, source_issue.number)
        try:
            target_issue = await self.github_adapter.create_issue(target_owner, target_repo, title=source_issue.title, body=body, labels=label_names)
        except Exception as exc:
            logger.error("Failed to create issue in target", source_issue_number=source_issue.number, error=str(exc))
            raise ItemCreationError(source_issue, exc) from exc
        logger.info("Created issue in target", source_issue_number=source_issue.number, target_issue_number=target_issue.number)
        result.created.append(target_issue)

        if sync_comments:
            try:
                mirror_result = await self.comment_mirror.mirror_comments(
                    source_owner, source_repo, source_issue.number, target_owner, target_repo, target_issue.number
                )
            except MirrorError as exc:
                result.mirrored_comments[target_issue.number] = exc.mirrored
                raise
            result.mirrored_comments[target_issue.number] = mirror_result.mirrored
            if mirror_result.failed:
                result.failed_comments[target_issue.number] = mirror_result.failed
        return target_issue
