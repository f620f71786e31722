"""Caller-facing entry point for listing and synchronizing issues."""

from typing import Any, Self

from githubkit.versions.latest.models import Issue

from issue_sync.config import Settings, get_settings
from issue_sync.configuration.reconcile import validate_github_authentication_configuration
from issue_sync.github.abc import GitHubClientBase
from issue_sync.github.adapter import GitHubKitAdapter
from issue_sync.synchronize.comments import CommentMirror
from issue_sync.synchronize.engine import IssueSynchronizer
from issue_sync.synchronize.issues import IssueRetriever
from issue_sync.synchronize.labels import LabelReconciler
from issue_sync.synchronize.matching import MatchKeyStrategy
from issue_sync.synchronize.models import SyncFilter
from issue_sync.synchronize.results import SyncResult


class IssueSync:
    """Lists and synchronizes issues through a single GitHub adapter.

    Build one with ``IssueSync.create()``, which resolves the token from the
    arguments or the environment, or pass an existing adapter to the
    constructor. The adapter is shared by every service; nothing is looked up
    from module state.
    """

    def __init__(
        self,
        github_adapter: GitHubClientBase,
        per_page: int = 100,
        skip_failed_comments: bool = False,
        match_key: MatchKeyStrategy | None = None,
    ) -> None:
        """Wire the retrieval, label, comment and synchronization services to the adapter."""
        self.github_adapter = github_adapter
        self.retriever = IssueRetriever(github_adapter, per_page=per_page)
        self.synchronizer = IssueSynchronizer(
            github_adapter,
            retriever=self.retriever,
            label_reconciler=LabelReconciler(github_adapter, per_page=per_page),
            comment_mirror=CommentMirror(github_adapter, per_page=per_page, skip_failed_comments=skip_failed_comments),
            match_key=match_key,
        )

    @classmethod
    def create(
        cls,
        github_token: str | None = None,
        github_api_url: str | None = None,
        settings: Settings | None = None,
        skip_failed_comments: bool = False,
        match_key: MatchKeyStrategy | None = None,
    ) -> Self:
        """Create an IssueSync authenticated with a personal access token.

        Explicit arguments take precedence over settings read from the
        environment and the .env file.

        Raises:
            GitHubAuthenticationConfigurationUndefinedError: If no token can be found.
        """
        settings = settings or get_settings()
        token = validate_github_authentication_configuration(
            github_token=github_token,
            env_github_token=settings.GITHUB_TOKEN,
            env_github_pat_token=settings.GITHUB_PAT_TOKEN,
        )
        github_adapter = GitHubKitAdapter.create(github_token=token, github_api_url=github_api_url or settings.GITHUB_API_URL)
        return cls(github_adapter, per_page=settings.PER_PAGE, skip_failed_comments=skip_failed_comments, match_key=match_key)

    async def list_issues(self, owner: str, repo: str, sync_filter: SyncFilter | None = None) -> list[Issue]:
        """List every issue in a repository matching the filter (open issues by default)."""
        return await self.retriever.fetch_issues(owner, repo, sync_filter)

    async def sync_issues(
        self,
        source_owner: str,
        source_repo: str,
        target_owner: str,
        target_repo: str,
        sync_filter: SyncFilter | None = None,
        sync_comments: bool = True,
        **options: Any,
    ) -> SyncResult:
        """Copy source issues missing from the target, see ``IssueSynchronizer.sync`` for options."""
        return await self.synchronizer.sync(
            source_owner,
            source_repo,
            target_owner,
            target_repo,
            sync_filter=sync_filter,
            sync_comments=sync_comments,
            **options,
        )
