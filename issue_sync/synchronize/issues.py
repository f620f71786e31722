"""Contains retrieval logic for GitHub issues."""

import time
from functools import partial
from typing import Any

import structlog
from githubkit.versions.latest.models import Issue

from issue_sync.github.abc import GitHubClientBase
from issue_sync.github.pagination import fetch_all_pages
from issue_sync.synchronize.exceptions import RetrievalError
from issue_sync.synchronize.models import UNFILTERED, LabelMatchMode, SyncFilter
from issue_sync.synchronize.utils import extract_label_names, is_pull_request
from issue_sync.utils.constants import MAX_PER_PAGE

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def issue_matches_labels(issue: Issue, sync_filter: SyncFilter) -> bool:
    """Check an issue's labels against the filter's label names.

    An empty label set places no constraint.
    """
    if not sync_filter.labels:
        return True
    issue_label_names = set(extract_label_names(issue.labels))
    if sync_filter.label_match == LabelMatchMode.ALL:
        return sync_filter.labels <= issue_label_names
    return not sync_filter.labels.isdisjoint(issue_label_names)


def issue_matches_filter(issue: Issue, sync_filter: SyncFilter) -> bool:
    """Decide whether a retrieved issue belongs in the filtered result."""
    if not sync_filter.include_pull_requests and is_pull_request(issue):
        return False
    return issue_matches_labels(issue, sync_filter)


class IssueRetriever:
    """Produces the complete, filtered list of issues in a repository."""

    def __init__(self, github_adapter: GitHubClientBase, per_page: int = MAX_PER_PAGE) -> None:
        """Initialize the retriever with the adapter it reads through."""
        self.github_adapter = github_adapter
        self.per_page = per_page

    async def fetch_issues(self, owner: str, repo: str, sync_filter: SyncFilter | None = None) -> list[Issue]:
        """Fetch every issue in a repository matching the filter, in the order GitHub returns them.

        The state filter is applied by GitHub. Label names are sent to GitHub
        only for ``all`` matching, since GitHub's label parameter cannot
        express "any of"; in both modes labels are checked again locally.

        Raises:
            RetrievalError: If any page cannot be fetched.
        """
        sync_filter = sync_filter or SyncFilter()
        server_labels = sorted(sync_filter.labels) if sync_filter.label_match == LabelMatchMode.ALL and sync_filter.labels else None
        fetch_page = partial(
            self._fetch_page,
            owner=owner,
            repo=repo,
            state=sync_filter.state.value,
            labels=server_labels,
        )

        start_time = time.time()
        logger.info(
            "Fetching issues from GitHub",
            owner=owner,
            repo=repo,
            state=sync_filter.state.value,
            labels=sorted(sync_filter.labels),
            label_match=sync_filter.label_match.value,
        )
        try:
            issues = await fetch_all_pages(fetch_page, key=lambda issue: issue.number, owner=owner, repo=repo)
        except Exception as exc:
            logger.error("Failed to fetch issues from GitHub", owner=owner, repo=repo, error=str(exc))
            raise RetrievalError(owner, repo, exc) from exc

        filtered_issues = [issue for issue in issues if issue_matches_filter(issue, sync_filter)]
        logger.info(
            "Fetched issues from GitHub",
            owner=owner,
            repo=repo,
            duration=round(time.time() - start_time, 2),
            fetched_count=len(issues),
            issue_count=len(filtered_issues),
        )
        return filtered_issues

    async def fetch_all_issues(self, owner: str, repo: str) -> list[Issue]:
        """Fetch every issue and pull request in a repository regardless of state or labels."""
        return await self.fetch_issues(owner, repo, UNFILTERED)

    async def _fetch_page(self, page: int, owner: str, repo: str, state: Any, labels: list[str] | None) -> Any:
        return await self.github_adapter.list_issues_page(
            owner,
            repo,
            state=state,
            labels=labels,
            page=page,
            per_page=self.per_page,
        )
