"""githubkit-backed implementation of the GitHub client interface."""

from functools import wraps
from typing import Any, Awaitable, Callable, Literal, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import Issue, IssueComment, Label

from issue_sync.utils.constants import DEFAULT_GITHUB_API_URL
from issue_sync.utils.retry import retry_on_rate_limit

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client
from .types import Page

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def _unprocessable_details(exc: RequestFailed) -> tuple[str, list[Any]]:
    """Pull GitHub's validation message and error list out of a 422 response."""
    try:
        payload = exc.response.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        payload = {}
    return payload.get("message") or "Unprocessable Entity", payload.get("errors") or []


def handle_github_422(func: F) -> F:
    """Re-raise GitHub 422 validation failures as ValueError naming the rejected call.

    GitHub answers 422 when it refuses to create something, such as a label
    that already exists or has an invalid color. The explanation in the
    payload is logged and kept in the message.
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code != 422:
                raise
            message, errors = _unprocessable_details(exc)
            logger.error("GitHub rejected the request", operation=func.__name__, message=message, errors=errors, status_code=422)
            raise ValueError(f"GitHub 422 error in {func.__name__}: {message} | errors: {errors}") from exc

    return wrapper  # type: ignore


def has_next_page(response: Response[Any], item_count: int, per_page: int) -> bool:
    """Decide whether a listing has another page after this response.

    The Link header is authoritative when GitHub sends one. Without it a
    full page means there may be more.
    """
    link_header = response.headers.get("link")
    if isinstance(link_header, str):
        return 'rel="next"' in link_header
    return item_count >= per_page


class GitHubKitAdapter(GitHubClientBase):
    """Reads and writes issues, labels and comments through a githubkit client.

    Listing methods return one page at a time; write methods are retried on
    rate limits and turn 422 responses into ValueError.
    """

    def __init__(self, client: GitHubClient) -> None:
        """Wrap an authenticated githubkit client."""
        self.client = client

    def _omit_null_parameters(self, **kwargs: Any) -> dict[str, Any]:
        """Omit parameters that are None."""
        return {k: v for k, v in kwargs.items() if v is not None}

    @classmethod
    def create(cls, github_token: str | None, github_api_url: str = DEFAULT_GITHUB_API_URL) -> Self:
        """Create an adapter authenticated with a personal access token.

        Args:
            github_token: Personal access token used as the bearer credential
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            GitHubAuthenticationConfigurationUndefinedError: If no token is given
        """
        logger.info("Creating client for GitHub instance", github_api_url=github_api_url)
        client = get_github_client(github_token=github_token, github_api_url=github_api_url)
        return cls(client)

    # Issue CRUD
    @retry_on_rate_limit()
    async def list_issues_page(
        self,
        owner: str,
        repo: str,
        state: Literal["open", "closed", "all"] = "open",
        labels: list[str] | None = None,
        page: int = 1,
        per_page: int = 100,
    ) -> Page[Issue]:
        """List one page of issues for a repository.

        GitHub treats a comma-separated ``labels`` parameter as "has all of these".
        """
        params = self._omit_null_parameters(labels=",".join(labels) if labels else None)
        response: Response[list[Issue]] = await self.client.rest.issues.async_list_for_repo(
            owner=owner,
            repo=repo,
            state=state,
            per_page=per_page,
            page=page,
            **params,
        )
        issues: list[Issue] = response.parsed_data
        return Page(items=issues, has_more=bool(issues) and has_next_page(response, len(issues), per_page))

    @handle_github_422
    @retry_on_rate_limit()
    async def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str | None = None,
        labels: list[str] | None = None,
    ) -> Issue:
        """Create an issue for a repository."""
        params = self._omit_null_parameters(
            title=title,
            body=body,
            labels=labels or None,  # type: ignore
        )
        response: Response[Issue] = await self.client.rest.issues.async_create(
            owner=owner,
            repo=repo,
            **params,
        )
        return response.parsed_data

    # Label CRUD
    @retry_on_rate_limit()
    async def list_labels_page(self, owner: str, repo: str, page: int = 1, per_page: int = 100) -> Page[Label]:
        """List one page of labels for a repository."""
        response: Response[list[Label]] = await self.client.rest.issues.async_list_labels_for_repo(
            owner=owner,
            repo=repo,
            per_page=per_page,
            page=page,
        )
        labels: list[Label] = response.parsed_data
        return Page(items=labels, has_more=bool(labels) and has_next_page(response, len(labels), per_page))

    @handle_github_422
    @retry_on_rate_limit()
    async def create_label(self, owner: str, repo: str, name: str, color: str, description: str | None = None) -> Label:
        """Create a label for a repository."""
        params = self._omit_null_parameters(
            name=name,
            color=color,
            description=description,
        )
        response: Response[Label] = await self.client.rest.issues.async_create_label(
            owner=owner,
            repo=repo,
            **params,
        )
        return response.parsed_data

    # Comment CRUD
    @retry_on_rate_limit()
    async def list_comments_page(self, owner: str, repo: str, issue_number: int, page: int = 1, per_page: int = 100) -> Page[IssueComment]:
        """List one page of comments on an issue, oldest first."""
        response: Response[list[IssueComment]] = await self.client.rest.issues.async_list_comments(
            owner=owner,
            repo=repo,
            issue_number=issue_number,
            per_page=per_page,
            page=page,
        )
        comments: list[IssueComment] = response.parsed_data
        return Page(items=comments, has_more=bool(comments) and has_next_page(response, len(comments), per_page))

    @handle_github_422
    @retry_on_rate_limit()
    async def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> IssueComment:
        """Create a comment on an issue."""
        response: Response[IssueComment] = await self.client.rest.issues.async_create_comment(
            owner=owner,
            repo=repo,
            issue_number=issue_number,
            body=body,
        )
        return response.parsed_data
