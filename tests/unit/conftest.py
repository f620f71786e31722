"""Fixtures for unit tests."""

from collections import Counter, defaultdict
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Generator, Iterable, Literal

import pytest
import structlog

from issue_sync.github.abc import GitHubClientBase
from issue_sync.github.types import Page


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


class FakeGitHubAdapter(GitHubClientBase):
    """In-memory GitHub that records every call made through it.

    Issues, labels and comments live in dicts keyed by repository. Listing
    honors state and (all-of) label parameters like GitHub does and slices
    results into pages of ``per_page``.

    ``fail_on`` maps a method name to the exception it should raise, and
    ``fail_after`` lets that many calls to the method succeed first.
    """

    def __init__(self) -> None:
        self.issues: dict[tuple[str, str], list[SimpleNamespace]] = defaultdict(list)
        self.labels: dict[tuple[str, str], list[SimpleNamespace]] = defaultdict(list)
        self.comments: dict[tuple[str, str, int], list[SimpleNamespace]] = defaultdict(list)
        self.calls: list[tuple[Any, ...]] = []
        self.fail_on: dict[str, Exception] = {}
        self.fail_after: dict[str, int] = {}
        self._call_counts: Counter[str] = Counter()
        self._next_id = 1000

    # Test helpers
    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def add_label(self, owner: str, repo: str, name: str, color: str = "ededed", description: str | None = None) -> SimpleNamespace:
        """Put a label directly into a repository."""
        label = SimpleNamespace(id=self._new_id(), name=name, color=color, description=description)
        self.labels[(owner, repo)].append(label)
        return label

    def add_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str | None = None,
        labels: Iterable[Any] = (),
        state: str = "open",
        is_pull_request: bool = False,
        comments: Iterable[tuple[str, str | None]] = (),
    ) -> SimpleNamespace:
        """Put an issue directly into a repository, with (author, body) comments."""
        number = len(self.issues[(owner, repo)]) + 1
        label_objects = [SimpleNamespace(name=label, color="ededed", description=None) if isinstance(label, str) else label for label in labels]
        issue = self._make_issue(owner, repo, number, title, body, label_objects, state)
        if is_pull_request:
            issue.pull_request = SimpleNamespace(url=f"https://api.github.com/repos/{owner}/{repo}/pulls/{number}")
        self.issues[(owner, repo)].append(issue)
        for author, comment_body in comments:
            self.comments[(owner, repo, number)].append(self._make_comment(author, comment_body))
        issue.comments = len(self.comments[(owner, repo, number)])
        return issue

    def calls_named(self, name: str) -> list[tuple[Any, ...]]:
        """Return the recorded calls to one adapter method."""
        return [call for call in self.calls if call[0] == name]

    def _make_issue(self, owner: str, repo: str, number: int, title: str, body: str | None, labels: list[Any], state: str) -> SimpleNamespace:
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        return SimpleNamespace(
            id=self._new_id(),
            number=number,
            title=title,
            body=body,
            state=state,
            labels=labels,
            comments=0,
            created_at=now,
            updated_at=now,
            html_url=f"https://github.com/{owner}/{repo}/issues/{number}",
            user=SimpleNamespace(login="octocat"),
            pull_request=None,
        )

    def _make_comment(self, author: str | None, body: str | None) -> SimpleNamespace:
        user = SimpleNamespace(login=author) if author is not None else None
        return SimpleNamespace(id=self._new_id(), body=body, user=user, created_at=datetime(2024, 1, 2, tzinfo=timezone.utc))

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        self._call_counts[name] += 1
        if name in self.fail_on and self._call_counts[name] > self.fail_after.get(name, 0):
            raise self.fail_on[name]

    @staticmethod
    def _slice(items: list[Any], page: int, per_page: int) -> Page[Any]:
        start = (page - 1) * per_page
        return Page(items=items[start : start + per_page], has_more=start + per_page < len(items))

    # GitHubClientBase
    async def list_issues_page(
        self,
        owner: str,
        repo: str,
        state: Literal["open", "closed", "all"] = "open",
        labels: list[str] | None = None,
        page: int = 1,
        per_page: int = 100,
    ) -> Page[Any]:
        self._record("list_issues_page", owner, repo, state, tuple(labels or ()), page)
        matching = [
            issue
            for issue in self.issues[(owner, repo)]
            if (state == "all" or issue.state == state) and set(labels or ()) <= {label.name for label in issue.labels}
        ]
        return self._slice(matching, page, per_page)

    async def create_issue(self, owner: str, repo: str, title: str, body: str | None = None, labels: list[str] | None = None) -> Any:
        self._record("create_issue", owner, repo, title)
        known = {label.name: label for label in self.labels[(owner, repo)]}
        label_objects = [known.get(name, SimpleNamespace(name=name, color="ededed", description=None)) for name in labels or []]
        number = len(self.issues[(owner, repo)]) + 1
        issue = self._make_issue(owner, repo, number, title, body, label_objects, "open")
        self.issues[(owner, repo)].append(issue)
        return issue

    async def list_labels_page(self, owner: str, repo: str, page: int = 1, per_page: int = 100) -> Page[Any]:
        self._record("list_labels_page", owner, repo, page)
        return self._slice(self.labels[(owner, repo)], page, per_page)

    async def create_label(self, owner: str, repo: str, name: str, color: str, description: str | None = None) -> Any:
        self._record("create_label", owner, repo, name, color, description)
        if any(label.name == name for label in self.labels[(owner, repo)]):
            raise ValueError(f"GitHub 422 error in create_label: Validation Failed | errors: already_exists {name}")
        return self.add_label(owner, repo, name, color=color, description=description)

    async def list_comments_page(self, owner: str, repo: str, issue_number: int, page: int = 1, per_page: int = 100) -> Page[Any]:
        self._record("list_comments_page", owner, repo, issue_number, page)
        return self._slice(self.comments[(owner, repo, issue_number)], page, per_page)

    async def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> Any:
        self._record("create_comment", owner, repo, issue_number, body)
        comment = self._make_comment("sync-bot", body)
        self.comments[(owner, repo, issue_number)].append(comment)
        return comment


@pytest.fixture
def fake_adapter() -> FakeGitHubAdapter:
    """Provide an empty in-memory GitHub."""
    return FakeGitHubAdapter()
