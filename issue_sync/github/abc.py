"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from typing import Any, Literal

from .types import Page


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients.

    Every operation names the repository it acts on, so a single client can
    read from one repository and write to another.
    """

    # Issue CRUD
    @abstractmethod
    async def list_issues_page(
        self,
        owner: str,
        repo: str,
        state: Literal["open", "closed", "all"] = "open",
        labels: list[str] | None = None,
        page: int = 1,
        per_page: int = 100,
    ) -> Page[Any]:
        """List one page of issues for a repository."""
        pass

    @abstractmethod
    async def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str | None = None,
        labels: list[str] | None = None,
    ) -> Any:
        """Create an issue for a repository."""
        pass

    # Label CRUD
    @abstractmethod
    async def list_labels_page(self, owner: str, repo: str, page: int = 1, per_page: int = 100) -> Page[Any]:
        """List one page of labels for a repository."""
        pass

    @abstractmethod
    async def create_label(self, owner: str, repo: str, name: str, color: str, description: str | None = None) -> Any:
        """Create a label for a repository."""
        pass

    # Comment CRUD
    @abstractmethod
    async def list_comments_page(self, owner: str, repo: str, issue_number: int, page: int = 1, per_page: int = 100) -> Page[Any]:
        """List one page of comments on an issue."""
        pass

    @abstractmethod
    async def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> Any:
        """Create a comment on an issue."""
        pass
