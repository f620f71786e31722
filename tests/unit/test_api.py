"""Unit tests for the IssueSync entry point."""

from typing import Any
from unittest.mock import patch

import pytest

from issue_sync import ConfigurationError, IssueSync, SyncFilter
from issue_sync.config import Settings
from issue_sync.github.adapter import GitHubKitAdapter


def make_settings(**overrides: Any) -> Settings:
    """Build settings that ignore the environment's .env file."""
    return Settings(_env_file=None, **overrides)


def test_create_without_token_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a missing token is a configuration error."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("GITHUB_PAT_TOKEN", raising=False)

    with pytest.raises(ConfigurationError):
        IssueSync.create(settings=make_settings())


def test_create_prefers_explicit_arguments() -> None:
    """Test that explicit arguments override settings."""
    settings = make_settings(GITHUB_TOKEN="from-env", GITHUB_API_URL="https://ghe.example.com/api/v3", PER_PAGE=50)

    with patch("issue_sync.api.GitHubKitAdapter.create") as mock_create:
        issue_sync = IssueSync.create(github_token="explicit", settings=settings)

    mock_create.assert_called_once_with(github_token="explicit", github_api_url="https://ghe.example.com/api/v3")
    assert issue_sync.github_adapter is mock_create.return_value
    assert issue_sync.retriever.per_page == 50


def test_create_builds_githubkit_adapter() -> None:
    """Test that a token from settings yields a githubkit-backed adapter."""
    issue_sync = IssueSync.create(settings=make_settings(GITHUB_PAT_TOKEN="pat"), skip_failed_comments=True)

    assert isinstance(issue_sync.github_adapter, GitHubKitAdapter)
    assert issue_sync.synchronizer.comment_mirror.skip_failed_comments is True


def test_services_share_one_adapter(fake_adapter: Any) -> None:
    """Test that every service talks to the adapter IssueSync was built with."""
    issue_sync = IssueSync(fake_adapter)

    assert issue_sync.synchronizer.github_adapter is fake_adapter
    assert issue_sync.synchronizer.retriever is issue_sync.retriever
    assert issue_sync.synchronizer.label_reconciler.github_adapter is fake_adapter
    assert issue_sync.synchronizer.comment_mirror.github_adapter is fake_adapter


@pytest.mark.asyncio
async def test_list_and_sync_issues(fake_adapter: Any) -> None:
    """Test listing and synchronizing through the entry point."""
    fake_adapter.add_issue("octo", "source", "Fix login", labels=["bug"])
    fake_adapter.add_issue("octo", "source", "Add docs", labels=["docs"])
    issue_sync = IssueSync(fake_adapter)

    listed = await issue_sync.list_issues("octo", "source", SyncFilter(labels="bug"))
    result = await issue_sync.sync_issues("octo", "source", "octo", "target", SyncFilter(labels="bug"), dry_run=False)

    assert [issue.title for issue in listed] == ["Fix login"]
    assert [issue.title for issue in result.created] == ["Fix login"]
    assert result.total == 1
