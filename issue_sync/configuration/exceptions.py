"""Contains exceptions raised when reconciling application configuration."""

from issue_sync.exceptions import IssueSyncError


class ConfigurationError(IssueSyncError):
    """Raised when the application configuration is missing or invalid."""

    pass


class GitHubAuthenticationConfigurationUndefinedError(ConfigurationError):
    """Raised when the GitHub authentication configuration is undefined."""

    pass


class InvalidRepositoryError(ConfigurationError):
    """Raised when a repository is not in 'owner/repo' form."""

    def __init__(self, repo: str | None) -> None:
        """Initializes the exception with the offending repository string."""
        super().__init__(f"Repository must be in the format 'owner/repo' with no extra parts, got {repo!r}")
        self.repo = repo
