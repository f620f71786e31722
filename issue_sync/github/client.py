"""Sets up the authenticated githubkit client."""

from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

from issue_sync.configuration.exceptions import GitHubAuthenticationConfigurationUndefinedError
from issue_sync.utils.constants import DEFAULT_GITHUB_API_URL

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy]


def get_github_client(github_token: str | None, github_api_url: str = DEFAULT_GITHUB_API_URL) -> GitHubClient:
    """Returns a GitHub client authenticated with a personal access token.

    Supports a custom base URL for GitHub Enterprise Server (GHES).
    Raises GitHubAuthenticationConfigurationUndefinedError if no token is given.
    """
    if not github_token:
        raise GitHubAuthenticationConfigurationUndefinedError("GitHub authentication requires a token. Set GITHUB_TOKEN or pass one explicitly.")
    # Disable HTTP caching so dedup decisions always see fresh data
    return GitHub(auth=TokenAuthStrategy(github_token), base_url=github_api_url, http_cache=False)
