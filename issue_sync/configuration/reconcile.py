"""Reconcile GitHub authentication configuration."""

from issue_sync.configuration.exceptions import GitHubAuthenticationConfigurationUndefinedError


def validate_github_authentication_configuration(
    github_token: str | None,
    env_github_token: str | None = None,
    env_github_pat_token: str | None = None,
) -> str:
    """Resolves the GitHub token to authenticate with.

    Args:
        github_token (str | None): A token passed explicitly by the caller.
        env_github_token (str | None): The GITHUB_TOKEN setting.
        env_github_pat_token (str | None): The GITHUB_PAT_TOKEN setting.

    Raises:
        GitHubAuthenticationConfigurationUndefinedError: If no token is available.

    Returns:
        str: The token, preferring the explicit one, then GITHUB_TOKEN, then GITHUB_PAT_TOKEN.
    """
    for candidate in (github_token, env_github_token, env_github_pat_token):
        if candidate and candidate.strip():
            return candidate.strip()
    raise GitHubAuthenticationConfigurationUndefinedError(
        "GitHub token not found. Provide a token or set GITHUB_TOKEN (or GITHUB_PAT_TOKEN) in the environment or a .env file."
    )
