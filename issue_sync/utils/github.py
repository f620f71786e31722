"""Contains utility functions for GitHub interactions."""

from issue_sync.configuration.exceptions import InvalidRepositoryError


def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits an 'owner/repo' string into owner and repository."""
    if repo is None:
        raise InvalidRepositoryError(repo)
    parts = repo.strip("/").split("/")
    if len(parts) != 2 or not all(parts):
        raise InvalidRepositoryError(repo)
    owner, repository = parts
    return owner, repository
