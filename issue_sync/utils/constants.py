"""Shared constants used across the application."""

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Public GitHub REST API endpoint. Override for GitHub Enterprise Server."""

MAX_PER_PAGE = 100
"""Largest page size GitHub's REST API accepts for list endpoints."""

DEFAULT_LABEL_COLOR = "CCCCCC"
"""Color given to a created label when the source label has none."""

GHOST_LOGIN = "ghost"
"""Login GitHub shows for content whose author account was deleted."""

# Body Decoration Templates
# -------------------------

ISSUE_PROVENANCE_FOOTER = "\n\n---\n*Synchronized from {owner}/{repo}#{number}*"
"""Appended to the body of every issue created in the target repository."""

COMMENT_ATTRIBUTION_FOOTER = "\n\n---\n*Original comment by @{login}*"
"""Appended to the body of every mirrored comment."""
