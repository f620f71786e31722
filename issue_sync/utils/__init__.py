"""Utility modules for shared functionality."""

from .constants import (
    COMMENT_ATTRIBUTION_FOOTER,
    DEFAULT_GITHUB_API_URL,
    DEFAULT_LABEL_COLOR,
    ISSUE_PROVENANCE_FOOTER,
    MAX_PER_PAGE,
)
from .retry import retry_on_rate_limit

__all__ = [
    "COMMENT_ATTRIBUTION_FOOTER",
    "DEFAULT_GITHUB_API_URL",
    "DEFAULT_LABEL_COLOR",
    "ISSUE_PROVENANCE_FOOTER",
    "MAX_PER_PAGE",
    "retry_on_rate_limit",
]
