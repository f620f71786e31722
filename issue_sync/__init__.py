"""Copy GitHub issues, labels and comments from one repository to another."""

from issue_sync.api import IssueSync
from issue_sync.configuration.exceptions import ConfigurationError
from issue_sync.exceptions import IssueSyncError
from issue_sync.synchronize.exceptions import (
    EnsureLabelsError,
    ItemCreationError,
    MirrorError,
    RetrievalError,
    SyncCancelledError,
    SyncError,
)
from issue_sync.synchronize.matching import MatchKeyStrategy, TitleMatchKey
from issue_sync.synchronize.models import IssueState, LabelMatchMode, SyncFilter
from issue_sync.synchronize.results import SyncResult

__all__ = [
    "ConfigurationError",
    "EnsureLabelsError",
    "IssueState",
    "IssueSync",
    "IssueSyncError",
    "ItemCreationError",
    "LabelMatchMode",
    "MatchKeyStrategy",
    "MirrorError",
    "RetrievalError",
    "SyncCancelledError",
    "SyncError",
    "SyncFilter",
    "SyncResult",
    "TitleMatchKey",
]
