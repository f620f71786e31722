"""Contains synchronization logic for GitHub labels."""

from functools import partial
from typing import Any, Sequence

import structlog
from githubkit.versions.latest.models import Label

from issue_sync.github.abc import GitHubClientBase
from issue_sync.github.pagination import fetch_all_pages
from issue_sync.synchronize.exceptions import EnsureLabelsError
from issue_sync.synchronize.types import LabelType
from issue_sync.synchronize.utils import extract_label_name
from issue_sync.utils.constants import DEFAULT_LABEL_COLOR, MAX_PER_PAGE

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def label_color(label: LabelType) -> str:
    """Return a label's color as GitHub expects it, without a leading '#'."""
    if isinstance(label, dict):
        color = label.get("color")
    else:
        color = getattr(label, "color", None)
    if not color:
        return DEFAULT_LABEL_COLOR
    return color.lstrip("#") or DEFAULT_LABEL_COLOR


def label_description(label: LabelType) -> str:
    """Return a label's description, or an empty string."""
    if isinstance(label, dict):
        return label.get("description") or ""
    return getattr(label, "description", None) or ""


class LabelReconciler:
    """Makes sure the labels a source issue carries exist in a target repository.

    Existing target labels are matched by exact, case-sensitive name and are
    never modified. Once a repository's labels have been listed the names are
    remembered, so reconciling many issues against the same target lists its
    labels only once. Call ``forget`` to drop what is remembered.
    """

    def __init__(self, github_adapter: GitHubClientBase, per_page: int = MAX_PER_PAGE) -> None:
        """Initialize the reconciler with the adapter it writes through."""
        self.github_adapter = github_adapter
        self.per_page = per_page
        self._known_names: dict[tuple[str, str], set[str]] = {}

    def forget(self) -> None:
        """Discard every remembered set of target label names."""
        self._known_names.clear()

    async def list_label_names(self, owner: str, repo: str) -> set[str]:
        """Return the names of every label in a repository, fetching them on first use."""
        cache_key = (owner, repo)
        if cache_key not in self._known_names:
            fetch_page = partial(self._fetch_page, owner=owner, repo=repo)
            try:
                labels = await fetch_all_pages(fetch_page, key=lambda label: label.name, owner=owner, repo=repo)
            except Exception as exc:
                logger.error("Failed to list labels", owner=owner, repo=repo, error=str(exc))
                raise EnsureLabelsError(owner, repo, None, exc) from exc
            self._known_names[cache_key] = {label.name for label in labels}
            logger.info("Fetched existing labels", owner=owner, repo=repo, label_count=len(labels))
        return self._known_names[cache_key]

    async def ensure_labels(self, owner: str, repo: str, source_labels: Sequence[LabelType]) -> list[Label]:
        """Create every source label that is missing from the target repository.

        Labels are created in the order given, using the source color (default
        CCCCCC) and description (default empty). Returns the labels created.

        Raises:
            EnsureLabelsError: If the target labels cannot be listed or a label cannot be created.
        """
        existing_names = await self.list_label_names(owner, repo)
        created_labels: list[Label] = []
        for source_label in source_labels:
            name = extract_label_name(source_label)
            if not name or name in existing_names:
                continue
            color = label_color(source_label)
            description = label_description(source_label)
            logger.info("Label not found in target repository, creating it", owner=owner, repo=repo, label_name=name, color=color)
            try:
                created_label = await self.github_adapter.create_label(owner, repo, name=name, color=color, description=description)
            except Exception as exc:
                logger.error("Failed to create label", owner=owner, repo=repo, label_name=name, error=str(exc))
                raise EnsureLabelsError(owner, repo, name, exc) from exc
            existing_names.add(name)
            created_labels.append(created_label)
        return created_labels

    async def _fetch_page(self, page: int, owner: str, repo: str) -> Any:
        return await self.github_adapter.list_labels_page(owner, repo, page=page, per_page=self.per_page)
