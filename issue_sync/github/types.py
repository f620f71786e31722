"""Type definitions shared by GitHub client implementations."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """A single page of results from a paginated GitHub listing."""

    items: list[T] = field(default_factory=list)
    has_more: bool = False
