"""Drives paginated GitHub listings to exhaustion."""

from typing import Any, Awaitable, Callable, Hashable, TypeVar

import structlog

from .types import Page

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

T = TypeVar("T")


async def fetch_all_pages(
    fetch_page: Callable[[int], Awaitable[Page[T]]],
    key: Callable[[T], Hashable] | None = None,
    **log_context: Any,
) -> list[T]:
    """Fetch every page from a listing, starting at page 1, and return all items in order.

    Stops when a page reports no further pages or comes back empty. When
    ``key`` is given, an item whose key was already seen on an earlier page is
    dropped; GitHub listings can shift while they are being walked.
    """
    all_items: list[T] = []
    seen: set[Hashable] = set()
    page: int = 1
    while True:
        logger.debug("Fetching page", page=page, **log_context)
        result = await fetch_page(page)
        for item in result.items:
            if key is not None:
                item_key = key(item)
                if item_key in seen:
                    logger.debug("Dropping item repeated across pages", item_key=item_key, page=page, **log_context)
                    continue
                seen.add(item_key)
            all_items.append(item)
        if not result.items or not result.has_more:
            break
        page += 1
    logger.debug("Fetched all pages", pages=page, item_count=len(all_items), **log_context)
    return all_items
