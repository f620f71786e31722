"""Retry decorator for handling GitHub API rate limits.

Only rate limit responses are retried. Authentication, permission and
not-found failures are raised on the first attempt.
"""

import asyncio
import functools
import inspect
import time
from typing import Any, Callable, TypeVar

import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def is_rate_limit_response(error: RequestFailed) -> bool:
    """Return True if a failed request was rejected because of a rate limit.

    GitHub answers 429 for rate limits, and 403 for both rate limits and
    permission problems. A 403 only counts when the remaining quota is zero
    or the message mentions a rate limit.
    """
    if isinstance(error, (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded)):
        return True
    status_code = error.response.status_code
    if status_code == 429:
        return True
    if status_code != 403:
        return False
    if error.response.headers.get("x-ratelimit-remaining") == "0":
        return True
    return "rate limit" in str(error).lower()


def compute_wait_time(error: RequestFailed, delay: float, max_delay: float) -> float:
    """Work out how long to wait before retrying a rate limited request."""
    if isinstance(error, (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded)) and error.retry_after:
        return min(error.retry_after.total_seconds(), max_delay)

    wait_time = delay
    retry_after = error.response.headers.get("retry-after")
    rate_limit_reset = error.response.headers.get("x-ratelimit-reset")
    if retry_after:
        try:
            wait_time = float(retry_after)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after)
    elif rate_limit_reset:
        try:
            reset_timestamp = int(rate_limit_reset)
            current_timestamp = int(time.time())
            if reset_timestamp > current_timestamp:
                wait_time = reset_timestamp - current_timestamp + 1
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=rate_limit_reset)
    return min(wait_time, max_delay)


def retry_on_rate_limit(
    max_retries: int = 5,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Retry an async GitHub call while GitHub keeps answering with a rate limit.

    The wait before each retry comes from the retry-after or x-ratelimit-reset
    header when GitHub sends one, and from exponential backoff otherwise.
    After the last retry the rate limit error is raised to the caller.

    Args:
        max_retries: Retries allowed after the first attempt
        initial_delay: Backoff delay in seconds before the first retry
        max_delay: Upper bound in seconds for any single wait
        exponential_base: Factor applied to the backoff delay after each retry

    Returns:
        A decorator for async functions

    Example:
        @retry_on_rate_limit()
        async def create_issue(self, owner: str, repo: str, title: str) -> Issue:
            ...
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except RequestFailed as e:
                    if not is_rate_limit_response(e):
                        raise
                    if attempt >= max_retries:
                        logger.error(
                            "Giving up on rate limited GitHub call",
                            function=func.__name__,
                            attempt=attempt + 1,
                            status_code=e.response.status_code,
                            error_type=type(e).__name__,
                        )
                        raise
                    wait_time = compute_wait_time(e, delay, max_delay)
                    logger.warning(
                        "Rate limited by GitHub, retrying after wait",
                        function=func.__name__,
                        attempt=attempt + 1,
                        max_retries=max_retries,
                        wait_time=wait_time,
                        status_code=e.response.status_code,
                    )
                    await asyncio.sleep(wait_time)
                    delay = min(delay * exponential_base, max_delay)
                    attempt += 1

        return async_wrapper  # type: ignore

    return decorator
