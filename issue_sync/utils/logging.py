"""structlog configuration for command-line use."""

import logging
import sys

import structlog


def configure_logging(debug: bool = False) -> None:
    """Configure structlog to render to stderr, at DEBUG level when debug is set and INFO otherwise.

    Library code only ever calls ``structlog.get_logger``; applications that
    embed issue_sync keep whatever structlog configuration they already have.
    """
    level = logging.DEBUG if debug else logging.INFO
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
