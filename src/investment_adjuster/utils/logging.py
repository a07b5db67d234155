"""Logging setup for Investment Adjuster.

Diagnostics go to stderr; stdout is reserved for the rebalancing report.
"""

import logging
import sys
from typing import Any

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: str) -> int:
    resolved = getattr(logging, level.upper(), None)
    if not isinstance(resolved, int):
        return logging.WARNING
    return resolved


def setup_logging(
    level: str = "WARNING",
    log_format: str | None = None,
) -> None:
    """Configure the root logger for the command-line tool.

    Replaces any handlers installed earlier, so calling it again (from
    tests, for example) changes the level in place.

    Args:
        level: Level name such as "DEBUG" or "info". Names that are not a
            logging level fall back to WARNING.
        log_format: Format string for records. Defaults to DEFAULT_LOG_FORMAT.

    Example:
        >>> from investment_adjuster.utils.logging import setup_logging
        >>> setup_logging(level="DEBUG")
    """
    logging.basicConfig(
        level=_resolve_level(level),
        format=log_format or DEFAULT_LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass ``__name__``."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: Any,
) -> None:
    """Emit a message followed by ``key=value`` pairs.

    Args:
        logger: Target logger
        level: Method name on the logger ("debug", "info", ...)
        message: Human-readable message
        **context: Fields appended after a " | " separator

    Example:
        >>> log_with_context(
        ...     logger, "debug", "Allocations adjusted",
        ...     account="X12345678", to_distribute="9500.00"
        ... )
        # Logs: "Allocations adjusted | account=X12345678 to_distribute=9500.00"
    """
    emit = getattr(logger, level.lower())
    if not context:
        emit(message)
        return

    fields = " ".join(f"{key}={value}" for key, value in context.items())
    emit(f"{message} | {fields}")
