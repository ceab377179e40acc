"""Logging configuration and timing helpers for the application."""

import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from property_media.core.config import get_settings


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def _format_fields(fields: dict[str, Any]) -> str:
    return " ".join(f"{k}={v}" for k, v in fields.items() if v is not None)


@contextmanager
def log_duration(
    logger: logging.Logger,
    operation: str,
    **fields: Any,
) -> Iterator[None]:
    """Log elapsed time around a block.

    Success is logged at DEBUG; an exception is logged at ERROR with the
    elapsed time and re-raised unchanged.

    Args:
        logger: Logger of the calling module.
        operation: Short operation name (e.g. 'save', 'delete').
        **fields: Extra key=value context; None values are omitted.
    """
    start = time.perf_counter()
    try:
        yield
    except Exception as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.error(
            "%s failed after %.2fms %s: %s",
            operation,
            elapsed_ms,
            _format_fields(fields),
            e,
        )
        raise
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.debug("%s took %.2fms %s", operation, elapsed_ms, _format_fields(fields))
