"""Shared telemetry: logging setup and operation timing."""

from property_media.shared.telemetry.logging import (
    get_logger,
    log_duration,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_duration",
]
