"""Shared helpers: logging, clock and timestamp parsing."""

from .logging_config import get_logger, configure_logging, STDOUT_DEST
from .time_helpers import Clock, SystemClock, parse_created_at, format_timestamp

__all__ = [
    "get_logger",
    "configure_logging",
    "STDOUT_DEST",
    "Clock",
    "SystemClock",
    "parse_created_at",
    "format_timestamp",
]
