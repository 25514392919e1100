"""Clock and timestamp helpers."""

from __future__ import annotations
import datetime
import re
from typing import Protocol

# RFC 3339 date-time, zone mandatory ("Z" or "+hh:mm")
RFC3339_PATTERN = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(\.[0-9]+)?(Z|[+-][0-9]{2}:[0-9]{2})"
)

CREATED_AT_FORMATS = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
)


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime.datetime: ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime.datetime:
        return datetime.datetime.now(datetime.timezone.utc)


def parse_created_at(value: str) -> datetime.datetime:
    """
    Parse a provider-reported creation timestamp.

    Raises ValueError for anything that is not an RFC 3339 date-time with a
    time zone; naive timestamps are rejected rather than guessed.
    """
    if not isinstance(value, str):
        raise ValueError(f"Timestamp must be a string, got {type(value).__name__}")

    # strptime alone also takes unpadded fields and "+hhmm" offsets
    if not RFC3339_PATTERN.fullmatch(value):
        raise ValueError(f"Unparseable timestamp: {value!r}")

    for fmt in CREATED_AT_FORMATS:
        try:
            return datetime.datetime.strptime(value, fmt)
        except ValueError:
            continue

    raise ValueError(f"Unparseable timestamp: {value!r}")


def format_timestamp(value: datetime.datetime) -> str:
    """Format a timestamp the way reports show it."""
    return value.astimezone(datetime.timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
