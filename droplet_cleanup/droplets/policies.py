"""Droplet staleness policy (creation age versus threshold)."""

from __future__ import annotations
import datetime

from ..models import RETAINED, STALE, UNPARSEABLE
from ..utils import parse_created_at


def is_stale(
    now: datetime.datetime, created_at: datetime.datetime, threshold_seconds: int
) -> bool:
    """
    True when the droplet's age strictly exceeds the threshold.

    A droplet created exactly ``threshold_seconds`` before ``now`` is still
    fresh. A zero threshold makes anything created in the past stale.
    """
    cutoff = now - datetime.timedelta(seconds=threshold_seconds)
    return cutoff > created_at


def age_in_days(now: datetime.datetime, created_at: datetime.datetime) -> float:
    return (now - created_at).total_seconds() / 86400


def evaluate_staleness(
    now: datetime.datetime, created_at: str, threshold_seconds: int
) -> tuple[str, datetime.datetime | None]:
    """
    Classify a raw ``created_at`` value as RETAINED, STALE or UNPARSEABLE.

    Returns the outcome together with the parsed creation time, which is
    None for UNPARSEABLE. Unparseable timestamps never count as stale.
    """
    try:
        created = parse_created_at(created_at)
    except ValueError:
        return UNPARSEABLE, None

    if is_stale(now, created, threshold_seconds):
        return STALE, created
    return RETAINED, created
