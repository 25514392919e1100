"""Droplet listing, deletion and staleness policy."""

from .api import InstanceAPI, InstanceAPIError, DigitalOceanAPI, FIRST_PAGE
from .pagination import fetch_all_droplets, SweepCancelled
from .policies import is_stale, evaluate_staleness, age_in_days

__all__ = [
    "InstanceAPI",
    "InstanceAPIError",
    "DigitalOceanAPI",
    "FIRST_PAGE",
    "fetch_all_droplets",
    "SweepCancelled",
    "is_stale",
    "evaluate_staleness",
    "age_in_days",
]
