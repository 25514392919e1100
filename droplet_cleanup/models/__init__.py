"""Data models and configuration."""

from .droplet import Droplet, DropletPage
from .sweep_result import (
    SweepResult,
    SweepSummary,
    OUTCOMES,
    RETAINED,
    STALE,
    DELETED,
    DELETE_FAILED,
    UNPARSEABLE,
)
from .config import SweepConfig, ConfigError, load_config

__all__ = [
    "Droplet",
    "DropletPage",
    "SweepResult",
    "SweepSummary",
    "OUTCOMES",
    "RETAINED",
    "STALE",
    "DELETED",
    "DELETE_FAILED",
    "UNPARSEABLE",
    "SweepConfig",
    "ConfigError",
    "load_config",
]
