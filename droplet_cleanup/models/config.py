"""Configuration from the JSON config file and environment variables."""

from __future__ import annotations
import json
import os
from dataclasses import dataclass
from typing import Any

from ..utils.logging_config import STDOUT_DEST

DEFAULT_CONFIG_PATH = "./config.json"

# Listing page size; DigitalOcean caps per_page at 200
DEFAULT_PER_PAGE = 200
MAX_PER_PAGE = 200
DEFAULT_MAX_WORKERS = 8


class ConfigError(Exception):
    """Configuration file missing, unreadable or invalid."""


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() == "true"


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise ConfigError(f"'{key}' must be a boolean, got {value!r}")


def _as_int(key: str, value: Any) -> int:
    # bool is an int subclass; "threshold": true is a mistake, not 1 second
    if isinstance(value, bool):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class SweepConfig:
    """Settings for one process; fixed once loaded."""

    api_key: str = ""
    threshold: int = 0
    delete_stale: bool = False
    schedule: str = ""
    log_dest: str = STDOUT_DEST
    debug: bool = False
    tag_name: str | None = None
    per_page: int = DEFAULT_PER_PAGE
    max_workers: int = DEFAULT_MAX_WORKERS
    max_duration: float | None = None
    sns_topic_arn: str = ""

    def __post_init__(self):
        if self.threshold < 0:
            raise ConfigError(f"threshold must be non-negative, got {self.threshold}")
        if not 1 <= self.per_page <= MAX_PER_PAGE:
            raise ConfigError(f"per-page must be between 1 and {MAX_PER_PAGE}")
        if self.max_workers < 1:
            raise ConfigError("max-workers must be at least 1")
        if self.max_duration is not None and self.max_duration <= 0:
            raise ConfigError("max-duration must be positive")

    @property
    def dry_run(self) -> bool:
        return not self.delete_stale

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SweepConfig:
        """Build from the config file's keys, then apply environment overrides."""
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a JSON object")

        max_duration = data.get("max-duration")
        if max_duration is not None:
            max_duration = float(_as_int("max-duration", max_duration))

        api_key = os.environ.get("DIGITALOCEAN_ACCESS_TOKEN") or data.get("api-key", "")
        threshold = _as_int(
            "threshold",
            os.environ.get("STALE_THRESHOLD_SECONDS", data.get("threshold", 0)),
        )
        delete_stale = _env_bool(
            "DELETE_STALE", _as_bool("delete-stale", data.get("delete-stale", False))
        )
        tag_name = os.environ.get("TAG_NAME", data.get("tag-name")) or None
        sns_topic_arn = os.environ.get("SNS_TOPIC_ARN", data.get("sns-topic-arn", ""))

        return cls(
            api_key=api_key,
            threshold=threshold,
            delete_stale=delete_stale,
            schedule=data.get("schedule", ""),
            log_dest=data.get("debug-dest", STDOUT_DEST) or STDOUT_DEST,
            debug=_as_bool("debug", data.get("debug", False)),
            tag_name=tag_name,
            per_page=_as_int("per-page", data.get("per-page", DEFAULT_PER_PAGE)),
            max_workers=_as_int(
                "max-workers", data.get("max-workers", DEFAULT_MAX_WORKERS)
            ),
            max_duration=max_duration,
            sns_topic_arn=sns_topic_arn,
        )


def load_config(path: str = DEFAULT_CONFIG_PATH) -> SweepConfig:
    """Read and parse the JSON config file at ``path``."""
    if not path or len(path) <= 1:
        raise ConfigError(f"Invalid config path: {path!r}")

    abs_path = os.path.abspath(path)
    if not os.path.isfile(abs_path):
        raise ConfigError(f"Config file not found: {abs_path}")

    try:
        with open(abs_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read config file {abs_path}: {e}") from e

    return SweepConfig.from_dict(data)
