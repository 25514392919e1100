"""SweepResult and SweepSummary data classes."""

from __future__ import annotations
import datetime
from dataclasses import dataclass, asdict, field
from typing import Any

# Per-droplet outcomes
RETAINED = "RETAINED"
STALE = "STALE"
DELETED = "DELETED"
DELETE_FAILED = "DELETE_FAILED"
UNPARSEABLE = "UNPARSEABLE"

OUTCOMES = (RETAINED, STALE, DELETED, DELETE_FAILED, UNPARSEABLE)


@dataclass
class SweepResult:
    """What happened to one droplet during a sweep."""

    droplet_id: int
    name: str
    outcome: str
    detail: str = ""
    created_at: str = ""
    age_days: float | None = None
    # Stale and due for deletion, but the sweep was cancelled first
    delete_skipped: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        if self.age_days is not None:
            data["age_days"] = round(self.age_days, 2)
        return data


@dataclass
class SweepSummary:
    """Aggregate of one sweep: every droplet's result plus sweep-level status."""

    started_at: datetime.datetime
    dry_run: bool
    results: list[SweepResult] = field(default_factory=list)
    inventory_size: int = 0
    fetch_error: str | None = None
    cancelled: bool = False
    duration: float = 0.0

    @property
    def counts(self) -> dict[str, int]:
        counts = {outcome: 0 for outcome in OUTCOMES}
        for result in self.results:
            counts[result.outcome] = counts.get(result.outcome, 0) + 1
        return counts

    @property
    def ok(self) -> bool:
        """True when the inventory was fetched and every droplet was handled."""
        return self.fetch_error is None and not self.cancelled

    def by_outcome(self, outcome: str) -> list[SweepResult]:
        return [r for r in self.results if r.outcome == outcome]

    def to_dict(self) -> dict[str, Any]:
        return {
            "started_at": self.started_at.isoformat(),
            "dry_run": self.dry_run,
            "inventory_size": self.inventory_size,
            "fetch_error": self.fetch_error,
            "cancelled": self.cancelled,
            "duration": round(self.duration, 3),
            "by_outcome": self.counts,
            "results": [r.to_dict() for r in self.results],
        }
