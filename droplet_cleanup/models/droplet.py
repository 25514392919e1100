"""Droplet snapshot and listing page data classes."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Droplet:
    """A droplet as listed by the API at fetch time."""

    id: int
    name: str
    created_at: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Droplet:
        """Build from one entry of the ``droplets`` array in a listing response."""
        return cls(
            id=data["id"],
            name=data.get("name") or "N/A",
            created_at=data.get("created_at", ""),
        )


@dataclass
class DropletPage:
    """One page of the droplet listing."""

    droplets: list[Droplet] = field(default_factory=list)
    next_page: int | None = None
    has_more: bool = False
