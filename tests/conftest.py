"""Pytest configuration and shared fixtures for droplet cleanup tests."""

from __future__ import annotations
import datetime
import threading
import time
import pytest
from typing import Any

from droplet_cleanup.droplets import InstanceAPIError
from droplet_cleanup.models import Droplet, DropletPage, SweepConfig


NOW = datetime.datetime(2024, 6, 1, 12, 0, 0, tzinfo=datetime.timezone.utc)
ONE_DAY = 86400


def rfc3339(value: datetime.datetime) -> str:
    """Format like the DigitalOcean API does (UTC, trailing Z)."""
    return value.astimezone(datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class DropletBuilder:
    """Builder pattern for droplet payloads as the listing endpoint returns them."""

    def __init__(self):
        self._droplet: dict[str, Any] = {
            "id": 1000,
            "name": "test-droplet",
            "created_at": rfc3339(NOW),
            "status": "active",
            "tags": [],
        }

    def with_id(self, droplet_id: int) -> DropletBuilder:
        self._droplet["id"] = droplet_id
        return self

    def with_name(self, name: str) -> DropletBuilder:
        self._droplet["name"] = name
        return self

    def created_ago(self, **delta) -> DropletBuilder:
        """Set created_at relative to NOW, e.g. created_ago(days=2)."""
        self._droplet["created_at"] = rfc3339(NOW - datetime.timedelta(**delta))
        return self

    def with_created_at(self, created_at: str) -> DropletBuilder:
        self._droplet["created_at"] = created_at
        return self

    def build(self) -> dict[str, Any]:
        return dict(self._droplet)

    def build_droplet(self) -> Droplet:
        return Droplet.from_api(self.build())


class FakeDropletAPI:
    """In-memory InstanceAPI.

    ``pages`` is a list of lists of Droplet; ``fail_on_page`` makes that page
    raise; ``fail_delete`` is a set of droplet ids whose delete raises;
    ``delete_delay`` makes every delete call take that many seconds.
    """

    def __init__(
        self, pages=None, fail_on_page=None, fail_delete=None, delete_delay=0.0
    ):
        self.pages: list[list[Droplet]] = pages if pages is not None else [[]]
        self.fail_on_page = fail_on_page
        self.fail_delete = set(fail_delete or ())
        self.delete_delay = delete_delay
        self.listed_pages: list[int] = []
        self.deleted: list[int] = []
        self.delete_attempts: list[int] = []
        self._lock = threading.Lock()

    def list_page(self, page: int) -> DropletPage:
        self.listed_pages.append(page)
        if page == self.fail_on_page:
            raise InstanceAPIError(f"Failed to list droplets (page {page}): boom")

        index = page - 1
        has_more = index + 1 < len(self.pages)
        return DropletPage(
            droplets=list(self.pages[index]),
            next_page=page + 1 if has_more else None,
            has_more=has_more,
        )

    def delete(self, droplet_id: int) -> None:
        with self._lock:
            self.delete_attempts.append(droplet_id)
        if self.delete_delay:
            time.sleep(self.delete_delay)
        if droplet_id in self.fail_delete:
            raise InstanceAPIError(f"Failed to delete droplet {droplet_id}: forbidden")
        with self._lock:
            self.deleted.append(droplet_id)
            # Provider stops listing a destroyed droplet
            self.pages = [[d for d in p if d.id != droplet_id] for p in self.pages]


class RecordingReporter:
    """Reporter that keeps every call for assertions."""

    def __init__(self):
        self.records: list[tuple[int, str, str, str]] = []
        self.fetch_failures: list[str] = []
        self.summaries: list[dict[str, int]] = []

    def record(self, droplet_id, name, outcome, detail):
        self.records.append((droplet_id, name, outcome, detail))

    def record_fetch_failure(self, detail):
        self.fetch_failures.append(detail)

    def summarize(self, counts):
        self.summaries.append(dict(counts))

    def outcome_of(self, droplet_id: int) -> str:
        return next(r[2] for r in self.records if r[0] == droplet_id)


class FixedClock:
    def __init__(self, now: datetime.datetime = NOW):
        self._now = now

    def now(self) -> datetime.datetime:
        return self._now


# Shared fixtures


@pytest.fixture
def droplet_builder():
    """Fixture that returns a new DropletBuilder."""
    return DropletBuilder()


@pytest.fixture
def make_droplet():
    """Factory for Droplet snapshots created some time before NOW."""

    def _make(droplet_id: int = 1000, name: str = "test-droplet", **delta) -> Droplet:
        builder = DropletBuilder().with_id(droplet_id).with_name(name)
        if delta:
            builder.created_ago(**delta)
        return builder.build_droplet()

    return _make


@pytest.fixture
def current_time():
    """The fixed "now" every sweep in the tests is judged against."""
    return NOW


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def make_config():
    """Factory for SweepConfig with a one-day threshold by default."""

    def _make(**overrides) -> SweepConfig:
        values = {"threshold": ONE_DAY, "delete_stale": True, "max_workers": 4}
        values.update(overrides)
        return SweepConfig(**values)

    return _make


@pytest.fixture
def fake_api():
    """Factory for FakeDropletAPI."""

    def _create(*pages, **kwargs) -> FakeDropletAPI:
        return FakeDropletAPI(pages=list(pages) or [[]], **kwargs)

    return _create
