"""Walk the paginated droplet listing into one inventory snapshot."""

from __future__ import annotations
import threading

from ..models import Droplet
from ..utils import get_logger
from .api import FIRST_PAGE, InstanceAPI

logger = get_logger()


class SweepCancelled(Exception):
    """The sweep was cancelled before the inventory was complete."""


def fetch_all_droplets(
    api: InstanceAPI, cancel_event: threading.Event | None = None
) -> list[Droplet]:
    """
    Fetch every droplet, page by page, in the order the API returns them.

    Any InstanceAPIError aborts the whole fetch; a partial inventory is never
    returned because acting on it would hide stale droplets on later pages.
    """
    inventory: list[Droplet] = []
    page = FIRST_PAGE
    pages_fetched = 0

    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise SweepCancelled(f"Cancelled after {pages_fetched} page(s)")

        result = api.list_page(page)
        pages_fetched += 1
        inventory.extend(result.droplets)

        if not result.has_more or result.next_page is None:
            break
        page = result.next_page

    logger.info(
        f"Fetched {len(inventory)} droplets in {pages_fetched} page(s)",
        extra={"droplet_count": len(inventory), "pages": pages_fetched},
    )
    return inventory
