"""DigitalOcean droplet API adapter (list one page, delete one droplet)."""

from __future__ import annotations
from typing import Any, Protocol

import digitalocean
import requests
from digitalocean.baseapi import Error as DigitalOceanError

from ..models import Droplet, DropletPage
from ..models.config import DEFAULT_PER_PAGE
from ..utils import get_logger

logger = get_logger()

FIRST_PAGE = 1

# python-digitalocean raises plain IndexError/KeyError/ValueError when an error
# response body lacks the fields it expects (e.g. a 503 with only "message")
API_ERRORS = (
    DigitalOceanError,
    requests.RequestException,
    IndexError,
    KeyError,
    TypeError,
    ValueError,
)


class InstanceAPIError(Exception):
    """Any failure talking to the droplet API (transport, auth, decode)."""


class InstanceAPI(Protocol):
    """Operations the sweep needs from the provider."""

    def list_page(self, page: int) -> DropletPage: ...

    def delete(self, droplet_id: int) -> None: ...


class DigitalOceanAPI:
    """InstanceAPI backed by python-digitalocean.

    The token falls back to DIGITALOCEAN_ACCESS_TOKEN when not given, the same
    way ``digitalocean.Manager()`` does on its own.
    """

    def __init__(
        self,
        token: str | None = None,
        tag_name: str | None = None,
        per_page: int = DEFAULT_PER_PAGE,
        manager: Any = None,
    ):
        if manager is None:
            kwargs = {"token": token} if token else {}
            manager = digitalocean.Manager(**kwargs)
        self.manager = manager
        self.tag_name = tag_name
        self.per_page = per_page

    def list_page(self, page: int) -> DropletPage:
        """Fetch one page of droplets.

        Passing ``page`` explicitly stops python-digitalocean from walking the
        remaining pages itself, so pagination stays with the caller.
        """
        params: dict[str, Any] = {"page": page, "per_page": self.per_page}
        if self.tag_name:
            params["tag_name"] = self.tag_name

        try:
            data = self.manager.get_data("droplets/", params=params)
        except API_ERRORS as e:
            raise InstanceAPIError(f"Failed to list droplets (page {page}): {e}") from e

        if not isinstance(data, dict):
            raise InstanceAPIError(f"Unexpected listing response on page {page}")

        try:
            droplets = [Droplet.from_api(d) for d in data.get("droplets", [])]
        except (KeyError, TypeError, AttributeError) as e:
            raise InstanceAPIError(
                f"Malformed droplet entry on page {page}: {e}"
            ) from e

        links = data.get("links") or {}
        has_more = bool((links.get("pages") or {}).get("next"))

        logger.debug(
            "Fetched droplet page",
            extra={"page": page, "count": len(droplets), "has_more": has_more},
        )

        return DropletPage(
            droplets=droplets,
            next_page=page + 1 if has_more else None,
            has_more=has_more,
        )

    def delete(self, droplet_id: int) -> None:
        """Destroy a droplet by id."""
        try:
            droplet = digitalocean.Droplet(token=self.manager.token, id=droplet_id)
            droplet.destroy()
        except API_ERRORS as e:
            raise InstanceAPIError(f"Failed to delete droplet {droplet_id}: {e}") from e
