"""Shop open/closed lookup against the Supabase REST (PostgREST) API."""

from __future__ import annotations

import json
import logging

import httpx

from order_relay.models import ShopStatus

logger = logging.getLogger(__name__)

_TIMEOUT_SECONDS = 10.0
# Asks PostgREST for exactly one row as a bare object; zero or many rows -> 406.
_SINGLE_OBJECT = "application/vnd.pgrst.object+json"


class StoreUnavailableError(Exception):
    """Raised when the shop status row cannot be read."""


class ShopStatusStore:
    """Reads the ``is_open`` flag of a single shop settings row.

    Every call is a fresh round trip; nothing is cached.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "shop_settings",
        shop_id: int = 1,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._table = table
        self._shop_id = shop_id

    async def fetch_status(self) -> ShopStatus:
        url = f"{self._base_url}/rest/v1/{self._table}"
        params = {"select": "is_open", "id": f"eq.{self._shop_id}"}
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Accept": _SINGLE_OBJECT,
        }

        try:
            async with httpx.AsyncClient(timeout=_TIMEOUT_SECONDS) as client:
                resp = await client.get(url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("Shop status request to %s failed: %s", url, exc)
            raise StoreUnavailableError(f"Shop status lookup failed: {exc}") from exc

        if resp.status_code >= 400:
            logger.warning(
                "Shop status request for shop %s returned HTTP %s",
                self._shop_id, resp.status_code,
            )
            raise StoreUnavailableError(
                f"Shop status lookup failed with HTTP {resp.status_code}"
            )

        try:
            row = resp.json()
        except (json.JSONDecodeError, ValueError) as exc:
            raise StoreUnavailableError("Shop status response is not JSON") from exc
        if not isinstance(row, dict):
            raise StoreUnavailableError("Shop status response is not a single row")

        return ShopStatus(is_open=bool(row.get("is_open")))
