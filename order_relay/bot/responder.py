"""Shop status replies for the order and status chat commands."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from order_relay.bot import messages
from order_relay.shop.store import StoreUnavailableError

if TYPE_CHECKING:
    from order_relay.models import ShopStatus
    from order_relay.shop.store import ShopStatusStore

logger = logging.getLogger(__name__)


class ResponderMode(str, Enum):
    ORDER_OR_REDIRECT = "order_or_redirect"
    STATUS_ONLY = "status_only"


class ShopStatusResponder:
    """Turns a fresh shop status lookup into a chat reply.

    The two modes treat a failed lookup differently: ORDER_OR_REDIRECT
    answers as if the shop were closed so a link is never sent, while
    STATUS_ONLY reports that the status could not be checked.
    """

    def __init__(
        self,
        store: ShopStatusStore,
        order_base_url: str,
        order_trigger: str,
    ) -> None:
        self._store = store
        self._order_base_url = order_base_url
        self._order_trigger = order_trigger

    async def check(self) -> ShopStatus:
        """Fetch the current status. Raises StoreUnavailableError."""
        return await self._store.fetch_status()

    async def respond(self, mode: ResponderMode, user_id: str) -> str:
        if mode is ResponderMode.ORDER_OR_REDIRECT:
            return await self.order_reply(user_id)
        return await self.status_reply()

    async def order_reply(self, user_id: str) -> str:
        try:
            status = await self.check()
        except StoreUnavailableError as exc:
            logger.warning("Shop status unavailable, answering as closed: %s", exc)
            return messages.SHOP_CLOSED

        if not status.is_open:
            return messages.SHOP_CLOSED
        link = messages.order_link(self._order_base_url, user_id)
        return messages.ORDER_LINK_TEMPLATE.format(link=link)

    async def status_reply(self) -> str:
        try:
            status = await self.check()
        except StoreUnavailableError as exc:
            logger.warning("Shop status unavailable: %s", exc)
            return messages.STATUS_UNAVAILABLE

        if status.is_open:
            return messages.SHOP_OPEN_TEMPLATE.format(order_trigger=self._order_trigger)
        return messages.SHOP_CLOSED
