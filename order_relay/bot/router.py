"""Command routing for inbound LINE webhook events.

Each event in a delivery is handled on its own, in order. Any exception
raised while handling one event is logged and swallowed so the rest of
the delivery still gets processed and the webhook still answers 200.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from order_relay.bot import messages
from order_relay.bot.responder import ResponderMode

if TYPE_CHECKING:
    from order_relay.bot.responder import ShopStatusResponder
    from order_relay.line.client import LineMessagingClient
    from order_relay.line.models import InboundEvent

logger = logging.getLogger(__name__)


class CommandRouter:
    """Dispatches text messages to a reply by exact trigger phrase."""

    def __init__(
        self,
        messaging: LineMessagingClient,
        responder: ShopStatusResponder,
        order_trigger: str,
        status_trigger: str,
    ) -> None:
        self._messaging = messaging
        self._responder = responder
        self._order_trigger = order_trigger
        self._status_trigger = status_trigger
        self._help = messages.help_text(order_trigger, status_trigger)

    async def dispatch(self, events: Sequence[InboundEvent]) -> int:
        """Handle every event in order; return the number of replies sent."""
        sent = 0
        for event in events:
            try:
                if await self.handle(event):
                    sent += 1
            except Exception:
                logger.exception(
                    "Failed to handle %s event from %s",
                    event.type, event.source_user_id or "unknown",
                )
        return sent

    async def handle(self, event: InboundEvent) -> bool:
        """Reply to one event. Returns False when the event is ignored."""
        if not event.is_text_message:
            return False

        text = await self.reply_text(event)
        await self._messaging.reply(event.reply_token, text)
        return True

    async def reply_text(self, event: InboundEvent) -> str:
        command = event.text.strip()
        if command == self._order_trigger:
            return await self._responder.respond(
                ResponderMode.ORDER_OR_REDIRECT, event.source_user_id,
            )
        if command == self._status_trigger:
            return await self._responder.respond(
                ResponderMode.STATUS_ONLY, event.source_user_id,
            )
        return self._help
