"""Chat command handling for the LINE order relay."""

from order_relay.bot.responder import ResponderMode, ShopStatusResponder
from order_relay.bot.router import CommandRouter

__all__ = [
    "CommandRouter",
    "ResponderMode",
    "ShopStatusResponder",
]
