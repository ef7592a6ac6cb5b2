"""Shared test fixtures for the LINE order relay."""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from order_relay.config import RelaySettings
from order_relay.line.client import LineMessagingClient
from order_relay.line.models import InboundEvent
from order_relay.models import ShopStatus
from order_relay.shop.store import ShopStatusStore

CHANNEL_SECRET = "test-channel-secret"
ORDER_BASE_URL = "https://shop.example.com/"
ADMIN_USER_ID = "Uadmin"


def make_settings(**kwargs: Any) -> RelaySettings:
    """Factory for RelaySettings with sensible defaults."""
    defaults: dict[str, Any] = {
        "channel_access_token": "test-access-token",
        "channel_secret": CHANNEL_SECRET,
        "supabase_url": "https://db.example.com",
        "supabase_key": "anon-key",
        "admin_user_id": ADMIN_USER_ID,
        "order_base_url": ORDER_BASE_URL,
        "order_trigger": "สั่งอาหาร",
        "status_trigger": "เช็คสถานะร้าน",
    }
    defaults.update(kwargs)
    return RelaySettings(**defaults)


def make_text_event(**kwargs: Any) -> InboundEvent:
    """Factory for a text message InboundEvent."""
    defaults: dict[str, Any] = {
        "type": "message",
        "message_type": "text",
        "text": "hello",
        "source_user_id": "U1",
        "reply_token": "T1",
    }
    defaults.update(kwargs)
    return InboundEvent(**defaults)


def make_line_event(
    text: str = "hello",
    user_id: str = "U1",
    reply_token: str = "T1",
    event_type: str = "message",
    message_type: str = "text",
) -> dict[str, Any]:
    """Raw webhook event as LINE sends it."""
    return {
        "type": event_type,
        "replyToken": reply_token,
        "source": {"type": "user", "userId": user_id},
        "timestamp": 1700000000000,
        "mode": "active",
        "message": {"id": "m1", "type": message_type, "text": text},
    }


def sign_body(body: bytes, secret: str = CHANNEL_SECRET) -> str:
    digest = hmac.new(secret.encode(), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


def mock_http_client(response: Any = None, side_effect: Any = None) -> AsyncMock:
    """AsyncMock standing in for ``async with httpx.AsyncClient() as client``."""
    client = AsyncMock()
    if side_effect is not None:
        client.post.side_effect = side_effect
        client.get.side_effect = side_effect
    else:
        client.post.return_value = response
        client.get.return_value = response
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


@pytest.fixture
def settings() -> RelaySettings:
    return make_settings()


@pytest.fixture
def mock_store() -> MagicMock:
    store = MagicMock(spec=ShopStatusStore)
    store.fetch_status = AsyncMock(return_value=ShopStatus(is_open=True))
    return store


@pytest.fixture
def messaging() -> LineMessagingClient:
    """Real client (signature checks, parsing) with delivery stubbed out."""
    client = LineMessagingClient(
        channel_access_token="test-access-token",
        channel_secret=CHANNEL_SECRET,
    )
    client.send = AsyncMock()  # type: ignore[method-assign]
    return client
