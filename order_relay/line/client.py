"""LINE Messaging API client.

Handles the LINE side of the relay: webhook signature verification,
event extraction from delivery payloads, and reply/push delivery.
Deliveries are attempted once; a failed send is reported to the caller
as DeliveryError and never retried here.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
from typing import Any

import httpx

from order_relay.line.models import InboundEvent, MessageKind, OutboundMessage

logger = logging.getLogger(__name__)

LINE_API_BASE = "https://api.line.me/v2/bot/message"
_TIMEOUT_SECONDS = 10.0


class DeliveryError(Exception):
    """Raised when the LINE Messaging API rejects or fails a send."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class LineMessagingClient:
    """Talks to the LINE Messaging API on behalf of one channel."""

    def __init__(self, channel_access_token: str, channel_secret: str) -> None:
        self._access_token = channel_access_token
        self._channel_secret = channel_secret

    def verify_signature(self, headers: dict[str, str], body: bytes) -> bool:
        """Check ``x-line-signature`` against base64(HMAC-SHA256(secret, body))."""
        signature = headers.get("x-line-signature", "")
        if not signature:
            return False

        digest = hmac.new(
            self._channel_secret.encode(), body, hashlib.sha256,
        ).digest()
        expected = base64.b64encode(digest).decode()
        return hmac.compare_digest(signature.encode(), expected.encode())

    def extract_events(self, body: bytes | dict[str, Any]) -> list[InboundEvent]:
        """Parse a webhook delivery into InboundEvents.

        Fails closed: anything that is not a JSON object with an ``events``
        list yields no events, and malformed entries are skipped.
        """
        payload: Any = body
        if isinstance(body, bytes | bytearray):
            try:
                payload = json.loads(body)
            except (json.JSONDecodeError, UnicodeDecodeError):
                logger.warning("Webhook body is not valid JSON; treating as empty")
                return []

        if not isinstance(payload, dict):
            return []
        raw_events = payload.get("events")
        if not isinstance(raw_events, list):
            return []

        events: list[InboundEvent] = []
        for raw in raw_events:
            event = _to_inbound_event(raw)
            if event is not None:
                events.append(event)
        return events

    async def reply(self, reply_token: str, text: str) -> None:
        await self.send(OutboundMessage(MessageKind.REPLY, reply_token, text))

    async def push(self, user_id: str, text: str) -> None:
        await self.send(OutboundMessage(MessageKind.PUSH, user_id, text))

    async def send(self, message: OutboundMessage) -> None:
        """Deliver one message. Raises DeliveryError on any failure."""
        url = f"{LINE_API_BASE}/{message.kind.value}"
        headers = {"Authorization": f"Bearer {self._access_token}"}

        try:
            async with httpx.AsyncClient(verify=True, timeout=_TIMEOUT_SECONDS) as client:
                resp = await client.post(url, json=message.to_payload(), headers=headers)
        except httpx.HTTPError as exc:
            raise DeliveryError(f"LINE {message.kind.value} failed: {exc}") from exc

        if resp.status_code >= 400:
            raise DeliveryError(
                f"LINE {message.kind.value} failed with HTTP {resp.status_code}",
                status_code=resp.status_code,
                details=_error_body(resp),
            )


def _to_inbound_event(raw: Any) -> InboundEvent | None:
    if not isinstance(raw, dict):
        return None
    event_type = raw.get("type")
    if not isinstance(event_type, str):
        return None

    message = raw.get("message") if isinstance(raw.get("message"), dict) else {}
    source = raw.get("source") if isinstance(raw.get("source"), dict) else {}
    text = message.get("text")
    message_type = message.get("type")
    user_id = source.get("userId")
    reply_token = raw.get("replyToken")

    return InboundEvent(
        type=event_type,
        message_type=message_type if isinstance(message_type, str) else None,
        text=text if isinstance(text, str) else "",
        source_user_id=user_id if isinstance(user_id, str) else "",
        reply_token=reply_token if isinstance(reply_token, str) else "",
    )


def _error_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except (json.JSONDecodeError, ValueError):
        return resp.text
