"""Tests for the LINE Messaging API client."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

from order_relay.line.client import DeliveryError, LineMessagingClient
from order_relay.line.models import MessageKind, OutboundMessage
from tests.conftest import CHANNEL_SECRET, make_line_event, mock_http_client, sign_body


def _make_client() -> LineMessagingClient:
    return LineMessagingClient(channel_access_token="tok", channel_secret=CHANNEL_SECRET)


class TestSignatureVerification:
    def test_valid_signature_accepted(self) -> None:
        body = b'{"events": []}'
        headers = {"x-line-signature": sign_body(body)}
        assert _make_client().verify_signature(headers, body) is True

    def test_missing_signature_rejected(self) -> None:
        assert _make_client().verify_signature({}, b"{}") is False

    def test_signature_for_other_body_rejected(self) -> None:
        headers = {"x-line-signature": sign_body(b"other")}
        assert _make_client().verify_signature(headers, b"{}") is False

    def test_signature_with_other_secret_rejected(self) -> None:
        body = b"{}"
        headers = {"x-line-signature": sign_body(body, secret="nope")}
        assert _make_client().verify_signature(headers, body) is False

    @pytest.mark.parametrize("signature", ["éabc", "签名"])
    def test_non_ascii_signature_rejected(self, signature: str) -> None:
        headers = {"x-line-signature": signature}
        assert _make_client().verify_signature(headers, b"{}") is False

    def test_uses_constant_time_comparison(self) -> None:
        with patch("order_relay.line.client.hmac.compare_digest", return_value=True) as cmp:
            _make_client().verify_signature({"x-line-signature": "x"}, b"{}")
            cmp.assert_called_once()


class TestEventExtraction:
    def test_extracts_text_event(self) -> None:
        body = json.dumps({"events": [make_line_event(text=" สั่งอาหาร ")]}).encode()
        events = _make_client().extract_events(body)
        assert len(events) == 1
        event = events[0]
        assert event.is_text_message
        assert event.text == " สั่งอาหาร "
        assert event.source_user_id == "U1"
        assert event.reply_token == "T1"

    def test_keeps_order(self) -> None:
        payload = {"events": [
            make_line_event(text="a", reply_token="T1"),
            make_line_event(text="b", reply_token="T2"),
        ]}
        events = _make_client().extract_events(payload)
        assert [e.reply_token for e in events] == ["T1", "T2"]

    def test_non_text_message_marked(self) -> None:
        payload = {"events": [make_line_event(message_type="sticker")]}
        (event,) = _make_client().extract_events(payload)
        assert not event.is_text_message

    def test_follow_event_without_message(self) -> None:
        payload = {"events": [{"type": "follow", "replyToken": "T9", "source": {"userId": "U9"}}]}
        (event,) = _make_client().extract_events(payload)
        assert event.type == "follow"
        assert event.message_type is None
        assert not event.is_text_message

    @pytest.mark.parametrize("body", [
        b"not json",
        b"[]",
        b'{"destination": "x"}',
        b'{"events": "nope"}',
        b"\xff\xfe",
    ])
    def test_malformed_payload_yields_no_events(self, body: bytes) -> None:
        assert _make_client().extract_events(body) == []

    def test_malformed_entries_skipped(self) -> None:
        payload = {"events": ["junk", {"no_type": True}, make_line_event(reply_token="T3")]}
        events = _make_client().extract_events(payload)
        assert [e.reply_token for e in events] == ["T3"]


class TestOutboundPayload:
    def test_reply_payload(self) -> None:
        msg = OutboundMessage(MessageKind.REPLY, "T1", "hi")
        assert msg.to_payload() == {
            "replyToken": "T1",
            "messages": [{"type": "text", "text": "hi"}],
        }

    def test_push_payload(self) -> None:
        msg = OutboundMessage(MessageKind.PUSH, "U2", "hi")
        assert msg.to_payload() == {
            "to": "U2",
            "messages": [{"type": "text", "text": "hi"}],
        }


class TestDelivery:
    @pytest.mark.asyncio
    async def test_reply_posts_to_reply_endpoint(self) -> None:
        client = mock_http_client(MagicMock(status_code=200))
        with patch("order_relay.line.client.httpx.AsyncClient", return_value=client) as cls:
            await _make_client().reply("T1", "hello")

        cls.assert_called_once_with(verify=True, timeout=10.0)
        args, kwargs = client.post.call_args
        assert args[0] == "https://api.line.me/v2/bot/message/reply"
        assert kwargs["json"]["replyToken"] == "T1"
        assert kwargs["json"]["messages"][0]["text"] == "hello"
        assert kwargs["headers"]["Authorization"] == "Bearer tok"

    @pytest.mark.asyncio
    async def test_push_posts_to_push_endpoint(self) -> None:
        client = mock_http_client(MagicMock(status_code=200))
        with patch("order_relay.line.client.httpx.AsyncClient", return_value=client):
            await _make_client().push("U2", "hello")

        args, kwargs = client.post.call_args
        assert args[0] == "https://api.line.me/v2/bot/message/push"
        assert kwargs["json"]["to"] == "U2"

    @pytest.mark.asyncio
    async def test_error_status_raises_without_retry(self) -> None:
        resp = MagicMock(status_code=500)
        resp.json.return_value = {"message": "boom"}
        client = mock_http_client(resp)
        with patch("order_relay.line.client.httpx.AsyncClient", return_value=client):
            with pytest.raises(DeliveryError) as exc_info:
                await _make_client().push("U2", "hello")

        assert client.post.call_count == 1
        assert exc_info.value.status_code == 500
        assert exc_info.value.details == {"message": "boom"}

    @pytest.mark.asyncio
    async def test_transport_error_raises(self) -> None:
        client = mock_http_client(side_effect=httpx.ConnectError("down"))
        with patch("order_relay.line.client.httpx.AsyncClient", return_value=client):
            with pytest.raises(DeliveryError):
                await _make_client().reply("T1", "hello")
