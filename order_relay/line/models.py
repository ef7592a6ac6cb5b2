"""Data models for the LINE webhook and delivery pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MessageKind(str, Enum):
    REPLY = "reply"
    PUSH = "push"


@dataclass(frozen=True)
class InboundEvent:
    """One normalized element of a webhook delivery's ``events`` list."""

    type: str  # "message", "follow", "postback", ...
    message_type: str | None
    text: str
    source_user_id: str
    reply_token: str

    @property
    def is_text_message(self) -> bool:
        return self.type == "message" and self.message_type == "text"


@dataclass(frozen=True)
class OutboundMessage:
    """A single text message bound for the LINE Messaging API."""

    kind: MessageKind
    target: str  # reply token for REPLY, user id for PUSH
    text: str

    def to_payload(self) -> dict[str, object]:
        messages = [{"type": "text", "text": self.text}]
        if self.kind is MessageKind.REPLY:
            return {"replyToken": self.target, "messages": messages}
        return {"to": self.target, "messages": messages}
