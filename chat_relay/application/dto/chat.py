"""Chat DTOs for the WebSocket protocol.

Every frame is JSON text of the form {"event": <name>, "data": {...}}.
Field names on the wire are camelCase.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from chat_relay.domain.entities.events import PresenceEvent, TypingSignal
from chat_relay.domain.entities.message import Message


class InboundEvent(str, Enum):
    SEND_MESSAGE = "send_message"
    TYPING = "typing"


class OutboundEvent(str, Enum):
    NEW_MESSAGE = "new_message"
    MESSAGE_SENT = "message_sent"
    USER_TYPING = "user_typing"
    USER_STATUS = "user_status"
    ERROR = "error"


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class InboundFrame(BaseModel):
    event: InboundEvent
    data: dict[str, Any] = Field(default_factory=dict)


class SendMessagePayload(WireModel):
    receiver_id: int = Field(gt=0)
    text: str = Field(min_length=1)


class TypingPayload(WireModel):
    receiver_id: int = Field(gt=0)
    is_typing: bool


class MessageDTO(WireModel):
    """Full message event, as pushed to both parties and returned by history."""

    id: int
    sender_id: int
    receiver_id: int
    text: str
    timestamp: datetime

    @classmethod
    def from_entity(cls, message: Message) -> MessageDTO:
        return cls(
            id=message.id.value,
            sender_id=message.sender_id.value,
            receiver_id=message.receiver_id.value,
            text=message.text,
            timestamp=message.created_at,
        )


class TypingNotificationDTO(WireModel):
    user_id: int
    is_typing: bool

    @classmethod
    def from_signal(cls, signal: TypingSignal) -> TypingNotificationDTO:
        return cls(user_id=signal.sender_id.value, is_typing=signal.is_typing)


class PresenceChangeDTO(WireModel):
    user_id: int
    online: bool

    @classmethod
    def from_event(cls, event: PresenceEvent) -> PresenceChangeDTO:
        return cls(user_id=event.user_id.value, online=event.online)
