"""
Message Entity - A private message from one user to another.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from chat_relay.domain.value_objects.message_id import MessageId
from chat_relay.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class Message:
    id: MessageId
    sender_id: UserId
    receiver_id: UserId
    text: str
    created_at: datetime

    def __post_init__(self):
        if not isinstance(self.text, str):
            raise ValueError(f"Message text must be a string, got {type(self.text)}")

    @classmethod
    def create(
        cls,
        id: MessageId,
        sender_id: UserId,
        receiver_id: UserId,
        text: str,
    ) -> Message:
        """Factory method to create a new Message stamped with the current time."""
        return cls(
            id=id,
            sender_id=sender_id,
            receiver_id=receiver_id,
            text=text,
            created_at=datetime.now(timezone.utc),
        )

    def involves(self, first: UserId, second: UserId) -> bool:
        """True when this message belongs to the conversation between both users."""
        return (self.sender_id == first and self.receiver_id == second) or (
            self.sender_id == second and self.receiver_id == first
        )
