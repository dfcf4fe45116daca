"""
Ephemeral routing events. Never persisted.
"""

from dataclasses import dataclass
from chat_relay.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class TypingSignal:
    sender_id: UserId
    receiver_id: UserId
    is_typing: bool


@dataclass(frozen=True)
class PresenceEvent:
    user_id: UserId
    online: bool
