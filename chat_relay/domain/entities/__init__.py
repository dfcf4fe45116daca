"""
ENTITIES - Business objects and routing events

Pure Python dataclasses (no ORM, no Pydantic).
"""

from chat_relay.domain.entities.message import Message
from chat_relay.domain.entities.user import User
from chat_relay.domain.entities.events import PresenceEvent, TypingSignal

__all__ = [
    "Message",
    "User",
    "PresenceEvent",
    "TypingSignal",
]
