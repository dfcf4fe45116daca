"""
VALUE OBJECTS - Immutable domain types

Each value object is a frozen dataclass that validates itself on creation.
"""

from chat_relay.domain.value_objects.user_id import UserId
from chat_relay.domain.value_objects.message_id import MessageId, MessageIdSequence

__all__ = [
    "UserId",
    "MessageId",
    "MessageIdSequence",
]
