"""
DTOs - Data Transfer Objects

- chat.py   → inbound frames and outbound event payloads for the socket
- user.py   → user and roster payloads for the HTTP API

Note: These are different from domain entities.
DTOs are for wire input/output, entities are for business logic.
"""

from chat_relay.application.dto.chat import (
    InboundEvent,
    InboundFrame,
    MessageDTO,
    OutboundEvent,
    PresenceChangeDTO,
    SendMessagePayload,
    TypingNotificationDTO,
    TypingPayload,
)
from chat_relay.application.dto.user import RosterEntryDTO, UserDTO

__all__ = [
    "InboundEvent",
    "InboundFrame",
    "MessageDTO",
    "OutboundEvent",
    "PresenceChangeDTO",
    "SendMessagePayload",
    "TypingNotificationDTO",
    "TypingPayload",
    "RosterEntryDTO",
    "UserDTO",
]
