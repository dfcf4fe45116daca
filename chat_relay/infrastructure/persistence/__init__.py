"""
Persistence Layer - in-process implementations of the repository ports.
"""

from chat_relay.infrastructure.persistence.in_memory_message_repository import (
    InMemoryMessageRepository,
)
from chat_relay.infrastructure.persistence.in_memory_user_repository import (
    InMemoryUserRepository,
    parse_demo_users,
)

__all__ = [
    "InMemoryMessageRepository",
    "InMemoryUserRepository",
    "parse_demo_users",
]
