"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port is an abstract base class; the infrastructure layer
provides implementations.
"""

from chat_relay.domain.ports.repositories.message_repository import MessageRepository
from chat_relay.domain.ports.repositories.user_repository import UserRepository

__all__ = [
    "MessageRepository",
    "UserRepository",
]
