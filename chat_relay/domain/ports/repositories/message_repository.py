"""
Message Repository Port - append-only message log.
Implementations: chat_relay/infrastructure/persistence/in_memory_message_repository.py
                 chat_relay/infrastructure/cache/redis_message_repository.py
"""

from abc import ABC, abstractmethod

from chat_relay.domain.entities.message import Message
from chat_relay.domain.value_objects.user_id import UserId


class MessageRepository(ABC):
    @abstractmethod
    async def save(self, message: Message) -> None:
        """Append one message. Must be atomic under concurrent writers."""
        ...

    @abstractmethod
    async def get_conversation(
        self, first: UserId, second: UserId, limit: int = 200
    ) -> list[Message]:
        """Messages exchanged between both users in either direction, oldest first."""
        ...
