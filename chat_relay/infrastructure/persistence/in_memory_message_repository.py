"""
In-memory message log.

Append-only list guarded by a lock; reads work on a copy, so no reader
ever sees a partially appended record. Contents are lost on restart.
"""

import threading

from chat_relay.domain.entities.message import Message
from chat_relay.domain.ports.repositories.message_repository import MessageRepository
from chat_relay.domain.value_objects.user_id import UserId


class InMemoryMessageRepository(MessageRepository):
    def __init__(self):
        self._messages: list[Message] = []
        self._lock = threading.Lock()

    async def save(self, message: Message) -> None:
        with self._lock:
            self._messages.append(message)

    async def get_conversation(
        self, first: UserId, second: UserId, limit: int = 200
    ) -> list[Message]:
        with self._lock:
            messages = list(self._messages)
        conversation = [m for m in messages if m.involves(first, second)]
        return conversation[-limit:] if limit > 0 else []

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)
