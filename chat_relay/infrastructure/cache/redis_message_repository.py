"""
Redis Message Repository - message log kept in Redis lists.

Redis Data Structure (LIST):
- Key pattern: "{prefix}:conv:{low user id}:{high user id}:msgs"
- Each element: JSON string for ONE message
- Order: Position 0 = oldest, appended with RPUSH
- One RPUSH per message, so every append is atomic

Both directions of a conversation share one key, so history reads are a
single LRANGE.
"""

import json
import logging
from datetime import datetime

from redis.asyncio import Redis

from chat_relay.domain.entities.message import Message
from chat_relay.domain.ports.repositories.message_repository import MessageRepository
from chat_relay.domain.value_objects.message_id import MessageId
from chat_relay.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class RedisMessageRepository(MessageRepository):
    def __init__(self, redis: Redis, key_prefix: str = "chat"):
        self._redis = redis
        self._key_prefix = key_prefix

    def _conversation_key(self, first: UserId, second: UserId) -> str:
        low, high = sorted((first.value, second.value))
        return f"{self._key_prefix}:conv:{low}:{high}:msgs"

    def _serialize(self, message: Message) -> str:
        return json.dumps(
            {
                "id": message.id.value,
                "sender_id": message.sender_id.value,
                "receiver_id": message.receiver_id.value,
                "text": message.text,
                "created_at": message.created_at.isoformat(),
            }
        )

    def _deserialize(self, raw: str) -> Message:
        data = json.loads(raw)
        return Message(
            id=MessageId(data["id"]),
            sender_id=UserId(data["sender_id"]),
            receiver_id=UserId(data["receiver_id"]),
            text=data["text"],
            created_at=datetime.fromisoformat(data["created_at"]),
        )

    async def save(self, message: Message) -> None:
        key = self._conversation_key(message.sender_id, message.receiver_id)
        await self._redis.rpush(key, self._serialize(message))

    async def get_conversation(
        self, first: UserId, second: UserId, limit: int = 200
    ) -> list[Message]:
        if limit <= 0:
            return []
        key = self._conversation_key(first, second)
        raw_messages = await self._redis.lrange(key, -limit, -1)
        messages = []
        for raw in raw_messages:
            try:
                messages.append(self._deserialize(raw))
            except (ValueError, KeyError) as e:
                logger.warning(f"[Redis] Skipping unreadable message in {key}: {e}")
        return messages
