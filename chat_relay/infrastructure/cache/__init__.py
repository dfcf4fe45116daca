"""
Cache Layer - Redis-backed implementations.
"""

from chat_relay.infrastructure.cache.redis_message_repository import (
    RedisMessageRepository,
)

__all__ = [
    "RedisMessageRepository",
]
