"""
User Repository Port - Interface for user lookup.
Implementation: chat_relay/infrastructure/persistence/in_memory_user_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional
from chat_relay.domain.entities.user import User
from chat_relay.domain.value_objects.user_id import UserId


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[User]: ...

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def list_all(self) -> list[User]: ...
