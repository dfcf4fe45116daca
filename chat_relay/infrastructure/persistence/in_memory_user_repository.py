"""
In-memory user store seeded with demo accounts.
"""

import logging
from typing import Iterable, Optional

from chat_relay.domain.entities.user import User
from chat_relay.domain.ports.identity import PasswordHasher
from chat_relay.domain.ports.repositories.user_repository import UserRepository
from chat_relay.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


def parse_demo_users(
    entries: Iterable[str], password_hasher: PasswordHasher
) -> list[User]:
    """
    Build users from "id:username:password:Display Name" strings.

    The display name may itself contain colons. Blank entries are skipped.
    """
    users = []
    for entry in entries:
        entry = entry.strip()
        if not entry:
            continue
        parts = entry.split(":", 3)
        if len(parts) != 4:
            raise ValueError(f"Malformed demo user entry: {entry!r}")
        user_id, username, password, name = parts
        users.append(
            User(
                id=UserId(int(user_id)),
                username=username,
                name=name,
                password_hash=password_hasher.hash(password),
            )
        )
    return users


class InMemoryUserRepository(UserRepository):
    def __init__(self, users: Iterable[User] = ()):
        self._by_id: dict[UserId, User] = {}
        for user in users:
            if user.id in self._by_id:
                raise ValueError(f"Duplicate user id: {user.id}")
            self._by_id[user.id] = user
        logger.info(f"[Users] Loaded {len(self._by_id)} users")

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        return self._by_id.get(user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        return next(
            (user for user in self._by_id.values() if user.username == username),
            None,
        )

    async def list_all(self) -> list[User]:
        return sorted(self._by_id.values(), key=lambda user: user.id.value)
