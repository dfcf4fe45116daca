"""
Identity Ports - session tokens and password hashes.
Implementations: chat_relay/infrastructure/auth/
"""

from abc import ABC, abstractmethod
from typing import Optional

from chat_relay.domain.entities.user import User
from chat_relay.domain.value_objects.user_id import UserId


class IdentityVerifier(ABC):
    @abstractmethod
    def verify(self, credential: Optional[str]) -> Optional[UserId]:
        """Return the identity behind a credential, or None if it is invalid."""
        ...


class TokenIssuer(ABC):
    @abstractmethod
    def issue(self, user: User) -> str: ...


class PasswordHasher(ABC):
    @abstractmethod
    def hash(self, password: str) -> str: ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool: ...
