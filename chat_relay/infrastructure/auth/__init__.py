"""Authentication adapters."""

from chat_relay.infrastructure.auth.jwt_token_service import JwtTokenService
from chat_relay.infrastructure.auth.password_hasher import Pbkdf2PasswordHasher

__all__ = [
    "JwtTokenService",
    "Pbkdf2PasswordHasher",
]
