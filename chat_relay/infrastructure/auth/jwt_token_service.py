"""
JWT session tokens.

Tokens are HS256 JWTs carrying the user's id and username. The same
service issues tokens on login and verifies them on every HTTP request
and WebSocket handshake.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from chat_relay.domain.entities.user import User
from chat_relay.domain.ports.identity import IdentityVerifier, TokenIssuer
from chat_relay.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class JwtTokenService(IdentityVerifier, TokenIssuer):
    def __init__(
        self,
        secret: str,
        issuer: str,
        audience: str,
        expires_in: timedelta = timedelta(days=7),
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._issuer = issuer
        self._audience = audience
        self._expires_in = expires_in

    def issue(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user.id.value),
            "userId": user.id.value,
            "username": user.username,
            "iat": now,
            "exp": now + self._expires_in,
            "iss": self._issuer,
            "aud": self._audience,
        }
        return jwt.encode(payload, self._secret, algorithm="HS256")

    def verify(self, credential: Optional[str]) -> Optional[UserId]:
        if not credential:
            return None
        try:
            claims = jwt.decode(
                credential,
                self._secret,
                algorithms=["HS256"],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["exp", "iat", "aud", "iss"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("[Auth] Token has expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.info(f"[Auth] Invalid token: {e}")
            return None

        try:
            return UserId(claims.get("userId"))
        except ValueError:
            logger.info("[Auth] Token is missing a valid userId claim")
            return None
