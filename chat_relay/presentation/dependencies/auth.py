"""
Authentication Dependency for FastAPI.

- Reads the session token from the auth cookie, falling back to an
  Authorization: Bearer header
- Verifies it with the application's IdentityVerifier
- Raises HTTPException 401 if unauthorized
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, Request, status
from starlette.requests import HTTPConnection

from chat_relay.config.settings import Config
from chat_relay.domain.ports.identity import IdentityVerifier
from chat_relay.domain.value_objects.user_id import UserId


@dataclass
class AuthUser:
    id: UserId


def extract_credential(connection: HTTPConnection) -> Optional[str]:
    """Session token carried by an HTTP request or WebSocket handshake."""
    token = connection.cookies.get(Config.AUTH_COOKIE_NAME)
    if token:
        return token

    auth_header = connection.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip() or None
    return None


async def get_current_user(request: Request) -> AuthUser:
    """
    Extract and validate user from the session token.

    Raises:
        HTTPException 401 if the token is missing, invalid or expired
    """
    token = extract_credential(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    verifier = await request.app.state.dishka_container.get(IdentityVerifier)
    user_id = verifier.verify(token)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )

    return AuthUser(id=user_id)
