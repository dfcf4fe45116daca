"""
PORTS - Interfaces that infrastructure implements

Subfolders:
- repositories/  → Data persistence interfaces (message log, users)
- (root files)   → Identity verification and live connection handles
"""

from chat_relay.domain.ports.connection import ConnectionHandle
from chat_relay.domain.ports.identity import (
    IdentityVerifier,
    PasswordHasher,
    TokenIssuer,
)

__all__ = [
    "ConnectionHandle",
    "IdentityVerifier",
    "PasswordHasher",
    "TokenIssuer",
]
