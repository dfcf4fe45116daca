"""Authentication commands."""

from .login import LoginCommand, LoginHandler, LoginResult

__all__ = [
    "LoginCommand",
    "LoginHandler",
    "LoginResult",
]
