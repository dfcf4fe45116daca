"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain and application logic and caught by
the presentation layer, which maps them to HTTP status codes.
"""

from chat_relay.domain.exceptions.entity_not_found import EntityNotFoundError
from chat_relay.domain.exceptions.authentication_failed import AuthenticationError

__all__ = [
    "EntityNotFoundError",
    "AuthenticationError",
]
