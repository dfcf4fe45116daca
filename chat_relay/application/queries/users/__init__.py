"""User-related queries."""

from chat_relay.application.queries.users.get_current_user import (
    GetCurrentUserQuery,
    GetCurrentUserHandler,
)
from chat_relay.application.queries.users.list_users import (
    ListUsersQuery,
    ListUsersHandler,
    RosterEntry,
)

__all__ = [
    "GetCurrentUserQuery",
    "GetCurrentUserHandler",
    "ListUsersQuery",
    "ListUsersHandler",
    "RosterEntry",
]
