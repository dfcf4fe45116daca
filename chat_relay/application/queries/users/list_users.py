"""
List Users Query - the roster shown in the chat list.

Every known user except the caller, each flagged online when the
connection registry currently holds an entry for them.
"""

from dataclasses import dataclass

from chat_relay.application.common.interfaces import Query, QueryHandler
from chat_relay.application.realtime.connection_registry import ConnectionRegistry
from chat_relay.domain.entities.user import User
from chat_relay.domain.ports.repositories import UserRepository
from chat_relay.domain.value_objects.user_id import UserId


@dataclass
class RosterEntry:
    user: User
    online: bool


@dataclass(frozen=True)
class ListUsersQuery(Query[list[RosterEntry]]):
    user_id: UserId


class ListUsersHandler(QueryHandler[list[RosterEntry]]):
    def __init__(self, user_repository: UserRepository, registry: ConnectionRegistry):
        self._user_repository = user_repository
        self._registry = registry

    async def execute(self, query: ListUsersQuery) -> list[RosterEntry]:
        online = self._registry.snapshot()
        users = await self._user_repository.list_all()
        return [
            RosterEntry(user=user, online=user.id in online)
            for user in users
            if user.id != query.user_id
        ]
