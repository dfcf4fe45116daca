"""Get Current User Query."""

from dataclasses import dataclass

from chat_relay.application.common.interfaces import Query, QueryHandler
from chat_relay.domain.entities.user import User
from chat_relay.domain.exceptions import EntityNotFoundError
from chat_relay.domain.ports.repositories import UserRepository
from chat_relay.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetCurrentUserQuery(Query[User]):
    user_id: UserId


class GetCurrentUserHandler(QueryHandler[User]):
    def __init__(self, user_repository: UserRepository):
        self._user_repository = user_repository

    async def execute(self, query: GetCurrentUserQuery) -> User:
        user = await self._user_repository.get_by_id(query.user_id)
        if user is None:
            raise EntityNotFoundError("User not found")
        return user
