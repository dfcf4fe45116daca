"""
GetChatHistory Query - messages between the caller and one other user.

Used by the client to load a conversation when opening a chat window.
Messages in both directions are included, oldest first.
"""

from dataclasses import dataclass

from chat_relay.application.common.interfaces import Query, QueryHandler
from chat_relay.domain.entities.message import Message
from chat_relay.domain.ports.repositories import MessageRepository
from chat_relay.domain.value_objects.user_id import UserId
from chat_relay.config.settings import Config


@dataclass(frozen=True)
class GetChatHistoryQuery(Query[list[Message]]):
    user_id: UserId
    other_user_id: UserId
    limit: int = Config.CONVERSATION_MESSAGE_LIMIT


class GetChatHistoryHandler(QueryHandler[list[Message]]):
    def __init__(self, message_repository: MessageRepository):
        self._message_repository = message_repository

    async def execute(self, query: GetChatHistoryQuery) -> list[Message]:
        return await self._message_repository.get_conversation(
            query.user_id, query.other_user_id, limit=query.limit
        )
