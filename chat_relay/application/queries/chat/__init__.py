"""Chat-related queries."""

from chat_relay.application.queries.chat.get_chat_history import (
    GetChatHistoryQuery,
    GetChatHistoryHandler,
)

__all__ = [
    "GetChatHistoryQuery",
    "GetChatHistoryHandler",
]
