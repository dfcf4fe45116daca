"""
Messages API Router - conversation history.
"""

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Path, Query

from chat_relay.application.dto.chat import MessageDTO
from chat_relay.application.queries.chat import (
    GetChatHistoryHandler,
    GetChatHistoryQuery,
)
from chat_relay.config.settings import Config
from chat_relay.domain.value_objects.user_id import UserId
from chat_relay.presentation.dependencies.auth import AuthUser, get_current_user

router = APIRouter(prefix="/api", tags=["messages"])


@router.get("/messages/{user_id}")
@inject
async def get_messages(
    handler: FromDishka[GetChatHistoryHandler],
    user_id: int = Path(gt=0),
    current_user: AuthUser = Depends(get_current_user),
    limit: int = Query(
        Config.CONVERSATION_MESSAGE_LIMIT,
        gt=0,
        le=Config.CONVERSATION_MESSAGE_LIMIT,
    ),
):
    """
    Messages between the caller and user_id in both directions, oldest first.

    At most CONVERSATION_MESSAGE_LIMIT records, the most recent ones.

    Response: [{"id": ..., "senderId": 1, "receiverId": 2, "text": "hi",
                "timestamp": "2025-01-27T12:00:00Z"}, ...]
    """
    messages = await handler.execute(
        GetChatHistoryQuery(
            user_id=current_user.id,
            other_user_id=UserId(user_id),
            limit=limit,
        )
    )
    return [MessageDTO.from_entity(message).to_wire() for message in messages]
