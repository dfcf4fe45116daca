"""
Users API Router - the roster for the chat list.
"""

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends

from chat_relay.application.dto.user import RosterEntryDTO
from chat_relay.application.queries.users import ListUsersHandler, ListUsersQuery
from chat_relay.presentation.dependencies.auth import AuthUser, get_current_user

router = APIRouter(prefix="/api", tags=["users"])


@router.get("/users", response_model=list[RosterEntryDTO])
@inject
async def list_users(
    handler: FromDishka[ListUsersHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """
    All users except the caller, with their online state.

    Response: [{"id": 2, "username": "user2", "name": "...", "online": true}, ...]
    """
    entries = await handler.execute(ListUsersQuery(user_id=current_user.id))
    return [
        RosterEntryDTO(
            id=entry.user.id.value,
            username=entry.user.username,
            name=entry.user.name,
            online=entry.online,
        )
        for entry in entries
    ]
