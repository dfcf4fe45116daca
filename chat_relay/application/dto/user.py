"""User DTOs for API request/response."""

from __future__ import annotations

from pydantic import BaseModel

from chat_relay.domain.entities.user import User


class UserDTO(BaseModel):
    id: int
    username: str
    name: str

    @classmethod
    def from_entity(cls, user: User) -> UserDTO:
        return cls(id=user.id.value, username=user.username, name=user.name)


class RosterEntryDTO(UserDTO):
    online: bool = False
