"""
User Entity - A registered chat party.
"""

from dataclasses import dataclass
from chat_relay.domain.value_objects.user_id import UserId


@dataclass
class User:
    id: UserId
    username: str
    name: str
    password_hash: str

    def __post_init__(self):
        if not self.username:
            raise ValueError("Username cannot be empty")
