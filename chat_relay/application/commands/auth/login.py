"""
Login Command.

Checks a username/password pair against the user store and issues a
session token for the matching user.
"""

import logging
from dataclasses import dataclass

from chat_relay.application.common.interfaces import Command, CommandHandler
from chat_relay.domain.entities.user import User
from chat_relay.domain.exceptions import AuthenticationError
from chat_relay.domain.ports.identity import PasswordHasher, TokenIssuer
from chat_relay.domain.ports.repositories import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    user: User
    token: str


@dataclass(frozen=True)
class LoginCommand(Command[LoginResult]):
    username: str
    password: str


class LoginHandler(CommandHandler[LoginResult]):
    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ):
        self._user_repository = user_repository
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer

    async def execute(self, command: LoginCommand) -> LoginResult:
        """
        Raises:
            AuthenticationError: unknown username or wrong password
        """
        logger.info(f"[Login] Attempt for {command.username}")
        user = await self._user_repository.get_by_username(command.username)
        if user is None or not self._password_hasher.verify(
            command.password, user.password_hash
        ):
            raise AuthenticationError("Invalid credentials")

        logger.info(f"[Login] Successful for {command.username}")
        return LoginResult(user=user, token=self._token_issuer.issue(user))
