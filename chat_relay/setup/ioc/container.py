"""
Dishka DI Container Setup.

- Registers repositories, the realtime core and CQRS handlers
- Maps abstract ports to concrete implementations
- Scope.APP = one instance per application (shared registry and log)
- Scope.REQUEST = new instance per HTTP request (handlers)

Flow:
  Container → provides → ConnectionGate → uses → ConnectionRegistry
                                            ↓
                                      RoutingEngine → MessageRepository
"""

import logging
from datetime import timedelta
from typing import AsyncIterable

import redis.asyncio as redis
from dishka import AsyncContainer, Provider, Scope, make_async_container, provide

from chat_relay.application.commands.auth import LoginHandler
from chat_relay.application.queries.chat import GetChatHistoryHandler
from chat_relay.application.queries.users import (
    GetCurrentUserHandler,
    ListUsersHandler,
)
from chat_relay.application.realtime import (
    ConnectionGate,
    ConnectionRegistry,
    RoutingEngine,
)
from chat_relay.config.settings import Config
from chat_relay.domain.ports.identity import (
    IdentityVerifier,
    PasswordHasher,
    TokenIssuer,
)
from chat_relay.domain.ports.repositories import MessageRepository, UserRepository
from chat_relay.domain.value_objects.message_id import MessageIdSequence
from chat_relay.infrastructure.auth import JwtTokenService, Pbkdf2PasswordHasher
from chat_relay.infrastructure.cache import RedisMessageRepository
from chat_relay.infrastructure.persistence import (
    InMemoryMessageRepository,
    InMemoryUserRepository,
    parse_demo_users,
)

logger = logging.getLogger(__name__)


class AppProvider(Provider):
    """
    Application dependency provider.

    Registers all dependencies and their implementations.
    """

    # ==================== AUTH ====================

    @provide(scope=Scope.APP)
    def get_token_service(self) -> JwtTokenService:
        return JwtTokenService(
            secret=Config.JWT_SECRET,
            issuer=Config.JWT_ISSUER,
            audience=Config.JWT_AUDIENCE,
            expires_in=timedelta(days=Config.JWT_EXPIRES_DAYS),
        )

    @provide(scope=Scope.APP)
    def get_identity_verifier(self, token_service: JwtTokenService) -> IdentityVerifier:
        return token_service

    @provide(scope=Scope.APP)
    def get_token_issuer(self, token_service: JwtTokenService) -> TokenIssuer:
        return token_service

    @provide(scope=Scope.APP)
    def get_password_hasher(self) -> PasswordHasher:
        return Pbkdf2PasswordHasher(iterations=Config.PASSWORD_HASH_ITERATIONS)

    # ==================== REPOSITORIES ====================

    @provide(scope=Scope.APP)
    def get_user_repository(self, password_hasher: PasswordHasher) -> UserRepository:
        return InMemoryUserRepository(
            parse_demo_users(Config.DEMO_USERS, password_hasher)
        )

    @provide(scope=Scope.APP)
    async def get_message_repository(self) -> AsyncIterable[MessageRepository]:
        """
        Provide the message log selected by MESSAGE_LOG_BACKEND.

        - "redis" connects (and pings) at first use, closes on container shutdown
        - anything else keeps the log in process memory
        """
        if Config.MESSAGE_LOG_BACKEND == "redis":
            client = redis.from_url(
                Config.REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=5.0,
            )
            await client.ping()
            logger.info(f"[Container] Message log in Redis at {Config.REDIS_URL}")
            yield RedisMessageRepository(client, key_prefix=Config.REDIS_KEY_PREFIX)
            await client.aclose()
            logger.info("[Container] Redis connection closed")
        else:
            logger.info("[Container] Using in-memory message log")
            yield InMemoryMessageRepository()

    # ==================== REALTIME CORE ====================

    @provide(scope=Scope.APP)
    def get_connection_registry(self) -> ConnectionRegistry:
        return ConnectionRegistry()

    @provide(scope=Scope.APP)
    def get_message_id_sequence(self) -> MessageIdSequence:
        return MessageIdSequence()

    @provide(scope=Scope.APP)
    def get_routing_engine(
        self,
        registry: ConnectionRegistry,
        message_repository: MessageRepository,
        id_sequence: MessageIdSequence,
    ) -> RoutingEngine:
        return RoutingEngine(
            registry=registry,
            message_repository=message_repository,
            id_sequence=id_sequence,
        )

    @provide(scope=Scope.APP)
    def get_connection_gate(
        self,
        verifier: IdentityVerifier,
        registry: ConnectionRegistry,
        routing_engine: RoutingEngine,
    ) -> ConnectionGate:
        return ConnectionGate(
            verifier=verifier,
            registry=registry,
            routing_engine=routing_engine,
        )

    # ==================== HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_login_handler(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ) -> LoginHandler:
        return LoginHandler(user_repository, password_hasher, token_issuer)

    @provide(scope=Scope.REQUEST)
    def get_current_user_handler(
        self, user_repository: UserRepository
    ) -> GetCurrentUserHandler:
        return GetCurrentUserHandler(user_repository)

    @provide(scope=Scope.REQUEST)
    def get_list_users_handler(
        self, user_repository: UserRepository, registry: ConnectionRegistry
    ) -> ListUsersHandler:
        return ListUsersHandler(user_repository, registry)

    @provide(scope=Scope.REQUEST)
    def get_chat_history_handler(
        self, message_repository: MessageRepository
    ) -> GetChatHistoryHandler:
        return GetChatHistoryHandler(message_repository)


def create_container() -> AsyncContainer:
    """
    Create and configure the DI container.

    Call once per application instance; each container owns its own
    registry and message log.
    """
    return make_async_container(AppProvider())
