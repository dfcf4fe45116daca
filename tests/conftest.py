import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")
os.environ.setdefault("MESSAGE_LOG_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient

from chat_relay.application.realtime import (
    ConnectionGate,
    ConnectionRegistry,
    RoutingEngine,
)
from chat_relay.config.settings import Config
from chat_relay.domain.entities.user import User
from chat_relay.domain.ports.connection import ConnectionHandle
from chat_relay.domain.ports.identity import IdentityVerifier
from chat_relay.domain.value_objects.message_id import MessageIdSequence
from chat_relay.domain.value_objects.user_id import UserId
from chat_relay.fastapi_app import create_fastapi_app
from chat_relay.infrastructure.auth import JwtTokenService
from chat_relay.infrastructure.persistence import InMemoryMessageRepository


class RecordingConnection(ConnectionHandle):
    """Connection handle that keeps every event pushed to it."""

    def __init__(self, name: str = "", fail: bool = False):
        self.name = name
        self.fail = fail
        self.events: list[tuple[str, dict]] = []
        self.closed_with: tuple[int, str] | None = None

    async def send(self, event, data):
        if self.fail:
            raise ConnectionError(f"{self.name} is gone")
        self.events.append((event, data))

    async def close(self, code, reason=""):
        self.closed_with = (code, reason)

    def of(self, event: str) -> list[dict]:
        return [data for name, data in self.events if name == event]

    def __repr__(self):
        return f"RecordingConnection({self.name!r})"


class StaticVerifier(IdentityVerifier):
    """Accepts "token-<id>" credentials."""

    def verify(self, credential):
        if not credential or not credential.startswith("token-"):
            return None
        return UserId(int(credential.removeprefix("token-")))


@pytest.fixture()
def registry():
    return ConnectionRegistry()


@pytest.fixture()
def message_repository():
    return InMemoryMessageRepository()


@pytest.fixture()
def routing_engine(registry, message_repository):
    return RoutingEngine(registry, message_repository, MessageIdSequence())


@pytest.fixture()
def gate(registry, routing_engine):
    return ConnectionGate(StaticVerifier(), registry, routing_engine)


@pytest.fixture()
def token_service():
    return JwtTokenService(
        secret=Config.JWT_SECRET,
        issuer=Config.JWT_ISSUER,
        audience=Config.JWT_AUDIENCE,
    )


@pytest.fixture()
def token_for(token_service):
    def _token_for(user_id: int) -> str:
        user = User(
            id=UserId(user_id),
            username=f"user{user_id}",
            name=f"Demo User {user_id}",
            password_hash="unused",
        )
        return token_service.issue(user)

    return _token_for


@pytest.fixture()
def bearer(token_for):
    """Authorization headers for a user id."""

    def _bearer(user_id: int) -> dict:
        return {"Authorization": f"Bearer {token_for(user_id)}"}

    return _bearer


@pytest.fixture()
def app():
    """Create and configure a new FastAPI app instance for each test."""
    return create_fastapi_app()


@pytest.fixture()
def client(app):
    """A test client sharing one event loop across requests and sockets."""
    with TestClient(app) as test_client:
        yield test_client
