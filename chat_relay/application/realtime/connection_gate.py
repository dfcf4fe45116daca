"""
Connection Gate - admission and guaranteed removal of registry entries.

Lifecycle of one connection:
    admit(credential)            -> UserId, or None (refused, nothing recorded)
    async with session(uid, h):  -> registered + presence online
        ... inbound events ...
    (exit, on any path)          -> entry removed + presence offline

Registry mutation always happens before the matching presence broadcast.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from chat_relay.application.realtime.connection_registry import ConnectionRegistry
from chat_relay.application.realtime.routing_engine import RoutingEngine
from chat_relay.domain.ports.connection import ConnectionHandle
from chat_relay.domain.ports.identity import IdentityVerifier
from chat_relay.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)

# Close code sent to a connection replaced by a newer one for the same user
SUPERSEDED_CLOSE_CODE = 4001


class ConnectionGate:
    def __init__(
        self,
        verifier: IdentityVerifier,
        registry: ConnectionRegistry,
        routing_engine: RoutingEngine,
    ):
        self._verifier = verifier
        self._registry = registry
        self._routing_engine = routing_engine

    def admit(self, credential: Optional[str]) -> Optional[UserId]:
        """Resolve the credential to an identity. No side effects on failure."""
        user_id = self._verifier.verify(credential)
        if user_id is None:
            logger.info("[Gate] Connection refused: missing or invalid credential")
        return user_id

    async def open(self, user_id: UserId, handle: ConnectionHandle) -> None:
        """
        Register an admitted connection and announce it.

        An older connection for the same user is replaced, then closed.
        """
        previous = self._registry.put(user_id, handle)
        logger.info(f"[Gate] User {user_id} connected")
        if previous is not None:
            try:
                await previous.close(SUPERSEDED_CLOSE_CODE, "superseded")
            except Exception as e:
                logger.warning(
                    f"[Gate] Could not close superseded connection of {user_id}: {e}"
                )
        await self._routing_engine.broadcast_presence(user_id, True)

    async def terminate(self, user_id: UserId, handle: ConnectionHandle) -> bool:
        """
        Deregister a terminated connection.

        Only announces the user offline if this handle was still the live
        entry; a superseded connection leaves presence untouched.
        """
        if not self._registry.remove(user_id, handle):
            logger.info(f"[Gate] Stale disconnect for user {user_id} ignored")
            return False
        logger.info(f"[Gate] User {user_id} disconnected")
        await self._routing_engine.broadcast_presence(user_id, False)
        return True

    @asynccontextmanager
    async def session(
        self, user_id: UserId, handle: ConnectionHandle
    ) -> AsyncIterator[None]:
        """Keep user_id registered for the lifetime of the with-block."""
        try:
            await self.open(user_id, handle)
            yield
        finally:
            # Runs to completion even if the connection task keeps being cancelled
            await asyncio.shield(self.terminate(user_id, handle))
