"""
Connection Registry - single source of truth for "who is online".

Maps each UserId to at most one live ConnectionHandle. Every operation is a
short critical section that never awaits, so it is atomic with respect to
concurrent connection tasks (and threads).
"""

import logging
import threading
from typing import Optional

from chat_relay.domain.ports.connection import ConnectionHandle
from chat_relay.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    def __init__(self):
        self._entries: dict[UserId, ConnectionHandle] = {}
        self._lock = threading.Lock()

    def put(
        self, user_id: UserId, handle: ConnectionHandle
    ) -> Optional[ConnectionHandle]:
        """
        Insert or replace the entry for user_id.

        Returns:
            The handle that was replaced, or None. The replaced handle is
            not closed here.
        """
        with self._lock:
            previous = self._entries.get(user_id)
            self._entries[user_id] = handle
        if previous is not None and previous is not handle:
            logger.info(f"[Registry] User {user_id} reconnected, entry replaced")
            return previous
        return None

    def remove(self, user_id: UserId, handle: ConnectionHandle) -> bool:
        """
        Remove the entry for user_id only if it still points at handle.

        A stale request from an already superseded connection is a no-op.
        """
        with self._lock:
            if self._entries.get(user_id) is not handle:
                return False
            del self._entries[user_id]
        return True

    def lookup(self, user_id: UserId) -> Optional[ConnectionHandle]:
        with self._lock:
            return self._entries.get(user_id)

    def snapshot(self) -> frozenset[UserId]:
        with self._lock:
            return frozenset(self._entries)

    def handles(self) -> list[ConnectionHandle]:
        """Consistent copy of every live handle, for fan-out."""
        with self._lock:
            return list(self._entries.values())

    def __contains__(self, user_id: UserId) -> bool:
        with self._lock:
            return user_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
