"""
Connection Handle Port - one live transport connection.
Implementation: chat_relay/presentation/websocket/connection.py
"""

from abc import ABC, abstractmethod
from typing import Any


class ConnectionHandle(ABC):
    """
    Opaque, process-local reference to one live connection.

    Handles are compared by identity: two handles are the same connection
    only if they are the same object.
    """

    @abstractmethod
    async def send(self, event: str, data: dict[str, Any]) -> None:
        """Push one outbound event. Raises if the transport is gone."""
        ...

    @abstractmethod
    async def close(self, code: int, reason: str = "") -> None: ...
