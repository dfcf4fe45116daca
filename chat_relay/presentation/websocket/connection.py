"""
WebSocketConnection - ConnectionHandle backed by a Starlette WebSocket.
"""

import asyncio
from typing import Any, AsyncIterator, Union

from starlette.websockets import WebSocket, WebSocketState

from chat_relay.domain.ports.connection import ConnectionHandle


class WebSocketConnection(ConnectionHandle):
    """
    Wraps one accepted WebSocket.

    Sends are serialised per socket, since deliveries for one connection can
    come from several connection tasks at once.
    """

    def __init__(self, websocket: WebSocket):
        self._websocket = websocket
        self._send_lock = asyncio.Lock()

    async def send(self, event: str, data: dict[str, Any]) -> None:
        async with self._send_lock:
            await self._websocket.send_json({"event": event, "data": data})

    async def close(self, code: int, reason: str = "") -> None:
        async with self._send_lock:
            if self._websocket.application_state == WebSocketState.CONNECTED:
                await self._websocket.close(code=code, reason=reason)

    async def frames(self) -> AsyncIterator[Union[str, bytes]]:
        """
        Inbound frames until the client disconnects.

        Binary frames are passed through undecoded.
        """
        while True:
            message = await self._websocket.receive()
            if message["type"] == "websocket.disconnect":
                return
            if message.get("text") is not None:
                yield message["text"]
            elif message.get("bytes") is not None:
                yield message["bytes"]
