"""
Chat WebSocket endpoint.

Protocol (JSON text frames):
    client → server  {"event": "send_message", "data": {"receiverId": 2, "text": "hi"}}
                     {"event": "typing", "data": {"receiverId": 2, "isTyping": true}}
    server → client  new_message, message_sent, user_typing, user_status, error

Flow:
  handshake → ConnectionGate.admit (refused with 1008 before accept)
            → accept → ConnectionGate.session (register + presence online)
            → frame loop → RoutingEngine
            → session exit on any path (deregister + presence offline)
"""

import logging
import uuid
from typing import Union

from fastapi import APIRouter, WebSocket, status
from pydantic import ValidationError

from chat_relay.application.dto.chat import (
    InboundEvent,
    InboundFrame,
    OutboundEvent,
    SendMessagePayload,
    TypingPayload,
)
from chat_relay.application.realtime import ConnectionGate, RoutingEngine
from chat_relay.config.logging_config import correlation_id_var
from chat_relay.domain.value_objects.user_id import UserId
from chat_relay.presentation.dependencies.auth import extract_credential
from chat_relay.presentation.websocket.connection import WebSocketConnection

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


async def dispatch_frame(
    routing_engine: RoutingEngine,
    connection: WebSocketConnection,
    sender_id: UserId,
    raw: Union[str, bytes],
) -> None:
    """
    Parse one inbound frame and hand it to the routing engine.

    Raises:
        ValidationError: malformed JSON, unknown event or bad payload
        UnicodeDecodeError: binary frame that is not UTF-8
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    frame = InboundFrame.model_validate_json(raw)
    if frame.event is InboundEvent.SEND_MESSAGE:
        payload = SendMessagePayload.model_validate(frame.data)
        await routing_engine.route_message(
            sender_id, UserId(payload.receiver_id), payload.text, reply_to=connection
        )
    elif frame.event is InboundEvent.TYPING:
        payload = TypingPayload.model_validate(frame.data)
        await routing_engine.route_typing(
            sender_id, UserId(payload.receiver_id), payload.is_typing
        )


async def _reply_error(connection: WebSocketConnection, message: str) -> None:
    try:
        await connection.send(OutboundEvent.ERROR.value, {"error": message})
    except Exception as e:
        logger.debug(f"[Socket] Could not send error frame: {e}")


@router.websocket("/ws")
async def chat_socket(websocket: WebSocket):
    container = websocket.app.state.dishka_container
    gate = await container.get(ConnectionGate)
    routing_engine = await container.get(RoutingEngine)

    user_id = gate.admit(extract_credential(websocket))
    if user_id is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    correlation_id_var.set(f"ws-{user_id}-{uuid.uuid4().hex[:8]}")
    await websocket.accept()
    connection = WebSocketConnection(websocket)

    async with gate.session(user_id, connection):
        async for raw in connection.frames():
            try:
                await dispatch_frame(routing_engine, connection, user_id, raw)
            except ValidationError as e:
                logger.info(f"[Socket] Rejected frame from {user_id}: {e.errors()}")
                await _reply_error(connection, "Invalid event")
            except UnicodeDecodeError:
                logger.info(f"[Socket] Rejected non-UTF-8 binary frame from {user_id}")
                await _reply_error(connection, "Invalid event")
            except Exception:
                logger.exception(f"[Socket] Error handling frame from {user_id}")
                await _reply_error(connection, "Internal error")
