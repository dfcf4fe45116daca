"""
Routing Engine - turns one inbound event plus registry state into zero, one
or many outbound deliveries.

The engine only reads the registry. Delivery is fire-and-forget and
at-most-once: an offline receiver means the event is dropped, and a failing
handle never stops delivery to anyone else.
"""

import asyncio
import logging
from typing import Any, Optional

from chat_relay.application.dto.chat import (
    MessageDTO,
    OutboundEvent,
    PresenceChangeDTO,
    TypingNotificationDTO,
)
from chat_relay.application.realtime.connection_registry import ConnectionRegistry
from chat_relay.domain.entities.events import PresenceEvent, TypingSignal
from chat_relay.domain.entities.message import Message
from chat_relay.domain.ports.connection import ConnectionHandle
from chat_relay.domain.ports.repositories.message_repository import MessageRepository
from chat_relay.domain.value_objects.message_id import MessageIdSequence
from chat_relay.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class RoutingEngine:
    def __init__(
        self,
        registry: ConnectionRegistry,
        message_repository: MessageRepository,
        id_sequence: MessageIdSequence,
    ):
        self._registry = registry
        self._message_repository = message_repository
        self._id_sequence = id_sequence

    async def route_message(
        self,
        sender_id: UserId,
        receiver_id: UserId,
        text: str,
        reply_to: Optional[ConnectionHandle] = None,
    ) -> Message:
        """
        Log a private message and deliver it.

        Steps:
        1. Build the Message with a fresh id and the current timestamp
        2. Append it to the message log, whether or not the receiver is online
        3. Push new_message to the receiver's connection, if any
        4. Push message_sent to reply_to, the connection the frame came in on.
           Without one, the sender's registered connection is used.

        Returns:
            The logged Message
        """
        message = Message.create(
            id=self._id_sequence.next_id(),
            sender_id=sender_id,
            receiver_id=receiver_id,
            text=text,
        )
        await self._message_repository.save(message)
        logger.info(
            f"[Routing] Message {message.id} from {sender_id} to {receiver_id}"
        )

        payload = MessageDTO.from_entity(message).to_wire()

        receiver = self._registry.lookup(receiver_id)
        if receiver is not None:
            await self._deliver(receiver, OutboundEvent.NEW_MESSAGE, payload)
        else:
            logger.debug(f"[Routing] User {receiver_id} offline, delivery dropped")

        sender = reply_to if reply_to is not None else self._registry.lookup(sender_id)
        if sender is not None:
            await self._deliver(sender, OutboundEvent.MESSAGE_SENT, payload)

        return message

    async def route_typing(
        self, sender_id: UserId, receiver_id: UserId, is_typing: bool
    ) -> bool:
        """Forward a typing signal. Returns False when the receiver is offline."""
        signal = TypingSignal(
            sender_id=sender_id, receiver_id=receiver_id, is_typing=is_typing
        )
        receiver = self._registry.lookup(signal.receiver_id)
        if receiver is None:
            return False
        return await self._deliver(
            receiver,
            OutboundEvent.USER_TYPING,
            TypingNotificationDTO.from_signal(signal).to_wire(),
        )

    async def broadcast_presence(self, user_id: UserId, online: bool) -> int:
        """
        Push a presence change to every registered connection.

        Returns:
            Number of connections that accepted the event
        """
        event = PresenceEvent(user_id=user_id, online=online)
        payload = PresenceChangeDTO.from_event(event).to_wire()
        handles = self._registry.handles()
        results = await asyncio.gather(
            *(
                self._deliver(handle, OutboundEvent.USER_STATUS, payload)
                for handle in handles
            )
        )
        logger.info(
            f"[Routing] Presence {user_id} online={online} "
            f"delivered to {sum(results)}/{len(handles)} connections"
        )
        return sum(results)

    async def _deliver(
        self, handle: ConnectionHandle, event: OutboundEvent, data: dict[str, Any]
    ) -> bool:
        try:
            await handle.send(event.value, data)
            return True
        except Exception as e:
            logger.warning(f"[Routing] Failed to deliver {event.value}: {e}")
            return False
