"""
Realtime core - who is online and where events go.
"""

from chat_relay.application.realtime.connection_registry import ConnectionRegistry
from chat_relay.application.realtime.routing_engine import RoutingEngine
from chat_relay.application.realtime.connection_gate import (
    ConnectionGate,
    SUPERSEDED_CLOSE_CODE,
)

__all__ = [
    "ConnectionRegistry",
    "RoutingEngine",
    "ConnectionGate",
    "SUPERSEDED_CLOSE_CODE",
]
