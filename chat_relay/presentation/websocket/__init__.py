"""
WebSocket endpoint - the realtime side of the relay.
"""

from chat_relay.presentation.websocket.chat_socket import router as chat_socket_router

__all__ = ["chat_socket_router"]
