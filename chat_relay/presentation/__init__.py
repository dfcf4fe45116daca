"""
PRESENTATION LAYER - HTTP routers, auth dependencies and the WebSocket endpoint.
"""
