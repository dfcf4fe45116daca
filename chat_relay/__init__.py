"""
chat-relay - real-time private message relay.

WebSocket connections are authenticated, registered per user, and used to
route private messages, typing indicators and presence changes.
"""
