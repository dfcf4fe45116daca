"""
API Routers - FastAPI endpoint definitions.
"""

from chat_relay.presentation.api.auth import router as auth_router
from chat_relay.presentation.api.users import router as users_router
from chat_relay.presentation.api.messages import router as messages_router

__all__ = [
    "auth_router",
    "users_router",
    "messages_router",
]
