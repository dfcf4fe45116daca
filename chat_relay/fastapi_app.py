"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Endpoints:
- WebSocket /ws (realtime relay)
- /api/login, /api/logout, /api/me, /api/users, /api/messages/{user_id}
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from chat_relay.application.realtime import ConnectionRegistry
from chat_relay.config.logging_config import (
    NO_CORRELATION_ID,
    correlation_id_var,
    setup_logging,
)
from chat_relay.config.settings import Config
from chat_relay.presentation.api import auth_router, messages_router, users_router
from chat_relay.presentation.websocket import chat_socket_router
from chat_relay.setup.ioc import create_container

# Setup logging
setup_logging(Config.LOG_LEVEL, Config.LOG_PATH)

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)

        # Set in contextvars (propagates to async tasks and logging)
        correlation_id_var.set(correlation_id)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id

        return response


def jsonable_errors(errors) -> list:
    """Pydantic error dicts may carry exception objects in "ctx"."""
    return jsonable_encoder(
        [{key: value for key, value in error.items() if key != "ctx"} for error in errors]
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    - Startup: Log that app started (container already created)
    - Shutdown: Close DI container (closes Redis, etc.)
    """
    logger.info("FastAPI application started. DI container initialized.")
    yield
    await app.state.dishka_container.close()
    logger.info("FastAPI application shutdown. DI container closed.")


def create_fastapi_app() -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Each app gets its own DI container, hence its own connection registry
    and message log.

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Chat Relay API",
        description="Real-time private message relay",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(create_container(), app)

    # Correlation ID middleware (must be added before CORS)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Validation error handler - shows detailed Pydantic errors
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.info(f"[VALIDATION ERROR] {errors}")
        return JSONResponse(
            status_code=400,
            content={"error": "Validation error", "details": jsonable_errors(errors)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.info(f"[HTTP ERROR {exc.status_code}] {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"[GLOBAL ERROR] {type(exc).__name__}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )

    # Health check routes
    @app.get("/", tags=["health"])
    async def root():
        registry = await app.state.dishka_container.get(ConnectionRegistry)
        return {
            "message": "Chat relay server is running!",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "activeUsers": len(registry),
        }

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy"}

    # Register routers
    app.include_router(auth_router)  # POST /api/login, /api/logout, GET /api/me
    app.include_router(users_router)  # GET /api/users
    app.include_router(messages_router)  # GET /api/messages/{user_id}
    app.include_router(chat_socket_router)  # WS /ws

    return app


# Create the app instance
app = create_fastapi_app()
