"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    # Environment
    APP_ENV = os.getenv("APP_ENV", "development")
    DEBUG = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes", "on"}

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3000"))
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH", "") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s [%(levelname)s] [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Auth
    JWT_SECRET = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "chat-relay")
    JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "chat-relay-clients")
    JWT_EXPIRES_DAYS = int(os.getenv("JWT_EXPIRES_DAYS", "7"))
    AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "auth_token")
    COOKIE_SECURE = APP_ENV == "production"
    PASSWORD_HASH_ITERATIONS = int(os.getenv("PASSWORD_HASH_ITERATIONS", "100000"))

    # Demo accounts, "id:username:password:Display Name" separated by commas
    DEMO_USERS = os.getenv(
        "DEMO_USERS",
        "1:user1:password1:Demo User 1,"
        "2:user2:password2:Demo User 2,"
        "3:user3:password3:Demo User 3,"
        "4:user4:password4:Demo User 4",
    ).split(",")

    # Message log: "memory" or "redis"
    MESSAGE_LOG_BACKEND = os.getenv("MESSAGE_LOG_BACKEND", "memory")
    CONVERSATION_MESSAGE_LIMIT = int(os.getenv("CONVERSATION_MESSAGE_LIMIT", "200"))

    # Redis settings
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    REDIS_KEY_PREFIX: str = os.getenv("REDIS_KEY_PREFIX", "chat")
