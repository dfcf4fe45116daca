"""
Auth API Router - login, logout and current session identity.

Flow:
  POST /api/login → LoginCommand → LoginHandler → UserRepository + TokenIssuer
                  ← session cookie + user
"""

from logging import getLogger

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from chat_relay.application.commands.auth import LoginCommand, LoginHandler
from chat_relay.application.dto.user import UserDTO
from chat_relay.application.queries.users import (
    GetCurrentUserHandler,
    GetCurrentUserQuery,
)
from chat_relay.config.settings import Config
from chat_relay.domain.exceptions import AuthenticationError, EntityNotFoundError
from chat_relay.presentation.dependencies.auth import AuthUser, get_current_user

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    success: bool
    user: UserDTO


class LogoutResponse(BaseModel):
    success: bool


# ==================== ROUTER ====================

router = APIRouter(prefix="/api", tags=["auth"])


# ==================== ENDPOINTS ====================


@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
@inject
async def login(
    request: LoginRequest,
    response: Response,
    handler: FromDishka[LoginHandler],
):
    """
    Log in and set the HTTP-only session cookie.

    Request: {"username": "user1", "password": "password1"}
    Response: {"success": true, "user": {"id": 1, "username": "user1", "name": "..."}}
    """
    try:
        result = await handler.execute(
            LoginCommand(username=request.username, password=request.password)
        )
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)
        ) from e

    response.set_cookie(
        key=Config.AUTH_COOKIE_NAME,
        value=result.token,
        httponly=True,
        secure=Config.COOKIE_SECURE,
        samesite="lax",
        max_age=Config.JWT_EXPIRES_DAYS * 24 * 60 * 60,
    )
    return LoginResponse(success=True, user=UserDTO.from_entity(result.user))


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response):
    response.delete_cookie(Config.AUTH_COOKIE_NAME)
    return LogoutResponse(success=True)


@router.get("/me", response_model=UserDTO)
@inject
async def me(
    handler: FromDishka[GetCurrentUserHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    """Identity behind the current session."""
    try:
        user = await handler.execute(GetCurrentUserQuery(user_id=current_user.id))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return UserDTO.from_entity(user)
