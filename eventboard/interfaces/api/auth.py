"""Auth API routes — register, login, me."""

from fastapi import APIRouter, Depends, status

from eventboard.application.services.auth_service import login as login_user
from eventboard.application.services.auth_service import register_user
from eventboard.core.tokens import TokenService
from eventboard.domain.models.user import User
from eventboard.domain.repositories.user_repository import UserRepository
from eventboard.domain.schemas.auth import (
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserRead,
    UserResponse,
)
from eventboard.interfaces.api.deps import get_current_user
from eventboard.interfaces.deps import get_token_service, get_user_repository

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    users: UserRepository = Depends(get_user_repository),
):
    user = register_user(users, payload)
    return UserResponse(message="User registered successfully.", user=UserRead.model_validate(user))


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
):
    token, user = login_user(users, tokens, payload)
    return TokenResponse(token=token, expires_in=tokens.default_ttl, user=UserRead.model_validate(user))


@router.get("/me", response_model=CurrentUserResponse)
def get_me(user: User = Depends(get_current_user)):
    return CurrentUserResponse(user=UserRead.model_validate(user))
