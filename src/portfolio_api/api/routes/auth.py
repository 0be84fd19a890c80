"""Account routes: registration, login and the current user."""

from __future__ import annotations

from fastapi import APIRouter, status

from portfolio_api.api.dependencies import CurrentUserId
from portfolio_api.api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from portfolio_api.api.schemas.common import (
    ERROR_RESPONSES,
    DataResponse,
    MessageResponse,
    deleted,
    ok,
)
from portfolio_api.services.auth import (
    authenticate_user,
    delete_user,
    get_user,
    register_user,
)

router = APIRouter(prefix="/auth", tags=["auth"], responses=ERROR_RESPONSES)


@router.post(
    "/register",
    response_model=DataResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(data: RegisterRequest) -> dict:
    """Create an account and return it with a fresh token."""
    user, token = register_user(data.email, data.username, data.password, data.name)
    return ok({"user": user, "token": token})


@router.post("/login", response_model=DataResponse[AuthResponse])
def login(data: LoginRequest) -> dict:
    user, token = authenticate_user(data.email, data.password)
    return ok({"user": user, "token": token})


@router.get("/me", response_model=DataResponse[UserResponse])
def me(user_id: CurrentUserId) -> dict:
    """Return the account behind the bearer token."""
    return ok(get_user(user_id))


@router.delete("/me", response_model=MessageResponse)
def delete_me(user_id: CurrentUserId) -> dict:
    """Delete the account and everything it owns."""
    delete_user(user_id)
    return deleted("Account")
