"""Account API endpoints.

Provides routes for:
- Registration, login and logout
- Current profile read and update
- Password change
"""

from fastapi import APIRouter, Depends, status

from learnhub.core.errors import to_http_exception

from .dependencies import AccountStoreDep, CurrentUser, get_current_user
from .models import Session
from .schemas import (
    ChangePasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UpdateProfileRequest,
)
from .service import (
    EmailTakenError,
    InvalidAccountDataError,
    InvalidCredentialsError,
    NotAuthenticatedError,
)


router = APIRouter(prefix="/v1/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=Session,
    status_code=status.HTTP_201_CREATED,
    summary="Register new account",
    responses={
        409: {"description": "Email already registered"},
        422: {"description": "Validation error"},
    },
)
async def register(data: RegisterRequest, store: AccountStoreDep) -> Session:
    """Register a new account. The caller still has to log in."""
    try:
        return await store.register(data.name, data.email, data.password)
    except (EmailTakenError, InvalidAccountDataError) as e:
        raise to_http_exception(e) from e


@router.post(
    "/login",
    response_model=Session,
    summary="Login",
    responses={401: {"description": "Invalid credentials"}},
)
async def login(data: LoginRequest, store: AccountStoreDep) -> Session:
    """Start a session for this client."""
    try:
        return await store.login(data.email, data.password)
    except InvalidCredentialsError as e:
        raise to_http_exception(e) from e


@router.post("/logout", response_model=MessageResponse, summary="Logout")
async def logout(store: AccountStoreDep) -> MessageResponse:
    """End the session. Succeeds even when not logged in."""
    store.logout()
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=Session, summary="Current account")
async def me(user: CurrentUser) -> Session:
    return user


@router.patch(
    "/me",
    response_model=Session,
    summary="Update profile",
    dependencies=[Depends(get_current_user)],
    responses={409: {"description": "Email already registered"}},
)
async def update_me(data: UpdateProfileRequest, store: AccountStoreDep) -> Session:
    try:
        return store.update_profile(name=data.name, email=data.email, avatar=data.avatar)
    except (EmailTakenError, InvalidAccountDataError, NotAuthenticatedError) as e:
        raise to_http_exception(e) from e


@router.post(
    "/change-password",
    response_model=MessageResponse,
    summary="Change password",
    dependencies=[Depends(get_current_user)],
)
async def change_password(
    data: ChangePasswordRequest, store: AccountStoreDep
) -> MessageResponse:
    try:
        store.change_password(data.current_password, data.new_password)
    except (
        InvalidCredentialsError,
        InvalidAccountDataError,
        NotAuthenticatedError,
    ) as e:
        raise to_http_exception(e) from e
    return MessageResponse(message="Password changed")
