"""Authentication endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    Request,
    Response,
)
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter

from app.api.deps import get_app_settings, get_auth_service, get_current_identity
from app.core.config import Settings, get_settings
from app.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from app.schemas.user import UserInfo
from app.security.permissions import CurrentIdentity
from app.services import notification_service
from app.services.auth_service import AuthResult, AuthService

router = APIRouter()

_settings = get_settings()

_DEF_LIMITS = _settings.rate_limit_default
_LOGIN_LIMITS = _settings.rate_limit_login

FORGOT_PASSWORD_MESSAGE = (
    "If the email exists in the system, you will receive instructions "
    "to reset your password"
)


def _parse_rate(value: str, *, fallback: tuple[int, int]) -> tuple[int, int]:
    try:
        count_str, window_str = value.split("/", 1)
        count = int(count_str.strip())
    except ValueError:
        return fallback
    window = window_str.strip().lower()
    seconds_map = {
        "second": 1,
        "seconds": 1,
        "minute": 60,
        "minutes": 60,
        "hour": 3600,
        "hours": 3600,
        "day": 86400,
        "days": 86400,
    }
    seconds = seconds_map.get(window, fallback[1])
    return count, seconds


_LOGIN_LIMIT = _parse_rate(_LOGIN_LIMITS, fallback=(10, 60))
_DEFAULT_LIMIT = _parse_rate(_DEF_LIMITS, fallback=(100, 60))


def _rate_dependency(limit: tuple[int, int]):
    async def _dependency(request: Request, response: Response) -> None:
        if FastAPILimiter.redis is None:
            return None
        limiter = RateLimiter(times=limit[0], seconds=limit[1])
        await limiter(request, response)

    return Depends(_dependency)


_LOGIN_RATE_DEP = _rate_dependency(_LOGIN_LIMIT)
_DEFAULT_RATE_DEP = _rate_dependency(_DEFAULT_LIMIT)

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
IdentityDep = Annotated[CurrentIdentity, Depends(get_current_identity)]


def _token_response(result: AuthResult, message: str) -> AuthResponse:
    return AuthResponse(
        success=True,
        message=message,
        token=result.token.token,
        token_expiration=result.token.expires_at,
        user=UserInfo.from_user(result.user),
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    summary="Register account",
    dependencies=[_DEFAULT_RATE_DEP],
)
async def register(payload: RegisterRequest, service: AuthServiceDep) -> AuthResponse:
    result = await service.register(payload)
    return _token_response(result, "Registration successful")


@router.post(
    "/login",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    summary="Obtain access token",
    dependencies=[_LOGIN_RATE_DEP],
)
async def login(payload: LoginRequest, service: AuthServiceDep) -> AuthResponse:
    """Validate credentials and issue a bearer token."""
    result = await service.login(payload.email, payload.password)
    return _token_response(result, "Login successful")


@router.post(
    "/logout",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    summary="Log out",
)
async def logout(identity: IdentityDep, service: AuthServiceDep) -> AuthResponse:
    """Acknowledge logout; bearer tokens are not revoked server-side."""
    await service.logout(identity)
    return AuthResponse(success=True, message="Logout successful")


@router.get(
    "/me",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    summary="Current user profile",
)
async def me(identity: IdentityDep, service: AuthServiceDep) -> AuthResponse:
    user = await service.get_profile(identity)
    return AuthResponse(
        success=True, message="User information", user=UserInfo.from_user(user)
    )


@router.post(
    "/change-password",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    summary="Change password",
)
async def change_password(
    payload: ChangePasswordRequest, identity: IdentityDep, service: AuthServiceDep
) -> AuthResponse:
    await service.change_password(
        identity, payload.current_password, payload.new_password
    )
    return AuthResponse(success=True, message="Password changed successfully")


@router.post(
    "/forgot-password",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    summary="Request password reset",
    dependencies=[_DEFAULT_RATE_DEP],
)
async def forgot_password(
    payload: ForgotPasswordRequest,
    service: AuthServiceDep,
    settings: Annotated[Settings, Depends(get_app_settings)],
    background_tasks: BackgroundTasks,
) -> AuthResponse:
    response = AuthResponse(success=True, message=FORGOT_PASSWORD_MESSAGE)
    issue = await service.forgot_password(payload.email)
    if issue is None:
        return response

    subject, body = notification_service.build_password_reset_email(
        first_name=issue.user.first_name,
        token=issue.token,
        expires_at=issue.expires_at,
    )
    notification_service.schedule_email(
        background_tasks,
        recipients=[issue.user.email],
        subject=subject,
        body=body,
    )
    if settings.password_reset_expose_token:
        response.token = issue.token
        response.token_expiration = issue.expires_at
    return response


@router.post(
    "/reset-password",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    summary="Confirm password reset",
    dependencies=[_DEFAULT_RATE_DEP],
)
async def reset_password(
    payload: ResetPasswordRequest, service: AuthServiceDep
) -> AuthResponse:
    await service.reset_password(payload.email, payload.token, payload.new_password)
    return AuthResponse(success=True, message="Password reset successfully")
