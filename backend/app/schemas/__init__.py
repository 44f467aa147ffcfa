"""Schema exports."""

from app.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from app.schemas.common import CamelModel
from app.schemas.engine import EngineRead, EngineWrite
from app.schemas.user import UserInfo
from app.schemas.vehicle import VehicleRead, VehicleWrite

__all__ = [
    "AuthResponse",
    "CamelModel",
    "ChangePasswordRequest",
    "EngineRead",
    "EngineWrite",
    "ForgotPasswordRequest",
    "LoginRequest",
    "RegisterRequest",
    "ResetPasswordRequest",
    "UserInfo",
    "VehicleRead",
    "VehicleWrite",
]
