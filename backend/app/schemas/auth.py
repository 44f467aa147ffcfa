"""Authentication schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import EmailStr, Field, model_validator

from app.schemas.common import CamelModel
from app.schemas.user import UserInfo


class LoginRequest(CamelModel):
    """Login payload."""

    email: EmailStr
    password: str = Field(min_length=1)


class RegisterRequest(CamelModel):
    """Self-service registration payload."""

    email: EmailStr
    password: str = Field(min_length=1)
    confirm_password: str = Field(min_length=1)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)

    @model_validator(mode="after")
    def _passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class ChangePasswordRequest(CamelModel):
    """Payload to change the caller's own password."""

    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=1)
    confirm_new_password: str = Field(min_length=1)

    @model_validator(mode="after")
    def _passwords_match(self) -> "ChangePasswordRequest":
        if self.new_password != self.confirm_new_password:
            raise ValueError("Passwords do not match")
        return self


class ForgotPasswordRequest(CamelModel):
    """Request body to initiate a password reset."""

    email: EmailStr


class ResetPasswordRequest(CamelModel):
    """Payload to finalize a password reset."""

    email: EmailStr
    token: str = Field(min_length=1)
    new_password: str = Field(min_length=1)
    confirm_password: str = Field(min_length=1)

    @model_validator(mode="after")
    def _passwords_match(self) -> "ResetPasswordRequest":
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class AuthResponse(CamelModel):
    """Envelope returned by every auth endpoint."""

    success: bool
    message: str
    token: str | None = None
    token_expiration: datetime | None = None
    user: UserInfo | None = None
