"""Domain errors raised by the authentication layer.

Each error carries the HTTP status it maps to and a message that is safe to
show to the caller. The handlers in ``app.main`` turn them into
``{"success": false, "message": ...}`` responses.
"""

from __future__ import annotations

from fastapi import status


class AuthError(Exception):
    """Base class for expected authentication failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Request could not be processed"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationFailedError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request data"


class WeakPasswordError(ValidationFailedError):
    message = "Password does not meet the password policy"


class InvalidCurrentPasswordError(ValidationFailedError):
    message = "Current password is incorrect"


class DuplicateEmailError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "A user with this email already exists"


class InvalidCredentialsError(AuthError):
    """Unknown email and wrong password share this error on purpose."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Incorrect email or password"


class AccountLockedError(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Account is temporarily locked; try again later"


class InvalidOrExpiredTokenError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid or expired token"


class UserNotFoundError(AuthError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


__all__ = [
    "AccountLockedError",
    "AuthError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "InvalidCurrentPasswordError",
    "InvalidOrExpiredTokenError",
    "UserNotFoundError",
    "ValidationFailedError",
    "WeakPasswordError",
]
