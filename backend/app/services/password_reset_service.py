"""Password reset services.

Reset tokens are not stored. A token is ``<expires>.<mac>`` where the MAC
covers the user id, the user's current security stamp and the expiry. Any
credential change rotates the stamp, which invalidates every token issued
before it, including the token that was just redeemed.
"""
from __future__ import annotations

import base64
import hashlib
import hmac
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.exceptions import InvalidOrExpiredTokenError
from app.core.tokens import utc_now
from app.models.user import User
from app.services import user_service

logger = logging.getLogger(__name__)

_PURPOSE = b"ResetPassword"


@dataclass(frozen=True)
class ResetTokenIssue:
    user: User
    token: str
    expires_at: datetime


def _signing_key(settings: Settings) -> bytes:
    # keep reset MACs in a different key space from bearer token signatures
    return hashlib.sha256(_PURPOSE + b":" + settings.jwt_secret_key.encode()).digest()


def _mac(user: User, expires: int, *, settings: Settings) -> str:
    message = b"|".join(
        [
            _PURPOSE,
            str(user.id).encode(),
            user.security_stamp.encode(),
            str(expires).encode(),
        ]
    )
    digest = hmac.new(_signing_key(settings), message, hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode()


def generate_reset_token(
    user: User, *, settings: Settings, now: datetime | None = None
) -> tuple[str, datetime]:
    """Derive a reset token from the user's current security stamp."""
    issued = now or utc_now()
    expires_at = issued + timedelta(hours=settings.password_reset_token_expire_hours)
    expires = int(expires_at.timestamp())
    token = f"{expires}.{_mac(user, expires, settings=settings)}"
    return token, datetime.fromtimestamp(expires, UTC)


def verify_reset_token(
    user: User, token: str, *, settings: Settings, now: datetime | None = None
) -> bool:
    """Recompute the token against the user's current stamp and compare."""
    expires_raw, sep, mac = token.strip().partition(".")
    if not sep or not (expires_raw.isascii() and expires_raw.isdigit()) or not mac:
        return False
    expires = int(expires_raw)
    if (now or utc_now()).timestamp() >= expires:
        return False
    expected = _mac(user, expires, settings=settings)
    return hmac.compare_digest(mac.encode(), expected.encode())


async def create_reset_token(
    session: AsyncSession, *, email: str, settings: Settings, now: datetime | None = None
) -> ResetTokenIssue | None:
    user = await user_service.get_user_by_email(session, email)
    if user is None:
        return None
    token, expires_at = generate_reset_token(user, settings=settings, now=now)
    return ResetTokenIssue(user=user, token=token, expires_at=expires_at)


async def consume_reset_token(
    session: AsyncSession,
    *,
    email: str,
    token: str,
    new_password: str,
    settings: Settings,
    now: datetime | None = None,
) -> User:
    user = await user_service.get_user_by_email(session, email)
    if user is None or not verify_reset_token(user, token, settings=settings, now=now):
        raise InvalidOrExpiredTokenError()
    return await user_service.set_password(session, user, new_password, settings=settings)
