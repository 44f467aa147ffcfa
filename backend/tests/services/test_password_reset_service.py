"""Password reset token derivation and redemption."""

from __future__ import annotations

from datetime import timedelta

import pytest

from app.core.config import get_settings
from app.core.exceptions import InvalidOrExpiredTokenError
from app.core.security import verify_password
from app.db.session import get_sessionmaker
from app.models import User
from app.models.user import new_security_stamp
from app.services import password_reset_service, user_service


def _user(stamp: str = "stamp-one") -> User:
    return User(
        id="5eed0000-0000-4000-8000-000000000001",
        email="reset@example.com",
        first_name="Rae",
        last_name="Set",
        security_stamp=stamp,
    )


def test_token_verifies_until_expiry(frozen_clock) -> None:
    settings = get_settings()
    user = _user()
    token, expires_at = password_reset_service.generate_reset_token(
        user, settings=settings, now=frozen_clock()
    )

    assert expires_at == frozen_clock() + timedelta(hours=24)
    assert password_reset_service.verify_reset_token(
        user, token, settings=settings, now=frozen_clock()
    )

    frozen_clock.advance(hours=24)
    assert not password_reset_service.verify_reset_token(
        user, token, settings=settings, now=frozen_clock()
    )


def test_token_is_bound_to_security_stamp(frozen_clock) -> None:
    settings = get_settings()
    user = _user()
    token, _ = password_reset_service.generate_reset_token(
        user, settings=settings, now=frozen_clock()
    )

    user.security_stamp = new_security_stamp()
    assert not password_reset_service.verify_reset_token(
        user, token, settings=settings, now=frozen_clock()
    )


def test_token_is_bound_to_user(frozen_clock) -> None:
    settings = get_settings()
    token, _ = password_reset_service.generate_reset_token(
        _user(), settings=settings, now=frozen_clock()
    )
    other = _user()
    other.id = "5eed0000-0000-4000-8000-000000000002"

    assert not password_reset_service.verify_reset_token(
        other, token, settings=settings, now=frozen_clock()
    )


def test_extended_expiry_breaks_the_mac(frozen_clock) -> None:
    settings = get_settings()
    user = _user()
    token, _ = password_reset_service.generate_reset_token(
        user, settings=settings, now=frozen_clock()
    )
    expires, _, mac = token.partition(".")
    stretched = f"{int(expires) + 3600}.{mac}"

    assert not password_reset_service.verify_reset_token(
        user, stretched, settings=settings, now=frozen_clock()
    )


@pytest.mark.parametrize(
    "token", ["", "nodot", ".mac", "abc.mac", "123.", "\u00b2.abc", "\u0663\u0663.abc"]
)
def test_malformed_reset_tokens(token: str, frozen_clock) -> None:
    assert not password_reset_service.verify_reset_token(
        _user(), token, settings=get_settings(), now=frozen_clock()
    )


@pytest.mark.asyncio
async def test_consume_reset_token_rotates_stamp_and_lifts_lockout(
    reset_database: None, db_url: str
) -> None:
    settings = get_settings()
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        user = await user_service.create_user(
            session,
            email="Locked.Out@example.com",
            password="secret1",
            first_name="Lou",
            last_name="Locked",
            settings=settings,
        )
        user.access_failed_count = 3
        await session.commit()
        old_stamp = user.security_stamp

        issue = await password_reset_service.create_reset_token(
            session, email="locked.out@example.com", settings=settings
        )
        assert issue is not None
        assert issue.user.id == user.id

        updated = await password_reset_service.consume_reset_token(
            session,
            email="LOCKED.OUT@example.com",
            token=issue.token,
            new_password="fresh22",
            settings=settings,
        )
        assert updated.security_stamp != old_stamp
        assert updated.access_failed_count == 0
        assert updated.lockout_end is None
        assert verify_password("fresh22", updated.hashed_password)

        with pytest.raises(InvalidOrExpiredTokenError):
            await password_reset_service.consume_reset_token(
                session,
                email="locked.out@example.com",
                token=issue.token,
                new_password="again333",
                settings=settings,
            )


@pytest.mark.asyncio
async def test_create_reset_token_for_unknown_email(reset_database: None, db_url: str) -> None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        issue = await password_reset_service.create_reset_token(
            session, email="nobody@example.com", settings=get_settings()
        )
    assert issue is None
