"""Service-level tests for login, lockout and registration."""

from __future__ import annotations

import pytest

from app.core.config import get_settings
from app.core.exceptions import (
    AccountLockedError,
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from app.core.tokens import TokenService
from app.db.session import get_sessionmaker
from app.schemas.auth import RegisterRequest
from app.security.permissions import CurrentIdentity
from app.services.auth_service import AuthService

pytestmark = pytest.mark.asyncio


def _register_payload(email: str = "pilot@example.com", password: str = "secret1"):
    return RegisterRequest(
        email=email,
        password=password,
        confirm_password=password,
        first_name="Pat",
        last_name="Pilot",
    )


def _service(session, clock, **overrides) -> AuthService:
    settings = get_settings()
    if overrides:
        settings = settings.model_copy(update=overrides)
    return AuthService(
        session,
        settings=settings,
        tokens=TokenService(settings, clock=clock),
        clock=clock,
    )


async def test_register_assigns_default_roles(
    reset_database: None, db_url: str, frozen_clock
) -> None:
    async with get_sessionmaker(db_url)() as session:
        service = _service(session, frozen_clock)
        result = await service.register(_register_payload())

        assert result.user.role_names == ["User"]
        assert result.user.email_confirmed is True
        assert result.token.claims["roles"] == ["User"]

        with pytest.raises(DuplicateEmailError):
            await service.register(_register_payload("PILOT@example.com"))


async def test_lockout_expires_lazily(
    reset_database: None, db_url: str, frozen_clock
) -> None:
    async with get_sessionmaker(db_url)() as session:
        service = _service(
            session,
            frozen_clock,
            lockout_max_failed_attempts=3,
            lockout_duration_minutes=5,
        )
        await service.register(_register_payload())

        for _ in range(3):
            with pytest.raises(InvalidCredentialsError):
                await service.login("pilot@example.com", "wrong-one")

        with pytest.raises(AccountLockedError):
            await service.login("pilot@example.com", "secret1")

        frozen_clock.advance(minutes=4, seconds=59)
        with pytest.raises(AccountLockedError):
            await service.login("pilot@example.com", "secret1")

        frozen_clock.advance(seconds=2)
        result = await service.login("pilot@example.com", "secret1")
        assert result.user.access_failed_count == 0
        assert result.user.lockout_end is None


async def test_successful_login_resets_failure_count(
    reset_database: None, db_url: str, frozen_clock
) -> None:
    async with get_sessionmaker(db_url)() as session:
        service = _service(session, frozen_clock)
        await service.register(_register_payload())

        for _ in range(4):
            with pytest.raises(InvalidCredentialsError):
                await service.login("pilot@example.com", "nope-nope")

        result = await service.login("Pilot@Example.com", "secret1")
        assert result.user.access_failed_count == 0

        # the counter starts over, so four more failures still do not lock
        for _ in range(4):
            with pytest.raises(InvalidCredentialsError):
                await service.login("pilot@example.com", "nope-nope")
        assert (await service.login("pilot@example.com", "secret1")).token.token


async def test_unknown_email_is_indistinguishable(
    reset_database: None, db_url: str, frozen_clock
) -> None:
    async with get_sessionmaker(db_url)() as session:
        service = _service(session, frozen_clock)
        with pytest.raises(InvalidCredentialsError) as excinfo:
            await service.login("ghost@example.com", "secret1")
        assert excinfo.value.message == "Incorrect email or password"
        assert excinfo.value.status_code == 401


async def test_profile_of_missing_user(
    reset_database: None, db_url: str, frozen_clock
) -> None:
    identity = CurrentIdentity(
        user_id="missing",
        email="missing@example.com",
        name="Miss Ing",
        roles=frozenset({"User"}),
        token_id="abc",
    )
    async with get_sessionmaker(db_url)() as session:
        with pytest.raises(UserNotFoundError):
            await _service(session, frozen_clock).get_profile(identity)
