"""User data access helpers (credential store)."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from app.core.config import Settings
from app.core.exceptions import (
    DuplicateEmailError,
    InvalidCurrentPasswordError,
    WeakPasswordError,
)
from app.core.security import get_password_hash, verify_password
from app.models.user import Role, User, new_security_stamp

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    """Return a user by email address, ignoring case."""
    result = await session.execute(
        select(User).where(User.normalized_email == normalize_email(email))
    )
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, user_id: str) -> User | None:
    """Return a user by ID."""
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


def check_password_policy(password: str, *, settings: Settings) -> None:
    """Raise ``WeakPasswordError`` unless the password meets the policy.

    Only a minimum length is enforced; there are no character-class rules.
    """
    if len(password) < settings.password_min_length:
        raise WeakPasswordError(
            f"Password must be at least {settings.password_min_length} characters long"
        )


def check_password(user: User, plain_password: str) -> bool:
    return verify_password(plain_password, user.hashed_password)


def roles_of(user: User) -> set[str]:
    return {role.name for role in user.roles}


async def ensure_roles(session: AsyncSession, names: Iterable[str]) -> list[Role]:
    """Return the named roles, creating any that do not exist yet."""
    wanted = sorted({name.strip() for name in names if name and name.strip()})
    if not wanted:
        return []
    result = await session.execute(select(Role).where(Role.name.in_(wanted)))
    existing = {role.name: role for role in result.scalars().all()}
    for name in wanted:
        if name not in existing:
            role = Role(name=name)
            session.add(role)
            existing[name] = role
    await session.flush()
    return [existing[name] for name in wanted]


async def create_user(
    session: AsyncSession,
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    settings: Settings,
    roles: Iterable[str] = (),
    email_confirmed: bool = True,
) -> User:
    """Persist a new user with hashed password."""
    check_password_policy(password, settings=settings)
    if await get_user_by_email(session, email) is not None:
        raise DuplicateEmailError()

    user = User(
        email=email.strip(),
        normalized_email=normalize_email(email),
        hashed_password=get_password_hash(password),
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        email_confirmed=email_confirmed,
        security_stamp=new_security_stamp(),
        access_failed_count=0,
        lockout_enabled=True,
        roles=await ensure_roles(session, roles),
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise DuplicateEmailError() from exc
    return user


def _apply_password(user: User, new_password: str) -> None:
    user.hashed_password = get_password_hash(new_password)
    user.security_stamp = new_security_stamp()


async def change_password(
    session: AsyncSession,
    user: User,
    current_password: str,
    new_password: str,
    *,
    settings: Settings,
) -> User:
    """Replace the password after verifying the current one."""
    if not check_password(user, current_password):
        raise InvalidCurrentPasswordError()
    check_password_policy(new_password, settings=settings)
    _apply_password(user, new_password)
    await session.commit()
    return user


async def set_password(
    session: AsyncSession, user: User, new_password: str, *, settings: Settings
) -> User:
    """Overwrite the password without the current one and lift any lockout."""
    check_password_policy(new_password, settings=settings)
    _apply_password(user, new_password)
    user.access_failed_count = 0
    user.lockout_end = None
    await session.commit()
    return user


def is_locked_out(user: User, now: datetime) -> bool:
    lockout_end = _as_utc(user.lockout_end)
    return user.lockout_enabled and lockout_end is not None and lockout_end > now


async def record_failed_attempt(
    session: AsyncSession, user: User, *, now: datetime, settings: Settings
) -> bool:
    """Count a failed login; return True when this attempt starts a lockout.

    The counter is incremented by the database so that concurrent failures for
    one account are all counted.
    """
    if not user.lockout_enabled:
        return False
    result = await session.execute(
        update(User)
        .where(User.id == user.id)
        .values(access_failed_count=User.access_failed_count + 1)
        .returning(User.access_failed_count)
        .execution_options(synchronize_session=False)
    )
    failed_count = result.scalar_one()
    locked = failed_count >= settings.lockout_max_failed_attempts
    if locked:
        lockout_end = now + timedelta(minutes=settings.lockout_duration_minutes)
        await session.execute(
            update(User)
            .where(User.id == user.id)
            .values(access_failed_count=0, lockout_end=lockout_end)
            .execution_options(synchronize_session=False)
        )
        failed_count = 0
        set_committed_value(user, "lockout_end", lockout_end)
    set_committed_value(user, "access_failed_count", failed_count)
    await session.commit()
    if locked:
        logger.warning("Account %s locked until %s", user.id, user.lockout_end)
    return locked


async def reset_failed_attempts(session: AsyncSession, user: User) -> None:
    if user.access_failed_count == 0 and user.lockout_end is None:
        return
    user.access_failed_count = 0
    user.lockout_end = None
    await session.commit()
