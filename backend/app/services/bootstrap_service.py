"""Bootstrap helpers for default data."""

from __future__ import annotations

import logging

from app.core.config import Settings
from app.core.exceptions import DuplicateEmailError
from app.db.session import get_sessionmaker
from app.security.permissions import ADMIN_ROLE, USER_ROLE
from app.services import user_service

logger = logging.getLogger(__name__)


async def ensure_default_roles_and_admin(settings: Settings) -> None:
    """Seed the built-in roles and, when configured, an administrator account.

    The administrator is created only when both ``BOOTSTRAP_ADMIN_EMAIL`` and
    ``BOOTSTRAP_ADMIN_PASSWORD`` are set; there are no built-in credentials.
    """

    sessionmaker = get_sessionmaker(settings.database_url)
    async with sessionmaker() as session:
        await user_service.ensure_roles(
            session, [ADMIN_ROLE, USER_ROLE, *settings.default_roles]
        )
        await session.commit()

        email = settings.bootstrap_admin_email
        password = settings.bootstrap_admin_password
        if not email or not password:
            return
        if await user_service.get_user_by_email(session, email) is not None:
            return
        try:
            await user_service.create_user(
                session,
                email=email,
                password=password,
                first_name="Fleet",
                last_name="Administrator",
                settings=settings,
                roles=[ADMIN_ROLE, *settings.default_roles],
            )
        except DuplicateEmailError:
            # another worker created it first
            return
        logger.info("Bootstrap administrator %s created", email)
