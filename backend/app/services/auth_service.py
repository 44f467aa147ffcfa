"""Authentication service: registration, login and password flows."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.exceptions import (
    AccountLockedError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from app.core.security import burn_password_check
from app.core.tokens import Clock, IssuedToken, TokenService, utc_now
from app.models.user import User
from app.schemas.auth import RegisterRequest
from app.security.permissions import CurrentIdentity
from app.services import password_reset_service, user_service
from app.services.password_reset_service import ResetTokenIssue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    user: User
    token: IssuedToken


class AuthService:
    """Orchestrates the account flows for one request.

    Nothing is kept between requests except what the credential store
    persists; bearer tokens are stateless.
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        settings: Settings,
        tokens: TokenService,
        clock: Clock | None = None,
    ) -> None:
        self.session = session
        self.settings = settings
        self.tokens = tokens
        self.clock = clock or utc_now

    async def register(self, payload: RegisterRequest) -> AuthResult:
        user = await user_service.create_user(
            self.session,
            email=payload.email,
            password=payload.password,
            first_name=payload.first_name,
            last_name=payload.last_name,
            settings=self.settings,
            roles=self.settings.default_roles,
            email_confirmed=True,
        )
        logger.info("Registered user %s", user.id)
        return AuthResult(user=user, token=self._issue(user))

    async def login(self, email: str, password: str) -> AuthResult:
        user = await user_service.get_user_by_email(self.session, email)
        if user is None:
            burn_password_check(password)
            raise InvalidCredentialsError()

        now = self.clock()
        if user_service.is_locked_out(user, now):
            logger.warning("Login rejected for locked account %s", user.id)
            raise AccountLockedError()

        if not user_service.check_password(user, password):
            await user_service.record_failed_attempt(
                self.session, user, now=now, settings=self.settings
            )
            logger.warning("Failed login for account %s", user.id)
            raise InvalidCredentialsError()

        await user_service.reset_failed_attempts(self.session, user)
        logger.info("User %s logged in", user.id)
        return AuthResult(user=user, token=self._issue(user))

    async def logout(self, identity: CurrentIdentity) -> None:
        """Acknowledge a logout. Issued tokens stay valid until they expire."""
        logger.info("User %s logged out (token %s)", identity.user_id, identity.token_id)

    async def get_profile(self, identity: CurrentIdentity) -> User:
        user = await user_service.get_user(self.session, identity.user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    async def change_password(
        self, identity: CurrentIdentity, current_password: str, new_password: str
    ) -> User:
        user = await self.get_profile(identity)
        await user_service.change_password(
            self.session,
            user,
            current_password,
            new_password,
            settings=self.settings,
        )
        logger.info("Password changed for user %s", user.id)
        return user

    async def forgot_password(self, email: str) -> ResetTokenIssue | None:
        """Issue a reset token when the account exists; ``None`` otherwise.

        Callers must answer both outcomes identically.
        """
        issue = await password_reset_service.create_reset_token(
            self.session, email=email, settings=self.settings, now=self.clock()
        )
        if issue is not None:
            logger.info("Password reset token generated for user %s", issue.user.id)
        return issue

    async def reset_password(self, email: str, token: str, new_password: str) -> User:
        user = await password_reset_service.consume_reset_token(
            self.session,
            email=email,
            token=token,
            new_password=new_password,
            settings=self.settings,
            now=self.clock(),
        )
        logger.info("Password reset completed for user %s", user.id)
        return user

    def _issue(self, user: User) -> IssuedToken:
        return self.tokens.issue(user, user_service.roles_of(user))
