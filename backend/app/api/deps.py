"""Common API dependencies."""

from __future__ import annotations

import logging
from typing import Annotated
from collections.abc import AsyncGenerator, Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.core.tokens import TokenService
from app.db.session import get_session
from app.security.permissions import CurrentIdentity, require_roles
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


def get_app_settings() -> Settings:
    return get_settings()


def get_token_service(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> TokenService:
    return TokenService(settings)


def get_auth_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    return AuthService(session, settings=settings, tokens=tokens)


async def get_current_identity(
    request: Request,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentIdentity:
    """Authenticate the request via its bearer token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise credentials_exception

    verification = tokens.verify(credentials.credentials)
    if not verification.ok:
        logger.info("Rejected bearer token: %s", verification.error.value)
        raise credentials_exception

    identity = CurrentIdentity.from_claims(verification.claims)
    request.state.identity = identity
    return identity


def role_required(*roles: str) -> Callable[..., CurrentIdentity]:
    """Build a dependency that admits only callers holding one of ``roles``."""

    allowed = set(roles)

    async def _dependency(
        identity: Annotated[CurrentIdentity, Depends(get_current_identity)],
    ) -> CurrentIdentity:
        require_roles(identity, allowed)
        return identity

    return _dependency
