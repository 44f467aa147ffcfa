"""Caller identity and role checks for protected routes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from fastapi import HTTPException, status

ADMIN_ROLE = "Admin"
USER_ROLE = "User"


@dataclass(frozen=True)
class CurrentIdentity:
    """Identity asserted by a verified bearer token."""

    user_id: str
    email: str
    name: str = ""
    roles: frozenset[str] = field(default_factory=frozenset)
    token_id: str | None = None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "CurrentIdentity":
        roles = claims.get("roles") or []
        if isinstance(roles, str):
            roles = [roles]
        return cls(
            user_id=claims["sub"],
            email=claims.get("email", ""),
            name=claims.get("name", ""),
            roles=frozenset(str(role) for role in roles),
            token_id=claims.get("jti"),
        )

    def has_any_role(self, allowed: Iterable[str]) -> bool:
        return not self.roles.isdisjoint(allowed)


def require_roles(identity: CurrentIdentity, allowed: set[str]) -> None:
    """Raise HTTP 403 if the identity holds none of the allowed roles."""

    if not identity.has_any_role(allowed):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )


__all__ = ["ADMIN_ROLE", "USER_ROLE", "CurrentIdentity", "require_roles"]
