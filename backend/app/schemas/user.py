"""User-related schemas."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import Field

from app.schemas.common import CamelModel

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from app.models.user import User


class UserInfo(CamelModel):
    """Public profile of an authenticated account."""

    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    email_confirmed: bool
    created_at: datetime
    roles: list[str] = Field(default_factory=list)

    @classmethod
    def from_user(cls, user: "User") -> "UserInfo":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name,
            email_confirmed=user.email_confirmed,
            created_at=user.created_at,
            roles=user.role_names,
        )
