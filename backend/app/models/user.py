"""User account and role models for authentication."""
from __future__ import annotations

import secrets
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import TimestampMixin


def new_security_stamp() -> str:
    """Return a fresh random security stamp."""
    return secrets.token_hex(16)


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column(
        "user_id",
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Role(Base):
    """Named role that can be granted to users."""

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)


class User(TimestampMixin, Base):
    """User account used for email/password authentication.

    ``normalized_email`` holds the lower-cased address and carries the unique
    constraint, so two registrations that differ only in casing collide.
    ``security_stamp`` changes whenever the credentials change; password reset
    tokens are derived from it.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    normalized_email: Mapped[str] = mapped_column(
        String(320), unique=True, nullable=False, index=True
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email_confirmed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    security_stamp: Mapped[str] = mapped_column(
        String(64), default=new_security_stamp, nullable=False
    )
    lockout_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    access_failed_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    lockout_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    roles: Mapped[list[Role]] = relationship(
        Role, secondary=user_roles, lazy="selectin"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def role_names(self) -> list[str]:
        return sorted(role.name for role in self.roles)
