"""Common ORM mixins."""
from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, declared_attr, mapped_column


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TimestampMixin:
    """Mixin that adds created/updated timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
    )


class VehicleColumnsMixin:
    """Attribute columns shared by every vehicle table."""

    brand: Mapped[str] = mapped_column(String(120), nullable=False)
    model: Mapped[str] = mapped_column(String(120), nullable=False)
    year: Mapped[str | None] = mapped_column(String(16))
    color: Mapped[str | None] = mapped_column(String(64))
    fuel_type: Mapped[str | None] = mapped_column(String(64))
    transmission: Mapped[str | None] = mapped_column(String(64))
    mileage: Mapped[str | None] = mapped_column(String(64))
    price: Mapped[str | None] = mapped_column(String(64))

    @declared_attr
    def engine_id(cls) -> Mapped[int]:
        return mapped_column(
            ForeignKey("engines.id", ondelete="RESTRICT"), nullable=False, index=True
        )
