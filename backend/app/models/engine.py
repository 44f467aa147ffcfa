"""Engine model referenced by vehicles."""
from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Engine(Base):
    """Engine specification. Attributes are free text, as entered."""

    __tablename__ = "engines"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    brand: Mapped[str] = mapped_column(String(120), nullable=False)
    fuel_type: Mapped[str | None] = mapped_column(String(64))
    power: Mapped[str | None] = mapped_column(String(64))
    torque: Mapped[str | None] = mapped_column(String(64))
    displacement: Mapped[str | None] = mapped_column(String(64))
