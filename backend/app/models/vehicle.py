"""Car and motorcycle models."""
from __future__ import annotations

from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.engine import Engine
from app.models.mixins import VehicleColumnsMixin


class Car(VehicleColumnsMixin, Base):
    """Car record with its engine loaded eagerly."""

    __tablename__ = "cars"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    engine: Mapped[Engine] = relationship(Engine, lazy="joined")


class Motorcycle(VehicleColumnsMixin, Base):
    """Motorcycle record with its engine loaded eagerly."""

    __tablename__ = "motorcycles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    engine: Mapped[Engine] = relationship(Engine, lazy="joined")
