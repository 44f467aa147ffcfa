"""Vehicle (car and motorcycle) schemas."""
from __future__ import annotations

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.engine import EngineRead


class VehicleBase(CamelModel):
    """Fields shared by cars and motorcycles."""

    brand: str = Field(min_length=1, max_length=120)
    model: str = Field(min_length=1, max_length=120)
    year: str | None = Field(default=None, max_length=16)
    color: str | None = Field(default=None, max_length=64)
    fuel_type: str | None = Field(default=None, max_length=64)
    transmission: str | None = Field(default=None, max_length=64)
    mileage: str | None = Field(default=None, max_length=64)
    price: str | None = Field(default=None, max_length=64)
    engine_id: int


class VehicleWrite(VehicleBase):
    """Payload for creating or replacing a vehicle; only the engine id is sent."""


class VehicleRead(VehicleBase):
    """Serialized vehicle with its engine embedded."""

    id: int
    engine: EngineRead | None = None
