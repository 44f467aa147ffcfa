"""Engine schemas for CRUD operations."""
from __future__ import annotations

from pydantic import Field

from app.schemas.common import CamelModel


class EngineBase(CamelModel):
    """Shared engine fields."""

    brand: str = Field(min_length=1, max_length=120)
    fuel_type: str | None = Field(default=None, max_length=64)
    power: str | None = Field(default=None, max_length=64)
    torque: str | None = Field(default=None, max_length=64)
    displacement: str | None = Field(default=None, max_length=64)


class EngineWrite(EngineBase):
    """Payload for creating or replacing an engine."""


class EngineRead(EngineBase):
    """Serialized engine response."""

    id: int
