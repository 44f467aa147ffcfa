"""Car and motorcycle services.

Both vehicle kinds share the same columns, so every helper takes the model
class to operate on.
"""

from __future__ import annotations

from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.vehicle import Car, Motorcycle
from app.schemas.vehicle import VehicleWrite
from app.services.engine_service import MAX_PAGE_SIZE

VehicleT = TypeVar("VehicleT", Car, Motorcycle)


async def list_vehicles(
    session: AsyncSession,
    model: type[VehicleT],
    *,
    skip: int = 0,
    limit: int = 50,
) -> list[VehicleT]:
    """Return vehicles of one kind with their engines."""
    stmt = select(model).order_by(model.id).offset(skip).limit(min(limit, MAX_PAGE_SIZE))
    result = await session.execute(stmt)
    return list(result.scalars().unique().all())


async def get_vehicle(
    session: AsyncSession, model: type[VehicleT], vehicle_id: int
) -> VehicleT | None:
    return await session.get(model, vehicle_id)


async def _reload(session: AsyncSession, vehicle: VehicleT) -> VehicleT:
    # engine_id may have changed, so the joined engine must be fetched again
    await session.refresh(vehicle, attribute_names=["engine"])
    return vehicle


async def create_vehicle(
    session: AsyncSession, model: type[VehicleT], payload: VehicleWrite
) -> VehicleT:
    """Create a vehicle; the caller has already checked that the engine exists."""
    vehicle = model(**payload.model_dump())
    session.add(vehicle)
    await session.commit()
    return await _reload(session, vehicle)


async def update_vehicle(
    session: AsyncSession, vehicle: VehicleT, payload: VehicleWrite
) -> VehicleT:
    """Replace the attributes of a vehicle."""
    for field, value in payload.model_dump().items():
        setattr(vehicle, field, value)
    await session.commit()
    return await _reload(session, vehicle)


async def delete_vehicle(session: AsyncSession, vehicle: Car | Motorcycle) -> None:
    await session.delete(vehicle)
    await session.commit()
