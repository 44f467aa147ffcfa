"""Car and motorcycle inventory API endpoints.

Both resources expose the same routes; ``build_vehicle_router`` wires them for
a given model.
"""
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.vehicle import Car, Motorcycle
from app.schemas.vehicle import VehicleRead, VehicleWrite
from app.security.permissions import ADMIN_ROLE
from app.services import engine_service, vehicle_service

SessionDep = Annotated[AsyncSession, Depends(deps.get_db_session)]


def build_vehicle_router(model: type[Car] | type[Motorcycle], label: str) -> APIRouter:
    router = APIRouter()
    not_found = f"{label} not found"

    async def _get_or_404(session: AsyncSession, vehicle_id: int):
        vehicle = await vehicle_service.get_vehicle(session, model, vehicle_id)
        if vehicle is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)
        return vehicle

    async def _require_engine(session: AsyncSession, engine_id: int) -> None:
        if not await engine_service.engine_exists(session, engine_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Engine with the given id does not exist",
            )

    @router.get("", response_model=list[VehicleRead], summary=f"List {label.lower()}s")
    async def list_vehicles(
        session: SessionDep,
        skip: Annotated[int, Query(ge=0)] = 0,
        limit: Annotated[int, Query(ge=1, le=engine_service.MAX_PAGE_SIZE)] = 50,
    ) -> list[VehicleRead]:
        vehicles = await vehicle_service.list_vehicles(
            session, model, skip=skip, limit=limit
        )
        return [VehicleRead.model_validate(obj) for obj in vehicles]

    @router.post(
        "",
        response_model=VehicleRead,
        status_code=status.HTTP_201_CREATED,
        summary=f"Create {label.lower()}",
        dependencies=[Depends(deps.get_current_identity)],
    )
    async def create_vehicle(payload: VehicleWrite, session: SessionDep) -> VehicleRead:
        await _require_engine(session, payload.engine_id)
        vehicle = await vehicle_service.create_vehicle(session, model, payload)
        return VehicleRead.model_validate(vehicle)

    @router.get("/{vehicle_id}", response_model=VehicleRead, summary=f"Get {label.lower()}")
    async def read_vehicle(vehicle_id: int, session: SessionDep) -> VehicleRead:
        vehicle = await _get_or_404(session, vehicle_id)
        return VehicleRead.model_validate(vehicle)

    @router.put(
        "/{vehicle_id}",
        response_model=VehicleRead,
        summary=f"Update {label.lower()}",
        dependencies=[Depends(deps.get_current_identity)],
    )
    async def update_vehicle(
        vehicle_id: int, payload: VehicleWrite, session: SessionDep
    ) -> VehicleRead:
        vehicle = await _get_or_404(session, vehicle_id)
        await _require_engine(session, payload.engine_id)
        updated = await vehicle_service.update_vehicle(session, vehicle, payload)
        return VehicleRead.model_validate(updated)

    @router.delete(
        "/{vehicle_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary=f"Delete {label.lower()}",
        dependencies=[Depends(deps.role_required(ADMIN_ROLE))],
    )
    async def delete_vehicle(vehicle_id: int, session: SessionDep) -> None:
        vehicle = await _get_or_404(session, vehicle_id)
        await vehicle_service.delete_vehicle(session, vehicle)

    return router


cars_router = build_vehicle_router(Car, "Car")
motorcycles_router = build_vehicle_router(Motorcycle, "Motorcycle")
