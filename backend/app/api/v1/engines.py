"""Engine inventory API endpoints."""
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.engine import EngineRead, EngineWrite
from app.security.permissions import ADMIN_ROLE
from app.services import engine_service

router = APIRouter()

SessionDep = Annotated[AsyncSession, Depends(deps.get_db_session)]


async def _get_engine_or_404(session: AsyncSession, engine_id: int):
    engine = await engine_service.get_engine(session, engine_id)
    if engine is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Engine not found")
    return engine


@router.get("", response_model=list[EngineRead], summary="List engines")
async def list_engines(
    session: SessionDep,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=engine_service.MAX_PAGE_SIZE)] = 50,
) -> list[EngineRead]:
    engines = await engine_service.list_engines(session, skip=skip, limit=limit)
    return [EngineRead.model_validate(obj) for obj in engines]


@router.post(
    "",
    response_model=EngineRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create engine",
    dependencies=[Depends(deps.get_current_identity)],
)
async def create_engine(payload: EngineWrite, session: SessionDep) -> EngineRead:
    engine = await engine_service.create_engine(session, payload)
    return EngineRead.model_validate(engine)


@router.get("/{engine_id}", response_model=EngineRead, summary="Get engine")
async def read_engine(engine_id: int, session: SessionDep) -> EngineRead:
    engine = await _get_engine_or_404(session, engine_id)
    return EngineRead.model_validate(engine)


@router.put(
    "/{engine_id}",
    response_model=EngineRead,
    summary="Update engine",
    dependencies=[Depends(deps.get_current_identity)],
)
async def update_engine(
    engine_id: int, payload: EngineWrite, session: SessionDep
) -> EngineRead:
    engine = await _get_engine_or_404(session, engine_id)
    updated = await engine_service.update_engine(session, engine, payload)
    return EngineRead.model_validate(updated)


@router.delete(
    "/{engine_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete engine",
    dependencies=[Depends(deps.role_required(ADMIN_ROLE))],
)
async def delete_engine(engine_id: int, session: SessionDep) -> None:
    engine = await _get_engine_or_404(session, engine_id)
    if await engine_service.engine_in_use(session, engine_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Engine is still referenced by vehicles",
        )
    await engine_service.delete_engine(session, engine)
