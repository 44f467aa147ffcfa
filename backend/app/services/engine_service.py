"""Engine management services."""

from __future__ import annotations

from sqlalchemy import exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.engine import Engine
from app.models.vehicle import Car, Motorcycle
from app.schemas.engine import EngineWrite

MAX_PAGE_SIZE = 100


async def list_engines(
    session: AsyncSession, *, skip: int = 0, limit: int = 50
) -> list[Engine]:
    """Return engines ordered by id."""
    stmt = select(Engine).order_by(Engine.id).offset(skip).limit(min(limit, MAX_PAGE_SIZE))
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_engine(session: AsyncSession, engine_id: int) -> Engine | None:
    return await session.get(Engine, engine_id)


async def engine_exists(session: AsyncSession, engine_id: int) -> bool:
    result = await session.execute(select(exists().where(Engine.id == engine_id)))
    return bool(result.scalar())


async def engine_in_use(session: AsyncSession, engine_id: int) -> bool:
    """Whether any car or motorcycle still references the engine."""
    stmt = select(
        or_(
            exists().where(Car.engine_id == engine_id),
            exists().where(Motorcycle.engine_id == engine_id),
        )
    )
    result = await session.execute(stmt)
    return bool(result.scalar())


async def create_engine(session: AsyncSession, payload: EngineWrite) -> Engine:
    """Create a new engine."""
    engine = Engine(**payload.model_dump())
    session.add(engine)
    await session.commit()
    await session.refresh(engine)
    return engine


async def update_engine(
    session: AsyncSession, engine: Engine, payload: EngineWrite
) -> Engine:
    """Replace the attributes of an engine."""
    for field, value in payload.model_dump().items():
        setattr(engine, field, value)
    await session.commit()
    await session.refresh(engine)
    return engine


async def delete_engine(session: AsyncSession, engine: Engine) -> None:
    await session.delete(engine)
    await session.commit()
