"""Async engine, session factory and the per-request session dependency."""
from collections.abc import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from loyalty.core.config import Settings


class Base(DeclarativeBase):
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    connect_args = {}
    if settings.database_url.startswith("sqlite"):
        # seconds to wait on a locked database before failing
        connect_args["timeout"] = 30
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """One session per request; rolled back if the handler fails."""
    async with request.app.state.sessionmaker() as db:
        try:
            yield db
        except Exception:
            await db.rollback()
            raise
