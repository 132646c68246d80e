"""
Async SQLAlchemy engine and session factory.

Nothing here is created at import time; the ``ServiceContext`` owns the
engine for the lifetime of a service.
"""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the pooled engine described by *settings*."""
    kwargs = {"echo": settings.db_echo}
    if not settings.database_url.startswith("sqlite"):
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=settings.db_pool_recycle,
        )
    return create_async_engine(settings.database_url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency function — use in FastAPI `Depends(get_db_session)`."""
    context = request.app.state.context
    async with context.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
