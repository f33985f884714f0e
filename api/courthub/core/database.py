"""Async database engine and session management.

The ``Database`` object owns the engine for the life of the process. It is
built once from settings; the app lifespan creates tables on startup and
disposes the pool on shutdown. Route handlers receive sessions through the
``get_db`` dependency rather than touching the engine directly.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from courthub.core.config import settings
from courthub.models.base import Base

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, url: str, echo: bool = False):
        engine_kwargs: dict = {"echo": echo, "pool_pre_ping": True}
        if not url.startswith("sqlite"):
            engine_kwargs.update(pool_size=20, max_overflow=10)

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database pool disposed")


database = Database(settings.database_url, echo=settings.database_echo)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session. Used as a FastAPI dependency."""
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
