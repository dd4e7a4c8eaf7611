"""
Database engine and session management.

Provides the async SQLAlchemy engine and session factory backing local storage.
"""

import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tcgguide.config import settings
from tcgguide.models.db import Base

logger = logging.getLogger(__name__)


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """
    Create an async engine.

    Args:
        database_url: SQLAlchemy URL. Defaults to settings.database_url.
    """
    return create_async_engine(
        database_url or settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to `engine`."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create the key-value table if it does not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Local storage ready at %s", engine.url.render_as_string(hide_password=True))


async def drop_db(engine: AsyncEngine) -> None:
    """Drop the storage tables. Test teardown only."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
