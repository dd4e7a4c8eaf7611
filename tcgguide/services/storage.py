"""
Durable key-value storage.

Favorites are persisted through a tiny capability: read the bytes under a
key, or replace them. Backends translate their own failures into
PersistenceError so callers handle one error type.
"""

import logging
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tcgguide.db.operations import get_value, set_value
from tcgguide.models.failure import PersistenceError

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Minimal persistence capability."""

    async def get(self, key: str) -> bytes | None:
        """Bytes stored under key, or None if absent. Raises PersistenceError."""
        ...

    async def set(self, key: str, value: bytes) -> None:
        """Replace the bytes under key. Raises PersistenceError."""
        ...


class SqlKeyValueStorage:
    """
    Key-value storage backed by a SQL table.

    Each `set` runs in its own committed transaction, so a value is durable
    once the call returns.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> bytes | None:
        try:
            async with self._session_factory() as session:
                return await get_value(session, key)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read {key!r}", detail=str(e)) from e

    async def set(self, key: str, value: bytes) -> None:
        try:
            async with self._session_factory() as session, session.begin():
                await set_value(session, key, value)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to write {key!r}", detail=str(e)) from e
        logger.debug("Stored %d bytes under %r", len(value), key)


class MemoryStorage:
    """In-process storage. Nothing survives the process."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self.values: dict[str, bytes] = dict(initial or {})

    async def get(self, key: str) -> bytes | None:
        return self.values.get(key)

    async def set(self, key: str, value: bytes) -> None:
        self.values[key] = value
