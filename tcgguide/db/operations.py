"""
Database CRUD operations.

Key-value reads and writes used by local storage.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tcgguide.models.db import KeyValueDB


async def get_value(session: AsyncSession, key: str) -> bytes | None:
    """
    Get the value stored under `key`.

    Returns None if the key has never been written.
    """
    result = await session.execute(select(KeyValueDB.value).where(KeyValueDB.key == key))
    return result.scalar_one_or_none()


async def set_value(session: AsyncSession, key: str, value: bytes) -> None:
    """
    Store `value` under `key`, replacing any previous value.

    Does not commit; the caller owns the transaction.
    """
    existing = await session.get(KeyValueDB, key)
    if existing is None:
        session.add(KeyValueDB(key=key, value=value))
    else:
        existing.value = value
    await session.flush()

