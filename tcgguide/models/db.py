"""
SQLAlchemy ORM models for persistent storage.

Local storage is a plain key-value table; each key holds one opaque blob.
"""

from datetime import datetime

from sqlalchemy import DateTime, LargeBinary, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class KeyValueDB(Base):
    """
    A single stored value.

    The favorites list lives under one key as serialized JSON bytes.
    """

    __tablename__ = "key_values"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[bytes] = mapped_column(LargeBinary)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<KeyValueDB(key={self.key}, size={len(self.value)})>"
