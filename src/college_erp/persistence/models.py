"""SQLAlchemy models for the key-value persistence table."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy
from typing import Any

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class KeyValueEntry(Base):
    """One stored document, addressed by key."""

    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __init__(self, key: str, value: str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.key = key
        self.value = value

    def __repr__(self) -> str:
        return f"<KeyValueEntry(key={self.key!r}, size={len(self.value)})>"
