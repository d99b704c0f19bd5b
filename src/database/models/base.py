from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

MAX_INTEGER_ID = 2 ** 63 - 1


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_storable_id(value: int) -> bool:
    """Whether an integer fits the signed 64-bit primary key columns."""
    return 0 < value <= MAX_INTEGER_ID


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, as returned by SQLite."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base of every model.

    ``__label__`` is the human-readable name used in error messages about a
    missing record of the model.
    """
    __label__ = "Record"


class IdMixin:
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )


class TimestampMixin:
    """Adds ``created_at`` and an ``updated_at`` refreshed on every update."""
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, onupdate=utc_now
    )
