# core/sa/models/base.py
from datetime import datetime, timedelta, UTC
from sqlalchemy.orm import DeclarativeBase, mapped_column, Mapped
from sqlalchemy import DateTime


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching what SQLite hands back"""
    return datetime.now(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all models"""
    pass


class TimestampMixin:
    """Mixin to add created_at and updated_at columns"""
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def stamp_created(self) -> None:
        """Set both timestamps to the same instant before the first insert"""
        now = utcnow()
        self.created_at = now
        self.updated_at = now

    def touch(self) -> None:
        """Refresh updated_at, always moving it strictly forward"""
        now = utcnow()
        if self.updated_at is not None and now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now
