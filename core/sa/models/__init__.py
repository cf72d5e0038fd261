# core/sa/models/__init__.py
from .base import Base, TimestampMixin, utcnow
from .book import Book

__all__ = [
    'Base',
    'TimestampMixin',
    'utcnow',
    'Book',
]
