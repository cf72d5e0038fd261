# core/sa/repositories/__init__.py
from .book import BookRepository

__all__ = ['BookRepository']
