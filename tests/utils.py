# tests/utils.py
from decimal import Decimal
from core.models.book import BookCategory, BookRequest


def make_request(**overrides) -> BookRequest:
    """Build a valid BookRequest, overriding any field"""
    data = {
        "title": "Test Book",
        "author": "Test Author",
        "isbn": "1234567890",
        "description": "Test description",
        "price": Decimal("19.99"),
        "stock": 10,
        "category": BookCategory.FICTION,
    }
    data.update(overrides)
    return BookRequest(**data)


def make_payload(**overrides) -> dict:
    """Build a valid JSON body for the create/update endpoints"""
    data = {
        "title": "Test Book",
        "author": "Test Author",
        "isbn": "1234567890",
        "description": "Test description",
        "price": 19.99,
        "stock": 10,
        "category": "Fiction",
    }
    data.update(overrides)
    return data


def titles(books) -> list:
    """Titles of ORM books or JSON book dicts, in order"""
    return [book["title"] if isinstance(book, dict) else book.title for book in books]
