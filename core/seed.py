# core/seed.py

import logging
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from core.models.book import BookCategory
from core.sa.models import Book
from core.sa.repositories.book import BookRepository

logger = logging.getLogger(__name__)

# (title, author, isbn, description, price, stock, category)
SAMPLE_BOOKS = [
    ("The Lord of the Rings", "J.R.R. Tolkien", "9788445071405",
     "An epic fantasy story about the fight against evil", "29.99", 50, BookCategory.FANTASY),
    ("1984", "George Orwell", "9788497594257",
     "A dystopia about totalitarian control", "19.99", 30, BookCategory.FICTION),
    ("100 Years of Solitude", "Gabriel García Márquez", "9788497592208",
     "The story of the Buendía family in Macondo", "24.99", 25, BookCategory.FICTION),
    ("The Little Prince", "Antoine de Saint-Exupéry", "9788497592796",
     "A poetic story about friendship and love", "15.99", 100, BookCategory.CHILDREN),
    ("Don Quixote de la Mancha", "Miguel de Cervantes", "9788497594258",
     "The masterpiece of Spanish literature", "34.99", 20, BookCategory.FICTION),
    ("Clean Code", "Robert C. Martin", "9780132350884",
     "Guide to writing clean and maintainable code", "45.99", 15, BookCategory.TECHNOLOGY),
    ("Design Patterns", "Erich Gamma, Richard Helm, Ralph Johnson, John Vlissides", "9780201633610",
     "Design patterns in object-oriented programming", "55.99", 10, BookCategory.TECHNOLOGY),
    ("Steve Jobs", "Walter Isaacson", "9788499893404",
     "The authorized biography of the co-founder of Apple", "39.99", 35, BookCategory.BIOGRAPHY),
    ("Sapiens: De animales a dioses", "Yuval Noah Harari", "9788499926223",
     "Brief history of humanity", "27.99", 40, BookCategory.HISTORY),
    ("El arte de la guerra", "Sun Tzu", "9788497594259",
     "Chinese military treatise on strategy", "18.99", 60, BookCategory.BUSINESS),
    ("The 7 Habits of Highly Effective People", "Stephen R. Covey", "9788497594260",
     "Guide for personal and professional development", "22.99", 45, BookCategory.SELF_HELP),
    ("Cooking for Beginners", "María García", "9788497594261",
     "Easy and delicious recipes to start cooking", "32.99", 25, BookCategory.COOKING),
    ("Traveling in Spain", "Carlos López", "9788497594262",
     "Complete guide to traveling in Spain", "28.99", 30, BookCategory.TRAVEL),
    ("Harry Potter y la piedra filosofal", "J.K. Rowling", "9788497594263",
     "The first book in the Harry Potter saga", "21.99", 80, BookCategory.YOUNG_ADULT),
    ("The Da Vinci Code", "Dan Brown", "9788497594264",
     "A thriller about a religious mystery", "23.99", 55, BookCategory.THRILLER),
]


def build_sample_books() -> List[Book]:
    books = []
    for title, author, isbn, description, price, stock, category in SAMPLE_BOOKS:
        book = Book(
            title=title,
            author=author,
            isbn=isbn,
            description=description,
            price=Decimal(price),
            stock=stock,
            category=category,
        )
        book.stamp_created()
        books.append(book)
    return books


def seed_sample_books(session: Session) -> int:
    """Load the sample catalog if the books table is empty.

    Returns:
        Number of books inserted (0 when the table already had data)
    """
    repo = BookRepository(session)
    if repo.count() > 0:
        logger.info("Books table is not empty, skipping sample data")
        return 0

    books = repo.save_all(build_sample_books())
    logger.info("Loaded %d sample books into the database", len(books))
    return len(books)
