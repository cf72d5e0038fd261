# core/services/book_service.py

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Tuple

from sqlalchemy.orm import Session

from core.exceptions import BookNotFoundError, DuplicateIsbnError, InvalidArgumentError
from core.models.book import BookCategory, BookRequest
from core.sa.models import Book
from core.sa.repositories.book import BookRepository, SORT_ORDERS

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    """Quantize a money amount to the two decimal places the store keeps"""
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


class BookService:
    """Business operations over the book catalog.

    Each write is one unit of work: the repository commits on success and
    rolls back on failure. Lookups by identifier raise BookNotFoundError
    instead of returning None.
    """

    def __init__(self, session: Session):
        self.session = session
        self.repo = BookRepository(session)

    def create_book(self, request: BookRequest) -> Book:
        if self.repo.exists_by_isbn(request.isbn):
            logger.warning("Rejected new book with duplicate ISBN %s", request.isbn)
            raise DuplicateIsbnError(request.isbn)

        book = Book()
        self._apply(book, request)
        book.stamp_created()
        self.repo.save(book)
        logger.info("Created book %s (ISBN %s)", book.id, book.isbn)
        return book

    def get_all_books(self) -> List[Book]:
        return self.repo.find_all()

    def get_book_by_id(self, book_id: int) -> Book:
        book = self.repo.get_by_id(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def get_book_by_isbn(self, isbn: str) -> Book:
        book = self.repo.get_by_isbn(isbn)
        if book is None:
            raise BookNotFoundError(isbn, field="ISBN")
        return book

    def update_book(self, book_id: int, request: BookRequest) -> Book:
        """Replace every mutable field of a book.

        Raises:
            BookNotFoundError: If no book has this ID
            DuplicateIsbnError: If the new ISBN belongs to a different book
        """
        book = self.get_book_by_id(book_id)

        same_isbn = self.repo.get_by_isbn(request.isbn)
        if same_isbn is not None and same_isbn.id != book_id:
            logger.warning("Rejected update of book %s: ISBN %s is taken by book %s",
                           book_id, request.isbn, same_isbn.id)
            raise DuplicateIsbnError(request.isbn)

        self._apply(book, request)
        book.touch()
        self.repo.save(book)
        logger.info("Updated book %s", book_id)
        return book

    def delete_book(self, book_id: int) -> None:
        book = self.get_book_by_id(book_id)
        self.repo.delete(book)
        logger.info("Deleted book %s", book_id)

    def update_stock(self, book_id: int, stock: int) -> Book:
        """Set the stock of a book, leaving every other field untouched.

        The 0-999999 range enforced on create/update is not re-checked here.
        """
        book = self.get_book_by_id(book_id)
        previous = book.stock
        book.stock = stock
        book.touch()
        self.repo.save(book)
        logger.info("Stock of book %s changed from %s to %s", book_id, previous, stock)
        return book

    # Queries

    def get_books_by_author(self, author: str) -> List[Book]:
        return self.repo.find_by_author(author)

    def get_books_by_title(self, title: str) -> List[Book]:
        return self.repo.find_by_title(title)

    def get_books_by_category(self, category: BookCategory) -> List[Book]:
        return self.repo.find_by_category(category)

    def get_books_by_author_and_category(self, author: str, category: BookCategory) -> List[Book]:
        return self.repo.find_by_author_and_category(author, category)

    def get_books_by_title_and_author(self, title: str, author: str) -> List[Book]:
        return self.repo.find_by_title_and_author(title, author)

    def get_books_with_stock(self) -> List[Book]:
        return self.repo.find_in_stock()

    def get_books_out_of_stock(self) -> List[Book]:
        return self.repo.find_out_of_stock()

    def get_books_with_low_stock(self) -> List[Book]:
        return self.repo.find_low_stock()

    def get_books_by_price_range(self, min_price: Decimal, max_price: Decimal) -> List[Book]:
        return self.repo.find_by_price_between(min_price, max_price)

    def get_books_by_max_price(self, max_price: Decimal) -> List[Book]:
        return self.repo.find_by_price_at_most(max_price)

    def get_books_by_min_price(self, min_price: Decimal) -> List[Book]:
        return self.repo.find_by_price_at_least(min_price)

    def search_books(self, term: str) -> List[Book]:
        return self.repo.search_by_title_or_author(term)

    def get_books_sorted(self, sort_key: str) -> List[Book]:
        if sort_key not in SORT_ORDERS:
            raise InvalidArgumentError(
                f"Unknown sort order: {sort_key}. Must be one of: {', '.join(SORT_ORDERS)}"
            )
        return self.repo.find_sorted(sort_key)

    def get_books_ordered_by_price_asc(self) -> List[Book]:
        return self.get_books_sorted("price-asc")

    def get_books_ordered_by_price_desc(self) -> List[Book]:
        return self.get_books_sorted("price-desc")

    def get_books_ordered_by_title(self) -> List[Book]:
        return self.get_books_sorted("title")

    def get_books_ordered_by_author(self) -> List[Book]:
        return self.get_books_sorted("author")

    def exists_by_isbn(self, isbn: str) -> bool:
        return self.repo.exists_by_isbn(isbn)

    def count_books(self) -> int:
        return self.repo.count()

    # Statistics

    def get_statistics_by_category(self) -> List[Tuple[BookCategory, int]]:
        """Number of books per category, for categories that have any"""
        return [(category, count) for category, count in self.repo.count_by_category()]

    def get_average_price_by_category(self) -> List[Tuple[BookCategory, Decimal]]:
        """Mean price per category, rounded to cents"""
        return [
            (category, to_cents(average))
            for category, average in self.repo.average_price_by_category()
        ]

    @staticmethod
    def get_categories() -> List[BookCategory]:
        return list(BookCategory)

    @staticmethod
    def _apply(book: Book, request: BookRequest) -> None:
        book.title = request.title
        book.author = request.author
        book.isbn = request.isbn
        book.description = request.description
        book.price = to_cents(request.price)
        book.stock = request.stock
        book.category = request.category
