# core/sa/repositories/book.py
from decimal import Decimal
from typing import Optional, List, Tuple, Sequence
from sqlalchemy import func, and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from core.exceptions import DuplicateIsbnError
from core.models.book import BookCategory, LOW_STOCK_THRESHOLD
from ..models import Book

# Named orderings shared by the service, the API and the CLI
SORT_ORDERS = {
    "price-asc": (Book.price.asc(),),
    "price-desc": (Book.price.desc(),),
    "title": (Book.title.asc(),),
    "author": (Book.author.asc(),),
}


class BookRepository:
    """Repository for managing Book entities.

    Every lookup goes through ``find``, which takes SQLAlchemy filter
    expressions and an ordering. Ties are always broken by ``id`` so results
    come back in insertion order when sort keys are equal.
    """

    def __init__(self, session: Session):
        self.session = session

    def find(self, *criteria, order_by: Sequence = ()) -> List[Book]:
        """Get books matching all criteria.

        Args:
            criteria: SQLAlchemy boolean expressions over Book columns
            order_by: Column orderings applied before the id tie-break

        Returns:
            List of matching Book objects
        """
        query = self.session.query(Book)
        if criteria:
            query = query.filter(*criteria)
        return query.order_by(*order_by, Book.id.asc()).all()

    # Single record lookups

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """Get a book by its ID"""
        return self.session.get(Book, book_id)

    def get_by_isbn(self, isbn: str) -> Optional[Book]:
        """Get a book by its ISBN"""
        return self.session.query(Book).filter(Book.isbn == isbn).first()

    def exists_by_id(self, book_id: int) -> bool:
        return self.session.query(Book.id).filter(Book.id == book_id).first() is not None

    def exists_by_isbn(self, isbn: str) -> bool:
        return self.session.query(Book.id).filter(Book.isbn == isbn).first() is not None

    def count(self) -> int:
        return self.session.query(func.count(Book.id)).scalar() or 0

    # Filters

    def find_all(self) -> List[Book]:
        return self.find()

    def find_by_author(self, author: str) -> List[Book]:
        """Case-insensitive substring match on author"""
        return self.find(Book.author.icontains(author, autoescape=True))

    def find_by_title(self, title: str) -> List[Book]:
        """Case-insensitive substring match on title"""
        return self.find(Book.title.icontains(title, autoescape=True))

    def find_by_category(self, category: BookCategory) -> List[Book]:
        return self.find(Book.category == category)

    def find_by_author_and_category(self, author: str, category: BookCategory) -> List[Book]:
        return self.find(
            and_(
                Book.author.icontains(author, autoescape=True),
                Book.category == category
            )
        )

    def find_by_title_and_author(self, title: str, author: str) -> List[Book]:
        return self.find(
            and_(
                Book.title.icontains(title, autoescape=True),
                Book.author.icontains(author, autoescape=True)
            )
        )

    def find_in_stock(self) -> List[Book]:
        return self.find(Book.stock > 0)

    def find_out_of_stock(self) -> List[Book]:
        return self.find(Book.stock == 0)

    def find_low_stock(self) -> List[Book]:
        """Books with fewer than LOW_STOCK_THRESHOLD units, including out of stock"""
        return self.find(Book.stock < LOW_STOCK_THRESHOLD)

    def find_by_price_between(self, min_price: Decimal, max_price: Decimal) -> List[Book]:
        """Inclusive on both bounds"""
        return self.find(Book.price.between(min_price, max_price))

    def find_by_price_at_most(self, max_price: Decimal) -> List[Book]:
        return self.find(Book.price <= max_price)

    def find_by_price_at_least(self, min_price: Decimal) -> List[Book]:
        return self.find(Book.price >= min_price)

    def search_by_title_or_author(self, term: str) -> List[Book]:
        """Case-insensitive substring match on title OR author"""
        return self.find(
            or_(
                Book.title.icontains(term, autoescape=True),
                Book.author.icontains(term, autoescape=True)
            )
        )

    def find_sorted(self, sort_key: str) -> List[Book]:
        """Get all books in one of the named SORT_ORDERS.

        Raises:
            KeyError: If sort_key is not a known ordering
        """
        return self.find(order_by=SORT_ORDERS[sort_key])

    # Aggregates

    def count_by_category(self) -> List[Tuple[BookCategory, int]]:
        return (
            self.session.query(Book.category, func.count(Book.id))
            .group_by(Book.category)
            .order_by(Book.category)
            .all()
        )

    def average_price_by_category(self) -> List[Tuple[BookCategory, Decimal]]:
        rows = (
            self.session.query(Book.category, func.avg(Book.price))
            .group_by(Book.category)
            .order_by(Book.category)
            .all()
        )
        return [(category, Decimal(str(average))) for category, average in rows]

    # Writes

    def save(self, book: Book) -> Book:
        """Insert or update a book and commit.

        A unique constraint violation on isbn is reported as a duplicate ISBN.

        Raises:
            DuplicateIsbnError: If another row already holds the book's ISBN
        """
        self.session.add(book)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if "isbn" in str(e.orig).lower():
                raise DuplicateIsbnError(book.isbn) from e
            raise
        return book

    def save_all(self, books: List[Book]) -> List[Book]:
        self.session.add_all(books)
        self.session.commit()
        return books

    def delete(self, book: Book) -> None:
        self.session.delete(book)
        self.session.commit()
