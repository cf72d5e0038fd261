# core/sa/models/book.py
from decimal import Decimal
from sqlalchemy import String, Integer, Numeric, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, TimestampMixin
from core.models.book import BookCategory


class Book(Base, TimestampMixin):
    __tablename__ = 'books'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    isbn: Mapped[str] = mapped_column(String(13), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False)
    # Stored by symbolic name (FICTION), exchanged by label (Fiction)
    category: Mapped[BookCategory] = mapped_column(
        SAEnum(BookCategory, name='book_category', native_enum=False, length=32),
        nullable=False
    )

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Book):
            return NotImplemented
        return self.isbn == other.isbn

    def __hash__(self):
        return hash(self.isbn)

    def __repr__(self):
        return (
            f"Book(id={self.id!r}, title={self.title!r}, author={self.author!r}, "
            f"isbn={self.isbn!r}, price={self.price!r}, stock={self.stock!r}, "
            f"category={self.category!s})"
        )
