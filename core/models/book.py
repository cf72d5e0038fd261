# core/models/book.py

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from core.exceptions import InvalidArgumentError

ISBN_PATTERN = r"^(?:[0-9]{10}|[0-9]{13})$"
MAX_PRICE = Decimal("9999.99")
MAX_STOCK = 999999
LOW_STOCK_THRESHOLD = 10

# Prices travel as JSON numbers, not strings
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class BookCategory(str, Enum):
    """Book classification. The value is the display label used on the wire."""
    FICTION = "Fiction"
    NON_FICTION = "Non-Fiction"
    SCIENCE_FICTION = "Science Fiction"
    FANTASY = "Fantasy"
    MYSTERY = "Mystery"
    THRILLER = "Thriller"
    ROMANCE = "Romance"
    BIOGRAPHY = "Biography"
    HISTORY = "History"
    SCIENCE = "Science"
    TECHNOLOGY = "Technology"
    BUSINESS = "Business"
    SELF_HELP = "Self-Help"
    COOKING = "Cooking"
    TRAVEL = "Travel"
    CHILDREN = "Children"
    YOUNG_ADULT = "Young Adult"
    ACADEMIC = "Academic"
    REFERENCE = "Reference"
    OTHER = "Other"

    @classmethod
    def _missing_(cls, value):
        # Accept the symbolic name and case-insensitive labels as well
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_").replace(" ", "_")
            return cls.__members__.get(key)
        return None

    @classmethod
    def parse(cls, value: str) -> "BookCategory":
        """Resolve a display label or symbolic name to a category.

        Raises:
            InvalidArgumentError: If the value names no category
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgumentError(f"Unknown book category: {value}") from None

    @property
    def display_name(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class BookRequest(BaseModel):
    """Payload for creating or fully replacing a book"""
    title: str = Field(min_length=1, max_length=255)
    author: str = Field(min_length=1, max_length=255)
    isbn: str = Field(pattern=ISBN_PATTERN)
    description: Optional[str] = Field(default=None, max_length=1000)
    price: Decimal = Field(gt=0, le=MAX_PRICE, decimal_places=2)
    stock: int = Field(ge=0, le=MAX_STOCK)
    category: BookCategory

    @field_validator("title", "author", "isbn", mode="before")
    @classmethod
    def not_blank(cls, value):
        if isinstance(value, str) and not value.strip():
            raise PydanticCustomError("string_blank", "Value must not be blank")
        return value


class BookResponse(BaseModel):
    """Book as returned to API clients"""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    title: str
    author: str
    isbn: str
    description: Optional[str] = None
    price: Price
    stock: int
    category: BookCategory
    created_at: datetime
    updated_at: datetime
