# api/routes/books.py

from decimal import Decimal
from typing import List, Tuple
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from core.sa.database import get_db
from core.services.book_service import BookService
from core.models.book import BookCategory, Price
from api.schemas.book import BookRequest, BookResponse

router = APIRouter(prefix="/api/books", tags=["books"])


def get_book_service(db: Session = Depends(get_db)) -> BookService:
    return BookService(db)


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
def create_book(request: BookRequest, service: BookService = Depends(get_book_service)):
    """Create a new book. The ISBN must not be in use."""
    return service.create_book(request)


@router.get("", response_model=List[BookResponse])
def get_all_books(service: BookService = Depends(get_book_service)):
    return service.get_all_books()


@router.get("/isbn/{isbn}", response_model=BookResponse)
def get_book_by_isbn(isbn: str, service: BookService = Depends(get_book_service)):
    return service.get_book_by_isbn(isbn)


@router.get("/author/{author}", response_model=List[BookResponse])
def get_books_by_author(author: str, service: BookService = Depends(get_book_service)):
    """Books whose author contains the given text, ignoring case"""
    return service.get_books_by_author(author)


@router.get("/title/{title}", response_model=List[BookResponse])
def get_books_by_title(title: str, service: BookService = Depends(get_book_service)):
    """Books whose title contains the given text, ignoring case"""
    return service.get_books_by_title(title)


@router.get("/category/{category}", response_model=List[BookResponse])
def get_books_by_category(category: str, service: BookService = Depends(get_book_service)):
    """
    Books in a category. Accepts the display label ("Self-Help")
    or the symbolic name ("SELF_HELP").
    """
    return service.get_books_by_category(BookCategory.parse(category))


@router.get("/in-stock", response_model=List[BookResponse])
def get_books_with_stock(service: BookService = Depends(get_book_service)):
    return service.get_books_with_stock()


@router.get("/out-of-stock", response_model=List[BookResponse])
def get_books_out_of_stock(service: BookService = Depends(get_book_service)):
    return service.get_books_out_of_stock()


@router.get("/price-range", response_model=List[BookResponse])
def get_books_by_price_range(
    min_price: Decimal = Query(..., alias="minPrice", description="Lowest price, inclusive"),
    max_price: Decimal = Query(..., alias="maxPrice", description="Highest price, inclusive"),
    service: BookService = Depends(get_book_service)
):
    return service.get_books_by_price_range(min_price, max_price)


@router.get("/max-price/{max_price}", response_model=List[BookResponse])
def get_books_by_max_price(max_price: Decimal, service: BookService = Depends(get_book_service)):
    return service.get_books_by_max_price(max_price)


@router.get("/min-price/{min_price}", response_model=List[BookResponse])
def get_books_by_min_price(min_price: Decimal, service: BookService = Depends(get_book_service)):
    return service.get_books_by_min_price(min_price)


@router.get("/low-stock", response_model=List[BookResponse])
def get_books_with_low_stock(service: BookService = Depends(get_book_service)):
    """Books with fewer than 10 units in stock"""
    return service.get_books_with_low_stock()


@router.get("/search", response_model=List[BookResponse])
def search_books(
    q: str = Query(..., description="Text to look for in title or author"),
    service: BookService = Depends(get_book_service)
):
    return service.search_books(q)


@router.get("/sorted/{sort_key}", response_model=List[BookResponse])
def get_books_sorted(sort_key: str, service: BookService = Depends(get_book_service)):
    """All books ordered by price-asc, price-desc, title or author"""
    return service.get_books_sorted(sort_key)


@router.get("/exists/{isbn}", response_model=bool)
def exists_by_isbn(isbn: str, service: BookService = Depends(get_book_service)):
    return service.exists_by_isbn(isbn)


@router.get("/statistics/category", response_model=List[Tuple[BookCategory, int]])
def get_statistics_by_category(service: BookService = Depends(get_book_service)):
    """Pairs of [category, number of books]"""
    return [
        (category, count)
        for category, count in service.get_statistics_by_category()
    ]


@router.get("/statistics/average-price", response_model=List[Tuple[BookCategory, Price]])
def get_average_price_by_category(service: BookService = Depends(get_book_service)):
    """Pairs of [category, mean price]"""
    return [
        (category, average)
        for category, average in service.get_average_price_by_category()
    ]


@router.get("/categories", response_model=List[BookCategory])
def get_categories():
    return BookService.get_categories()


@router.get("/{book_id}", response_model=BookResponse)
def get_book_by_id(book_id: int, service: BookService = Depends(get_book_service)):
    return service.get_book_by_id(book_id)


@router.put("/{book_id}", response_model=BookResponse)
def update_book(book_id: int, request: BookRequest, service: BookService = Depends(get_book_service)):
    """Replace all fields of a book"""
    return service.update_book(book_id, request)


@router.patch("/{book_id}/stock", response_model=BookResponse)
def update_stock(
    book_id: int,
    stock: int = Query(..., description="New stock level"),
    service: BookService = Depends(get_book_service)
):
    return service.update_stock(book_id, stock)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: int, service: BookService = Depends(get_book_service)):
    service.delete_book(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
