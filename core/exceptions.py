# core/exceptions.py


class BooksServiceError(Exception):
    """Base class for errors raised by the books service"""
    pass


class BookNotFoundError(BooksServiceError):
    """Raised when no book matches the requested identifier"""

    def __init__(self, value, field: str = "ID"):
        self.field = field
        self.value = value
        super().__init__(f"Book not found with {field}: {value}")


class DuplicateIsbnError(BooksServiceError):
    """Raised when a book with the same ISBN already exists"""

    def __init__(self, isbn: str):
        self.isbn = isbn
        super().__init__(f"A book with ISBN {isbn} already exists")


class InvalidArgumentError(BooksServiceError):
    """Raised for malformed arguments that are not body validation errors"""
    pass
