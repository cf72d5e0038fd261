# api/errors.py

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import BookNotFoundError, DuplicateIsbnError, InvalidArgumentError
from core.sa.models import utcnow
from api.schemas.book import ErrorResponse

logger = logging.getLogger(__name__)

_REQUIRED = ("missing", "string_blank", "string_type", "none_required")

# Human readable messages per request field, keyed by pydantic error type
FIELD_MESSAGES: Dict[str, Dict[str, str]] = {
    "title": {
        **{kind: "Title is required" for kind in _REQUIRED},
        "string_too_short": "Title is required",
        "string_too_long": "Title must be between 1 and 255 characters",
    },
    "author": {
        **{kind: "Author is required" for kind in _REQUIRED},
        "string_too_short": "Author is required",
        "string_too_long": "Author must be between 1 and 255 characters",
    },
    "isbn": {
        **{kind: "ISBN is required" for kind in _REQUIRED},
        "string_pattern_mismatch": "ISBN must be 10 or 13 digits",
    },
    "description": {
        "string_type": "Description must be text",
        "string_too_long": "Description cannot exceed 1000 characters",
    },
    "price": {
        "missing": "Price is required",
        "decimal_type": "Price is required",
        "decimal_parsing": "Price must be a decimal number",
        "greater_than": "Price must be greater than 0",
        "less_than_equal": "Price cannot exceed 9999.99",
        "decimal_max_places": "Price cannot have more than 2 decimal places",
    },
    "stock": {
        "missing": "Stock is required",
        "int_type": "Stock is required",
        "int_parsing": "Stock must be a whole number",
        "int_from_float": "Stock must be a whole number",
        "greater_than_equal": "Stock cannot be negative",
        "less_than_equal": "Stock cannot exceed 999999",
    },
    "category": {
        "missing": "Category is required",
        "enum": "Category must be one of the supported categories",
    },
}


def error_body(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    body = ErrorResponse(
        timestamp=utcnow(),
        status=status_code,
        error=error,
        message=message,
        details=details,
    )
    return jsonable_encoder(body)


def validation_details(exc: RequestValidationError) -> Dict[str, str]:
    """Collapse pydantic errors into one message per field"""
    details: Dict[str, str] = {}
    for err in exc.errors():
        if err.get("type") == "json_invalid":
            # loc ends with the character offset, not a field name
            details.setdefault("body", "Request body is not valid JSON")
            continue
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = loc[0] if loc else "body"
        message = FIELD_MESSAGES.get(field, {}).get(err.get("type"), err.get("msg", "Invalid value"))
        details.setdefault(field, message)
    return details


def register_exception_handlers(app: FastAPI) -> None:
    """Map service errors onto HTTP responses"""

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(
                status.HTTP_400_BAD_REQUEST,
                "Validation error",
                "The provided data is invalid",
                validation_details(exc),
            ),
        )

    @app.exception_handler(BookNotFoundError)
    async def handle_book_not_found(request: Request, exc: BookNotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=error_body(status.HTTP_404_NOT_FOUND, "Book not found", str(exc)),
        )

    @app.exception_handler(DuplicateIsbnError)
    async def handle_duplicate_isbn(request: Request, exc: DuplicateIsbnError):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=error_body(status.HTTP_409_CONFLICT, "Duplicate ISBN", str(exc)),
        )

    @app.exception_handler(InvalidArgumentError)
    async def handle_invalid_argument(request: Request, exc: InvalidArgumentError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(status.HTTP_400_BAD_REQUEST, "Invalid argument", str(exc)),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Internal server error",
                "An unexpected error occurred",
            ),
        )
