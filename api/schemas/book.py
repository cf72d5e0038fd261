# api/schemas/book.py
from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel

from core.models.book import BookRequest, BookResponse

__all__ = [
    'BookRequest',
    'BookResponse',
    'ErrorResponse',
]


class ErrorResponse(BaseModel):
    """Envelope for every error returned by the API"""
    timestamp: datetime
    status: int
    error: str
    message: str
    details: Optional[Dict[str, str]] = None
