"""Error types raised by the book store.

Every error carries a ``kind`` so callers can dispatch on it instead of
checking the concrete class.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"


class BookError(Exception):
    """Base class for the errors surfaced by the store."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(BookError):
    """A create or update request broke a field rule."""

    kind = ErrorKind.VALIDATION

    def __init__(self, reason: str) -> None:
        super().__init__(f"Validation error: {reason}")
        self.reason = reason


class BookNotFoundError(BookError):
    """An operation targeted an id that is not in the store."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, book_id: Optional[str]) -> None:
        super().__init__(f"Book with id '{book_id}' not found")
        self.book_id = book_id
