import logging
import math
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Dict, List, Optional

from bookshelf.book import Book, CreateBookData, UpdateBookData
from bookshelf.config import settings
from bookshelf.errors import BookError, BookNotFoundError, ValidationError
from bookshelf.result import Failure, Result, Success
from bookshelf.validators import BookValidator, generate_id

logger = logging.getLogger(__name__)


@dataclass
class Page:
    """One page of books plus the numbers needed to navigate around it."""

    books: List[Book] = field(default_factory=list)
    total_books: int = 0
    total_pages: int = 0
    current_page: int = 1
    has_next_page: bool = False
    has_previous_page: bool = False


class Library:
    """Manages an in-memory collection of books.

    Books go in and come out as copies, so nothing a caller does to a
    returned Book reaches the stored one.
    """

    def __init__(self) -> None:
        self._books: Dict[str, Book] = {}
        self._lock = RLock()

    # ------------------------- Core operations ------------------------- #
    def create(self, data: CreateBookData) -> Book:
        """Validate ``data``, store a new book and return a copy of it."""
        try:
            BookValidator.validate_create(data)
        except ValidationError as e:
            logger.warning(f"Rejected book creation: {e}")
            raise

        book = Book(
            id=generate_id(),
            title=BookValidator.sanitize_string(data["title"]),
            author=BookValidator.sanitize_string(data["author"]),
            year=data["year"],
        )
        with self._lock:
            self._books[book.id] = book
        logger.info(f"Book created: id={book.id}, title={book.title!r}")
        return book.copy()

    def safe_create(self, data: CreateBookData) -> Result[Book]:
        try:
            return Success(self.create(data))
        except BookError as e:
            return Failure(e)

    def find_by_id(self, book_id: str) -> Optional[Book]:
        with self._lock:
            book = self._books.get(book_id)
            return book.copy() if book else None

    def find_all(self) -> List[Book]:
        with self._lock:
            return [book.copy() for book in self._books.values()]

    def update(self, book_id: str, data: UpdateBookData) -> Optional[Book]:
        """Apply the supplied fields to an existing book.

        Validation runs before the id lookup, so an invalid request against an
        unknown id raises ValidationError rather than returning None.
        """
        try:
            BookValidator.validate_update(data)
        except ValidationError as e:
            logger.warning(f"Rejected update for {book_id}: {e}")
            raise

        with self._lock:
            existing = self._books.get(book_id)
            if not existing:
                logger.debug(f"Update skipped, no book with id {book_id}")
                return None

            updated = existing.copy()
            if data.get("title") is not None:
                updated.title = BookValidator.sanitize_string(data["title"])
            if data.get("author") is not None:
                updated.author = BookValidator.sanitize_string(data["author"])
            if data.get("year") is not None:
                updated.year = data["year"]

            self._books[book_id] = updated
        logger.info(f"Book updated: id={book_id}")
        return updated.copy()

    def safe_update(self, book_id: str, data: UpdateBookData) -> Result[Book]:
        try:
            book = self.update(book_id, data)
        except BookError as e:
            return Failure(e)
        if book is None:
            return Failure(BookNotFoundError(book_id))
        return Success(book)

    def delete(self, book_id: str) -> bool:
        with self._lock:
            removed = self._books.pop(book_id, None) is not None
        if removed:
            logger.info(f"Book deleted: id={book_id}")
        return removed

    def safe_delete(self, book_id: str) -> None:
        """Delete a book, raising BookNotFoundError when the id is unknown."""
        if not self.delete(book_id):
            raise BookNotFoundError(book_id)

    # ------------------------- Queries ------------------------- #
    def find_by_author(self, author: str) -> List[Book]:
        """Case-insensitive partial match on author."""
        needle = author.strip().lower()
        return [b for b in self.find_all() if needle in b.author.lower()]

    def find_by_title(self, title: str) -> List[Book]:
        """Case-insensitive partial match on title."""
        needle = title.strip().lower()
        return [b for b in self.find_all() if needle in b.title.lower()]

    def find_by_year(self, year: int) -> List[Book]:
        return [b for b in self.find_all() if b.year == year]

    def count(self) -> int:
        with self._lock:
            return len(self._books)

    def is_empty(self) -> bool:
        return self.count() == 0

    def clear(self) -> None:
        with self._lock:
            removed = len(self._books)
            self._books.clear()
        logger.info(f"Library cleared, {removed} books removed")

    def get_paginated(self, page: int = 1, page_size: Optional[int] = None) -> Page:
        """Return one page of books, clamping ``page`` into the valid range.

        An empty library still reports page 1 of 0.
        """
        if page_size is None:
            page_size = settings.default_page_size
        if page_size < 1:
            raise ValidationError("Page size must be a positive integer")

        all_books = self.find_all()
        total_books = len(all_books)
        total_pages = math.ceil(total_books / page_size)
        current_page = max(1, min(page, total_pages))
        start = (current_page - 1) * page_size

        return Page(
            books=all_books[start:start + page_size],
            total_books=total_books,
            total_pages=total_pages,
            current_page=current_page,
            has_next_page=current_page < total_pages,
            has_previous_page=current_page > 1,
        )

    def get_statistics(self) -> Dict[str, Any]:
        """Get collection statistics."""
        books = self.find_all()
        author_counts: Dict[str, int] = {}
        for book in books:
            author_counts[book.author] = author_counts.get(book.author, 0) + 1

        top_author: Optional[str] = None
        top_count = 0
        for author, n in author_counts.items():
            if n > top_count:
                top_author, top_count = author, n

        years = [book.year for book in books]
        return {
            "total_books": len(books),
            "unique_authors": len(author_counts),
            "min_year": min(years) if years else None,
            "max_year": max(years) if years else None,
            "most_prolific_author": top_author,
            "most_prolific_count": top_count,
        }
