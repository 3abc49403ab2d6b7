import random
import string
import time
from datetime import date
from typing import Any, Mapping, Optional

from bookshelf.config import settings
from bookshelf.errors import ValidationError

_ID_ALPHABET = string.digits + string.ascii_lowercase
_UPDATE_FIELDS = ("title", "author", "year")


def generate_id(prefix: Optional[str] = None) -> str:
    """Return a new book id built from the current time and a random suffix."""
    millis = int(time.time() * 1000)
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{prefix or settings.id_prefix}_{millis}_{suffix}"


class BookValidator:
    """Field rules for book create and update requests."""

    @staticmethod
    def current_year() -> int:
        return date.today().year

    @staticmethod
    def _is_non_empty_text(value: Any) -> bool:
        return isinstance(value, str) and bool(value.strip())

    @staticmethod
    def _check_year(year: Any) -> None:
        # bool is an int subclass, but True is not a year
        if not isinstance(year, int) or isinstance(year, bool):
            raise ValidationError("Year must be a valid integer")
        max_year = BookValidator.current_year()
        if year < 0 or year > max_year:
            raise ValidationError(f"Year must be between 0 and {max_year}")

    @staticmethod
    def _check_mapping(data: Any) -> None:
        if not isinstance(data, Mapping):
            raise ValidationError("Book data must be a mapping of title, author and year")

    @staticmethod
    def validate_create(data: Mapping[str, Any]) -> None:
        """Raise ValidationError unless ``data`` holds a valid title, author and year.

        Checks run in order title, author, year type, year range and the first
        failure wins.
        """
        BookValidator._check_mapping(data)
        if not BookValidator._is_non_empty_text(data.get("title")):
            raise ValidationError("Title is required and must be a non-empty string")
        if not BookValidator._is_non_empty_text(data.get("author")):
            raise ValidationError("Author is required and must be a non-empty string")
        BookValidator._check_year(data.get("year"))

    @staticmethod
    def validate_update(data: Mapping[str, Any]) -> None:
        """Raise ValidationError unless ``data`` sets at least one valid field.

        Keys mapped to ``None`` count as absent and are not checked.
        """
        BookValidator._check_mapping(data)
        present = {k: data[k] for k in _UPDATE_FIELDS if data.get(k) is not None}
        if not present:
            raise ValidationError("At least one field must be provided for update")

        if "title" in present and not BookValidator._is_non_empty_text(present["title"]):
            raise ValidationError("Title must be a non-empty string")
        if "author" in present and not BookValidator._is_non_empty_text(present["author"]):
            raise ValidationError("Author must be a non-empty string")
        if "year" in present:
            BookValidator._check_year(present["year"])

    @staticmethod
    def sanitize_string(text: str) -> str:
        return text.strip()
