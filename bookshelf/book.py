from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Optional, TypedDict


class CreateBookData(TypedDict):
    title: str
    author: str
    year: int


class UpdateBookData(TypedDict, total=False):
    title: Optional[str]
    author: Optional[str]
    year: Optional[int]


@dataclass
class Book:
    """A single book held by the store."""

    id: str
    title: str
    author: str
    year: int

    def __str__(self) -> str:
        return f"{self.title} by {self.author} ({self.year})"

    def copy(self) -> "Book":
        return replace(self)

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(data: dict) -> "Book":
        return Book(
            id=data["id"],
            title=data["title"],
            author=data["author"],
            year=data["year"],
        )
