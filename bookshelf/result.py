from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

from bookshelf.errors import BookError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T
    success: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Failure:
    error: BookError
    success: bool = field(default=False, init=False)


# Check ``result.success`` before touching ``data`` or ``error``.
Result = Union[Success[T], Failure]
