from bookshelf.book import Book
from bookshelf.errors import BookError, BookNotFoundError, ErrorKind, ValidationError
from bookshelf.result import Failure, Success


def test_validation_error_message_and_kind():
    err = ValidationError("Title must be a non-empty string")
    assert isinstance(err, BookError)
    assert err.kind is ErrorKind.VALIDATION
    assert err.reason == "Title must be a non-empty string"
    assert str(err) == "Validation error: Title must be a non-empty string"


def test_not_found_error_embeds_id():
    err = BookNotFoundError("book_1_abc")
    assert err.kind is ErrorKind.NOT_FOUND
    assert err.book_id == "book_1_abc"
    assert str(err) == "Book with id 'book_1_abc' not found"


def test_result_variants_are_tagged():
    book = Book(id="b1", title="Dune", author="Frank Herbert", year=1965)
    ok = Success(book)
    failed = Failure(BookNotFoundError("b2"))

    assert ok.success is True
    assert ok.data == book
    assert failed.success is False
    assert failed.error.kind is ErrorKind.NOT_FOUND


def test_book_dict_conversion():
    data = {"id": "b1", "title": "Dune", "author": "Frank Herbert", "year": 1965}
    book = Book.from_dict(data)
    assert book.to_dict() == data


def test_book_copy_is_independent():
    book = Book(id="b1", title="Dune", author="Frank Herbert", year=1965)
    clone = book.copy()
    clone.title = "Changed"
    assert book.title == "Dune"
    assert clone == Book(id="b1", title="Changed", author="Frank Herbert", year=1965)
