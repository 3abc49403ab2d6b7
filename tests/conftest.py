import pytest

from bookshelf.library import Library
from bookshelf.ui_helpers import OUTPUT_MODE_ENV


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # CLI commands write the output mode into the environment; restore it per test
    monkeypatch.setenv(OUTPUT_MODE_ENV, "plain")


@pytest.fixture
def lib():
    lib = Library()
    yield lib
    lib.clear()


@pytest.fixture
def seeded_lib(lib):
    lib.create({"title": "Book 1", "author": "Author 1", "year": 2021})
    lib.create({"title": "Book 2", "author": "Author 2", "year": 2022})
    lib.create({"title": "Book 3", "author": "Author 1", "year": 2023})
    return lib
