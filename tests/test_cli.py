import json

import pytest
from rich.prompt import Confirm, Prompt
from typer.testing import CliRunner

from bookshelf import main
from bookshelf.errors import BookNotFoundError
from bookshelf.main import app
from bookshelf.ui_helpers import OUTPUT_MODE_ENV, print_book, print_list_result, print_stats_result

runner = CliRunner()


@pytest.fixture
def answers(monkeypatch):
    """Feed canned answers to every Prompt.ask call."""
    def feed(*values):
        queue = iter(values)
        monkeypatch.setattr(Prompt, "ask", lambda *args, **kwargs: next(queue))
    return feed


def test_demo_command():
    result = runner.invoke(app, ["demo"])
    assert result.exit_code == 0
    assert "Total books created: 4" in result.stdout
    assert "Books by Tolkien: 1" in result.stdout
    assert 'Updated: "Lord of the Flies (Updated Edition)" (1955)' in result.stdout
    assert "Result: Failed as expected" in result.stdout
    assert "Safe create succeeded: Animal Farm" in result.stdout
    assert "Page 1 of 3" in result.stdout
    assert "Caught expected error: Book with id 'fake-id' not found" in result.stdout
    assert "Total books: 4" in result.stdout
    assert "Is empty: False" in result.stdout


def test_menu_add_and_list():
    result = runner.invoke(app, ["menu", "--no-samples"], input="3\nDune\nFrank Herbert\n1965\n1\n0\n")
    assert result.exit_code == 0
    assert "Book added successfully!" in result.stdout
    assert "1. Dune by Frank Herbert (1965)" in result.stdout


def test_menu_with_samples_shows_statistics():
    result = runner.invoke(app, ["menu", "--samples"], input="6\n0\n")
    assert result.exit_code == 0
    assert "Added 4 sample books" in result.stdout
    assert "Total Books: 4" in result.stdout
    assert "Unique Authors: 4" in result.stdout
    assert "Publication Year Range: 1813 - 1960" in result.stdout


def test_menu_reports_validation_error_and_keeps_running():
    result = runner.invoke(app, ["menu", "--no-samples"], input="3\n\nSomeone\n2000\n1\n0\n")
    assert result.exit_code == 0
    assert "Title is required" in result.stdout
    assert "No books found in the collection." in result.stdout
    assert "Thank you for using" in result.stdout


def test_menu_rejects_non_numeric_year():
    result = runner.invoke(app, ["menu", "--no-samples"], input="3\nDune\nFrank Herbert\nsoon\n0\n")
    assert result.exit_code == 0
    assert "Please enter a valid year." in result.stdout
    assert "Book added successfully!" not in result.stdout


def test_json_output_mode():
    result = runner.invoke(app, ["--output", "json", "menu", "--no-samples"], input="3\nDune\nFrank Herbert\n1965\n0\n")
    assert result.exit_code == 0
    book_line = next(line for line in result.stdout.splitlines() if line.startswith("{"))
    assert json.loads(book_line)["title"] == "Dune"


def test_search_by_author(lib, answers, capsys):
    lib.create({"title": "The Hobbit", "author": "J.R.R. Tolkien", "year": 1937})
    lib.create({"title": "Dune", "author": "Frank Herbert", "year": 1965})
    answers("2", "tolkien")

    main.search_books(lib)
    out = capsys.readouterr().out
    assert "Found 1 book(s)" in out
    assert "The Hobbit by J.R.R. Tolkien (1937)" in out
    assert "Dune" not in out


def test_search_by_year_invalid(lib, answers, capsys):
    answers("3", "nineteen")
    main.search_books(lib)
    assert "Please enter a valid year." in capsys.readouterr().out


def test_search_by_id(lib, answers, capsys):
    book = lib.create({"title": "Dune", "author": "Frank Herbert", "year": 1965})
    answers("4", book.id)
    main.search_books(lib)
    out = capsys.readouterr().out
    assert "Book found" in out
    assert f"ID: {book.id}" in out


def test_update_book(lib, answers, capsys):
    book = lib.create({"title": "Old Title", "author": "Old Author", "year": 2000})
    answers(book.id, "  New Title ", "", "2001")

    main.update_book(lib)
    assert "Book updated successfully!" in capsys.readouterr().out
    updated = lib.find_by_id(book.id)
    assert updated.title == "New Title"
    assert updated.author == "Old Author"
    assert updated.year == 2001


def test_update_book_without_changes(lib, answers, capsys):
    book = lib.create({"title": "Dune", "author": "Frank Herbert", "year": 1965})
    answers(book.id, "", "", "")
    main.update_book(lib)
    assert "No changes made." in capsys.readouterr().out


def test_update_book_invalid_year(lib, answers, capsys):
    book = lib.create({"title": "Dune", "author": "Frank Herbert", "year": 1965})
    answers(book.id, "Dune Messiah", "", "later")
    main.update_book(lib)
    assert "Invalid year provided." in capsys.readouterr().out
    assert lib.find_by_id(book.id).title == "Dune"


def test_update_unknown_book(lib, answers, capsys):
    answers("missing")
    main.update_book(lib)
    assert "Book not found." in capsys.readouterr().out


def test_delete_book_confirmed(lib, answers, monkeypatch, capsys):
    book = lib.create({"title": "Dune", "author": "Frank Herbert", "year": 1965})
    answers(book.id)
    monkeypatch.setattr(Confirm, "ask", lambda *args, **kwargs: True)

    main.delete_book(lib)
    assert "Book deleted successfully!" in capsys.readouterr().out
    assert lib.is_empty()


def test_delete_book_cancelled(lib, answers, monkeypatch, capsys):
    book = lib.create({"title": "Dune", "author": "Frank Herbert", "year": 1965})
    answers(book.id)
    monkeypatch.setattr(Confirm, "ask", lambda *args, **kwargs: False)

    main.delete_book(lib)
    assert "Delete operation cancelled." in capsys.readouterr().out
    assert lib.count() == 1


def test_menu_shows_not_found_error(lib, answers, monkeypatch, capsys):
    def vanish(book_id):
        raise BookNotFoundError(book_id)

    book = lib.create({"title": "Dune", "author": "Frank Herbert", "year": 1965})
    monkeypatch.setattr(lib, "safe_delete", vanish)
    monkeypatch.setattr(Confirm, "ask", lambda *args, **kwargs: True)
    answers("5", book.id, "0")

    main.run_menu(lib, seed=False)
    out = capsys.readouterr().out
    assert f"Book with id '{book.id}' not found" in out
    assert "Thank you for using" in out


def test_print_list_result_json(lib, monkeypatch, capsys):
    monkeypatch.setenv(OUTPUT_MODE_ENV, "json")
    lib.create({"title": "Dune", "author": "Frank Herbert", "year": 1965})

    print_list_result(lib.find_all())
    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["author"] == "Frank Herbert"
    assert set(payload[0]) == {"id", "title", "author", "year"}


def test_print_list_result_empty(capsys):
    print_list_result([])
    assert "No books found in the collection." in capsys.readouterr().out


def test_print_stats_result_empty(lib, capsys):
    print_stats_result(lib.get_statistics())
    out = capsys.readouterr().out
    assert "Total Books: 0" in out
    assert "Collection is empty." in out


def test_rich_output_escapes_markup_in_book_text(lib, monkeypatch, capsys):
    monkeypatch.setenv(OUTPUT_MODE_ENV, "rich")
    book = lib.create({"title": "Notes [/]", "author": "A [/]", "year": 2001})

    print_book(book)
    print_list_result(lib.find_all())
    print_stats_result(lib.get_statistics())
    out = capsys.readouterr().out
    assert "Notes [/]" in out
    assert "A [/]" in out


def test_rich_menu_survives_bracketed_title():
    result = runner.invoke(
        app,
        ["--output", "rich", "menu", "--no-samples"],
        input="3\nNotes [/]\nA [bold]\n2001\n1\n6\n0\n",
    )
    assert result.exit_code == 0
    assert "Notes [/]" in result.stdout
    assert "Thank you for using" in result.stdout
