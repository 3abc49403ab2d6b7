import json
import os
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from bookshelf.book import Book
from bookshelf.config import settings
from bookshelf.library import Page

# Environment variable that controls CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "BOOKSHELF_CLI_OUTPUT"
OUTPUT_MODES = {"plain", "json", "rich"}

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    mode = os.environ.get(OUTPUT_MODE_ENV, settings.cli_output).lower()
    return mode if mode in OUTPUT_MODES else "plain"


def _books_table(books: List[Book], title: str) -> Table:
    table = Table(title=title, show_lines=True, header_style="bold cyan")
    table.add_column("ID", style="magenta", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Author", style="white")
    table.add_column("Year", style="green", justify="right")
    for b in books:
        table.add_row(escape(b.id), escape(b.title), escape(b.author), str(b.year))
    return table


def print_list_result(books: List[Book]) -> None:
    """Print a list of books in the current output mode.
    - plain: numbered 'Title by Author (Year)' lines followed by the id
    - json: JSON array of book objects
    - rich: Rich table
    """
    mode = get_output_mode()

    if not books:
        print("No books found in the collection.")
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        _console.print(_books_table(books, f"📚 Books ({len(books)})"))
    else:
        for index, b in enumerate(books, 1):
            print(f"{index}. {b}")
            print(f"   ID: {b.id}")


def print_book(book: Book) -> None:
    mode = get_output_mode()
    if mode == "json":
        print(json.dumps(book.to_dict(), ensure_ascii=False))
    elif mode == "rich":
        _console.print(Panel.fit(
            f"[bold]Title:[/] {escape(book.title)}\n"
            f"[bold]Author:[/] {escape(book.author)}\n"
            f"[bold]Year:[/] {book.year}\n"
            f"[bold]ID:[/] {escape(book.id)}",
            title="📖 Book",
            border_style="green",
        ))
    else:
        print(f"Title: {book.title}")
        print(f"Author: {book.author}")
        print(f"Year: {book.year}")
        print(f"ID: {book.id}")


def print_page_result(page: Page) -> None:
    mode = get_output_mode()
    if mode == "json":
        payload = {
            "books": [b.to_dict() for b in page.books],
            "total_books": page.total_books,
            "total_pages": page.total_pages,
            "current_page": page.current_page,
            "has_next_page": page.has_next_page,
            "has_previous_page": page.has_previous_page,
        }
        print(json.dumps(payload, ensure_ascii=False))
        return

    print(f"Page {page.current_page} of {page.total_pages}")
    print(f"Showing {len(page.books)} of {page.total_books} books:")
    print_list_result(page.books)


def print_stats_result(stats: Dict[str, Any]) -> None:
    """Print statistics in the current output mode.
    - plain: one line per metric, the year range and top author only when books exist
    - json: JSON object
    - rich: Panel with the main metrics
    """
    mode = get_output_mode()
    total = stats.get("total_books", 0)

    if mode == "json":
        print(json.dumps(stats, ensure_ascii=False))
        return

    lines = [f"Total Books: {total}"]
    if not total:
        lines.append("Collection is empty.")
    else:
        lines.append(f"Unique Authors: {stats.get('unique_authors', 0)}")
        lines.append(f"Publication Year Range: {stats['min_year']} - {stats['max_year']}")
        top_count = stats.get("most_prolific_count", 0)
        plural = "s" if top_count > 1 else ""
        lines.append(f"Most Prolific Author: {stats['most_prolific_author']} ({top_count} book{plural})")

    if mode == "rich":
        _console.print(Panel.fit(escape("\n".join(lines)), title="📊 Collection Statistics", border_style="blue"))
    else:
        for line in lines:
            print(line)
