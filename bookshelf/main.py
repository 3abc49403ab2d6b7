import logging
import sys
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from bookshelf.book import Book, UpdateBookData
from bookshelf.config import settings
from bookshelf.errors import BookError, ErrorKind
from bookshelf.library import Library
from bookshelf.ui_helpers import (
    print_book,
    print_list_result,
    print_page_result,
    print_stats_result,
    set_output_mode,
)


console = Console()

SAMPLE_BOOKS = [
    {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald", "year": 1925},
    {"title": "To Kill a Mockingbird", "author": "Harper Lee", "year": 1960},
    {"title": "1984", "author": "George Orwell", "year": 1949},
    {"title": "Pride and Prejudice", "author": "Jane Austen", "year": 1813},
]

DEMO_BOOKS = [
    {"title": "The Catcher in the Rye", "author": "J.D. Salinger", "year": 1951},
    {"title": "Lord of the Flies", "author": "William Golding", "year": 1954},
    {"title": "The Hobbit", "author": "J.R.R. Tolkien", "year": 1937},
    {"title": "Dune", "author": "Frank Herbert", "year": 1965},
]


def _configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_year(raw: str) -> Optional[int]:
    """Parse a year typed by the user; None when it is not a whole number."""
    try:
        return int(raw.strip())
    except ValueError:
        return None


def _show_error(error: BookError) -> None:
    style = "bold red" if error.kind is ErrorKind.VALIDATION else "bold yellow"
    console.print(f"[{style}]❌ {escape(error.message)}[/]")


# --- Typer CLI app ---
app = typer.Typer(help=settings.app_name)


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global CLI options (e.g. output mode)."""
    _configure_logging()
    if output:
        set_output_mode(output)


@app.command("demo")
def cli_demo():
    """Run the programmatic demo against a fresh library."""
    run_demo(Library())


@app.command("menu")
def cli_menu(
    samples: bool = typer.Option(
        settings.seed_sample_data,
        "--samples/--no-samples",
        help="Start with a few sample books",
    )
):
    """Start the interactive menu."""
    run_menu(Library(), seed=samples)


# --- Interactive menu ---
def add_sample_data(lib: Library) -> None:
    added = 0
    for data in SAMPLE_BOOKS:
        result = lib.safe_create(data)
        if result.success:
            added += 1
        else:
            console.print(f"[yellow]Failed to add sample book: {escape(data['title'])}[/]")
    console.print(f"[green]✅ Added {added} sample books to get you started![/]")


def view_all_books(lib: Library) -> None:
    books = lib.find_all()
    if not books:
        console.print("[yellow]📭 No books found in the collection.[/]")
        return
    console.print(f"[bold]📚 All Books ({len(books)} total):[/]")
    print_list_result(books)


def _display_search_results(books: List[Book], criteria: str) -> None:
    if not books:
        console.print(f"[yellow]❌ No books found for {escape(criteria)}.[/]")
        return
    console.print(f"[green]✅ Found {len(books)} book(s) for {escape(criteria)}:[/]")
    print_list_result(books)


def search_books(lib: Library) -> None:
    """Search by title, author, year or id."""
    console.print("[bold]🔍 Search Options:[/]")
    console.print("1. Search by title")
    console.print("2. Search by author")
    console.print("3. Search by year")
    console.print("4. Find by ID")
    choice = Prompt.ask("Enter your choice", choices=["1", "2", "3", "4"])

    if choice == "1":
        title = Prompt.ask("Enter title to search")
        _display_search_results(lib.find_by_title(title), f'title containing "{title}"')
    elif choice == "2":
        author = Prompt.ask("Enter author to search")
        _display_search_results(lib.find_by_author(author), f'author containing "{author}"')
    elif choice == "3":
        year = _parse_year(Prompt.ask("Enter year to search"))
        if year is None:
            console.print("[red]❌ Please enter a valid year.[/]")
            return
        _display_search_results(lib.find_by_year(year), f"year {year}")
    else:
        book_id = Prompt.ask("Enter book ID").strip()
        book = lib.find_by_id(book_id)
        if book:
            console.print("[green]✅ Book found:[/]")
            print_book(book)
        else:
            console.print("[red]❌ Book not found.[/]")


def add_book(lib: Library) -> None:
    console.print("[bold]➕ Add New Book[/]")
    title = Prompt.ask("Enter book title", default="", show_default=False)
    author = Prompt.ask("Enter author name", default="", show_default=False)
    year = _parse_year(Prompt.ask("Enter publication year", default="", show_default=False))
    if year is None:
        console.print("[red]❌ Please enter a valid year.[/]")
        return

    book = lib.create({"title": title, "author": author, "year": year})
    console.print("[green]✅ Book added successfully![/]")
    print_book(book)


def update_book(lib: Library) -> None:
    book_id = Prompt.ask("Enter the ID of the book to update").strip()
    existing = lib.find_by_id(book_id)
    if not existing:
        console.print("[red]❌ Book not found.[/]")
        return

    console.print("[bold]📝 Current book details:[/]")
    print_book(existing)
    console.print("[dim]✏️ Enter new values (press Enter to keep current value):[/]")

    title = Prompt.ask(f"Title \\[{escape(existing.title)}]", default="", show_default=False)
    author = Prompt.ask(f"Author \\[{escape(existing.author)}]", default="", show_default=False)
    year_raw = Prompt.ask(f"Year \\[{existing.year}]", default="", show_default=False)

    changes: UpdateBookData = {}
    if title.strip():
        changes["title"] = title
    if author.strip():
        changes["author"] = author
    if year_raw.strip():
        year = _parse_year(year_raw)
        if year is None:
            console.print("[red]❌ Invalid year provided.[/]")
            return
        changes["year"] = year

    if not changes:
        console.print("[blue]ℹ️ No changes made.[/]")
        return

    updated = lib.update(book_id, changes)
    if updated:
        console.print("[green]✅ Book updated successfully![/]")
        print_book(updated)


def delete_book(lib: Library) -> None:
    """Delete a book after showing it and asking for confirmation."""
    book_id = Prompt.ask("Enter the ID of the book to delete").strip()
    existing = lib.find_by_id(book_id)
    if not existing:
        console.print("[red]❌ Book not found.[/]")
        return

    console.print(Panel(
        f"[bold]Title:[/] {escape(existing.title)}\n"
        f"[bold]Author:[/] {escape(existing.author)}\n"
        f"[bold]Year:[/] {existing.year}",
        title="📖 Book to be deleted",
        border_style="yellow",
    ))
    if Confirm.ask("Are you sure you want to delete this book?", default=False):
        lib.safe_delete(book_id)
        console.print("[green]✅ Book deleted successfully![/]")
    else:
        console.print("[blue]🚫 Delete operation cancelled.[/]")


def view_statistics(lib: Library) -> None:
    console.print("[bold]📊 Collection Statistics:[/]")
    print_stats_result(lib.get_statistics())


def run_menu(lib: Library, seed: bool = True) -> None:
    """Simple interactive menu for the book collection."""
    def render_menu() -> None:
        menu_items = [
            ("1", "View all books", "📚"),
            ("2", "Search books", "🔎"),
            ("3", "Add a new book", "➕"),
            ("4", "Update a book", "✏️"),
            ("5", "Delete a book", "🗑️"),
            ("6", "View statistics", "📊"),
            ("0", "Exit", "🚪"),
        ]

        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label, icon in menu_items:
            table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")

        console.print(Panel(
            table,
            title=settings.app_name,
            border_style="cyan",
            box=box.HEAVY,
            padding=(1, 2),
        ))

    actions = {
        "1": view_all_books,
        "2": search_books,
        "3": add_book,
        "4": update_book,
        "5": delete_book,
        "6": view_statistics,
    }

    console.print(f"[bold]📚 Welcome to the {settings.app_name}![/]")
    if seed:
        add_sample_data(lib)

    while True:
        render_menu()
        choice = Prompt.ask("Enter your choice", choices=["1", "2", "3", "4", "5", "6", "0"], default="1")
        if choice == "0":
            console.print(f"[green]👋 Thank you for using the {settings.app_name}![/]")
            break
        try:
            actions[choice](lib)
        except BookError as e:
            # Validation and not-found errors are shown and the menu keeps running
            _show_error(e)
        print()  # blank line between operations


# --- Programmatic demo ---
def run_demo(lib: Library) -> None:
    """Walk through the store API and print what happens at each step."""
    print(f"📚 {settings.app_name} - Programmatic Demo")
    print("=" * 44)

    print("\n➕ Creating books...")
    created = []
    for data in DEMO_BOOKS:
        book = lib.create(data)
        print(f'✅ Created: "{book.title}" by {book.author} (ID: {book.id})')
        created.append(book)
    print(f"\n📊 Total books created: {lib.count()}")

    print("\n👀 Reading operations...")
    print("All books:")
    for index, book in enumerate(lib.find_all(), 1):
        print(f"  {index}. {book.title} by {book.author} ({book.year})")

    first = created[0]
    found = lib.find_by_id(first.id)
    print(f'\n🔍 Found by ID "{first.id}": {found.title if found else "Not found"}')

    tolkien = lib.find_by_author("Tolkien")
    print(f"\n📖 Books by Tolkien: {len(tolkien)}")
    for book in tolkien:
        print(f"  - {book.title} ({book.year})")

    from_1954 = lib.find_by_year(1954)
    print(f"\n📅 Books from 1954: {len(from_1954)}")
    for book in from_1954:
        print(f"  - {book.title} by {book.author}")

    print("\n✏️ Updating a book...")
    updated = lib.update(created[1].id, {"title": "Lord of the Flies (Updated Edition)", "year": 1955})
    if updated:
        print(f'✅ Updated: "{updated.title}" ({updated.year})')

    print("\n❌ Attempting to update non-existent book...")
    missing = lib.update("fake-id", {"title": "This will fail"})
    print(f"Result: {'Success' if missing else 'Failed as expected'}")

    print("\n🛡️ Using safe operations...")
    result = lib.safe_create({"title": "Animal Farm", "author": "George Orwell", "year": 1945})
    if result.success:
        print(f"✅ Safe create succeeded: {result.data.title}")
    else:
        print(f"❌ Safe create failed: {result.error}")

    print("\n📄 Pagination demo (page 1, 2 items per page):")
    print_page_result(lib.get_paginated(1, 2))

    print("\n🗑️ Deleting a book...")
    deleted = lib.delete(created[2].id)
    print(f"Delete result: {'Success' if deleted else 'Failed'}")
    print(f"Books remaining: {lib.count()}")

    print("\n❌ Attempting to safely delete non-existent book...")
    try:
        lib.safe_delete("fake-id")
    except BookError as e:
        print(f"Caught expected error: {e}")

    print("\n📊 Final Statistics:")
    print(f"Total books: {lib.count()}")
    print(f"Is empty: {lib.is_empty()}")


def main() -> None:
    if len(sys.argv) > 1:
        app()
    else:
        _configure_logging()
        run_menu(Library(), seed=settings.seed_sample_data)


if __name__ == "__main__":
    main()
