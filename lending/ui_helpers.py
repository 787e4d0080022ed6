import os
import json
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from lending.library import Library

if TYPE_CHECKING:
    from lending.scenario import ActionResult

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LENDING_OUTPUT"

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()


def _borrower_label(lib: Library, borrower_id: int) -> str:
    patron = lib.get_patron(borrower_id)
    return patron.display_name() if patron else "-"


def print_catalog(lib: Library) -> None:
    """Print the books of the library according to the output mode.
    - plain: 'ID - Title by Author [values] (borrower)' lines, or 'No books in library.'
    - json: JSON array of book dicts with their id
    - rich: Rich table
    """
    mode = get_output_mode()
    books = list(lib.books())

    if not books:
        print("No books in library.")
        return

    if mode == "json":
        payload = [{"id": book_id, **book.to_dict()} for book_id, book in books]
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📚 Catalog", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Comic/Drama/Edu", justify="center")
        table.add_column("Borrower", style="yellow")
        for book_id, book in books:
            table.add_row(str(book_id), book.title, book.author,
                          f"{book.comic_value}/{book.dramatic_value}/{book.educational_value}",
                          _borrower_label(lib, book.borrower_id()))
        _console.print(table)
    else:
        for book_id, book in books:
            status = _borrower_label(lib, book.borrower_id()) if book.is_borrowed() else "available"
            print(f"{book_id} - {book.title} by {book.author} "
                  f"[{book.comic_value}/{book.dramatic_value}/{book.educational_value}] ({status})")


def print_roster(lib: Library) -> None:
    mode = get_output_mode()
    patrons = list(lib.patrons())

    if not patrons:
        print("No patrons registered.")
        return

    if mode == "json":
        payload = [{"id": patron_id, **patron.to_dict(), "borrowed": lib.borrowed_count(patron_id)}
                   for patron_id, patron in patrons]
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="🧑 Patrons", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Tendencies", justify="center")
        table.add_column("Threshold", justify="right")
        table.add_column("Borrowed", justify="right")
        for patron_id, patron in patrons:
            table.add_row(str(patron_id), patron.display_name(),
                          f"{patron.comic_tendency}/{patron.dramatic_tendency}/{patron.educational_tendency}",
                          str(patron.enjoyment_threshold),
                          f"{lib.borrowed_count(patron_id)}/{lib.max_borrowed_books}")
        _console.print(table)
    else:
        for patron_id, patron in patrons:
            print(f"{patron_id} - {patron.display_name()} "
                  f"(borrowed {lib.borrowed_count(patron_id)}/{lib.max_borrowed_books})")


def print_stats_result(stats: Dict[str, Any]) -> None:
    """Print statistics according to the output mode.
    - plain: one 'Label: value' line per metric
    - json: JSON object
    - rich: Panel with the main metrics
    """
    mode = get_output_mode()

    if not stats:
        print("No statistics available.")
        return

    if mode == "json":
        print(json.dumps(stats, ensure_ascii=False))
    elif mode == "rich":
        content = (f"[bold]Books:[/] {stats['total_books']}/{stats['book_capacity']} "
                   f"({stats['available_books']} available, {stats['borrowed_books']} borrowed)\n"
                   f"[bold]Patrons:[/] {stats['total_patrons']}/{stats['patron_capacity']}\n"
                   f"[bold]Borrow limit:[/] {stats['max_borrowed_books']}")
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        print(f"Total Books: {stats['total_books']}")
        print(f"Available Books: {stats['available_books']}")
        print(f"Borrowed Books: {stats['borrowed_books']}")
        print(f"Total Patrons: {stats['total_patrons']}")


def print_action_results(results: "List[ActionResult]") -> None:
    mode = get_output_mode()

    if not results:
        print("No actions to run.")
        return

    if mode == "json":
        print(json.dumps([r.to_dict() for r in results], ensure_ascii=False))
        return

    if mode == "rich":
        table = Table(title="▶ Actions", header_style="bold cyan")
        table.add_column("#", justify="right")
        table.add_column("Action")
        table.add_column("Result")
        for i, r in enumerate(results, 1):
            args = " ".join(f"{k}={v}" for k, v in r.args.items())
            outcome = "[green]ok[/]" if r.ok else "[red]refused[/]"
            if r.detail:
                outcome += f" ({r.detail})"
            table.add_row(str(i), f"{r.op} {args}", outcome)
        _console.print(table)
        return

    for i, r in enumerate(results, 1):
        args = " ".join(f"{k}={v}" for k, v in r.args.items())
        line = f"[{i}/{len(results)}] {r.op} {args}: {'ok' if r.ok else 'refused'}"
        if r.detail:
            line += f" ({r.detail})"
        print(line)


def print_suggestion(patron_name: str, title: Optional[str]) -> None:
    mode = get_output_mode()
    if mode == "json":
        print(json.dumps({"patron": patron_name, "suggestion": title}, ensure_ascii=False))
    elif title is None:
        print(f"No suggestion for {patron_name}.")
    else:
        print(f"Suggested for {patron_name}: {title}")
