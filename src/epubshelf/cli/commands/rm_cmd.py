# ABOUTME: The `epubshelf rm` command for removing a book from the library.
# ABOUTME: Deletes the stored record, including its original and edited bytes.

from pathlib import Path

import click
from rich.console import Console

from epubshelf.cli.options import db_option
from epubshelf.db.catalog import LibraryCatalog
from epubshelf.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.command("rm")
@click.argument("book_id", type=int)
@db_option
def rm(book_id: int, db_path: Path | None) -> None:
    """Remove a book from the library."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        LibraryCatalog(conn).delete_book(book_id)
    except ValueError as exc:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1) from exc
    finally:
        conn.close()

    console.print(f"Removed book {book_id}")
