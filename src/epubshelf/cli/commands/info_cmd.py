# ABOUTME: The `epubshelf info` command for displaying a stored book.
# ABOUTME: Shows metadata and storage details for a single book by ID.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from epubshelf.cli.display import metadata_table
from epubshelf.cli.options import db_option
from epubshelf.db.catalog import LibraryCatalog
from epubshelf.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.command("info")
@click.argument("book_id", type=int)
@db_option
def info(book_id: int, db_path: Path | None) -> None:
    """Show detailed metadata for a book by ID."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        record = LibraryCatalog(conn).get_by_id(book_id)
    finally:
        conn.close()

    if record is None:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1)

    table = metadata_table(record.metadata)
    table.add_row("ID", str(record.id))
    table.add_row("File", escape(record.name))
    table.add_row("Size", f"{len(record.data)} bytes")
    table.add_row("Edited", "yes" if record.data != record.original_data else "no")
    table.add_row("Hash", record.file_hash)
    table.add_row("Added", record.date_added)
    table.add_row("Modified", record.date_modified)

    console.print(table)
