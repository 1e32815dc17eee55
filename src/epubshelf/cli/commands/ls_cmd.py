# ABOUTME: The `epubshelf ls` command for listing cataloged books.
# ABOUTME: Displays a Rich table of all books in the library database.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from epubshelf.cli.options import db_option
from epubshelf.db.catalog import LibraryCatalog
from epubshelf.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.command("ls")
@db_option
def ls(db_path: Path | None) -> None:
    """List all books in the library."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        records = LibraryCatalog(conn).list_all()
    finally:
        conn.close()

    if not records:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Lang", width=5)
    table.add_column("Cover", width=5)

    for record in records:
        meta = record.metadata
        table.add_row(
            str(record.id),
            escape(meta.title) or f"[dim]{escape(record.name)}[/dim]",
            escape(meta.author) or "[dim]unknown[/dim]",
            escape(meta.language) or "?",
            "yes" if record.cover else "no",
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} book(s)[/dim]")
