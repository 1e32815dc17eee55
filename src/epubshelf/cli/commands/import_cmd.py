# ABOUTME: The `epubshelf import` command for extracting and cataloging EPUBs.
# ABOUTME: Accepts files and directories, stores each readable EPUB in the library DB.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from epubshelf.cli.options import db_option
from epubshelf.core.importer import import_books
from epubshelf.db.catalog import LibraryCatalog
from epubshelf.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


def _collect_paths(paths: tuple[Path, ...]) -> list[Path]:
    """Expand directories into their .epub files; keep files as given."""
    collected: list[Path] = []
    for path in paths:
        if path.is_dir():
            collected.extend(sorted(path.rglob("*.epub")))
        else:
            collected.append(path)
    return collected


@click.command("import")
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, path_type=Path),
)
@db_option
def import_command(paths: tuple[Path, ...], db_path: Path | None) -> None:
    """Extract metadata from EPUB files and add them to the library."""
    epub_files = _collect_paths(paths)

    if not epub_files:
        console.print("[yellow]No EPUB files found.[/yellow]")
        return

    console.print(f"Found [bold]{len(epub_files)}[/bold] file(s)\n")

    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        result = import_books(epub_files, LibraryCatalog(conn))
    finally:
        conn.close()

    parts = [f"[green]{result.added} added[/green]"]
    if result.skipped:
        parts.append(f"[yellow]{result.skipped} skipped[/yellow]")
    if result.errors:
        parts.append(f"[red]{result.errors} error(s)[/red]")

    console.print(", ".join(parts))

    if result.error_details:
        console.print(
            f"\n[yellow]{result.errors} file(s) could not be read:[/yellow]"
        )
        for path, msg in result.error_details:
            console.print(f"  [dim]{escape(path.name)}:[/dim] {escape(msg)}")
