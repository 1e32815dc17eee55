# ABOUTME: The `epubshelf export` command for writing a stored book to disk.
# ABOUTME: Writes the current (possibly edited) EPUB bytes to a file.

import re
from pathlib import Path

import click
from rich.console import Console

from epubshelf.cli.options import db_option
from epubshelf.db.catalog import LibraryCatalog
from epubshelf.db.connection import DEFAULT_DB_PATH, open_library
from epubshelf.db.mapping import BookRecord

console = Console()

_UNSAFE_CHARS_RE = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def default_filename(record: BookRecord) -> str:
    """Build `<title>.epub` from a record, falling back to its stored name."""
    title = _UNSAFE_CHARS_RE.sub("_", record.metadata.title).strip()
    if not title:
        return record.name
    return f"{title}.epub"


@click.command("export")
@click.argument("book_id", type=int)
@db_option
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (default: <title>.epub in the current directory).",
)
def export(book_id: int, db_path: Path | None, output: Path | None) -> None:
    """Write a book's current EPUB to a file."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        record = LibraryCatalog(conn).get_by_id(book_id)
    finally:
        conn.close()

    if record is None:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1)

    dest = output or Path(default_filename(record))
    dest.write_bytes(record.data)
    console.print(f"Wrote {dest}")
