# ABOUTME: The `epubshelf edit` command for changing a stored book's metadata.
# ABOUTME: Builds an edited record from CLI flags and rebuilds the EPUB from its original bytes.

from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from epubshelf.cli.options import db_option
from epubshelf.core.editor import edit_book
from epubshelf.db.catalog import LibraryCatalog
from epubshelf.db.connection import DEFAULT_DB_PATH, open_library
from epubshelf.formats.errors import EpubError
from epubshelf.metadata.schemes import to_canonical
from epubshelf.metadata.types import EpubMetadata

console = Console()


def _parse_identifier(value: str) -> tuple[str, str]:
    """Split a SCHEME=VALUE option into a canonical key and value."""
    scheme, sep, ident = value.partition("=")
    if not sep or not scheme.strip():
        raise click.BadParameter(
            f"expected SCHEME=VALUE, got {value!r}", param_hint="--identifier",
        )
    return to_canonical(scheme.strip()), ident.strip()


def _apply_flags(
    meta: EpubMetadata,
    scalars: dict[str, str | None],
    identifiers: tuple[str, ...],
    clear_identifiers: bool,
    subjects: tuple[str, ...],
    clear_subjects: bool,
) -> EpubMetadata:
    """Return a copy of meta with the CLI changes applied.

    An identifier given with an empty value removes that scheme.
    """
    changes = {name: value for name, value in scalars.items() if value is not None}

    new_ids = {} if clear_identifiers else dict(meta.identifiers)
    for raw in identifiers:
        key, ident = _parse_identifier(raw)
        if ident:
            new_ids[key] = ident
        else:
            new_ids.pop(key, None)

    new_subjects = [] if clear_subjects else list(meta.subjects)
    new_subjects.extend(s.strip() for s in subjects if s.strip())

    return replace(meta, **changes, identifiers=new_ids, subjects=new_subjects)


@click.command("edit")
@click.argument("book_id", type=int)
@db_option
@click.option("--title", default=None, help="New title.")
@click.option("--author", default=None, help="New author.")
@click.option("--description", default=None, help="New description.")
@click.option("--language", default=None, help="New language code.")
@click.option("--publisher", default=None, help="New publisher.")
@click.option(
    "--identifier", "identifiers",
    multiple=True,
    metavar="SCHEME=VALUE",
    help="Set an identifier; an empty VALUE removes it. Repeatable.",
)
@click.option(
    "--clear-identifiers",
    is_flag=True,
    default=False,
    help="Drop existing identifiers before applying --identifier.",
)
@click.option("--subject", "subjects", multiple=True, help="Add a subject. Repeatable.")
@click.option(
    "--clear-subjects",
    is_flag=True,
    default=False,
    help="Drop existing subjects before applying --subject.",
)
@click.option(
    "--cover",
    "cover_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Replacement cover image.",
)
def edit(
    book_id: int,
    db_path: Path | None,
    title: str | None,
    author: str | None,
    description: str | None,
    language: str | None,
    publisher: str | None,
    identifiers: tuple[str, ...],
    clear_identifiers: bool,
    subjects: tuple[str, ...],
    clear_subjects: bool,
    cover_file: Path | None,
) -> None:
    """Edit a book's metadata and rebuild its EPUB."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        catalog = LibraryCatalog(conn)
        record = catalog.get_by_id(book_id)
        if record is None:
            console.print(f"[red]Book {book_id} not found.[/red]")
            raise SystemExit(1)

        metadata = _apply_flags(
            record.metadata,
            {
                "title": title,
                "author": author,
                "description": description,
                "language": language,
                "publisher": publisher,
            },
            identifiers,
            clear_identifiers,
            subjects,
            clear_subjects,
        )

        cover = None
        if cover_file is not None:
            if not metadata.cover_path:
                console.print("[yellow]Book has no cover entry; --cover ignored.[/yellow]")
            else:
                cover = cover_file.read_bytes()

        try:
            updated = edit_book(catalog, book_id, metadata, cover)
        except EpubError as exc:
            console.print(f"[red]Error:[/red] {escape(str(exc))}")
            raise SystemExit(1) from exc
    finally:
        conn.close()

    console.print(
        f"[green]Updated[/green] {escape(updated.metadata.title or updated.name)}"
    )
