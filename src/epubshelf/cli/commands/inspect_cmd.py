# ABOUTME: The `epubshelf inspect` command for viewing EPUB metadata.
# ABOUTME: Shows extracted metadata for a single EPUB file without cataloging it.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from epubshelf.cli.display import metadata_table
from epubshelf.formats.epub import extract_epub
from epubshelf.formats.errors import EpubError

console = Console()


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--save-cover",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the extracted cover image to this file.",
)
def inspect(path: Path, save_cover: Path | None) -> None:
    """Show metadata extracted from an EPUB file."""
    try:
        extracted = extract_epub(path.read_bytes())
    except EpubError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise SystemExit(1) from exc

    console.print(metadata_table(extracted.metadata, title=path.name))

    if save_cover is not None:
        if extracted.cover is None:
            console.print("[yellow]No cover image to save.[/yellow]")
            raise SystemExit(1)
        save_cover.write_bytes(extracted.cover)
        console.print(f"Cover written to {save_cover}")
