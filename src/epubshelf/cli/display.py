# ABOUTME: Rich rendering helpers shared by the inspect and info commands.
# ABOUTME: Builds a two-column field/value table from an EpubMetadata record.

from rich.markup import escape
from rich.table import Table

from epubshelf.metadata.types import EpubMetadata


def _value(text: str, placeholder: str) -> str:
    return escape(text) if text else f"[dim]{placeholder}[/dim]"


def metadata_table(meta: EpubMetadata, title: str | None = None) -> Table:
    """Build a field/value table for a metadata record."""
    table = Table(title=title, show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Title", _value(meta.title, "untitled"))
    table.add_row("Author", _value(meta.author, "unknown"))
    table.add_row("Language", _value(meta.language, "unknown"))
    table.add_row("Publisher", _value(meta.publisher, "unknown"))
    table.add_row("Description", _value(meta.description, "none"))
    if meta.identifiers:
        ids_str = ", ".join(f"{k}={v}" for k, v in meta.identifiers.items())
        table.add_row("Identifiers", escape(ids_str))
    if meta.subjects:
        table.add_row("Subjects", escape(", ".join(meta.subjects)))
    table.add_row("Cover", _value(meta.cover_path or "", "none"))
    return table
