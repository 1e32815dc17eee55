# ABOUTME: Converts between EpubMetadata and SQLite row dictionaries.
# ABOUTME: Handles JSON serialization for the identifiers map and subjects list.

import json
from dataclasses import dataclass
from typing import Any

from epubshelf.metadata.types import EpubMetadata


@dataclass
class BookRecord:
    """A stored EPUB: its metadata plus the bytes and bookkeeping fields."""

    id: int
    name: str
    metadata: EpubMetadata
    cover: bytes | None
    original_data: bytes
    data: bytes
    file_hash: str
    date_added: str
    date_modified: str


def metadata_to_row(metadata: EpubMetadata) -> dict[str, Any]:
    """Convert an EpubMetadata instance to the metadata columns of a books row."""
    return {
        "title": metadata.title,
        "author": metadata.author,
        "description": metadata.description,
        "language": metadata.language,
        "publisher": metadata.publisher,
        "identifiers": json.dumps(metadata.identifiers),
        "subjects": json.dumps(metadata.subjects),
        "cover_path": metadata.cover_path,
    }


def row_to_metadata(row: Any) -> EpubMetadata:
    """Convert a database row (dict-like) back to an EpubMetadata instance."""
    return EpubMetadata(
        title=row["title"],
        author=row["author"],
        description=row["description"],
        identifiers=json.loads(row["identifiers"]) if row["identifiers"] else {},
        publisher=row["publisher"],
        language=row["language"],
        subjects=json.loads(row["subjects"]) if row["subjects"] else [],
        cover_path=row["cover_path"],
    )


def row_to_record(row: Any) -> BookRecord:
    """Convert a full database row to a BookRecord."""
    return BookRecord(
        id=row["id"],
        name=row["name"],
        metadata=row_to_metadata(row),
        cover=row["cover"],
        original_data=row["original_data"],
        data=row["data"],
        file_hash=row["file_hash"],
        date_added=row["date_added"],
        date_modified=row["date_modified"],
    )
