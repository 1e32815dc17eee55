# ABOUTME: Batch intake of EPUBs: extraction with per-file failure isolation, then cataloging.
# ABOUTME: A corrupt file is recorded as an error and the batch carries on with the next one.

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from epubshelf.db.catalog import DuplicateBookError, LibraryCatalog
from epubshelf.db.hashing import compute_hash
from epubshelf.formats.epub import ExtractedEpub, extract_epub
from epubshelf.formats.errors import EpubError

logger = logging.getLogger(__name__)


@dataclass
class BatchEntry:
    """Outcome of extracting one source: either extracted or error is set."""

    name: str
    extracted: ExtractedEpub | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.extracted is not None


@dataclass
class ImportResult:
    """Summary of an import operation."""

    added: int = 0
    skipped: int = 0
    errors: int = 0
    error_details: list[tuple[Path, str]] = field(default_factory=list)


def extract_batch(sources: Iterable[tuple[str, bytes]]) -> list[BatchEntry]:
    """Extract each (name, bytes) source in turn.

    Sources are processed strictly one after another. A source that fails to
    extract yields an entry carrying the error message instead of aborting
    the batch. Entries come back in input order.
    """
    entries = []
    for name, data in sources:
        try:
            entries.append(BatchEntry(name=name, extracted=extract_epub(data)))
        except EpubError as exc:
            logger.warning("Failed to extract %s: %s", name, exc)
            entries.append(BatchEntry(name=name, error=str(exc)))
    return entries


def _is_epub(path: Path) -> bool:
    return path.suffix.lower() == ".epub"


def import_books(paths: list[Path], catalog: LibraryCatalog) -> ImportResult:
    """Import EPUB files into the library catalog.

    Files without an .epub suffix are ignored. Unreadable files and files
    that fail extraction are recorded as errors; files whose bytes are
    already cataloged (same hash) are skipped.

    Args:
        paths: List of EPUB file paths to import.
        catalog: The library catalog to add books to.

    Returns:
        ImportResult with counts of added, skipped, and errored files.
    """
    result = ImportResult()
    by_name: dict[str, tuple[Path, str]] = {}

    def sources() -> Iterator[tuple[str, bytes]]:
        for epub_path in paths:
            if not _is_epub(epub_path):
                continue
            try:
                data = epub_path.read_bytes()
            except OSError as exc:
                result.errors += 1
                result.error_details.append((epub_path, str(exc)))
                continue

            file_hash = compute_hash(data)
            # Check for duplicate before extracting (cheaper)
            if catalog.get_by_hash(file_hash) is not None:
                result.skipped += 1
                continue

            by_name[str(epub_path)] = (epub_path, file_hash)
            yield str(epub_path), data

    for entry in extract_batch(sources()):
        epub_path, file_hash = by_name[entry.name]
        if entry.extracted is None:
            result.errors += 1
            result.error_details.append((epub_path, entry.error or "unknown error"))
            continue

        try:
            catalog.add_book(epub_path.name, entry.extracted, file_hash=file_hash)
            result.added += 1
        except DuplicateBookError:
            # Same bytes appeared twice in this batch
            result.skipped += 1

    return result
