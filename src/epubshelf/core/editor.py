# ABOUTME: Edit flow for stored EPUBs: rebuild from the pristine bytes, then persist.
# ABOUTME: The stored record only changes once the rebuild has fully succeeded.

import logging

from epubshelf.db.catalog import LibraryCatalog
from epubshelf.db.mapping import BookRecord
from epubshelf.formats.epub import rebuild_epub
from epubshelf.metadata.types import EpubMetadata

logger = logging.getLogger(__name__)


def edit_book(
    catalog: LibraryCatalog,
    book_id: int,
    metadata: EpubMetadata,
    cover: bytes | None = None,
) -> BookRecord:
    """Apply an edited metadata record to a stored book.

    The EPUB is always rebuilt from the book's original bytes, never from a
    previous rebuild. When no new cover is given, the currently stored cover
    is written back so that an earlier cover replacement is not lost.

    Args:
        catalog: The library catalog holding the book.
        book_id: ID of the book to edit.
        metadata: The complete edited metadata record.
        cover: Replacement cover image bytes, if any.

    Returns:
        The updated BookRecord.

    Raises:
        ValueError: If the book_id does not exist.
        EpubError: If the rebuild fails; the stored book is left untouched.
    """
    record = catalog.get_by_id(book_id)
    if record is None:
        raise ValueError(f"Book with id {book_id} not found")

    new_cover = cover if cover is not None else record.cover
    data = rebuild_epub(record.original_data, metadata, new_cover)

    stored_cover = new_cover if metadata.cover_path else record.cover
    catalog.replace_book(book_id, metadata, data, stored_cover)
    logger.info("Rebuilt book %d (%d bytes)", book_id, len(data))

    updated = catalog.get_by_id(book_id)
    if updated is None:
        raise ValueError(f"Book with id {book_id} not found")
    return updated
