# ABOUTME: Public API for the epubshelf library database layer.
# ABOUTME: Exports connection management, catalog operations, and data types.

from epubshelf.db.catalog import DuplicateBookError, LibraryCatalog
from epubshelf.db.connection import DEFAULT_DB_PATH, open_library
from epubshelf.db.hashing import compute_hash
from epubshelf.db.mapping import BookRecord

__all__ = [
    "DEFAULT_DB_PATH",
    "BookRecord",
    "DuplicateBookError",
    "LibraryCatalog",
    "compute_hash",
    "open_library",
]
