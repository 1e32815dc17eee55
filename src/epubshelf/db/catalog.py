# ABOUTME: Repository of stored EPUBs for the epubshelf library.
# ABOUTME: Insert, list, look up, replace after an edit, and remove books in SQLite.

import sqlite3

from epubshelf.db.mapping import BookRecord, metadata_to_row, row_to_record
from epubshelf.formats.epub import ExtractedEpub
from epubshelf.metadata.types import EpubMetadata


class DuplicateBookError(Exception):
    """Raised when attempting to add a book with a file_hash that already exists."""


class LibraryCatalog:
    """Wraps a sqlite3 connection and provides typed CRUD for the books table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def add_book(self, name: str, extracted: ExtractedEpub, file_hash: str) -> int:
        """Store a freshly extracted EPUB.

        The extracted original bytes become both original_data and the
        current data.

        Args:
            name: Display name of the source, usually the file name.
            extracted: The result of extract_epub.
            file_hash: SHA-256 hash of the original bytes.

        Returns:
            The row ID of the inserted book.

        Raises:
            DuplicateBookError: If a book with this file_hash already exists.
        """
        row = metadata_to_row(extracted.metadata)
        row.update(
            name=name,
            cover=extracted.cover,
            original_data=extracted.original,
            data=extracted.original,
            file_hash=file_hash,
        )
        columns = ", ".join(row.keys())
        placeholders = ", ".join("?" for _ in row)

        try:
            cursor = self._conn.execute(
                f"INSERT INTO books ({columns}) VALUES ({placeholders})",
                list(row.values()),
            )
            self._conn.commit()
        except sqlite3.IntegrityError as exc:
            if "UNIQUE constraint failed: books.file_hash" in str(exc):
                raise DuplicateBookError(f"Book with hash {file_hash} already exists") from exc
            raise

        return cursor.lastrowid  # type: ignore[return-value]

    def get_by_id(self, book_id: int) -> BookRecord | None:
        """Retrieve a book by its row ID."""
        cursor = self._conn.execute("SELECT * FROM books WHERE id = ?", (book_id,))
        row = cursor.fetchone()
        return row_to_record(row) if row else None

    def get_by_hash(self, file_hash: str) -> BookRecord | None:
        """Retrieve a book by the hash of its original bytes."""
        cursor = self._conn.execute("SELECT * FROM books WHERE file_hash = ?", (file_hash,))
        row = cursor.fetchone()
        return row_to_record(row) if row else None

    def list_all(self) -> list[BookRecord]:
        """Return all books in the order they were added."""
        cursor = self._conn.execute("SELECT * FROM books ORDER BY id")
        return [row_to_record(row) for row in cursor.fetchall()]

    def replace_book(
        self,
        book_id: int,
        metadata: EpubMetadata,
        data: bytes,
        cover: bytes | None,
    ) -> None:
        """Replace a book's metadata, current bytes and cover after a rebuild.

        original_data and file_hash are left alone.

        Raises:
            ValueError: If the book_id does not exist.
        """
        fields = metadata_to_row(metadata)
        fields.update(data=data, cover=cover)

        set_clause = ", ".join(f"{k} = ?" for k in fields)
        set_clause += ", date_modified = strftime('%Y-%m-%dT%H:%M:%S', 'now')"
        values = [*list(fields.values()), book_id]

        cursor = self._conn.execute(
            f"UPDATE books SET {set_clause} WHERE id = ?",
            values,
        )
        self._conn.commit()

        if cursor.rowcount == 0:
            raise ValueError(f"Book with id {book_id} not found")

    def delete_book(self, book_id: int) -> None:
        """Delete a book from the catalog.

        Raises:
            ValueError: If the book_id does not exist.
        """
        cursor = self._conn.execute("DELETE FROM books WHERE id = ?", (book_id,))
        self._conn.commit()

        if cursor.rowcount == 0:
            raise ValueError(f"Book with id {book_id} not found")
