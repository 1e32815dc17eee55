# ABOUTME: Shared pytest fixtures for epubshelf tests.
# ABOUTME: Provides sample EPUB files (valid, minimal, ebooklib-written, corrupt) and a catalog.

from pathlib import Path

import pytest
from ebooklib import epub

from epubshelf.db.catalog import LibraryCatalog
from epubshelf.db.connection import open_library
from tests.fixtures.epub_builders import COVER_BYTES, make_minimal_epub, make_rose_epub


@pytest.fixture
def rose_bytes() -> bytes:
    """Bytes of a fully populated EPUB with a manifest-declared cover."""
    return make_rose_epub()


@pytest.fixture
def sample_epub(tmp_path: Path, rose_bytes: bytes) -> Path:
    """The fully populated EPUB written to disk."""
    filepath = tmp_path / "name_of_the_rose.epub"
    filepath.write_bytes(rose_bytes)
    return filepath


@pytest.fixture
def minimal_epub(tmp_path: Path) -> Path:
    """Create an EPUB with minimal metadata (only title)."""
    filepath = tmp_path / "minimal.epub"
    filepath.write_bytes(make_minimal_epub())
    return filepath


@pytest.fixture
def corrupt_epub(tmp_path: Path) -> Path:
    """Create a corrupt file that is not a valid EPUB."""
    filepath = tmp_path / "corrupt.epub"
    filepath.write_text("this is not a valid epub file")
    return filepath


@pytest.fixture
def ebooklib_epub(tmp_path: Path) -> Path:
    """Create an EPUB 3 file with a cover using ebooklib."""
    book = epub.EpubBook()

    book.set_identifier("ebooklib-id-42")
    book.set_title("Foucault's Pendulum")
    book.set_language("it")
    book.add_author("Umberto Eco")
    book.add_metadata("DC", "publisher", "Bompiani")
    book.add_metadata("DC", "subject", "Conspiracy")
    book.set_cover("cover.jpg", COVER_BYTES, create_page=False)

    chapter = epub.EpubHtml(title="Chapter 1", file_name="chap01.xhtml", lang="it")
    chapter.content = b"<html><body><h1>Chapter 1</h1><p>Content.</p></body></html>"
    book.add_item(chapter)

    book.toc = [epub.Link("chap01.xhtml", "Chapter 1", "chap01")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]

    filepath = tmp_path / "pendulum.epub"
    epub.write_epub(str(filepath), book)
    return filepath


@pytest.fixture
def catalog(tmp_path: Path) -> LibraryCatalog:
    """Provide a LibraryCatalog backed by a temporary database."""
    conn = open_library(tmp_path / "test.db")
    return LibraryCatalog(conn)
