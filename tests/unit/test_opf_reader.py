# ABOUTME: Unit tests for reading metadata out of OPF package documents.
# ABOUTME: Covers scalar fields, identifiers, subjects, and every cover fallback strategy.

import pytest

from epubshelf.formats.container import EpubContainer
from epubshelf.formats.errors import MalformedPackageDocument
from epubshelf.formats.opf import parse_package_document, read_opf_metadata
from epubshelf.metadata.types import EpubMetadata
from tests.fixtures.epub_builders import (
    ROSE_MANIFEST,
    ROSE_METADATA,
    UUID_VALUE,
    make_epub,
    package_document,
)

OPF_PATH = "OEBPS/content.opf"


def _read(
    metadata: str,
    manifest: str = ROSE_MANIFEST,
    extra: dict[str, bytes | str] | None = None,
    opf_path: str = OPF_PATH,
) -> EpubMetadata:
    opf = package_document(metadata, manifest)
    container = EpubContainer.open(make_epub(opf, opf_path=opf_path, extra=extra))
    return read_opf_metadata(parse_package_document(opf.encode()), opf_path, container)


class TestScalarFields:
    """Tests for title/author/description/language/publisher extraction."""

    def test_reads_all_scalars(self) -> None:
        meta = _read(ROSE_METADATA)
        assert meta.title == "The Name of the Rose"
        assert meta.author == "Umberto Eco"
        assert meta.language == "en"
        assert meta.publisher == "Harcourt"
        assert meta.description == "A mystery set in a medieval monastery."

    def test_missing_fields_are_empty_strings(self) -> None:
        meta = _read("    <dc:title>Only a Title</dc:title>")
        assert meta.title == "Only a Title"
        assert meta.author == ""
        assert meta.description == ""
        assert meta.language == ""
        assert meta.publisher == ""

    def test_values_are_trimmed(self) -> None:
        meta = _read("    <dc:title>\n      Spaced Out \n    </dc:title>")
        assert meta.title == "Spaced Out"

    def test_first_creator_wins(self) -> None:
        meta = _read(
            "    <dc:creator>First Author</dc:creator>\n"
            "    <dc:creator>Second Author</dc:creator>"
        )
        assert meta.author == "First Author"

    def test_description_with_markup_children(self) -> None:
        """Nested markup contributes its text to the string value."""
        meta = _read("    <dc:description>A <b>bold</b> claim.</dc:description>")
        assert meta.description == "A bold claim."

    def test_no_metadata_at_all_raises(self) -> None:
        opf = """<?xml version="1.0"?>
<package xmlns="http://www.idpf.org/2007/opf" version="2.0"><manifest/></package>"""
        container = EpubContainer.open(make_epub(opf))
        with pytest.raises(MalformedPackageDocument):
            read_opf_metadata(parse_package_document(opf.encode()), OPF_PATH, container)

    def test_metadata_without_opf_namespace(self) -> None:
        """Legacy documents with an unqualified package still yield their dc fields."""
        opf = """<?xml version="1.0"?>
<package version="2.0">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>Legacy</dc:title>
    <dc:creator>Anonymous</dc:creator>
    <dc:identifier scheme="ISBN">0156001314</dc:identifier>
  </metadata>
</package>"""
        container = EpubContainer.open(make_epub(opf))
        meta = read_opf_metadata(parse_package_document(opf.encode()), OPF_PATH, container)
        assert meta.title == "Legacy"
        assert meta.author == "Anonymous"
        assert meta.identifiers == {"isbn": "0156001314"}
        assert meta.cover_path is None

    def test_unparseable_document_raises(self) -> None:
        with pytest.raises(MalformedPackageDocument):
            parse_package_document(b"<package><metadata></package>")


class TestIdentifiers:
    """Tests for identifier extraction."""

    def test_maps_schemes_to_canonical_keys(self) -> None:
        meta = _read(ROSE_METADATA)
        assert meta.identifiers == {
            "uuid": UUID_VALUE,
            "isbn13": "9780156001311",
            "asin": "B00AXIZ4TQ",
        }

    def test_identifier_without_scheme_is_ignored(self) -> None:
        meta = _read('    <dc:identifier id="BookId">no-scheme</dc:identifier>')
        assert meta.identifiers == {}

    def test_identifier_without_value_is_ignored(self) -> None:
        meta = _read('    <dc:identifier opf:scheme="ISBN">   </dc:identifier>')
        assert meta.identifiers == {}

    def test_unprefixed_scheme_attribute_fallback(self) -> None:
        meta = _read('    <dc:identifier scheme="GOODREADS-ID">12345</dc:identifier>')
        assert meta.identifiers == {"goodreads": "12345"}

    def test_later_element_wins_on_collision(self) -> None:
        meta = _read(
            '    <dc:identifier opf:scheme="ISBN-10">0156001314</dc:identifier>\n'
            '    <dc:identifier opf:scheme="isbn">0000000000</dc:identifier>'
        )
        assert meta.identifiers == {"isbn": "0000000000"}

    def test_keys_are_lowercase_and_values_non_empty(self) -> None:
        meta = _read(
            '    <dc:identifier opf:scheme="Calibre">abc</dc:identifier>\n'
            '    <dc:identifier opf:scheme="OPF:Custom-Thing">x</dc:identifier>\n'
            '    <dc:identifier opf:scheme="DOI"></dc:identifier>'
        )
        assert meta.identifiers == {"calibre": "abc", "custom-thing": "x"}
        assert all(key == key.lower() for key in meta.identifiers)
        assert all(meta.identifiers.values())


class TestSubjects:
    """Tests for subject extraction."""

    def test_subjects_in_document_order(self) -> None:
        meta = _read(ROSE_METADATA)
        assert meta.subjects == ["Fiction", "Mystery"]

    def test_duplicates_kept_and_blanks_dropped(self) -> None:
        meta = _read(
            "    <dc:subject>History</dc:subject>\n"
            "    <dc:subject>   </dc:subject>\n"
            "    <dc:subject/>\n"
            "    <dc:subject> History </dc:subject>"
        )
        assert meta.subjects == ["History", "History"]


class TestCoverResolution:
    """Tests for the cover lookup strategies, in priority order."""

    def test_manifest_cover_meta(self) -> None:
        meta = _read(ROSE_METADATA, extra={"OEBPS/Images/cover.jpg": b"jpg"})
        assert meta.cover_path == "OEBPS/Images/cover.jpg"

    def test_manifest_href_with_parent_segments_is_normalized(self) -> None:
        manifest = '    <item id="cover-image" href="Text/../Images/front.jpg" media-type="image/jpeg"/>'
        meta = _read(ROSE_METADATA, manifest=manifest, extra={"OEBPS/Images/front.jpg": b"jpg"})
        assert meta.cover_path == "OEBPS/Images/front.jpg"

    def test_manifest_cover_beats_file_name_scan(self) -> None:
        manifest = '    <item id="cover-image" href="Images/front.png" media-type="image/png"/>'
        meta = _read(
            ROSE_METADATA,
            manifest=manifest,
            extra={"OEBPS/cover.jpg": b"jpg", "OEBPS/Images/front.png": b"png"},
        )
        assert meta.cover_path == "OEBPS/Images/front.png"

    def test_falls_back_to_cover_file_in_opf_dir(self) -> None:
        """No cover meta, but OEBPS/cover.jpg exists next to the OPF."""
        meta = _read("    <dc:title>Coverless Meta</dc:title>", extra={"OEBPS/cover.jpg": b"jpg"})
        assert meta.cover_path == "OEBPS/cover.jpg"

    def test_falls_back_when_manifest_target_missing(self) -> None:
        meta = _read(ROSE_METADATA, extra={"OEBPS/Images/COVER.PNG": b"png"})
        assert meta.cover_path == "OEBPS/Images/COVER.PNG"

    def test_file_name_scan_is_case_insensitive(self) -> None:
        meta = _read("    <dc:title>T</dc:title>", extra={"OEBPS/Cover.JPEG": b"jpg"})
        assert meta.cover_path == "OEBPS/Cover.JPEG"

    def test_file_name_scan_ignores_other_directories(self) -> None:
        meta = _read("    <dc:title>T</dc:title>", extra={"Other/cover.jpg": b"jpg"})
        assert meta.cover_path is None

    def test_file_name_scan_uses_plain_prefix_match(self) -> None:
        """A sibling directory sharing the OPF dir's prefix still counts."""
        meta = _read("    <dc:title>T</dc:title>", extra={"OEBPS2/cover.png": b"png"})
        assert meta.cover_path == "OEBPS2/cover.png"

    def test_file_name_scan_requires_exact_name(self) -> None:
        meta = _read("    <dc:title>T</dc:title>", extra={"OEBPS/mycover.jpg": b"jpg"})
        assert meta.cover_path is None

    def test_opf_at_root_matches_any_cover_file(self) -> None:
        meta = _read(
            "    <dc:title>T</dc:title>",
            extra={"images/cover.gif": b"gif"},
            opf_path="content.opf",
        )
        assert meta.cover_path == "images/cover.gif"

    def test_raw_cover_id_fallback(self) -> None:
        """A cover meta holding a file name instead of an item id."""
        meta = _read(
            '    <meta name="cover" content="front.png"/>',
            manifest="",
            extra={"OEBPS/front.png": b"png"},
        )
        assert meta.cover_path == "OEBPS/front.png"

    def test_no_cover_is_none(self) -> None:
        meta = _read("    <dc:title>T</dc:title>")
        assert meta.cover_path is None
        assert not meta.has_cover
