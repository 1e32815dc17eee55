# ABOUTME: EPUB extraction and rebuild built on the in-memory container and OPF codec.
# ABOUTME: Every other entry in the container is carried through a rebuild unchanged.

import logging
from dataclasses import dataclass

from lxml import etree

from epubshelf.formats.container import MIMETYPE_ENTRY, EpubContainer
from epubshelf.formats.errors import InvalidContainer, InvalidEpub, MissingEntry
from epubshelf.formats.opf import (
    parse_package_document,
    read_opf_metadata,
    serialize_package_document,
    write_opf_metadata,
)
from epubshelf.metadata.types import EpubMetadata

logger = logging.getLogger(__name__)

EPUB_MIMETYPE = "application/epub+zip"
CONTAINER_ENTRY = "META-INF/container.xml"
CONTAINER_NS = "urn:oasis:names:tc:opendocument:xmlns:container"


@dataclass
class ExtractedEpub:
    """Everything the library keeps from one extraction.

    original holds the input bytes unchanged; every later rebuild starts
    from them.
    """

    metadata: EpubMetadata
    cover: bytes | None
    original: bytes


def _check_mimetype(container: EpubContainer) -> None:
    mimetype = container.read_text(MIMETYPE_ENTRY)
    if mimetype is None:
        raise InvalidEpub("Missing mimetype entry")
    if mimetype.strip() != EPUB_MIMETYPE:
        raise InvalidEpub(f"Unexpected mimetype: {mimetype.strip()!r}")


def locate_package_document(container: EpubContainer) -> str:
    """Return the entry name of the package document declared in container.xml.

    Raises:
        InvalidContainer: If container.xml is missing or unparseable, or its
            first rootfile has no full-path.
    """
    data = container.read(CONTAINER_ENTRY)
    if data is None:
        raise InvalidContainer(f"Missing {CONTAINER_ENTRY}")

    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise InvalidContainer(f"{CONTAINER_ENTRY} is not valid XML: {exc}") from exc

    rootfile = next(root.iter(f"{{{CONTAINER_NS}}}rootfile"), None)
    if rootfile is None:
        raise InvalidContainer(f"No rootfile element in {CONTAINER_ENTRY}")

    full_path = rootfile.get("full-path")
    if not full_path:
        raise InvalidContainer(f"rootfile in {CONTAINER_ENTRY} has no full-path")
    return full_path


def _load_package_document(container: EpubContainer, opf_path: str) -> etree._ElementTree:
    data = container.read(opf_path)
    if data is None:
        raise MissingEntry(f"Package document not found in container: {opf_path}")
    return parse_package_document(data)


def extract_epub(data: bytes) -> ExtractedEpub:
    """Extract metadata and the cover image from EPUB bytes.

    Args:
        data: The complete EPUB file contents.

    Returns:
        ExtractedEpub with the metadata record, cover bytes (None when no
        cover was resolved) and the untouched input bytes.

    Raises:
        EpubError: One of its subclasses, describing why the bytes could not
            be read as an EPUB.
    """
    container = EpubContainer.open(data)
    _check_mimetype(container)

    opf_path = locate_package_document(container)
    document = _load_package_document(container, opf_path)
    metadata = read_opf_metadata(document, opf_path, container)

    cover = container.read(metadata.cover_path) if metadata.cover_path else None
    return ExtractedEpub(metadata=metadata, cover=cover, original=data)


def rebuild_epub(
    original: bytes, metadata: EpubMetadata, new_cover: bytes | None = None,
) -> bytes:
    """Produce a new EPUB from the original bytes with edited metadata.

    The package document is rewritten and, when both new_cover and
    metadata.cover_path are given, the cover entry is replaced (or added).
    All other entries are copied as-is.

    Args:
        original: The pristine EPUB bytes the library item was created from.
        metadata: The complete edited metadata record.
        new_cover: Replacement cover image bytes, if any.

    Returns:
        The rebuilt EPUB bytes.

    Raises:
        EpubError: One of its subclasses; nothing is returned on failure.
    """
    container = EpubContainer.open(original)

    opf_path = locate_package_document(container)
    document = _load_package_document(container, opf_path)
    write_opf_metadata(document, metadata)

    if new_cover and metadata.cover_path:
        logger.debug("Replacing cover entry %s", metadata.cover_path)
        container.write(metadata.cover_path, new_cover)

    container.write(opf_path, serialize_package_document(document))
    return container.to_bytes()
