# ABOUTME: Namespace-aware reading and in-place editing of OPF package documents.
# ABOUTME: Extracts Dublin Core metadata and the cover entry, and writes edited metadata back.

import logging
import re

from lxml import etree

from epubshelf.formats.container import EpubContainer
from epubshelf.formats.errors import MalformedPackageDocument
from epubshelf.formats.paths import normalize, parent_dir, resolve
from epubshelf.metadata.schemes import to_canonical, to_display
from epubshelf.metadata.types import EpubMetadata

logger = logging.getLogger(__name__)

OPF_NS = "http://www.idpf.org/2007/opf"
DC_NS = "http://purl.org/dc/elements/1.1/"
DCTERMS_NS = "http://purl.org/dc/terms/"

NAMESPACES = {"opf": OPF_NS, "dc": DC_NS, "dcterms": DCTERMS_NS}

# EpubMetadata field -> Dublin Core element name.
SCALAR_FIELDS = {
    "title": "title",
    "author": "creator",
    "description": "description",
    "language": "language",
    "publisher": "publisher",
}

_COVER_NAME_RE = re.compile(r"(^|/)cover\.(jpe?g|png|gif|svg)$")
_SCHEME_ATTR = f"{{{OPF_NS}}}scheme"


def parse_package_document(data: bytes) -> etree._ElementTree:
    """Parse OPF bytes into an element tree.

    Raises:
        MalformedPackageDocument: If the bytes are not well-formed XML.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise MalformedPackageDocument(f"Package document is not valid XML: {exc}") from exc
    return root.getroottree()


def serialize_package_document(document: etree._ElementTree) -> bytes:
    """Serialize a package document as UTF-8 with an XML declaration."""
    return etree.tostring(document, xml_declaration=True, encoding="UTF-8")


def _xpath(document: etree._ElementTree, path: str, **variables: str) -> list:
    return document.xpath(path, namespaces=NAMESPACES, **variables)


def _first(document: etree._ElementTree, path: str) -> etree._Element | None:
    found = _xpath(document, path)
    return found[0] if found else None


def _element_text(element: etree._Element) -> str:
    return "".join(element.itertext()).strip()


# --- Reading ---


def _get_string(document: etree._ElementTree, path: str) -> str:
    """Trimmed string value of the first node matched by path, or ""."""
    return str(document.xpath(f"string({path})", namespaces=NAMESPACES)).strip()


def _get_identifiers(document: etree._ElementTree) -> dict[str, str]:
    """Collect scheme-tagged identifiers keyed by canonical scheme.

    Identifiers without a scheme or without a value are ignored. When two
    schemes collapse to the same key, the later element wins.
    """
    identifiers: dict[str, str] = {}
    for element in _xpath(document, "//dc:identifier"):
        scheme = element.get(_SCHEME_ATTR) or element.get("scheme")
        value = _element_text(element)
        if scheme and value:
            identifiers[to_canonical(scheme)] = value
    return identifiers


def _get_subjects(document: etree._ElementTree) -> list[str]:
    subjects = []
    for element in _xpath(document, "//dc:subject"):
        subject = _element_text(element)
        if subject:
            subjects.append(subject)
    return subjects


def _find_cover(
    document: etree._ElementTree, opf_path: str, container: EpubContainer,
) -> str | None:
    """Locate the cover image entry, trying three strategies in order.

    1. The manifest item named by <meta name="cover" content="...">.
    2. Any entry called cover.{jpg,jpeg,png,gif,svg} under the OPF directory.
    3. The OPF directory joined with the raw cover id, for manifests that
       put a file name where an item id belongs.
    """
    opf_dir = parent_dir(opf_path)
    cover_id = _get_string(document, '//opf:metadata/opf:meta[@name="cover"]/@content')

    if cover_id:
        hrefs = _xpath(document, "//opf:manifest/opf:item[@id=$item_id]/@href", item_id=cover_id)
        href = str(hrefs[0]).strip() if hrefs else ""
        if href:
            cover_path = resolve(opf_dir, href)
            if cover_path in container:
                logger.debug("Cover found via manifest item %s: %s", cover_id, cover_path)
                return cover_path

    for name in container.names():
        if not _COVER_NAME_RE.search(name.lower()):
            continue
        # Plain prefix test: OEBPS2/cover.png counts as inside OEBPS.
        candidate = normalize(name)
        if candidate.startswith(opf_dir):
            logger.debug("Cover found by file name: %s", candidate)
            return candidate

    if cover_id:
        literal = f"{opf_dir}/{cover_id}"
        if literal in container:
            logger.debug("Cover found via raw cover id: %s", literal)
            return literal

    logger.debug("No cover resolved for package document %s", opf_path)
    return None


def read_opf_metadata(
    document: etree._ElementTree, opf_path: str, container: EpubContainer,
) -> EpubMetadata:
    """Extract metadata from a parsed package document.

    Args:
        document: The parsed OPF document.
        opf_path: Container entry name of the OPF document, used to resolve
            manifest hrefs.
        container: The container the document came from, used to check that
            the cover entry exists.

    Returns:
        A fresh EpubMetadata. Missing scalar fields are empty strings.

    Raises:
        MalformedPackageDocument: If the document has neither an OPF metadata
            element nor any Dublin Core element.
    """
    if _first(document, "//opf:metadata") is None and _first(document, "//dc:*") is None:
        raise MalformedPackageDocument(f"No metadata in package document {opf_path}")

    scalars = {
        field_name: _get_string(document, f"//dc:{dc_name}")
        for field_name, dc_name in SCALAR_FIELDS.items()
    }
    return EpubMetadata(
        **scalars,
        identifiers=_get_identifiers(document),
        subjects=_get_subjects(document),
        cover_path=_find_cover(document, opf_path, container),
    )


# --- Writing ---


def _set_text(element: etree._Element, value: str) -> None:
    """Replace all content of an element with plain text."""
    for child in list(element):
        element.remove(child)
    element.text = value


def _append_dc(
    parent: etree._Element, name: str, value: str, *, with_opf_prefix: bool = False,
) -> etree._Element:
    """Append a Dublin Core element, copying the indentation of its siblings."""
    children = list(parent)
    nsmap = {"dc": DC_NS, "opf": OPF_NS} if with_opf_prefix else {"dc": DC_NS}
    element = etree.SubElement(parent, f"{{{DC_NS}}}{name}", nsmap=nsmap)
    element.text = value
    if children:
        last = children[-1]
        element.tail = last.tail
        last.tail = children[-2].tail if len(children) > 1 else parent.text
    return element


def _remove(element: etree._Element) -> None:
    """Detach an element, leaving the surrounding whitespace in place."""
    parent = element.getparent()
    if parent is None:
        return
    previous = element.getprevious()
    if previous is not None:
        previous.tail = element.tail
    else:
        parent.text = element.tail
    parent.remove(element)


def _write_identifiers(
    document: etree._ElementTree, metadata_el: etree._Element, identifiers: dict[str, str],
) -> None:
    package = _first(document, "//opf:package")
    unique_id = package.get("unique-identifier") if package is not None else None

    for element in _xpath(document, "//dc:identifier"):
        # The unique identifier is referenced by the package; keep it as-is.
        if unique_id and element.get("id") == unique_id:
            continue
        _remove(element)

    for key, value in identifiers.items():
        if not value:
            continue
        element = _append_dc(metadata_el, "identifier", value, with_opf_prefix=True)
        element.set(_SCHEME_ATTR, to_display(key))


def _write_subjects(
    document: etree._ElementTree, metadata_el: etree._Element, subjects: list[str],
) -> None:
    for element in _xpath(document, "//dc:subject"):
        _remove(element)
    for subject in subjects:
        if subject and subject.strip():
            _append_dc(metadata_el, "subject", subject)


def write_opf_metadata(document: etree._ElementTree, metadata: EpubMetadata) -> None:
    """Write an edited metadata record into a package document in place.

    Scalar fields update the first existing Dublin Core element or append a
    new one. Identifiers and subjects are replaced wholesale, except that the
    identifier referenced by package/@unique-identifier is never touched.
    Without an OPF metadata element there is nowhere to add elements, so only
    existing scalar elements are updated.
    """
    metadata_el = _first(document, "//opf:metadata")

    for field_name, dc_name in SCALAR_FIELDS.items():
        value = getattr(metadata, field_name)
        existing = _first(document, f"//dc:{dc_name}")
        if existing is not None:
            _set_text(existing, value)
        elif metadata_el is not None:
            _append_dc(metadata_el, dc_name, value)
        else:
            logger.warning("No metadata element; cannot add dc:%s", dc_name)

    if metadata_el is None:
        logger.warning("No metadata element; identifiers and subjects left unchanged")
        return

    _write_identifiers(document, metadata_el, metadata.identifiers)
    _write_subjects(document, metadata_el, metadata.subjects)
