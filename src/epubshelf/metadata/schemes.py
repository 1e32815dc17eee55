# ABOUTME: Mapping between free-form identifier schemes and canonical keys.
# ABOUTME: Collapses spellings like ISBN-10/isbn10 on read and restores display tokens on write.

import re

# Raw (lowercased) scheme spelling -> canonical key.
_CANONICAL_SCHEMES: dict[str, str] = {
    # Amazon
    "mobi-asin": "asin",
    "amazon-asin": "asin",
    "asin": "asin",
    "amazon": "amzn",
    "amazon-id": "amzn",
    # ISBN
    "isbn": "isbn",
    "isbn-10": "isbn",
    "isbn10": "isbn",
    "isbn-13": "isbn13",
    "isbn13": "isbn13",
    # Google Books
    "google": "google",
    "google-books": "google",
    "googlebooks": "google",
    "goog": "google",
    # Goodreads
    "goodreads": "goodreads",
    "goodreads-id": "goodreads",
    "gr": "goodreads",
    # Libraries
    "lccn": "lccn",
    "library-of-congress": "lccn",
    "oclc": "oclc",
    "worldcat": "oclc",
    "dewey": "dewey",
    "ddc": "dewey",
    # Academic
    "doi": "doi",
    "pmid": "pmid",
    "pubmed": "pmid",
    # Generic
    "uuid": "uuid",
    "guid": "uuid",
    "uri": "uri",
    "url": "uri",
    # Stores
    "apple": "apple",
    "apple-id": "apple",
    "itunes": "apple",
    "kobo": "kobo",
    "kobo-id": "kobo",
    "bn": "bn",
    "barnes-noble": "bn",
    "nook": "bn",
    "gutenberg": "gutenberg",
    "pg": "gutenberg",
    "project-gutenberg": "gutenberg",
    # Internal
    "calibre": "calibre",
    "calibre-id": "calibre",
    "custom": "custom",
    "internal": "custom",
}

# Canonical key -> scheme token written back into opf:scheme.
_DISPLAY_SCHEMES: dict[str, str] = {
    "asin": "ASIN",
    "amzn": "AMAZON",
    "isbn": "ISBN",
    "isbn13": "ISBN",
    "google": "GOOGLE",
    "goodreads": "GOODREADS",
    "lccn": "LCCN",
    "oclc": "OCLC",
    "dewey": "DEWEY",
    "doi": "DOI",
    "pmid": "PMID",
    "uuid": "UUID",
    "uri": "URI",
    "apple": "APPLE",
    "kobo": "KOBO",
    "bn": "BN",
    "gutenberg": "GUTENBERG",
    "calibre": "CALIBRE",
}

_NAMESPACE_PREFIX_RE = re.compile(r"^(opf:|dc:|dcterms:)")


def to_canonical(raw_scheme: str) -> str:
    """Map a scheme as found in a package document to its canonical key.

    Matching is case-insensitive. Unknown schemes are lowercased and lose
    any leftover `opf:`, `dc:` or `dcterms:` prefix, but are otherwise kept.
    """
    key = raw_scheme.lower()
    if key in _CANONICAL_SCHEMES:
        return _CANONICAL_SCHEMES[key]
    return _NAMESPACE_PREFIX_RE.sub("", key)


def to_display(key: str) -> str:
    """Map a canonical key to the scheme token written into the document.

    Lossy by nature: isbn and isbn13 both come back as ISBN.
    """
    return _DISPLAY_SCHEMES.get(key.lower(), key.upper())
