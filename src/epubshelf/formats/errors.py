# ABOUTME: Exception types raised by the EPUB codec.
# ABOUTME: Every failure during extraction or rebuild derives from EpubError.


class EpubError(Exception):
    """Base class for all EPUB extraction and rebuild failures."""


class InvalidEpub(EpubError):
    """The bytes are not an EPUB: not a ZIP, or the mimetype entry is missing or wrong."""


class InvalidContainer(EpubError):
    """META-INF/container.xml is missing, unparseable, or declares no package document."""


class MalformedPackageDocument(EpubError):
    """The OPF package document cannot be parsed or has no metadata element."""


class MissingEntry(EpubError):
    """A container entry that is strictly required does not exist."""


class SerializationFailure(EpubError):
    """Producing the final container bytes failed."""
