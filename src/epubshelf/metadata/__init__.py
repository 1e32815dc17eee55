# ABOUTME: Metadata package for EPUB bibliographic records and identifier schemes.
# ABOUTME: Exports the EpubMetadata dataclass and the scheme mapping functions.

from epubshelf.metadata.schemes import to_canonical, to_display
from epubshelf.metadata.types import EpubMetadata

__all__ = [
    "EpubMetadata",
    "to_canonical",
    "to_display",
]
