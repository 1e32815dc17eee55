# ABOUTME: Core metadata data structure for EPUB package documents.
# ABOUTME: EpubMetadata is the interchange format between extraction, storage, and rebuild.

from dataclasses import dataclass, field


@dataclass
class EpubMetadata:
    """Bibliographic metadata read from (and written back to) an OPF document.

    Scalar fields are never None: a field missing from the package document
    is an empty string. Identifier keys are canonical scheme keys (see
    epubshelf.metadata.schemes). cover_path, when set, is a normalized
    container entry name.
    """

    title: str = ""
    author: str = ""
    description: str = ""
    identifiers: dict[str, str] = field(default_factory=dict)
    publisher: str = ""
    language: str = ""
    subjects: list[str] = field(default_factory=list)
    cover_path: str | None = None

    @property
    def has_cover(self) -> bool:
        """Whether a cover entry was resolved."""
        return bool(self.cover_path)
