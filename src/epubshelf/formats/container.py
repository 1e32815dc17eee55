# ABOUTME: In-memory access to the ZIP container that wraps an EPUB.
# ABOUTME: Reads every entry up front, allows replacing entries, and re-serializes to bytes.

import io
import time
import zipfile
import zlib

from epubshelf.formats.errors import InvalidEpub, SerializationFailure

MIMETYPE_ENTRY = "mimetype"
COMPRESSION_LEVEL = 6


class EpubContainer:
    """A ZIP archive held entirely in memory as an ordered name -> bytes map.

    Entries keep their archive order and original ZipInfo so that an
    unchanged entry is written back with the same name and timestamp.
    """

    def __init__(self) -> None:
        self._entries: dict[str, bytes] = {}
        self._infos: dict[str, zipfile.ZipInfo] = {}

    @classmethod
    def open(cls, data: bytes) -> "EpubContainer":
        """Load every entry of a ZIP byte string.

        Raises:
            InvalidEpub: If the bytes are not a readable ZIP archive.
        """
        container = cls()
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                for info in archive.infolist():
                    container._infos[info.filename] = info
                    container._entries[info.filename] = archive.read(info)
        except zipfile.BadZipFile as exc:
            raise InvalidEpub(f"Not a ZIP archive: {exc}") from exc
        except (RuntimeError, NotImplementedError, zlib.error, EOFError, OSError) as exc:
            # Encrypted entries, unsupported compression, corrupt or truncated entry data.
            raise InvalidEpub(f"Unreadable ZIP archive: {exc}") from exc
        return container

    def names(self) -> list[str]:
        """All entry names in archive order."""
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def read(self, name: str) -> bytes | None:
        """Return an entry's bytes, or None if there is no such entry."""
        return self._entries.get(name)

    def read_text(self, name: str) -> str | None:
        """Return an entry decoded as UTF-8, or None if there is no such entry."""
        data = self._entries.get(name)
        if data is None:
            return None
        return data.decode("utf-8", errors="replace")

    def write(self, name: str, data: bytes) -> None:
        """Replace an entry's bytes, or append a new entry."""
        self._entries[name] = data

    def _zip_info_for(self, name: str) -> zipfile.ZipInfo:
        original = self._infos.get(name)
        if original is None:
            info = zipfile.ZipInfo(name, date_time=time.localtime(time.time())[:6])
            info.external_attr = 0o644 << 16
        else:
            info = zipfile.ZipInfo(name, date_time=original.date_time)
            info.external_attr = original.external_attr
            info.comment = original.comment
        if name == MIMETYPE_ENTRY:
            info.compress_type = zipfile.ZIP_STORED
        else:
            info.compress_type = zipfile.ZIP_DEFLATED
        return info

    def to_bytes(self) -> bytes:
        """Serialize the container to a new ZIP byte string.

        The mimetype entry is written first and uncompressed as OCF requires;
        everything else is deflated at a fixed level.

        Raises:
            SerializationFailure: If zipfile cannot produce the archive.
        """
        names = self.names()
        if MIMETYPE_ENTRY in self._entries:
            names.remove(MIMETYPE_ENTRY)
            names.insert(0, MIMETYPE_ENTRY)

        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(
                buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=COMPRESSION_LEVEL,
            ) as archive:
                for name in names:
                    info = self._zip_info_for(name)
                    archive.writestr(info, self._entries[name], compresslevel=COMPRESSION_LEVEL)
        except (OSError, ValueError, zipfile.LargeZipFile) as exc:
            raise SerializationFailure(f"Failed to write EPUB container: {exc}") from exc
        return buffer.getvalue()
