"""Export archive.

In-memory view over the zip produced by a finished export task.
"""

import io
import zipfile
from dataclasses import dataclass
from pathlib import Path

from .exceptions import CorruptArchiveError


@dataclass(frozen=True)
class ArchiveEntry:
    """One file inside an export archive."""

    name: str
    data: bytes

    def text(self) -> str:
        """Entry payload decoded as UTF-8 with surrounding whitespace trimmed."""
        return self.data.decode("utf-8", errors="replace").strip()


class ExportArchive:
    """Named entries of a downloaded export zip.

    Entries are read once when the archive is parsed and kept in archive
    order; directory records are skipped.
    """

    def __init__(self, entries: list[ArchiveEntry]):
        self._entries = tuple(entries)

    @classmethod
    def from_bytes(cls, data: bytes) -> "ExportArchive":
        """Parse raw zip bytes.

        Raises:
            CorruptArchiveError: ``data`` is not a readable zip archive
        """
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as zf:
                entries = [
                    ArchiveEntry(name=info.filename, data=zf.read(info))
                    for info in zf.infolist()
                    if not info.is_dir()
                ]
        except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError) as e:
            raise CorruptArchiveError(f"Export is not a valid zip archive: {e}") from e

        return cls(entries)

    def entries(self) -> tuple[ArchiveEntry, ...]:
        """All file entries, in archive order."""
        return self._entries

    def names(self) -> list[str]:
        return [entry.name for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def extract_all(self, path: str | Path) -> list[Path]:
        """Write every entry verbatim below ``path``.

        Args:
            path: Destination folder, created if missing

        Returns:
            Paths of the written files
        """
        root = Path(path).resolve()
        written = []

        for entry in self._entries:
            target = (root / entry.name).resolve()
            if not target.is_relative_to(root):
                raise CorruptArchiveError(f"Archive entry escapes destination: {entry.name}")

            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(entry.data)
            written.append(target)

        return written
