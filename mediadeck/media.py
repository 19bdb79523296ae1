"""Descriptions of media files and streams, and simple tabular data sources."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Sequence


class FileType(enum.IntEnum):
    MP3 = 0
    WAV = 1
    FLAC = 2
    OGG = 3
    M3U = 4
    DIR = 5
    TEXT = 6
    UNKNOWN = 7


class Source(enum.IntEnum):
    NO_SOURCE_LOADED = 0
    LOCAL_FILE = 1
    REMOTE_FILE = 2


_EXTENSION_MARKERS = (
    (".mp3", FileType.MP3),
    (".wav", FileType.WAV),
    (".flac", FileType.FLAC),
    (".ogg", FileType.OGG),
    (".m3u", FileType.M3U),
)


@dataclass
class MediaData:
    """A local file or remote stream.

    Equality compares the location, type, port, source and loaded flag;
    ``next_element`` and ``text`` are ignored.
    """

    filename: str = ""
    path: str = ""
    url: str = ""
    type: int = FileType.UNKNOWN
    port: int = 0
    source: int = Source.NO_SOURCE_LOADED
    loaded: bool = False
    text: str = field(default="", compare=False)
    next_element: int = field(default=0, compare=False)

    @classmethod
    def from_path(cls, path: str) -> "MediaData":
        """Build a loaded local entry from a filesystem path."""
        slash = path.rfind("/")
        directory = path[:slash] if slash >= 0 else path
        filename = path[slash + 1:]
        directory = directory or "/"
        filename = filename or "/"
        file_type = next(
            (kind for marker, kind in _EXTENSION_MARKERS if marker in filename),
            FileType.DIR,
        )
        return cls(
            filename=filename,
            path=directory,
            type=file_type,
            source=Source.LOCAL_FILE,
            loaded=True,
        )

    def full_path(self) -> str:
        """The full filesystem path for local files, otherwise the URL."""
        if self.source != Source.LOCAL_FILE:
            return self.url
        if self.path == "/" and self.filename == "/":
            return "/"
        if self.path != "/":
            return f"{self.path}/{self.filename}"
        return self.path + self.filename

    def __str__(self) -> str:
        return self.full_path()

    @staticmethod
    def file_extensions() -> dict[str, FileType]:
        """Supported media extensions mapped to their file types."""
        return {
            "mp3": FileType.MP3,
            "wav": FileType.WAV,
            "flac": FileType.FLAC,
            "ogg": FileType.OGG,
            "m3u": FileType.M3U,
        }


class TableData:
    """A flat sequence of strings viewed as rows of ``columns`` cells."""

    def __init__(self, table: Sequence[str], columns: int) -> None:
        if columns <= 0:
            raise ValueError("columns must be positive")
        self._table = table
        self._columns = columns
        self._rows = len(table) // columns

    def get(self, row: int, column: int) -> str:
        if not 0 <= row < self._rows or not 0 <= column < self._columns:
            raise IndexError(f"cell ({row}, {column}) out of range")
        return self._table[row * self._columns + column]

    def __len__(self) -> int:
        return self._rows

    def get_list(self, index: int, count: int) -> list[MediaData]:
        """Text entries for the first column of up to ``count`` rows from ``index``."""
        stop = min(index + count, self._rows)
        return [
            MediaData(type=FileType.TEXT, text=self.get(row, 0))
            for row in range(index, stop)
        ]