"""Playlist controller for M3U files.

Feed it a playlist (a :class:`MediaData` of type M3U) and it hands back the
tracks in order. It can move through the list, shuffle it, edit the file on
disk and, when given transport callbacks, drive playback on its own.
"""

from __future__ import annotations

import enum
import random
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from mediadeck.media import FileType, MediaData, Source

MAX_TRACKS = 1000

_URL_RE = re.compile(r"(http|https)://.*")
_LOCAL_RE = re.compile(
    r"((/[a-zA-Z0-9_.\-]+)+|/)(.mp3\b|.flac|\b.wav|\b.ogg|\b)",
    re.ASCII,
)
_TRACK_TYPES = {
    "mp3": FileType.MP3,
    "flac": FileType.FLAC,
    "wav": FileType.WAV,
    "ogg": FileType.OGG,
}
_PLAYABLE = frozenset(_TRACK_TYPES.values())


class PlaylistError(Exception):
    """Raised when a playlist cannot be loaded, read or edited."""


class TransportStatus(enum.IntEnum):
    STOPPED = 0
    PLAYING = 1
    PAUSED = 2


def check_line(line: str) -> bool:
    """Whether a playlist line names a local track or an HTTP(S) stream."""
    if _LOCAL_RE.fullmatch(line):
        return True
    return _URL_RE.fullmatch(line.lower()) is not None


@dataclass(frozen=True)
class _Track:
    line_no: int
    text: str


def _read_lines(path: Path) -> list[str]:
    try:
        content = path.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise PlaylistError(f"could not open playlist file {path}") from exc
    return [raw.replace("\r", "") for raw in content.split("\n")]


class PlaylistEngine:
    """Walks an M3U playlist and optionally drives a transport.

    With all four callbacks given, the engine loads tracks into the transport
    (``load_callback(media) -> bool``), starts and stops it
    (``play_callback()``, ``stop_callback()``) and polls its state
    (``status_callback() -> TransportStatus``). Without callbacks it only
    serves as a data source and editor for the playlist.
    """

    def __init__(
        self,
        load_callback: Callable[[MediaData], bool] | None = None,
        play_callback: Callable[[], object] | None = None,
        stop_callback: Callable[[], object] | None = None,
        status_callback: Callable[[], int] | None = None,
    ) -> None:
        callbacks = (load_callback, play_callback, stop_callback, status_callback)
        given = [cb is not None for cb in callbacks]
        if any(given) and not all(given):
            raise ValueError("either all transport callbacks or none must be given")
        self._callbacks_enabled = all(given)
        self._load_cb = load_callback
        self._play_cb = play_callback
        self._stop_cb = stop_callback
        self._status_cb = status_callback
        self._playlist: MediaData | None = None
        self._tracks: list[_Track] = []
        self._enabled = False
        self._playing = False
        self._rng = random.Random()
        self.current_index = 0

    def __len__(self) -> int:
        return len(self._tracks)

    @property
    def playing(self) -> bool:
        return self._playing

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def playlist(self) -> MediaData | None:
        return self._playlist

    def _playlist_path(self) -> Path:
        if self._playlist is None:
            raise PlaylistError("no playlist loaded")
        return Path(self._playlist.full_path())

    def _read_tracks(self) -> None:
        path = self._playlist_path()
        if not path.exists():
            self.eject()
            raise PlaylistError(f"could not open playlist file {path}")
        tracks: list[_Track] = []
        for line_no, line in enumerate(_read_lines(path)):
            if len(tracks) >= MAX_TRACKS:
                break
            if check_line(line):
                tracks.append(_Track(line_no, line))
        self._tracks = tracks

    def load(self, playlist: MediaData) -> int:
        """Load an M3U playlist and return the number of tracks found."""
        if playlist.type != FileType.M3U:
            raise PlaylistError("not an M3U playlist")
        if not Path(playlist.full_path()).is_file():
            self.eject()
            raise PlaylistError(f"could not open playlist file {playlist.full_path()}")
        self._playlist = MediaData(
            filename=playlist.filename,
            path=playlist.path,
            url=playlist.url,
            type=playlist.type,
            port=playlist.port,
            source=playlist.source,
            loaded=playlist.loaded,
            text=playlist.text,
        )
        self._read_tracks()
        self.current_index = 0
        self._enabled = bool(self._tracks)
        if self._enabled and self._callbacks_enabled and not self._try_load(0):
            self._playlist = None
            raise PlaylistError("transport failed to load the first track")
        return len(self._tracks)

    def get_track(self, track: int) -> MediaData:
        """The track at position ``track`` as a loaded :class:`MediaData`."""
        if not 0 <= track < len(self._tracks):
            raise IndexError(f"track {track} out of range")
        line = self._tracks[track].text
        if _URL_RE.fullmatch(line):
            return MediaData(url=line, source=Source.REMOTE_FILE, loaded=True)
        if _LOCAL_RE.fullmatch(line):
            slash = line.rfind("/")
            path, filename = line[:slash], line[slash + 1:]
            kind = _TRACK_TYPES.get(filename[filename.rfind(".") + 1:])
            if kind is not None:
                return MediaData(
                    filename=filename,
                    path=path,
                    type=kind,
                    source=Source.LOCAL_FILE,
                    loaded=True,
                )
        self.eject()
        raise PlaylistError(f"unplayable playlist entry: {line!r}")

    def current_track(self) -> MediaData:
        return self.get_track(self.current_index)

    def _try_load(self, index: int) -> bool:
        try:
            media = self.get_track(index)
        except (PlaylistError, IndexError):
            return False
        return bool(self._load_cb(media))

    def next(self) -> bool:
        """Advance to the next track; stop at the end of the list."""
        if not self._tracks or not self._enabled:
            return False
        if self.current_index < len(self._tracks) - 1:
            self.current_index += 1
            if self._callbacks_enabled:
                self._stop_cb()
                if not self._try_load(self.current_index):
                    # Keep going until a track loads or the list runs out.
                    self.next()
                if self._playing:
                    self._play_cb()
            return True
        self.stop()
        return False

    def previous(self) -> bool:
        """Step back one track; refuse at the start of the list."""
        if not self._tracks or not self._enabled:
            return False
        if self.current_index == 0:
            return False
        self.current_index -= 1
        if self._callbacks_enabled:
            self._stop_cb()
            if not self._try_load(self.current_index):
                return False
            if self._playing:
                self._play_cb()
        return True

    def shuffle(self) -> bool:
        """Randomise the playing order and restart from its first track."""
        if not self._tracks or not self._enabled:
            return False
        self._rng.shuffle(self._tracks)
        self.current_index = 0
        return True

    def eject(self) -> None:
        """Forget the loaded playlist."""
        self._enabled = False
        self._playing = False
        self._tracks = []
        self._playlist = None

    def loop(self) -> None:
        """Poll the transport and move on when the current track has finished."""
        if not self._tracks or self._playlist is None or not self._playing:
            return
        if not self._callbacks_enabled or not self._enabled:
            return
        if self._status_cb() != TransportStatus.STOPPED:
            return
        if not self.next():
            self.stop()
            return
        if not self._try_load(self.current_index):
            self.stop()
            return
        self._play_cb()

    def play(self) -> None:
        if not self._tracks or not self._enabled:
            return
        self._playing = True
        if self._callbacks_enabled and self._status_cb() == TransportStatus.STOPPED:
            self._play_cb()

    def stop(self) -> None:
        if not self._tracks or not self._enabled:
            return
        self._playing = False
        if self._callbacks_enabled:
            self._stop_cb()

    def remove_track(self, track: int) -> None:
        """Delete a track from the playlist file and reload the list.

        Lines that are not tracks are dropped from the file as well.
        """
        if not 0 <= track < len(self._tracks):
            raise IndexError(f"track {track} out of range")
        path = self._playlist_path()
        removed = self._tracks[track].line_no
        kept = [
            line
            for line_no, line in enumerate(_read_lines(path))
            if line_no != removed and check_line(line)
        ]
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(
            "".join(line + "\n" for line in kept),
            encoding="utf-8",
            errors="surrogateescape",
        )
        tmp.replace(path)
        self._read_tracks()
        if self._tracks and self.current_index >= len(self._tracks):
            self.current_index = len(self._tracks) - 1
        elif not self._tracks:
            self.current_index = 0

    def add_track(self, track: MediaData) -> None:
        """Append a playable track to the end of the playlist file."""
        if track.type not in _PLAYABLE:
            raise PlaylistError("only MP3, FLAC, WAV and OGG tracks can be added")
        path = self._playlist_path()
        entry = track.full_path()
        if not (check_line(entry) or check_line(track.url)):
            raise PlaylistError(f"not a valid playlist entry: {entry!r}")
        try:
            content = path.read_text(encoding="utf-8", errors="surrogateescape")
            with path.open("a", encoding="utf-8", errors="surrogateescape", newline="") as handle:
                handle.write("\n" + entry)
        except OSError as exc:
            raise PlaylistError(f"could not open playlist file {path}") from exc
        self._tracks.append(_Track(content.count("\n") + 1, entry))

    def get(self, start: int, stop: int) -> list[MediaData]:
        """Tracks from ``start`` up to, not including, ``stop``."""
        if not self._enabled or not self._tracks or self._playlist is None:
            raise PlaylistError("no playlist loaded")
        if start >= len(self._tracks) or start > stop or start < 0:
            raise IndexError(f"invalid range {start}..{stop}")
        stop = min(stop, len(self._tracks))
        return [self.get_track(index) for index in range(start, stop)]

    def set_current_track(self, track: int) -> None:
        if not self._enabled or self._playlist is None:
            raise PlaylistError("no playlist loaded")
        if not 0 <= track < len(self._tracks):
            raise IndexError(f"track {track} out of range")
        self.current_index = track

    def is_loaded(self) -> bool:
        return self._playlist is not None