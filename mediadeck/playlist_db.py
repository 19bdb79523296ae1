"""Playlists kept as tables in an SQLite database.

Each playlist is one table whose rows are tracks, numbered by their row id.
A store loads one playlist at a time and keeps a cursor on its current track.
"""

from __future__ import annotations

import re
import sqlite3
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Iterator

from mediadeck.media import FileType, MediaData, Source

DB_FILENAME = ".playlists.db"

_URL_PATTERN = re.compile(r"https?://[^\s/$.?#].[^\s]*")


class PlaylistDBError(Exception):
    """Raised when the playlist database cannot be read or changed."""


class PlaylistNotFound(PlaylistDBError):
    """Raised when a playlist or a track does not exist."""


def _quote_identifier(name: str) -> str:
    if not name:
        raise PlaylistDBError("playlist name may not be empty")
    return '"' + name.replace('"', '""') + '"'


class PlaylistStore:
    """Playlists stored in ``directory``/.playlists.db."""

    def __init__(self, directory: str | Path = "playlists") -> None:
        self.directory = Path(directory)
        self.db_path = self.directory / DB_FILENAME
        self.current_playlist = ""
        self.current_track_id = 0
        self.current_track = MediaData()
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            connection = sqlite3.connect(self.db_path)
        except (OSError, sqlite3.Error) as exc:
            raise PlaylistDBError(f"failed to open database {self.db_path}") from exc
        with closing(connection):
            try:
                with connection:
                    yield connection
            except sqlite3.Error as exc:
                raise PlaylistDBError(str(exc)) from exc

    def _require_loaded(self) -> str:
        if not self._loaded:
            raise PlaylistDBError("no playlist loaded")
        return _quote_identifier(self.current_playlist)

    def create_playlist(self, name: str) -> None:
        """Create an empty playlist table unless it already exists."""
        table = _quote_identifier(name)
        with self._connect() as db:
            db.execute(
                f"CREATE TABLE IF NOT EXISTS {table} "
                "(id INTEGER PRIMARY KEY, filename TEXT, path TEXT, url TEXT, "
                "type INTEGER, source INTEGER)"
            )

    def add_playlist(self, playlist: MediaData, name: str) -> int:
        """Import the stream URLs of an M3U file as playlist ``name``.

        The playlist is left loaded. Returns the number of tracks added.
        """
        path = Path(playlist.full_path())
        try:
            lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
        except OSError as exc:
            raise PlaylistDBError(f"failed to open the file {path}") from exc
        self.create_playlist(name)
        self.load(name)
        added = 0
        for line in lines:
            for match in _URL_PATTERN.finditer(line):
                self.add_track(
                    MediaData(
                        url=match.group(),
                        type=FileType.M3U,
                        source=Source.REMOTE_FILE,
                        loaded=True,
                    )
                )
                added += 1
        return added

    def load(self, name: str) -> None:
        """Make ``name`` the current playlist."""
        self.eject()
        _quote_identifier(name)
        with self._connect() as db:
            row = db.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
                (name,),
            ).fetchone()
        if row is None:
            raise PlaylistNotFound(f"playlist does not exist: {name}")
        self.current_playlist = name
        self.current_track_id = 0
        self._loaded = True

    def eject(self) -> None:
        """Unload the current playlist."""
        self.current_playlist = ""
        self.current_track = MediaData()
        self.current_track_id = 0
        self._loaded = False

    def next(self) -> MediaData:
        """Move to the track after the current one and return it."""
        self._require_loaded()
        track = self.get_track(self.current_track_id + 1)
        self.current_track_id += 1
        self.current_track = track
        return track

    def previous(self) -> MediaData:
        """Move to the track before the current one and return it."""
        self._require_loaded()
        if self.current_track_id == 0:
            raise PlaylistDBError("already at the beginning of the playlist")
        track = self.get_track(self.current_track_id - 1)
        self.current_track_id -= 1
        self.current_track = track
        return track

    def get_track(self, track_id: int) -> MediaData:
        """The track with row id ``track_id`` in the current playlist."""
        table = self._require_loaded()
        with self._connect() as db:
            row = db.execute(
                f"SELECT filename, path, url, type, source FROM {table} WHERE id = ?",
                (track_id,),
            ).fetchone()
        if row is None:
            raise PlaylistNotFound(f"track {track_id} not found")
        filename, path, url, kind, source = row
        return MediaData(
            filename=filename or "",
            path=path or "",
            url=url or "",
            type=kind,
            source=source,
            loaded=True,
        )

    def set_current_track(self, track_id: int) -> MediaData:
        """Make ``track_id`` the current track and return it."""
        self._require_loaded()
        if not self.track_exists(track_id):
            raise PlaylistNotFound(f"track {track_id} not found")
        track = self.get_track(track_id)
        self.current_track_id = track_id
        self.current_track = track
        return track

    def track_exists(self, track_id: int) -> bool:
        """Whether the current playlist holds a track with this id."""
        if not self._loaded:
            return False
        table = _quote_identifier(self.current_playlist)
        with self._connect() as db:
            (count,) = db.execute(
                f"SELECT COUNT(*) FROM {table} WHERE id = ?", (track_id,)
            ).fetchone()
        return count > 0

    def add_track(self, track: MediaData) -> int:
        """Append ``track`` to the current playlist and return its id."""
        table = self._require_loaded()
        with self._connect() as db:
            cursor = db.execute(
                f"INSERT INTO {table} (filename, path, url, type, source) "
                "VALUES (?, ?, ?, ?, ?)",
                (track.filename, track.path, track.url, int(track.type), int(track.source)),
            )
            return int(cursor.lastrowid)