# mediadeck

The core logic of a small networked media player: playlists, settings,
timers, a screensaver and a snake game. It is plain Python and has no
third-party dependencies.

## Modules

- `mediadeck.media`: `MediaData` describes a local file or a remote stream.
  `MediaData.from_path()` builds a loaded local entry from a path, and
  `full_path()` gives the path back, or the URL for a stream. `FileType` and
  `Source` classify entries. `TableData` views a flat sequence of strings as
  rows. Its `get_list(index, count)` returns the first column as text entries.
- `mediadeck.timer`: `Timer` is a non-blocking interval timer driven by a
  millisecond clock you supply. The default clock is `time.monotonic`.
- `mediadeck.screensaver`: `Screensaver` sets its `blanked` flag once
  `timeout` seconds have passed while it is enabled. `loop()` must be called
  regularly. `set_timeout()` restarts the idle period.
- `mediadeck.validation`: `validate_ip`, `validate_ntp_server`,
  `validate_ntp_interval` (1 to 1440 minutes), `parse_time` (`HH:MM:SS`) and
  `parse_date` (`YYYY-MM-DD`, no later than 2038). Invalid input raises
  `ValidationError`, which is a `ValueError`.
- `mediadeck.config`: `Preferences` is a key/value store. It is kept in a JSON
  file when given a path, and only in memory otherwise. `ConfigManager` holds
  the player's settings in it: Wi-Fi, DHCP, IP addresses, NTP, time zone,
  host name, volume, equaliser, screensaver and alarm. `begin()` writes the
  factory defaults on first use. `set_time()` and `set_date()` adjust the
  manager's own clock (`now()`). `set_alarm_time()` schedules the alarm for
  the next occurrence of a time of day. `alarm_due()` reports whether the
  alarm fires now and reschedules it once the time has passed.
- `mediadeck.playlist`: `PlaylistEngine` reads M3U playlists of local tracks
  and HTTP(S) streams, up to 1000 tracks. It moves through them with
  `next()`, `previous()` and `shuffle()`, and edits the file with
  `add_track()` and `remove_track()`. When it is given load, play, stop and
  status callbacks, it drives a transport. Errors raise `PlaylistError`.
  `check_line()` tells whether a line is a playable entry.
- `mediadeck.playlist_db`: `PlaylistStore` keeps playlists as tables in
  `<directory>/.playlists.db`, an SQLite database. It creates playlists,
  imports the stream URLs of an M3U file with `add_playlist()`, and walks
  tracks by row id. Errors raise `PlaylistDBError`. A missing playlist or
  track raises `PlaylistNotFound`.
- `mediadeck.snake`: `SnakeGame` holds the state of a snake game. `turn()`
  refuses to reverse the snake. `step()` advances one tick and returns a
  `Collision`.

## What it does not do

The package has no command-line program and draws no screens. It plays no
audio: the playlist engine only calls the callbacks it is given. It reads no
buttons. The network and NTP settings are validated and stored, but nothing
connects to a network or synchronises the clock. Enabling the alarm makes
`alarm_due()` report it, and nothing more.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

```python
from mediadeck.media import MediaData, FileType

track = MediaData.from_path("/music/album/song.mp3")
assert track.type == FileType.MP3
assert track.full_path() == "/music/album/song.mp3"
```

```python
from mediadeck.timer import Timer

ticks = [100]
timer = Timer(clock=lambda: ticks[0])
assert timer.check(100) is False   # arms the timer
ticks[0] = 250
assert timer.check(100) is True    # more than 100 ms since arming
```

```python
from mediadeck.config import ConfigManager
from mediadeck.validation import ValidationError

config = ConfigManager()
config.begin()
config.set_ip("192.168.1.20")
try:
    config.set_ntp_interval(0)
except ValidationError:
    pass
```