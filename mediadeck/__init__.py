"""Playlists, settings, timers, a screensaver and a snake game for a small media player."""

__version__ = "0.1.0"