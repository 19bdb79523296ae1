"""Blanks the screen after a period of inactivity."""

from __future__ import annotations

from mediadeck.timer import Clock, Timer

DEFAULT_SCREENSAVER_TIMEOUT = 30


class Screensaver:
    """Tracks idle time and reports when the display should be blanked.

    ``timeout`` is in seconds. :meth:`loop` must be polled regularly.
    """

    def __init__(self, timeout: int = DEFAULT_SCREENSAVER_TIMEOUT, clock: Clock | None = None) -> None:
        self.timeout = timeout
        self.enabled = False
        self.blanked = False
        self._timer = Timer(clock)

    def loop(self) -> None:
        """Blank the screen once the timeout has elapsed while enabled."""
        if self.enabled and self._timer.check(self.timeout * 1000):
            self.blanked = True

    def set_timeout(self, timeout: int) -> None:
        """Change the timeout, restart the idle period and unblank."""
        self.timeout = timeout
        self._timer.reset()
        self.blanked = False

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False
        self.blanked = False