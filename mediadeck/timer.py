"""Non-blocking millisecond timer driven by a clock callable."""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class Timer:
    """Fires once per interval when polled with :meth:`check`.

    The first call to :meth:`check` arms the timer; a later call returns
    ``True`` once more than ``ms`` milliseconds have passed since arming,
    after which the timer disarms and the cycle starts over.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock if clock is not None else _monotonic_ms
        self._enabled = False
        self._last = 0

    def check(self, ms: int) -> bool:
        """Return ``True`` when the interval of ``ms`` milliseconds has elapsed."""
        now = self._clock()
        if now < ms:
            return False
        if not self._enabled:
            self._last = now
            self._enabled = True
            return False
        if self._last < now - ms:
            self._enabled = False
            return True
        return False

    def reset(self) -> None:
        """Restart the current interval from the present moment."""
        self._last = self._clock()