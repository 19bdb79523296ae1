import pytest

from mediadeck.screensaver import Screensaver


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


def test_disabled_never_blanks(clock):
    saver = Screensaver(1, clock)
    for now in (5000, 10000, 20000):
        clock.now = now
        saver.loop()
    assert saver.blanked is False


def test_enabled_blanks_after_timeout(clock):
    saver = Screensaver(1, clock)
    saver.enable()
    clock.now = 1000
    saver.loop()
    assert saver.blanked is False
    clock.now = 2001
    saver.loop()
    assert saver.blanked is True


def test_set_timeout_unblanks_and_updates(clock):
    saver = Screensaver(1, clock)
    saver.enable()
    clock.now = 1000
    saver.loop()
    clock.now = 2001
    saver.loop()
    assert saver.blanked is True
    saver.set_timeout(5)
    assert saver.blanked is False
    assert saver.timeout == 5


def test_disable_clears_enabled_flag(clock):
    saver = Screensaver(1, clock)
    saver.enable()
    assert saver.enabled is True
    saver.disable()
    assert saver.enabled is False
    assert saver.blanked is False


def test_not_blanked_before_timeout(clock):
    saver = Screensaver(2, clock)
    saver.enable()
    clock.now = 2000
    saver.loop()
    clock.now = 3000
    saver.loop()
    assert saver.blanked is False