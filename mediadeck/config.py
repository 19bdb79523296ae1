"""Persistent system configuration: network, clock, audio, alarm and screensaver."""

from __future__ import annotations

import datetime
import json
from pathlib import Path
from typing import Any, Callable

from mediadeck.media import FileType, MediaData, Source
from mediadeck.screensaver import Screensaver
from mediadeck.validation import (
    parse_date,
    parse_time,
    validate_ip,
    validate_ntp_interval,
    validate_ntp_server,
)

DateTimeClock = Callable[[], datetime.datetime]

_DEFAULTS: dict[str, Any] = {
    "initialized": False,
    "wifi_enabled": False,
    "ssid": "",
    "password": "",
    "dhcp": True,
    "ip": "",
    "netmask": "",
    "gateway": "",
    "dns": "",
    "ntp_server": "pool.ntp.org",
    "ntp_interval": 60,
    "timezone": "UTC0",
    "hostname": "mediaplayer",
    "alarm_enabled": False,
    "alarm_hour": 0,
    "alarm_minute": 0,
    "alarm_second": 0,
    "alarm_day": 0,
    "alarm_month": 0,
    "alarm_year": 0,
    "alarm_media_f": "",
    "alarm_media_p": "",
    "alarm_media_u": "",
    "alarm_media_t": int(FileType.UNKNOWN),
    "alarm_media_s": int(Source.NO_SOURCE_LOADED),
    "volume": 50,
    "system_volume": 50,
    "eq_bass": 50,
    "eq_mid": 50,
    "eq_treble": 50,
    "zipcode": 0,
    "scrnsvr_enabled": False,
    "scrnsvr_timeout": 30,
}


class Preferences:
    """A small key/value store, kept in a JSON file or only in memory."""

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._data: dict[str, Any] = {}
        if self._path is not None and self._path.exists():
            with self._path.open(encoding="utf-8") as handle:
                self._data = json.load(handle)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def put(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._save()

    def clear(self) -> None:
        self._data.clear()
        self._save()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def _save(self) -> None:
        if self._path is None:
            return
        tmp = self._path.with_name(self._path.name + ".tmp")
        with tmp.open("w", encoding="utf-8") as handle:
            json.dump(self._data, handle, indent=2, sort_keys=True)
        tmp.replace(self._path)


class _Setting:
    """A configuration value read from and written to the preferences."""

    def __init__(self, key: str, writable: bool = True) -> None:
        self.key = key
        self.writable = writable

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: "ConfigManager | None", objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return obj._prefs.get(self.key, _DEFAULTS[self.key])

    def __set__(self, obj: "ConfigManager", value: Any) -> None:
        if not self.writable:
            raise AttributeError(f"{self.name} is read-only")
        obj._prefs.put(self.key, value)


class ConfigManager:
    """System settings backed by :class:`Preferences`.

    The wall clock is taken from ``clock``; :meth:`set_time` and
    :meth:`set_date` shift the manager's notion of the current time.
    """

    wifi_enabled = _Setting("wifi_enabled", writable=False)
    ssid = _Setting("ssid")
    password = _Setting("password")
    dhcp = _Setting("dhcp")
    ip = _Setting("ip", writable=False)
    netmask = _Setting("netmask", writable=False)
    gateway = _Setting("gateway", writable=False)
    dns = _Setting("dns", writable=False)
    ntp_server = _Setting("ntp_server", writable=False)
    ntp_interval = _Setting("ntp_interval", writable=False)
    timezone = _Setting("timezone")
    hostname = _Setting("hostname")
    volume = _Setting("volume")
    system_volume = _Setting("system_volume")
    bass = _Setting("eq_bass")
    mid = _Setting("eq_mid")
    treble = _Setting("eq_treble")
    alarm_enabled = _Setting("alarm_enabled", writable=False)

    def __init__(self, preferences: Preferences | None = None, clock: DateTimeClock | None = None) -> None:
        self._prefs = preferences if preferences is not None else Preferences()
        self._clock: DateTimeClock = clock if clock is not None else datetime.datetime.now
        self._offset = datetime.timedelta()
        self.screensaver = Screensaver()

    def begin(self) -> None:
        """Write factory defaults on first use and apply the stored settings."""
        if not self._prefs.get("initialized", False):
            for key, value in _DEFAULTS.items():
                self._prefs.put(key, value)
            self._prefs.put("initialized", True)
        self.screensaver.set_timeout(self.screensaver_timeout)
        if self.screensaver_enabled:
            self.screensaver.enable()
        else:
            self.screensaver.disable()
        if self.wifi_enabled:
            self.enable_wifi()

    # Network

    def enable_wifi(self) -> bool:
        """Turn Wi-Fi on; refused while no SSID is configured."""
        if not self.ssid:
            return False
        self._prefs.put("wifi_enabled", True)
        return True

    def disable_wifi(self) -> None:
        self._prefs.put("wifi_enabled", False)

    def set_ip(self, ip: str) -> None:
        self._prefs.put("ip", validate_ip(ip))

    def set_netmask(self, netmask: str) -> None:
        self._prefs.put("netmask", validate_ip(netmask))

    def set_gateway(self, gateway: str) -> None:
        self._prefs.put("gateway", validate_ip(gateway))

    def set_dns(self, dns: str) -> None:
        self._prefs.put("dns", validate_ip(dns))

    def set_ntp_server(self, server: str) -> None:
        self._prefs.put("ntp_server", validate_ntp_server(server))

    def set_ntp_interval(self, minutes: int) -> None:
        self._prefs.put("ntp_interval", validate_ntp_interval(minutes))

    # Clock

    def now(self) -> datetime.datetime:
        """The current local date and time, including any manual adjustment."""
        return self._clock() + self._offset

    def current_datetime(self, fmt: str) -> str:
        """The current date and time formatted with ``strftime``."""
        return self.now().strftime(fmt)

    def set_time(self, text: str) -> None:
        """Set the time of day from an ``HH:MM:SS`` string, keeping the date."""
        parsed = parse_time(text)
        current = self.now()
        target = current.replace(hour=parsed.hour, minute=parsed.minute, second=parsed.second)
        self._offset += target - current

    def set_date(self, text: str) -> None:
        """Set the date from a ``YYYY-MM-DD`` string, keeping the time of day."""
        parsed = parse_date(text)
        current = self.now()
        target = current.replace(year=parsed.year, month=parsed.month, day=parsed.day)
        self._offset += target - current

    # Screensaver

    @property
    def screensaver_enabled(self) -> bool:
        return self._prefs.get("scrnsvr_enabled", _DEFAULTS["scrnsvr_enabled"])

    @screensaver_enabled.setter
    def screensaver_enabled(self, enabled: bool) -> None:
        self._prefs.put("scrnsvr_enabled", bool(enabled))
        if enabled:
            self.screensaver.enable()
        else:
            self.screensaver.disable()

    @property
    def screensaver_timeout(self) -> int:
        return self._prefs.get("scrnsvr_timeout", _DEFAULTS["scrnsvr_timeout"])

    @screensaver_timeout.setter
    def screensaver_timeout(self, seconds: int) -> None:
        self._prefs.put("scrnsvr_timeout", seconds)
        self.screensaver.set_timeout(seconds)

    # Alarm

    def enable_alarm(self) -> None:
        self._prefs.put("alarm_enabled", True)

    def disable_alarm(self) -> None:
        self._prefs.put("alarm_enabled", False)

    @property
    def alarm_time(self) -> datetime.datetime | None:
        """When the alarm next fires, or ``None`` if it was never set."""
        year = self._prefs.get("alarm_year", 0)
        if not year:
            return None
        return datetime.datetime(
            year,
            self._prefs.get("alarm_month"),
            self._prefs.get("alarm_day"),
            self._prefs.get("alarm_hour"),
            self._prefs.get("alarm_minute"),
            self._prefs.get("alarm_second"),
        )

    def _store_alarm(self, when: datetime.datetime) -> None:
        self._prefs.put("alarm_hour", when.hour)
        self._prefs.put("alarm_minute", when.minute)
        self._prefs.put("alarm_second", when.second)
        self._prefs.put("alarm_day", when.day)
        self._prefs.put("alarm_month", when.month)
        self._prefs.put("alarm_year", when.year)

    @staticmethod
    def _next_occurrence(time_of_day: datetime.time, now: datetime.datetime) -> datetime.datetime:
        candidate = datetime.datetime.combine(now.date(), time_of_day)
        if candidate <= now:
            candidate += datetime.timedelta(days=1)
        return candidate

    def set_alarm_time(self, text: str) -> datetime.datetime:
        """Schedule the alarm for the next occurrence of ``HH:MM:SS``."""
        parsed = parse_time(text)
        now = self.now().replace(microsecond=0)
        when = self._next_occurrence(parsed, now)
        self._store_alarm(when)
        return when

    def alarm_time_string(self) -> str:
        when = self.alarm_time
        if when is None:
            return "00:00:00"
        return f"{when.hour:02d}:{when.minute:02d}:{when.second:02d}"

    @property
    def alarm_media(self) -> MediaData:
        source = self._prefs.get("alarm_media_s", _DEFAULTS["alarm_media_s"])
        return MediaData(
            filename=self._prefs.get("alarm_media_f", ""),
            path=self._prefs.get("alarm_media_p", ""),
            url=self._prefs.get("alarm_media_u", ""),
            type=self._prefs.get("alarm_media_t", _DEFAULTS["alarm_media_t"]),
            source=source,
            loaded=source != Source.NO_SOURCE_LOADED,
        )

    def save_alarm_media(self, media: MediaData) -> None:
        self._prefs.put("alarm_media_f", media.filename)
        self._prefs.put("alarm_media_p", media.path)
        self._prefs.put("alarm_media_u", media.url)
        self._prefs.put("alarm_media_t", int(media.type))
        self._prefs.put("alarm_media_s", int(media.source))

    def alarm_due(self) -> bool:
        """Report whether the alarm fires now, rescheduling it once it has passed."""
        when = self.alarm_time
        if not self.alarm_enabled or when is None:
            return False
        now = self.now().replace(microsecond=0)
        due = (now.hour, now.minute, now.second, now.day) == (
            when.hour,
            when.minute,
            when.second,
            when.day,
        )
        if when <= now:
            self._store_alarm(self._next_occurrence(when.time(), now))
        return due

    def reset_preferences(self) -> None:
        """Restore factory defaults."""
        self._prefs.clear()
        self._offset = datetime.timedelta()
        self.begin()