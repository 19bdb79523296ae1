"""Validation of user-entered network, clock and date settings."""

from __future__ import annotations

import datetime

_NTP_DISALLOWED = " ;:/\\,\"''`~!@#$%^&*()-+=[]{}|<>?"
_TIME_DISALLOWED = " ;/\\,\"''`~!@#$%^&*()-+=[]{}|<>?"
_DATE_DISALLOWED = " :;/\\,\"''`~!@#$%^&*()+=[]{}|<>?"

_MAX_YEAR = 2038
_LONG_MONTHS = frozenset({1, 3, 5, 7, 8, 10, 12})
_SHORT_MONTHS = frozenset({4, 6, 9, 11})


class ValidationError(ValueError):
    """Raised when a setting fails validation."""


def _atoi(text: str) -> int:
    """Leading integer of ``text`` in the lenient C style; 0 when there is none."""
    text = text.lstrip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for char in text:
        if not char.isdigit():
            break
        digits += char
    return sign * int(digits) if digits else 0


def _reject_chars(text: str, disallowed: str, what: str) -> None:
    bad = next((char for char in disallowed if char in text), None)
    if bad is not None:
        raise ValidationError(f"{what} contains invalid character {bad!r}")


def validate_ip(ip: str) -> str:
    """Check a dotted-quad IPv4 address whose first octet is not zero."""
    parts = ip.split(".")
    if len(parts) != 4 or not all(part.isdigit() and part.isascii() for part in parts):
        raise ValidationError(f"not an IPv4 address: {ip!r}")
    octets = [int(part) for part in parts]
    if any(octet > 255 for octet in octets):
        raise ValidationError(f"octet out of range in {ip!r}")
    if octets[0] == 0:
        raise ValidationError(f"first octet may not be zero: {ip!r}")
    return ip


def validate_ntp_server(server: str) -> str:
    """Check that ``server`` looks like a host name with at least one dot."""
    if len(server) < 4:
        raise ValidationError("NTP server name is too short")
    _reject_chars(server, _NTP_DISALLOWED, "NTP server name")
    if "." not in server:
        raise ValidationError("NTP server name must contain a dot")
    return server


def validate_ntp_interval(minutes: int) -> int:
    """Check that the NTP sync interval lies between 1 and 1440 minutes."""
    if minutes < 1 or minutes > 1440:
        raise ValidationError("NTP interval must be between 1 and 1440 minutes")
    return minutes


def parse_time(text: str) -> datetime.time:
    """Parse an ``HH:MM:SS`` string."""
    if len(text) != 8:
        raise ValidationError("time must be 8 characters long")
    if ":" not in text:
        raise ValidationError("time must be in HH:MM:SS format")
    hour = _atoi(text[0:2])
    minute = _atoi(text[3:5])
    second = _atoi(text[6:8])
    if hour > 23:
        raise ValidationError("hour out of range")
    if minute > 59:
        raise ValidationError("minute out of range")
    if second > 59:
        raise ValidationError("second out of range")
    _reject_chars(text, _TIME_DISALLOWED, "time")
    return datetime.time(hour, minute, second)


def _is_leap(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def parse_date(text: str) -> datetime.date:
    """Parse a ``YYYY-MM-DD`` string no later than the year 2038."""
    if len(text) != 10:
        raise ValidationError("date must be 10 characters long")
    if text[4] != "-" or text[7] != "-":
        raise ValidationError("date must be in YYYY-MM-DD format")
    year = _atoi(text[0:4])
    month = _atoi(text[5:7])
    day = _atoi(text[8:10])
    if year > _MAX_YEAR:
        raise ValidationError(f"year may not exceed {_MAX_YEAR}")
    if month < 1 or month > 12:
        raise ValidationError("month out of range")
    if month in _LONG_MONTHS:
        last_day = 31
    elif month in _SHORT_MONTHS:
        last_day = 30
    else:
        last_day = 29 if _is_leap(year) else 28
    if day < 1 or day > last_day:
        raise ValidationError("day out of range")
    _reject_chars(text, _DATE_DISALLOWED, "date")
    if year < datetime.MINYEAR:
        raise ValidationError("year out of range")
    return datetime.date(year, month, day)