import datetime

import pytest

from mediadeck.validation import (
    ValidationError,
    parse_date,
    parse_time,
    validate_ip,
    validate_ntp_interval,
    validate_ntp_server,
)


def test_valid_ip_is_returned():
    assert validate_ip("192.168.1.10") == "192.168.1.10"


@pytest.mark.parametrize("ip", ["0.1.2.3", "256.1.1.1", "1.2.3", "a.b.c.d", "1.2.3.4.5", ""])
def test_invalid_ip_raises(ip):
    with pytest.raises(ValidationError):
        validate_ip(ip)


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        validate_ip("1.2.3")


def test_ntp_server_accepted():
    assert validate_ntp_server("pool.ntp.org") == "pool.ntp.org"


@pytest.mark.parametrize("server", ["a.b", "localhost", "time-a.example", "bad server.org", "x:y.org"])
def test_ntp_server_rejected(server):
    with pytest.raises(ValidationError):
        validate_ntp_server(server)


@pytest.mark.parametrize("minutes", [1, 60, 1440])
def test_ntp_interval_in_range(minutes):
    assert validate_ntp_interval(minutes) == minutes


@pytest.mark.parametrize("minutes", [0, 1441])
def test_ntp_interval_out_of_range(minutes):
    with pytest.raises(ValidationError):
        validate_ntp_interval(minutes)


def test_parse_time_round_trip():
    parsed = parse_time("12:34:56")
    assert parsed == datetime.time(12, 34, 56)
    assert parsed.strftime("%H:%M:%S") == "12:34:56"


def test_parse_time_limits():
    assert parse_time("23:59:59") == datetime.time(23, 59, 59)
    assert parse_time("00:00:00") == datetime.time(0, 0, 0)


@pytest.mark.parametrize("text", ["24:00:00", "12:60:00", "12:00:60", "12-34-56", "1:2:3", "12:34 56"])
def test_parse_time_rejects(text):
    with pytest.raises(ValidationError):
        parse_time(text)


def test_parse_date_round_trip():
    parsed = parse_date("2024-02-29")
    assert parsed == datetime.date(2024, 2, 29)
    assert parsed.isoformat() == "2024-02-29"


def test_parse_date_century_leap_year():
    assert parse_date("2000-02-29") == datetime.date(2000, 2, 29)


@pytest.mark.parametrize(
    "text",
    ["2023-02-29", "1900-02-29", "2039-01-01", "2024-13-01", "2024-00-10", "2024-04-31", "2024-01-32", "2024/01/01", "2024-1-1"],
)
def test_parse_date_rejects(text):
    with pytest.raises(ValidationError):
        parse_date(text)