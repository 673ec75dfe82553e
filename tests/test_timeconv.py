from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from salah.timeconv import (
    DateOutOfRange,
    UnknownTimezone,
    localize,
    next_day,
    parse_date,
    utc_offset_minutes,
)

DAY = date(2024, 2, 11)


def test_localize_applies_offset():
    dt = localize(17.5, DAY, -300)
    assert dt == datetime(2024, 2, 11, 12, 30, tzinfo=timezone(timedelta(hours=-5)))
    assert dt.utcoffset() == timedelta(minutes=-300)


def test_localize_rolls_forward_past_24h():
    assert localize(25.0, DAY, 0) == datetime(2024, 2, 12, 1, 0, tzinfo=timezone.utc)


def test_localize_rolls_back_before_0h():
    assert localize(-1.0, DAY, 0) == datetime(2024, 2, 10, 23, 0, tzinfo=timezone.utc)
    assert localize(3.0, DAY, -300) == datetime(2024, 2, 10, 22, 0, tzinfo=timezone(timedelta(hours=-5)))


def test_localize_rounds_to_seconds():
    dt = localize(6.0 + 59.6 / 3600, DAY, 0)
    assert (dt.hour, dt.minute, dt.second, dt.microsecond) == (6, 1, 0, 0)


def test_localize_outside_supported_dates():
    with pytest.raises(DateOutOfRange):
        localize(30.0, date.max, 0)


def test_utc_offset_minutes_follows_dst():
    assert utc_offset_minutes("America/Toronto", DAY) == -300
    assert utc_offset_minutes("America/Toronto", date(2024, 7, 1)) == -240
    assert utc_offset_minutes("Asia/Kolkata", DAY) == 330
    assert utc_offset_minutes("UTC", DAY) == 0


def test_utc_offset_on_dst_switch_day():
    # 2024-03-10 clocks spring forward at 02:00 local; the day counts as EDT
    assert utc_offset_minutes("America/Toronto", date(2024, 3, 10)) == -240


def test_unknown_timezone():
    with pytest.raises(UnknownTimezone):
        utc_offset_minutes("Mars/Olympus_Mons", DAY)


def test_parse_date():
    assert parse_date("2024-02-11", "UTC") == DAY
    assert parse_date(" 2024-02-11 ", "UTC") == DAY


def test_parse_today_uses_target_zone():
    before = datetime.now(ZoneInfo("Pacific/Kiritimati")).date()
    today = parse_date("Today", "Pacific/Kiritimati")
    after = datetime.now(ZoneInfo("Pacific/Kiritimati")).date()
    assert today in (before, after)


@pytest.mark.parametrize("text", ["2024-13-01", "2024-02-30", "yesterday", ""])
def test_parse_bad_date(text):
    with pytest.raises(DateOutOfRange):
        parse_date(text, "UTC")


def test_next_day():
    assert next_day(date(2024, 2, 28)) == date(2024, 2, 29)
    assert next_day(date(2023, 12, 31)) == date(2024, 1, 1)
    with pytest.raises(DateOutOfRange):
        next_day(date.max)
