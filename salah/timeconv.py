import logging
import math
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

log = logging.getLogger(__name__)


class UnknownTimezone(ValueError):
    pass


class DateOutOfRange(ValueError):
    pass


def get_timezone(tz_name):
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        raise UnknownTimezone(f"Unknown time zone: {tz_name}") from None


def utc_offset_minutes(tz_name, day):
    """Offset of ``tz_name`` from UTC on ``day``, in whole minutes.

    The offset is taken at local noon so that a DST switch in the small
    hours does not decide the offset for the whole day.
    """
    tzinfo = get_timezone(tz_name)
    offset = datetime(day.year, day.month, day.day, 12, 0, 0, tzinfo=tzinfo).utcoffset()
    minutes = int(offset.total_seconds() // 60) if offset else 0
    log.debug("UTC offset for %s on %s: %+d min", tz_name, day, minutes)
    return minutes


def parse_date(text, tz_name):
    """``today`` in the target zone, or a strict ``YYYY-MM-DD`` date."""
    if text.strip().lower() == "today":
        return datetime.now(get_timezone(tz_name)).date()
    try:
        return date.fromisoformat(text.strip())
    except ValueError as exc:
        raise DateOutOfRange(f"Invalid date `{text}` (expected YYYY-MM-DD): {exc}") from None


def next_day(day):
    try:
        return day + timedelta(days=1)
    except OverflowError:
        raise DateOutOfRange(f"No day after {day} can be represented") from None


def localize(utc_hour, day, utc_offset_minutes):
    """Turn a fractional UTC hour on ``day`` into an aware local timestamp.

    Hours below 0 or past 24 move the calendar date back or forward, and the
    result carries the fixed ``utc_offset_minutes`` offset. Seconds are
    rounded to the nearest whole second.
    """
    local_hour = utc_hour + utc_offset_minutes / 60.0
    rollover = math.floor(local_hour / 24.0)
    seconds = round((local_hour - 24.0 * rollover) * 3600)
    tzinfo = timezone(timedelta(minutes=utc_offset_minutes))
    try:
        midnight = datetime(day.year, day.month, day.day, tzinfo=tzinfo) + timedelta(days=rollover)
        return midnight + timedelta(seconds=seconds)
    except OverflowError:
        raise DateOutOfRange(f"Time {utc_hour:.4f}h on {day} falls outside the supported dates") from None
