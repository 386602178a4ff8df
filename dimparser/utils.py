from datetime import datetime, timezone

from dateutil import tz
from tzlocal import get_localzone

from dimparser.timezone_parser import fixed_timezone


def get_timezone_from_tz_string(tz_string):
    """Build a tzinfo from "local", an abbreviation, a UTC offset or an IANA name."""
    if "local" == tz_string.lower():
        return get_localzone()

    fixed = fixed_timezone(tz_string)
    if fixed is not None:
        return fixed

    named = tz.gettz(tz_string)
    if named is None:
        raise ValueError("Unknown timezone: %r" % tz_string)
    return named


def localize_timezone(date_time, tz_string):
    """Attach a zone to a naive wall-clock datetime."""
    if date_time.tzinfo is not None:
        return date_time
    if isinstance(tz_string, str):
        return date_time.replace(tzinfo=get_timezone_from_tz_string(tz_string))
    return date_time.replace(tzinfo=tz_string)


def apply_timezone(date_time, tz_string):
    """Convert an aware datetime to the given zone."""
    if not date_time.tzinfo:
        date_time = date_time.replace(tzinfo=timezone.utc)

    if isinstance(tz_string, str):
        new_tz = get_timezone_from_tz_string(tz_string)
    else:
        new_tz = tz_string
    return date_time.astimezone(new_tz)


def wall_clock(date_time, tzinfo):
    """Naive wall-clock reading of an instant in ``tzinfo``."""
    return apply_timezone(date_time, tzinfo).replace(tzinfo=None)


def to_utc_instant(wall_time: datetime, tzinfo) -> datetime:
    """Pin a naive wall-clock reading in ``tzinfo`` to a UTC instant."""
    return localize_timezone(wall_time, tzinfo).astimezone(timezone.utc)
