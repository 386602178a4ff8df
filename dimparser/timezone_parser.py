from datetime import timedelta, timezone
from typing import Optional

import regex as re

# Offsets in minutes east of UTC.
TIMEZONE_ABBREVIATIONS = {
    "utc": 0,
    "gmt": 0,
    "z": 0,
    "wet": 0,
    "cet": 60,
    "bst": 60,
    "west": 60,
    "cest": 120,
    "eet": 120,
    "eest": 180,
    "msk": 180,
    "ist": 330,
    "hkt": 480,
    "sgt": 480,
    "awst": 480,
    "jst": 540,
    "kst": 540,
    "acst": 570,
    "acdt": 630,
    "aest": 600,
    "aedt": 660,
    "nzst": 720,
    "nzdt": 780,
    "ast": -240,
    "adt": -180,
    "est": -300,
    "edt": -240,
    "cst": -360,
    "cdt": -300,
    "mst": -420,
    "mdt": -360,
    "pst": -480,
    "pdt": -420,
    "akst": -540,
    "akdt": -480,
    "hst": -600,
}

# Longest first so "cest" is not cut to "cet".
TIMEZONE_PATTERN = "|".join(
    sorted((abbr for abbr in TIMEZONE_ABBREVIATIONS if abbr != "z"), key=len, reverse=True)
)

RE_UTC_OFFSET = re.compile(r"^(?:utc|gmt)?\s*([+-])(\d{1,2})(?::?(\d{2}))?$", re.I)


def offset_minutes(tz_string: str) -> Optional[int]:
    """Minutes east of UTC for an abbreviation ("CET") or offset ("+02:00", "UTC-5")."""
    name = tz_string.strip().lower()
    if name in TIMEZONE_ABBREVIATIONS:
        return TIMEZONE_ABBREVIATIONS[name]

    match = RE_UTC_OFFSET.match(name)
    if not match:
        return None
    sign, hours, minutes = match.groups()
    total = int(hours) * 60 + int(minutes or 0)
    if total > 18 * 60:
        return None
    return -total if sign == "-" else total


def fixed_timezone(tz_string: str) -> Optional[timezone]:
    minutes = offset_minutes(tz_string)
    if minutes is None:
        return None
    return timezone(timedelta(minutes=minutes), tz_string.strip().upper())
