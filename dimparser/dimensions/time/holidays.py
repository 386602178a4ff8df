"""
Named holidays: fixed calendar dates, nth weekdays of a month and feasts
moving with Easter (``dateutil.easter``).
"""

from datetime import date, timedelta
from typing import Optional

from dateutil.easter import easter
from dateutil.relativedelta import relativedelta, MO, TH, SU


def _fixed(month, day):
    def compute(year):
        return date(year, month, day)
    return compute


def _weekday_of_month(month, weekday):
    """``weekday`` is a relativedelta weekday, e.g. ``TH(+4)`` or ``MO(-1)``."""
    def compute(year):
        first = date(year, month, 1)
        if weekday.n is not None and weekday.n < 0:
            return first + relativedelta(day=31, weekday=weekday)
        return first + relativedelta(weekday=weekday)
    return compute


def _from_easter(days):
    def compute(year):
        return easter(year) + timedelta(days=days)
    return compute


def _after_thanksgiving(year):
    return _weekday_of_month(11, TH(+4))(year) + timedelta(days=1)


# (name, pattern, date function). Patterns are matched case-insensitively.
HOLIDAYS = (
    ("new year's eve", r"new\s+year'?s?\s+eve", _fixed(12, 31)),
    ("new year's day", r"new\s+year'?s?(?:\s+day)?", _fixed(1, 1)),
    ("valentine's day", r"valentine'?s?(?:\s+day)?", _fixed(2, 14)),
    ("st patrick's day", r"(?:st\.?|saint)\s+patrick'?s?(?:\s+day)?|st\.?\s+paddy'?s?(?:\s+day)?", _fixed(3, 17)),
    ("april fools' day", r"april\s+fools?'?(?:\s+day)?", _fixed(4, 1)),
    ("earth day", r"earth\s+day", _fixed(4, 22)),
    ("independence day", r"independence\s+day|(?:the\s+)?(?:fourth|4th)\s+of\s+july", _fixed(7, 4)),
    ("halloween", r"hall?owe?en(?:\s+day)?", _fixed(10, 31)),
    ("veterans day", r"veterans?'?\s+day", _fixed(11, 11)),
    ("christmas eve", r"(?:christmas|xmas)\s+eve", _fixed(12, 24)),
    ("christmas", r"(?:christmas|xmas)(?:\s+day)?", _fixed(12, 25)),
    ("boxing day", r"boxing\s+day", _fixed(12, 26)),
    ("martin luther king day", r"(?:mlk|martin\s+luther\s+king,?(?:\s+jr\.?)?)(?:\s+day)?", _weekday_of_month(1, MO(+3))),
    ("presidents' day", r"presidents?'?\s+day|washington'?s\s+birthday", _weekday_of_month(2, MO(+3))),
    ("mother's day", r"mother'?s?'?\s+day", _weekday_of_month(5, SU(+2))),
    ("memorial day", r"memorial\s+day", _weekday_of_month(5, MO(-1))),
    ("father's day", r"father'?s?'?\s+day", _weekday_of_month(6, SU(+3))),
    ("labor day", r"labou?r\s+day", _weekday_of_month(9, MO(+1))),
    ("columbus day", r"columbus\s+day", _weekday_of_month(10, MO(+2))),
    ("thanksgiving", r"thanks?giving(?:\s+day)?", _weekday_of_month(11, TH(+4))),
    ("black friday", r"black\s+friday", _after_thanksgiving),
    ("shrove tuesday", r"shrove\s+tuesday|mardi\s+gras|pancake\s+(?:tuesday|day)", _from_easter(-47)),
    ("ash wednesday", r"ash\s+wednesday", _from_easter(-46)),
    ("palm sunday", r"palm\s+sunday", _from_easter(-7)),
    ("good friday", r"good\s+friday", _from_easter(-2)),
    ("easter sunday", r"easter(?:\s+sunday)?", _from_easter(0)),
    ("easter monday", r"easter\s+monday", _from_easter(1)),
    ("ascension day", r"ascension(?:\s+(?:thurs)?day)?", _from_easter(39)),
    ("pentecost", r"pentecost|whit\s+sunday", _from_easter(49)),
)

_DATES = {name: compute for name, _, compute in HOLIDAYS}


def holiday_date(name: str, year: int) -> Optional[date]:
    """Date of holiday ``name`` in ``year``, or None for an unknown name."""
    compute = _DATES.get(name)
    if compute is None:
        return None
    return compute(year)
