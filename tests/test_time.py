"""
Tests for time expressions.

All expectations are relative to Tuesday 2013-02-12 04:30 UTC with UTC as
the wall-clock zone.
"""

from datetime import date, datetime, timezone

import pytest

import dimparser
from dimparser import Context, Grain, InstantTimePoint, IntervalTime, NaiveTimePoint, SingleTime
from dimparser.dimensions.time.data import (
    Clock,
    DayOfWeek,
    DayOffset,
    Direction,
    Month,
    select,
    following,
    is_valid_date,
)
from dimparser.dimensions.time.holidays import holiday_date

REFERENCE = datetime(2013, 2, 12, 4, 30, tzinfo=timezone.utc)
REF = datetime(2013, 2, 12, 4, 30)


@pytest.fixture
def context():
    return Context(REFERENCE)


def parse_time(text, context, **kwargs):
    return dimparser.parse(text, dims=["time"], context=context, **kwargs)


def single(text, context):
    entity, = parse_time(text, context)
    assert isinstance(entity.value, SingleTime)
    return entity.value


def interval(text, context):
    entity, = parse_time(text, context)
    assert isinstance(entity.value, IntervalTime)
    return entity.value


def naive(*args):
    return datetime(*args)


# =============================================================================
# Occurrence selection
# =============================================================================

class TestSelect:
    """Direct checks of the occurrence walk."""

    def test_upcoming_weekday(self):
        slot = select(DayOfWeek(4), None, REF)
        assert slot.start == datetime(2013, 2, 15)
        assert slot.grain is Grain.DAY

    def test_same_weekday_is_skipped(self):
        assert select(DayOfWeek(1), None, REF).start == datetime(2013, 2, 19)

    def test_past_weekday(self):
        assert select(DayOfWeek(1), Direction.PAST, REF).start == datetime(2013, 2, 5)

    def test_next_weekday_is_in_next_week(self):
        assert select(DayOfWeek(2), Direction.FUTURE, REF).start == datetime(2013, 2, 20)

    def test_far_future_skips_one(self):
        assert select(DayOfWeek(4), Direction.FAR_FUTURE, REF).start == datetime(2013, 2, 22)

    def test_current_month_contains_reference(self):
        assert select(Month(2), None, REF).start == datetime(2013, 2, 1)
        assert select(Month(3), None, REF).start == datetime(2013, 3, 1)

    def test_clock_later_today(self):
        slot = select(Clock(15), None, REF)
        assert slot.start == datetime(2013, 2, 12, 15)
        assert slot.grain is Grain.HOUR

    def test_anchored_form(self):
        slot = select(DayOffset(1), None, REF)
        assert slot.start == datetime(2013, 2, 13)
        assert slot.end == datetime(2013, 2, 14)

    def test_following_occurrences_ascend(self):
        first = select(DayOfWeek(4), None, REF)
        later = [slot.start for slot, _ in zip(following(DayOfWeek(4), first, REF), range(3))]
        assert later == [datetime(2013, 2, 22), datetime(2013, 3, 1), datetime(2013, 3, 8)]


class TestCalendar:

    @pytest.mark.parametrize("year, month, day, expected", [
        (2013, 2, 28, True),
        (2013, 2, 29, False),
        (2012, 2, 29, True),
        (None, 2, 29, True),
        (None, 2, 30, False),
        (2013, 4, 31, False),
        (2013, 13, 1, False),
    ])
    def test_is_valid_date(self, year, month, day, expected):
        assert is_valid_date(year, month, day) is expected

    @pytest.mark.parametrize("name, year, expected", [
        ("thanksgiving", 2013, date(2013, 11, 28)),
        ("memorial day", 2013, date(2013, 5, 27)),
        ("labor day", 2013, date(2013, 9, 2)),
        ("martin luther king day", 2013, date(2013, 1, 21)),
        ("mother's day", 2013, date(2013, 5, 12)),
        ("easter sunday", 2013, date(2013, 3, 31)),
        ("good friday", 2013, date(2013, 3, 29)),
        ("black friday", 2013, date(2013, 11, 29)),
        ("christmas", 2013, date(2013, 12, 25)),
    ])
    def test_holiday_date(self, name, year, expected):
        assert holiday_date(name, year) == expected

    def test_unknown_holiday(self):
        assert holiday_date("festivus", 2013) is None


# =============================================================================
# Deictics and named days
# =============================================================================

class TestRelativeDays:

    def test_tomorrow_at_3pm(self, context):
        value = single("tomorrow at 3pm", context)
        assert value.point == NaiveTimePoint(naive(2013, 2, 13, 15), Grain.HOUR)
        assert value.alternatives == ()

    def test_tomorrow(self, context):
        value = single("tomorrow", context)
        assert value.point == NaiveTimePoint(naive(2013, 2, 13), Grain.DAY)

    def test_yesterday(self, context):
        assert single("yesterday", context).point.value == naive(2013, 2, 11)

    def test_day_after_tomorrow_at_5pm(self, context):
        value = single("day after tomorrow 5pm", context)
        assert value.point == NaiveTimePoint(naive(2013, 2, 14, 17), Grain.HOUR)

    def test_now(self, context):
        value = single("now", context)
        assert value.point.value == naive(2013, 2, 12, 4, 30)
        assert value.point.grain is Grain.SECOND


class TestDaysOfWeek:

    def test_friday_with_alternatives(self, context):
        value = single("Friday", context)
        assert value.point == NaiveTimePoint(naive(2013, 2, 15), Grain.DAY)
        assert [p.value for p in value.alternatives] == [
            naive(2013, 2, 22), naive(2013, 3, 1), naive(2013, 3, 8),
        ]

    def test_alternatives_count_follows_options(self, context):
        entity, = parse_time("Friday", context, options=dimparser.Options(alternatives=1))
        assert len(entity.value.alternatives) == 1

    @pytest.mark.parametrize("text, expected", [
        ("tuesday", naive(2013, 2, 19)),
        ("last tuesday", naive(2013, 2, 5)),
        ("next wednesday", naive(2013, 2, 20)),
        ("friday after next", naive(2013, 2, 22)),
        ("tuesday of this week", naive(2013, 2, 12)),
    ])
    def test_weekday(self, context, text, expected):
        value = single(text, context)
        assert value.point.value == expected
        assert value.point.grain is Grain.DAY


# =============================================================================
# Grains relative to now
# =============================================================================

class TestRelativeGrains:

    @pytest.mark.parametrize("text, expected, grain", [
        ("this week", naive(2013, 2, 11), Grain.WEEK),
        ("next week", naive(2013, 2, 18), Grain.WEEK),
        ("last week", naive(2013, 2, 4), Grain.WEEK),
        ("last month", naive(2013, 1, 1), Grain.MONTH),
        ("this quarter", naive(2013, 1, 1), Grain.QUARTER),
    ])
    def test_grain_offset(self, context, text, expected, grain):
        value = single(text, context)
        assert value.point == NaiveTimePoint(expected, grain)

    @pytest.mark.parametrize("text, expected, grain", [
        ("in 2 days", naive(2013, 2, 14, 4), Grain.HOUR),
        ("3 days ago", naive(2013, 2, 9, 4), Grain.HOUR),
        ("in 3 hours", naive(2013, 2, 12, 7, 30), Grain.MINUTE),
    ])
    def test_duration_from_now(self, context, text, expected, grain):
        value = single(text, context)
        assert value.point == NaiveTimePoint(expected, grain)

    def test_next_n_days(self, context):
        value = interval("next 3 days", context)
        assert value.start.value == naive(2013, 2, 13)
        assert value.end.value == naive(2013, 2, 16)


# =============================================================================
# Calendar dates
# =============================================================================

class TestDates:

    @pytest.mark.parametrize("text, expected, grain", [
        ("march", naive(2013, 3, 1), Grain.MONTH),
        ("february", naive(2013, 2, 1), Grain.MONTH),
        ("March after next", naive(2014, 3, 1), Grain.MONTH),
        ("february 15", naive(2013, 2, 15), Grain.DAY),
        ("October 2014", naive(2014, 10, 1), Grain.MONTH),
        ("2015-03-03", naive(2015, 3, 3), Grain.DAY),
        ("3/3/2015", naive(2015, 3, 3), Grain.DAY),
    ])
    def test_date(self, context, text, expected, grain):
        value = single(text, context)
        assert value.point == NaiveTimePoint(expected, grain)

    def test_numeric_date_is_month_first_in_us(self, context):
        assert single("3/4/2015", context).point.value == naive(2015, 3, 4)

    def test_numeric_date_is_day_first_in_gb(self):
        context = Context(REFERENCE, locale="en_GB")
        entity, = dimparser.parse("3/4/2015", locale="en_GB", dims=["time"], context=context)
        assert entity.value.point.value == naive(2015, 4, 3)

    @pytest.mark.parametrize("text, locale, expected", [
        ("12/25", "en_US", naive(2013, 12, 25)),
        ("1/15", "en_US", naive(2014, 1, 15)),
        ("3/31", "en_US", naive(2013, 3, 31)),
        ("31/12", "en_GB", naive(2013, 12, 31)),
    ])
    def test_numeric_month_day(self, context, text, locale, expected):
        entity, = dimparser.parse(text, locale=locale, dims=["time"], context=context)
        assert entity.body == text
        assert entity.value.point == NaiveTimePoint(expected, Grain.DAY)

    def test_context_locale_overrides_parser_locale(self):
        context = Context(REFERENCE, locale="en_GB")
        entity, = dimparser.parse("3/4/2015", dims=["time"], context=context)
        assert entity.value.point.value == naive(2015, 4, 3)

    def test_impossible_date_is_not_reported(self, context):
        assert parse_time("2013-02-30", context) == []

    @pytest.mark.parametrize("text", ["february 29 2013", "2/29/2013", "2013-02-29"])
    def test_explicit_year_is_not_dropped(self, context, text):
        # "february 29" alone would resolve to 2016
        assert parse_time(text, context) == []

    def test_leap_day_with_leap_year(self, context):
        assert single("february 29 2016", context).point == NaiveTimePoint(
            naive(2016, 2, 29), Grain.DAY
        )

    @pytest.mark.parametrize("text, expected", [
        ("thanksgiving", naive(2013, 11, 28)),
        ("christmas", naive(2013, 12, 25)),
    ])
    def test_holiday(self, context, text, expected):
        assert single(text, context).point.value == expected

    def test_summer(self, context):
        value = interval("summer", context)
        assert value.start.value == naive(2013, 6, 21)
        assert value.end.value == naive(2013, 9, 24)


class TestNthOf:

    @pytest.mark.parametrize("text, expected", [
        ("first tuesday of october", naive(2013, 10, 1)),
        ("last Monday of March", naive(2013, 3, 25)),
        ("third day of october", naive(2013, 10, 3)),
        ("last day of october 2015", naive(2015, 10, 31)),
    ])
    def test_nth_day(self, context, text, expected):
        value = single(text, context)
        assert value.point == NaiveTimePoint(expected, Grain.DAY)

    def test_first_week_of_month(self, context):
        value = single("first week of october 2014", context)
        assert value.point == NaiveTimePoint(naive(2014, 10, 6), Grain.WEEK)


# =============================================================================
# Clock times and parts of the day
# =============================================================================

class TestClock:

    def test_at_3am_is_tomorrow(self, context):
        value = single("at 3am", context)
        assert value.point == NaiveTimePoint(naive(2013, 2, 13, 3), Grain.HOUR)

    def test_hh_mm(self, context):
        value = single("15:30", context)
        assert value.point == NaiveTimePoint(naive(2013, 2, 12, 15, 30), Grain.MINUTE)

    def test_half_past(self, context):
        value = single("half past 3pm", context)
        assert value.point == NaiveTimePoint(naive(2013, 2, 12, 15, 30), Grain.MINUTE)

    def test_bare_hour_is_latent(self, context):
        assert parse_time("3", context) == []
        entity, = parse_time("3", context, options=dimparser.Options(with_latent=True))
        assert entity.latent is True


class TestPartOfDay:

    def test_this_morning(self, context):
        value = interval("this morning", context)
        assert value.start.value == naive(2013, 2, 12, 0)
        assert value.end.value == naive(2013, 2, 12, 12)
        assert value.grain is Grain.HOUR

    def test_tonight(self, context):
        value = interval("tonight", context)
        assert value.start.value == naive(2013, 2, 12, 18)
        assert value.end.value == naive(2013, 2, 13, 0)

    def test_last_night(self, context):
        value = interval("last night", context)
        assert value.start.value == naive(2013, 2, 11, 18)
        assert value.end.value == naive(2013, 2, 12, 0)

    def test_this_weekend(self, context):
        value = interval("this weekend", context)
        assert value.start.value == naive(2013, 2, 15, 18)
        assert value.end.value == naive(2013, 2, 18, 0)


# =============================================================================
# Intervals
# =============================================================================

class TestIntervals:

    @pytest.mark.parametrize("text", ["from 3pm to 5pm", "3-5pm"])
    def test_clock_interval(self, context, text):
        value = interval(text, context)
        assert value.start == NaiveTimePoint(naive(2013, 2, 12, 15), Grain.HOUR)
        assert value.end == NaiveTimePoint(naive(2013, 2, 12, 18), Grain.HOUR)

    def test_before_is_open_at_the_start(self, context):
        value = interval("before 3pm", context)
        assert value.start is None
        assert value.end.value == naive(2013, 2, 12, 15)

    def test_after_is_open_at_the_end(self, context):
        value = interval("after 3pm", context)
        assert value.start.value == naive(2013, 2, 12, 15)
        assert value.end is None


# =============================================================================
# Timezones
# =============================================================================

class TestTimezones:

    def test_explicit_zone_gives_an_instant(self, context):
        value = single("3pm CET", context)
        assert value.point == InstantTimePoint(
            datetime(2013, 2, 12, 14, tzinfo=timezone.utc), Grain.HOUR
        )

    @pytest.mark.parametrize("text, expected", [
        ("3pm GMT+2", datetime(2013, 2, 12, 13, tzinfo=timezone.utc)),
        ("3pm UTC-5", datetime(2013, 2, 12, 20, tzinfo=timezone.utc)),
        ("3pm +02:00", datetime(2013, 2, 12, 13, tzinfo=timezone.utc)),
        ("3pm (PST)", datetime(2013, 2, 12, 23, tzinfo=timezone.utc)),
    ])
    def test_utc_offsets(self, context, text, expected):
        entity, = parse_time(text, context)
        assert entity.body == text
        assert entity.value.point == InstantTimePoint(expected, Grain.HOUR)

    def test_context_zone_keeps_wall_clock(self):
        context = Context(REFERENCE, timezone="America/New_York")
        value = single("tomorrow", context)
        # 04:30 UTC is still the 11th in New York
        assert value.point == NaiveTimePoint(naive(2013, 2, 12), Grain.DAY)

    def test_serialised_value(self, context):
        entity, = parse_time("tomorrow at 3pm", context)
        assert entity.to_dict() == {
            "body": "tomorrow at 3pm",
            "start": 0,
            "end": 15,
            "dim": "time",
            "latent": False,
            "value": {
                "type": "value",
                "value": "2013-02-13T15:00:00",
                "grain": "hour",
                "values": [],
            },
        }
