"""
English time rules.

Rules only build ``TimeData`` payloads; nothing here looks at the reference
time. Bare hours ("at 3" without am/pm), years and parts of the day are
latent until a neighbouring word pins them down.
"""

from ..numeral import is_natural, number_between
from ..ordinal import is_ordinal, ordinal_between
from ...pattern import dim, group, predicate, regex, rule
from ...timezone_parser import TIMEZONE_PATTERN
from ...types import DimensionKind
from .data import (
    Clock,
    Date,
    DayOffset,
    DayOfMonth,
    DayOfWeek,
    DayOfWeekOf,
    DayPart,
    Direction,
    DurationShift,
    GrainOf,
    GrainOffset,
    GrainRange,
    Holiday,
    Intersect,
    Interval,
    Month,
    MonthDay,
    Now,
    OpenInterval,
    PartOfDay,
    Position,
    Quarter,
    RelativeGrain,
    Season,
    SeasonName,
    TimeData,
    Weekend,
    Year,
    is_valid_date,
)
from .holidays import HOLIDAYS

TIME = DimensionKind.TIME

DAYS_OF_WEEK = (
    r"mondays?|mon\.?",
    r"tuesdays?|tues?\.?",
    r"wed(?:nes)?days?|wed\.?",
    r"thursdays?|thu(?:rs?)?\.?",
    r"fridays?|fri\.?",
    r"saturdays?|sat\.?",
    r"sundays?|sun\.?",
)

MONTHS = (
    r"january|jan\.?",
    r"february|feb\.?",
    r"march|mar\.?",
    r"april|apr\.?",
    r"may",
    r"june|jun\.?",
    r"july|jul\.?",
    r"august|aug\.?",
    r"september|sept?\.?",
    r"october|oct\.?",
    r"november|nov\.?",
    r"december|dec\.?",
)

DAY_PARTS = (
    (DayPart.MORNING, r"mornings?"),
    (DayPart.AFTERNOON, r"after\s?noons?"),
    (DayPart.EVENING, r"evenings?"),
    (DayPart.NIGHT, r"nights?"),
    (DayPart.LUNCH, r"lunch(?:\s?time)?"),
)

SEASONS = (
    (SeasonName.SPRING, r"spring(?:time)?"),
    (SeasonName.SUMMER, r"summer(?:time)?"),
    (SeasonName.FALL, r"fall|autumn"),
    (SeasonName.WINTER, r"winter(?:time)?"),
)

POSITIONS = {
    "early": Position.EARLY,
    "beginning": Position.EARLY,
    "start": Position.EARLY,
    "mid": Position.MID,
    "middle": Position.MID,
    "late": Position.LATE,
    "end": Position.LATE,
}

# Offsets first: "GMT+2" must not stop at "GMT".
RE_TIMEZONE = r"((?:utc|gmt)\s*[+-]\d{1,2}(?::?\d{2})?|[+-]\d{2}:?\d{2}|%s)" % TIMEZONE_PATTERN
RE_INTERVAL_SEPARATOR = r"-|–|to|till|til|until|through|thru"
RE_NEXT = r"next|coming|upcoming|following"
RE_LAST = r"last|past|previous"


# =============================================================================
# Predicates
# =============================================================================

def is_time(data) -> bool:
    return isinstance(data, TimeData)


def is_combinable(data) -> bool:
    """A time that may still be intersected, bounded or modified."""
    return is_time(data) and not data.latent and data.open_interval is None


def _is_plain(data) -> bool:
    return is_time(data) and data.is_plain


def _is_repeating(data) -> bool:
    if not _is_plain(data) or data.form.anchored:
        return False
    return not data.latent or isinstance(data.form, PartOfDay)


def _is_clock(data) -> bool:
    return _is_plain(data) and isinstance(data.form, Clock)


def _is_hour(data) -> bool:
    return _is_clock(data) and data.form.minute is None


def _is_ambiguous_clock(data) -> bool:
    return _is_clock(data) and data.form.ambiguous


def _is_day_of_week(data) -> bool:
    return _is_plain(data) and isinstance(data.form, DayOfWeek)


def _is_month(data) -> bool:
    return _is_plain(data) and isinstance(data.form, Month)


def _is_month_day(data) -> bool:
    return _is_plain(data) and isinstance(data.form, MonthDay)


def _is_part_of_day(data) -> bool:
    return _is_plain(data) and isinstance(data.form, PartOfDay)


def _is_year(data) -> bool:
    return _is_plain(data) and isinstance(data.form, Year)


def _is_quarter(data) -> bool:
    return _is_plain(data) and isinstance(data.form, Quarter)


def _is_zone_target(data) -> bool:
    return is_combinable(data) and data.timezone is None


def _is_position_target(data) -> bool:
    return is_time(data) and data.open_interval is None and data.early_late is None


_is_day_integer = number_between(1, 31)
_is_year_number = number_between(1000, 2100)


def _is_day_number(data) -> bool:
    return _is_day_integer(data) or ordinal_between(1, 31)(data)


# =============================================================================
# Productions
# =============================================================================

def _constant(form, latent=False):
    def produce(tokens):
        return TimeData(form=form, latent=latent)
    return produce


def _full_year(text: str) -> int:
    year = int(text)
    if len(text) == 2:
        return year + (2000 if year < 50 else 1900)
    return year


def _date_or_none(year, month, day):
    """
    A date with an explicit year. "February 29 2013" is still built so it can
    hide the "February 29" it contains; it has no occurrence when resolved.
    """
    if not is_valid_date(None, month, day):
        return None
    return TimeData(form=Date(year, month, day))


def _month_day_or_none(month, day):
    if not is_valid_date(None, month, day):
        return None
    return TimeData(form=MonthDay(month, day))


def _shared_timezone(first, second):
    """Explicit zone of either side; False when both carry different ones."""
    if first.timezone and second.timezone and first.timezone != second.timezone:
        return False
    return first.timezone or second.timezone


def _intersect(first: TimeData, second: TimeData):
    if type(first.form) is type(second.form) and not isinstance(first.form, Intersect):
        return None
    timezone = _shared_timezone(first, second)
    if timezone is False:
        return None
    return TimeData(
        form=Intersect(first.effective_form, second.effective_form),
        latent=first.latent and second.latent,
        timezone=timezone,
    )


def _interval(start: TimeData, end: TimeData):
    if start.open_interval is not None or end.open_interval is not None:
        return None
    timezone = _shared_timezone(start, end)
    if timezone is False:
        return None
    return TimeData(form=Interval(start.effective_form, end.effective_form), timezone=timezone)


def _produce_not_latent(tokens):
    for token in tokens:
        if is_time(token.data):
            return token.data.evolve(latent=False)
    return None


def _produce_latent_hour(tokens):
    hour = int(tokens[0].data.value)
    return TimeData(form=Clock(hour, ambiguous=0 < hour <= 12), latent=True)


def _clock_from_match(match_token, with_seconds):
    hour_text = group(match_token, 1)
    hour = int(hour_text)
    minute = int(group(match_token, 2))
    second = int(group(match_token, 3)) if with_seconds else None
    ambiguous = 0 < hour <= 12 and not hour_text.startswith("0")
    return TimeData(form=Clock(hour, minute, second, ambiguous=ambiguous))


def _produce_hh_mm(tokens):
    return _clock_from_match(tokens[0], with_seconds=False)


def _produce_hh_mm_ss(tokens):
    return _clock_from_match(tokens[0], with_seconds=True)


def _produce_am_pm(tokens):
    clock = tokens[0].data.form
    afternoon = group(tokens[1]).lower() == "p"
    hour = clock.hour % 12 + (12 if afternoon else 0)
    return TimeData(form=Clock(hour, clock.minute, clock.second))


def _move_clock(clock: Clock, minutes: int) -> Clock:
    total = (clock.hour * 60 + (clock.minute or 0) + minutes) % (24 * 60)
    hour, minute = divmod(total, 60)
    return Clock(hour, minute, ambiguous=clock.ambiguous)


def _minutes_producer(minutes):
    def produce(tokens):
        return TimeData(form=_move_clock(tokens[-1].data.form, minutes))
    return produce


def _produce_minutes_past(tokens):
    return TimeData(form=_move_clock(tokens[2].data.form, int(tokens[0].data.value)))


def _produce_minutes_to(tokens):
    return TimeData(form=_move_clock(tokens[2].data.form, -int(tokens[0].data.value)))


def _produce_day_of_month(latent):
    def produce(tokens):
        return TimeData(form=DayOfMonth(tokens[-1].data.value), latent=latent)
    return produce


def _produce_month_day(tokens):
    month = tokens[0].data.form.month
    return _month_day_or_none(month, int(tokens[-1].data.value))


def _produce_day_month(tokens):
    day = next(t.data for t in tokens if _is_day_number(t.data))
    return _month_day_or_none(tokens[-1].data.form.month, int(day.value))


def _produce_day_of_week_day(tokens):
    return TimeData(form=Intersect(tokens[0].data.form, DayOfMonth(tokens[-1].data.value)))


def _produce_month_day_year(tokens):
    month_day = tokens[0].data.form
    return _date_or_none(int(tokens[-1].data.value), month_day.month, month_day.day)


def _produce_month_year(tokens):
    year = int(tokens[-1].data.value)
    return TimeData(form=Intersect(Year(year), tokens[0].data.form))


def _numeric_date_producer(day_first):
    def produce(tokens):
        first, second = int(group(tokens[0], 1)), int(group(tokens[0], 2))
        month, day = (second, first) if day_first else (first, second)
        return _date_or_none(_full_year(group(tokens[0], 3)), month, day)
    return produce


def _numeric_month_day_producer(day_first):
    def produce(tokens):
        first, second = int(group(tokens[0], 1)), int(group(tokens[0], 2))
        month, day = (second, first) if day_first else (first, second)
        return _month_day_or_none(month, day)
    return produce


def _produce_iso_date(tokens):
    year, month, day = (int(group(tokens[0], i)) for i in (1, 2, 3))
    return _date_or_none(year, month, day)


def _produce_year(tokens):
    return TimeData(form=Year(int(tokens[0].data.value)), latent=True)


def _produce_ordinal_quarter(tokens):
    return TimeData(form=Quarter(tokens[0].data.value))


def _produce_q_quarter(tokens):
    return TimeData(form=Quarter(int(group(tokens[0]))))


def _produce_quarter_year(tokens):
    year = int(tokens[-1].data.value)
    return TimeData(form=Intersect(Year(year), tokens[0].data.form))


def _produce_year_quarter(tokens):
    year = _full_year(group(tokens[0], 1))
    return TimeData(form=Intersect(Year(year), Quarter(int(group(tokens[0], 2)))))


def _grain_offset_producer(offset):
    def produce(tokens):
        return TimeData(form=GrainOffset(tokens[-1].data.grain, offset))
    return produce


def _produce_grain_range(tokens):
    past = group(tokens[0], 2) is not None
    amount = int(tokens[1].data.value)
    return TimeData(form=GrainRange(amount, tokens[2].data.grain, past=past))


def _relative_producer(sign):
    def produce(tokens):
        duration = next(t.data for t in tokens if t.dim is DimensionKind.DURATION)
        return TimeData(form=RelativeGrain(sign * duration.value, duration.grain))
    return produce


def _produce_within(tokens):
    duration = tokens[1].data
    end = RelativeGrain(duration.value, duration.grain)
    return TimeData(form=Interval(Now(), end, closed=False))


def _produce_duration_shift(tokens):
    duration, base = tokens[0].data, tokens[2].data
    sign = -1 if group(tokens[1], 2) is not None else 1
    return TimeData(
        form=DurationShift(sign * duration.value, duration.grain, base.effective_form),
        timezone=base.timezone,
    )


def _direction_producer(direction):
    def produce(tokens):
        data = next(t.data for t in tokens if is_time(t.data))
        return data.evolve(direction=direction, latent=False)
    return produce


def _produce_this(tokens):
    data = tokens[1].data
    if isinstance(data.form, PartOfDay):
        return TimeData(form=Intersect(DayOffset(0), data.form))
    return data.evolve(latent=False)


def _nth_day_of_week_producer(last):
    def produce(tokens):
        n = -1 if last else tokens[0].data.value
        day, base = tokens[1].data.form.day, tokens[3].data
        return TimeData(form=DayOfWeekOf(day, n, base.effective_form), timezone=base.timezone)
    return produce


def _produce_nth_last_day_of_week(tokens):
    n, day, base = tokens[0].data.value, tokens[2].data.form.day, tokens[4].data
    return TimeData(form=DayOfWeekOf(day, -n, base.effective_form), timezone=base.timezone)


def _nth_grain_producer(last):
    def produce(tokens):
        n = -1 if last else tokens[0].data.value
        unit, base = tokens[1].data.grain, tokens[3].data
        return TimeData(form=GrainOf(unit, n, base.effective_form), timezone=base.timezone)
    return produce


def _produce_nth_last_grain(tokens):
    n, unit, base = tokens[0].data.value, tokens[2].data.grain, tokens[4].data
    return TimeData(form=GrainOf(unit, -n, base.effective_form), timezone=base.timezone)


def _produce_intersect(tokens):
    return _intersect(tokens[0].data, tokens[-1].data)


def _produce_part_of_day_intersect(tokens):
    first, second = tokens[0].data, tokens[-1].data
    return TimeData(form=Intersect(first.effective_form, second.form), latent=first.latent,
                    timezone=first.timezone)


def _produce_interval(tokens):
    times = [t.data for t in tokens if is_time(t.data)]
    return _interval(times[0], times[1])


def _produce_clock_interval(tokens):
    times = [t.data for t in tokens if is_time(t.data)]
    start, end = times[0].form, times[1].form
    if start.ambiguous and not end.ambiguous:
        hour = start.hour % 12
        if end.hour >= 12 and hour + 12 <= end.hour:
            hour += 12
        start = Clock(hour, start.minute, start.second)
    return TimeData(form=Interval(start, end), timezone=times[1].timezone)


def _produce_day_range(tokens):
    numbers = [t.data for t in tokens if _is_day_number(t.data)]
    month = next(t.data.form.month for t in tokens if _is_month(t.data))
    first, last = (int(n.value) for n in numbers)
    if first >= last or not is_valid_date(None, month, last):
        return None
    return TimeData(form=Interval(MonthDay(month, first), MonthDay(month, last)))


def _open_interval_producer(bound):
    def produce(tokens):
        data = next(t.data for t in tokens if is_time(t.data))
        return data.evolve(open_interval=bound, latent=False)
    return produce


def _produce_position(tokens):
    position = POSITIONS[group(tokens[0]).lower()]
    return tokens[1].data.evolve(early_late=position, latent=False)


def _produce_timezone(tokens):
    zone = "".join(group(tokens[1]).split())
    return tokens[0].data.evolve(timezone=zone)


# =============================================================================
# Rule table
# =============================================================================

def rules(locale=None):
    day_first = bool(locale is not None and locale.day_first)
    time = predicate(is_combinable, TIME, name="time")
    rules = []

    # Deictics
    rules.append(rule(
        "now",
        regex(r"(?:just|right)\s+now|now|immediately|at\s+the\s+moment|atm"),
        production=_constant(Now()),
    ))
    rules.append(rule("today", regex(r"todays?|(?:at\s+)?this\s+time"), production=_constant(DayOffset(0))))
    rules.append(rule("tomorrow", regex(r"tmrw?|tomm?or?rows?"), production=_constant(DayOffset(1))))
    rules.append(rule("yesterday", regex(r"yesterdays?"), production=_constant(DayOffset(-1))))
    rules.append(rule(
        "the day after tomorrow",
        regex(r"(?:the\s+)?day\s+after\s+tomorrow"),
        production=_constant(DayOffset(2)),
    ))
    rules.append(rule(
        "the day before yesterday",
        regex(r"(?:the\s+)?day\s+before\s+yesterday"),
        production=_constant(DayOffset(-2)),
    ))

    # Named calendar fields
    for day, pattern in enumerate(DAYS_OF_WEEK):
        rules.append(rule("day of week %d" % day, regex(pattern), production=_constant(DayOfWeek(day))))
    for month, pattern in enumerate(MONTHS, start=1):
        rules.append(rule("month %d" % month, regex(pattern), production=_constant(Month(month))))
    for part, pattern in DAY_PARTS:
        rules.append(rule(
            "part of day %s" % part.value, regex(pattern),
            production=_constant(PartOfDay(part), latent=True),
        ))
    rules.append(rule(
        "week-end",
        regex(r"(?:the\s+)?week[\s-]?ends?|wkend"),
        production=_constant(Weekend()),
    ))
    for season, pattern in SEASONS:
        rules.append(rule("season %s" % season.value, regex(pattern), production=_constant(Season(season))))
    for name, pattern, _ in HOLIDAYS:
        rules.append(rule("holiday %s" % name, regex(pattern), production=_constant(Holiday(name))))

    # Time of day
    rules.append(rule(
        "time-of-day (latent)",
        predicate(number_between(0, 23), DimensionKind.NUMERAL),
        production=_produce_latent_hour,
    ))
    rules.append(rule("noon", regex(r"noon|mid-?day"), production=_constant(Clock(12))))
    rules.append(rule("midnight", regex(r"mid-?night"), production=_constant(Clock(0))))
    rules.append(rule(
        "<time-of-day> o'clock",
        predicate(_is_hour, TIME),
        regex(r"o.?clock"),
        production=_produce_not_latent,
    ))
    rules.append(rule(
        "at <time-of-day>",
        regex(r"at|@"),
        predicate(_is_clock, TIME),
        production=_produce_not_latent,
    ))
    rules.append(rule(
        "hh:mm",
        regex(r"((?:[01]?\d)|(?:2[0-3])):([0-5]\d)"),
        production=_produce_hh_mm,
    ))
    rules.append(rule(
        "hh:mm:ss",
        regex(r"((?:[01]?\d)|(?:2[0-3])):([0-5]\d):([0-5]\d)"),
        production=_produce_hh_mm_ss,
    ))
    rules.append(rule(
        "<time-of-day> am|pm",
        predicate(_is_ambiguous_clock, TIME),
        regex(r"(?:in\s+the\s+)?([ap])\.?\s?m\.?"),
        production=_produce_am_pm,
    ))
    rules.append(rule(
        "half past <hour>",
        regex(r"half\s+(?:past|after)"),
        predicate(_is_hour, TIME),
        production=_minutes_producer(30),
    ))
    rules.append(rule(
        "quarter past <hour>",
        regex(r"(?:a\s+)?quarter\s+(?:past|after)"),
        predicate(_is_hour, TIME),
        production=_minutes_producer(15),
    ))
    rules.append(rule(
        "quarter to <hour>",
        regex(r"(?:a\s+)?quarter\s+(?:to|till|before|of)"),
        predicate(_is_hour, TIME),
        production=_minutes_producer(-15),
    ))
    rules.append(rule(
        "<integer> past <hour>",
        predicate(number_between(1, 59), DimensionKind.NUMERAL),
        regex(r"(?:min(?:ute)?s?\s+)?(?:past|after)"),
        predicate(_is_hour, TIME),
        production=_produce_minutes_past,
    ))
    rules.append(rule(
        "<integer> to <hour>",
        predicate(number_between(1, 59), DimensionKind.NUMERAL),
        regex(r"(?:min(?:ute)?s?\s+)?(?:to|till|before|of)"),
        predicate(_is_hour, TIME),
        production=_produce_minutes_to,
    ))

    # Parts of the day
    rules.append(rule(
        "tonight",
        regex(r"toni(?:ght|te)'?s?"),
        production=_constant(Intersect(DayOffset(0), PartOfDay(DayPart.EVENING))),
    ))
    rules.append(rule(
        "in the <part-of-day>",
        regex(r"(?:in|during)\s+the"),
        predicate(_is_part_of_day, TIME),
        production=_produce_not_latent,
    ))
    rules.append(rule(
        "<time> <part-of-day>",
        time,
        predicate(_is_part_of_day, TIME),
        production=_produce_part_of_day_intersect,
    ))
    rules.append(rule(
        "<time-of-day> <part-of-day>",
        predicate(_is_clock, TIME),
        predicate(_is_part_of_day, TIME),
        production=_produce_part_of_day_intersect,
    ))

    # Dates
    rules.append(rule(
        "the <day-of-month> (ordinal)",
        regex(r"the"),
        predicate(ordinal_between(1, 31), DimensionKind.ORDINAL),
        production=_produce_day_of_month(latent=True),
    ))
    rules.append(rule(
        "on the <day-of-month>",
        regex(r"on\s+the"),
        predicate(ordinal_between(1, 31), DimensionKind.ORDINAL),
        production=_produce_day_of_month(latent=False),
    ))
    rules.append(rule(
        "<month> <day-of-month>",
        predicate(_is_month, TIME),
        predicate(_is_day_number),
        production=_produce_month_day,
    ))
    rules.append(rule(
        "<month> the <day-of-month>",
        predicate(_is_month, TIME),
        regex(r"the"),
        predicate(ordinal_between(1, 31), DimensionKind.ORDINAL),
        production=_produce_month_day,
    ))
    rules.append(rule(
        "<day-of-month> <month>",
        predicate(_is_day_number),
        predicate(_is_month, TIME),
        production=_produce_day_month,
    ))
    rules.append(rule(
        "<day-of-month> of <month>",
        predicate(_is_day_number),
        regex(r"of"),
        predicate(_is_month, TIME),
        production=_produce_day_month,
    ))
    rules.append(rule(
        "the <day-of-month> of <month>",
        regex(r"the"),
        predicate(ordinal_between(1, 31), DimensionKind.ORDINAL),
        regex(r"of"),
        predicate(_is_month, TIME),
        production=_produce_day_month,
    ))
    rules.append(rule(
        "<day-of-week> the <day-of-month>",
        predicate(_is_day_of_week, TIME),
        regex(r"the"),
        predicate(ordinal_between(1, 31), DimensionKind.ORDINAL),
        production=_produce_day_of_week_day,
    ))
    rules.append(rule(
        "<month-day> <year>",
        predicate(_is_month_day, TIME),
        predicate(_is_year_number, DimensionKind.NUMERAL),
        production=_produce_month_day_year,
    ))
    rules.append(rule(
        "<month-day>, <year>",
        predicate(_is_month_day, TIME),
        regex(r","),
        predicate(_is_year_number, DimensionKind.NUMERAL),
        production=_produce_month_day_year,
    ))
    rules.append(rule(
        "<month> <year>",
        predicate(_is_month, TIME),
        predicate(_is_year_number, DimensionKind.NUMERAL),
        production=_produce_month_year,
    ))
    rules.append(rule(
        "dd/mm/yyyy" if day_first else "mm/dd/yyyy",
        regex(r"(0?[1-9]|[12]\d|3[01])[/.-](0?[1-9]|[12]\d|3[01])[/.-](\d{4}|\d{2})"),
        production=_numeric_date_producer(day_first),
    ))
    rules.append(rule(
        "yyyy-mm-dd",
        regex(r"(\d{4})[-/](0?[1-9]|1[0-2])[-/](3[01]|[12]\d|0?[1-9])"),
        production=_produce_iso_date,
    ))
    rules.append(rule(
        "dd/mm" if day_first else "mm/dd",
        regex(r"(0?[1-9]|[12]\d|3[01])/(0?[1-9]|[12]\d|3[01])"),
        production=_numeric_month_day_producer(day_first),
    ))
    rules.append(rule(
        "year (latent)",
        predicate(_is_year_number, DimensionKind.NUMERAL),
        production=_produce_year,
    ))
    rules.append(rule(
        "in|during <year>",
        regex(r"in|during"),
        predicate(_is_year, TIME),
        production=_produce_not_latent,
    ))

    # Quarters
    rules.append(rule(
        "<ordinal> quarter",
        predicate(ordinal_between(1, 4), DimensionKind.ORDINAL),
        regex(r"quarter|qtr"),
        production=_produce_ordinal_quarter,
    ))
    rules.append(rule("q<n>", regex(r"q([1-4])"), production=_produce_q_quarter))
    rules.append(rule(
        "<quarter> <year>",
        predicate(_is_quarter, TIME),
        predicate(_is_year_number, DimensionKind.NUMERAL),
        production=_produce_quarter_year,
    ))
    rules.append(rule(
        "yyyyqq",
        regex(r"(\d{4}|\d{2})\s?q([1-4])"),
        production=_produce_year_quarter,
    ))

    # Relative to now
    rules.append(rule(
        "this <grain>",
        regex(r"this|current"),
        dim(DimensionKind.TIME_GRAIN),
        production=_grain_offset_producer(0),
    ))
    rules.append(rule(
        "next <grain>",
        regex(RE_NEXT),
        dim(DimensionKind.TIME_GRAIN),
        production=_grain_offset_producer(1),
    ))
    rules.append(rule(
        "last <grain>",
        regex(RE_LAST),
        dim(DimensionKind.TIME_GRAIN),
        production=_grain_offset_producer(-1),
    ))
    rules.append(rule(
        "next|last <n> <grain>",
        regex(r"(%s)|(%s)" % (RE_NEXT, RE_LAST)),
        predicate(is_natural, DimensionKind.NUMERAL),
        dim(DimensionKind.TIME_GRAIN),
        production=_produce_grain_range,
    ))
    rules.append(rule(
        "in <duration>",
        regex(r"in"),
        dim(DimensionKind.DURATION),
        production=_relative_producer(1),
    ))
    rules.append(rule(
        "<duration> from now",
        dim(DimensionKind.DURATION),
        regex(r"from\s+(?:now|today)|hence|later"),
        production=_relative_producer(1),
    ))
    rules.append(rule(
        "<duration> ago",
        dim(DimensionKind.DURATION),
        regex(r"ago"),
        production=_relative_producer(-1),
    ))
    rules.append(rule(
        "within <duration>",
        regex(r"within"),
        dim(DimensionKind.DURATION),
        production=_produce_within,
    ))
    rules.append(rule(
        "<duration> after|before <time>",
        dim(DimensionKind.DURATION),
        regex(r"(after|from)|(before|prior\s+to)"),
        time,
        production=_produce_duration_shift,
    ))

    # Direction
    rules.append(rule(
        "this <time>",
        regex(r"this|current"),
        predicate(_is_repeating, TIME),
        production=_produce_this,
    ))
    rules.append(rule(
        "next <time>",
        regex(RE_NEXT),
        predicate(_is_repeating, TIME),
        production=_direction_producer(Direction.FUTURE),
    ))
    rules.append(rule(
        "last <time>",
        regex(RE_LAST),
        predicate(_is_repeating, TIME),
        production=_direction_producer(Direction.PAST),
    ))
    rules.append(rule(
        "<time> after next",
        predicate(_is_repeating, TIME),
        regex(r"after\s+next"),
        production=_direction_producer(Direction.FAR_FUTURE),
    ))

    # Nth and last of
    rules.append(rule(
        "<ordinal> <day-of-week> of <time>",
        predicate(is_ordinal, DimensionKind.ORDINAL),
        predicate(_is_day_of_week, TIME),
        regex(r"of|in"),
        time,
        production=_nth_day_of_week_producer(last=False),
    ))
    rules.append(rule(
        "last <day-of-week> of <time>",
        regex(r"last"),
        predicate(_is_day_of_week, TIME),
        regex(r"of|in"),
        time,
        production=_nth_day_of_week_producer(last=True),
    ))
    rules.append(rule(
        "<ordinal> last <day-of-week> of <time>",
        predicate(is_ordinal, DimensionKind.ORDINAL),
        regex(r"last"),
        predicate(_is_day_of_week, TIME),
        regex(r"of|in"),
        time,
        production=_produce_nth_last_day_of_week,
    ))
    rules.append(rule(
        "<ordinal> <grain> of <time>",
        predicate(is_ordinal, DimensionKind.ORDINAL),
        dim(DimensionKind.TIME_GRAIN),
        regex(r"of|in"),
        time,
        production=_nth_grain_producer(last=False),
    ))
    rules.append(rule(
        "last <grain> of <time>",
        regex(r"last"),
        dim(DimensionKind.TIME_GRAIN),
        regex(r"of|in"),
        time,
        production=_nth_grain_producer(last=True),
    ))
    rules.append(rule(
        "<ordinal> last <grain> of <time>",
        predicate(is_ordinal, DimensionKind.ORDINAL),
        regex(r"last"),
        dim(DimensionKind.TIME_GRAIN),
        regex(r"of|in"),
        time,
        production=_produce_nth_last_grain,
    ))

    # Composition
    rules.append(rule("intersect", time, time, production=_produce_intersect))
    rules.append(rule("intersect by ','", time, regex(r","), time, production=_produce_intersect))
    rules.append(rule(
        "intersect by 'of', 'on', 'at', 'in'",
        time,
        regex(r"of|on|at|in"),
        time,
        production=_produce_intersect,
    ))
    rules.append(rule("on <time>", regex(r"on"), time, production=_produce_not_latent))

    # Intervals
    rules.append(rule(
        "from <time> to <time>",
        regex(r"from"),
        time,
        regex(RE_INTERVAL_SEPARATOR),
        time,
        production=_produce_interval,
    ))
    rules.append(rule(
        "between <time> and <time>",
        regex(r"between"),
        time,
        regex(r"and"),
        time,
        production=_produce_interval,
    ))
    rules.append(rule(
        "<time> - <time>",
        time,
        regex(RE_INTERVAL_SEPARATOR),
        time,
        production=_produce_interval,
    ))
    rules.append(rule(
        "<hour> - <time-of-day>",
        predicate(_is_clock, TIME),
        regex(RE_INTERVAL_SEPARATOR),
        predicate(lambda data: _is_clock(data) and not data.latent, TIME, name="clock"),
        production=_produce_clock_interval,
    ))
    rules.append(rule(
        "from <hour> to <time-of-day>",
        regex(r"from|between"),
        predicate(_is_clock, TIME),
        regex(RE_INTERVAL_SEPARATOR + r"|and"),
        predicate(lambda data: _is_clock(data) and not data.latent, TIME, name="clock"),
        production=_produce_clock_interval,
    ))
    rules.append(rule(
        "<month> <day>-<day>",
        predicate(_is_month, TIME),
        predicate(_is_day_number),
        regex(RE_INTERVAL_SEPARATOR),
        predicate(_is_day_number),
        production=_produce_day_range,
    ))
    rules.append(rule(
        "<day>-<day> <month>",
        predicate(_is_day_number),
        regex(RE_INTERVAL_SEPARATOR),
        predicate(_is_day_number),
        predicate(_is_month, TIME),
        production=_produce_day_range,
    ))
    rules.append(rule(
        "before <time>",
        regex(r"before|until|till|til|up\s+to|prior\s+to|no\s+later\s+than|by"),
        time,
        production=_open_interval_producer(OpenInterval.BEFORE),
    ))
    rules.append(rule(
        "after <time>",
        regex(r"after|since|from|starting(?:\s+(?:from|on|at))?|no\s+earlier\s+than"),
        time,
        production=_open_interval_producer(OpenInterval.AFTER),
    ))
    rules.append(rule(
        "<time> onwards",
        time,
        regex(r"onwards?|and\s+(?:later|after)"),
        production=_open_interval_producer(OpenInterval.AFTER),
    ))

    # Modifiers
    rules.append(rule(
        "early|mid|late <time>",
        regex(r"(early|mid|late)-?"),
        predicate(_is_position_target, TIME),
        production=_produce_position,
    ))
    rules.append(rule(
        "beginning|middle|end of <time>",
        regex(r"(?:the\s+)?(beginning|start|middle|end)\s+of(?:\s+the)?"),
        predicate(_is_position_target, TIME),
        production=_produce_position,
    ))
    rules.append(rule(
        "<time> <timezone>",
        predicate(_is_zone_target, TIME),
        regex(RE_TIMEZONE),
        production=_produce_timezone,
    ))
    rules.append(rule(
        "<time> (<timezone>)",
        predicate(_is_zone_target, TIME),
        regex(r"\(%s\)" % RE_TIMEZONE),
        production=_produce_timezone,
    ))
    return rules
