"""
Temporal intents produced by the time rules.

A ``TimeData`` payload wraps a *form*: a calendar predicate ("friday",
"march 3rd", "3pm"), a deictic ("tomorrow", "next week") or a combination
of other forms. Forms are evaluated against a wall-clock reference time and
produce ``Slot`` occurrences:

- repeating forms step through calendar cycles. ``forward(t, ref)`` yields
  the slots ending after ``t`` in ascending order and ``backward(t, ref)``
  the slots starting before ``t`` in descending order;
- anchored forms ("tomorrow", "in 3 hours", "2014") have a single slot
  computed from the reference time.

Every datetime in this module is a naive wall-clock reading.
"""

import calendar
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterator, List, Optional

from ...types import DimensionKind, Grain
from .holidays import holiday_date

# Upper bound on calendar cycles a repeating form walks through.
MAX_CYCLES = 2000
# Consecutive empty outer occurrences after which an intersection gives up.
MAX_EMPTY_STEPS = 400
# Start of the search for anchored forms.
EARLIEST = datetime(2, 1, 1)


# =============================================================================
# Enums
# =============================================================================

class Direction(Enum):
    PAST = "past"
    FUTURE = "future"
    FAR_FUTURE = "far-future"


class OpenInterval(Enum):
    BEFORE = "before"
    AFTER = "after"


class Position(Enum):
    EARLY = "early"
    MID = "mid"
    LATE = "late"


class DayPart(Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"
    LUNCH = "lunch"


class SeasonName(Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"


# Hours covered by each part of the day, end exclusive.
DAY_PART_HOURS = {
    DayPart.MORNING: (0, 12),
    DayPart.AFTERNOON: (12, 19),
    DayPart.EVENING: (18, 24),
    DayPart.NIGHT: (18, 24),
    DayPart.LUNCH: (12, 14),
}

MODIFIED_DAY_PART_HOURS = {
    (DayPart.MORNING, Position.EARLY): (0, 9),
    (DayPart.EVENING, Position.LATE): (21, 24),
    (DayPart.NIGHT, Position.LATE): (21, 24),
}

# (start month, start day), (end month, end day, years after start)
SEASON_DATES = {
    SeasonName.SPRING: ((3, 20), (6, 21, 0)),
    SeasonName.SUMMER: ((6, 21), (9, 24, 0)),
    SeasonName.FALL: ((9, 23), (12, 21, 0)),
    SeasonName.WINTER: ((12, 21), (3, 21, 1)),
}


# =============================================================================
# Calendar helpers
# =============================================================================

@dataclass(frozen=True)
class Slot:
    """One occurrence of a form: ``[start, end)`` at a given grain."""
    start: datetime
    end: datetime
    grain: Grain


def truncate(t: datetime, grain: Grain) -> datetime:
    """Start of the ``grain`` unit containing ``t``; weeks start on Monday."""
    if grain is Grain.SECOND:
        return t.replace(microsecond=0)
    if grain is Grain.MINUTE:
        return t.replace(second=0, microsecond=0)
    if grain is Grain.HOUR:
        return t.replace(minute=0, second=0, microsecond=0)
    day = t.replace(hour=0, minute=0, second=0, microsecond=0)
    if grain is Grain.DAY:
        return day
    if grain is Grain.WEEK:
        return day - timedelta(days=day.weekday())
    if grain is Grain.MONTH:
        return day.replace(day=1)
    if grain is Grain.QUARTER:
        return day.replace(month=3 * ((day.month - 1) // 3) + 1, day=1)
    return day.replace(month=1, day=1)


def shift(t: datetime, grain: Grain, n: int) -> datetime:
    return t + grain.delta(n)


def unit_slot(start: datetime, grain: Grain) -> Slot:
    return Slot(start, shift(start, grain, 1), grain)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def is_valid_date(year: Optional[int], month: int, day: int) -> bool:
    """Whether ``day`` exists in ``month`` (of ``year``, or of some leap year)."""
    if not 1 <= month <= 12 or day < 1:
        return False
    if year is None:
        return day <= days_in_month(2000, month)
    return 1 <= year <= 9999 and day <= days_in_month(year, month)


def _overlap(first: Slot, second: Slot) -> Optional[Slot]:
    start = max(first.start, second.start)
    end = min(first.end, second.end)
    if start >= end:
        return None
    return Slot(start, end, min(first.grain, second.grain))


def _first(slots) -> Optional[Slot]:
    return next(iter(slots), None)


# =============================================================================
# Base forms
# =============================================================================

class TimeForm:
    """Base class of temporal forms."""

    anchored = False
    interval = False

    @property
    def grain(self) -> Grain:
        raise NotImplementedError

    def forward(self, t: datetime, ref: datetime) -> Iterator[Slot]:
        raise NotImplementedError

    def backward(self, t: datetime, ref: datetime) -> Iterator[Slot]:
        raise NotImplementedError


class AnchoredForm(TimeForm):
    """A form with exactly one occurrence, derived from the reference time."""

    anchored = True

    def slot(self, ref: datetime) -> Optional[Slot]:
        raise NotImplementedError

    def forward(self, t, ref):
        slot = self.slot(ref)
        if slot is not None and slot.end > t:
            yield slot

    def backward(self, t, ref):
        slot = self.slot(ref)
        if slot is not None and slot.start < t:
            yield slot


class RepeatingForm(TimeForm):
    """
    A form recurring once (or a few times) per calendar cycle.

    Subclasses set ``cycle`` and implement ``instances(cycle_start)``, the
    occurrences starting within one cycle in ascending order.
    """

    cycle = Grain.YEAR

    def instances(self, cycle_start: datetime) -> List[Slot]:
        raise NotImplementedError

    def forward(self, t, ref):
        # Previous cycle too: its last occurrence may run past ``t``.
        cycle_start = shift(truncate(t, self.cycle), self.cycle, -1)
        for _ in range(MAX_CYCLES):
            for slot in self.instances(cycle_start):
                if slot.end > t:
                    yield slot
            cycle_start = shift(cycle_start, self.cycle, 1)

    def backward(self, t, ref):
        cycle_start = truncate(t, self.cycle)
        for _ in range(MAX_CYCLES):
            for slot in reversed(self.instances(cycle_start)):
                if slot.start < t:
                    yield slot
            cycle_start = shift(cycle_start, self.cycle, -1)


# =============================================================================
# Calendar fields
# =============================================================================

@dataclass(frozen=True)
class DayOfWeek(RepeatingForm):
    """Monday is 0."""
    day: int

    cycle = Grain.WEEK
    grain = Grain.DAY

    def instances(self, cycle_start):
        return [unit_slot(cycle_start + timedelta(days=self.day), Grain.DAY)]


@dataclass(frozen=True)
class DayOfMonth(RepeatingForm):
    day: int

    cycle = Grain.MONTH
    grain = Grain.DAY

    def instances(self, cycle_start):
        if self.day > days_in_month(cycle_start.year, cycle_start.month):
            return []
        return [unit_slot(cycle_start.replace(day=self.day), Grain.DAY)]


@dataclass(frozen=True)
class Month(RepeatingForm):
    month: int

    grain = Grain.MONTH

    def instances(self, cycle_start):
        return [unit_slot(cycle_start.replace(month=self.month), Grain.MONTH)]


@dataclass(frozen=True)
class MonthDay(RepeatingForm):
    month: int
    day: int

    grain = Grain.DAY

    def instances(self, cycle_start):
        if not is_valid_date(cycle_start.year, self.month, self.day):
            return []
        return [unit_slot(cycle_start.replace(month=self.month, day=self.day), Grain.DAY)]


@dataclass(frozen=True)
class Quarter(RepeatingForm):
    quarter: int

    grain = Grain.QUARTER

    def instances(self, cycle_start):
        return [unit_slot(cycle_start.replace(month=3 * self.quarter - 2), Grain.QUARTER)]


@dataclass(frozen=True)
class Clock(RepeatingForm):
    """
    A time of day. ``ambiguous`` hours (1..12 without am/pm) occur twice a
    day: "at 3" is both 03:00 and 15:00.
    """
    hour: int
    minute: Optional[int] = None
    second: Optional[int] = None
    ambiguous: bool = False

    cycle = Grain.DAY

    @property
    def grain(self):
        if self.second is not None:
            return Grain.SECOND
        if self.minute is not None:
            return Grain.MINUTE
        return Grain.HOUR

    @property
    def hours(self) -> List[int]:
        if not self.ambiguous:
            return [self.hour]
        return sorted({self.hour % 12, self.hour % 12 + 12})

    def instances(self, cycle_start):
        offset = timedelta(minutes=self.minute or 0, seconds=self.second or 0)
        return [
            unit_slot(cycle_start + timedelta(hours=hour) + offset, self.grain)
            for hour in self.hours
        ]


@dataclass(frozen=True)
class PartOfDay(RepeatingForm):
    part: DayPart

    cycle = Grain.DAY
    grain = Grain.HOUR
    interval = True

    def instances(self, cycle_start):
        first, last = DAY_PART_HOURS[self.part]
        return [Slot(
            cycle_start + timedelta(hours=first),
            cycle_start + timedelta(hours=last),
            Grain.HOUR,
        )]


@dataclass(frozen=True)
class Weekend(RepeatingForm):
    """Friday 18:00 to Monday 00:00."""

    cycle = Grain.WEEK
    grain = Grain.HOUR
    interval = True

    def instances(self, cycle_start):
        return [Slot(
            cycle_start + timedelta(days=4, hours=18),
            cycle_start + timedelta(days=7),
            Grain.HOUR,
        )]


@dataclass(frozen=True)
class Season(RepeatingForm):
    """Northern hemisphere seasons."""
    season: SeasonName

    grain = Grain.DAY
    interval = True

    def instances(self, cycle_start):
        (start_month, start_day), (end_month, end_day, years) = SEASON_DATES[self.season]
        start = cycle_start.replace(month=start_month, day=start_day)
        end = cycle_start.replace(year=cycle_start.year + years, month=end_month, day=end_day)
        return [Slot(start, end, Grain.DAY)]


@dataclass(frozen=True)
class Holiday(RepeatingForm):
    name: str

    grain = Grain.DAY

    def instances(self, cycle_start):
        day = holiday_date(self.name, cycle_start.year)
        if day is None:
            return []
        return [unit_slot(datetime(day.year, day.month, day.day), Grain.DAY)]


# =============================================================================
# Anchored forms
# =============================================================================

@dataclass(frozen=True)
class Now(AnchoredForm):
    grain = Grain.SECOND

    def slot(self, ref):
        return unit_slot(truncate(ref, Grain.SECOND), Grain.SECOND)


@dataclass(frozen=True)
class DayOffset(AnchoredForm):
    """Today (0), tomorrow (1), the day before yesterday (-2)..."""
    days: int

    grain = Grain.DAY

    def slot(self, ref):
        return unit_slot(truncate(ref, Grain.DAY) + timedelta(days=self.days), Grain.DAY)


@dataclass(frozen=True)
class GrainOffset(AnchoredForm):
    """This (0), next (1) or last (-1) ``unit``: "next week", "last month"."""
    unit: Grain
    offset: int

    @property
    def grain(self):
        return self.unit

    def slot(self, ref):
        return unit_slot(shift(truncate(ref, self.unit), self.unit, self.offset), self.unit)


@dataclass(frozen=True)
class RelativeGrain(AnchoredForm):
    """
    ``amount`` units from the reference time ("in 3 hours", "2 days ago"),
    truncated to the next finer grain.
    """
    amount: int
    unit: Grain

    @property
    def grain(self):
        return self.unit.lower()

    def slot(self, ref):
        moved = ref + self.unit.delta(self.amount)
        return unit_slot(truncate(moved, self.grain), self.grain)


@dataclass(frozen=True)
class GrainRange(AnchoredForm):
    """The ``amount`` whole units after (or before) the current one: "next 3 days"."""
    amount: int
    unit: Grain
    past: bool = False

    interval = True

    @property
    def grain(self):
        return self.unit

    def slot(self, ref):
        current = truncate(ref, self.unit)
        if self.past:
            return Slot(shift(current, self.unit, -self.amount), current, self.unit)
        start = shift(current, self.unit, 1)
        return Slot(start, shift(start, self.unit, self.amount), self.unit)


@dataclass(frozen=True)
class Year(AnchoredForm):
    year: int

    grain = Grain.YEAR

    def slot(self, ref):
        return unit_slot(datetime(self.year, 1, 1), Grain.YEAR)


@dataclass(frozen=True)
class Date(AnchoredForm):
    year: int
    month: int
    day: int

    grain = Grain.DAY

    def slot(self, ref):
        if not is_valid_date(self.year, self.month, self.day):
            return None
        return unit_slot(datetime(self.year, self.month, self.day), Grain.DAY)


@dataclass(frozen=True)
class Directed(AnchoredForm):
    """A repeating form pinned by "next", "last" or "after next"."""
    direction: Direction
    form: TimeForm

    @property
    def grain(self):
        return self.form.grain

    @property
    def interval(self):
        return self.form.interval

    def slot(self, ref):
        return select(self.form, self.direction, ref)


# =============================================================================
# Compositions
# =============================================================================

@dataclass(frozen=True)
class Intersect(TimeForm):
    """
    Occurrences of both forms at once: "tomorrow at 3pm", "monday morning".

    The anchored (or else the coarser) form drives the walk and the other is
    searched inside each of its occurrences.
    """
    first: TimeForm
    second: TimeForm

    @property
    def anchored(self):
        return self.first.anchored or self.second.anchored

    @property
    def interval(self):
        return self.first.interval or self.second.interval

    @property
    def grain(self):
        return min(self.first.grain, self.second.grain)

    def _ordered(self):
        if self.first.anchored != self.second.anchored:
            if self.first.anchored:
                return self.first, self.second
            return self.second, self.first
        if self.second.grain > self.first.grain:
            return self.second, self.first
        return self.first, self.second

    def _within(self, outer: Slot, inner: TimeForm, ref) -> List[Slot]:
        slots = []
        for candidate in inner.forward(outer.start, ref):
            if candidate.start >= outer.end:
                break
            slot = _overlap(outer, candidate)
            if slot is not None:
                slots.append(slot)
        return slots

    def forward(self, t, ref):
        outer, inner = self._ordered()
        misses = 0
        for slot in outer.forward(t, ref):
            found = [s for s in self._within(slot, inner, ref) if s.end > t]
            yield from found
            misses = 0 if found else misses + 1
            if misses > MAX_EMPTY_STEPS:
                return

    def backward(self, t, ref):
        outer, inner = self._ordered()
        misses = 0
        for slot in outer.backward(t, ref):
            found = [s for s in self._within(slot, inner, ref) if s.start < t]
            yield from reversed(found)
            misses = 0 if found else misses + 1
            if misses > MAX_EMPTY_STEPS:
                return


@dataclass(frozen=True)
class Interval(TimeForm):
    """
    From an occurrence of ``start`` to the next occurrence of ``end``.
    A ``closed`` interval includes the whole ``end`` occurrence.
    """
    start: TimeForm
    end: TimeForm
    closed: bool = True

    interval = True

    @property
    def anchored(self):
        return self.start.anchored

    @property
    def grain(self):
        return min(self.start.grain, self.end.grain)

    def _span(self, first: Slot, ref) -> Optional[Slot]:
        for _, last in zip(range(8), self.end.forward(first.start, ref)):
            if last.start < first.start:
                continue
            end = last.end if self.closed else last.start
            if end <= first.start:
                return None
            return Slot(first.start, end, min(first.grain, last.grain))
        return None

    def forward(self, t, ref):
        for first in self.start.forward(t, ref):
            span = self._span(first, ref)
            if span is not None:
                yield span

    def backward(self, t, ref):
        for first in self.start.backward(t, ref):
            span = self._span(first, ref)
            if span is not None:
                yield span


class _Nested(TimeForm):
    """A form picking one sub-slot out of each occurrence of ``base``."""

    @property
    def anchored(self):
        return self.base.anchored

    def pick(self, outer: Slot) -> Optional[Slot]:
        raise NotImplementedError

    def forward(self, t, ref):
        misses = 0
        for outer in self.base.forward(t, ref):
            slot = self.pick(outer)
            if slot is not None and slot.end > t:
                misses = 0
                yield slot
            else:
                misses += 1
                if misses > MAX_EMPTY_STEPS:
                    return

    def backward(self, t, ref):
        misses = 0
        for outer in self.base.backward(t, ref):
            slot = self.pick(outer)
            if slot is not None and slot.start < t:
                misses = 0
                yield slot
            else:
                misses += 1
                if misses > MAX_EMPTY_STEPS:
                    return


def _nth(items: List[Slot], n: int) -> Optional[Slot]:
    """1-based from the start when ``n`` > 0, from the end when ``n`` < 0."""
    if 0 < n <= len(items):
        return items[n - 1]
    if 0 < -n <= len(items):
        return items[n]
    return None


@dataclass(frozen=True)
class DayOfWeekOf(_Nested):
    """The ``n``th (or ``-n``th last) given weekday of ``base``: "last Monday of March"."""
    day: int
    n: int
    base: TimeForm

    grain = Grain.DAY

    def pick(self, outer):
        first = truncate(outer.start, Grain.DAY)
        if first < outer.start:
            first += timedelta(days=1)
        first += timedelta(days=(self.day - first.weekday()) % 7)
        days = []
        while first < outer.end:
            days.append(unit_slot(first, Grain.DAY))
            first += timedelta(weeks=1)
        return _nth(days, self.n)


@dataclass(frozen=True)
class GrainOf(_Nested):
    """
    The ``n``th (or ``-n``th last) whole ``unit`` inside ``base``:
    "third day of october", "last week of september 2014".
    """
    unit: Grain
    n: int
    base: TimeForm

    @property
    def grain(self):
        return self.unit

    def pick(self, outer):
        start = truncate(outer.start, self.unit)
        if start < outer.start:
            start = shift(start, self.unit, 1)
        units = []
        while shift(start, self.unit, 1) <= outer.end and len(units) < 1000:
            units.append(unit_slot(start, self.unit))
            start = shift(start, self.unit, 1)
        return _nth(units, self.n)


@dataclass(frozen=True)
class DurationShift(_Nested):
    """``base`` moved by ``amount`` units: "3 days after tomorrow", "an hour before 5pm"."""
    amount: int
    unit: Grain
    base: TimeForm

    @property
    def grain(self):
        return min(self.base.grain, self.unit)

    def pick(self, outer):
        start = outer.start + self.unit.delta(self.amount)
        grain = min(outer.grain, self.unit)
        return unit_slot(start, grain)

    def forward(self, t, ref):
        for slot in super().forward(t - self.unit.delta(self.amount), ref):
            if slot.end > t:
                yield slot

    def backward(self, t, ref):
        for slot in super().backward(t - self.unit.delta(self.amount), ref):
            if slot.start < t:
                yield slot


@dataclass(frozen=True)
class Modified(_Nested):
    """Early, mid or late part of ``base``: thirds, or fixed hours for parts of the day."""
    position: Position
    base: TimeForm

    interval = True

    @property
    def grain(self):
        if isinstance(self.base, PartOfDay):
            return Grain.HOUR
        return self.base.grain.lower()

    def pick(self, outer):
        if isinstance(self.base, PartOfDay):
            hours = MODIFIED_DAY_PART_HOURS.get((self.base.part, self.position))
            if hours is not None:
                day = truncate(outer.start, Grain.DAY)
                return Slot(day + timedelta(hours=hours[0]), day + timedelta(hours=hours[1]), Grain.HOUR)

        third = (outer.end - outer.start) / 3
        index = {Position.EARLY: 0, Position.MID: 1, Position.LATE: 2}[self.position]
        start = truncate(outer.start + index * third, self.grain)
        end = truncate(outer.start + (index + 1) * third, self.grain)
        if end <= start:
            end = shift(start, self.grain, 1)
        return Slot(start, end, self.grain)


# =============================================================================
# Occurrence selection
# =============================================================================

def select(form: TimeForm, direction: Optional[Direction], ref: datetime) -> Optional[Slot]:
    """
    The occurrence of ``form`` meant at ``ref``.

    Without a direction this is the first occurrence starting strictly after
    ``ref``, except month-or-coarser forms whose current occurrence contains
    ``ref``. "last" picks the latest occurrence already over at ``ref``, "next"
    on a weekday picks the one in the following week and "after next" skips
    one occurrence.
    """
    if form.anchored:
        return _first(form.forward(EARLIEST, ref))

    if direction is Direction.PAST:
        return _first(slot for slot in form.backward(ref, ref) if slot.end <= ref)

    if direction is Direction.FUTURE and isinstance(form, DayOfWeek):
        next_week = shift(truncate(ref, Grain.WEEK), Grain.WEEK, 1)
        return _first(form.forward(next_week, ref))

    if direction is None and form.grain >= Grain.MONTH:
        return _first(form.forward(ref, ref))

    upcoming = (slot for slot in form.forward(ref, ref) if slot.start > ref)
    if direction is Direction.FAR_FUTURE:
        next(upcoming, None)
    return _first(upcoming)


def following(form: TimeForm, slot: Slot, ref: datetime) -> Iterator[Slot]:
    """Occurrences of ``form`` after ``slot``, ascending."""
    previous = slot.start
    for candidate in form.forward(slot.start, ref):
        if candidate.start > previous:
            previous = candidate.start
            yield candidate


# =============================================================================
# Payload
# =============================================================================

@dataclass(frozen=True)
class TimeData:
    """
    Payload of time tokens.

    Args:
        form: what is being referred to.
        direction: "next"/"last"/"after next" pinning of a repeating form.
        latent: bare hours, years and parts of day are only reported on request.
        open_interval: "before X" / "after X".
        early_late: "early March", "late tonight".
        timezone: explicit zone ("CET", "+02:00") that turns values into instants.
    """
    form: TimeForm
    direction: Optional[Direction] = None
    latent: bool = False
    open_interval: Optional[OpenInterval] = None
    early_late: Optional[Position] = None
    timezone: Optional[str] = None

    dim = DimensionKind.TIME

    @property
    def effective_form(self) -> TimeForm:
        """``form`` with the direction and position modifiers folded in."""
        form = self.form
        if self.direction is not None:
            form = Directed(self.direction, form)
        if self.early_late is not None:
            form = Modified(self.early_late, form)
        return form

    @property
    def grain(self) -> Grain:
        return self.effective_form.grain

    @property
    def is_plain(self) -> bool:
        """No modifier has been applied yet."""
        return (
            self.direction is None
            and self.open_interval is None
            and self.early_late is None
            and self.timezone is None
        )

    def evolve(self, **changes) -> "TimeData":
        return replace(self, **changes)
