from dataclasses import dataclass

from ..pattern import dim, predicate, regex, rule
from ..types import DimensionKind, Grain
from ..values import DurationValue
from .numeral import is_integer


@dataclass(frozen=True)
class DurationData:
    value: int
    grain: Grain

    dim = DimensionKind.DURATION
    latent = False

    def with_grain(self, grain: Grain) -> "DurationData":
        """Same length expressed in ``grain``, rounded to a whole number."""
        if grain is self.grain:
            return self
        seconds = self.grain.in_seconds(self.value)
        return DurationData(int(round(seconds / grain.in_seconds())), grain)

    def combine(self, other: "DurationData") -> "DurationData":
        grain = min(self.grain, other.grain)
        return DurationData(self.with_grain(grain).value + other.with_grain(grain).value, grain)

    @property
    def seconds(self) -> int:
        return self.grain.in_seconds(self.value)


# Half of one unit, expressed in the next finer unit.
_HALVES = {
    Grain.MINUTE: (30, Grain.SECOND),
    Grain.HOUR: (30, Grain.MINUTE),
    Grain.DAY: (12, Grain.HOUR),
    Grain.WEEK: (84, Grain.HOUR),
    Grain.MONTH: (15, Grain.DAY),
    Grain.YEAR: (6, Grain.MONTH),
}


def is_duration(data) -> bool:
    return isinstance(data, DurationData)


def _half(grain: Grain) -> DurationData:
    value, finer = _HALVES[grain]
    return DurationData(value, finer)


def _produce_integer_grain(tokens):
    number = tokens[0].data
    if number.value != int(number.value):
        return None
    return DurationData(int(number.value), tokens[1].data.grain)


def _produce_a_grain(tokens):
    return DurationData(1, tokens[1].data.grain)


def _produce_half_grain(tokens):
    grain = tokens[1].data.grain
    if grain not in _HALVES:
        return None
    return _half(grain)


def _produce_integer_and_half(tokens):
    number, grain = tokens[0].data, tokens[2].data.grain
    if grain not in _HALVES:
        return None
    return DurationData(int(number.value), grain).combine(_half(grain))


def _produce_duration_and_half(tokens):
    duration = tokens[0].data
    if duration.grain not in _HALVES:
        return None
    return duration.combine(_half(duration.grain))


def _produce_composite(tokens):
    first, second = tokens[0].data, tokens[-1].data
    if first.grain <= second.grain:
        return None
    return first.combine(second)


def rules(locale=None):
    rules = []
    rules.append(rule(
        "<integer> <grain>",
        predicate(is_integer, DimensionKind.NUMERAL),
        dim(DimensionKind.TIME_GRAIN),
        production=_produce_integer_grain,
    ))
    rules.append(rule(
        "a <grain>",
        regex(r"an?|one"),
        dim(DimensionKind.TIME_GRAIN),
        production=_produce_a_grain,
    ))
    rules.append(rule(
        "half a <grain>",
        regex(r"half\s+an?"),
        dim(DimensionKind.TIME_GRAIN),
        production=_produce_half_grain,
    ))
    rules.append(rule(
        "<integer> and a half <grain>",
        predicate(is_integer, DimensionKind.NUMERAL),
        regex(r"and\s+an?\s+half"),
        dim(DimensionKind.TIME_GRAIN),
        production=_produce_integer_and_half,
    ))
    rules.append(rule(
        "<duration> and a half",
        dim(DimensionKind.DURATION),
        regex(r"and\s+an?\s+half"),
        production=_produce_duration_and_half,
    ))
    rules.append(rule(
        "composite <duration> (with ,/and)",
        dim(DimensionKind.DURATION),
        regex(r",|and"),
        dim(DimensionKind.DURATION),
        production=_produce_composite,
    ))
    rules.append(rule(
        "composite <duration>",
        dim(DimensionKind.DURATION),
        dim(DimensionKind.DURATION),
        production=_produce_composite,
    ))
    return rules


def resolve(data: DurationData, context=None, options=None) -> DurationValue:
    return DurationValue(data.value, data.grain, data.seconds)
