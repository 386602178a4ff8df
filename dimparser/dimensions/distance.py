from dataclasses import dataclass
from typing import Optional, Tuple

from ..pattern import predicate, regex, rule
from ..types import DimensionKind
from .measurement import (
    MeasurementData,
    interval_rules,
    latent_number_rule,
    resolve_measurement,
    unit_rule,
    value_only,
)


@dataclass(frozen=True)
class DistanceData(MeasurementData):
    dim = DimensionKind.DISTANCE


# "m" alone may be metres or miles; a neighbouring unit decides.
AMBIGUOUS_M = "m"

METRIC_UNITS = ("millimetre", "centimetre", "metre", "kilometre")
IMPERIAL_UNITS = ("inch", "foot", "yard", "mile")

_METRES_PER_INCH = 0.0254
METRES_PER_UNIT = {
    "millimetre": 0.001,
    "centimetre": 0.01,
    "metre": 1.0,
    "kilometre": 1000.0,
    "inch": _METRES_PER_INCH,
    "foot": 12 * _METRES_PER_INCH,
    "yard": 36 * _METRES_PER_INCH,
    "mile": 63360 * _METRES_PER_INCH,
}

# Metric sorts before imperial so mixed sums land in metric.
_UNIT_ORDER = {unit: position for position, unit in enumerate(METRIC_UNITS + IMPERIAL_UNITS)}

UNIT_PATTERNS = (
    ("miles", r"mi(le(s)?)?", "mile"),
    ("yard", r"y(ar)?ds?", "yard"),
    ("feet", r"'|f(oo|ee)?ts?", "foot"),
    ("inch", r"\"|''|in(ch(es)?)?", "inch"),
    ("km", r"k(ilo)?m?(et(er|re))?s?", "kilometre"),
    ("meters", r"met(er|re)s?", "metre"),
    ("centimeters", r"cm|centimet(er|re)s?", "centimetre"),
    ("millimeters", r"mm|millimet(er|re)s?", "millimetre"),
    ("m (miles or meters)", r"m", AMBIGUOUS_M),
)


def distance_sum(first: float, first_unit: str, second: float, second_unit: str) -> Optional[Tuple[float, str]]:
    """Add two distances, answering in the finer of the two units."""
    if first_unit == AMBIGUOUS_M and second_unit == AMBIGUOUS_M:
        return None
    if first_unit == AMBIGUOUS_M:
        first_unit = "metre" if second_unit in METRIC_UNITS else "mile"
    if second_unit == AMBIGUOUS_M:
        second_unit = "metre" if first_unit in METRIC_UNITS else "mile"

    target = min(first_unit, second_unit, key=_UNIT_ORDER.get)
    metres = first * METRES_PER_UNIT[first_unit] + second * METRES_PER_UNIT[second_unit]
    return metres / METRES_PER_UNIT[target], target


def _produce_composite(tokens):
    first, second = tokens[0].data, tokens[-1].data
    if first.unit == second.unit or first.value <= 0 or second.value <= 0:
        return None
    total = distance_sum(first.value, first.unit, second.value, second.unit)
    if total is None:
        return None
    value, unit = total
    return DistanceData(value=value, unit=unit)


def rules(locale=None):
    rules = [latent_number_rule(DistanceData, "number as distance")]
    for name, pattern, unit in UNIT_PATTERNS:
        rules.append(unit_rule(DistanceData, name, pattern, unit, accepted_units=()))

    simple = predicate(value_only(DistanceData, with_unit=True), DimensionKind.DISTANCE)
    rules.append(rule(
        "composite <distance> (with ,/and)",
        simple,
        regex(r",|and"),
        simple,
        production=_produce_composite,
    ))
    rules.append(rule(
        "composite <distance>",
        simple,
        simple,
        production=_produce_composite,
    ))
    rules.extend(interval_rules(DistanceData, "distance"))
    return rules


def resolve(data: DistanceData, context=None, options=None):
    return resolve_measurement(data, context, options)
