"""
Shared machinery for quantity-with-unit dimensions.

Temperature, distance, volume and amount of money all follow the same
shape: a bare number becomes a latent, unit-less quantity; a unit word
after (or a symbol before) it fixes the unit; range words turn one or two
quantities into an interval.
"""

from dataclasses import dataclass, replace
from typing import Optional, Type

from ..pattern import predicate, regex, rule
from ..types import Adjacency, DimensionKind
from ..values import MeasurementInterval, MeasurementValue
from .numeral import is_positive


@dataclass(frozen=True)
class MeasurementData:
    """
    Either a single ``value`` or a ``min_value``/``max_value`` range. A
    quantity without a unit is only meaningful as an intermediate result.
    """
    value: Optional[float] = None
    unit: Optional[str] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    latent: bool = False

    dim = None

    @property
    def is_interval(self) -> bool:
        return self.value is None and (self.min_value is not None or self.max_value is not None)

    def with_unit(self, unit: str) -> "MeasurementData":
        return replace(self, unit=unit, latent=False)

    def as_interval(self, low: Optional[float], high: Optional[float]) -> "MeasurementData":
        return replace(self, value=None, min_value=low, max_value=high, latent=False)


# =============================================================================
# Predicates
# =============================================================================

def value_only(data_cls: Type[MeasurementData], with_unit: Optional[bool] = None, units=None):
    """
    Predicate for single (non-interval) quantities of ``data_cls``.

    Args:
        with_unit: True requires a unit, False forbids one, None accepts both.
        units: when given, an existing unit must be one of these.
    """
    def accepts(data) -> bool:
        if not isinstance(data, data_cls) or data.value is None:
            return False
        if with_unit is True and data.unit is None:
            return False
        if with_unit is False and data.unit is not None:
            return False
        if units is not None and data.unit is not None and data.unit not in units:
            return False
        return True
    accepts.__name__ = "%s_value_only" % data_cls.__name__
    return accepts


# =============================================================================
# Rule builders
# =============================================================================

def latent_number_rule(data_cls: Type[MeasurementData], name: str):
    def produce(tokens):
        return data_cls(value=tokens[0].data.value, latent=True)
    return rule(name, predicate(is_positive, DimensionKind.NUMERAL), production=produce)


def unit_rule(data_cls: Type[MeasurementData], name: str, pattern: str, unit: str,
              accepted_units=None, adjacency: Adjacency = Adjacency.WHITESPACE):
    """``<quantity> <unit word>``: sets the unit of a unit-less quantity."""
    def produce(tokens):
        return tokens[0].data.with_unit(unit)
    return rule(
        name,
        predicate(value_only(data_cls, units=accepted_units), data_cls.dim),
        regex(pattern),
        production=produce,
        adjacency=adjacency,
    )


def prefix_unit_rule(data_cls: Type[MeasurementData], name: str, pattern: str, unit: str):
    """``<symbol><number>`` as in "$20"."""
    def produce(tokens):
        return data_cls(value=tokens[1].data.value, unit=unit)
    return rule(
        name,
        regex(pattern),
        predicate(is_positive, DimensionKind.NUMERAL),
        production=produce,
    )


def _same_unit(first: MeasurementData, second: MeasurementData) -> bool:
    return first.unit is None or second.unit is None or first.unit == second.unit


def interval_rules(data_cls: Type[MeasurementData], label: str):
    """
    Range readings shared by every measurement kind:

    - "between 3 and 5 km", "from 3 km to 5 km"
    - "3-5 km", "3 km - 5 km"
    - "under 5 km", "more than 5 km"
    - "about 5 km"
    """
    kind = data_cls.dim
    with_unit = value_only(data_cls, with_unit=True)
    rules = []

    def produce_number_range(tokens):
        low, high = tokens[1].data.value, tokens[3].data
        if low >= high.value:
            return None
        return high.as_interval(low, high.value)

    def produce_range(tokens):
        low, high = tokens[1].data, tokens[3].data
        if not _same_unit(low, high) or low.value >= high.value:
            return None
        return high.as_interval(low.value, high.value)

    def produce_dash_number_range(tokens):
        low, high = tokens[0].data.value, tokens[2].data
        if low >= high.value:
            return None
        return high.as_interval(low, high.value)

    def produce_dash_range(tokens):
        low, high = tokens[0].data, tokens[2].data
        if not _same_unit(low, high) or low.value >= high.value:
            return None
        return high.as_interval(low.value, high.value)

    def produce_at_most(tokens):
        data = tokens[1].data
        return data.as_interval(None, data.value)

    def produce_at_least(tokens):
        data = tokens[1].data
        return data.as_interval(data.value, None)

    def produce_about(tokens):
        return tokens[1].data

    rules.append(rule(
        "between|from <numeral> and|to <%s>" % label,
        regex(r"between|from"),
        predicate(is_positive, DimensionKind.NUMERAL),
        regex(r"to|and"),
        predicate(with_unit, kind),
        production=produce_number_range,
    ))
    rules.append(rule(
        "between|from <%s> and|to <%s>" % (label, label),
        regex(r"between|from"),
        predicate(with_unit, kind),
        regex(r"to|and"),
        predicate(with_unit, kind),
        production=produce_range,
    ))
    rules.append(rule(
        "<numeral> - <%s>" % label,
        predicate(is_positive, DimensionKind.NUMERAL),
        regex(r"-|~"),
        predicate(with_unit, kind),
        production=produce_dash_number_range,
    ))
    rules.append(rule(
        "<%s> - <%s>" % (label, label),
        predicate(with_unit, kind),
        regex(r"-|~"),
        predicate(with_unit, kind),
        production=produce_dash_range,
    ))
    rules.append(rule(
        "under/less than <%s>" % label,
        regex(r"under|below|at most|(less|lower|not? more) than"),
        predicate(with_unit, kind),
        production=produce_at_most,
    ))
    rules.append(rule(
        "over/more than <%s>" % label,
        regex(r"over|above|exceeding|beyond|at least|(more|larger|bigger|higher) than"),
        predicate(with_unit, kind),
        production=produce_at_least,
    ))
    rules.append(rule(
        "about <%s>" % label,
        regex(r"exactly|precisely|about|approx(\.|imately)?|close to|near( to)?|around|almost|roughly"),
        predicate(with_unit, kind),
        production=produce_about,
    ))
    return rules


# =============================================================================
# Resolution
# =============================================================================

def resolve_measurement(data: MeasurementData, context=None, options=None):
    """Single value or interval; a quantity never given a unit resolves only when latent."""
    if data.unit is None and not data.latent:
        return None
    if data.value is not None:
        return MeasurementValue(float(data.value), data.unit)
    if data.min_value is None and data.max_value is None:
        return None
    low = MeasurementValue(float(data.min_value), data.unit) if data.min_value is not None else None
    high = MeasurementValue(float(data.max_value), data.unit) if data.max_value is not None else None
    return MeasurementInterval(low, high)

