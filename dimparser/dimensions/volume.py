from dataclasses import dataclass

from ..pattern import group, predicate, regex, rule
from ..types import DimensionKind
from .measurement import (
    MeasurementData,
    interval_rules,
    latent_number_rule,
    resolve_measurement,
)
from .numeral import is_positive


@dataclass(frozen=True)
class VolumeData(MeasurementData):
    dim = DimensionKind.VOLUME


UNIT_PATTERNS = (
    ("ml", r"m(ls?|illilit(er|re)s?)", "millilitre"),
    ("hectoliters", r"hectolit(er|re)s?", "hectolitre"),
    ("liters", r"l(it(er|re)s?)?", "litre"),
    ("gallon", r"gal((l?ons?)|s)?", "gallon"),
    ("cups", r"cups?", "cup"),
    ("pints", r"pints?", "pint"),
    ("quarts", r"quarts?", "quart"),
    ("tablespoons", r"tbsps?|tablespoons?", "tablespoon"),
    ("teaspoons", r"tsps?|teaspoons?", "teaspoon"),
)

FRACTIONS = {
    "half": 1 / 2,
    "third": 1 / 3,
    "quarter": 1 / 4,
    "fourth": 1 / 4,
    "fifth": 1 / 5,
    "tenth": 1 / 10,
}


def is_unit_only(data) -> bool:
    return (
        isinstance(data, VolumeData)
        and data.value is None
        and data.unit is not None
        and data.min_value is None
        and data.max_value is None
    )


def _unit_producer(unit):
    def produce(tokens):
        return VolumeData(unit=unit, latent=True)
    return produce


def _produce_number_unit(tokens):
    return VolumeData(value=tokens[0].data.value, unit=tokens[1].data.unit)


def _produce_one_unit(tokens):
    return VolumeData(value=1.0, unit=tokens[1].data.unit)


def _produce_fraction_unit(tokens):
    fraction = FRACTIONS[group(tokens[0]).lower()]
    return VolumeData(value=fraction, unit=tokens[1].data.unit)


def rules(locale=None):
    rules = [latent_number_rule(VolumeData, "number as volume")]
    for name, pattern, unit in UNIT_PATTERNS:
        rules.append(rule("<vol> %s" % name, regex(pattern), production=_unit_producer(unit)))

    unit_only = predicate(is_unit_only, DimensionKind.VOLUME)
    rules.append(rule(
        "<number> <volume>",
        predicate(is_positive, DimensionKind.NUMERAL),
        unit_only,
        production=_produce_number_unit,
    ))
    rules.append(rule("one <volume>", regex(r"an?"), unit_only, production=_produce_one_unit))
    rules.append(rule(
        "<fraction> <volume>",
        regex(r"(%s)(?:-|(?:(?: of)?(?: an?)?))" % "|".join(FRACTIONS)),
        unit_only,
        production=_produce_fraction_unit,
    ))
    rules.extend(interval_rules(VolumeData, "volume"))
    return rules


def resolve(data: VolumeData, context=None, options=None):
    if data.value is None and data.min_value is None and data.max_value is None:
        return None
    return resolve_measurement(data, context, options)
