from dataclasses import dataclass, replace

from ..pattern import group, predicate, regex, rule
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
class TemperatureData(MeasurementData):
    dim = DimensionKind.TEMPERATURE


DEGREE = "degree"
CELSIUS = "celsius"
FAHRENHEIT = "fahrenheit"
KELVIN = "kelvin"

_SYMBOL_UNITS = {"c": CELSIUS, "f": FAHRENHEIT, "k": KELVIN}


def _produce_symbol(tokens):
    return tokens[0].data.with_unit(_SYMBOL_UNITS[group(tokens[1]).lower()])


def _produce_below_zero(tokens):
    data = tokens[0].data
    return replace(data, value=-data.value, unit=data.unit or DEGREE, latent=False)


def rules(locale=None):
    rules = []
    rules.append(latent_number_rule(TemperatureData, "number as temp"))
    rules.append(unit_rule(
        TemperatureData, "<latent temp> degrees", r"(deg(ree?)?s?\.?)|°", DEGREE,
        accepted_units=(),
    ))
    rules.append(unit_rule(
        TemperatureData, "<temp> celsius", r"c(el[cs]?(ius)?)?\.?|centigrade", CELSIUS,
        accepted_units=(DEGREE,),
    ))
    rules.append(unit_rule(
        TemperatureData, "<temp> fahrenheit", r"f(ah?rh?eh?n(h?eit)?)?\.?", FAHRENHEIT,
        accepted_units=(DEGREE,),
    ))
    rules.append(unit_rule(
        TemperatureData, "<temp> kelvin", r"kelvins?", KELVIN,
        accepted_units=(DEGREE,),
    ))
    rules.append(rule(
        "<latent temp> °F / °C",
        predicate(value_only(TemperatureData, with_unit=False), DimensionKind.TEMPERATURE),
        regex(r"°\s*([fck])"),
        production=_produce_symbol,
    ))
    rules.append(rule(
        "<temp> below zero",
        predicate(value_only(TemperatureData), DimensionKind.TEMPERATURE),
        regex(r"below zero"),
        production=_produce_below_zero,
    ))
    rules.extend(interval_rules(TemperatureData, "temp"))
    return rules


def resolve(data: TemperatureData, context=None, options=None):
    return resolve_measurement(data, context, options)
