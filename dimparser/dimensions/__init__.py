"""
Per-dimension payloads, rule tables and resolvers.

Each module exposes ``rules(locale)`` returning its rule list and
``resolve(data, context, options)`` turning one of its payloads into a
resolved value.
"""

from ..types import DimensionKind
from . import (
    amount_of_money,
    credit_card_number,
    distance,
    duration,
    email,
    numeral,
    ordinal,
    phone_number,
    temperature,
    time_grain,
    url,
    volume,
)
from .time import rules_en as time_rules

_TABLES = {
    DimensionKind.NUMERAL: numeral.rules,
    DimensionKind.ORDINAL: ordinal.rules,
    DimensionKind.TIME_GRAIN: time_grain.rules,
    DimensionKind.DURATION: duration.rules,
    DimensionKind.TEMPERATURE: temperature.rules,
    DimensionKind.DISTANCE: distance.rules,
    DimensionKind.VOLUME: volume.rules,
    DimensionKind.AMOUNT_OF_MONEY: amount_of_money.rules,
    DimensionKind.EMAIL: email.rules,
    DimensionKind.URL: url.rules,
    DimensionKind.PHONE_NUMBER: phone_number.rules,
    DimensionKind.CREDIT_CARD_NUMBER: credit_card_number.rules,
    DimensionKind.TIME: time_rules.rules,
}


def table_for(kind, locale):
    """Rules of one dimension kind for ``locale``."""
    return _TABLES[kind](locale)
