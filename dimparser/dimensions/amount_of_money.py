"""
Amounts of money: "$20", "20 dollars", "€3.50", "10 GBP", "a grand",
"$5 and 20 cents". A bare number is a latent amount with no currency.
"""

from dataclasses import dataclass

from ..pattern import predicate, regex, rule, group
from ..types import DimensionKind
from .measurement import (
    MeasurementData,
    interval_rules,
    latent_number_rule,
    prefix_unit_rule,
    resolve_measurement,
    unit_rule,
    value_only,
)
from .numeral import is_positive


@dataclass(frozen=True)
class AmountOfMoneyData(MeasurementData):
    dim = DimensionKind.AMOUNT_OF_MONEY


CENT = "cent"
ISO_CODES = ("usd", "eur", "gbp", "jpy", "inr", "aud", "cad", "chf", "cny", "krw", "hkd", "nzd", "sgd")

SYMBOLS = (
    (r"us\$", "USD"),
    (r"a\$|au\$", "AUD"),
    (r"c\$|ca\$", "CAD"),
    (r"€", "EUR"),
    (r"£", "GBP"),
    (r"¥", "JPY"),
    (r"₹|rs\.?", "INR"),
    (r"₩", "KRW"),
)

WORDS = (
    ("euros", r"euros?", "EUR"),
    ("pounds", r"(pounds?|quids?)(\s*sterling)?", "GBP"),
    ("yen", r"yens?", "JPY"),
    ("rupees", r"rupees?|rs\.?", "INR"),
    ("cents", r"cents?|pennies|penny", CENT),
)


def dollar_code(locale) -> str:
    """Currency meant by a plain "$" or "dollars" in ``locale``."""
    region = getattr(getattr(locale, "region", None), "value", None)
    return {"US": "USD", "AU": "AUD", "CA": "CAD"}.get(region, "$")


def _produce_iso(tokens):
    return tokens[0].data.with_unit(group(tokens[1], 0).upper())


def _produce_iso_prefix(tokens):
    return AmountOfMoneyData(value=tokens[1].data.value, unit=group(tokens[0], 0).upper())


def _grand_producer(currency):
    def produce(tokens):
        return AmountOfMoneyData(value=1000.0 * tokens[0].data.value, unit=currency)
    return produce


def _a_grand_producer(currency):
    def produce(tokens):
        return AmountOfMoneyData(value=1000.0, unit=currency)
    return produce


def _produce_with_cents(tokens):
    amount, cents = tokens[0].data, tokens[-1].data
    if cents.value >= 100:
        return None
    return AmountOfMoneyData(value=amount.value + cents.value / 100.0, unit=amount.unit)


def _is_cents(data) -> bool:
    return isinstance(data, AmountOfMoneyData) and data.unit == CENT and data.value is not None


def _is_whole_amount(data) -> bool:
    return (
        isinstance(data, AmountOfMoneyData)
        and data.value is not None
        and data.unit not in (None, CENT)
        and data.value == int(data.value)
    )


def rules(locale=None):
    dollar = dollar_code(locale)
    rules = [latent_number_rule(AmountOfMoneyData, "number as money")]

    rules.append(prefix_unit_rule(AmountOfMoneyData, "$<number>", r"\$", dollar))
    for pattern, code in SYMBOLS:
        rules.append(prefix_unit_rule(AmountOfMoneyData, "%s<number>" % code, pattern, code))
    rules.append(rule(
        "<iso code> <number>",
        regex(r"|".join(ISO_CODES)),
        predicate(is_positive, DimensionKind.NUMERAL),
        production=_produce_iso_prefix,
    ))

    rules.append(unit_rule(
        AmountOfMoneyData, "<number> dollars", r"dollars?|bucks?", dollar, accepted_units=(),
    ))
    for name, pattern, code in WORDS:
        rules.append(unit_rule(
            AmountOfMoneyData, "<number> %s" % name, pattern, code, accepted_units=(),
        ))
    rules.append(rule(
        "<number> <iso code>",
        predicate(value_only(AmountOfMoneyData, with_unit=False), DimensionKind.AMOUNT_OF_MONEY),
        regex(r"|".join(ISO_CODES)),
        production=_produce_iso,
    ))

    rules.append(rule(
        "<number> grand",
        predicate(is_positive, DimensionKind.NUMERAL),
        regex(r"grand|k bucks"),
        production=_grand_producer(dollar),
    ))
    rules.append(rule("a grand", regex(r"a grand"), production=_a_grand_producer(dollar)))

    rules.append(rule(
        "<amount> and <cents>",
        predicate(_is_whole_amount, DimensionKind.AMOUNT_OF_MONEY),
        regex(r"and"),
        predicate(_is_cents, DimensionKind.AMOUNT_OF_MONEY),
        production=_produce_with_cents,
    ))
    rules.append(rule(
        "<amount> <cents>",
        predicate(_is_whole_amount, DimensionKind.AMOUNT_OF_MONEY),
        predicate(_is_cents, DimensionKind.AMOUNT_OF_MONEY),
        production=_produce_with_cents,
    ))
    rules.extend(interval_rules(AmountOfMoneyData, "amount-of-money"))
    return rules


def resolve(data: AmountOfMoneyData, context=None, options=None):
    return resolve_measurement(data, context, options)
