"""
Numbers written with digits or English words.

Covers "42", "1,000.5", "100K", ".5", "3/4", "forty-two", "twenty one",
"five hundred and four", "a dozen", "a couple", "minus 3", "one point two".
"""

from dataclasses import dataclass
from typing import Optional

from ..pattern import dim, predicate, regex, rule, group
from ..types import Adjacency, DimensionKind
from ..values import NumeralValue


@dataclass(frozen=True)
class NumeralData:
    """
    ``grain`` is the power of ten of a multiplier word ("hundred" is 2) and
    bounds what may be added after it. ``quantifier`` marks vague words
    ("a couple", "a few") that must not be read as clock hours.
    """
    value: float
    grain: Optional[int] = None
    multipliable: bool = False
    quantifier: bool = False

    dim = DimensionKind.NUMERAL
    latent = False


# =============================================================================
# Predicates
# =============================================================================

def is_numeral(data) -> bool:
    return isinstance(data, NumeralData)


def is_positive(data) -> bool:
    return isinstance(data, NumeralData) and data.value >= 0


def is_natural(data) -> bool:
    return isinstance(data, NumeralData) and data.value > 0 and data.value == int(data.value)


def is_integer(data) -> bool:
    return isinstance(data, NumeralData) and data.value == int(data.value)


def is_multipliable(data) -> bool:
    return isinstance(data, NumeralData) and data.multipliable


def number_between(low: float, high: float):
    """Predicate accepting integers in ``[low, high]``."""
    def accepts(data) -> bool:
        return is_integer(data) and low <= data.value <= high and not data.quantifier
    accepts.__name__ = "number_between_%d_%d" % (low, high)
    return accepts


def decimals_to_float(value: float) -> float:
    """5 -> 0.5, 25 -> 0.25."""
    multiplier = 1.0
    for _ in range(18):
        if value < multiplier:
            return value / multiplier
        multiplier *= 10
    return 0.0


# =============================================================================
# Lexicon
# =============================================================================

UNITS = {
    "zero": 0, "naught": 0, "nought": 0, "nil": 0, "none": 0, "zilch": 0,
    "one": 1, "single": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9,
}

TEENS = {
    "ten": 10, "eleven": 11, "twelve": 12, "thirteen": 13, "fourteen": 14,
    "fifteen": 15, "sixteen": 16, "seventeen": 17, "eighteen": 18,
    "nineteen": 19,
}

TENS = {
    "twenty": 20, "thirty": 30, "forty": 40, "fourty": 40, "fifty": 50,
    "sixty": 60, "seventy": 70, "eighty": 80, "ninety": 90,
}

POWERS_OF_TEN = {
    "hundred": 2, "thousand": 3, "lakh": 5, "lac": 5, "million": 6,
    "crore": 7, "billion": 9, "trillion": 12,
}

SUFFIX_MULTIPLIERS = {"k": 1e3, "m": 1e6, "g": 1e9, "b": 1e9}


def _alternation(words) -> str:
    return "|".join(sorted(words, key=len, reverse=True))


def _numeral(token) -> NumeralData:
    return token.data


# =============================================================================
# Productions
# =============================================================================

def _produce_units(tokens):
    word = group(tokens[0]).lower()
    return NumeralData(float(UNITS[word]), quantifier=word == "single")


def _produce_teens(tokens):
    return NumeralData(float(TEENS[group(tokens[0]).lower()]))


def _produce_tens(tokens):
    return NumeralData(float(TENS[group(tokens[0]).lower()]))


def _produce_few(tokens):
    return NumeralData(3.0, quantifier=True)


def _produce_couple(tokens):
    return NumeralData(2.0, quantifier=True)


def _produce_dozen(tokens):
    return NumeralData(12.0, multipliable=True, quantifier=True)


def _produce_tens_units(tokens):
    return NumeralData(_numeral(tokens[0]).value + _numeral(tokens[-1]).value)


def _produce_digits(tokens):
    return NumeralData(float(group(tokens[0])))


def _produce_decimal(tokens):
    return NumeralData(float(group(tokens[0])))


def _produce_grouped(tokens):
    return NumeralData(float(group(tokens[0]).replace(",", "")))


def _produce_fraction(tokens):
    numerator, denominator = float(group(tokens[0], 1)), float(group(tokens[0], 2))
    if denominator == 0:
        return None
    return NumeralData(numerator / denominator)


def _produce_suffixed(tokens):
    value = float(group(tokens[0], 1))
    return NumeralData(value * SUFFIX_MULTIPLIERS[group(tokens[0], 2).lower()])


def _produce_negative(tokens):
    return NumeralData(-_numeral(tokens[1]).value)


def _produce_power_of_ten(tokens):
    grain = POWERS_OF_TEN[group(tokens[0]).lower()]
    return NumeralData(float(10 ** grain), grain=grain, multipliable=True)


def _produce_a_power_of_ten(tokens):
    data = _numeral(tokens[1])
    return NumeralData(data.value, grain=data.grain)


def _produce_multiplication(tokens):
    left, right = _numeral(tokens[0]), _numeral(tokens[1])
    if right.grain is None:
        return NumeralData(left.value * right.value)
    if right.value > left.value:
        return NumeralData(left.value * right.value, grain=right.grain)
    return None


def _produce_sum(tokens):
    left, right = _numeral(tokens[0]), _numeral(tokens[-1])
    if 10 ** left.grain > right.value:
        return NumeralData(left.value + right.value)
    return None


def _produce_spelled_decimal(tokens):
    whole, decimals = _numeral(tokens[0]).value, _numeral(tokens[2]).value
    return NumeralData(whole + decimals_to_float(decimals))


def _produce_leading_point(tokens):
    return NumeralData(decimals_to_float(_numeral(tokens[1]).value))


def _produce_legal(tokens):
    if abs(_numeral(tokens[0]).value - _numeral(tokens[2]).value) < 1e-9:
        return NumeralData(_numeral(tokens[0]).value)
    return None


def _has_grain(data) -> bool:
    return is_positive(data) and data.grain is not None


def _is_addend(data) -> bool:
    return is_positive(data) and not data.multipliable


def _is_round_tens(data) -> bool:
    return is_integer(data) and 20 <= data.value <= 90 and data.value % 10 == 0 and data.grain is None


def _is_digit_word(data) -> bool:
    return is_integer(data) and 1 <= data.value <= 9 and not data.quantifier


def _has_no_grain(data) -> bool:
    return is_positive(data) and data.grain is None


# =============================================================================
# Rules
# =============================================================================

def rules(locale=None):
    rules = []

    rules.append(rule(
        "integer (0..9)",
        regex(r"(%s)" % _alternation(UNITS)),
        production=_produce_units,
    ))
    rules.append(rule(
        "integer (10..19)",
        regex(r"(%s)" % _alternation(TEENS)),
        production=_produce_teens,
    ))
    rules.append(rule(
        "integer (20..90)",
        regex(r"(%s)" % _alternation(TENS)),
        production=_produce_tens,
    ))
    rules.append(rule("a few", regex(r"(a )?few"), production=_produce_few))
    rules.append(rule("a couple", regex(r"(a\s+)?(pair|couple)s?(\s+of)?"), production=_produce_couple))
    rules.append(rule("a dozen", regex(r"(a )?dozens?( of)?"), production=_produce_dozen))

    # "forty-two"
    rules.append(rule(
        "integer (21..99) hyphenated",
        predicate(_is_round_tens, DimensionKind.NUMERAL),
        regex(r"-"),
        predicate(_is_digit_word, DimensionKind.NUMERAL),
        production=_produce_tens_units,
        adjacency=Adjacency.EXACT,
    ))
    rules.append(rule(
        "integer (21..99)",
        predicate(_is_round_tens, DimensionKind.NUMERAL),
        predicate(_is_digit_word, DimensionKind.NUMERAL),
        production=_produce_tens_units,
    ))

    # Digits
    rules.append(rule("integer (numeric)", regex(r"(\d{1,18})"), production=_produce_digits))
    rules.append(rule("decimal number", regex(r"(\d*\.\d+)"), production=_produce_decimal))
    rules.append(rule(
        "number with commas",
        regex(r"(\d{1,3}(?:,\d{3})+(?:\.\d+)?)"),
        production=_produce_grouped,
    ))
    rules.append(rule("fractional number", regex(r"(\d+)/(\d+)"), production=_produce_fraction))
    rules.append(rule(
        "number suffixes (K, M, G)",
        regex(r"(\d*\.?\d+)([kmgb])(?=[\W$€£¢]|$)"),
        production=_produce_suffixed,
    ))
    rules.append(rule(
        "negative number",
        regex(r"(-|minus|negative)\s?"),
        predicate(is_positive, DimensionKind.NUMERAL),
        production=_produce_negative,
    ))

    # Multipliers
    rules.append(rule(
        "powers of tens",
        regex(r"(%s)s?" % _alternation(POWERS_OF_TEN)),
        production=_produce_power_of_ten,
    ))
    rules.append(rule(
        "a hundred",
        regex(r"an?"),
        predicate(_has_grain, DimensionKind.NUMERAL),
        production=_produce_a_power_of_ten,
    ))
    rules.append(rule(
        "compose by multiplication",
        predicate(is_positive, DimensionKind.NUMERAL),
        predicate(is_multipliable, DimensionKind.NUMERAL),
        production=_produce_multiplication,
    ))
    rules.append(rule(
        "intersect 2 numbers",
        predicate(_has_grain, DimensionKind.NUMERAL),
        predicate(_is_addend, DimensionKind.NUMERAL),
        production=_produce_sum,
    ))
    rules.append(rule(
        "intersect 2 numbers (with and)",
        predicate(_has_grain, DimensionKind.NUMERAL),
        regex(r"and"),
        predicate(_is_addend, DimensionKind.NUMERAL),
        production=_produce_sum,
    ))

    # Spelled decimals
    rules.append(rule(
        "one point 2",
        dim(DimensionKind.NUMERAL),
        regex(r"point|dot"),
        predicate(_has_no_grain, DimensionKind.NUMERAL),
        production=_produce_spelled_decimal,
    ))
    rules.append(rule(
        "point 77",
        regex(r"point|dot"),
        predicate(_has_no_grain, DimensionKind.NUMERAL),
        production=_produce_leading_point,
    ))

    # "forty-five (45)"
    rules.append(rule(
        "<integer> (<integer>)",
        predicate(is_natural, DimensionKind.NUMERAL),
        regex(r"\("),
        predicate(is_natural, DimensionKind.NUMERAL),
        regex(r"\)"),
        production=_produce_legal,
    ))

    return rules


def resolve(data: NumeralData, context=None, options=None) -> NumeralValue:
    return NumeralValue(float(data.value))
