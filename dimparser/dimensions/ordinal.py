from dataclasses import dataclass

from ..pattern import group, regex, rule
from ..types import DimensionKind
from ..values import OrdinalValue


@dataclass(frozen=True)
class OrdinalData:
    value: int

    dim = DimensionKind.ORDINAL
    latent = False


ORDINALS = {
    "first": 1, "second": 2, "third": 3, "fourth": 4, "fifth": 5,
    "sixth": 6, "seventh": 7, "eighth": 8, "ninth": 9, "tenth": 10,
    "eleventh": 11, "twelfth": 12, "thirteenth": 13, "fourteenth": 14,
    "fifteenth": 15, "sixteenth": 16, "seventeenth": 17, "eighteenth": 18,
    "nineteenth": 19,
}

TENS_ORDINALS = {
    "twentieth": 20, "thirtieth": 30, "fortieth": 40, "fourtieth": 40,
    "fiftieth": 50, "sixtieth": 60, "seventieth": 70, "eightieth": 80,
    "ninetieth": 90,
}

TENS_PREFIXES = {
    "twenty": 20, "thirty": 30, "forty": 40, "fourty": 40, "fifty": 50,
    "sixty": 60, "seventy": 70, "eighty": 80, "ninety": 90,
}

UNIT_ORDINALS = {
    "first": 1, "second": 2, "third": 3, "fourth": 4, "fifth": 5,
    "sixth": 6, "seventh": 7, "eighth": 8, "ninth": 9,
}


def _alternation(words) -> str:
    return "|".join(sorted(words, key=len, reverse=True))


def is_ordinal(data) -> bool:
    return isinstance(data, OrdinalData)


def ordinal_between(low: int, high: int):
    def accepts(data) -> bool:
        return isinstance(data, OrdinalData) and low <= data.value <= high
    accepts.__name__ = "ordinal_between_%d_%d" % (low, high)
    return accepts


def _produce_word(tokens):
    return OrdinalData(ORDINALS[group(tokens[0]).lower()])


def _produce_tens_word(tokens):
    return OrdinalData(TENS_ORDINALS[group(tokens[0]).lower()])


def _produce_composite(tokens):
    tens = TENS_PREFIXES[group(tokens[0], 1).lower()]
    return OrdinalData(tens + UNIT_ORDINALS[group(tokens[0], 2).lower()])


def _produce_numeric(tokens):
    return OrdinalData(int(group(tokens[0])))


def rules(locale=None):
    rules = []
    rules.append(rule(
        "ordinals (first..nineteenth)",
        regex(r"(%s)" % _alternation(ORDINALS)),
        production=_produce_word,
    ))
    rules.append(rule(
        "ordinals (twentieth..ninetieth)",
        regex(r"(%s)" % _alternation(TENS_ORDINALS)),
        production=_produce_tens_word,
    ))
    rules.append(rule(
        "ordinals (twenty-first..ninety-ninth)",
        regex(r"(%s)[\s-]?(%s)" % (_alternation(TENS_PREFIXES), _alternation(UNIT_ORDINALS))),
        production=_produce_composite,
    ))
    rules.append(rule(
        "ordinal (digits)",
        regex(r"0*(\d+) ?(?:st|nd|rd|th)"),
        production=_produce_numeric,
    ))
    return rules


def resolve(data: OrdinalData, context=None, options=None) -> OrdinalValue:
    return OrdinalValue(data.value)
