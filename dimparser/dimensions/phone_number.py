import unicodedata
from dataclasses import dataclass

from ..pattern import group, regex, rule
from ..types import DimensionKind
from ..values import PhoneNumberValue


@dataclass(frozen=True)
class PhoneNumberData:
    value: str

    dim = DimensionKind.PHONE_NUMBER
    latent = False


MIN_DIGITS = 7
MAX_DIGITS = 15


def canonical_digits(text: str) -> str:
    """ASCII digits of ``text``; other scripts' decimal digits are converted."""
    return "".join(str(unicodedata.decimal(char)) for char in text if char.isdecimal())


def _produce_phone_number(tokens):
    country_code, body, extension = group(tokens[0], 1), group(tokens[0], 2), group(tokens[0], 3)
    digits = canonical_digits(body)
    if not MIN_DIGITS <= len(digits) <= MAX_DIGITS:
        return None

    value = digits
    if country_code:
        value = "(+%s) %s" % (canonical_digits(country_code), value)
    if extension:
        value = "%s ext %s" % (value, canonical_digits(extension))
    return PhoneNumberData(value)


def rules(locale=None):
    return [
        rule(
            "phone number",
            regex(
                r"(?:\(?\+(\d{1,4})\)?[\s\-\.]*)?"
                r"([\d(][\d()\s\-\.]{4,120}[\d)])"
                r"(?:\s*(?:e?xt?\.?|x)\s*(\d{1,40}))?"
            ),
            production=_produce_phone_number,
        ),
    ]


def resolve(data: PhoneNumberData, context=None, options=None) -> PhoneNumberValue:
    return PhoneNumberValue(data.value)
