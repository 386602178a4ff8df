from dataclasses import dataclass
from typing import Optional

from ..pattern import group, regex, rule
from ..types import DimensionKind
from ..values import CreditCardNumberValue


@dataclass(frozen=True)
class CreditCardNumberData:
    value: str
    issuer: str

    dim = DimensionKind.CREDIT_CARD_NUMBER
    latent = False


MIN_DIGITS = 13

ISSUER_PATTERNS = (
    ("visa credit card number", r"(4[0-9]{15}|4[0-9]{3}-[0-9]{4}-[0-9]{4}-[0-9]{4})", "visa"),
    ("amex card number", r"(3[47][0-9]{13}|3[47][0-9]{2}-[0-9]{6}-[0-9]{5})", "amex"),
    (
        "discover card number",
        r"(6(?:011|[45][0-9]{2})[0-9]{12}|6(?:011|[45][0-9]{2})-[0-9]{4}-[0-9]{4}-[0-9]{4})",
        "discover",
    ),
    (
        "mastercard card number",
        r"(5[1-5][0-9]{14}|5[1-5][0-9]{2}-[0-9]{4}-[0-9]{4}-[0-9]{4})",
        "mastercard",
    ),
    (
        "diner club card number",
        r"(3(?:0[0-5]|[68][0-9])[0-9]{11}|3(?:0[0-5]|[68][0-9])[0-9]-[0-9]{6}-[0-9]{4})",
        "dinerclub",
    ),
)


def luhn_check(digits: str) -> bool:
    if len(digits) < MIN_DIGITS or not digits.isdigit():
        return False
    total = 0
    for position, char in enumerate(reversed(digits)):
        value = int(char)
        if position % 2:
            value *= 2
            if value > 9:
                value -= 9
        total += value
    return total % 10 == 0


def detect_issuer(digits: str) -> Optional[str]:
    if len(digits) < MIN_DIGITS:
        return None
    if digits.startswith("4"):
        return "visa"
    if digits[:2] in ("51", "52", "53", "54", "55"):
        return "mastercard"
    if digits[:2] in ("34", "37"):
        return "amex"
    if digits.startswith("6011") or digits[:2] in ("64", "65"):
        return "discover"
    if digits[:2] in ("30", "36", "38"):
        return "dinerclub"
    return None


def _issuer_producer(issuer):
    def produce(tokens):
        digits = group(tokens[0]).replace("-", "")
        if not luhn_check(digits):
            return None
        return CreditCardNumberData(digits, issuer)
    return produce


def _produce_other(tokens):
    digits = group(tokens[0])
    if not luhn_check(digits):
        return None
    return CreditCardNumberData(digits, detect_issuer(digits) or "other")


def rules(locale=None):
    rules = [
        rule(name, regex(pattern), production=_issuer_producer(issuer))
        for name, pattern, issuer in ISSUER_PATTERNS
    ]
    rules.append(rule("credit card number", regex(r"(\d{8,19})"), production=_produce_other))
    return rules


def resolve(data: CreditCardNumberData, context=None, options=None) -> CreditCardNumberValue:
    return CreditCardNumberValue(data.value, data.issuer)
