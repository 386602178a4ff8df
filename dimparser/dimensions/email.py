from dataclasses import dataclass

import regex as re

from ..pattern import group, regex, rule
from ..types import DimensionKind
from ..values import EmailValue


@dataclass(frozen=True)
class EmailData:
    value: str

    dim = DimensionKind.EMAIL
    latent = False


RE_SPOKEN_DOT = re.compile(r"\s+dot\s+", re.I)


def _produce_email(tokens):
    return EmailData(group(tokens[0]))


def _produce_spelled_email(tokens):
    local = RE_SPOKEN_DOT.sub(".", group(tokens[0], 1))
    domain = RE_SPOKEN_DOT.sub(".", group(tokens[0], 2))
    return EmailData("%s@%s" % (local, domain))


def rules(locale=None):
    return [
        rule(
            "email",
            regex(r"([\w._+-]+@[\w_-]+(\.[\w_-]+)+)"),
            production=_produce_email,
        ),
        # "alice dot smith at example dot com"
        rule(
            "email spelled out",
            regex(
                r"([\w_+-]+(?:(?:\s+dot\s+|\.)[\w_+-]+){0,10})(?:\s+at\s+|@)"
                r"([a-z][\w_-]*(?:(?:\.|\s+dot\s+)[\w_-]+){1,10})"
            ),
            production=_produce_spelled_email,
        ),
    ]


def resolve(data: EmailData, context=None, options=None) -> EmailValue:
    return EmailValue(data.value)
