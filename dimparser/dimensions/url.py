from dataclasses import dataclass

from ..pattern import group, regex, rule
from ..types import DimensionKind
from ..values import UrlValue


@dataclass(frozen=True)
class UrlData:
    value: str
    domain: str

    dim = DimensionKind.URL
    latent = False


def _produce_url(tokens):
    return UrlData(group(tokens[0], 1), group(tokens[0], 5).lower())


def _produce_localhost(tokens):
    return UrlData(group(tokens[0], 1), "localhost")


def _produce_local_url(tokens):
    return UrlData(group(tokens[0], 1), group(tokens[0], 3).lower())


def rules(locale=None):
    return [
        rule(
            "url",
            regex(
                r"((([a-z]+)://)?(w{2,3}[0-9]*\.)?(([a-z0-9_-]+\.)+[a-z]{2,6})(:\d+)?"
                r"(/[^?\s#]*)?(\?[^\s#]+)?(#[-,*=&a-z0-9]+)?)"
            ),
            production=_produce_url,
        ),
        rule(
            "localhost",
            regex(r"((([a-z]+)://)?localhost(:\d+)?(/[^?\s#]*)?(\?[^\s#]+)?)"),
            production=_produce_localhost,
        ),
        rule(
            "local url",
            regex(r"(([a-z]+)://([a-z0-9_-]+)(:\d+)?(/[^?\s#]*)?(\?[^\s#]+)?)"),
            production=_produce_local_url,
        ),
    ]


def resolve(data: UrlData, context=None, options=None) -> UrlValue:
    return UrlValue(data.value, data.domain)
