from dataclasses import dataclass

from ..pattern import regex, rule
from ..types import DimensionKind, Grain
from ..values import GrainValue


@dataclass(frozen=True)
class GrainData:
    grain: Grain

    dim = DimensionKind.TIME_GRAIN
    latent = False


GRAIN_PATTERNS = (
    (Grain.SECOND, r"sec(ond)?s?"),
    (Grain.MINUTE, r"min(ute)?s?"),
    (Grain.HOUR, r"h(((ou)?rs?)|r)?"),
    (Grain.DAY, r"days?"),
    (Grain.WEEK, r"weeks?"),
    (Grain.MONTH, r"months?"),
    (Grain.QUARTER, r"(quarter|qtr)s?"),
    (Grain.YEAR, r"y(ea)?rs?"),
)


def is_grain(data) -> bool:
    return isinstance(data, GrainData)


def _producer(grain):
    def produce(tokens):
        return GrainData(grain)
    return produce


def rules(locale=None):
    return [
        rule("%s (grain)" % grain.label, regex(pattern), production=_producer(grain))
        for grain, pattern in GRAIN_PATTERNS
    ]


def resolve(data: GrainData, context=None, options=None) -> GrainValue:
    return GrainValue(data.grain)
