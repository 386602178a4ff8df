"""
Locale handling and rule-table binding.

A rule table is built once per (locale, requested kinds) and cached. The
table includes the rules of every kind the requested kinds are built from,
e.g. asking for temperature also loads the numeral rules.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import FrozenSet, Iterable, Optional, Tuple

import regex as re

from .types import DimensionKind, Rule


class Lang(Enum):
    EN = "en"


class Region(Enum):
    US = "US"
    GB = "GB"
    AU = "AU"
    CA = "CA"
    IN = "IN"


# Regions that write dates day first ("12/02/2013" is 12 February).
DAY_FIRST_REGIONS = frozenset({Region.GB, Region.AU, Region.IN})

RE_LOCALE = re.compile(r"^([a-z]{2,3})(?:[_-]([a-z]{2}))?$", re.I)


@dataclass(frozen=True)
class Locale:
    lang: Lang = Lang.EN
    region: Optional[Region] = Region.US

    @classmethod
    def parse(cls, locale) -> "Locale":
        """Build a locale from "en", "en_US" or "en-GB"."""
        if isinstance(locale, cls):
            return locale
        if not isinstance(locale, str):
            raise TypeError("locale must be str (%r given)" % type(locale))
        match = RE_LOCALE.match(locale.strip())
        if not match:
            raise ValueError("Unknown locale: %r" % locale)
        lang_code, region_code = match.groups()
        try:
            lang = Lang(lang_code.lower())
        except ValueError:
            raise ValueError("Unknown language: %r" % lang_code)
        if region_code is None:
            return cls(lang=lang, region=None)
        try:
            region = Region(region_code.upper())
        except ValueError:
            raise ValueError("Unknown region: %r" % region_code)
        return cls(lang=lang, region=region)

    @property
    def day_first(self) -> bool:
        return self.region in DAY_FIRST_REGIONS

    @property
    def shortname(self) -> str:
        if self.region is None:
            return self.lang.value
        return "%s_%s" % (self.lang.value, self.region.value)

    def __str__(self) -> str:
        return self.shortname


_DEPENDENCIES = {
    DimensionKind.TEMPERATURE: (DimensionKind.NUMERAL,),
    DimensionKind.DISTANCE: (DimensionKind.NUMERAL,),
    DimensionKind.VOLUME: (DimensionKind.NUMERAL,),
    DimensionKind.AMOUNT_OF_MONEY: (DimensionKind.NUMERAL,),
    DimensionKind.DURATION: (DimensionKind.NUMERAL, DimensionKind.TIME_GRAIN),
    DimensionKind.TIME: (
        DimensionKind.NUMERAL,
        DimensionKind.ORDINAL,
        DimensionKind.DURATION,
        DimensionKind.TIME_GRAIN,
    ),
}

# Building blocks first so their rules get the earlier table positions.
_TABLE_ORDER = (
    DimensionKind.NUMERAL,
    DimensionKind.ORDINAL,
    DimensionKind.TIME_GRAIN,
    DimensionKind.DURATION,
    DimensionKind.TEMPERATURE,
    DimensionKind.DISTANCE,
    DimensionKind.VOLUME,
    DimensionKind.AMOUNT_OF_MONEY,
    DimensionKind.EMAIL,
    DimensionKind.URL,
    DimensionKind.PHONE_NUMBER,
    DimensionKind.CREDIT_CARD_NUMBER,
    DimensionKind.TIME,
)


def with_dependencies(dims: Iterable[DimensionKind]) -> FrozenSet[DimensionKind]:
    closed = set()
    pending = list(dims)
    while pending:
        kind = pending.pop()
        if kind in closed:
            continue
        closed.add(kind)
        pending.extend(_DEPENDENCIES.get(kind, ()))
    return frozenset(closed)


def rules_for(locale, dims: Optional[Iterable] = None) -> Tuple[Rule, ...]:
    """
    Rule table for ``locale`` covering ``dims`` (all kinds when None) and
    everything they depend on.
    """
    locale = Locale.parse(locale)
    if dims is None:
        kinds = frozenset(DimensionKind)
    else:
        kinds = frozenset(DimensionKind.from_name(d) for d in dims)
    return _build_rules(locale, with_dependencies(kinds))


@lru_cache(maxsize=64)
def _build_rules(locale: Locale, kinds: FrozenSet[DimensionKind]) -> Tuple[Rule, ...]:
    from .dimensions import table_for

    rules = []
    for kind in _TABLE_ORDER:
        if kind in kinds:
            rules.extend(table_for(kind, locale))
    return tuple(rules)
