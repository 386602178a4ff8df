"""
Core data model of the extraction engine.

A parse works on three kinds of objects:

- ``Rule``: an ordered pattern of items plus a production function. Items
  match raw text (``RegexItem``), any token of a dimension
  (``DimensionItem``) or tokens accepted by a predicate (``PredicateItem``).
- ``Token``: a half-open ``Range`` over the input plus an immutable payload
  produced by a rule. Raw regex matches are tokens whose payload is a
  ``RegexMatch``; they carry no dimension.
- ``DimensionKind`` / ``Grain``: the closed enumerations shared by payloads
  and resolved values.

Offsets are ``str`` indices (Unicode code points) into the exact input text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Callable, Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta


# =============================================================================
# Enums
# =============================================================================

class DimensionKind(Enum):
    """Categories of extractable values. Declaration order is the final tie-break."""
    TIME = "time"
    AMOUNT_OF_MONEY = "amount-of-money"
    TEMPERATURE = "temperature"
    DISTANCE = "distance"
    VOLUME = "volume"
    DURATION = "duration"
    EMAIL = "email"
    URL = "url"
    PHONE_NUMBER = "phone-number"
    CREDIT_CARD_NUMBER = "credit-card-number"
    ORDINAL = "ordinal"
    NUMERAL = "number"
    TIME_GRAIN = "time-grain"

    @classmethod
    def from_name(cls, name: Any) -> "DimensionKind":
        """Accept a member, its value ("amount-of-money") or its name ("AMOUNT_OF_MONEY")."""
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise TypeError("dimension must be str or DimensionKind (%r given)" % type(name))
        key = name.strip().lower()
        for kind in cls:
            if key in (kind.value, kind.name.lower(), kind.name.lower().replace("_", "-")):
                return kind
        if key == "numeral":
            return cls.NUMERAL
        raise ValueError("Unknown dimension: %r" % name)


class Grain(Enum):
    """Time units ordered from finest to coarsest."""
    SECOND = 0
    MINUTE = 1
    HOUR = 2
    DAY = 3
    WEEK = 4
    MONTH = 5
    QUARTER = 6
    YEAR = 7

    def __lt__(self, other):
        if not isinstance(other, Grain):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other):
        if not isinstance(other, Grain):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other):
        if not isinstance(other, Grain):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        if not isinstance(other, Grain):
            return NotImplemented
        return self.value >= other.value

    @property
    def label(self) -> str:
        return self.name.lower()

    def lower(self) -> "Grain":
        """The next finer grain (second stays second)."""
        return _LOWER_GRAIN[self]

    def in_seconds(self, n: int = 1) -> int:
        """Nominal length of ``n`` units (months are 30 days, years 365)."""
        return n * _GRAIN_SECONDS[self]

    def delta(self, n: int = 1):
        """Calendar-aware step of ``n`` units."""
        if self is Grain.SECOND:
            return timedelta(seconds=n)
        if self is Grain.MINUTE:
            return timedelta(minutes=n)
        if self is Grain.HOUR:
            return timedelta(hours=n)
        if self is Grain.DAY:
            return timedelta(days=n)
        if self is Grain.WEEK:
            return timedelta(weeks=n)
        if self is Grain.MONTH:
            return relativedelta(months=n)
        if self is Grain.QUARTER:
            return relativedelta(months=3 * n)
        return relativedelta(years=n)


_LOWER_GRAIN = {
    Grain.YEAR: Grain.MONTH,
    Grain.QUARTER: Grain.MONTH,
    Grain.MONTH: Grain.DAY,
    Grain.WEEK: Grain.DAY,
    Grain.DAY: Grain.HOUR,
    Grain.HOUR: Grain.MINUTE,
    Grain.MINUTE: Grain.SECOND,
    Grain.SECOND: Grain.SECOND,
}

_GRAIN_SECONDS = {
    Grain.SECOND: 1,
    Grain.MINUTE: 60,
    Grain.HOUR: 3600,
    Grain.DAY: 86400,
    Grain.WEEK: 604800,
    Grain.MONTH: 2592000,
    Grain.QUARTER: 7776000,
    Grain.YEAR: 31536000,
}


class Adjacency(Enum):
    """What may separate two consecutive pattern items."""
    WHITESPACE = "whitespace"
    EXACT = "exact"


# =============================================================================
# Spans and tokens
# =============================================================================

@dataclass(frozen=True, order=True)
class Range:
    """Half-open ``[start, end)`` interval over the input text."""
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "Range") -> bool:
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class RegexMatch:
    """Payload of a raw regex match: group 0 is the whole match."""
    groups: Tuple[Optional[str], ...]

    dim = None
    latent = False

    def group(self, index: int) -> Optional[str]:
        if index < len(self.groups):
            return self.groups[index]
        return None


@dataclass(frozen=True, eq=False)
class Token:
    """
    A span-tagged candidate interpretation.

    ``generation`` is the engine round that produced the token (-1 for raw
    regex matches, which are not stored in the stash).
    """
    range: Range
    data: Any
    rule: Optional[str] = None
    rule_index: int = -1
    specificity: int = 0
    children: Tuple["Token", ...] = ()
    generation: int = 0
    size: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "size", 1 + sum(child.size for child in self.children))

    @property
    def start(self) -> int:
        return self.range.start

    @property
    def end(self) -> int:
        return self.range.end

    @property
    def dim(self) -> Optional[DimensionKind]:
        return getattr(self.data, "dim", None)

    @property
    def latent(self) -> bool:
        return bool(getattr(self.data, "latent", False))

    @property
    def key(self) -> Tuple[int, int, Any]:
        return (self.range.start, self.range.end, self.data)

    def __repr__(self) -> str:
        return "Token(%d:%d, %r, rule=%r)" % (self.start, self.end, self.data, self.rule)


# =============================================================================
# Patterns and rules
# =============================================================================

class PatternItem:
    """Base class for rule pattern items."""

    consumes_token = True

    def accepts(self, token: Token) -> bool:
        raise NotImplementedError


class RegexItem(PatternItem):
    consumes_token = False

    def __init__(self, compiled):
        self.regex = compiled

    def accepts(self, token: Token) -> bool:
        return False

    def __repr__(self) -> str:
        return "RegexItem(%r)" % self.regex.pattern


class DimensionItem(PatternItem):
    def __init__(self, kind: DimensionKind):
        self.kind = kind

    def accepts(self, token: Token) -> bool:
        return token.dim is self.kind

    def __repr__(self) -> str:
        return "DimensionItem(%s)" % self.kind.name


class PredicateItem(PatternItem):
    def __init__(self, func: Callable[[Any], bool], kind: Optional[DimensionKind] = None, name: str = None):
        self.func = func
        self.kind = kind
        self.name = name or getattr(func, "__name__", "predicate")

    def accepts(self, token: Token) -> bool:
        if self.kind is not None and token.dim is not self.kind:
            return False
        return bool(self.func(token.data))

    def __repr__(self) -> str:
        return "PredicateItem(%s)" % self.name


Production = Callable[[Sequence[Token]], Any]


@dataclass(frozen=True)
class Rule:
    """
    A named grammar rule.

    ``production`` receives the matched children (regex items appear as
    tokens holding a ``RegexMatch``) and returns a payload, or ``None`` to
    reject the combination.
    """
    name: str
    pattern: Tuple[PatternItem, ...]
    production: Production
    adjacency: Adjacency = Adjacency.WHITESPACE

    def __post_init__(self):
        if not self.pattern:
            raise ValueError("Rule %r has an empty pattern" % self.name)
        object.__setattr__(self, "pattern", tuple(self.pattern))

    @property
    def specificity(self) -> int:
        """Number of pattern items that consume existing tokens."""
        return sum(1 for item in self.pattern if item.consumes_token)

    @property
    def is_regex_only(self) -> bool:
        return self.specificity == 0

    def __repr__(self) -> str:
        return "Rule(%r, %r)" % (self.name, list(self.pattern))
