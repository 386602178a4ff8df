"""
Helpers for writing rule tables.

Rule tables read as lists of ``rule(...)`` calls::

    rules.append(rule(
        "<number> degrees",
        dim(DimensionKind.NUMERAL),
        regex(r"deg(?:ree)?s?\\.?|°"),
        production=_produce_degrees,
    ))
"""

from typing import Any, Callable, Optional

import regex as re

from .types import (
    Adjacency,
    DimensionItem,
    DimensionKind,
    PredicateItem,
    RegexItem,
    Rule,
)

REGEX_FLAGS = re.IGNORECASE | re.UNICODE | re.V0

# Not between two letters, not between two digits. Same test as
# Document.is_valid_range, asserted inside the pattern so "(1|12)" still
# reaches "12" when "1" would stop inside a digit run.
WORD_BOUNDARY = r"(?:(?<!\p{L})|(?!\p{L}))(?:(?<!\d)|(?!\d))"


def regex(pattern: str) -> RegexItem:
    """Raw-text matcher. Compiled eagerly so a malformed pattern fails at table build."""
    bounded = "%s(?:%s)%s" % (WORD_BOUNDARY, pattern, WORD_BOUNDARY)
    return RegexItem(re.compile(bounded, REGEX_FLAGS))


def dim(kind: DimensionKind) -> DimensionItem:
    return DimensionItem(kind)


def predicate(func: Callable[[Any], bool], kind: Optional[DimensionKind] = None, name: str = None) -> PredicateItem:
    """Token matcher; ``kind`` narrows the candidates before ``func`` runs."""
    return PredicateItem(func, kind=kind, name=name)


def rule(name: str, *items, production, adjacency: Adjacency = Adjacency.WHITESPACE) -> Rule:
    return Rule(name=name, pattern=tuple(items), production=production, adjacency=adjacency)


def group(token, index: int = 1) -> Optional[str]:
    """Capture group ``index`` of a regex child token."""
    return token.data.group(index)


def text(token) -> str:
    """Whole matched text of a regex child token."""
    return token.data.group(0)
