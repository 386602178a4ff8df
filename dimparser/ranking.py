"""
Selection of a non-overlapping entity set from resolved candidates.

Candidates are ordered by, in turn: longer span, earlier start, higher
rule specificity, larger derivation, earlier rule in the table, dimension
kind declaration order and finally the value's repr. A greedy walk then
keeps every candidate that overlaps nothing already kept. Latent candidates
(only when requested) are walked afterwards and must also stay clear of any
non-latent candidate at least as specific.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from .types import DimensionKind, Token
from .values import DimensionValue, Entity

logger = logging.getLogger(__name__)

_KIND_ORDER = {kind: position for position, kind in enumerate(DimensionKind)}


@dataclass(frozen=True)
class Candidate:
    token: Token
    value: DimensionValue

    @property
    def latent(self) -> bool:
        return self.token.latent

    def sort_key(self):
        token = self.token
        return (
            -(token.end - token.start),
            token.start,
            -token.specificity,
            -token.size,
            token.rule_index,
            _KIND_ORDER.get(token.dim, len(_KIND_ORDER)),
            repr(self.value),
        )


def select(
    candidates: Iterable[Candidate],
    text: str,
    dims: Optional[Set[DimensionKind]] = None,
    with_latent: bool = False,
) -> List[Entity]:
    """
    Pick the final entities.

    Args:
        candidates: resolved tokens, in any order.
        text: the parsed text, used for entity bodies.
        dims: requested kinds; None means every kind, an empty set means none.
        with_latent: keep latent candidates that survive the second walk.

    Returns:
        Entities ordered by start offset, pairwise non-overlapping.
    """
    if dims is not None and not dims:
        return []

    wanted = [c for c in candidates if dims is None or c.token.dim in dims]
    wanted.sort(key=Candidate.sort_key)

    solid = [c for c in wanted if not c.latent]
    accepted: List[Candidate] = []
    for candidate in solid:
        if _overlaps_any(candidate, accepted):
            continue
        accepted.append(candidate)

    if with_latent:
        for candidate in (c for c in wanted if c.latent):
            if _overlaps_any(candidate, accepted):
                continue
            if any(
                other.token.specificity >= candidate.token.specificity
                and other.token.range.overlaps(candidate.token.range)
                for other in solid
            ):
                logger.debug("Latent %r shadowed by a stronger reading", candidate.token)
                continue
            accepted.append(candidate)

    accepted.sort(key=lambda c: (c.token.start, c.token.end))
    return [_to_entity(c, text) for c in accepted]


def _overlaps_any(candidate: Candidate, accepted: List[Candidate]) -> bool:
    span = candidate.token.range
    return any(span.overlaps(other.token.range) for other in accepted)


def _to_entity(candidate: Candidate, text: str) -> Entity:
    token = candidate.token
    return Entity(
        body=text[token.start:token.end],
        start=token.start,
        end=token.end,
        dim=token.dim,
        latent=token.latent,
        value=candidate.value,
    )
