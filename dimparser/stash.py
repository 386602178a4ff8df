from bisect import insort
from typing import Dict, Iterator, List, Optional, Set

from .types import DimensionKind, Token


class Stash:
    """
    Deduplicated token store for one parse: a flat list of tokens plus an
    index by start offset and one by dimension kind. Tokens are never
    removed or mutated once added.
    """

    def __init__(self):
        self._tokens: List[Token] = []
        self._keys: Set = set()
        self._by_start: Dict[int, List[int]] = {}
        self._by_kind: Dict[Optional[DimensionKind], List[int]] = {}
        self._starts: List[int] = []

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __contains__(self, token: Token) -> bool:
        return token.key in self._keys

    def add(self, token: Token) -> bool:
        """Store ``token`` unless an equal one is present; True when stored."""
        key = token.key
        if key in self._keys:
            return False
        self._keys.add(key)
        index = len(self._tokens)
        self._tokens.append(token)
        if token.start not in self._by_start:
            self._by_start[token.start] = []
            insort(self._starts, token.start)
        self._by_start[token.start].append(index)
        self._by_kind.setdefault(token.dim, []).append(index)
        return True

    def starting_at(self, position: int) -> List[Token]:
        return [self._tokens[i] for i in self._by_start.get(position, ())]

    def starting_between(self, low: int, high: int) -> List[Token]:
        """Tokens whose start lies in ``[low, high]``."""
        found = []
        for position in self._starts:
            if position < low:
                continue
            if position > high:
                break
            found.extend(self.starting_at(position))
        return found

    def of_kind(self, kind: Optional[DimensionKind]) -> List[Token]:
        return [self._tokens[i] for i in self._by_kind.get(kind, ())]

    def kinds(self) -> Set[Optional[DimensionKind]]:
        return set(self._by_kind)
