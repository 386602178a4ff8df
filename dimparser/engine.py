"""
Bottom-up chart engine.

Rules are applied to a growing stash of tokens until a round adds nothing:

1. Round 0 runs every rule made only of regex items.
2. Every later round runs the remaining rules against the tokens confirmed
   so far. A combination is only built when at least one of its children
   was added by the previous round, which yields the same fixed point as
   re-trying everything each round.
3. New tokens are buffered and merged after the round, so tokens produced
   in a round never combine with each other within that round.
"""

import logging
from typing import Dict, List, Sequence, Tuple

from .document import Document
from .stash import Stash
from .types import Adjacency, Range, RegexItem, RegexMatch, Rule, Token

logger = logging.getLogger(__name__)

REGEX_GENERATION = -1


class ChartEngine:
    """
    Runs one rule set over one document.

    Args:
        rules: the bound rule table; a rule's position is its tie-break rank.
        max_rounds: safety cap on fixed-point rounds.
    """

    def __init__(self, rules: Sequence[Rule], max_rounds: int = 64):
        self.rules = tuple(rules)
        self.max_rounds = max_rounds

    def parse(self, text: str) -> Stash:
        document = Document(text)
        stash = Stash()
        regex_cache: Dict[int, List[Token]] = {}

        for index, rule in enumerate(self.rules):
            head = rule.pattern[0]
            if isinstance(head, RegexItem):
                regex_cache[index] = self._find_all(document, head)

        fresh = self._run_round(document, stash, regex_cache, generation=0)
        rounds = 0
        while fresh:
            rounds += 1
            if rounds > self.max_rounds:
                logger.warning(
                    "Rule application stopped after %d rounds with %d tokens",
                    self.max_rounds, len(stash),
                )
                break
            fresh = self._run_round(document, stash, regex_cache, generation=rounds)

        logger.debug("Parsed %r into %d tokens in %d rounds", text, len(stash), rounds)
        return stash

    def _run_round(self, document, stash, regex_cache, generation) -> int:
        buffered: List[Token] = []
        seen = set()
        for index, rule in enumerate(self.rules):
            if generation == 0 and not rule.is_regex_only:
                continue
            if generation > 0 and rule.is_regex_only:
                continue
            for children in self._match(document, stash, rule, regex_cache.get(index, ())):
                if generation > 0 and not any(
                    child.generation == generation - 1 for child in children
                ):
                    continue
                token = self._produce(rule, index, children, generation)
                if token is None or token in stash or token.key in seen:
                    continue
                seen.add(token.key)
                buffered.append(token)

        added = 0
        for token in buffered:
            if stash.add(token):
                added += 1
        return added

    def _produce(self, rule: Rule, index: int, children: Tuple[Token, ...], generation: int):
        try:
            data = rule.production(children)
        except Exception as e:
            logger.debug("Rule %r failed on %r: %s", rule.name, children, e)
            return None
        if data is None:
            return None
        return Token(
            range=Range(children[0].start, children[-1].end),
            data=data,
            rule=rule.name,
            rule_index=index,
            specificity=rule.specificity,
            children=children,
            generation=generation,
        )

    # =========================================================================
    # Pattern matching
    # =========================================================================

    def _match(self, document, stash, rule, head_matches):
        partials: List[Tuple[Tuple[Token, ...], int]] = [((), 0)]
        for position, item in enumerate(rule.pattern):
            extended = []
            for children, end in partials:
                if position == 0:
                    candidates = self._head_candidates(stash, item, head_matches)
                else:
                    candidates = self._next_candidates(document, stash, item, end, rule.adjacency)
                for child in candidates:
                    extended.append((children + (child,), child.end))
            partials = extended
            if not partials:
                return []
        return [children for children, _ in partials]

    def _head_candidates(self, stash, item, head_matches):
        if isinstance(item, RegexItem):
            return head_matches
        return [token for token in self._kind_tokens(stash, item) if self._accepts(item, token)]

    def _next_candidates(self, document, stash, item, end, adjacency):
        if adjacency is Adjacency.EXACT:
            low = high = end
        else:
            low, high = end, document.first_non_space(end)

        if isinstance(item, RegexItem):
            found = []
            for start in sorted({low, high}):
                token = self._match_at(document, item, start)
                if token is not None:
                    found.append(token)
            return found

        return [
            token for token in stash.starting_between(low, high)
            if self._accepts(item, token)
        ]

    @staticmethod
    def _kind_tokens(stash, item):
        kind = getattr(item, "kind", None)
        if kind is not None:
            return stash.of_kind(kind)
        return [token for token in stash if token.dim is not None]

    @staticmethod
    def _accepts(item, token) -> bool:
        try:
            return item.accepts(token)
        except Exception as e:
            logger.debug("Predicate %r failed on %r: %s", item, token, e)
            return False

    @staticmethod
    def _to_token(match) -> Token:
        return Token(
            range=Range(match.start(), match.end()),
            data=RegexMatch(groups=(match.group(0),) + match.groups()),
            generation=REGEX_GENERATION,
        )

    def _find_all(self, document: Document, item: RegexItem) -> List[Token]:
        found = []
        for match in item.regex.finditer(document.text, overlapped=True):
            if document.is_valid_range(match.start(), match.end()):
                found.append(self._to_token(match))
        return found

    def _match_at(self, document: Document, item: RegexItem, start: int):
        match = item.regex.match(document.text, start)
        if match is None or not document.is_valid_range(match.start(), match.end()):
            return None
        return self._to_token(match)


def parse_string(text: str, rules: Sequence[Rule], max_rounds: int = 64) -> Stash:
    return ChartEngine(rules, max_rounds=max_rounds).parse(text)
