"""
Tests for the chart engine: document boundaries, the token stash and the
fixed-point rule application.
"""

import logging

import pytest

from dimparser.document import Document
from dimparser.dimensions.numeral import NumeralData, is_numeral
from dimparser.engine import ChartEngine, parse_string
from dimparser.pattern import dim, group, predicate, regex, rule
from dimparser.stash import Stash
from dimparser.types import Adjacency, DimensionKind, Range, Rule, Token


def _digit(tokens):
    return NumeralData(float(group(tokens[0], 0)))


def _sum(tokens):
    return NumeralData(tokens[0].data.value + tokens[2].data.value)


@pytest.fixture
def adding_rules():
    return [
        rule("digit", regex(r"\d"), production=_digit),
        rule(
            "sum",
            dim(DimensionKind.NUMERAL),
            regex(r"\+"),
            dim(DimensionKind.NUMERAL),
            production=_sum,
        ),
    ]


def _spans(stash, kind=DimensionKind.NUMERAL):
    return sorted((t.start, t.end, t.data.value) for t in stash.of_kind(kind))


# =============================================================================
# Document
# =============================================================================

class TestDocument:
    """Word boundaries and adjacency on the raw text."""

    def test_match_inside_a_digit_run_is_invalid(self):
        document = Document("13")
        assert not document.is_valid_range(1, 2)
        assert not document.is_valid_range(0, 1)
        assert document.is_valid_range(0, 2)

    def test_match_inside_a_word_is_invalid(self):
        document = Document("thirtyfive")
        assert not document.is_valid_range(0, 6)

    def test_letters_next_to_digits_are_a_boundary(self):
        document = Document("3pm")
        assert document.is_valid_range(0, 1)
        assert document.is_valid_range(1, 3)

    def test_punctuation_is_a_boundary(self):
        document = Document("$20")
        assert document.is_valid_range(0, 1)
        assert document.is_valid_range(1, 3)

    def test_empty_range_is_invalid(self):
        assert not Document("abc").is_valid_range(1, 1)

    def test_first_non_space_skips_whitespace_only(self):
        document = Document("a  b,c")
        assert document.first_non_space(1) == 3
        assert document.first_non_space(4) == 4
        assert document.first_non_space(10) == len(document)


# =============================================================================
# Stash
# =============================================================================

class TestStash:
    """Deduplication and the start/kind indexes."""

    @pytest.fixture
    def stash(self):
        stash = Stash()
        stash.add(Token(Range(4, 5), NumeralData(2.0)))
        stash.add(Token(Range(0, 1), NumeralData(1.0)))
        stash.add(Token(Range(0, 5), NumeralData(3.0)))
        return stash

    def test_equal_tokens_are_stored_once(self, stash):
        duplicate = Token(Range(0, 1), NumeralData(1.0), rule="another rule")
        assert duplicate in stash
        assert stash.add(duplicate) is False
        assert len(stash) == 3

    def test_same_span_different_payload_is_kept(self, stash):
        assert stash.add(Token(Range(0, 1), NumeralData(7.0))) is True
        assert len(stash) == 4

    def test_starting_at(self, stash):
        assert sorted(t.end for t in stash.starting_at(0)) == [1, 5]
        assert stash.starting_at(2) == []

    def test_starting_between_is_inclusive(self, stash):
        assert len(stash.starting_between(0, 4)) == 3
        assert [t.start for t in stash.starting_between(1, 4)] == [4]
        assert stash.starting_between(1, 3) == []

    def test_kind_index(self, stash):
        assert stash.kinds() == {DimensionKind.NUMERAL}
        assert len(stash.of_kind(DimensionKind.NUMERAL)) == 3
        assert stash.of_kind(DimensionKind.TIME) == []

    def test_iteration_keeps_insertion_order(self, stash):
        assert [t.data.value for t in stash] == [2.0, 1.0, 3.0]


# =============================================================================
# Tokens and rules
# =============================================================================

class TestToken:
    def test_size_counts_the_derivation(self):
        leaf = Token(Range(0, 1), NumeralData(1.0))
        other = Token(Range(4, 5), NumeralData(2.0))
        parent = Token(Range(0, 5), NumeralData(3.0), children=(leaf, other))
        assert leaf.size == 1
        assert parent.size == 3

    def test_text_without_matches_gives_empty_stash(self, adding_rules):
        stash = parse_string("x", adding_rules)
        assert len(stash) == 0

    def test_empty_pattern_is_rejected(self):
        with pytest.raises(ValueError):
            Rule(name="empty", pattern=(), production=_digit)

    def test_specificity_counts_token_items(self, adding_rules):
        digit, addition = adding_rules
        assert digit.specificity == 0
        assert digit.is_regex_only
        assert addition.specificity == 2


# =============================================================================
# Engine
# =============================================================================

class TestChartEngine:
    """Fixed-point application of a tiny addition grammar."""

    def test_regex_rules_run_first(self, adding_rules):
        stash = ChartEngine(adding_rules).parse("7")
        assert _spans(stash) == [(0, 1, 7.0)]

    def test_composition_spans_its_children(self, adding_rules):
        stash = ChartEngine(adding_rules).parse("1 + 2")
        assert (0, 5, 3.0) in _spans(stash)

    def test_reaches_fixed_point(self, adding_rules):
        stash = ChartEngine(adding_rules).parse("1 + 2 + 3")
        assert (0, 9, 6.0) in _spans(stash)
        assert (0, 5, 3.0) in _spans(stash)
        assert (4, 9, 5.0) in _spans(stash)

    def test_whitespace_adjacency_allows_no_space(self, adding_rules):
        stash = ChartEngine(adding_rules).parse("1+2")
        assert (0, 3, 3.0) in _spans(stash)

    def test_exact_adjacency_rejects_spaces(self):
        rules = [
            rule("digit", regex(r"\d"), production=_digit),
            rule(
                "sum",
                dim(DimensionKind.NUMERAL),
                regex(r"\+"),
                dim(DimensionKind.NUMERAL),
                production=_sum,
                adjacency=Adjacency.EXACT,
            ),
        ]
        assert (0, 3, 3.0) in _spans(parse_string("1+2", rules))
        assert _spans(parse_string("1 + 2", rules)) == [(0, 1, 1.0), (4, 5, 2.0)]

    def test_no_match_inside_a_digit_run(self, adding_rules):
        stash = ChartEngine(adding_rules).parse("12")
        assert len(stash) == 0

    def test_shorter_alternative_does_not_hide_longer_one(self):
        rules = [rule("one or twelve", regex(r"1|12"), production=_digit)]
        assert _spans(parse_string("12", rules)) == [(0, 2, 12.0)]
        assert _spans(parse_string("1 2", rules)) == [(0, 1, 1.0)]
        assert _spans(parse_string("123", rules)) == []

    def test_max_rounds_stops_with_a_warning(self, adding_rules, caplog):
        with caplog.at_level(logging.WARNING, logger="dimparser.engine"):
            stash = ChartEngine(adding_rules, max_rounds=1).parse("1 + 2 + 3")
        assert "stopped after 1 rounds" in caplog.text
        assert (0, 9, 6.0) not in _spans(stash)

    def test_failing_production_is_skipped(self):
        def explode(tokens):
            raise ZeroDivisionError("boom")

        rules = [
            rule("digit", regex(r"\d"), production=_digit),
            rule("broken", dim(DimensionKind.NUMERAL), production=explode),
        ]
        stash = parse_string("5", rules)
        assert _spans(stash) == [(0, 1, 5.0)]

    def test_production_returning_none_rejects(self):
        rules = [
            rule("digit", regex(r"\d"), production=_digit),
            rule(
                "small sum",
                predicate(is_numeral, DimensionKind.NUMERAL),
                regex(r"\+"),
                predicate(is_numeral, DimensionKind.NUMERAL),
                production=lambda tokens: _sum(tokens) if tokens[0].data.value < 5 else None,
            ),
        ]
        assert (0, 5, 3.0) in _spans(parse_string("1 + 2", rules))
        assert _spans(parse_string("8 + 2", rules)) == [(0, 1, 8.0), (4, 5, 2.0)]

    def test_same_input_gives_same_stash(self, adding_rules):
        first = ChartEngine(adding_rules).parse("1 + 2 + 3")
        second = ChartEngine(adding_rules).parse("1 + 2 + 3")
        assert [t.key for t in first] == [t.key for t in second]
