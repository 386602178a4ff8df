import pytest

from dimparser.dimensions.numeral import NumeralData
from dimparser.dimensions.temperature import TemperatureData
from dimparser.ranking import Candidate, select
from dimparser.types import DimensionKind, Range, Token
from dimparser.values import MeasurementValue, NumeralValue

TEXT = "abcdefghijklmnopqrstuvwxyz"


def numeral(start, end, value=1.0, specificity=0, rule_index=0, children=()):
    token = Token(
        Range(start, end),
        NumeralData(value),
        rule_index=rule_index,
        specificity=specificity,
        children=children,
    )
    return Candidate(token, NumeralValue(value))


def latent_temperature(start, end, value=1.0, specificity=0):
    token = Token(Range(start, end), TemperatureData(value=value, latent=True), specificity=specificity)
    return Candidate(token, MeasurementValue(value, None))


def spans(entities):
    return [(e.start, e.end) for e in entities]


class TestSelection:

    def test_longest_span_wins(self):
        entities = select([numeral(0, 3), numeral(2, 8), numeral(7, 9)], TEXT)
        assert spans(entities) == [(2, 8)]

    def test_non_overlapping_candidates_are_all_kept(self):
        entities = select([numeral(5, 7), numeral(0, 3), numeral(3, 5)], TEXT)
        assert spans(entities) == [(0, 3), (3, 5), (5, 7)]

    def test_earlier_start_wins_equal_lengths(self):
        entities = select([numeral(1, 4), numeral(0, 3)], TEXT)
        assert spans(entities) == [(0, 3)]

    def test_specificity_breaks_span_ties(self):
        entities = select(
            [numeral(0, 3, value=1.0, specificity=1), numeral(0, 3, value=2.0, specificity=2)],
            TEXT,
        )
        assert [e.value for e in entities] == [NumeralValue(2.0)]

    def test_derivation_size_breaks_specificity_ties(self):
        leaf = Token(Range(0, 1), NumeralData(1.0))
        deep = numeral(0, 3, value=5.0, children=(leaf, leaf))
        shallow = numeral(0, 3, value=6.0)
        entities = select([shallow, deep], TEXT)
        assert [e.value for e in entities] == [NumeralValue(5.0)]

    def test_rule_order_breaks_remaining_ties(self):
        entities = select(
            [numeral(0, 3, value=1.0, rule_index=4), numeral(0, 3, value=2.0, rule_index=2)],
            TEXT,
        )
        assert [e.value for e in entities] == [NumeralValue(2.0)]

    def test_selection_is_order_independent(self):
        candidates = [numeral(0, 3, value=1.0), numeral(0, 3, value=2.0), numeral(3, 6)]
        forward = select(candidates, TEXT)
        backward = select(list(reversed(candidates)), TEXT)
        assert forward == backward

    def test_entity_body_and_kind(self):
        entity, = select([numeral(2, 5, value=9.0)], TEXT)
        assert entity.body == "cde"
        assert entity.dim is DimensionKind.NUMERAL
        assert entity.latent is False


class TestKindFilter:

    def test_empty_kinds_select_nothing(self):
        assert select([numeral(0, 3)], TEXT, dims=set()) == []

    def test_unrequested_kinds_are_dropped(self):
        entities = select([numeral(0, 3)], TEXT, dims={DimensionKind.TIME})
        assert entities == []

    def test_requested_kind_is_kept(self):
        entities = select([numeral(0, 3)], TEXT, dims={DimensionKind.NUMERAL})
        assert spans(entities) == [(0, 3)]


class TestLatent:

    def test_latent_dropped_by_default(self):
        assert select([latent_temperature(0, 3)], TEXT) == []

    def test_latent_kept_when_requested(self):
        entity, = select([latent_temperature(0, 3)], TEXT, with_latent=True)
        assert entity.latent is True
        assert entity.dim is DimensionKind.TEMPERATURE

    def test_latent_never_displaces_a_solid_reading(self):
        entities = select(
            [latent_temperature(0, 6, specificity=1), numeral(0, 3, specificity=1)],
            TEXT,
            with_latent=True,
        )
        assert spans(entities) == [(0, 3)]
        assert entities[0].latent is False

    def test_latent_fills_free_space(self):
        entities = select(
            [latent_temperature(4, 6), numeral(0, 3)],
            TEXT,
            with_latent=True,
        )
        assert spans(entities) == [(0, 3), (4, 6)]
        assert [e.latent for e in entities] == [False, True]


@pytest.mark.parametrize("candidates", [
    [numeral(0, 2), numeral(1, 3), numeral(2, 4), numeral(3, 5)],
    [numeral(0, 10), numeral(2, 4), numeral(9, 12)],
])
def test_result_is_ordered_and_non_overlapping(candidates):
    entities = select(candidates, TEXT)
    for first, second in zip(entities, entities[1:]):
        assert first.end <= second.start
