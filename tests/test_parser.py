"""
Tests for the public entry points: ``dimparser.parse`` and ``EntityParser``.
"""

from datetime import datetime, timezone

import pytest

import dimparser
from dimparser import Context, DimensionKind, EntityParser, Locale, Options
from dimparser.conf import SettingValidationError
from dimparser.locale import Region, rules_for, with_dependencies

REFERENCE = datetime(2013, 2, 12, 4, 30, tzinfo=timezone.utc)


@pytest.fixture
def context():
    return Context(REFERENCE)


# =============================================================================
# Package layout
# =============================================================================

class TestImports:

    def test_every_kind_has_a_resolver(self):
        from dimparser.resolve import _RESOLVERS
        assert set(_RESOLVERS) == set(DimensionKind)

    def test_time_resolver_is_the_module_function(self):
        import dimparser.dimensions.time.resolve as time_resolve
        from dimparser.resolve import _RESOLVERS
        assert callable(time_resolve.resolve)
        assert _RESOLVERS[DimensionKind.TIME] is time_resolve.resolve

    def test_public_names(self):
        for name in ("parse", "EntityParser", "Context", "Options", "Entity", "DimensionKind"):
            assert hasattr(dimparser, name)


# =============================================================================
# End to end
# =============================================================================

class TestScenarios:

    def test_temperature(self):
        entity, = dimparser.parse("80 degrees fahrenheit", dims=["temperature"])
        assert (entity.start, entity.end) == (0, 21)
        assert entity.dim is DimensionKind.TEMPERATURE

    def test_numeral(self):
        entity, = dimparser.parse("forty-two", dims=[DimensionKind.NUMERAL])
        assert entity.value == dimparser.NumeralValue(42.0)

    def test_time(self, context):
        entity, = dimparser.parse("tomorrow at 3pm", dims=["time"], context=context)
        assert entity.value.point == dimparser.NaiveTimePoint(
            datetime(2013, 2, 13, 15), dimparser.Grain.HOUR
        )

    def test_instant(self, context):
        entity, = dimparser.parse("3pm CET", dims=["time"], context=context)
        assert isinstance(entity.value.point, dimparser.InstantTimePoint)
        assert entity.value.point.value == datetime(2013, 2, 12, 14, tzinfo=timezone.utc)

    def test_empty_dims(self, context):
        assert dimparser.parse("tomorrow at 3pm for $20", dims=[], context=context) == []

    def test_mixed_sentence(self, context):
        entities = dimparser.parse(
            "tomorrow at 3pm for $20", dims=["time", "amount-of-money"], context=context
        )
        assert [(e.body, e.dim) for e in entities] == [
            ("tomorrow at 3pm", DimensionKind.TIME),
            ("$20", DimensionKind.AMOUNT_OF_MONEY),
        ]

    def test_empty_text(self):
        assert dimparser.parse("") == []


class TestProperties:
    """Invariants of any result."""

    TEXTS = [
        "tomorrow at 3pm for $20",
        "meet me between 3 and 5 km from the station next friday",
        "call 650-701-8887 or mail alice@example.com about the 3rd invoice",
        "it was 80 degrees fahrenheit last summer",
    ]

    @pytest.mark.parametrize("text", TEXTS)
    def test_non_overlapping_and_ordered(self, text, context):
        entities = dimparser.parse(text, context=context)
        for first, second in zip(entities, entities[1:]):
            assert first.end <= second.start

    @pytest.mark.parametrize("text", TEXTS)
    def test_bodies_match_offsets(self, text, context):
        for entity in dimparser.parse(text, context=context):
            assert text[entity.start:entity.end] == entity.body

    @pytest.mark.parametrize("text", TEXTS)
    def test_deterministic(self, text, context):
        assert dimparser.parse(text, context=context) == dimparser.parse(text, context=context)

    @pytest.mark.parametrize("text", TEXTS)
    def test_latent_only_on_request(self, text, context):
        assert not any(e.latent for e in dimparser.parse(text, context=context))

    def test_requested_kinds_only(self, context):
        text = TestProperties.TEXTS[2]
        entities = dimparser.parse(text, dims=["email"], context=context)
        assert {e.dim for e in entities} == {DimensionKind.EMAIL}


# =============================================================================
# Argument validation
# =============================================================================

class TestErrors:

    def test_text_must_be_str(self):
        with pytest.raises(TypeError):
            dimparser.parse(b"tomorrow")

    def test_dims_must_be_a_list(self):
        with pytest.raises(TypeError):
            dimparser.parse("tomorrow", dims="time")

    def test_unknown_dimension(self):
        with pytest.raises(ValueError):
            dimparser.parse("tomorrow", dims=["weather"])

    @pytest.mark.parametrize("locale", ["fr_FR", "en_ZZ", "english"])
    def test_unknown_locale(self, locale):
        with pytest.raises(ValueError):
            EntityParser(locale=locale)

    def test_locale_must_be_str(self):
        with pytest.raises(TypeError):
            EntityParser(locale=1)

    def test_context_type(self):
        with pytest.raises(TypeError):
            dimparser.parse("tomorrow", context=REFERENCE)

    def test_options_type(self):
        with pytest.raises(TypeError):
            dimparser.parse("tomorrow", options={"with_latent": True})

    def test_unknown_context_locale(self):
        with pytest.raises(ValueError):
            Context(REFERENCE, locale="fr_FR")

    def test_naive_reference_time(self):
        with pytest.raises(ValueError):
            Context(datetime(2013, 2, 12, 4, 30))


class TestSettings:

    @pytest.mark.parametrize("settings", [
        {"UNKNOWN_SETTING": 1},
        {"ALTERNATIVES": -1},
        {"ALTERNATIVES": True},
        {"MAX_ROUNDS": 0},
        {"WITH_LATENT": "yes"},
        {"TIMEZONE": "Mars/Olympus"},
        {"RELATIVE_BASE": datetime(2013, 2, 12)},
    ])
    def test_invalid_setting(self, settings):
        with pytest.raises(SettingValidationError):
            EntityParser(settings=settings)

    def test_settings_must_be_dict(self):
        with pytest.raises(TypeError):
            EntityParser(settings=[("WITH_LATENT", True)])

    def test_relative_base_setting(self):
        settings = {"RELATIVE_BASE": REFERENCE}
        entity, = dimparser.parse("tomorrow", dims=["time"], settings=settings)
        assert entity.value.point.value == datetime(2013, 2, 13)

    def test_timezone_setting(self):
        settings = {"RELATIVE_BASE": REFERENCE, "TIMEZONE": "America/New_York"}
        entity, = dimparser.parse("tomorrow", dims=["time"], settings=settings)
        assert entity.value.point.value == datetime(2013, 2, 12)

    def test_with_latent_setting(self):
        entities = dimparser.parse("80", dims=["temperature"], settings={"WITH_LATENT": True})
        assert [e.latent for e in entities] == [True]

    def test_alternatives_setting(self):
        settings = {"RELATIVE_BASE": REFERENCE, "ALTERNATIVES": 0}
        entity, = dimparser.parse("Friday", dims=["time"], settings=settings)
        assert entity.value.alternatives == ()

    def test_parser_reuse(self, context):
        parser = EntityParser(locale="en_GB")
        first = parser.get_entities("3/4/2015", dims=["time"], context=context)
        second = parser.get_entities("3/4/2015", dims=["time"], context=context)
        assert first == second
        assert first[0].value.point.value == datetime(2015, 4, 3)


# =============================================================================
# Locales and rule tables
# =============================================================================

class TestLocale:

    @pytest.mark.parametrize("code, region", [
        ("en", None),
        ("en_US", Region.US),
        ("en-GB", Region.GB),
        ("EN_au", Region.AU),
    ])
    def test_parse(self, code, region):
        assert Locale.parse(code).region is region

    def test_day_first(self):
        assert Locale.parse("en_GB").day_first
        assert not Locale.parse("en_US").day_first

    def test_dependencies_are_loaded(self):
        kinds = with_dependencies([DimensionKind.TEMPERATURE])
        assert kinds == {DimensionKind.TEMPERATURE, DimensionKind.NUMERAL}

    def test_time_needs_its_building_blocks(self):
        kinds = with_dependencies([DimensionKind.TIME])
        assert DimensionKind.DURATION in kinds
        assert DimensionKind.TIME_GRAIN in kinds
        assert DimensionKind.ORDINAL in kinds

    def test_rule_tables_are_cached(self):
        assert rules_for("en_US", ["time"]) is rules_for("en_US", ["time"])

    def test_dimension_names(self):
        assert DimensionKind.from_name("amount-of-money") is DimensionKind.AMOUNT_OF_MONEY
        assert DimensionKind.from_name("AMOUNT_OF_MONEY") is DimensionKind.AMOUNT_OF_MONEY
        assert DimensionKind.from_name("numeral") is DimensionKind.NUMERAL


class TestOptions:

    def test_with_latent_option(self, context):
        entities = dimparser.parse(
            "80", dims=["temperature"], context=context, options=Options(with_latent=True)
        )
        assert entities[0].latent is True
