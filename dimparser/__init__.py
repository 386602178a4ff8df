__version__ = "0.1.0"

from .conf import apply_settings
from .locale import Locale, rules_for
from .parser import EntityParser
from .resolve import Context, Options
from .types import DimensionKind, Grain
from .values import (
    CreditCardNumberValue,
    DurationValue,
    EmailValue,
    Entity,
    GrainValue,
    InstantTimePoint,
    IntervalTime,
    MeasurementInterval,
    MeasurementValue,
    NaiveTimePoint,
    NumeralValue,
    OrdinalValue,
    PhoneNumberValue,
    SingleTime,
    UrlValue,
)

_default_parser = EntityParser()


@apply_settings
def parse(text, locale=None, dims=None, context=None, options=None, settings=None):
    """Extract dimension entities (times, numbers, measures, contacts...) from text.

    :param text:
        Free text, e.g. "tomorrow at 3pm" or "80 degrees fahrenheit".
    :type text: str

    :param locale:
        A locale code, e.g. 'en_US' (the ``DEFAULT_LOCALE`` setting when omitted).
    :type locale: str

    :param dims:
        Kinds to report ('time', 'number', 'temperature'...). None reports every
        kind, an empty list reports nothing.
    :type dims: list

    :param context:
        Reference time, locale and timezone for relative expressions.
    :type context: :class:`dimparser.resolve.Context`

    :param options:
        Latent reporting and number of alternatives.
    :type options: :class:`dimparser.resolve.Options`

    :param settings:
        Configure customized behavior using settings defined in :mod:`dimparser.conf.Settings`.
    :type settings: dict

    :return: entities ordered by start offset, pairwise non-overlapping.
    :rtype: list of :class:`dimparser.values.Entity`

    :raises:
        ``ValueError``: Unknown locale or dimension, ``TypeError``: wrong argument type,
        ``SettingValidationError``: A provided setting is not valid.

    Example usage::

        >>> import dimparser
        >>> from datetime import datetime, timezone
        >>> context = dimparser.Context(datetime(2013, 2, 12, 4, 30, tzinfo=timezone.utc))
        >>> entity, = dimparser.parse("tomorrow at 3pm", dims=["time"], context=context)
        >>> entity.value.point
        NaiveTimePoint(value=datetime.datetime(2013, 2, 13, 15, 0), grain=<Grain.HOUR: 2>)
    """
    parser = _default_parser

    if (locale is not None and Locale.parse(locale) != parser.locale) or not settings._default:
        parser = EntityParser(locale=locale, settings=settings)

    return parser.get_entities(text, dims=dims, context=context, options=options)
