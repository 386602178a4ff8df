import logging
from collections.abc import Iterable

from .conf import apply_settings, check_settings
from .engine import ChartEngine
from .locale import Locale, rules_for
from .ranking import Candidate, select
from .resolve import Context, Options, resolve
from .types import DimensionKind

logger = logging.getLogger(__name__)


def _requested_kinds(dims):
    if dims is None:
        return None
    if isinstance(dims, (str, bytes, DimensionKind)) or not isinstance(dims, Iterable):
        raise TypeError("dims argument must be a list (%r given)" % type(dims))
    return frozenset(DimensionKind.from_name(d) for d in dims)


def _hidden_by(token, unresolved):
    """
    A time reading inside a longer one that names no existing time, e.g.
    "February 29" inside "February 29 2013", is not reported either.
    """
    if token.dim is not DimensionKind.TIME:
        return False
    return any(
        span.start <= token.start and token.end <= span.end and len(span) > len(token.range)
        for span in unresolved
    )


class EntityParser:
    """
    Class which binds the rule tables of a locale and extracts dimension
    entities (times, numbers, amounts of money...) from free text.

    :param locale:
        A locale code, e.g. 'en_US', 'en-GB' or 'en'. Defaults to the
        ``DEFAULT_LOCALE`` setting. The region decides the order of numeric
        dates ("3/4/2015") and the currency of a bare "$".
    :type locale: str

    :param settings:
        Configure customized behavior using settings defined in :mod:`dimparser.conf.Settings`.
    :type settings: dict

    :return: A parser instance

    :raises:
         ``ValueError``: Unknown locale, ``TypeError``: locale argument must be str,
         ``SettingValidationError``: A provided setting is not valid.
    """

    @apply_settings
    def __init__(self, locale=None, settings=None):
        if locale is not None and not isinstance(locale, (str, Locale)):
            raise TypeError("locale argument must be str (%r given)" % type(locale))

        check_settings(settings)

        self._settings = settings
        self.locale = Locale.parse(locale if locale is not None else settings.DEFAULT_LOCALE)

    def get_entities(self, text, dims=None, context=None, options=None):
        """
        Extract every entity of the requested kinds from ``text``.

        :param text:
            Free text, e.g. "tomorrow at 3pm for $20".
        :type text: str

        :param dims:
            Kinds to report, as :class:`dimparser.types.DimensionKind` members or
            names ('time', 'number', 'amount-of-money'...). None reports every kind,
            an empty list reports nothing.
        :type dims: list

        :param context:
            Reference time, timezone and an optional locale overriding the
            parser locale for this call. Built from the ``RELATIVE_BASE`` and
            ``TIMEZONE`` settings when omitted.
        :type context: :class:`dimparser.resolve.Context`

        :param options:
            Latent reporting and number of alternatives. Built from the
            ``WITH_LATENT`` and ``ALTERNATIVES`` settings when omitted.
        :type options: :class:`dimparser.resolve.Options`

        :return: entities ordered by start offset, pairwise non-overlapping.
        :rtype: list of :class:`dimparser.values.Entity`

        :raises: ``TypeError`` for arguments of the wrong type, ``ValueError`` for
            unknown dimension names.

        Example usage::

            >>> parser = EntityParser()
            >>> [e.body for e in parser.get_entities("80 degrees fahrenheit", dims=["temperature"])]
            ['80 degrees fahrenheit']
        """
        if not isinstance(text, str):
            raise TypeError("Input type must be str")

        kinds = _requested_kinds(dims)
        if kinds is not None and not kinds:
            return []

        if context is None:
            context = Context.from_settings(self._settings, locale=self.locale)
        elif not isinstance(context, Context):
            raise TypeError("context argument must be a Context (%r given)" % type(context))

        if options is None:
            options = Options.from_settings(self._settings)
        elif not isinstance(options, Options):
            raise TypeError("options argument must be an Options (%r given)" % type(options))

        locale = context.locale or self.locale
        rules = rules_for(locale, kinds)
        stash = ChartEngine(rules, max_rounds=self._settings.MAX_ROUNDS).parse(text)

        candidates = []
        unresolved = []
        for token in stash:
            if token.dim is None or (kinds is not None and token.dim not in kinds):
                continue
            if token.latent and not options.with_latent:
                continue
            value = resolve(token, context, options)
            if value is not None:
                candidates.append(Candidate(token, value))
            elif token.dim is DimensionKind.TIME and not token.latent:
                unresolved.append(token.range)

        if unresolved:
            candidates = [c for c in candidates if not _hidden_by(c.token, unresolved)]

        entities = select(candidates, text, dims=kinds, with_latent=options.with_latent)
        logger.debug("Found %d entities in %r", len(entities), text)
        return entities
