import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Callable, Dict, Optional

from .dimensions import (
    amount_of_money,
    credit_card_number,
    distance,
    duration,
    email,
    numeral,
    ordinal,
    phone_number,
    temperature,
    time_grain,
    url,
    volume,
)
from .dimensions.time.resolve import resolve as resolve_time
from .locale import Locale
from .types import DimensionKind, Token
from .utils import get_timezone_from_tz_string
from .values import DimensionValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Context:
    """
    Everything resolution needs besides the token itself.

    Args:
        reference_time: the "now" of the parse; must be timezone aware.
        locale: overrides the parser locale for this call when given (the
            region drives numeric date order and the currency of "$").
        timezone: wall-clock zone for naive values.
    """
    reference_time: datetime
    locale: Optional[Locale] = None
    timezone: tzinfo = timezone.utc

    def __post_init__(self):
        if not isinstance(self.reference_time, datetime):
            raise TypeError(
                "reference_time must be a datetime (%r given)" % type(self.reference_time)
            )
        if self.reference_time.tzinfo is None or self.reference_time.utcoffset() is None:
            raise ValueError("reference_time must be timezone aware")
        if isinstance(self.timezone, str):
            object.__setattr__(self, "timezone", get_timezone_from_tz_string(self.timezone))
        if self.locale is not None:
            object.__setattr__(self, "locale", Locale.parse(self.locale))

    @classmethod
    def from_settings(cls, settings, locale: Optional[Locale] = None) -> "Context":
        reference_time = settings.RELATIVE_BASE or datetime.now(timezone.utc)
        return cls(
            reference_time=reference_time,
            locale=locale,
            timezone=get_timezone_from_tz_string(settings.TIMEZONE),
        )


@dataclass(frozen=True)
class Options:
    with_latent: bool = False
    alternatives: int = 3

    @classmethod
    def from_settings(cls, settings) -> "Options":
        return cls(with_latent=settings.WITH_LATENT, alternatives=settings.ALTERNATIVES)


Resolver = Callable[[object, Context, Options], Optional[DimensionValue]]

_RESOLVERS: Dict[DimensionKind, Resolver] = {
    DimensionKind.NUMERAL: numeral.resolve,
    DimensionKind.ORDINAL: ordinal.resolve,
    DimensionKind.TEMPERATURE: temperature.resolve,
    DimensionKind.DISTANCE: distance.resolve,
    DimensionKind.VOLUME: volume.resolve,
    DimensionKind.AMOUNT_OF_MONEY: amount_of_money.resolve,
    DimensionKind.DURATION: duration.resolve,
    DimensionKind.TIME_GRAIN: time_grain.resolve,
    DimensionKind.EMAIL: email.resolve,
    DimensionKind.URL: url.resolve,
    DimensionKind.PHONE_NUMBER: phone_number.resolve,
    DimensionKind.CREDIT_CARD_NUMBER: credit_card_number.resolve,
    DimensionKind.TIME: resolve_time,
}


def resolve(token: Token, context: Context, options: Options) -> Optional[DimensionValue]:
    """Concrete value of ``token``, or None when it cannot be resolved."""
    resolver = _RESOLVERS.get(token.dim)
    if resolver is None:
        return None
    try:
        value = resolver(token.data, context, options)
    except (ValueError, OverflowError) as e:
        logger.debug("Cannot resolve %r: %s", token, e)
        return None
    if value is None:
        logger.debug("Dropped unresolvable %r", token)
    return value
