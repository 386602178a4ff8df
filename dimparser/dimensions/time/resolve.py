"""
Turn a ``TimeData`` payload into a concrete ``SingleTime`` or ``IntervalTime``.

Forms are evaluated on the wall clock of the zone the value lives in: the
explicit zone of the expression when there is one (the result is then an
instant in UTC), the context timezone otherwise (the result stays naive).
"""

import logging
from itertools import islice

from ...utils import get_timezone_from_tz_string, to_utc_instant, wall_clock
from ...values import InstantTimePoint, IntervalTime, NaiveTimePoint, SingleTime
from .data import OpenInterval, select, following

logger = logging.getLogger(__name__)


def _point_factory(zone, instant):
    def point(value, grain):
        if instant:
            return InstantTimePoint(to_utc_instant(value, zone), grain)
        return NaiveTimePoint(value, grain)
    return point


def resolve(data, context, options):
    """
    Args:
        data: the ``TimeData`` of a token.
        context: reference time, locale and context timezone.
        options: ``alternatives`` bounds the number of further occurrences.

    Returns:
        SingleTime or IntervalTime, or None when the form has no occurrence
        (February 30, an empty intersection).
    """
    instant = data.timezone is not None
    zone = get_timezone_from_tz_string(data.timezone) if instant else context.timezone
    ref = wall_clock(context.reference_time, zone)
    point = _point_factory(zone, instant)

    form = data.effective_form
    slot = select(form, None, ref)
    if slot is None:
        logger.debug("No occurrence of %r after %s", form, ref)
        return None

    if data.open_interval is OpenInterval.BEFORE:
        return IntervalTime(None, point(slot.start, slot.grain), slot.grain)
    if data.open_interval is OpenInterval.AFTER:
        return IntervalTime(point(slot.start, slot.grain), None, slot.grain)

    later = []
    if not form.anchored and options.alternatives > 0:
        later = list(islice(following(form, slot, ref), options.alternatives))

    if form.interval:
        return IntervalTime(
            point(slot.start, slot.grain),
            point(slot.end, slot.grain),
            slot.grain,
            alternatives=tuple(
                (point(s.start, s.grain), point(s.end, s.grain)) for s in later
            ),
        )
    return SingleTime(
        point(slot.start, slot.grain),
        alternatives=tuple(point(s.start, s.grain) for s in later),
    )
