"""Turn interval requests into candidate bucket durations."""

import logging
from collections.abc import Mapping
from datetime import timedelta
from typing import Any

from timebuckets.calculators import AutoIntervalCalculator
from timebuckets.errors import InvalidIntervalError
from timebuckets.interval import AUTO, Auto, Explicit, IntervalSpec, NamedUnit
from timebuckets.parse import parse_duration
from timebuckets.util import UNITS, normalize_unit, unit_name

logger = logging.getLogger(__name__)

_SELECTION_KEYS = ("val", "value")


def parse_interval_spec(value: Any) -> IntervalSpec:
    """Convert an interval request to an `IntervalSpec`.

    Accepts:
    - IntervalSpec: Returned as-is
    - Selection object: A mapping with a "val"/"value" key, or an object with
      a ``val``/``value`` attribute, unwrapped to that value first
    - None, "" or "auto": Auto
    - Unit name: "hour", "hours", "h", "month", ... (one unit)
    - Duration string: "12h", "30m", "PT8H", "P1D"
    - timedelta: A fixed interval

    Raises:
        InvalidIntervalError: If the value isn't a positive duration
    """
    value = _unwrap_selection(value)

    if isinstance(value, (Auto, NamedUnit, Explicit)):
        return value

    if value is None:
        return AUTO

    if isinstance(value, str):
        if value.strip().lower() in ("", "auto"):
            return AUTO
        unit = normalize_unit(value.strip())
        if unit is not None:
            return NamedUnit(unit=unit_name(unit), duration=UNITS[unit])
        duration = parse_duration(value)
        if duration is None:
            raise InvalidIntervalError(
                f"Can't convert interval {value!r} to a duration.\n"
                f"Examples: 'auto', 'hour', '12h', '30m', 'PT8H', "
                f"timedelta(hours=8)"
            )
        return Explicit(duration=_positive(duration, value))

    if isinstance(value, timedelta):
        return Explicit(duration=_positive(value, value))

    raise InvalidIntervalError(
        f"Interval must be 'auto', a unit name, a duration string or a "
        f"timedelta.\n"
        f"Got {type(value).__name__!r}: {value!r}"
    )


def _unwrap_selection(value: Any) -> Any:
    if isinstance(value, Mapping):
        for key in _SELECTION_KEYS:
            if key in value:
                return value[key]
        return None
    for key in _SELECTION_KEYS:
        if hasattr(value, key):
            return getattr(value, key)
    return value


def _positive(duration: timedelta, original: Any) -> timedelta:
    if duration <= timedelta():
        raise InvalidIntervalError(
            f"Interval must be a positive duration, got {original!r}"
        )
    return duration


def resolve_interval(
    spec: IntervalSpec,
    span: timedelta | None,
    bar_target: int,
    auto: AutoIntervalCalculator,
) -> timedelta:
    """Candidate bucket duration for ``spec`` over ``span``.

    Fixed intervals come back unchanged; Auto asks ``auto.near`` for an
    interval that splits the span into about ``bar_target`` buckets.
    """
    if isinstance(spec, Auto):
        interval = auto.near(bar_target, span)
        logger.debug(
            "Auto interval for span %s with %d target bars: %s",
            span,
            bar_target,
            interval,
        )
        return interval
    return spec.duration
