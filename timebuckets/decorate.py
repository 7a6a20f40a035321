from dataclasses import replace
from datetime import timedelta

from timebuckets.calculators import EngineIntervalCalculator
from timebuckets.interval import ResolvedInterval
from timebuckets.scaling import Scaling
from timebuckets.util import normalize_unit, unit_name


def describe(value: int, unit: str) -> str:
    """Text for "per {description}" labels: "hour", "10 days", "3 years"."""
    symbol = normalize_unit(unit)
    name = unit_name(symbol) if symbol is not None else unit
    if value == 1:
        return name
    return f"{value} {name}s"


def decorate(
    interval: timedelta | None,
    engine: EngineIntervalCalculator,
    scaling: Scaling | None = None,
) -> ResolvedInterval | None:
    """Attach engine syntax, a description and scaling tags to ``interval``."""
    if interval is None:
        return None

    native = engine.resolve(interval)
    resolved = ResolvedInterval(
        duration=interval,
        description=describe(native.value, native.unit),
        query_value=native.value,
        query_unit=native.unit,
        query_expression=native.expression,
    )
    if scaling is None or not scaling.scaled:
        return resolved
    return replace(
        resolved,
        scaled=True,
        scale=scaling.scale,
        pre_scaled=scaling.pre_scaled,
    )
