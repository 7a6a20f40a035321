from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from timebuckets.errors import InvalidBoundsError, NegativeSpanError
from timebuckets.parse import parse_instant


@dataclass(frozen=True, kw_only=True)
class TimeBounds:
    lower: datetime
    upper: datetime

    def __post_init__(self) -> None:
        if self.upper < self.lower:
            raise NegativeSpanError(
                f"Upper bound ({self.upper.isoformat()}) must be >= "
                f"lower bound ({self.lower.isoformat()}).\n"
                f"Hint: swap the bounds, e.g. set_bounds([earlier, later])"
            )

    @property
    def min(self) -> datetime:
        return self.lower

    @property
    def max(self) -> datetime:
        return self.upper

    @property
    def duration(self) -> timedelta:
        return self.upper - self.lower

    def __str__(self) -> str:
        """Human-friendly string showing range and duration."""
        return (
            f"TimeBounds({self.lower.isoformat()}→{self.upper.isoformat()}, "
            f"{self.duration})"
        )


def coerce_bounds(value: Any) -> TimeBounds:
    """Build TimeBounds from a bounds-like value.

    Accepts:
    - TimeBounds: Returned as-is
    - Mapping: ``{"min": ..., "max": ...}``
    - Sequence: ``[lower, upper]`` with exactly two time-like values

    Each end may be anything `parse_instant` understands.

    Raises:
        InvalidBoundsError: If the value doesn't yield two valid instants
        NegativeSpanError: If both ends parse but upper < lower
    """
    if isinstance(value, TimeBounds):
        return value

    if isinstance(value, Mapping):
        ends = [value.get("min"), value.get("max")]
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        ends = list(value)
    else:
        raise InvalidBoundsError(
            f"Bounds must be a {{'min': ..., 'max': ...}} mapping or a "
            f"[lower, upper] sequence.\n"
            f"Got {type(value).__name__!r}: {value!r}"
        )

    if len(ends) != 2:
        raise InvalidBoundsError(
            f"Bounds need exactly two instants, got {len(ends)}: {value!r}"
        )

    lower, upper = (parse_instant(end) for end in ends)
    return TimeBounds(lower=lower, upper=upper)
