from dataclasses import astuple, dataclass
from datetime import timedelta
from typing import TypeAlias

from timebuckets.util import as_milliseconds


@dataclass(frozen=True)
class Auto:
    """Let the auto-interval calculator pick the interval."""

    def __str__(self) -> str:
        return "auto"


@dataclass(frozen=True)
class NamedUnit:
    """One unit of a named calendar or clock unit, e.g. ``hour``."""

    unit: str
    duration: timedelta


@dataclass(frozen=True)
class Explicit:
    """A fixed interval length."""

    duration: timedelta


IntervalSpec: TypeAlias = Auto | NamedUnit | Explicit

AUTO = Auto()


@dataclass(frozen=True, kw_only=True, eq=False)
class ResolvedInterval:
    """A bucket interval decorated for display and for the query engine.

    Behaves like its ``duration`` for arithmetic and comparisons, so it can be
    divided into a span or compared against a threshold directly. Equal to a
    timedelta of the same length; two ResolvedIntervals are equal only when
    every field matches.
    """

    duration: timedelta
    description: str
    query_value: int
    query_unit: str
    query_expression: str
    scaled: bool = False
    scale: float | None = None
    pre_scaled: timedelta | None = None

    def __post_init__(self) -> None:
        if self.duration <= timedelta():
            raise ValueError(
                f"ResolvedInterval duration must be positive, got {self.duration}"
            )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResolvedInterval):
            return astuple(self) == astuple(other)
        if isinstance(other, timedelta):
            return self.duration == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.duration)

    def total_seconds(self) -> float:
        return self.duration.total_seconds()

    @property
    def milliseconds(self) -> int:
        return as_milliseconds(self.duration)

    def __rtruediv__(self, other: timedelta) -> float:
        if isinstance(other, timedelta):
            return other / self.duration
        return NotImplemented

    def __truediv__(self, other: "timedelta | ResolvedInterval") -> float:
        if isinstance(other, ResolvedInterval):
            return self.duration / other.duration
        if isinstance(other, timedelta):
            return self.duration / other
        return NotImplemented

    def __lt__(self, other: "timedelta | ResolvedInterval") -> bool:
        value = _as_timedelta(other)
        if value is None:
            return NotImplemented
        return self.duration < value

    def __le__(self, other: "timedelta | ResolvedInterval") -> bool:
        value = _as_timedelta(other)
        if value is None:
            return NotImplemented
        return self.duration <= value

    def __gt__(self, other: "timedelta | ResolvedInterval") -> bool:
        value = _as_timedelta(other)
        if value is None:
            return NotImplemented
        return self.duration > value

    def __ge__(self, other: "timedelta | ResolvedInterval") -> bool:
        value = _as_timedelta(other)
        if value is None:
            return NotImplemented
        return self.duration >= value

    def __str__(self) -> str:
        """Human-friendly string showing the expression and description."""
        text = f"ResolvedInterval({self.query_expression}, {self.description}"
        if self.scaled:
            text += f", scaled x{self.scale:g}"
        return text + ")"


def _as_timedelta(value: object) -> timedelta | None:
    if isinstance(value, ResolvedInterval):
        return value.duration
    if isinstance(value, timedelta):
        return value
    return None
