"""Interval calculators consumed by `TimeBuckets`.

Two contracts live here:

- `AutoIntervalCalculator` picks a round bucket interval for a span and a
  bucket count (``near``), or the round interval that keeps the count above a
  floor (``at_least``) or below a ceiling (``less_than``).
- `EngineIntervalCalculator` turns a duration into the query engine's native
  interval syntax (``value``, ``unit``, ``expression``), e.g. ``12h``.

Callers may inject their own implementations. `RoundingAutoInterval` and
`UnitReducer` are the defaults.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta

from typing_extensions import override

from timebuckets.util import (
    DAY,
    HOUR,
    MILLISECOND,
    MINUTE,
    MONTH,
    SECOND,
    UNITS,
    WEEK,
    YEAR,
    as_milliseconds,
)

logger = logging.getLogger(__name__)


class AutoIntervalCalculator(ABC):

    @abstractmethod
    def near(self, buckets: int, span: timedelta | None) -> timedelta:
        """Round interval that splits ``span`` into roughly ``buckets`` buckets."""
        pass

    @abstractmethod
    def at_least(self, buckets: int, span: timedelta) -> timedelta:
        """Largest round interval that yields at least ``buckets`` buckets."""
        pass

    @abstractmethod
    def less_than(self, buckets: int, span: timedelta) -> timedelta:
        """Smallest round interval that yields fewer than ``buckets`` buckets."""
        pass


@dataclass(frozen=True)
class EngineInterval:
    """An interval in the query engine's native syntax."""

    value: int
    unit: str
    expression: str


class EngineIntervalCalculator(ABC):

    @abstractmethod
    def resolve(self, duration: timedelta) -> EngineInterval:
        """Express ``duration`` as a native engine interval."""
        pass


# (upper bound on the per-bucket target, round interval chosen below it),
# ascending. None means unbounded.
ROUNDING_RULES: tuple[tuple[timedelta | None, timedelta], ...] = (
    (500 * MILLISECOND, 100 * MILLISECOND),
    (5 * SECOND, SECOND),
    (7500 * MILLISECOND, 5 * SECOND),
    (15 * SECOND, 10 * SECOND),
    (45 * SECOND, 30 * SECOND),
    (3 * MINUTE, MINUTE),
    (9 * MINUTE, 5 * MINUTE),
    (20 * MINUTE, 10 * MINUTE),
    (45 * MINUTE, 30 * MINUTE),
    (2 * HOUR, HOUR),
    (6 * HOUR, 3 * HOUR),
    (24 * HOUR, 12 * HOUR),
    (WEEK, DAY),
    (3 * WEEK, WEEK),
    (YEAR, MONTH),
    (None, YEAR),
)


class RoundingAutoInterval(AutoIntervalCalculator):
    """Pick intervals from a table of round durations.

    ``near`` walks the table from the largest rule down and keeps the last
    interval whose bound still exceeds the per-bucket target. ``at_least`` and
    ``less_than`` pick the round interval on the right side of the target.
    When no rule applies, a whole number of milliseconds (never below 1ms) is
    used instead.
    """

    def __init__(
        self,
        rules: tuple[tuple[timedelta | None, timedelta], ...] = ROUNDING_RULES,
        *,
        default: timedelta = HOUR,
    ):
        """
        Args:
            rules: ``(bound, interval)`` pairs, ascending
            default: Interval returned by ``near`` when there is no span
        """
        self.rules: tuple[tuple[timedelta | None, timedelta], ...] = rules
        self.default: timedelta = default

    @override
    def near(self, buckets: int, span: timedelta | None) -> timedelta:
        if span is None:
            return self.default
        target = _target(buckets, span)

        chosen: timedelta | None = None
        for bound, interval in reversed(self.rules):
            if bound is not None and bound <= target:
                if chosen is not None:
                    return chosen
                break
            chosen = interval
        return _fallback(target)

    @override
    def at_least(self, buckets: int, span: timedelta) -> timedelta:
        target = _target(buckets, span)
        for _, interval in reversed(self.rules):
            if interval <= target:
                return interval
        return _fallback(target)

    @override
    def less_than(self, buckets: int, span: timedelta) -> timedelta:
        target = _target(buckets, span)
        for _, interval in self.rules:
            if interval > target:
                return interval
        return MILLISECOND * (as_milliseconds(target) + 1)


def _target(buckets: int, span: timedelta) -> timedelta:
    if buckets <= 0:
        raise ValueError(f"Bucket count must be positive, got {buckets}")
    return span / buckets


def _fallback(target: timedelta) -> timedelta:
    return MILLISECOND * max(as_milliseconds(target), 1)


# Units the engine only accepts with a value of 1
_SINGLE_ONLY = frozenset({"y", "M"})


class UnitReducer(EngineIntervalCalculator):
    """Express a duration in the largest unit that divides it evenly.

    Calendar units (years, months) are only used for exactly one unit since
    the engine rejects multiples of them. Anything that divides evenly into no
    unit is written in whole milliseconds.
    """

    @override
    def resolve(self, duration: timedelta) -> EngineInterval:
        for unit, length in UNITS.items():
            count, rest = divmod(duration, length)
            if count < 1 or rest:
                continue
            if unit in _SINGLE_ONLY and count != 1:
                continue
            return EngineInterval(value=count, unit=unit, expression=f"{count}{unit}")

        ms = max(as_milliseconds(duration), 1)
        logger.debug("Coercing %s to %dms for the query engine", duration, ms)
        return EngineInterval(value=ms, unit="ms", expression=f"{ms}ms")
