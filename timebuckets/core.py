import logging
from datetime import timedelta
from typing import Any, TypedDict

from timebuckets.bounds import TimeBounds, coerce_bounds
from timebuckets.calculators import (
    AutoIntervalCalculator,
    EngineIntervalCalculator,
    RoundingAutoInterval,
    UnitReducer,
)
from timebuckets.config import (
    BAR_TARGET,
    MAX_BARS,
    SCALED_DATE_FORMAT,
    ConfigStore,
    MemoryConfig,
)
from timebuckets.decorate import decorate
from timebuckets.errors import InvalidBoundsError
from timebuckets.interval import AUTO, Auto, IntervalSpec, ResolvedInterval
from timebuckets.parse import format_duration, format_instant, parse_duration
from timebuckets.scaling import scale_interval
from timebuckets.selector import parse_interval_spec, resolve_interval

logger = logging.getLogger(__name__)


class SerializableState(TypedDict, total=False):
    lb: str
    ub: str
    i: str


class TimeBuckets:
    """Choose a bucket interval for a time range.

    Holds optional bounds and an interval request ("auto" by default).
    `get_interval` turns them into a `ResolvedInterval` that splits the range
    into between 1 and ``histogram:maxBars`` buckets, decorated with the
    query engine's interval syntax and a description for labels.

    Example:
        >>> buckets = TimeBuckets()
        >>> buckets.set_bounds(["2024-01-01T00:00:00Z", "2024-01-08T00:00:00Z"])
        True
        >>> buckets.get_interval().query_expression
        '3h'
    """

    def __init__(
        self,
        state: SerializableState | None = None,
        *,
        config: ConfigStore | None = None,
        auto: AutoIntervalCalculator | None = None,
        engine: EngineIntervalCalculator | None = None,
    ):
        self.config: ConfigStore = config if config is not None else MemoryConfig()
        self.auto: AutoIntervalCalculator = (
            auto if auto is not None else RoundingAutoInterval()
        )
        self.engine: EngineIntervalCalculator = (
            engine if engine is not None else UnitReducer()
        )
        self._bounds: TimeBounds | None = None
        self._interval: IntervalSpec = AUTO
        if state:
            self._set_state(state)

    @classmethod
    def from_state(cls, state: SerializableState, **kwargs: Any) -> "TimeBuckets":
        """Rebuild from `serialize` output; keyword arguments go to `__init__`."""
        return cls(state, **kwargs)

    # Bounds

    def set_bounds(self, bounds: Any) -> bool:
        """Set the time range to bucket.

        Accepts a ``{"min": ..., "max": ...}`` mapping, a ``[lower, upper]``
        sequence, a `TimeBounds`, or None to clear. Each end may be a datetime,
        date, Unix timestamp in seconds, or a date string.

        Returns:
            True if the bounds were stored. False if they couldn't be parsed;
            the bounds are cleared and a warning is logged.

        Raises:
            NegativeSpanError: If upper < lower (existing bounds are kept)
        """
        if bounds is None:
            self.clear_bounds()
            return False

        try:
            parsed = coerce_bounds(bounds)
        except InvalidBoundsError as exc:
            logger.warning("Invalid bounds set, clearing bounds: %s", exc)
            self.clear_bounds()
            return False

        self._bounds = parsed
        return True

    def clear_bounds(self) -> None:
        self._bounds = None

    def has_bounds(self) -> bool:
        return self._bounds is not None

    def get_bounds(self) -> TimeBounds | None:
        return self._bounds

    def get_duration(self) -> timedelta | None:
        if self._bounds is None:
            return None
        return self._bounds.duration

    # Interval

    def set_interval(self, interval: Any) -> None:
        """Set the requested interval.

        Accepts "auto" (or None/""), a unit name such as "hour", a duration
        string such as "12h" or "PT8H", a timedelta, or a selection object
        whose ``val``/``value`` holds one of those.

        Raises:
            InvalidIntervalError: If the value isn't a positive duration
                (the previous interval is kept)
        """
        self._interval = parse_interval_spec(interval)

    def get_interval_spec(self) -> IntervalSpec:
        return self._interval

    def get_interval(self) -> ResolvedInterval:
        """Resolve, scale and decorate the bucket interval.

        Settings are read from the config store on every call.
        """
        span = self.get_duration()
        candidate = resolve_interval(
            self._interval, span, self.config.get(BAR_TARGET), self.auto
        )
        scaling = scale_interval(
            candidate, span, self.config.get(MAX_BARS), self.auto
        )
        resolved = decorate(scaling.interval, self.engine, scaling)
        assert resolved is not None
        return resolved

    def get_scaled_date_format(self) -> str | None:
        """Date format suited to labelling buckets of the current interval.

        Scans the ``dateFormat:scaled`` rules from the largest threshold down
        and returns the format of the first rule with no threshold or a
        threshold no larger than the interval.
        """
        interval = self.get_interval()
        rules = self.config.get(SCALED_DATE_FORMAT)

        for threshold, date_format in reversed(list(rules)):
            if not threshold or interval >= _threshold(threshold):
                return date_format
        return None

    # State

    def serialize(self) -> SerializableState:
        """Plain-data copy of the bounds and interval, safe to store as JSON."""
        state: SerializableState = {}
        if self._bounds is not None:
            state["lb"] = format_instant(self._bounds.lower)
            state["ub"] = format_instant(self._bounds.upper)
        if isinstance(self._interval, Auto):
            state["i"] = "auto"
        else:
            state["i"] = format_duration(self._interval.duration)
        return state

    def to_json(self) -> SerializableState:
        return self.serialize()

    def _set_state(self, state: SerializableState) -> None:
        if "lb" in state or "ub" in state:
            self.set_bounds([state.get("lb"), state.get("ub")])
        self.set_interval(state.get("i"))

    def __repr__(self) -> str:
        return f"TimeBuckets(bounds={self._bounds}, interval={self._interval})"


def _threshold(value: timedelta | str) -> timedelta:
    if isinstance(value, timedelta):
        return value
    duration = parse_duration(value)
    if duration is None:
        raise ValueError(
            f"Invalid threshold in {SCALED_DATE_FORMAT!r}: {value!r}\n"
            f"Examples: 'PT1H', 'P1D', '30m', timedelta(hours=1)"
        )
    return duration
