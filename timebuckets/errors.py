"""Exception types raised by timebuckets."""


class TimeBucketsError(Exception):
    """Base class for every error raised by timebuckets."""


class InvalidBoundsError(TimeBucketsError, ValueError):
    """Bounds could not be parsed into two valid instants.

    `TimeBuckets.set_bounds` catches this, logs it and clears the bounds.
    """


class NegativeSpanError(TimeBucketsError, ValueError):
    """The upper bound lies before the lower bound."""


class InvalidIntervalError(TimeBucketsError, TypeError):
    """An interval spec can't be converted to a positive duration."""
