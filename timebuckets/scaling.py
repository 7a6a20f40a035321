"""Keep the bucket count of an interval within [1, max_bars]."""

import logging
from dataclasses import dataclass
from datetime import timedelta

from timebuckets.calculators import AutoIntervalCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class Scaling:
    """Outcome of `scale_interval`.

    Attributes:
        interval: The interval to use for bucketing
        scaled: True if ``interval`` replaced the requested interval
        scale: requested / interval, the factor to multiply per-bucket values
            by to express them per requested interval (None if unscaled)
        pre_scaled: The requested interval (None if unscaled)
    """

    interval: timedelta
    scaled: bool = False
    scale: float | None = None
    pre_scaled: timedelta | None = None


def scale_interval(
    interval: timedelta,
    span: timedelta | None,
    max_bars: int,
    auto: AutoIntervalCalculator,
) -> Scaling:
    """Swap ``interval`` for a round one if it yields too few or too many buckets.

    Without a span there's nothing to count, so the interval is kept. Bucket
    counts of exactly 1 or exactly ``max_bars`` are in range.
    """
    if span is None:
        return Scaling(interval=interval)

    approx_buckets = span / interval

    if approx_buckets < 1:
        candidate = auto.at_least(1, span)
    elif approx_buckets > max_bars:
        candidate = auto.less_than(max_bars, span)
    else:
        return Scaling(interval=interval)

    if candidate == interval:
        return Scaling(interval=interval)

    logger.debug(
        "Scaled interval %s to %s (%.1f buckets, max %d)",
        interval,
        candidate,
        approx_buckets,
        max_bars,
    )
    return Scaling(
        interval=candidate,
        scaled=True,
        scale=interval / candidate,
        pre_scaled=interval,
    )
