"""Tests for ResolvedInterval."""

from datetime import timedelta

import pytest

from timebuckets.interval import AUTO, ResolvedInterval
from timebuckets.util import DAY, HOUR


def make(duration: timedelta, **kwargs) -> ResolvedInterval:
    return ResolvedInterval(
        duration=duration,
        description="x",
        query_value=1,
        query_unit="h",
        query_expression="1h",
        **kwargs,
    )


def test_divides_like_a_duration():
    """Test span / interval and interval / interval."""
    interval = make(HOUR)
    assert DAY / interval == 24
    assert interval / timedelta(minutes=30) == 2
    assert make(DAY) / interval == 24


def test_compares_like_a_duration():
    """Test ordering against timedeltas and other intervals."""
    interval = make(HOUR)
    assert interval >= HOUR
    assert interval <= HOUR
    assert interval > timedelta(minutes=59)
    assert interval < DAY
    assert make(DAY) > interval
    assert interval.total_seconds() == 3600
    assert interval.milliseconds == 3_600_000


def test_non_positive_duration_raises():
    """Test that zero and negative durations are rejected."""
    with pytest.raises(ValueError, match="must be positive"):
        make(timedelta(0))
    with pytest.raises(ValueError, match="must be positive"):
        make(-HOUR)


def test_is_immutable():
    """Test that fields can't be reassigned."""
    interval = make(HOUR)
    with pytest.raises(AttributeError):
        interval.scaled = True  # type: ignore[misc]


def test_str():
    """Test the human-friendly string form."""
    assert str(make(HOUR)) == "ResolvedInterval(1h, x)"
    scaled = make(HOUR, scaled=True, scale=0.5, pre_scaled=30 * timedelta(minutes=1))
    assert str(scaled) == "ResolvedInterval(1h, x, scaled x0.5)"
    assert str(AUTO) == "auto"


def test_equals_timedelta_of_same_length():
    """Test that equality agrees with ordering against timedeltas."""
    interval = make(HOUR)
    assert interval == HOUR
    assert HOUR == interval
    assert interval != DAY
    assert interval <= HOUR and interval >= HOUR


def test_equality_between_intervals_uses_every_field():
    """Test that decoration differences make intervals unequal."""
    assert make(HOUR) == make(HOUR)
    assert make(HOUR) != make(HOUR, scaled=True, scale=2.0, pre_scaled=2 * HOUR)
    assert make(HOUR) != "1h"


def test_hash_matches_duration():
    """Test that equal values hash alike so intervals work as dict keys."""
    assert hash(make(HOUR)) == hash(HOUR)
    assert {HOUR: "hourly"}[make(HOUR)] == "hourly"
