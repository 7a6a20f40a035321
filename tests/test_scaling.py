"""Tests for keeping bucket counts within range."""

from datetime import timedelta

import pytest

from timebuckets.calculators import AutoIntervalCalculator
from timebuckets.scaling import Scaling, scale_interval
from timebuckets.util import DAY, HOUR, MINUTE


class StubAuto(AutoIntervalCalculator):
    def __init__(self, at_least=None, less_than=None):
        self.at_least_result = at_least
        self.less_than_result = less_than
        self.calls: list[tuple[str, int, timedelta]] = []

    def near(self, buckets, span):
        raise AssertionError("near should not be called")

    def at_least(self, buckets, span):
        self.calls.append(("at_least", buckets, span))
        return self.at_least_result

    def less_than(self, buckets, span):
        self.calls.append(("less_than", buckets, span))
        return self.less_than_result


def test_no_span_skips_scaling():
    """Test that without a span the interval is kept."""
    auto = StubAuto()
    assert scale_interval(HOUR, None, 10, auto) == Scaling(interval=HOUR)
    assert auto.calls == []


def test_in_range_is_unscaled():
    """Test that a bucket count within [1, max] is kept."""
    auto = StubAuto()
    result = scale_interval(HOUR, DAY, 100, auto)
    assert result == Scaling(interval=HOUR)
    assert result.scaled is False
    assert auto.calls == []


def test_exactly_max_bars_is_unscaled():
    """Test that the upper boundary is inclusive."""
    auto = StubAuto()
    result = scale_interval(HOUR, 10 * HOUR, 10, auto)
    assert result.scaled is False
    assert auto.calls == []


def test_exactly_one_bucket_is_unscaled():
    """Test that the lower boundary is inclusive."""
    auto = StubAuto()
    result = scale_interval(HOUR, HOUR, 10, auto)
    assert result.scaled is False
    assert auto.calls == []


def test_too_many_buckets_scales_up():
    """Test that > max buckets asks less_than(max, span)."""
    span = 7 * DAY
    auto = StubAuto(less_than=12 * HOUR)
    result = scale_interval(8 * HOUR, span, 15, auto)

    assert auto.calls == [("less_than", 15, span)]
    assert result.interval == 12 * HOUR
    assert result.scaled is True
    assert result.scale == pytest.approx(8 / 12)
    assert result.pre_scaled == 8 * HOUR


def test_too_few_buckets_scales_down():
    """Test that < 1 bucket asks at_least(1, span)."""
    span = 30 * MINUTE
    auto = StubAuto(at_least=30 * MINUTE)
    result = scale_interval(HOUR, span, 100, auto)

    assert auto.calls == [("at_least", 1, span)]
    assert result.interval == 30 * MINUTE
    assert result.scaled is True
    assert result.scale == pytest.approx(2.0)
    assert result.pre_scaled == HOUR


def test_same_candidate_is_unscaled():
    """Test that a candidate equal to the interval isn't tagged as scaled."""
    auto = StubAuto(less_than=HOUR)
    result = scale_interval(HOUR, 7 * DAY, 15, auto)
    assert result == Scaling(interval=HOUR)
