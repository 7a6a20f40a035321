"""Tests for MemoryConfig."""

import pytest

from timebuckets.config import (
    BAR_TARGET,
    DEFAULT_SCALED_DATE_FORMAT,
    MAX_BARS,
    SCALED_DATE_FORMAT,
    MemoryConfig,
)


def test_defaults():
    """Test that a new store holds the default settings."""
    config = MemoryConfig()
    assert config.get(BAR_TARGET) == 50
    assert config.get(MAX_BARS) == 100
    assert config.get(SCALED_DATE_FORMAT) == DEFAULT_SCALED_DATE_FORMAT


def test_constructor_overrides():
    """Test full-name and shorthand overrides."""
    config = MemoryConfig({BAR_TARGET: 20}, max_bars=15)
    assert config.get(BAR_TARGET) == 20
    assert config.get(MAX_BARS) == 15


def test_set_updates_value():
    """Test that set() changes what get() returns."""
    config = MemoryConfig()
    config.set(MAX_BARS, 10)
    assert config.get(MAX_BARS) == 10


def test_unknown_keys_raise():
    """Test that unknown settings are rejected on read and write."""
    config = MemoryConfig()
    with pytest.raises(KeyError, match="Unknown setting"):
        config.get("histogram:minBars")
    with pytest.raises(KeyError, match="Unknown setting"):
        config.set("histogram:minBars", 1)
    with pytest.raises(KeyError):
        MemoryConfig(min_bars=1)


def test_stores_are_independent():
    """Test that changing one store leaves others alone."""
    first = MemoryConfig()
    second = MemoryConfig()
    first.set(BAR_TARGET, 5)
    assert second.get(BAR_TARGET) == 50
