"""Utility constants and helpers for timebuckets.

Time unit constants represent durations as ``timedelta`` values.
Calendar units have fixed lengths so that they can be divided and compared
like every other duration: a month is 30 days and a year is 365 days.
"""

from datetime import timedelta

# Time unit constants
MILLISECOND = timedelta(milliseconds=1)
SECOND = timedelta(seconds=1)
MINUTE = timedelta(minutes=1)
HOUR = timedelta(hours=1)
DAY = timedelta(days=1)
WEEK = timedelta(weeks=1)
MONTH = timedelta(days=30)
YEAR = timedelta(days=365)

# Engine unit symbol -> unit length, largest first
UNITS: dict[str, timedelta] = {
    "y": YEAR,
    "M": MONTH,
    "w": WEEK,
    "d": DAY,
    "h": HOUR,
    "m": MINUTE,
    "s": SECOND,
    "ms": MILLISECOND,
}

# Engine unit symbol -> singular unit name
UNIT_NAMES: dict[str, str] = {
    "y": "year",
    "M": "month",
    "w": "week",
    "d": "day",
    "h": "hour",
    "m": "minute",
    "s": "second",
    "ms": "millisecond",
}

# Accepted spellings of a unit -> engine unit symbol.
# Single letters are case-sensitive ("M" is month, "m" is minute).
_ALIASES: dict[str, str] = {}
for _symbol, _name in UNIT_NAMES.items():
    _ALIASES[_symbol] = _symbol
    _ALIASES[_name] = _symbol
    _ALIASES[_name + "s"] = _symbol
_ALIASES.update({"min": "m", "mins": "m", "sec": "s", "secs": "s"})


def normalize_unit(unit: str) -> str | None:
    """Return the engine symbol for a unit spelling, or None if unknown."""
    if unit in _ALIASES:
        return _ALIASES[unit]
    lowered = unit.lower()
    if len(lowered) > 1 and lowered in _ALIASES:
        return _ALIASES[lowered]
    return None


def unit_name(unit: str) -> str:
    """Singular human-readable name for an engine unit symbol."""
    return UNIT_NAMES[unit]


def as_milliseconds(duration: timedelta) -> int:
    """Exact length of a duration in whole milliseconds (truncated)."""
    return duration // MILLISECOND
