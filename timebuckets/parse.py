"""Parsing of time-like inputs into instants and durations.

Instants are timezone-aware ``datetime`` values. Strings are handed to
python-dateutil, which understands ISO 8601 as well as most free-form
date strings. Durations are ``timedelta`` values written either as a
shorthand expression (``"12h"``, ``"30m"``, ``"1M"``) or an ISO 8601
duration (``"PT8H"``, ``"P1DT12H"``).
"""

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from dateutil import parser as date_parser

from timebuckets.errors import InvalidBoundsError
from timebuckets.util import DAY, HOUR, MINUTE, MONTH, SECOND, UNITS, WEEK, YEAR

_SHORTHAND = re.compile(r"^\s*(\d+)\s*(ms|[yMwdhms])\s*$")

_ISO_DURATION = re.compile(
    r"^P(?!$)"
    r"(?:(?P<years>\d+)Y)?"
    r"(?:(?P<months>\d+)M)?"
    r"(?:(?P<weeks>\d+)W)?"
    r"(?:(?P<days>\d+)D)?"
    r"(?:T(?=\d)"
    r"(?:(?P<hours>\d+)H)?"
    r"(?:(?P<minutes>\d+)M)?"
    r"(?:(?P<seconds>\d+(?:\.\d+)?)S)?"
    r")?$"
)

_ISO_PARTS: dict[str, timedelta] = {
    "years": YEAR,
    "months": MONTH,
    "weeks": WEEK,
    "days": DAY,
    "hours": HOUR,
    "minutes": MINUTE,
}


def parse_instant(value: Any) -> datetime:
    """Convert a time-like value to a timezone-aware datetime.

    Accepts:
    - datetime: Naive values are taken to be UTC
    - date: Midnight UTC on that day
    - int/float: Unix timestamp in seconds
    - str: Anything python-dateutil can parse (naive results are UTC)

    Raises:
        InvalidBoundsError: If the value is missing or can't be parsed
    """
    if value is None:
        raise InvalidBoundsError("Missing time bound (got None)")
    if isinstance(value, bool):
        raise InvalidBoundsError(f"Can't use a boolean as a time bound: {value!r}")
    if isinstance(value, datetime):
        return _aware(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidBoundsError(
                f"Timestamp out of range: {value!r}"
            ) from exc
    if isinstance(value, str):
        if not value.strip():
            raise InvalidBoundsError("Empty string is not a valid time bound")
        try:
            return _aware(date_parser.isoparse(value))
        except ValueError:
            pass
        try:
            return _aware(date_parser.parse(value))
        except (ValueError, OverflowError) as exc:
            raise InvalidBoundsError(
                f"Can't parse time bound {value!r}\n"
                f"Examples: '2024-01-01T00:00:00Z', '2024-01-01', 1704067200"
            ) from exc
    raise InvalidBoundsError(
        f"Time bound must be datetime, date, int, float or str.\n"
        f"Got {type(value).__name__!r}: {value!r}"
    )


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_instant(value: datetime) -> str:
    """ISO 8601 representation in UTC, e.g. ``2024-01-01T00:00:00Z``."""
    text = value.astimezone(timezone.utc).isoformat()
    return text.replace("+00:00", "Z")


def parse_duration(text: str) -> timedelta | None:
    """Parse a shorthand or ISO 8601 duration string.

    Returns None when the string is neither form or is too large for a
    timedelta.
    """
    match = _SHORTHAND.match(text)
    if match:
        value, unit = match.groups()
        try:
            return int(value) * UNITS[unit]
        except OverflowError:
            return None

    match = _ISO_DURATION.match(text.strip().upper())
    if match:
        total = timedelta()
        try:
            for name, length in _ISO_PARTS.items():
                part = match.group(name)
                if part:
                    total += int(part) * length
            seconds = match.group("seconds")
            if seconds:
                total += float(seconds) * SECOND
        except OverflowError:
            return None
        return total

    return None


def format_duration(duration: timedelta) -> str:
    """ISO 8601 duration using days, hours, minutes and seconds.

    Fixed-length units only, so ``parse_duration`` reads it back exactly.
    """
    if duration == timedelta():
        return "PT0S"

    sign = "-" if duration < timedelta() else ""
    duration = abs(duration)
    days = duration.days
    hours, rest = divmod(duration.seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    micros = duration.microseconds

    out = f"{sign}P"
    if days:
        out += f"{days}D"
    if hours or minutes or seconds or micros:
        out += "T"
        if hours:
            out += f"{hours}H"
        if minutes:
            out += f"{minutes}M"
        if seconds or micros:
            if micros:
                frac = f"{micros:06d}".rstrip("0")
                out += f"{seconds}.{frac}S"
            else:
                out += f"{seconds}S"
    return out
