"""Configuration consumed by `TimeBuckets`.

Settings are read through a `ConfigStore` every time an interval is
resolved, so changes made to the store take effect on the next call.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from datetime import timedelta
from typing import Any

from typing_extensions import override

BAR_TARGET = "histogram:barTarget"
MAX_BARS = "histogram:maxBars"
SCALED_DATE_FORMAT = "dateFormat:scaled"

# (threshold, strftime format), ascending; None matches any interval
ScaledFormatRules = Sequence[tuple[timedelta | str | None, str]]

DEFAULT_SCALED_DATE_FORMAT: ScaledFormatRules = (
    (None, "%H:%M:%S.%f"),
    ("PT1S", "%H:%M:%S"),
    ("PT1M", "%H:%M"),
    ("PT1H", "%Y-%m-%d %H:%M"),
    ("P1D", "%Y-%m-%d"),
    ("P1Y", "%Y"),
)

DEFAULTS: dict[str, Any] = {
    BAR_TARGET: 50,
    MAX_BARS: 100,
    SCALED_DATE_FORMAT: DEFAULT_SCALED_DATE_FORMAT,
}


class ConfigStore(ABC):

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the current value for ``key``.

        Raises:
            KeyError: If the key has no value
        """
        pass


class MemoryConfig(ConfigStore):
    """Dict-backed configuration pre-populated with the default settings."""

    def __init__(self, values: Mapping[str, Any] | None = None, **overrides: Any):
        """
        Args:
            values: Settings keyed by their full name, e.g. ``"histogram:maxBars"``
            **overrides: Shorthand for the histogram settings
                (``bar_target``, ``max_bars``) and ``scaled_date_format``
        """
        self._values: dict[str, Any] = dict(DEFAULTS)
        for key, value in (values or {}).items():
            self.set(key, value)
        for name, value in overrides.items():
            self.set(_SHORTHAND.get(name, name), value)

    @override
    def get(self, key: str) -> Any:
        if key not in self._values:
            known = ", ".join(sorted(self._values))
            raise KeyError(f"Unknown setting {key!r}. Known settings: {known}")
        return self._values[key]

    def set(self, key: str, value: Any) -> None:
        if key not in _SHORTHAND.values():
            known = ", ".join(sorted(_SHORTHAND.values()))
            raise KeyError(f"Unknown setting {key!r}. Known settings: {known}")
        self._values[key] = value


_SHORTHAND = {
    "bar_target": BAR_TARGET,
    "max_bars": MAX_BARS,
    "scaled_date_format": SCALED_DATE_FORMAT,
}
