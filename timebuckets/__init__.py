from .bounds import TimeBounds
from .calculators import (
    AutoIntervalCalculator,
    EngineInterval,
    EngineIntervalCalculator,
    RoundingAutoInterval,
    UnitReducer,
)
from .config import (
    BAR_TARGET,
    MAX_BARS,
    SCALED_DATE_FORMAT,
    ConfigStore,
    MemoryConfig,
)
from .core import SerializableState, TimeBuckets
from .errors import (
    InvalidBoundsError,
    InvalidIntervalError,
    NegativeSpanError,
    TimeBucketsError,
)
from .interval import AUTO, Auto, Explicit, IntervalSpec, NamedUnit, ResolvedInterval

__all__ = [
    "TimeBuckets",
    "TimeBounds",
    "ResolvedInterval",
    "SerializableState",
    "IntervalSpec",
    "Auto",
    "AUTO",
    "NamedUnit",
    "Explicit",
    "AutoIntervalCalculator",
    "EngineIntervalCalculator",
    "EngineInterval",
    "RoundingAutoInterval",
    "UnitReducer",
    "ConfigStore",
    "MemoryConfig",
    "BAR_TARGET",
    "MAX_BARS",
    "SCALED_DATE_FORMAT",
    "TimeBucketsError",
    "InvalidBoundsError",
    "NegativeSpanError",
    "InvalidIntervalError",
]
