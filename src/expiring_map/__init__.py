"""expiring_map

A key-value map with per-entry time-to-live. Expired entries are dropped
lazily, at the start of every operation, rather than by a timer thread.

This package is self-contained and does not import non-stdlib dependencies.
"""

from .core.clock import Clock, MonotonicClock
from .core.errors import ConfigurationError, ExpiringMapError
from .core.expiring_map import ExpiringMap
from .core.models import TimedEntry
from .utils.config import DEFAULT_TIME_TO_LIVE, ExpiringMapConfig

__all__ = [
    "ExpiringMap",
    "ExpiringMapConfig",
    "TimedEntry",
    "Clock",
    "MonotonicClock",
    "ExpiringMapError",
    "ConfigurationError",
    "DEFAULT_TIME_TO_LIVE",
]

__version__ = "0.1.0"
