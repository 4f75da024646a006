"""Core module for the TTL-aware map, its entries and time sources."""

from .clock import Clock, MonotonicClock
from .errors import ConfigurationError, ExpiringMapError
from .expiring_map import ExpiringMap
from .models import TimedEntry

__all__ = [
    # Container
    "ExpiringMap",
    "TimedEntry",
    # Time sources
    "Clock",
    "MonotonicClock",
    # Errors
    "ExpiringMapError",
    "ConfigurationError",
]
