"""Utility module for configuration."""

from .config import (
    DEFAULT_INITIAL_CAPACITY,
    DEFAULT_LOAD_FACTOR,
    DEFAULT_TIME_TO_LIVE,
    ExpiringMapConfig,
)

__all__ = [
    "ExpiringMapConfig",
    "DEFAULT_TIME_TO_LIVE",
    "DEFAULT_INITIAL_CAPACITY",
    "DEFAULT_LOAD_FACTOR",
]
