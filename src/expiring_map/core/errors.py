from __future__ import annotations


class ExpiringMapError(Exception):
    """Base error for the expiring map package."""


class ConfigurationError(ExpiringMapError, ValueError):
    """Raised when construction parameters are invalid."""
