from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Dict

from ..core.errors import ConfigurationError

DEFAULT_TIME_TO_LIVE = 1000
DEFAULT_INITIAL_CAPACITY = 16
DEFAULT_LOAD_FACTOR = 0.75


@dataclass
class ExpiringMapConfig:
    # Sizing hints only; a Python dict manages its own storage.
    initial_capacity: int = DEFAULT_INITIAL_CAPACITY
    load_factor: float = DEFAULT_LOAD_FACTOR
    time_to_live: float = DEFAULT_TIME_TO_LIVE

    def validate(self) -> "ExpiringMapConfig":
        if self.initial_capacity < 0:
            raise ConfigurationError(f"Illegal initial capacity: {self.initial_capacity}")
        if self.load_factor <= 0 or math.isnan(self.load_factor):
            raise ConfigurationError(f"Illegal load factor: {self.load_factor}")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExpiringMapConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data).validate()
