"""In-process metrics for expiry sweeps.

Nothing is exported; callers read the predefined instruments directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

LabelKey = Tuple[Tuple[str, Any], ...]


def _label_key(labels: Dict[str, Any]) -> LabelKey:
    return tuple(sorted(labels.items()))


@dataclass
class Counter:
    name: str
    help: str
    values: Dict[LabelKey, float] = field(default_factory=dict)

    def inc(self, value: float = 1.0, **labels: Any) -> None:
        key = _label_key(labels)
        self.values[key] = self.values.get(key, 0.0) + value

    def get(self, **labels: Any) -> float:
        return self.values.get(_label_key(labels), 0.0)


@dataclass
class Histogram:
    name: str
    help: str
    buckets: List[float]
    # One slot per bucket plus a trailing overflow slot.
    counts: Dict[LabelKey, List[int]] = field(default_factory=dict)
    sums: Dict[LabelKey, float] = field(default_factory=dict)

    def observe(self, val: float, **labels: Any) -> None:
        key = _label_key(labels)
        slots = self.counts.setdefault(key, [0] * (len(self.buckets) + 1))
        index = next((i for i, bound in enumerate(self.buckets) if val <= bound), len(self.buckets))
        slots[index] += 1
        self.sums[key] = self.sums.get(key, 0.0) + val

    def count(self, **labels: Any) -> int:
        return sum(self.counts.get(_label_key(labels), ()))


# Predefined metrics
expiring_map_evictions_total = Counter(
    "expiring_map_evictions_total",
    "Entries dropped by expiry sweeps",
)
expiring_map_sweep_seconds = Histogram(
    "expiring_map_sweep_seconds",
    "Expiry sweep latency",
    buckets=[0.00001, 0.0001, 0.001, 0.01, 0.1, 1.0],
)
