from .metrics import Counter, Histogram, expiring_map_evictions_total, expiring_map_sweep_seconds

__all__ = [
    "Counter",
    "Histogram",
    "expiring_map_evictions_total",
    "expiring_map_sweep_seconds",
]
