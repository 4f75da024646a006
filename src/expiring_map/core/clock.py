"""Time sources.

ExpiringMap only needs ``now()``; readings must support subtraction and the
difference must compare against the configured TTL.
"""

from __future__ import annotations

import time
import typing as t


class Clock(t.Protocol):
    """Contract for any time source used to stamp entries."""

    def now(self) -> t.Any:
        ...


class MonotonicClock:
    """Milliseconds from ``time.monotonic()``, so the default TTL of 1000 is one second."""

    def now(self) -> float:
        return time.monotonic() * 1000.0
