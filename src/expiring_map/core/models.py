from __future__ import annotations

import typing as t
from dataclasses import dataclass

V = t.TypeVar("V")


@dataclass
class TimedEntry(t.Generic[V]):
    value: V
    written_at: t.Any

    def age(self, now: t.Any) -> t.Any:
        return now - self.written_at

    def is_expired(self, now: t.Any, ttl: t.Any) -> bool:
        # An entry aged exactly ttl is still alive.
        return self.age(now) > ttl
