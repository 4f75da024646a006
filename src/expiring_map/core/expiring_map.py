from __future__ import annotations

import logging
import time
import typing as t

from ..monitoring.metrics import expiring_map_evictions_total, expiring_map_sweep_seconds
from ..utils.config import (
    DEFAULT_INITIAL_CAPACITY,
    DEFAULT_LOAD_FACTOR,
    DEFAULT_TIME_TO_LIVE,
    ExpiringMapConfig,
)
from .clock import Clock, MonotonicClock
from .models import TimedEntry

_logger = logging.getLogger(__name__)

K = t.TypeVar("K")
V = t.TypeVar("V")

Pairs = t.Union[t.Mapping[K, V], t.Iterable[t.Tuple[K, V]]]


def _collect_pairs(source: t.Any) -> t.List[t.Tuple[t.Any, t.Any]]:
    # Read the source once; an ExpiringMap source would sweep again on every lookup.
    if hasattr(source, "items"):
        return list(source.items())
    if hasattr(source, "keys"):
        return [(key, source[key]) for key in source.keys()]
    return list(source)


class ExpiringMap(t.Generic[K, V]):
    """Key-value map whose entries expire ``time_to_live`` units after being written.

    Expiry is lazy: every public operation except ``clear`` and the TTL
    accessors first drops all expired entries, then acts on what is left. Read
    operations can therefore shrink the map.

    Not safe for concurrent use without external locking.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        seed: t.Optional[Pairs] = None,
        *,
        time_to_live: float = DEFAULT_TIME_TO_LIVE,
        initial_capacity: int = DEFAULT_INITIAL_CAPACITY,
        load_factor: float = DEFAULT_LOAD_FACTOR,
        clock: t.Optional[Clock] = None,
    ) -> None:
        ExpiringMapConfig(
            initial_capacity=initial_capacity,
            load_factor=load_factor,
            time_to_live=time_to_live,
        ).validate()
        self._time_to_live = time_to_live
        self._clock: Clock = clock if clock is not None else MonotonicClock()
        self._entries: t.Dict[K, TimedEntry[V]] = {}
        if seed is not None:
            pairs = _collect_pairs(seed)
            now = self._clock.now()
            for key, value in pairs:
                self._entries[key] = TimedEntry(value, now)

    @classmethod
    def from_config(
        cls,
        config: ExpiringMapConfig,
        seed: t.Optional[Pairs] = None,
        clock: t.Optional[Clock] = None,
    ) -> "ExpiringMap[K, V]":
        return cls(
            seed,
            time_to_live=config.time_to_live,
            initial_capacity=config.initial_capacity,
            load_factor=config.load_factor,
            clock=clock,
        )

    # -- TTL ------------------------------------------------------------------

    def get_time_to_live(self) -> float:
        return self._time_to_live

    def set_time_to_live(self, time_to_live: float) -> None:
        """Change the TTL. Entries are re-evaluated on the next sweep, not now."""
        _logger.debug("Time to live changed from %s to %s", self._time_to_live, time_to_live)
        self._time_to_live = time_to_live

    time_to_live = property(get_time_to_live, set_time_to_live)

    # -- expiry ---------------------------------------------------------------

    def clear_expired(self) -> None:
        """Drop every entry older than the TTL.

        Reads the clock once. Entries aged exactly the TTL survive, as do
        entries with a negative age (clock moved backwards).
        """
        started = time.perf_counter()
        now = self._clock.now()
        ttl = self._time_to_live
        alive = {key: entry for key, entry in self._entries.items() if not entry.is_expired(now, ttl)}
        evicted = len(self._entries) - len(alive)
        self._entries = alive
        expiring_map_sweep_seconds.observe(time.perf_counter() - started)
        if evicted:
            expiring_map_evictions_total.inc(evicted)
            _logger.debug("Swept %d expired entries, %d remaining", evicted, len(alive))

    def _write(self, key: K, value: V) -> None:
        self._entries[key] = TimedEntry(value, self._clock.now())

    # -- reads ----------------------------------------------------------------

    def get(self, key: K, default: t.Optional[V] = None) -> t.Optional[V]:
        self.clear_expired()
        entry = self._entries.get(key)
        return default if entry is None else entry.value

    def contains_key(self, key: K) -> bool:
        self.clear_expired()
        return key in self._entries

    def contains_value(self, value: t.Any) -> bool:
        self.clear_expired()
        return any(entry.value == value for entry in self._entries.values())

    def size(self) -> int:
        self.clear_expired()
        return len(self._entries)

    def is_empty(self) -> bool:
        return self.size() == 0

    def keys(self) -> t.List[K]:
        self.clear_expired()
        return list(self._entries)

    def values(self) -> t.List[V]:
        self.clear_expired()
        return [entry.value for entry in self._entries.values()]

    def items(self) -> t.List[t.Tuple[K, V]]:
        self.clear_expired()
        return [(key, entry.value) for key, entry in self._entries.items()]

    def to_dict(self) -> t.Dict[K, V]:
        self.clear_expired()
        return {key: entry.value for key, entry in self._entries.items()}

    # -- writes ---------------------------------------------------------------

    def put(self, key: K, value: V) -> V:
        """Insert or overwrite ``key``, refreshing its timestamp. Returns ``value``."""
        self.clear_expired()
        self._write(key, value)
        return value

    def put_all(self, other: Pairs) -> None:
        self.clear_expired()
        pairs = _collect_pairs(other)
        now = self._clock.now()
        for key, value in pairs:
            self._entries[key] = TimedEntry(value, now)

    def put_if_absent(self, key: K, value: V) -> t.Optional[V]:
        """Insert only if ``key`` is absent.

        Returns None when this call inserted, otherwise the existing value,
        whose timestamp is left untouched.
        """
        self.clear_expired()
        entry = self._entries.get(key)
        if entry is not None:
            return entry.value
        self._write(key, value)
        return None

    def remove(self, key: K) -> t.Optional[V]:
        self.clear_expired()
        entry = self._entries.pop(key, None)
        return None if entry is None else entry.value

    def remove_if_equal(self, key: K, expected: t.Any) -> bool:
        self.clear_expired()
        entry = self._entries.get(key)
        if entry is None or entry.value != expected:
            return False
        del self._entries[key]
        return True

    def replace(self, key: K, value: V) -> t.Optional[V]:
        """Overwrite ``key`` only if present. Returns the previous value or None."""
        self.clear_expired()
        entry = self._entries.get(key)
        if entry is None:
            return None
        self._write(key, value)
        return entry.value

    def replace_if_equal(self, key: K, old_value: t.Any, new_value: V) -> bool:
        """Overwrite ``key`` if present and ``old_value`` is held by any live entry.

        The value check is deliberately map-wide, not limited to ``key``.
        """
        self.clear_expired()
        if key not in self._entries:
            return False
        if not any(entry.value == old_value for entry in self._entries.values()):
            return False
        self._write(key, new_value)
        return True

    def clear(self) -> None:
        self._entries.clear()
        _logger.debug("Cleared all entries")

    # -- compute / merge ------------------------------------------------------
    # A key holding None counts as absent. A None result removes the key. Any
    # other result is written with a fresh timestamp, even when equal to the
    # stored value.

    def _current(self, key: K) -> t.Optional[V]:
        entry = self._entries.get(key)
        return None if entry is None else entry.value

    def _store_computed(self, key: K, value: t.Optional[V]) -> t.Optional[V]:
        if value is None:
            self._entries.pop(key, None)
        else:
            self._write(key, value)
        return value

    def compute_if_absent(self, key: K, fn: t.Callable[[K], t.Optional[V]]) -> t.Optional[V]:
        self.clear_expired()
        current = self._current(key)
        if current is not None:
            return current
        return self._store_computed(key, fn(key))

    def compute_if_present(self, key: K, fn: t.Callable[[K, V], t.Optional[V]]) -> t.Optional[V]:
        self.clear_expired()
        current = self._current(key)
        if current is None:
            return None
        return self._store_computed(key, fn(key, current))

    def compute(self, key: K, fn: t.Callable[[K, t.Optional[V]], t.Optional[V]]) -> t.Optional[V]:
        self.clear_expired()
        return self._store_computed(key, fn(key, self._current(key)))

    def merge(self, key: K, value: V, fn: t.Callable[[V, V], t.Optional[V]]) -> t.Optional[V]:
        self.clear_expired()
        current = self._current(key)
        merged = value if current is None else fn(current, value)
        return self._store_computed(key, merged)

    # -- bulk -----------------------------------------------------------------

    def for_each(self, action: t.Callable[[K, V], t.Any]) -> None:
        for key, value in self.items():
            action(key, value)

    def replace_all(self, fn: t.Callable[[K, V], V]) -> None:
        """Rewrite every live entry with ``fn(key, value)`` and a fresh timestamp."""
        self.clear_expired()
        replaced = {key: fn(key, entry.value) for key, entry in self._entries.items()}
        now = self._clock.now()
        self._entries = {key: TimedEntry(value, now) for key, value in replaced.items()}

    def copy(self) -> "ExpiringMap[K, V]":
        """Shallow copy sharing TTL and clock; entries keep their timestamps."""
        self.clear_expired()
        clone = type(self)(time_to_live=self._time_to_live, clock=self._clock)
        clone._entries = {
            key: TimedEntry(entry.value, entry.written_at) for key, entry in self._entries.items()
        }
        return clone

    # -- Python mapping protocol ----------------------------------------------

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)  # type: ignore[arg-type]

    def __iter__(self) -> t.Iterator[K]:
        return iter(self.keys())

    def __getitem__(self, key: K) -> V:
        self.clear_expired()
        try:
            return self._entries[key].value
        except KeyError:
            raise KeyError(key) from None

    def __setitem__(self, key: K, value: V) -> None:
        self.put(key, value)

    def __delitem__(self, key: K) -> None:
        self.clear_expired()
        if key not in self._entries:
            raise KeyError(key)
        del self._entries[key]

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ExpiringMap):
            return NotImplemented
        return self._time_to_live == other._time_to_live and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r}, time_to_live={self._time_to_live!r})"
