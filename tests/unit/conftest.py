"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from expiring_map import ExpiringMap


class FakeClock:
    """Manually advanced time source.

    With a non-zero ``step`` every reading moves time forward by that amount.
    """

    def __init__(self, start: float = 0.0, step: float = 0.0) -> None:
        self.current = start
        self.step = step
        self.calls = 0

    def now(self) -> float:
        self.calls += 1
        reading = self.current
        self.current += self.step
        return reading

    def advance(self, amount: float) -> None:
        self.current += amount

    def set(self, value: float) -> None:
        self.current = value


@pytest.fixture
def clock():
    """Fake clock starting at t=0."""
    return FakeClock()


@pytest.fixture
def ttl_map(clock):
    """Empty map with a 100-unit TTL driven by the fake clock."""
    return ExpiringMap(time_to_live=100, clock=clock)


@pytest.fixture
def ticking_clock():
    """Fake clock that advances one unit per reading."""
    return FakeClock(step=1)
