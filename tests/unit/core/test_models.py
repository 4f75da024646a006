"""Unit tests for entry and clock models."""

import time

from expiring_map.core.clock import MonotonicClock
from expiring_map.core.models import TimedEntry


class TestTimedEntry:
    """Test TimedEntry age bookkeeping."""

    def test_age(self):
        """Test age is the difference between now and the write time."""
        entry = TimedEntry(value="v", written_at=10)
        assert entry.age(25) == 15

    def test_expiry_is_strict(self):
        """Test an entry aged exactly the TTL is not expired."""
        entry = TimedEntry(value="v", written_at=0)

        assert entry.is_expired(100, 100) is False
        assert entry.is_expired(101, 100) is True

    def test_negative_age_never_expires(self):
        """Test a clock that moved backwards keeps the entry alive."""
        entry = TimedEntry(value="v", written_at=500)
        assert entry.is_expired(0, 100) is False

    def test_float_timestamps(self):
        """Test fractional clock readings."""
        entry = TimedEntry(value=None, written_at=0.5)
        assert entry.is_expired(1.0, 0.25) is True


class TestMonotonicClock:
    """Test the default time source."""

    def test_reports_milliseconds(self, monkeypatch):
        """Test monotonic seconds are scaled to milliseconds."""
        monkeypatch.setattr(time, "monotonic", lambda: 2.5)
        assert MonotonicClock().now() == 2500.0

    def test_never_goes_backwards(self):
        """Test successive readings are non-decreasing."""
        clock = MonotonicClock()
        first = clock.now()
        second = clock.now()
        assert second >= first
