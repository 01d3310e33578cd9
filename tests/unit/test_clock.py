"""Tests for time sources and deadline checks."""

import time

import pytest

from simpleswap.clock import Clock, FixedClock, SystemClock, ensure_not_expired
from simpleswap.errors import Expired


class TestClocks:
    def test_system_clock_tracks_wall_time(self):
        assert abs(SystemClock().now() - int(time.time())) <= 1

    def test_clocks_satisfy_protocol(self):
        assert isinstance(SystemClock(), Clock)
        assert isinstance(FixedClock(), Clock)

    def test_fixed_clock_advance(self):
        clock = FixedClock(100)
        assert clock.advance(50) == 150
        assert clock.now() == 150

    def test_fixed_clock_cannot_go_back(self):
        with pytest.raises(ValueError):
            FixedClock(100).advance(-1)


class TestEnsureNotExpired:
    def test_future_deadline(self):
        ensure_not_expired(FixedClock(100), 101)

    def test_deadline_equal_to_now(self):
        ensure_not_expired(FixedClock(100), 100)

    def test_past_deadline(self):
        with pytest.raises(Expired):
            ensure_not_expired(FixedClock(100), 99)
