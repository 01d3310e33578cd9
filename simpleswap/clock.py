"""Time sources for deadline checks.

The engine never reads the wall clock directly; it asks its Clock, so tests
can pin or advance time the way a local chain's ``evm_increaseTime`` would.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable

from simpleswap.errors import Expired


@runtime_checkable
class Clock(Protocol):
    """Source of the current Unix timestamp in whole seconds."""

    def now(self) -> int: ...


class SystemClock:
    """Wall-clock time."""

    def now(self) -> int:
        return int(time.time())


class FixedClock:
    """Manually controlled clock for tests and simulations."""

    def __init__(self, timestamp: int = 1_700_000_000) -> None:
        self.timestamp = timestamp

    def now(self) -> int:
        return self.timestamp

    def advance(self, seconds: int) -> int:
        """Move time forward and return the new timestamp."""
        if seconds < 0:
            raise ValueError("Clock cannot move backwards")
        self.timestamp += seconds
        return self.timestamp


def ensure_not_expired(clock: Clock, deadline: int) -> None:
    """Reject an operation once ``now > deadline``.

    A deadline equal to the current time is still valid.

    Raises:
        Expired: If the deadline has passed
    """
    now = clock.now()
    if now > deadline:
        raise Expired(f"Expired: now={now} > deadline={deadline}")
