"""Engine state and the transaction discipline around it.

All mutable ledger state lives in one EngineState owned by one engine
instance; components receive it explicitly, there is no module-level
ledger. Every mutating operation runs as:

    with state.transaction() as txn:       # sequencer lock + rollback journal
        pool = ...                         # resolve, txn.track(pool)
        with txn.pool_guard(pool):         # per-pool reentrancy lock
            ...checks, math...             # no writes yet
            ...effects on reserves/shares...
            ...interactions with asset ledgers...

If anything raises inside the block, every tracked participant is restored
from the snapshot taken when it was first touched, so no partial effect
persists.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol, runtime_checkable

import structlog

from simpleswap.assets.ledger import AssetLedger
from simpleswap.clock import Clock, SystemClock
from simpleswap.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from simpleswap.errors import Locked, UnknownAsset
from simpleswap.models.types import normalize_address
from simpleswap.pools.pool import Pool
from simpleswap.pools.registry import PairRegistry

logger = structlog.get_logger()


@runtime_checkable
class Snapshottable(Protocol):
    """Participant whose state a transaction can capture and restore."""

    def snapshot(self) -> Any: ...

    def restore(self, snapshot: Any) -> None: ...


class Transaction:
    """Rollback journal for one engine operation.

    Participants are snapshotted the first time they are tracked; on
    failure they are restored in reverse order of tracking. A transaction
    opened while another is running (a reentrant call) also registers its
    participants with the outer one, so an outer rollback undoes whatever
    the nested operation committed.
    """

    def __init__(self, operation: str, parent: Transaction | None = None) -> None:
        self.operation = operation
        self.parent = parent
        self._journal: list[tuple[Snapshottable, Any]] = []
        self._tracked: set[int] = set()

    def track(self, participant: object) -> None:
        """Snapshot a participant unless already tracked.

        Raises:
            TypeError: If the participant cannot snapshot and restore itself
        """
        if self.parent is not None:
            self.parent.track(participant)
        if id(participant) in self._tracked:
            return
        if not isinstance(participant, Snapshottable):
            raise TypeError(f"{type(participant).__name__} cannot be rolled back")
        self._tracked.add(id(participant))
        self._journal.append((participant, participant.snapshot()))

    def track_pool(self, pool: Pool) -> None:
        self.track(pool)
        self.track(pool.share_ledger)

    def rollback(self) -> None:
        for participant, snapshot in reversed(self._journal):
            participant.restore(snapshot)
        self._journal.clear()
        self._tracked.clear()

    @contextmanager
    def pool_guard(self, pool: Pool) -> Iterator[Pool]:
        """Hold the pool's exclusive section for the rest of the operation.

        Raises:
            Locked: If the pool is already inside an operation
        """
        if pool.locked:
            raise Locked(f"Pool {pool.pair_key} is locked")
        pool.locked = True
        try:
            yield pool
        finally:
            pool.locked = False


class EngineState:
    """Mutable ledger state of one engine instance.

    Attributes:
        config: Fee, price scale and engine address
        clock: Time source for deadline checks
        registry: Pair registry holding every pool
        assets: Registered asset ledgers by normalized address
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        clock: Clock | None = None,
    ) -> None:
        self.config = config
        self.clock: Clock = clock if clock is not None else SystemClock()
        self.registry = PairRegistry(config.engine_address)
        self.assets: dict[str, AssetLedger] = {}
        # Reentrant so a nested call reaches the pool guard and fails Locked
        # instead of deadlocking on the sequencer
        self._sequencer = threading.RLock()
        self._active: list[Transaction] = []

    @property
    def engine_address(self) -> str:
        return self.config.engine_address

    def register_asset(self, ledger: AssetLedger) -> None:
        """Make an asset available to pools.

        Raises:
            TypeError: If the ledger lacks part of the AssetLedger interface,
                snapshot and restore included
        """
        if not isinstance(ledger, AssetLedger):
            raise TypeError(f"{type(ledger).__name__} does not implement AssetLedger")
        self.assets[normalize_address(ledger.address)] = ledger

    def asset(self, address: str) -> AssetLedger:
        """Return the ledger for an asset.

        Raises:
            UnknownAsset: If no ledger is registered for the address
        """
        ledger = self.assets.get(normalize_address(address))
        if ledger is None:
            raise UnknownAsset(f"Unknown asset: {address}")
        return ledger

    @contextmanager
    def transaction(self, operation: str) -> Iterator[Transaction]:
        """Run one operation atomically under the sequencer lock."""
        with self._sequencer:
            parent = self._active[-1] if self._active else None
            txn = Transaction(operation, parent=parent)
            txn.track(self.registry)
            self._active.append(txn)
            try:
                yield txn
            except BaseException as exc:
                txn.rollback()
                logger.info(
                    "transaction_rolled_back",
                    operation=operation,
                    nested=parent is not None,
                    error=getattr(exc, "kind", type(exc).__name__),
                    reason=str(exc),
                )
                raise
            finally:
                self._active.pop()

    def read_lock(self) -> threading.RLock:
        """Sequencer lock, for reads that must not interleave with writes."""
        return self._sequencer
