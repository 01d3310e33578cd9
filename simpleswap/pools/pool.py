"""Pool record: reserves of one asset pair plus its share ledger."""

from __future__ import annotations

from dataclasses import dataclass

from simpleswap.models.types import normalize_address
from simpleswap.pools.shares import ShareLedger


@dataclass
class Pool:
    """Reserves of a canonical asset pair.

    ``asset0 < asset1`` by address bytes and reserves are stored in that
    order. Use ``reserves_for`` to read them in a caller's order.
    """

    pair_key: str
    asset0: str
    asset1: str
    share_ledger: ShareLedger
    reserve0: int = 0
    reserve1: int = 0
    # Held for the duration of an operation on this pool
    locked: bool = False

    @property
    def is_empty(self) -> bool:
        """True while either reserve is zero (never funded or fully drained)."""
        return self.reserve0 == 0 or self.reserve1 == 0

    @property
    def total_supply(self) -> int:
        return self.share_ledger.total_supply

    def has_asset(self, asset: str) -> bool:
        return normalize_address(asset) in (self.asset0, self.asset1)

    def reserves_for(self, asset_in: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        asset = normalize_address(asset_in)
        if asset == self.asset0:
            return self.reserve0, self.reserve1
        elif asset == self.asset1:
            return self.reserve1, self.reserve0
        else:
            raise ValueError(f"Asset {asset_in} not in pool {self.pair_key}")

    def set_reserves_for(self, asset_in: str, reserve_in: int, reserve_out: int) -> None:
        """Write reserves given in (asset_in, other) order."""
        asset = normalize_address(asset_in)
        if asset == self.asset0:
            self.reserve0, self.reserve1 = reserve_in, reserve_out
        elif asset == self.asset1:
            self.reserve1, self.reserve0 = reserve_in, reserve_out
        else:
            raise ValueError(f"Asset {asset_in} not in pool {self.pair_key}")

    def snapshot(self) -> tuple[int, int]:
        return self.reserve0, self.reserve1

    def restore(self, snapshot: tuple[int, int]) -> None:
        self.reserve0, self.reserve1 = snapshot
