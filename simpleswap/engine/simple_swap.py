"""SimpleSwap: the ledger's single entry point.

One SimpleSwap owns one EngineState and wires the liquidity manager, swap
engine and price oracle to it. It exposes the router-style call surface
the web client and tests drive.
"""

from __future__ import annotations

from collections.abc import Sequence

from simpleswap.assets.ledger import AssetLedger
from simpleswap.clock import Clock
from simpleswap.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from simpleswap.engine.liquidity import LiquidityManager
from simpleswap.engine.oracle import PriceOracle
from simpleswap.engine.state import EngineState
from simpleswap.engine.swap import SwapEngine
from simpleswap.pools.pool import Pool
from simpleswap.pools.shares import ShareLedger


class SimpleSwap:
    """Constant-product exchange for any number of two-asset pools."""

    def __init__(
        self,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        clock: Clock | None = None,
        assets: Sequence[AssetLedger] = (),
    ) -> None:
        self.state = EngineState(config=config, clock=clock)
        self.liquidity = LiquidityManager(self.state)
        self.swaps = SwapEngine(self.state)
        self.oracle = PriceOracle(self.state)
        for ledger in assets:
            self.register_asset(ledger)

    @property
    def address(self) -> str:
        """Account the engine holds reserves under; approve this as spender."""
        return self.state.engine_address

    def register_asset(self, ledger: AssetLedger) -> None:
        self.state.register_asset(ledger)

    # --- Mutating operations ---

    def add_liquidity(
        self,
        sender: str,
        asset_a: str,
        asset_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
    ) -> tuple[int, int, int]:
        return self.liquidity.add_liquidity(
            sender,
            asset_a,
            asset_b,
            amount_a_desired,
            amount_b_desired,
            amount_a_min,
            amount_b_min,
            to,
            deadline,
        )

    def remove_liquidity(
        self,
        sender: str,
        asset_a: str,
        asset_b: str,
        shares: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
    ) -> tuple[int, int]:
        return self.liquidity.remove_liquidity(
            sender, asset_a, asset_b, shares, amount_a_min, amount_b_min, to, deadline
        )

    def swap_exact_tokens_for_tokens(
        self,
        sender: str,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> int:
        return self.swaps.swap_exact_tokens_for_tokens(
            sender, amount_in, amount_out_min, path, to, deadline
        )

    # --- Reads ---

    def get_price(self, asset_in: str, asset_out: str) -> int:
        return self.oracle.spot_price(asset_in, asset_out)

    def get_amount_out(self, amount_in: int, path: Sequence[str]) -> int:
        return self.swaps.get_amount_out(amount_in, path)

    def get_reserves(self, asset_a: str, asset_b: str) -> tuple[int, int]:
        return self.liquidity.get_reserves(asset_a, asset_b)

    def get_pair_hash(self, asset_a: str, asset_b: str) -> str:
        return self.state.registry.pair_key(asset_a, asset_b)

    def get_liquidity_token_address(self, asset_a: str, asset_b: str) -> str:
        return self.state.registry.share_ledger_address_of(asset_a, asset_b)

    def pool(self, asset_a: str, asset_b: str) -> Pool:
        return self.state.registry.lookup(asset_a, asset_b)

    def share_ledger(self, asset_a: str, asset_b: str) -> ShareLedger:
        return self.pool(asset_a, asset_b).share_ledger

    def all_pairs(self) -> list[str]:
        return self.state.registry.all_pairs()
