"""Spot-price reads over current reserves."""

from __future__ import annotations

from decimal import Decimal

from simpleswap.amm.constant_product import spot_price
from simpleswap.engine.state import EngineState
from simpleswap.errors import NoReserves, PairNotFound


class PriceOracle:
    """Reserve-ratio prices; never simulates a trade."""

    def __init__(self, state: EngineState) -> None:
        self.state = state

    def spot_price(self, asset_in: str, asset_out: str) -> int:
        """Price of one unit of asset_in in asset_out units, scaled by the price scale.

        Returns ``reserve_out * scale // reserve_in``.

        Raises:
            NoReserves: If the pool is missing or either reserve is zero
        """
        with self.state.read_lock():
            try:
                pool = self.state.registry.lookup(asset_in, asset_out)
            except PairNotFound as err:
                raise NoReserves("No reserves") from err
            reserve_in, reserve_out = pool.reserves_for(asset_in)
        return spot_price(reserve_in, reserve_out, self.state.config.price_scale)

    def spot_price_decimal(self, asset_in: str, asset_out: str) -> Decimal:
        """Spot price divided by 10**decimals of the output asset.

        This is the figure a client displays: the fixed-point price formatted
        with the output asset's own precision.
        """
        price = self.spot_price(asset_in, asset_out)
        decimals = self.state.asset(asset_out).decimals()
        return Decimal(price).scaleb(-decimals)
