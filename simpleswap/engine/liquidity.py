"""Liquidity provision: proportional deposits and redemptions.

Mirrors the router-style add/remove calls of a UniswapV2 pair. Amounts in
and out of both methods follow the caller's argument order; the pool itself
stores reserves in canonical order.
"""

from __future__ import annotations

import structlog

from simpleswap.amm.constant_product import (
    initial_shares,
    optimal_deposit,
    quote,
    redemption_amounts,
    shares_for_deposit,
)
from simpleswap.clock import ensure_not_expired
from simpleswap.engine.state import EngineState
from simpleswap.errors import InvalidAmount, NoLiquidity, PairNotFound, Slippage
from simpleswap.models.types import normalize_address
from simpleswap.safe_int import S

logger = structlog.get_logger()


class LiquidityManager:
    """Adds and removes liquidity on pools of an EngineState."""

    def __init__(self, state: EngineState) -> None:
        self.state = state

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
        """Deposit both assets at the pool ratio and mint shares to ``to``.

        The first deposit into an empty pool is accepted exactly as desired
        and mints ``isqrt(a * b)`` shares. Later deposits take the largest
        amounts at the current reserve ratio that fit within the desired
        amounts and mint ``total_supply * amount / reserve`` shares on the
        limiting side.

        Args:
            sender: Account the assets are pulled from (needs allowances)
            asset_a: First asset of the pair
            asset_b: Second asset of the pair
            amount_a_desired: Most of asset A to deposit
            amount_b_desired: Most of asset B to deposit
            amount_a_min: Least of asset A the caller accepts depositing
            amount_b_min: Least of asset B the caller accepts depositing
            to: Recipient of the minted shares
            deadline: Unix timestamp after which the call fails

        Returns:
            Tuple of (amount_a, amount_b, shares_minted)

        Raises:
            Expired: If the deadline has passed
            IdenticalAssets: If asset_a == asset_b
            UnknownAsset: If either asset has no registered ledger
            InvalidAmount: If a desired amount is not positive or no shares result
            Slippage: If an accepted amount is below its minimum
            TransferFailure: If either asset cannot be pulled from sender
        """
        state = self.state
        with state.transaction("add_liquidity") as txn:
            ensure_not_expired(state.clock, deadline)
            if amount_a_desired <= 0 or amount_b_desired <= 0:
                raise InvalidAmount("Desired amounts must be positive")
            ledger_a = state.asset(asset_a)
            ledger_b = state.asset(asset_b)

            pool = state.registry.resolve_or_create(asset_a, asset_b)
            txn.track_pool(pool)
            with txn.pool_guard(pool):
                reserve_a, reserve_b = pool.reserves_for(asset_a)
                supply = pool.total_supply

                if reserve_a == 0 and reserve_b == 0:
                    amount_a, amount_b = amount_a_desired, amount_b_desired
                else:
                    amount_a, amount_b = optimal_deposit(
                        amount_a_desired, amount_b_desired, reserve_a, reserve_b
                    )
                if amount_a < amount_a_min or amount_b < amount_b_min:
                    raise Slippage(
                        f"Slippage: accepted ({amount_a}, {amount_b}) "
                        f"below minimum ({amount_a_min}, {amount_b_min})"
                    )

                if supply == 0:
                    shares = initial_shares(amount_a, amount_b)
                else:
                    shares = shares_for_deposit(amount_a, amount_b, reserve_a, reserve_b, supply)

                new_reserve_a = (S(reserve_a) + S(amount_a)).to_uint256()
                new_reserve_b = (S(reserve_b) + S(amount_b)).to_uint256()

                # Effects
                pool.set_reserves_for(asset_a, new_reserve_a, new_reserve_b)
                pool.share_ledger.mint(state.engine_address, to, shares)

                # Interactions
                txn.track(ledger_a)
                txn.track(ledger_b)
                engine = state.engine_address
                ledger_a.transfer_from(sender, engine, engine, amount_a)
                ledger_b.transfer_from(sender, engine, engine, amount_b)

        logger.info(
            "liquidity_added",
            pair_key=pool.pair_key,
            sender=normalize_address(sender),
            to=normalize_address(to),
            amount_a=amount_a,
            amount_b=amount_b,
            shares=shares,
        )
        return amount_a, amount_b, shares

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
        """Burn shares from ``sender`` and pay the proportional reserves to ``to``.

        Each side pays ``floor(reserve * shares / total_supply)``.

        Args:
            sender: Holder whose shares are burned
            asset_a: First asset of the pair
            asset_b: Second asset of the pair
            shares: Number of shares to redeem
            amount_a_min: Least of asset A the caller accepts receiving
            amount_b_min: Least of asset B the caller accepts receiving
            to: Recipient of the withdrawn assets
            deadline: Unix timestamp after which the call fails

        Returns:
            Tuple of (amount_a, amount_b)

        Raises:
            Expired: If the deadline has passed
            NoLiquidity: If the pool does not exist or has no shares outstanding
            InvalidAmount: If shares is not positive
            InsufficientShares: If sender holds fewer than ``shares``
            Slippage: If either payout is below its minimum
        """
        state = self.state
        with state.transaction("remove_liquidity") as txn:
            ensure_not_expired(state.clock, deadline)
            try:
                pool = state.registry.lookup(asset_a, asset_b)
            except PairNotFound as err:
                raise NoLiquidity("No liquidity") from err
            txn.track_pool(pool)
            with txn.pool_guard(pool):
                reserve_a, reserve_b = pool.reserves_for(asset_a)
                amount_a, amount_b = redemption_amounts(
                    shares, reserve_a, reserve_b, pool.total_supply
                )
                if amount_a < amount_a_min or amount_b < amount_b_min:
                    raise Slippage(
                        f"Slippage: payout ({amount_a}, {amount_b}) "
                        f"below minimum ({amount_a_min}, {amount_b_min})"
                    )
                ledger_a = state.asset(asset_a)
                ledger_b = state.asset(asset_b)

                # Effects
                pool.share_ledger.burn(state.engine_address, sender, shares)
                pool.set_reserves_for(
                    asset_a,
                    (S(reserve_a) - S(amount_a)).value,
                    (S(reserve_b) - S(amount_b)).value,
                )

                # Interactions
                txn.track(ledger_a)
                txn.track(ledger_b)
                ledger_a.transfer(state.engine_address, to, amount_a)
                ledger_b.transfer(state.engine_address, to, amount_b)

        logger.info(
            "liquidity_removed",
            pair_key=pool.pair_key,
            sender=normalize_address(sender),
            to=normalize_address(to),
            shares=shares,
            amount_a=amount_a,
            amount_b=amount_b,
        )
        return amount_a, amount_b

    def quote(self, amount_a: int, reserve_a: int, reserve_b: int) -> int:
        """Amount of B worth ``amount_a`` of A at the given reserves."""
        return quote(amount_a, reserve_a, reserve_b)

    def get_reserves(self, asset_a: str, asset_b: str) -> tuple[int, int]:
        """Current reserves in (asset_a, asset_b) order.

        Raises:
            PairNotFound: If no pool exists for the pair
        """
        with self.state.read_lock():
            return self.state.registry.lookup(asset_a, asset_b).reserves_for(asset_a)
