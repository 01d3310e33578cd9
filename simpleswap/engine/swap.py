"""Exact-input swaps against a single constant-product pool."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from simpleswap.amm.constant_product import get_amount_out
from simpleswap.clock import ensure_not_expired
from simpleswap.engine.state import EngineState
from simpleswap.errors import InvalidAmount, InvalidPath, NoReserves, PairNotFound, Slippage
from simpleswap.models.types import normalize_address
from simpleswap.pools.pool import Pool
from simpleswap.safe_int import S

logger = structlog.get_logger()


def _validate_path(path: Sequence[str]) -> tuple[str, str]:
    """Split a two-asset path into (asset_in, asset_out).

    Raises:
        InvalidPath: If the path does not name exactly two assets
    """
    if len(path) != 2:
        raise InvalidPath(f"Only 2-token path supported, got {len(path)}")
    return normalize_address(path[0]), normalize_address(path[1])


class SwapEngine:
    """Executes swaps on pools of an EngineState.

    The fee stays in the pool: the whole ``amount_in`` is added to the input
    reserve while only ``amount_in * (1 - fee)`` is priced on the curve, so
    ``reserve_in * reserve_out`` never decreases across a swap.
    """

    def __init__(self, state: EngineState) -> None:
        self.state = state

    def swap_exact_tokens_for_tokens(
        self,
        sender: str,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> int:
        """Sell exactly ``amount_in`` of path[0] for at least ``amount_out_min`` of path[1].

        Args:
            sender: Account the input is pulled from (needs an allowance)
            amount_in: Exact input amount
            amount_out_min: Least output the caller accepts
            path: [asset_in, asset_out]
            to: Recipient of the output
            deadline: Unix timestamp after which the call fails

        Returns:
            Realized output amount

        Raises:
            InvalidPath: If path does not have exactly two entries (checked first)
            Expired: If the deadline has passed
            NoReserves: If the pool is missing or either reserve is zero
            InvalidAmount: If amount_in is not positive or the output rounds to zero
            Slippage: If the output is below amount_out_min
            TransferFailure: If the input cannot be pulled from sender
        """
        asset_in, asset_out = _validate_path(path)
        state = self.state
        with state.transaction("swap") as txn:
            ensure_not_expired(state.clock, deadline)
            pool = self._funded_pool(asset_in, asset_out)
            txn.track_pool(pool)
            with txn.pool_guard(pool):
                reserve_in, reserve_out = pool.reserves_for(asset_in)
                if reserve_in == 0 or reserve_out == 0:
                    raise NoReserves("No reserves")
                amount_out = get_amount_out(
                    amount_in, reserve_in, reserve_out, state.config.fee_multiplier
                )
                if amount_out == 0:
                    raise InvalidAmount("Insufficient output amount")
                if amount_out < amount_out_min:
                    raise Slippage(f"Slippage: output {amount_out} below minimum {amount_out_min}")
                ledger_in = state.asset(asset_in)
                ledger_out = state.asset(asset_out)

                # Effects
                pool.set_reserves_for(
                    asset_in,
                    (S(reserve_in) + S(amount_in)).to_uint256(),
                    (S(reserve_out) - S(amount_out)).value,
                )

                # Interactions
                txn.track(ledger_in)
                txn.track(ledger_out)
                engine = state.engine_address
                ledger_in.transfer_from(sender, engine, engine, amount_in)
                ledger_out.transfer(engine, to, amount_out)

        logger.info(
            "swap_executed",
            pair_key=pool.pair_key,
            sender=normalize_address(sender),
            to=normalize_address(to),
            asset_in=asset_in,
            asset_out=asset_out,
            amount_in=amount_in,
            amount_out=amount_out,
        )
        return amount_out

    def get_amount_out(self, amount_in: int, path: Sequence[str]) -> int:
        """Quote an exact-input swap at current reserves without executing it.

        Raises:
            InvalidPath: If path does not have exactly two entries
            NoReserves: If the pool is missing or either reserve is zero
            InvalidAmount: If amount_in is not positive
        """
        asset_in, asset_out = _validate_path(path)
        with self.state.read_lock():
            pool = self._funded_pool(asset_in, asset_out)
            reserve_in, reserve_out = pool.reserves_for(asset_in)
            amount_out = get_amount_out(
                amount_in, reserve_in, reserve_out, self.state.config.fee_multiplier
            )
        logger.debug("swap_quoted", pair_key=pool.pair_key, amount_in=amount_in, amount_out=amount_out)
        return amount_out

    def _funded_pool(self, asset_in: str, asset_out: str) -> Pool:
        try:
            pool = self.state.registry.lookup(asset_in, asset_out)
        except PairNotFound as err:
            raise NoReserves("No reserves") from err
        if pool.is_empty:
            raise NoReserves("No reserves")
        return pool
