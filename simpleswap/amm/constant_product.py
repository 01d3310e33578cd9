"""Constant-product pool math.

The pool holds reserves x and y and keeps x * y = k from decreasing:
swaps pay out along the curve after a fee on the input, deposits and
redemptions move both reserves in proportion. All functions are pure
integer arithmetic on SafeInt; every division floors, which always rounds
in the pool's favor.
"""

from __future__ import annotations

import structlog

from simpleswap.constants import DEFAULT_FEE_BPS, FEE_BASE, PRICE_SCALE
from simpleswap.errors import InsufficientShares, InvalidAmount, NoLiquidity, NoReserves
from simpleswap.safe_int import S

logger = structlog.get_logger()


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Return amount_b such that amount_b / amount_a == reserve_b / reserve_a.

    Args:
        amount_a: Amount of asset A
        reserve_a: Reserve of asset A
        reserve_b: Reserve of asset B

    Returns:
        Equivalent amount of asset B, rounded down

    Raises:
        InvalidAmount: If amount_a is not positive
        NoReserves: If either reserve is empty
    """
    if amount_a <= 0:
        raise InvalidAmount(f"Quote amount must be positive, got {amount_a}")
    if reserve_a <= 0 or reserve_b <= 0:
        raise NoReserves("No reserves")
    return (S(amount_a) * S(reserve_b) // S(reserve_a)).to_uint256()


def get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_multiplier: int = FEE_BASE - DEFAULT_FEE_BPS,
) -> int:
    """Calculate the output of an exact-input swap.

    Formula: amount_out = (in * fee * res_out) / (res_in * FEE_BASE + in * fee)

    This is ``res_out - k / (res_in + in * fee / FEE_BASE)`` with the payout
    floored, so ``(res_in + in) * (res_out - out) >= res_in * res_out``.

    Args:
        amount_in: Input asset amount (before fee)
        reserve_in: Reserve of the input asset
        reserve_out: Reserve of the output asset
        fee_multiplier: FEE_BASE - fee_bps (default 9970 for 0.3%)

    Returns:
        Output asset amount

    Raises:
        InvalidAmount: If amount_in is not positive
        NoReserves: If either reserve is empty
    """
    if amount_in <= 0:
        raise InvalidAmount(f"Swap amount must be positive, got {amount_in}")
    if reserve_in <= 0 or reserve_out <= 0:
        raise NoReserves("No reserves")

    amount_in_with_fee = S(amount_in) * S(fee_multiplier)
    numerator = amount_in_with_fee * S(reserve_out)
    denominator = S(reserve_in) * S(FEE_BASE) + amount_in_with_fee

    return (numerator // denominator).to_uint256()


def initial_shares(amount_a: int, amount_b: int) -> int:
    """Shares issued for the first deposit: the geometric mean of the amounts.

    Pricing the first shares at sqrt(a * b) makes the share value independent
    of the ratio the first depositor picks.

    Raises:
        InvalidAmount: If the result rounds down to zero
    """
    shares = (S(amount_a) * S(amount_b)).isqrt().to_uint256()
    if shares == 0:
        raise InvalidAmount("Insufficient liquidity minted")
    return shares


def shares_for_deposit(
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
) -> int:
    """Shares issued for a proportional deposit into a funded pool.

    Takes the smaller of the two per-side issuances, which equals
    ``total_supply * amount / reserve`` on the limiting side.

    Raises:
        InvalidAmount: If the result rounds down to zero
    """
    supply = S(total_supply)
    shares = (supply * S(amount_a) // S(reserve_a)).min(supply * S(amount_b) // S(reserve_b))
    if shares == 0:
        raise InvalidAmount("Insufficient liquidity minted")
    return shares.to_uint256()


def optimal_deposit(
    amount_a_desired: int,
    amount_b_desired: int,
    reserve_a: int,
    reserve_b: int,
) -> tuple[int, int]:
    """Largest deposit at the current reserve ratio within the desired amounts.

    Tries to take all of A and the matching amount of B; if that needs more B
    than offered, takes all of B and the matching amount of A instead.

    Args:
        amount_a_desired: Most of asset A the caller will deposit
        amount_b_desired: Most of asset B the caller will deposit
        reserve_a: Current reserve of asset A (must be positive)
        reserve_b: Current reserve of asset B (must be positive)

    Returns:
        Tuple of (amount_a, amount_b) to deposit
    """
    amount_b_optimal = quote(amount_a_desired, reserve_a, reserve_b)
    if amount_b_optimal <= amount_b_desired:
        return amount_a_desired, amount_b_optimal

    amount_a_optimal = quote(amount_b_desired, reserve_b, reserve_a)
    # Can only exceed amount_a_desired through inconsistent inputs
    if amount_a_optimal > amount_a_desired:
        raise InvalidAmount("Desired amounts cannot be matched at the pool ratio")
    return amount_a_optimal, amount_b_desired


def redemption_amounts(
    shares: int,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
) -> tuple[int, int]:
    """Assets paid out for burning ``shares``, each side floored.

    Raises:
        NoLiquidity: If there are no outstanding shares
        InvalidAmount: If shares is not positive
        InsufficientShares: If shares exceeds the supply, which no holder
            can own
    """
    if total_supply <= 0:
        raise NoLiquidity("No liquidity")
    if shares <= 0:
        raise InvalidAmount(f"Share amount must be positive, got {shares}")
    if shares > total_supply:
        raise InsufficientShares(f"Share amount {shares} exceeds supply {total_supply}")

    amount_a = (S(reserve_a) * S(shares) // S(total_supply)).to_uint256()
    amount_b = (S(reserve_b) * S(shares) // S(total_supply)).to_uint256()
    return amount_a, amount_b


def spot_price(reserve_in: int, reserve_out: int, scale: int = PRICE_SCALE) -> int:
    """Instantaneous price of the input asset in output units, fixed-point.

    Returns ``reserve_out * scale // reserve_in``. The scale is applied
    regardless of either asset's decimals; callers rescale for display.

    Raises:
        NoReserves: Unless both reserves are strictly positive
    """
    if reserve_in <= 0 or reserve_out <= 0:
        raise NoReserves("No reserves")
    price = (S(reserve_out) * S(scale) // S(reserve_in)).to_uint256()
    logger.debug("spot_price_computed", reserve_in=reserve_in, reserve_out=reserve_out, price=price)
    return price


__all__ = [
    "quote",
    "get_amount_out",
    "initial_shares",
    "shares_for_deposit",
    "optimal_deposit",
    "redemption_amounts",
    "spot_price",
]
