"""AMM math for constant-product pools."""

from simpleswap.amm.constant_product import (
    get_amount_out,
    initial_shares,
    optimal_deposit,
    quote,
    redemption_amounts,
    shares_for_deposit,
    spot_price,
)

__all__ = [
    "get_amount_out",
    "initial_shares",
    "optimal_deposit",
    "quote",
    "redemption_amounts",
    "shares_for_deposit",
    "spot_price",
]
