"""Data models for the ledger's HTTP surface and shared address types."""

from simpleswap.models.api import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    ErrorResponse,
    PairInfo,
    PriceResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    SwapRequest,
    SwapResponse,
)
from simpleswap.models.types import Address, Uint256, is_valid_address, normalize_address

__all__ = [
    "AddLiquidityRequest",
    "AddLiquidityResponse",
    "ErrorResponse",
    "PairInfo",
    "PriceResponse",
    "RemoveLiquidityRequest",
    "RemoveLiquidityResponse",
    "SwapRequest",
    "SwapResponse",
    "Address",
    "Uint256",
    "is_valid_address",
    "normalize_address",
]
