"""Ledger engine: state, liquidity, swaps and prices."""

from simpleswap.engine.liquidity import LiquidityManager
from simpleswap.engine.oracle import PriceOracle
from simpleswap.engine.simple_swap import SimpleSwap
from simpleswap.engine.state import EngineState, Transaction
from simpleswap.engine.swap import SwapEngine

__all__ = [
    "EngineState",
    "LiquidityManager",
    "PriceOracle",
    "SimpleSwap",
    "SwapEngine",
    "Transaction",
]
