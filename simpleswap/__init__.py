"""SimpleSwap - constant-product liquidity pool ledger."""

from simpleswap.config import EngineConfig
from simpleswap.engine.simple_swap import SimpleSwap

__version__ = "0.1.0"
__all__ = ["EngineConfig", "SimpleSwap", "__version__"]
