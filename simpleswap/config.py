"""Engine configuration for the ledger."""

from __future__ import annotations

import os
from dataclasses import dataclass

from simpleswap.constants import DEFAULT_ENGINE_ADDRESS, DEFAULT_FEE_BPS, FEE_BASE, PRICE_SCALE
from simpleswap.models.types import is_valid_address, normalize_address


@dataclass(frozen=True)
class EngineConfig:
    """Centralized configuration for one engine instance.

    The fee rate and price scale are deliberately not hard-coded in the
    math: tests and deployments can pick their own constants.

    Attributes:
        fee_bps: Swap fee in basis points of FEE_BASE (default: 30 = 0.3%)
        price_scale: Fixed-point unit returned by spot-price reads (default: 1e18)
        engine_address: Account the engine holds reserves under on asset ledgers
    """

    fee_bps: int = DEFAULT_FEE_BPS
    price_scale: int = PRICE_SCALE
    engine_address: str = DEFAULT_ENGINE_ADDRESS

    def __post_init__(self) -> None:
        if not 0 <= self.fee_bps < FEE_BASE:
            raise ValueError(f"fee_bps must be in [0, {FEE_BASE}), got {self.fee_bps}")
        if self.price_scale <= 0:
            raise ValueError(f"price_scale must be positive, got {self.price_scale}")
        if not is_valid_address(self.engine_address):
            raise ValueError(f"Invalid engine address: {self.engine_address}")
        object.__setattr__(self, "engine_address", normalize_address(self.engine_address))

    @property
    def fee_multiplier(self) -> int:
        """Share of the input that reaches the curve (FEE_BASE - fee_bps).

        For 30 bps this returns 9970.
        """
        return FEE_BASE - self.fee_bps

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Build a config from SIMPLESWAP_* environment variables.

        - SIMPLESWAP_FEE_BPS: swap fee in bps (default: 30)
        - SIMPLESWAP_PRICE_SCALE: spot-price unit (default: 10**18)
        - SIMPLESWAP_ENGINE_ADDRESS: engine account address
        """
        return cls(
            fee_bps=int(os.environ.get("SIMPLESWAP_FEE_BPS", str(DEFAULT_FEE_BPS))),
            price_scale=int(os.environ.get("SIMPLESWAP_PRICE_SCALE", str(PRICE_SCALE))),
            engine_address=os.environ.get("SIMPLESWAP_ENGINE_ADDRESS", DEFAULT_ENGINE_ADDRESS),
        )


# Default configuration instance
DEFAULT_ENGINE_CONFIG = EngineConfig()
