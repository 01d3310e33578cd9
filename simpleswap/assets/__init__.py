"""Asset ledgers the engine moves value through, plus the test faucet."""

from simpleswap.assets.faucet import Faucet
from simpleswap.assets.ledger import AssetLedger, InMemoryAssetLedger

__all__ = ["AssetLedger", "Faucet", "InMemoryAssetLedger"]
