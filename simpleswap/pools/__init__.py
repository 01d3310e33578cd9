"""Pool records, share ledgers and the pair registry."""

from simpleswap.pools.pool import Pool
from simpleswap.pools.registry import PairRegistry, pair_key, share_ledger_address, sort_assets
from simpleswap.pools.shares import ShareLedger

__all__ = [
    "Pool",
    "PairRegistry",
    "ShareLedger",
    "pair_key",
    "share_ledger_address",
    "sort_assets",
]
