"""Pair registry: canonical pair keys and the pools they map to.

A pair of assets is canonicalized by sorting the two addresses by their
bytes, so both argument orders resolve to the same key and the same pool.
The key and the share-ledger address are pure derivations that callers
can recompute on their own:

    pair_key            = keccak256(abi.encodePacked(asset0, asset1))
    share_ledger_address = keccak256(0xff ++ engine ++ pair_key ++ keccak256(salt))[12:]
"""

from __future__ import annotations

import structlog
from eth_abi.packed import encode_packed
from eth_utils import keccak, to_checksum_address

from simpleswap.constants import SHARE_LEDGER_SALT
from simpleswap.errors import IdenticalAssets, PairNotFound
from simpleswap.models.types import normalize_address
from simpleswap.pools.pool import Pool
from simpleswap.pools.shares import ShareLedger

logger = structlog.get_logger()


def sort_assets(asset_a: str, asset_b: str) -> tuple[str, str]:
    """Return the pair in canonical (asset0, asset1) order.

    Raises:
        IdenticalAssets: If both addresses are the same asset
        ValueError: If either address is malformed
    """
    a = normalize_address(asset_a, validate=True)
    b = normalize_address(asset_b, validate=True)
    if a == b:
        raise IdenticalAssets(f"Identical assets: {a}")
    if bytes.fromhex(a[2:]) > bytes.fromhex(b[2:]):
        a, b = b, a
    return a, b


def pair_key(asset_a: str, asset_b: str) -> str:
    """Order-independent key for a pair, as 0x-prefixed hex."""
    asset0, asset1 = sort_assets(asset_a, asset_b)
    packed = encode_packed(
        ["address", "address"],
        [bytes.fromhex(asset0[2:]), bytes.fromhex(asset1[2:])],
    )
    return "0x" + keccak(packed).hex()


def share_ledger_address(engine_address: str, key: str) -> str:
    """Deterministic share-ledger address for a pair key under an engine."""
    engine = bytes.fromhex(normalize_address(engine_address, validate=True)[2:])
    digest = keccak(b"\xff" + engine + bytes.fromhex(key[2:]) + keccak(SHARE_LEDGER_SALT))
    return to_checksum_address(digest[12:])


class PairRegistry:
    """Registry of pools keyed by canonical pair key.

    Pools are created lazily by ``resolve_or_create`` and never removed; a
    drained pool stays registered with zero reserves.
    """

    def __init__(self, engine_address: str) -> None:
        self.engine_address = normalize_address(engine_address, validate=True)
        self._pools: dict[str, Pool] = {}

    def __len__(self) -> int:
        return len(self._pools)

    def __contains__(self, key: object) -> bool:
        return key in self._pools

    def pair_key(self, asset_a: str, asset_b: str) -> str:
        return pair_key(asset_a, asset_b)

    def share_ledger_address_of(self, asset_a: str, asset_b: str) -> str:
        return share_ledger_address(self.engine_address, pair_key(asset_a, asset_b))

    def get(self, key: str) -> Pool | None:
        return self._pools.get(key)

    def all_pairs(self) -> list[str]:
        """Pair keys in creation order."""
        return list(self._pools)

    def lookup(self, asset_a: str, asset_b: str) -> Pool:
        """Return the existing pool for a pair.

        Raises:
            PairNotFound: If no pool has been created for the pair
        """
        key = pair_key(asset_a, asset_b)
        pool = self._pools.get(key)
        if pool is None:
            raise PairNotFound(f"Pair not found: {key}")
        return pool

    def resolve_or_create(self, asset_a: str, asset_b: str) -> Pool:
        """Return the pool for a pair, allocating an empty one if needed.

        Raises:
            IdenticalAssets: If asset_a and asset_b are the same
        """
        asset0, asset1 = sort_assets(asset_a, asset_b)
        key = pair_key(asset0, asset1)
        pool = self._pools.get(key)
        if pool is not None:
            return pool

        ledger = ShareLedger(
            address=share_ledger_address(self.engine_address, key),
            owner=self.engine_address,
        )
        pool = Pool(pair_key=key, asset0=asset0, asset1=asset1, share_ledger=ledger)
        self._pools[key] = pool
        logger.info(
            "pool_created",
            pair_key=key,
            asset0=asset0,
            asset1=asset1,
            share_ledger=ledger.address,
        )
        return pool

    def snapshot(self) -> list[str]:
        return list(self._pools)

    def restore(self, snapshot: list[str]) -> None:
        keep = set(snapshot)
        for key in [k for k in self._pools if k not in keep]:
            del self._pools[key]
