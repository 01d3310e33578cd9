"""Fungible asset ledgers consumed by the engine.

The engine does not own asset balances. It moves value through an
AssetLedger, the token-standard interface (balances, allowances, transfer,
transferFrom, decimals) plus snapshot and restore, which let the engine roll
transfers back when a later step of an operation fails. InMemoryAssetLedger
is the reference ledger used by tests, the faucet and the HTTP demo.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import structlog

from simpleswap.errors import Forbidden, InsufficientAllowance, InsufficientBalance, InvalidAmount
from simpleswap.models.types import normalize_address
from simpleswap.safe_int import S

logger = structlog.get_logger()

# Called after a balance change as hook(sender, to, amount)
TransferHook = Callable[[str, str, int], None]


@runtime_checkable
class AssetLedger(Protocol):
    """Interface of a fungible asset as seen by the engine.

    Implementations raise a TransferFailure subclass when value cannot move.
    The engine restores a ledger from its snapshot when a later step of the
    same operation fails, so snapshot and restore are part of the contract.
    """

    @property
    def address(self) -> str: ...

    def decimals(self) -> int: ...

    def balance_of(self, account: str) -> int: ...

    def allowance(self, owner: str, spender: str) -> int: ...

    def approve(self, owner: str, spender: str, amount: int) -> None: ...

    def transfer(self, sender: str, to: str, amount: int) -> None: ...

    def transfer_from(self, owner: str, spender: str, to: str, amount: int) -> None: ...

    def snapshot(self) -> Any: ...

    def restore(self, snapshot: Any) -> None: ...


@dataclass
class _LedgerSnapshot:
    balances: dict[str, int]
    allowances: dict[tuple[str, str], int]
    total_supply: int


@dataclass
class InMemoryAssetLedger:
    """Owner-mintable fungible token held in memory.

    Attributes:
        address: Token address (normalized to lowercase)
        name: Human-readable name
        symbol: Ticker symbol
        owner: Only account allowed to mint and burn
        token_decimals: Display precision reported by decimals()
        transfer_hook: Optional callback run after every balance change,
            the way a token with receive hooks calls out mid-transfer
    """

    address: str
    name: str
    symbol: str
    owner: str
    token_decimals: int = 18
    transfer_hook: TransferHook | None = None
    total_supply: int = 0
    _balances: dict[str, int] = field(default_factory=dict, repr=False)
    _allowances: dict[tuple[str, str], int] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self.address = normalize_address(self.address, validate=True)
        self.owner = normalize_address(self.owner, validate=True)

    def decimals(self) -> int:
        return self.token_decimals

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalize_address(account), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        if amount < 0:
            raise InvalidAmount(f"Allowance cannot be negative: {amount}")
        self._allowances[(normalize_address(owner), normalize_address(spender))] = amount

    def mint(self, caller: str, to: str, amount: int) -> None:
        """Create ``amount`` new units for ``to`` (owner only)."""
        self._require_owner(caller)
        if amount <= 0:
            raise InvalidAmount(f"Mint amount must be positive, got {amount}")
        to = normalize_address(to)
        self._balances[to] = (S(self.balance_of(to)) + S(amount)).to_uint256()
        self.total_supply = (S(self.total_supply) + S(amount)).to_uint256()

    def burn(self, caller: str, account: str, amount: int) -> None:
        """Destroy ``amount`` units held by ``account`` (owner only)."""
        self._require_owner(caller)
        account = normalize_address(account)
        balance = self.balance_of(account)
        if amount > balance:
            raise InsufficientBalance(
                f"{self.symbol}: burn {amount} exceeds balance {balance} of {account}"
            )
        self._balances[account] = balance - amount
        self.total_supply -= amount

    def transfer(self, sender: str, to: str, amount: int) -> None:
        self._move(normalize_address(sender), normalize_address(to), amount)

    def transfer_from(self, owner: str, spender: str, to: str, amount: int) -> None:
        owner = normalize_address(owner)
        spender = normalize_address(spender)
        allowed = self.allowance(owner, spender)
        if amount > allowed:
            raise InsufficientAllowance(
                f"{self.symbol}: allowance {allowed} of {spender} over {owner} is below {amount}"
            )
        self._allowances[(owner, spender)] = allowed - amount
        self._move(owner, normalize_address(to), amount)

    def snapshot(self) -> _LedgerSnapshot:
        # Full copy of both maps; cost grows with the number of accounts
        return _LedgerSnapshot(dict(self._balances), dict(self._allowances), self.total_supply)

    def restore(self, snapshot: _LedgerSnapshot) -> None:
        self._balances = dict(snapshot.balances)
        self._allowances = dict(snapshot.allowances)
        self.total_supply = snapshot.total_supply

    def _move(self, sender: str, to: str, amount: int) -> None:
        if amount < 0:
            raise InvalidAmount(f"Transfer amount cannot be negative: {amount}")
        balance = self.balance_of(sender)
        if amount > balance:
            raise InsufficientBalance(
                f"{self.symbol}: transfer {amount} exceeds balance {balance} of {sender}"
            )
        self._balances[sender] = balance - amount
        self._balances[to] = self.balance_of(to) + amount
        logger.debug("asset_transferred", asset=self.symbol, sender=sender, to=to, amount=amount)
        if self.transfer_hook is not None:
            self.transfer_hook(sender, to, amount)

    def _require_owner(self, caller: str) -> None:
        if normalize_address(caller) != self.owner:
            raise Forbidden(f"{self.symbol}: {caller} is not the owner")


__all__ = ["AssetLedger", "InMemoryAssetLedger", "TransferHook"]
