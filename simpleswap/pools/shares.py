"""Per-pool ledger of liquidity-provider shares."""

from __future__ import annotations

from dataclasses import dataclass, field

from simpleswap.errors import Forbidden, InsufficientShares, InvalidAmount
from simpleswap.models.types import normalize_address
from simpleswap.safe_int import S


@dataclass
class ShareLedger:
    """Fungible claims on one pool's reserves.

    Only ``owner`` (the engine) may mint or burn; holders may transfer
    among themselves. ``sum(balances) == total_supply`` after every call.

    Attributes:
        address: Deterministic ledger address derived from the pair key
        owner: Engine address allowed to mint and burn
        total_supply: Outstanding shares
    """

    address: str
    owner: str
    total_supply: int = 0
    _balances: dict[str, int] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self.owner = normalize_address(self.owner)

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalize_address(account), 0)

    def holders(self) -> dict[str, int]:
        """Copy of all non-zero balances."""
        return dict(self._balances)

    def mint(self, caller: str, to: str, amount: int) -> None:
        """Issue ``amount`` new shares to ``to``.

        Raises:
            Forbidden: If caller is not the owning engine
            InvalidAmount: If amount is not positive
        """
        self._require_owner(caller)
        if amount <= 0:
            raise InvalidAmount(f"Mint amount must be positive, got {amount}")
        to = normalize_address(to)
        self._balances[to] = (S(self.balance_of(to)) + S(amount)).to_uint256()
        self.total_supply = (S(self.total_supply) + S(amount)).to_uint256()

    def burn(self, caller: str, from_: str, amount: int) -> None:
        """Destroy ``amount`` shares held by ``from_``.

        Raises:
            Forbidden: If caller is not the owning engine
            InvalidAmount: If amount is not positive
            InsufficientShares: If amount exceeds the holder's balance
        """
        self._require_owner(caller)
        if amount <= 0:
            raise InvalidAmount(f"Burn amount must be positive, got {amount}")
        from_ = normalize_address(from_)
        self._debit(from_, amount)
        self.total_supply = (S(self.total_supply) - S(amount)).value

    def transfer(self, sender: str, to: str, amount: int) -> None:
        """Move shares between holders; supply is unchanged.

        Raises:
            InvalidAmount: If amount is not positive
            InsufficientShares: If amount exceeds the sender's balance
        """
        if amount <= 0:
            raise InvalidAmount(f"Transfer amount must be positive, got {amount}")
        sender = normalize_address(sender)
        to = normalize_address(to)
        self._debit(sender, amount)
        self._balances[to] = self.balance_of(to) + amount

    def snapshot(self) -> tuple[int, dict[str, int]]:
        return self.total_supply, dict(self._balances)

    def restore(self, snapshot: tuple[int, dict[str, int]]) -> None:
        self.total_supply, balances = snapshot
        self._balances = dict(balances)

    def _debit(self, account: str, amount: int) -> None:
        balance = self.balance_of(account)
        if amount > balance:
            raise InsufficientShares(f"Burn/transfer of {amount} exceeds balance {balance} of {account}")
        remaining = balance - amount
        if remaining:
            self._balances[account] = remaining
        else:
            self._balances.pop(account, None)

    def _require_owner(self, caller: str) -> None:
        if normalize_address(caller) != self.owner:
            raise Forbidden(f"{caller} may not mint or burn shares of {self.address}")
