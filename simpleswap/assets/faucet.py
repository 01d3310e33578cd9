"""Cooldown-gated dispenser of the two test assets.

Hands out a fixed amount of both assets to any recipient at most once per
cooldown window. The owner keeps it stocked through allowance-based
replenishment.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from simpleswap.assets.ledger import AssetLedger
from simpleswap.clock import Clock
from simpleswap.constants import FAUCET_COOLDOWN_SECONDS, FAUCET_REQUEST_AMOUNT, ZERO_ADDRESS
from simpleswap.errors import CooldownActive, Forbidden, InsufficientBalance, InvalidAmount
from simpleswap.models.types import normalize_address

logger = structlog.get_logger()


class Faucet:
    """Test-token faucet for a pair of assets."""

    def __init__(
        self,
        address: str,
        owner: str,
        token_a: AssetLedger,
        token_b: AssetLedger,
        clock: Clock,
        request_amount: int = FAUCET_REQUEST_AMOUNT,
        cooldown: int = FAUCET_COOLDOWN_SECONDS,
    ) -> None:
        self.address = normalize_address(address, validate=True)
        self.owner = normalize_address(owner, validate=True)
        self.token_a = token_a
        self.token_b = token_b
        self.clock = clock
        self.request_amount = request_amount
        self.cooldown = cooldown
        self.last_request_time: dict[str, int] = {}

    def request_tokens(self, caller: str, recipient: str) -> None:
        """Send ``request_amount`` of both assets to ``recipient``.

        Raises:
            InvalidAmount: If recipient is the zero address
            CooldownActive: If recipient was served less than ``cooldown`` ago
            InsufficientBalance: If the faucet cannot cover either asset
        """
        recipient = normalize_address(recipient, validate=True)
        if recipient == ZERO_ADDRESS:
            raise InvalidAmount("Invalid address")

        now = self.clock.now()
        last = self.last_request_time.get(recipient)
        if last is not None and now < last + self.cooldown:
            raise CooldownActive("Please wait for the cooldown period to end")

        balance_a, balance_b = self.balances()
        if balance_a < self.request_amount:
            raise InsufficientBalance("Insufficient Token A in Faucet")
        if balance_b < self.request_amount:
            raise InsufficientBalance("Insufficient Token B in Faucet")

        with self._all_or_nothing():
            self.token_a.transfer(self.address, recipient, self.request_amount)
            self.token_b.transfer(self.address, recipient, self.request_amount)
        self.last_request_time[recipient] = now
        logger.info(
            "faucet_dispensed",
            caller=normalize_address(caller),
            recipient=recipient,
            amount=self.request_amount,
        )

    def replenish(self, caller: str, amount_a: int, amount_b: int) -> None:
        """Pull both assets from the owner; requires prior approval.

        Raises:
            Forbidden: If caller is not the owner
            InsufficientAllowance: If the owner has not approved the faucet
        """
        caller = normalize_address(caller)
        if caller != self.owner:
            raise Forbidden(f"{caller} is not the faucet owner")
        with self._all_or_nothing():
            self.token_a.transfer_from(caller, self.address, self.address, amount_a)
            self.token_b.transfer_from(caller, self.address, self.address, amount_b)
        logger.info("faucet_replenished", amount_a=amount_a, amount_b=amount_b)

    def balances(self) -> tuple[int, int]:
        """Current faucet holdings of (token_a, token_b)."""
        return self.token_a.balance_of(self.address), self.token_b.balance_of(self.address)

    @contextmanager
    def _all_or_nothing(self) -> Iterator[None]:
        """Undo a transfer of one asset when the other asset fails to move."""
        snapshots = [(token, token.snapshot()) for token in (self.token_a, self.token_b)]
        try:
            yield
        except BaseException:
            for token, snapshot in reversed(snapshots):
                token.restore(snapshot)
            raise
