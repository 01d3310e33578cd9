"""SimpleSwap error classes.

Every failure raised by the ledger derives from SimpleSwapError and carries
a ``kind`` tag so callers (and the HTTP layer) can dispatch on the failure
class without matching on messages. An error always aborts the whole
operation; the engine rolls back any partial state before it propagates.
"""

from typing import ClassVar


class SimpleSwapError(Exception):
    """Base error for ledger operations."""

    kind: ClassVar[str] = "SimpleSwapError"


class Expired(SimpleSwapError):
    """Current time is past the caller-supplied deadline."""

    kind = "Expired"


class Slippage(SimpleSwapError):
    """Realized amount fell below the caller's minimum."""

    kind = "Slippage"


class NoLiquidity(SimpleSwapError):
    """Pool is missing or has no outstanding shares."""

    kind = "NoLiquidity"


class NoReserves(SimpleSwapError):
    """Pool is missing or one of its reserves is zero."""

    kind = "NoReserves"


class InvalidPath(SimpleSwapError):
    """Swap path does not name exactly two assets."""

    kind = "InvalidPath"


class Forbidden(SimpleSwapError):
    """Caller is not allowed to perform this action."""

    kind = "Forbidden"


class NotFound(SimpleSwapError, LookupError):
    """A requested record does not exist."""

    kind = "NotFound"


class PairNotFound(NotFound):
    """No pool has been created for the pair."""

    pass


class UnknownAsset(NotFound):
    """Asset has no ledger registered with the engine."""

    pass


class IdenticalAssets(SimpleSwapError, ValueError):
    """Both sides of a pair are the same asset."""

    kind = "IdenticalAssets"


class InvalidAmount(SimpleSwapError, ValueError):
    """Amount is non-positive or rounds to zero."""

    kind = "InvalidAmount"


class InsufficientShares(SimpleSwapError):
    """Share burn or transfer exceeds the holder's balance."""

    kind = "InsufficientShares"


class Locked(SimpleSwapError):
    """Pool is already inside an operation (reentrant call)."""

    kind = "Locked"


class TransferFailure(SimpleSwapError):
    """Asset ledger refused to move value."""

    kind = "TransferFailure"


class InsufficientBalance(TransferFailure):
    """Sender does not hold enough of the asset."""

    pass


class InsufficientAllowance(TransferFailure):
    """Spender has not been approved for enough of the asset."""

    pass


class ArithmeticOverflow(SimpleSwapError, ArithmeticError):
    """Checked arithmetic left its valid range.

    Never expected to surface when the engine's bounds checks are correct.
    """

    kind = "ArithmeticOverflow"


class CooldownActive(SimpleSwapError):
    """Faucet request made before the recipient's cooldown elapsed."""

    kind = "CooldownActive"


__all__ = [
    "SimpleSwapError",
    "Expired",
    "Slippage",
    "NoLiquidity",
    "NoReserves",
    "InvalidPath",
    "Forbidden",
    "NotFound",
    "PairNotFound",
    "UnknownAsset",
    "IdenticalAssets",
    "InvalidAmount",
    "InsufficientShares",
    "Locked",
    "TransferFailure",
    "InsufficientBalance",
    "InsufficientAllowance",
    "ArithmeticOverflow",
    "CooldownActive",
]
