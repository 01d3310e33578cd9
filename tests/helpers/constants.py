"""Shared account and asset constants for tests.

All addresses are lowercase for consistency with normalize_address().

Usage:
    from tests.helpers import TOKEN_A, TOKEN_B, OWNER
"""


def _address(suffix: str) -> str:
    return "0x" + suffix.rjust(40, "0")


# =============================================================================
# Accounts
# =============================================================================

DEPLOYER = _address("de9107e7")  # Owns (mints) every test asset
OWNER = _address("c0ffee")  # Main liquidity provider
ALICE = _address("a11ce")  # Trader
BOB = _address("b0b")  # Second trader / recipient

# =============================================================================
# Assets (TOKEN_A < TOKEN_B < TOKEN_C by address bytes)
# =============================================================================

TOKEN_A = "0x" + "a" * 39 + "1"
TOKEN_B = "0x" + "b" * 39 + "2"
TOKEN_C = "0x" + "c" * 39 + "3"

# =============================================================================
# Time and amounts
# =============================================================================

START_TIME = 1_700_000_000
TEN_MINUTES = 60 * 10
INITIAL_BALANCE = 1_000_000
