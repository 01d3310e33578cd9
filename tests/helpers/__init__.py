"""Test helpers module for shared test utilities.

- constants: Account and asset addresses, common amounts
- factories: Asset and engine factory functions
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    DEPLOYER,
    INITIAL_BALANCE,
    OWNER,
    START_TIME,
    TEN_MINUTES,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
)
from tests.helpers.factories import fund, make_engine, make_token

__all__ = [
    # Constants
    "ALICE",
    "BOB",
    "DEPLOYER",
    "INITIAL_BALANCE",
    "OWNER",
    "START_TIME",
    "TEN_MINUTES",
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    # Factories
    "fund",
    "make_engine",
    "make_token",
]
