"""Pytest configuration and fixtures."""

from collections.abc import Callable

import pytest

from simpleswap.assets.ledger import InMemoryAssetLedger
from simpleswap.clock import FixedClock
from simpleswap.engine.simple_swap import SimpleSwap
from tests.helpers import (
    ALICE,
    INITIAL_BALANCE,
    OWNER,
    START_TIME,
    TEN_MINUTES,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    fund,
    make_engine,
    make_token,
)


@pytest.fixture
def clock() -> FixedClock:
    """Pinned clock starting at START_TIME."""
    return FixedClock(START_TIME)


@pytest.fixture
def deadline(clock: FixedClock) -> int:
    """A deadline ten minutes in the future."""
    return clock.now() + TEN_MINUTES


@pytest.fixture
def token_a() -> InMemoryAssetLedger:
    return make_token(TOKEN_A, "TKA")


@pytest.fixture
def token_b() -> InMemoryAssetLedger:
    return make_token(TOKEN_B, "TKB")


@pytest.fixture
def token_c() -> InMemoryAssetLedger:
    return make_token(TOKEN_C, "TKC", decimals=6)


@pytest.fixture
def engine(
    clock: FixedClock,
    token_a: InMemoryAssetLedger,
    token_b: InMemoryAssetLedger,
    token_c: InMemoryAssetLedger,
) -> SimpleSwap:
    """Engine with all three assets registered.

    OWNER holds INITIAL_BALANCE of every asset, approved to the engine.
    ALICE holds 1000 of TOKEN_A, approved to the engine.
    """
    swap = make_engine(token_a, token_b, token_c, clock=clock)
    for token in (token_a, token_b, token_c):
        fund(token, OWNER, INITIAL_BALANCE, spender=swap.address)
    fund(token_a, ALICE, 1000, spender=swap.address)
    return swap


@pytest.fixture
def add_liquidity(engine: SimpleSwap, deadline: int) -> Callable[..., tuple[int, int, int]]:
    """Add liquidity from OWNER with zero minimums."""

    def _add(
        amount_a: int,
        amount_b: int,
        asset_a: str = TOKEN_A,
        asset_b: str = TOKEN_B,
    ) -> tuple[int, int, int]:
        return engine.add_liquidity(
            OWNER, asset_a, asset_b, amount_a, amount_b, 0, 0, OWNER, deadline
        )

    return _add


@pytest.fixture
def funded_pool(add_liquidity: Callable[..., tuple[int, int, int]]) -> tuple[int, int, int]:
    """TOKEN_A/TOKEN_B pool seeded with (1000, 1000)."""
    return add_liquidity(1000, 1000)
