"""Tests for ShareLedger and Pool bookkeeping."""

import pytest

from simpleswap.constants import DEFAULT_ENGINE_ADDRESS
from simpleswap.errors import Forbidden, InsufficientShares, InvalidAmount
from simpleswap.pools.pool import Pool
from simpleswap.pools.shares import ShareLedger
from tests.helpers import ALICE, BOB, TOKEN_A, TOKEN_B, TOKEN_C

ENGINE = DEFAULT_ENGINE_ADDRESS


@pytest.fixture
def ledger() -> ShareLedger:
    return ShareLedger(address="0x" + "5" * 40, owner=ENGINE)


class TestMintBurn:
    """Only the owning engine can change the supply."""

    def test_mint_increases_balance_and_supply(self, ledger):
        ledger.mint(ENGINE, ALICE, 100)

        assert ledger.balance_of(ALICE) == 100
        assert ledger.total_supply == 100

    def test_mint_by_stranger_forbidden(self, ledger):
        with pytest.raises(Forbidden):
            ledger.mint(ALICE, ALICE, 100)
        assert ledger.total_supply == 0

    def test_mint_zero_rejected(self, ledger):
        with pytest.raises(InvalidAmount):
            ledger.mint(ENGINE, ALICE, 0)

    def test_burn_decreases_balance_and_supply(self, ledger):
        ledger.mint(ENGINE, ALICE, 100)
        ledger.burn(ENGINE, ALICE, 40)

        assert ledger.balance_of(ALICE) == 60
        assert ledger.total_supply == 60

    def test_burn_more_than_held(self, ledger):
        ledger.mint(ENGINE, ALICE, 100)
        ledger.mint(ENGINE, BOB, 100)

        with pytest.raises(InsufficientShares):
            ledger.burn(ENGINE, ALICE, 101)
        assert ledger.total_supply == 200

    def test_burn_by_stranger_forbidden(self, ledger):
        ledger.mint(ENGINE, ALICE, 100)
        with pytest.raises(Forbidden):
            ledger.burn(ALICE, ALICE, 100)


class TestTransfer:
    """Holders move shares among themselves."""

    def test_transfer_keeps_supply(self, ledger):
        ledger.mint(ENGINE, ALICE, 100)
        ledger.transfer(ALICE, BOB, 30)

        assert ledger.balance_of(ALICE) == 70
        assert ledger.balance_of(BOB) == 30
        assert sum(ledger.holders().values()) == ledger.total_supply

    def test_full_transfer_drops_holder(self, ledger):
        ledger.mint(ENGINE, ALICE, 100)
        ledger.transfer(ALICE, BOB, 100)

        assert ledger.holders() == {BOB: 100}

    def test_transfer_more_than_held(self, ledger):
        ledger.mint(ENGINE, ALICE, 10)
        with pytest.raises(InsufficientShares):
            ledger.transfer(ALICE, BOB, 11)


class TestSnapshot:
    def test_restore_undoes_changes(self, ledger):
        ledger.mint(ENGINE, ALICE, 100)
        snapshot = ledger.snapshot()
        ledger.mint(ENGINE, BOB, 50)
        ledger.burn(ENGINE, ALICE, 100)

        ledger.restore(snapshot)

        assert ledger.total_supply == 100
        assert ledger.holders() == {ALICE: 100}


class TestPoolReserves:
    """Reserves are stored canonically and read in caller order."""

    @pytest.fixture
    def pool(self, ledger) -> Pool:
        return Pool(pair_key="0x00", asset0=TOKEN_A, asset1=TOKEN_B, share_ledger=ledger)

    def test_new_pool_is_empty(self, pool):
        assert pool.is_empty
        assert pool.total_supply == 0

    def test_reserves_for_follows_input_asset(self, pool):
        pool.set_reserves_for(TOKEN_B, 200, 100)

        assert (pool.reserve0, pool.reserve1) == (100, 200)
        assert pool.reserves_for(TOKEN_A) == (100, 200)
        assert pool.reserves_for(TOKEN_B) == (200, 100)
        assert not pool.is_empty

    def test_one_sided_pool_is_empty(self, pool):
        pool.set_reserves_for(TOKEN_A, 100, 0)
        assert pool.is_empty

    def test_foreign_asset_rejected(self, pool):
        assert not pool.has_asset(TOKEN_C)
        with pytest.raises(ValueError):
            pool.reserves_for(TOKEN_C)
