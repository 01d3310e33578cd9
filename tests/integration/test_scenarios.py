"""End-to-end scenarios and ledger-wide properties."""

import pytest

from simpleswap.errors import InvalidPath, NoLiquidity, NoReserves, Slippage
from tests.helpers import ALICE, OWNER, TOKEN_A, TOKEN_B


class TestScenarios:
    def test_first_deposit_into_empty_pool(self, engine, add_liquidity):
        _, _, shares = add_liquidity(1000, 1000)

        assert shares > 0
        assert engine.get_reserves(TOKEN_A, TOKEN_B) == (1000, 1000)

    def test_price_of_fresh_pool(self, engine, add_liquidity):
        add_liquidity(1000, 2000)
        assert engine.get_price(TOKEN_A, TOKEN_B) == 2000 * 10**18 // 1000

    def test_one_asset_path(self, engine, funded_pool, deadline):
        with pytest.raises(InvalidPath):
            engine.swap_exact_tokens_for_tokens(ALICE, 100, 0, [TOKEN_A], ALICE, deadline)

    def test_remove_from_pool_without_shares(self, engine, funded_pool, deadline):
        engine.remove_liquidity(OWNER, TOKEN_A, TOKEN_B, 1000, 0, 0, OWNER, deadline)

        assert engine.share_ledger(TOKEN_A, TOKEN_B).total_supply == 0
        with pytest.raises(NoLiquidity):
            engine.remove_liquidity(OWNER, TOKEN_A, TOKEN_B, 1, 0, 0, OWNER, deadline)

    def test_price_of_drained_pool(self, engine, funded_pool, deadline):
        engine.remove_liquidity(OWNER, TOKEN_A, TOKEN_B, 1000, 0, 0, OWNER, deadline)
        with pytest.raises(NoReserves):
            engine.get_price(TOKEN_A, TOKEN_B)

    def test_remove_with_minimums_above_payout(self, engine, funded_pool, deadline):
        with pytest.raises(Slippage):
            engine.remove_liquidity(OWNER, TOKEN_A, TOKEN_B, 1000, 10_000, 10_000, OWNER, deadline)

    def test_trader_round_trip_loses_to_fees(self, engine, funded_pool, deadline, token_a):
        """Swapping there and back never returns more than was sold."""
        out_b = engine.swap_exact_tokens_for_tokens(
            ALICE, 100, 0, [TOKEN_A, TOKEN_B], ALICE, deadline
        )
        engine.state.asset(TOKEN_B).approve(ALICE, engine.address, out_b)
        out_a = engine.swap_exact_tokens_for_tokens(
            ALICE, out_b, 0, [TOKEN_B, TOKEN_A], ALICE, deadline
        )

        assert out_a < 100
        assert token_a.balance_of(ALICE) == 900 + out_a


class TestProperties:
    @pytest.mark.parametrize(
        "desired_a,desired_b",
        [(1000, 1000), (1000, 2000), (7, 900_000), (123_456, 789)],
    )
    def test_first_deposit_sets_reserves_exactly(self, engine, add_liquidity, desired_a, desired_b):
        _, _, shares = add_liquidity(desired_a, desired_b)

        assert shares > 0
        assert engine.get_reserves(TOKEN_A, TOKEN_B) == (desired_a, desired_b)

    def test_deposits_preserve_ratio(self, engine, add_liquidity):
        add_liquidity(12_345, 67_890)
        for desired_a, desired_b in [(1000, 1000), (50, 9999), (7777, 30_000), (1, 100)]:
            old_a, old_b = engine.get_reserves(TOKEN_A, TOKEN_B)
            add_liquidity(desired_a, desired_b)
            new_a, new_b = engine.get_reserves(TOKEN_A, TOKEN_B)

            # Cross-multiplied ratio drifts by less than one unit of either reserve
            assert abs(new_a * old_b - new_b * old_a) < max(old_a, old_b)

    def test_remove_then_add_never_creates_shares(self, engine, add_liquidity, funded_pool, deadline):
        engine.swap_exact_tokens_for_tokens(ALICE, 100, 0, [TOKEN_A, TOKEN_B], ALICE, deadline)

        amount_a, amount_b = engine.remove_liquidity(
            OWNER, TOKEN_A, TOKEN_B, 333, 0, 0, OWNER, deadline
        )
        _, _, shares = add_liquidity(amount_a, amount_b)

        assert (amount_a, amount_b) == (366, 303)
        assert shares <= 333

    def test_swaps_never_decrease_product(self, engine, add_liquidity, deadline):
        add_liquidity(40_000, 90_000)
        for i in range(20):
            before_a, before_b = engine.get_reserves(TOKEN_A, TOKEN_B)
            path = [TOKEN_A, TOKEN_B] if i % 3 else [TOKEN_B, TOKEN_A]
            engine.swap_exact_tokens_for_tokens(OWNER, 100 * (i + 1), 0, path, OWNER, deadline)
            after_a, after_b = engine.get_reserves(TOKEN_A, TOKEN_B)

            assert after_a * after_b >= before_a * before_b

    def test_reserves_match_engine_holdings(self, engine, add_liquidity, deadline, token_a, token_b):
        add_liquidity(5000, 8000)
        engine.swap_exact_tokens_for_tokens(ALICE, 400, 0, [TOKEN_A, TOKEN_B], ALICE, deadline)
        engine.remove_liquidity(OWNER, TOKEN_A, TOKEN_B, 1234, 0, 0, OWNER, deadline)

        reserve_a, reserve_b = engine.get_reserves(TOKEN_A, TOKEN_B)
        assert token_a.balance_of(engine.address) == reserve_a
        assert token_b.balance_of(engine.address) == reserve_b

        shares = engine.share_ledger(TOKEN_A, TOKEN_B)
        assert sum(shares.holders().values()) == shares.total_supply
