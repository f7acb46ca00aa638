"""Tests for arbitrage opportunity detection."""

from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from seesaw.arbitrage import (
    ArbitrageConfig,
    ArbitrageOppFinder,
    TradeInstruction,
    get_amount_in_for_spot_price_no_fees,
    identify_arbitrage_opp,
)
from seesaw.math.fixed_point import fp_is_close
from seesaw.pools import PoolType, SwapType, UnsupportedPoolTypeError, WeightedPool
from seesaw.prices import MissingReferencePrice
from tests.helpers import POOL_ID, TOKEN_A, TOKEN_B, TOKEN_C, make_pair, make_pool_state


def _price_after(pool_state, instruction: TradeInstruction) -> Decimal:
    pool = WeightedPool(pool_state)
    pair = pool.pool_pair_data(instruction.asset_in_index, instruction.asset_out_index)
    return pool.spot_price_after_swap(pair, instruction.amount, SwapType.EXACT_IN)


class TestTradeInstruction:
    """Tests for TradeInstruction invariants."""

    def test_same_indices_raise(self):
        with pytest.raises(ValueError, match="differ"):
            TradeInstruction(pool_id=POOL_ID, asset_in_index=1, asset_out_index=1, amount=Decimal(1))

    def test_negative_amount_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            TradeInstruction(pool_id=POOL_ID, asset_in_index=0, asset_out_index=1, amount=Decimal(-1))

    def test_raw_amount_rounds_down(self):
        instruction = TradeInstruction(
            pool_id=POOL_ID,
            asset_in_index=0,
            asset_out_index=1,
            amount=Decimal("1.23456789"),
            decimals_in=6,
        )
        assert instruction.raw_amount == 1_234_567
        assert instruction.user_data == "0x"


class TestEndToEnd:
    """30/70 pool with a 0.3% fee against a market price of 2.5."""

    def test_trade_reaches_market_price(self, skewed_pool, reference_prices):
        instruction = identify_arbitrage_opp(reference_prices, skewed_pool)

        assert instruction is not None
        assert instruction.pool_id == POOL_ID
        assert (instruction.asset_in_index, instruction.asset_out_index) == (0, 1)
        assert (instruction.token_in, instruction.token_out) == (TOKEN_A, TOKEN_B)
        assert fp_is_close(instruction.amount, Decimal("47.42"), rel_tol=Decimal("1e-3"))
        assert fp_is_close(
            _price_after(skewed_pool, instruction), Decimal("2.5"), rel_tol=Decimal("0.001")
        )

    def test_logs_trade(self, skewed_pool, reference_prices):
        with capture_logs() as logs:
            identify_arbitrage_opp(reference_prices, skewed_pool)
        events = [log for log in logs if log["event"] == "arbitrage_trade"]
        assert len(events) == 1
        assert events[0]["log_level"] == "info"
        assert events[0]["pool_id"] == POOL_ID


class TestDirection:
    """The finder always trades toward the market price."""

    def test_sells_token_the_pool_overvalues(self):
        """Token B 10% more valuable: the pool overvalues A, so sell A."""
        state = make_pool_state(swap_fee="0")
        instruction = identify_arbitrage_opp({TOKEN_A: 1.0, TOKEN_B: 1.1}, state)

        assert instruction is not None
        assert (instruction.asset_in_index, instruction.asset_out_index) == (0, 1)
        assert fp_is_close(_price_after(state, instruction), Decimal("1.1"), rel_tol=Decimal("1e-9"))

    def test_flips_direction_when_default_is_wrong(self):
        """Token A 10% more valuable: the default direction would move away from the market."""
        state = make_pool_state(swap_fee="0")
        instruction = identify_arbitrage_opp({TOKEN_A: 1.1, TOKEN_B: 1.0}, state)

        assert instruction is not None
        assert (instruction.asset_in_index, instruction.asset_out_index) == (1, 0)
        assert (instruction.token_in, instruction.token_out) == (TOKEN_B, TOKEN_A)
        assert fp_is_close(_price_after(state, instruction), Decimal("1.1"), rel_tol=Decimal("1e-9"))

    def test_explicit_indices(self):
        state = make_pool_state(
            balances=("1000", "1000", "1000"),
            weights=("0.25", "0.25", "0.5"),
            tokens=(TOKEN_A, TOKEN_B, TOKEN_C),
        )
        prices = {TOKEN_A: 1.0, TOKEN_B: 1.0, TOKEN_C: 3.0}
        instruction = ArbitrageOppFinder().find(state, prices, asset_in_index=0, asset_out_index=2)

        assert instruction is not None
        assert (instruction.token_in, instruction.token_out) == (TOKEN_A, TOKEN_C)


class TestNoOpportunity:
    """Prices inside the fee band yield no trade."""

    def test_equal_prices_with_fee(self, balanced_pool):
        """Both directions quote above 1 because of the fee, so neither trade pays."""
        with capture_logs() as logs:
            instruction = identify_arbitrage_opp({TOKEN_A: 1.0, TOKEN_B: 1.0}, balanced_pool)

        assert instruction is None
        assert any(log["event"] == "no_arbitrage_opportunity" for log in logs)

    def test_at_spot_price_without_fee(self):
        state = make_pool_state(swap_fee="0")
        assert identify_arbitrage_opp({TOKEN_A: 2.0, TOKEN_B: 2.0}, state) is None


class TestConfiguration:
    """Tests for the finder configuration."""

    def test_iterations_from_config(self, skewed_pool, reference_prices):
        finder = ArbitrageOppFinder(ArbitrageConfig(num_iterations=0))
        instruction = finder.find(skewed_pool, reference_prices)
        estimate = get_amount_in_for_spot_price_no_fees(make_pair(skewed_pool), Decimal("2.5"))
        assert instruction is not None
        assert instruction.amount == estimate

    def test_negative_iterations_rejected(self):
        with pytest.raises(ValueError):
            ArbitrageConfig(num_iterations=-1)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SEESAW_NUM_ITERATIONS", "4")
        assert ArbitrageConfig.from_env().num_iterations == 4

    def test_from_env_default(self, monkeypatch):
        monkeypatch.delenv("SEESAW_NUM_ITERATIONS", raising=False)
        assert ArbitrageConfig.from_env().num_iterations == 10


class TestErrors:
    """Errors propagate from the finder."""

    def test_missing_price_raises(self, skewed_pool):
        with pytest.raises(MissingReferencePrice):
            identify_arbitrage_opp({TOKEN_A: 1.0}, skewed_pool)

    def test_zero_price_raises(self, skewed_pool):
        with pytest.raises(MissingReferencePrice):
            identify_arbitrage_opp({TOKEN_A: 1.0, TOKEN_B: 0.0}, skewed_pool)

    def test_unsupported_pool_type_raises(self, reference_prices):
        state = make_pool_state(pool_type=PoolType.STABLE)
        with pytest.raises(UnsupportedPoolTypeError):
            identify_arbitrage_opp(reference_prices, state)
