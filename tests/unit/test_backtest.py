"""Tests for the backtest driver and settlement helpers."""

from decimal import Decimal

import pytest

from seesaw.arbitrage import ArbitrageOppFinder, TradeInstruction
from seesaw.backtest import Backtest, BacktestStep
from seesaw.pools import PoolState
from seesaw.prices import MissingReferencePrice
from seesaw.settlement import SettlementEngine, initial_balances_for_prices
from tests.helpers import POOL_ID, TOKEN_A, TOKEN_B, make_pool_state


class FakeEngine:
    """Settlement engine that serves a fixed pool and records swaps."""

    def __init__(self, state: PoolState) -> None:
        self.state = state
        self.swaps: list[TradeInstruction] = []

    def get_pool_state(self, pool_id: str) -> PoolState:
        assert pool_id == self.state.id
        return self.state

    def execute_swap(self, instruction: TradeInstruction) -> None:
        self.swaps.append(instruction)


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine(make_pool_state(swap_fee="0"))


class TestSettlementEngine:
    """Tests for the engine protocol and pool seeding."""

    def test_fake_engine_satisfies_protocol(self, engine):
        assert isinstance(engine, SettlementEngine)

    def test_initial_balances_equal_value(self):
        balances = initial_balances_for_prices([TOKEN_A, TOKEN_B], {TOKEN_A: 2.0, TOKEN_B: 0.5})
        assert balances == (Decimal(500), Decimal(2000))

    def test_initial_balances_custom_value(self):
        balances = initial_balances_for_prices([TOKEN_A], {TOKEN_A: 4.0}, value=10)
        assert balances == (Decimal("2.5"),)

    def test_initial_balances_missing_price_raises(self):
        with pytest.raises(MissingReferencePrice):
            initial_balances_for_prices([TOKEN_A, TOKEN_B], {TOKEN_A: 1.0})


class TestBacktestStep:
    """Tests for evaluating a single snapshot."""

    def test_opportunity_found(self, engine):
        step = Backtest(engine, POOL_ID).on_block(1000, {TOKEN_A: 1.0, TOKEN_B: 1.2})
        assert step.instruction is not None
        assert step.instruction.asset_in_index == 0
        assert not step.executed
        assert not step.skipped
        assert engine.swaps == []

    def test_no_opportunity(self, engine):
        step = Backtest(engine, POOL_ID).on_block(1000, {TOKEN_A: 1.0, TOKEN_B: 1.0})
        assert step == BacktestStep(timestamp=1000)

    def test_execute_hands_trade_to_engine(self, engine):
        step = Backtest(engine, POOL_ID, execute=True).on_block(1000, {TOKEN_A: 1.2, TOKEN_B: 1.0})
        assert step.executed
        assert engine.swaps == [step.instruction]
        assert engine.swaps[0].asset_in_index == 1

    def test_missing_price_skips_snapshot(self, engine):
        step = Backtest(engine, POOL_ID).on_block(1000, {TOKEN_A: 1.0})
        assert step.skipped
        assert step.instruction is None
        assert "No reference price" in step.error

    def test_infinite_price_skips_snapshot(self, engine):
        step = Backtest(engine, POOL_ID).on_block(1000, {TOKEN_A: 1.0, TOKEN_B: float("inf")})
        assert step.skipped
        assert "finite" in step.error

    def test_pool_error_skips_snapshot(self):
        engine = FakeEngine(make_pool_state(balances=("0", "1000")))
        step = Backtest(engine, POOL_ID).on_block(1000, {TOKEN_A: 1.0, TOKEN_B: 2.0})
        assert step.skipped


class TestBacktestRun:
    """Tests for a full replay."""

    def test_run_in_time_order(self, engine):
        prices = {
            3000: {TOKEN_A: 1.2, TOKEN_B: 1.0},
            1000: {TOKEN_A: 1.0, TOKEN_B: 1.0},
            2000: {TOKEN_A: 1.0, TOKEN_B: 1.2},
        }
        result = Backtest(engine, POOL_ID, execute=True).run(prices)

        assert [step.timestamp for step in result.steps] == [1000, 2000, 3000]
        assert len(result.trades) == 2
        assert result.skipped == []
        assert engine.swaps == result.trades

    def test_run_continues_after_skip(self, engine):
        prices = {
            1000: {TOKEN_A: 1.0},
            2000: {TOKEN_A: 1.0, TOKEN_B: 1.2},
        }
        result = Backtest(engine, POOL_ID).run(prices)

        assert len(result.skipped) == 1
        assert len(result.trades) == 1

    def test_run_continues_after_infinite_price(self, engine):
        prices = {
            1: {TOKEN_A: 1.0, TOKEN_B: float("inf")},
            2: {TOKEN_A: 1.0, TOKEN_B: 1.2},
        }
        result = Backtest(engine, POOL_ID).run(prices)

        assert [step.timestamp for step in result.skipped] == [1]
        assert len(result.trades) == 1
        assert result.steps[1].instruction is not None

    def test_custom_finder(self, engine):
        finder = ArbitrageOppFinder()
        backtest = Backtest(engine, POOL_ID, finder=finder)
        assert backtest.finder is finder
