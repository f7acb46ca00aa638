"""Backtest driver: replays historical reference prices against one pool.

For every price snapshot the driver fetches a fresh pool state from the
settlement engine, asks the finder for an arbitrage trade and, when
execution is enabled, hands the trade back to the engine. A snapshot that
cannot be priced is skipped and recorded; the run continues.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

import structlog

from seesaw.arbitrage.opportunity import ArbitrageOppFinder, TradeInstruction
from seesaw.math.fixed_point import FixedPointError
from seesaw.pools.errors import PoolError
from seesaw.prices import PriceFeedError, iter_snapshots
from seesaw.settlement import SettlementEngine

logger = structlog.get_logger()


@dataclass(frozen=True)
class BacktestStep:
    """Outcome of one price snapshot.

    Attributes:
        timestamp: Snapshot timestamp (ms)
        instruction: The trade found, or None
        executed: Whether the trade was handed to the engine
        error: Error message if the snapshot was skipped
    """

    timestamp: int
    instruction: TradeInstruction | None = None
    executed: bool = False
    error: str | None = None

    @property
    def skipped(self) -> bool:
        return self.error is not None


@dataclass
class BacktestResult:
    """All steps of a backtest run, in time order."""

    steps: list[BacktestStep] = field(default_factory=list)

    @property
    def trades(self) -> list[TradeInstruction]:
        return [step.instruction for step in self.steps if step.instruction is not None]

    @property
    def skipped(self) -> list[BacktestStep]:
        return [step for step in self.steps if step.skipped]


class Backtest:
    """Replay reference prices against a pool held by a settlement engine."""

    def __init__(
        self,
        engine: SettlementEngine,
        pool_id: str,
        finder: ArbitrageOppFinder | None = None,
        execute: bool = False,
    ) -> None:
        self.engine = engine
        self.pool_id = pool_id
        self.finder = finder or ArbitrageOppFinder()
        self.execute = execute

    def on_block(self, timestamp: int, snapshot: Mapping[str, float]) -> BacktestStep:
        """Evaluate one reference price snapshot."""
        try:
            pool_state = self.engine.get_pool_state(self.pool_id)
            instruction = self.finder.find(pool_state, snapshot)
        except (PoolError, FixedPointError, PriceFeedError) as e:
            logger.warning(
                "backtest_snapshot_skipped",
                pool_id=self.pool_id,
                timestamp=timestamp,
                error=str(e),
                error_type=type(e).__name__,
            )
            return BacktestStep(timestamp=timestamp, error=str(e))

        if instruction is None:
            return BacktestStep(timestamp=timestamp)

        if self.execute:
            self.engine.execute_swap(instruction)
            logger.info(
                "backtest_swap_executed",
                pool_id=self.pool_id,
                timestamp=timestamp,
                amount_in=str(instruction.amount),
            )
        return BacktestStep(timestamp=timestamp, instruction=instruction, executed=self.execute)

    def run(self, historical_prices: Mapping[int, Mapping[str, float]]) -> BacktestResult:
        """Evaluate every snapshot in ascending time order."""
        result = BacktestResult()
        for timestamp, snapshot in iter_snapshots(dict(historical_prices)):
            result.steps.append(self.on_block(timestamp, snapshot))

        logger.info(
            "backtest_complete",
            pool_id=self.pool_id,
            snapshots=len(result.steps),
            trades=len(result.trades),
            skipped=len(result.skipped),
        )
        return result


__all__ = ["Backtest", "BacktestStep", "BacktestResult"]
