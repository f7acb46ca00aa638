#!/usr/bin/env python3
"""Replay historical reference prices against a weighted pool snapshot.

For every price snapshot, sizes the arbitrage trade that would move the pool
to the market price and prints one line per opportunity. With --execute the
trades are applied to an in-memory copy of the pool, so each snapshot sees
the balances left by the previous trade.

Usage:
    python scripts/run_backtest.py --pool pool.json --prices prices.json [--iterations N] [--execute]

The pool file holds a PoolSnapshot (on-chain integer form); the prices file
maps millisecond timestamps to {token: price}.
"""

import argparse
import json
import sys
from pathlib import Path

import structlog

sys.path.insert(0, str(Path(__file__).parent.parent))

from seesaw.arbitrage import ArbitrageConfig, ArbitrageOppFinder, TradeInstruction
from seesaw.backtest import Backtest
from seesaw.models import PoolSnapshot
from seesaw.pools import PoolState, SwapType, parse_pool_snapshot, pricing_model_for
from seesaw.prices import load_historical_prices

logger = structlog.get_logger()


class InMemoryEngine:
    """Holds one pool and applies exact-in swaps to its balances."""

    def __init__(self, state: PoolState) -> None:
        self.state = state

    def get_pool_state(self, pool_id: str) -> PoolState:
        if pool_id != self.state.id:
            raise KeyError(f"Unknown pool {pool_id}")
        return self.state

    def execute_swap(self, instruction: TradeInstruction) -> None:
        model = pricing_model_for(self.state)
        pair = model.pool_pair_data(instruction.asset_in_index, instruction.asset_out_index)
        amount_out = model.swap_amount(pair, instruction.amount, SwapType.EXACT_IN)
        self.state = self.state.with_balance(
            pair.token_in, pair.balance_in + instruction.amount
        ).with_balance(pair.token_out, pair.balance_out - amount_out)


def main() -> None:
    parser = argparse.ArgumentParser(description="Backtest arbitrage sizing on historical prices")
    parser.add_argument("--pool", type=Path, required=True, help="Pool snapshot JSON file")
    parser.add_argument("--prices", type=Path, required=True, help="Historical prices JSON file")
    parser.add_argument(
        "--iterations", type=int, default=None, help="Newton refinement steps (default: 10)"
    )
    parser.add_argument(
        "--execute", action="store_true", help="Apply each trade to the in-memory pool"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logs")
    args = parser.parse_args()

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(10 if args.verbose else 20),
    )

    with open(args.pool) as f:
        snapshot = PoolSnapshot.model_validate(json.load(f))
    pool_state = parse_pool_snapshot(snapshot)
    prices = load_historical_prices(args.prices)

    config = ArbitrageConfig.from_env()
    if args.iterations is not None:
        config = ArbitrageConfig(num_iterations=args.iterations)

    backtest = Backtest(
        InMemoryEngine(pool_state),
        pool_state.id,
        finder=ArbitrageOppFinder(config),
        execute=args.execute,
    )
    result = backtest.run(prices)

    for step in result.steps:
        if step.instruction is None:
            continue
        trade = step.instruction
        print(
            f"{step.timestamp}  sell {trade.amount:.6f} of {trade.token_in} "
            f"for {trade.token_out} (assetIn={trade.asset_in_index}, "
            f"assetOut={trade.asset_out_index})"
        )

    print()
    print(f"Snapshots: {len(result.steps)}")
    print(f"Trades:    {len(result.trades)}")
    print(f"Skipped:   {len(result.skipped)}")


if __name__ == "__main__":
    main()
