"""Settlement engine interface.

The settlement engine (a vault holding pool balances) is an external
collaborator: it reports pool state and executes swaps. Nothing here
implements it; tests and the backtest driver plug in their own.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from seesaw.math.fixed_point import fp_context, fp_div
from seesaw.prices import get_reference_price

if TYPE_CHECKING:
    from seesaw.arbitrage.opportunity import TradeInstruction
    from seesaw.pools.base import PoolState

# Reference value each token starts with when seeding a pool
DEFAULT_INITIAL_VALUE = Decimal(1000)


@runtime_checkable
class SettlementEngine(Protocol):
    """What the backtest needs from the settlement engine."""

    def get_pool_state(self, pool_id: str) -> PoolState:
        """Return the current snapshot of a pool."""
        ...

    def execute_swap(self, instruction: TradeInstruction) -> None:
        """Execute an exact-in swap against the pool."""
        ...


def initial_balances_for_prices(
    tokens: Sequence[str],
    prices: Mapping[str, float],
    value: Decimal | int = DEFAULT_INITIAL_VALUE,
) -> tuple[Decimal, ...]:
    """Balances that give every token the same reference value.

    balance[i] = value / price[token_i]

    Raises:
        MissingReferencePrice: If a token has no positive reference price
    """
    value = Decimal(value)
    balances = []
    with fp_context():
        for token in tokens:
            price = Decimal(str(get_reference_price(prices, token)))
            balances.append(fp_div(value, price))
    return tuple(balances)


__all__ = ["SettlementEngine", "DEFAULT_INITIAL_VALUE", "initial_balances_for_prices"]
