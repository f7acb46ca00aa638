"""Arbitrage opportunity detection for a single pool.

Compares a pool's spot price with the ratio of external reference prices and,
when they differ by more than the fee allows, sizes the trade that brings the
pool back in line with the market.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

import structlog

from seesaw.math.fixed_point import ZERO, to_fp
from seesaw.pools import PoolState, pricing_model_for
from seesaw.prices import ReferencePriceSnapshot, reference_ratio

from .config import DEFAULT_ARBITRAGE_CONFIG, ArbitrageConfig
from .spot_price import get_amount_in_for_spot_price

logger = structlog.get_logger()


@dataclass(frozen=True)
class TradeInstruction:
    """A single exact-in swap to hand to the settlement engine.

    Attributes:
        pool_id: Pool to trade against
        asset_in_index: Index of the token sold into the pool
        asset_out_index: Index of the token bought from the pool
        amount: Exact amount of the input token, in token units
        user_data: Auxiliary call data for the pool (hex string)
        token_in: Address of the input token (informational)
        token_out: Address of the output token (informational)
        decimals_in: Decimals of the input token, used by raw_amount
    """

    pool_id: str
    asset_in_index: int
    asset_out_index: int
    amount: Decimal
    user_data: str = "0x"
    token_in: str = ""
    token_out: str = ""
    decimals_in: int = 18

    def __post_init__(self) -> None:
        if self.asset_in_index == self.asset_out_index:
            raise ValueError(
                f"asset_in_index and asset_out_index must differ, both are {self.asset_in_index}"
            )
        if self.amount < 0:
            raise ValueError(f"Trade amount must be non-negative, got {self.amount}")

    @property
    def raw_amount(self) -> int:
        """Amount in the input token's integer base units, rounded down."""
        return to_fp(self.amount, self.decimals_in)


class ArbitrageOppFinder:
    """Finds the trade that moves a pool's spot price to the market price.

    An arbitrageur only trades toward the reference price: selling token_in
    raises the pool's price of token_out in token_in, so the direction is
    chosen such that the desired price lies above the current one.

    Usage:
        finder = ArbitrageOppFinder()
        trade = finder.find(pool_state, {token_a: 1.0, token_b: 2.5})
    """

    def __init__(self, config: ArbitrageConfig = DEFAULT_ARBITRAGE_CONFIG) -> None:
        self.config = config

    def find(
        self,
        pool_state: PoolState,
        reference_prices: ReferencePriceSnapshot,
        asset_in_index: int = 0,
        asset_out_index: int = 1,
    ) -> TradeInstruction | None:
        """Size the arbitrage trade for one token pair of a pool.

        Args:
            pool_state: Current pool snapshot
            reference_prices: Market price per token address
            asset_in_index: Index of the candidate input token (default: 0)
            asset_out_index: Index of the candidate output token (default: 1)

        Returns:
            The trade instruction, or None if the pool already sits within the
            fee band around the market price

        Raises:
            MissingReferencePrice: If either token lacks a positive reference price
            PoolError: If the pool cannot be priced
            FixedPointError: On arithmetic failure inside the solver
        """
        model = pricing_model_for(pool_state)

        pair = model.pool_pair_data(asset_in_index, asset_out_index)
        desired = reference_ratio(reference_prices, pair.token_in, pair.token_out)
        current = model.spot_price(pair)

        if desired < current:
            asset_in_index, asset_out_index = asset_out_index, asset_in_index
            pair = model.pool_pair_data(asset_in_index, asset_out_index)
            desired = reference_ratio(reference_prices, pair.token_in, pair.token_out)
            current = model.spot_price(pair)

        if desired <= current:
            logger.debug(
                "no_arbitrage_opportunity",
                pool_id=pool_state.id,
                token_in=pair.token_in,
                token_out=pair.token_out,
                spot_price=str(current),
                desired_spot_price=str(desired),
            )
            return None

        amount_in = get_amount_in_for_spot_price(pair, desired, self.config.num_iterations)
        amount_in = max(amount_in, ZERO)

        instruction = TradeInstruction(
            pool_id=pool_state.id,
            asset_in_index=asset_in_index,
            asset_out_index=asset_out_index,
            amount=amount_in,
            token_in=pair.token_in,
            token_out=pair.token_out,
            decimals_in=pair.decimals_in,
        )

        logger.info(
            "arbitrage_trade",
            pool_id=pool_state.id,
            token_in=pair.token_in,
            token_out=pair.token_out,
            spot_price=str(current),
            desired_spot_price=str(desired),
            amount_in=str(amount_in),
        )
        return instruction


def identify_arbitrage_opp(
    reference_prices: ReferencePriceSnapshot,
    pool_state: PoolState,
    config: ArbitrageConfig | None = None,
) -> TradeInstruction | None:
    """Convenience wrapper: find the opportunity between a pool's first two tokens."""
    finder = ArbitrageOppFinder(config or DEFAULT_ARBITRAGE_CONFIG)
    return finder.find(pool_state, reference_prices)


__all__ = ["TradeInstruction", "ArbitrageOppFinder", "identify_arbitrage_opp"]
