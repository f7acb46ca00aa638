"""Weighted pool pricing model.

WeightedPool wraps a PoolState snapshot and implements PricingModel on top
of the closed-form formulas in .math.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from seesaw.math.fixed_point import fp_context

from ..base import PoolPairBase, PoolState, PoolType, SwapType
from ..errors import InvalidPoolState, UnsupportedPoolTypeError
from . import math as weighted_math

# Protocol limits: a single swap may move at most 30% of a balance
MAX_IN_RATIO = Decimal("0.3")
MAX_OUT_RATIO = Decimal("0.3")


@dataclass(frozen=True)
class WeightedPoolPairData(PoolPairBase):
    """Pair data for a weighted pool.

    Attributes:
        weight_in: Normalized weight of token_in in the whole pool
        weight_out: Normalized weight of token_out in the whole pool

    The two weights need not sum to one: they are the pair's share of a pool
    that may hold more tokens.
    """

    weight_in: Decimal
    weight_out: Decimal

    def __post_init__(self) -> None:
        super().__post_init__()
        if not (0 <= self.weight_in <= 1 and 0 <= self.weight_out <= 1):
            raise InvalidPoolState(
                f"Weights must be in [0, 1], got {self.weight_in} / {self.weight_out}"
            )


class WeightedPool:
    """Pricing model for weighted product pools.

    Usage:
        pool = WeightedPool.from_pool_state(state)
        pair = pool.parse_pool_pair_data(token_a, token_b)
        amount_out = pool.swap_amount(pair, Decimal("10"), SwapType.EXACT_IN)
    """

    pool_type = PoolType.WEIGHTED

    def __init__(self, state: PoolState) -> None:
        if state.pool_type != PoolType.WEIGHTED:
            raise UnsupportedPoolTypeError(
                f"WeightedPool cannot price pool {state.id} of type {state.pool_type.value}"
            )
        self.state = state

    @classmethod
    def from_pool_state(cls, state: PoolState) -> WeightedPool:
        """Create the pricing model for a weighted pool snapshot."""
        return cls(state)

    @property
    def id(self) -> str:
        return self.state.id

    @property
    def tokens(self) -> tuple[str, ...]:
        return self.state.tokens

    # -------------------------------------------------------------------------
    # Pair data
    # -------------------------------------------------------------------------

    def parse_pool_pair_data(self, token_in: str, token_out: str) -> WeightedPoolPairData:
        """Build pair data for trading token_in for token_out.

        Raises:
            TokenNotInPoolError: If either token is not in the pool
            InvalidPoolState: If token_in and token_out are the same token
        """
        index_in = self.state.index_of(token_in)
        index_out = self.state.index_of(token_out)
        return self.pool_pair_data(index_in, index_out)

    def pool_pair_data(self, index_in: int, index_out: int) -> WeightedPoolPairData:
        """Build pair data by token index.

        Raises:
            InvalidPoolState: If an index is out of range or both indices are equal
        """
        n_tokens = len(self.state.tokens)
        if not (0 <= index_in < n_tokens and 0 <= index_out < n_tokens):
            raise InvalidPoolState(
                f"Pool {self.state.id}: token indices ({index_in}, {index_out}) "
                f"out of range for {n_tokens} tokens"
            )
        if index_in == index_out:
            raise InvalidPoolState(f"Pool {self.state.id}: cannot swap token {index_in} for itself")

        state = self.state
        return WeightedPoolPairData(
            id=state.id,
            address=state.address,
            pool_type=self.pool_type,
            token_in=state.tokens[index_in],
            token_out=state.tokens[index_out],
            decimals_in=state.decimals_of(index_in),
            decimals_out=state.decimals_of(index_out),
            balance_in=state.balances[index_in],
            balance_out=state.balances[index_out],
            swap_fee=state.swap_fee,
            weight_in=state.weights[index_in],
            weight_out=state.weights[index_out],
        )

    # -------------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------------

    def spot_price(self, pair: WeightedPoolPairData) -> Decimal:
        return weighted_math.spot_price(pair)

    def swap_amount(
        self, pair: WeightedPoolPairData, amount: Decimal, swap_type: SwapType
    ) -> Decimal:
        """Amount out for an exact input, or amount in for an exact output."""
        if swap_type == SwapType.EXACT_IN:
            return weighted_math.exact_token_in_for_token_out(pair, amount)
        return weighted_math.token_in_for_exact_token_out(pair, amount)

    def spot_price_after_swap(
        self, pair: WeightedPoolPairData, amount: Decimal, swap_type: SwapType
    ) -> Decimal:
        if swap_type == SwapType.EXACT_IN:
            return weighted_math.spot_price_after_swap_exact_token_in_for_token_out(pair, amount)
        return weighted_math.spot_price_after_swap_token_in_for_exact_token_out(pair, amount)

    def derivative_spot_price_after_swap(
        self, pair: WeightedPoolPairData, amount: Decimal, swap_type: SwapType
    ) -> Decimal:
        if swap_type == SwapType.EXACT_IN:
            return weighted_math.derivative_spot_price_after_swap_exact_token_in_for_token_out(
                pair, amount
            )
        return weighted_math.derivative_spot_price_after_swap_token_in_for_exact_token_out(
            pair, amount
        )

    # -------------------------------------------------------------------------
    # Limits and liquidity
    # -------------------------------------------------------------------------

    def get_limit_amount_swap(self, pair: WeightedPoolPairData, swap_type: SwapType) -> Decimal:
        """Largest trade size the pool accepts: 30% of the relevant balance."""
        with fp_context():
            if swap_type == SwapType.EXACT_IN:
                return pair.balance_in * MAX_IN_RATIO
            return pair.balance_out * MAX_OUT_RATIO

    def get_normalized_liquidity(self, pair: WeightedPoolPairData) -> Decimal:
        # Normalized liquidity is the inverse of slippage, expressed in token_out
        return weighted_math.normalized_liquidity(pair)

    def __repr__(self) -> str:
        return f"WeightedPool(id={self.state.id!r}, tokens={len(self.state.tokens)})"
