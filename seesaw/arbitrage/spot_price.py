"""Trade sizing: the input amount that moves a pool to a target spot price.

The post-trade spot price of an exact-in trade on a weighted pool is

    SP(Ai) = SP(0) * (1 + Ai * (1 - f) / Bi)^((wi + wo) / wo)

which is increasing and convex in Ai. Dropping the fee multiplier on Ai
gives a closed-form inverse, used as the starting estimate. A fixed number of
Newton steps against the fee-inclusive curve then refine it. Starting below
the root, the first step lands at or above it and later steps descend
monotonically, so a handful of iterations is enough for realistic targets.

There is no convergence check: the iteration count is the whole budget.
Targets far from the current price or extreme weights may leave the estimate
short of the target; callers that need bounded trade sizes clamp externally.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from seesaw.math.fixed_point import ONE, ZERO, fp_context, fp_div, fp_pow
from seesaw.pools.errors import InvalidTradeSize
from seesaw.pools.weighted import (
    WeightedPoolPairData,
    derivative_spot_price_after_swap_exact_token_in_for_token_out,
    spot_price,
    spot_price_after_swap_exact_token_in_for_token_out,
)

from .config import DEFAULT_NUM_ITERATIONS

logger = structlog.get_logger()


def get_amount_in_for_spot_price_no_fees(
    pair: WeightedPoolPairData, desired_spot_price: Decimal
) -> Decimal:
    """Closed-form trade size ignoring the fee's effect on the trade amount.

    Formula:
        Ai = Bi * ((SP_desired / SP)^(wo / (wi + wo)) - 1)

    SP is the current fee-inclusive spot price, so the estimate is exact up
    to the (1 - f) factor on Ai and is zero when the pool is already at the
    desired price.

    Raises:
        ValueError: If desired_spot_price is not positive
        InvalidPoolState: If a balance or weight of the pair is zero
    """
    if desired_spot_price <= 0:
        raise ValueError(f"Desired spot price must be positive, got {desired_spot_price}")

    current = spot_price(pair)
    with fp_context():
        exponent = pair.weight_out / (pair.weight_in + pair.weight_out)
        return pair.balance_in * (fp_pow(fp_div(desired_spot_price, current), exponent) - ONE)


def get_extra_amount_in(
    pair: WeightedPoolPairData,
    current_spot_price: Decimal,
    amount_in: Decimal,
    desired_spot_price: Decimal,
) -> Decimal:
    """Newton correction to amount_in toward desired_spot_price.

    Formula:
        dAi = (SP_desired - SP(Ai)) / SP'(Ai)

    Args:
        pair: Pair data of the pool being traded
        current_spot_price: SP(amount_in), the spot price after the current estimate
        amount_in: Current trade size estimate
        desired_spot_price: Target spot price

    Returns:
        The signed correction to add to amount_in
    """
    derivative = derivative_spot_price_after_swap_exact_token_in_for_token_out(pair, amount_in)
    return fp_div(desired_spot_price - current_spot_price, derivative)


def get_amount_in_for_spot_price(
    pair: WeightedPoolPairData,
    desired_spot_price: Decimal,
    num_iterations: int = DEFAULT_NUM_ITERATIONS,
) -> Decimal:
    """Trade size of token_in that brings the pair's spot price to desired_spot_price.

    Args:
        pair: Pair data for the direction being traded
        desired_spot_price: Target spot price (token_in per token_out). Must be
            at or above the current spot price: a trade in this direction can
            only raise it.
        num_iterations: Fixed number of Newton refinement steps (default: 10)

    Returns:
        Amount of token_in, in token units

    Raises:
        ValueError: If num_iterations is negative or desired_spot_price is not positive
        InvalidPoolState: If a balance or weight of the pair is zero (raised
            before any iteration)
        InvalidTradeSize: If desired_spot_price is below the current spot price
    """
    if num_iterations < 0:
        raise ValueError(f"num_iterations must be non-negative, got {num_iterations}")

    amount_in = get_amount_in_for_spot_price_no_fees(pair, desired_spot_price)
    if amount_in < 0:
        raise InvalidTradeSize(
            f"Desired spot price {desired_spot_price} is below the current spot price "
            f"{spot_price(pair)} of {pair.token_out} in {pair.token_in}; trade the other direction"
        )

    spot_price_after = spot_price_after_swap_exact_token_in_for_token_out(pair, amount_in)
    for _ in range(num_iterations):
        extra_amount_in = get_extra_amount_in(pair, spot_price_after, amount_in, desired_spot_price)
        # Rounding can push a zero-size trade just below zero
        amount_in = max(amount_in + extra_amount_in, ZERO)
        spot_price_after = spot_price_after_swap_exact_token_in_for_token_out(pair, amount_in)

    logger.debug(
        "amount_in_for_spot_price",
        pool_id=pair.id,
        token_in=pair.token_in,
        token_out=pair.token_out,
        desired_spot_price=str(desired_spot_price),
        spot_price_after=str(spot_price_after),
        amount_in=str(amount_in),
        iterations=num_iterations,
    )
    return amount_in


__all__ = [
    "get_amount_in_for_spot_price",
    "get_amount_in_for_spot_price_no_fees",
    "get_extra_amount_in",
]
