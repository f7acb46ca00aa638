"""Weighted product pool pricing.

Closed-form formulas for the constant weighted-product invariant and the
WeightedPool pricing model built on them.
"""

from .math import (
    derivative_spot_price_after_swap_exact_token_in_for_token_out,
    derivative_spot_price_after_swap_token_in_for_exact_token_out,
    exact_token_in_for_token_out,
    normalized_liquidity,
    spot_price,
    spot_price_after_swap_exact_token_in_for_token_out,
    spot_price_after_swap_token_in_for_exact_bpt_out,
    spot_price_after_swap_token_in_for_exact_token_out,
    token_in_for_exact_token_out,
)
from .pool import MAX_IN_RATIO, MAX_OUT_RATIO, WeightedPool, WeightedPoolPairData

__all__ = [
    # Pricing model
    "WeightedPool",
    "WeightedPoolPairData",
    "MAX_IN_RATIO",
    "MAX_OUT_RATIO",
    # Math
    "spot_price",
    "normalized_liquidity",
    "exact_token_in_for_token_out",
    "token_in_for_exact_token_out",
    "spot_price_after_swap_exact_token_in_for_token_out",
    "spot_price_after_swap_token_in_for_exact_token_out",
    "spot_price_after_swap_token_in_for_exact_bpt_out",
    "derivative_spot_price_after_swap_exact_token_in_for_token_out",
    "derivative_spot_price_after_swap_token_in_for_exact_token_out",
]
