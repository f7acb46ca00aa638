"""Weighted pool pricing math.

Closed-form swap amounts, post-swap spot prices and spot-price derivatives
for one (token_in, token_out) slice of a weighted product pool.

Notation used throughout:
    Bi, Bo: balances of token_in / token_out
    wi, wo: normalized weights of token_in / token_out
    Ai, Ao: trade size in token_in (exact in) / token_out (exact out)
    f:      swap fee fraction

Spot prices are tokenIn per tokenOut, so they grow with the trade size.
The fee only ever appears as (1 - f) or f * x, never as a divisor.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from seesaw.math.fixed_point import ONE, ZERO, fp_context, fp_pow

from ..errors import InvalidPoolState, InvalidTradeSize

if TYPE_CHECKING:
    from .pool import WeightedPoolPairData

TWO = Decimal(2)


def _pair_values(pair: WeightedPoolPairData) -> tuple[Decimal, Decimal, Decimal, Decimal, Decimal]:
    """Return (Bi, Bo, wi, wo, f), rejecting states with an undefined spot price."""
    if pair.balance_in <= 0 or pair.balance_out <= 0:
        raise InvalidPoolState(
            f"Pool {pair.id}: balances must be positive, "
            f"got {pair.balance_in} {pair.token_in} / {pair.balance_out} {pair.token_out}"
        )
    if pair.weight_in <= 0 or pair.weight_out <= 0:
        raise InvalidPoolState(
            f"Pool {pair.id}: weights must be positive, got {pair.weight_in} / {pair.weight_out}"
        )
    return pair.balance_in, pair.balance_out, pair.weight_in, pair.weight_out, pair.swap_fee


def _require_amount_in(amount: Decimal) -> None:
    if amount < 0:
        raise InvalidTradeSize(f"Input amount must be non-negative, got {amount}")


def _require_amount_out(amount: Decimal, balance_out: Decimal) -> None:
    if amount < 0:
        raise InvalidTradeSize(f"Output amount must be non-negative, got {amount}")
    if amount >= balance_out:
        raise InvalidTradeSize(f"Output amount {amount} must be less than balance {balance_out}")


# =============================================================================
# Spot price
# =============================================================================


def spot_price(pair: WeightedPoolPairData) -> Decimal:
    """Current spot price of token_out in token_in, including the fee.

    Formula:
        SP = (Bi / wi) / (Bo / wo) / (1 - f)

    Evaluated as the exact-in post-swap spot price at zero trade size, so the
    two agree to the last digit.
    """
    return spot_price_after_swap_exact_token_in_for_token_out(pair, ZERO)


def normalized_liquidity(pair: WeightedPoolPairData) -> Decimal:
    """Normalized liquidity in token_out: Bo * wi / (wi + wo).

    An abstract inverse-slippage measure: proportional to the balances and
    shaped by the weights.
    """
    _, bo, wi, wo, _ = _pair_values(pair)
    with fp_context():
        return bo * wi / (wi + wo)


# =============================================================================
# Swap amounts
# =============================================================================


def exact_token_in_for_token_out(pair: WeightedPoolPairData, amount: Decimal) -> Decimal:
    """Amount of token_out received for an exact amount of token_in.

    Formula:
        Ao = Bo * (1 - (Bi / (Bi + Ai * (1 - f)))^(wi / wo))

    The base of the power is in (0, 1], so the result is always below Bo.

    Raises:
        InvalidTradeSize: If amount is negative
        InvalidPoolState: If a balance or weight of the pair is zero
    """
    bi, bo, wi, wo, f = _pair_values(pair)
    _require_amount_in(amount)
    with fp_context():
        base = bi / (bi + amount * (ONE - f))
        return bo * (ONE - fp_pow(base, wi / wo))


def token_in_for_exact_token_out(pair: WeightedPoolPairData, amount: Decimal) -> Decimal:
    """Amount of token_in required to receive an exact amount of token_out.

    Formula:
        Ai = Bi * ((Bo / (Bo - Ao))^(wo / wi) - 1) / (1 - f)

    Raises:
        InvalidTradeSize: If amount is negative or not below balance_out
        InvalidPoolState: If a balance or weight of the pair is zero
    """
    bi, bo, wi, wo, f = _pair_values(pair)
    _require_amount_out(amount, bo)
    with fp_context():
        power = fp_pow(bo / (bo - amount), wo / wi)
        return bi * (power - ONE) / (ONE - f)


# =============================================================================
# Spot price after swap
# =============================================================================


def spot_price_after_swap_exact_token_in_for_token_out(
    pair: WeightedPoolPairData, amount: Decimal
) -> Decimal:
    """Spot price right after selling an exact amount of token_in.

    Formula:
        SP = -(Bi * wo) / (Bo * (f - 1) * (Bi / (Bi + Ai - Ai * f))^((wi + wo) / wo) * wi)

    Equals spot_price(pair) at amount == 0.
    """
    bi, bo, wi, wo, f = _pair_values(pair)
    _require_amount_in(amount)
    with fp_context():
        base = bi / (amount + bi - amount * f)
        power = fp_pow(base, (wi + wo) / wo)
        return -(bi * wo) / (bo * (f - ONE) * power * wi)


def spot_price_after_swap_token_in_for_exact_token_out(
    pair: WeightedPoolPairData, amount: Decimal
) -> Decimal:
    """Spot price right after buying an exact amount of token_out.

    Formula:
        SP = -(Bi * (Bo / (Bo - Ao))^((wi + wo) / wi) * wo) / (Bo * (f - 1) * wi)
    """
    bi, bo, wi, wo, f = _pair_values(pair)
    _require_amount_out(amount, bo)
    with fp_context():
        power = fp_pow(bo / (bo - amount), (wi + wo) / wi)
        return -(bi * power * wo) / (bo * (f - ONE) * wi)


def spot_price_after_swap_token_in_for_exact_bpt_out(
    pair: WeightedPoolPairData, amount: Decimal
) -> Decimal:
    """Spot price of pool shares (BPT) in token_in after joining for an exact BPT amount.

    Here balance_out is the pool-share supply and weight_out is unused.

    Formula:
        SP = ((Ao + Bbpt) / Bbpt)^(1 / wi) * Bi / ((Ao + Bbpt) * (1 + f * (wi - 1)) * wi)
    """
    if pair.balance_in <= 0 or pair.balance_out <= 0:
        raise InvalidPoolState(f"Pool {pair.id}: balance and share supply must be positive")
    if pair.weight_in <= 0:
        raise InvalidPoolState(f"Pool {pair.id}: weight_in must be positive")
    if amount < 0:
        raise InvalidTradeSize(f"BPT amount must be non-negative, got {amount}")

    bi, bbpt, wi, f = pair.balance_in, pair.balance_out, pair.weight_in, pair.swap_fee
    with fp_context():
        power = fp_pow((amount + bbpt) / bbpt, ONE / wi)
        return power * bi / ((amount + bbpt) * (ONE + f * (wi - ONE)) * wi)


# =============================================================================
# Derivatives of spot price after swap
# =============================================================================


def derivative_spot_price_after_swap_exact_token_in_for_token_out(
    pair: WeightedPoolPairData, amount: Decimal
) -> Decimal:
    """d(SP)/d(Ai) for an exact-in trade.

    Formula:
        (wi + wo) / (Bo * (Bi / (Bi + Ai - Ai * f))^(wi / wo) * wi)
    """
    bi, bo, wi, wo, f = _pair_values(pair)
    _require_amount_in(amount)
    with fp_context():
        base = bi / (amount + bi - amount * f)
        return (wi + wo) / (bo * fp_pow(base, wi / wo) * wi)


def derivative_spot_price_after_swap_token_in_for_exact_token_out(
    pair: WeightedPoolPairData, amount: Decimal
) -> Decimal:
    """d(SP)/d(Ao) for an exact-out trade.

    Formula:
        -(Bi * (Bo / (Bo - Ao))^(wo / wi) * wo * (wi + wo)) / ((Ao - Bo)^2 * (f - 1) * wi^2)
    """
    bi, bo, wi, wo, f = _pair_values(pair)
    _require_amount_out(amount, bo)
    with fp_context():
        power = fp_pow(bo / (bo - amount), wo / wi)
        denominator = fp_pow(amount - bo, TWO) * (f - ONE) * fp_pow(wi, TWO)
        return -(bi * power * wo * (wi + wo)) / denominator


__all__ = [
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
