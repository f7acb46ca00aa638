"""Arbitrary-precision fixed-point arithmetic for pool pricing.

Every pricing computation runs inside FP_CONTEXT, a Decimal context wide
enough to hold uint256 values exactly (78 significant digits). On-chain
quantities arrive as integers scaled by 10^decimals and are converted with
from_fp / to_fp at the boundary; everything in between stays Decimal.

Operations that are undefined for the weighted-product curve (division by
zero, fractional powers of non-positive bases) are checked before the Decimal
operation runs and raise FixedPointError, which is an ArithmeticError.
"""

from __future__ import annotations

import decimal
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import ROUND_DOWN, ROUND_HALF_EVEN, Decimal

__all__ = [
    # Context
    "FP_CONTEXT",
    "fp_context",
    # Errors
    "FixedPointError",
    "FixedPointDivisionByZero",
    "InvalidPowerBase",
    # Arithmetic
    "fp_add",
    "fp_sub",
    "fp_mul",
    "fp_div",
    "fp_pow",
    "fp_complement",
    # Comparisons
    "fp_lt",
    "fp_le",
    "fp_gt",
    "fp_ge",
    "fp_is_close",
    # Conversions
    "from_fp",
    "to_fp",
    # Constants
    "ZERO",
    "ONE",
    "FP_DECIMALS",
]

# =============================================================================
# Constants
# =============================================================================

# 78 digits of precision: enough for uint256 values (up to ~10^77)
FP_PRECISION = 78

# On-chain fixed-point scale used for weights, fees and 18-decimal tokens
FP_DECIMALS = 18

ZERO = Decimal(0)
ONE = Decimal(1)

FP_CONTEXT = decimal.Context(
    prec=FP_PRECISION,
    rounding=ROUND_HALF_EVEN,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
)


@contextmanager
def fp_context() -> Iterator[decimal.Context]:
    """Run the enclosed Decimal operations under FP_CONTEXT."""
    with decimal.localcontext(FP_CONTEXT) as ctx:
        yield ctx


# =============================================================================
# Error classes
# =============================================================================


class FixedPointError(ArithmeticError):
    """Base error for invalid fixed-point operations."""

    pass


class FixedPointDivisionByZero(FixedPointError):
    """Divisor is zero."""

    pass


class InvalidPowerBase(FixedPointError):
    """Base is out of range for the requested exponent.

    Raised for a non-positive base with a non-integral exponent and for a
    zero base with a negative exponent.
    """

    pass


# =============================================================================
# Arithmetic
# =============================================================================


def fp_add(a: Decimal, b: Decimal) -> Decimal:
    """Return a + b."""
    with fp_context():
        return a + b


def fp_sub(a: Decimal, b: Decimal) -> Decimal:
    """Return a - b. The result may be negative."""
    with fp_context():
        return a - b


def fp_mul(a: Decimal, b: Decimal) -> Decimal:
    """Return a * b."""
    with fp_context():
        return a * b


def fp_div(a: Decimal, b: Decimal) -> Decimal:
    """Return a / b.

    Raises:
        FixedPointDivisionByZero: If b is zero
    """
    if b == 0:
        raise FixedPointDivisionByZero(f"Division of {a} by zero")
    with fp_context():
        return a / b


def fp_pow(base: Decimal, exponent: Decimal) -> Decimal:
    """Return base ** exponent for an arbitrary (possibly negative, non-integral) exponent.

    Weighted-pool formulas raise balance ratios to weight ratios, so the
    exponent is usually fractional and the base must then be positive.
    Integral exponents accept any non-zero base (the exact-out derivative
    squares a negative difference).

    Args:
        base: The base
        exponent: The exponent

    Returns:
        base ** exponent rounded to FP_CONTEXT precision

    Raises:
        InvalidPowerBase: If base <= 0 with a non-integral exponent, or
            base == 0 with a negative exponent
    """
    if exponent == 0:
        return ONE

    integral = exponent == exponent.to_integral_value()

    if base == 0:
        if exponent < 0:
            raise InvalidPowerBase(f"Zero base with negative exponent {exponent}")
        if not integral:
            raise InvalidPowerBase(f"Non-positive base {base} with fractional exponent {exponent}")
        return ZERO

    if base < 0 and not integral:
        raise InvalidPowerBase(f"Non-positive base {base} with fractional exponent {exponent}")

    with fp_context():
        return base**exponent


def fp_complement(x: Decimal) -> Decimal:
    """Return 1 - x (e.g. the fee complement). May be negative for x > 1."""
    with fp_context():
        return ONE - x


# =============================================================================
# Comparisons
# =============================================================================


def fp_lt(a: Decimal, b: Decimal) -> bool:
    """Compare a < b with high precision for exactness."""
    with fp_context():
        return (a - b) < 0


def fp_le(a: Decimal, b: Decimal) -> bool:
    """Compare a <= b with high precision for exactness."""
    with fp_context():
        return (a - b) <= 0


def fp_gt(a: Decimal, b: Decimal) -> bool:
    """Compare a > b with high precision for exactness."""
    with fp_context():
        return (a - b) > 0


def fp_ge(a: Decimal, b: Decimal) -> bool:
    """Compare a >= b with high precision for exactness."""
    with fp_context():
        return (a - b) >= 0


def fp_is_close(a: Decimal, b: Decimal, rel_tol: Decimal, abs_tol: Decimal = ZERO) -> bool:
    """Return True if a and b agree within rel_tol (relative) or abs_tol (absolute)."""
    with fp_context():
        diff = abs(a - b)
        return diff <= abs_tol or diff <= rel_tol * max(abs(a), abs(b))


# =============================================================================
# Conversions
# =============================================================================


def from_fp(raw: int, decimals: int = FP_DECIMALS) -> Decimal:
    """Convert an on-chain integer scaled by 10^decimals to Decimal.

    Exact: no rounding takes place.

    Examples:
        from_fp(1_500_000_000_000_000_000) == Decimal("1.5")
        from_fp(2_500_000, 6) == Decimal("2.5")
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    with fp_context():
        return Decimal(raw).scaleb(-decimals)


def to_fp(value: Decimal, decimals: int = FP_DECIMALS, rounding: str = ROUND_DOWN) -> int:
    """Convert a Decimal to an on-chain integer scaled by 10^decimals.

    Args:
        value: Non-negative amount in token units
        decimals: Token decimals (default: 18)
        rounding: Decimal rounding mode for the dropped digits (default: ROUND_DOWN,
            so trade amounts never exceed what was computed)

    Returns:
        The scaled integer

    Raises:
        ValueError: If value is negative or decimals is negative
    """
    if value < 0:
        raise ValueError(f"to_fp requires non-negative input, got {value}")
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    with fp_context():
        scaled = value.scaleb(decimals).quantize(ONE, rounding=rounding)
    return int(scaled)
