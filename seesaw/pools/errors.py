"""Pool error classes.

Raised by pool snapshots, pair data and the pricing formulas.
"""


class PoolError(Exception):
    """Base error for pool pricing operations."""

    pass


class InvalidPoolState(PoolError):
    """Pool state yields an undefined spot price.

    Zero balance or weight in the traded pair, mismatched token/balance/weight
    lengths, weights not summing to one, or a swap fee outside [0, 1).
    """

    pass


class InvalidTradeSize(PoolError):
    """Trade size is negative or at/beyond the pool's available balance."""

    pass


class TokenNotInPoolError(PoolError):
    """Requested token is not part of the pool."""

    pass


class UnsupportedPoolTypeError(PoolError):
    """No pricing model is implemented for the pool type."""

    pass
