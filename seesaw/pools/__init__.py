"""Pool snapshots and pricing models.

Only weighted pools have a pricing model. The other PoolType variants are
recognised so snapshots can be parsed, but pricing them raises
UnsupportedPoolTypeError.
"""

from seesaw.pools.base import (
    PoolPairBase,
    PoolState,
    PoolType,
    PricingModel,
    SwapType,
)
from seesaw.pools.errors import (
    InvalidPoolState,
    InvalidTradeSize,
    PoolError,
    TokenNotInPoolError,
    UnsupportedPoolTypeError,
)
from seesaw.pools.parsing import parse_pool_snapshot
from seesaw.pools.weighted import WeightedPool, WeightedPoolPairData

_PRICING_MODELS: dict[PoolType, type[WeightedPool]] = {
    PoolType.WEIGHTED: WeightedPool,
}


def pricing_model_for(state: PoolState) -> PricingModel:
    """Return the pricing model for a pool snapshot.

    Raises:
        UnsupportedPoolTypeError: If no pricing model exists for state.pool_type
    """
    model_cls = _PRICING_MODELS.get(state.pool_type)
    if model_cls is None:
        raise UnsupportedPoolTypeError(
            f"No pricing model for pool {state.id} of type {state.pool_type.value}"
        )
    return model_cls.from_pool_state(state)


__all__ = [
    # Snapshots and pair data
    "PoolState",
    "PoolPairBase",
    "WeightedPoolPairData",
    "PoolType",
    "SwapType",
    # Pricing models
    "PricingModel",
    "WeightedPool",
    "pricing_model_for",
    # Parsing
    "parse_pool_snapshot",
    # Errors
    "PoolError",
    "InvalidPoolState",
    "InvalidTradeSize",
    "TokenNotInPoolError",
    "UnsupportedPoolTypeError",
]
