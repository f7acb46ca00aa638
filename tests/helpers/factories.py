"""Factory functions for creating test pools.

Usage:
    from tests.helpers import make_pool_state, make_pair

    state = make_pool_state(balances=("1000", "1000"), weights=("0.3", "0.7"))
    pair = make_pair(state)
"""

from decimal import Decimal

from seesaw.models import PoolSnapshot
from seesaw.pools import PoolState, PoolType, WeightedPool, WeightedPoolPairData
from tests.helpers.constants import ONE_E18, POOL_ADDRESS, POOL_ID, TOKEN_A, TOKEN_B


def make_pool_state(
    balances: tuple[str | int, ...] = ("1000", "1000"),
    weights: tuple[str, ...] = ("0.5", "0.5"),
    swap_fee: str = "0.003",
    tokens: tuple[str, ...] = (TOKEN_A, TOKEN_B),
    decimals: tuple[int, ...] = (),
    pool_type: PoolType = PoolType.WEIGHTED,
    pool_id: str = POOL_ID,
) -> PoolState:
    """Create a pool snapshot from human-readable values.

    Args:
        balances: Token balances in token units (default: 1000 / 1000)
        weights: Normalized weights (default: 50/50)
        swap_fee: Swap fee as a fraction (default: 0.3%)
        tokens: Token addresses (default: TOKEN_A, TOKEN_B)
        decimals: Token decimals (default: 18 for all)
        pool_type: Pool type (default: weighted)
        pool_id: Pool id (default: POOL_ID)

    Returns:
        PoolState ready for pricing
    """
    return PoolState(
        id=pool_id,
        address=POOL_ADDRESS,
        tokens=tuple(tokens),
        balances=tuple(Decimal(str(b)) for b in balances),
        weights=tuple(Decimal(w) for w in weights),
        swap_fee=Decimal(swap_fee),
        decimals=tuple(decimals),
        pool_type=pool_type,
    )


def make_pair(
    state: PoolState | None = None,
    index_in: int = 0,
    index_out: int = 1,
) -> WeightedPoolPairData:
    """Create weighted pair data for one direction of a pool (default pool if None)."""
    if state is None:
        state = make_pool_state()
    return WeightedPool(state).pool_pair_data(index_in, index_out)


def make_pool_snapshot(
    balances: tuple[int, ...] = (1000 * ONE_E18, 1000 * ONE_E18),
    weights: tuple[int, ...] = (ONE_E18 // 2, ONE_E18 // 2),
    swap_fee: int = 3 * 10**15,
    tokens: tuple[str, ...] = (TOKEN_A, TOKEN_B),
    pool_type: str = "weighted",
    decimals: list[int] | None = None,
) -> PoolSnapshot:
    """Create a pool snapshot in the settlement engine's integer form."""
    return PoolSnapshot(
        id=POOL_ID,
        address=POOL_ADDRESS,
        pool_type=pool_type,
        tokens=list(tokens),
        balances=[str(b) for b in balances],
        weights=[str(w) for w in weights],
        swap_fee=str(swap_fee),
        decimals=decimals,
    )
