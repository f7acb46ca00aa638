"""Pool snapshot parsing.

Converts the settlement engine's integer pool data (PoolSnapshot) into a
Decimal PoolState ready for pricing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from seesaw.math.fixed_point import FP_DECIMALS, from_fp

from .base import PoolState, PoolType
from .errors import InvalidPoolState, UnsupportedPoolTypeError

if TYPE_CHECKING:
    from seesaw.models.snapshot import PoolSnapshot

logger = structlog.get_logger()


def _parse_pool_type(raw: str, pool_id: str) -> PoolType:
    """Map the snapshot's pool type string onto PoolType (case-insensitive)."""
    raw_lower = raw.lower()
    for pool_type in PoolType:
        if pool_type.value.lower() == raw_lower:
            return pool_type
    logger.warning("unknown_pool_type", pool_id=pool_id, pool_type=raw)
    raise UnsupportedPoolTypeError(f"Pool {pool_id} has unknown pool type {raw!r}")


def _parse_decimals(snapshot: PoolSnapshot) -> tuple[int, ...]:
    if snapshot.decimals is None:
        return (FP_DECIMALS,) * len(snapshot.tokens)
    if len(snapshot.decimals) != len(snapshot.tokens):
        raise InvalidPoolState(
            f"Pool {snapshot.id}: {len(snapshot.tokens)} tokens but "
            f"{len(snapshot.decimals)} decimals"
        )
    for token, decimals in zip(snapshot.tokens, snapshot.decimals, strict=True):
        if not 0 <= decimals <= 77:
            raise InvalidPoolState(f"Pool {snapshot.id}: invalid decimals {decimals} for {token}")
    return tuple(snapshot.decimals)


def parse_pool_snapshot(snapshot: PoolSnapshot) -> PoolState:
    """Convert a PoolSnapshot into a PoolState.

    Balances are scaled down by each token's decimals; weights and the swap
    fee are 18-decimal fixed point.

    Args:
        snapshot: Pool data as reported by the settlement engine

    Returns:
        PoolState with Decimal balances, weights and fee

    Raises:
        InvalidPoolState: If the snapshot violates a PoolState invariant
        UnsupportedPoolTypeError: If the pool type is unknown
    """
    pool_type = _parse_pool_type(snapshot.pool_type, snapshot.id)
    decimals = _parse_decimals(snapshot)

    if len(snapshot.balances) != len(snapshot.tokens) or len(snapshot.weights) != len(
        snapshot.tokens
    ):
        raise InvalidPoolState(
            f"Pool {snapshot.id}: {len(snapshot.tokens)} tokens, "
            f"{len(snapshot.balances)} balances, {len(snapshot.weights)} weights"
        )

    balances = tuple(
        from_fp(int(raw), token_decimals)
        for raw, token_decimals in zip(snapshot.balances, decimals, strict=True)
    )
    weights = tuple(from_fp(int(raw)) for raw in snapshot.weights)
    swap_fee = from_fp(int(snapshot.swap_fee))

    state = PoolState(
        id=snapshot.id,
        address=snapshot.address,
        tokens=tuple(snapshot.tokens),
        balances=balances,
        weights=weights,
        swap_fee=swap_fee,
        decimals=decimals,
        pool_type=pool_type,
    )

    logger.debug(
        "pool_snapshot_parsed",
        pool_id=state.id,
        pool_type=pool_type.value,
        tokens=len(state.tokens),
        swap_fee=str(swap_fee),
    )
    return state
