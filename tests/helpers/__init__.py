"""Test helpers module for shared test utilities.

- constants: Token addresses and pool ids
- factories: Pool state, pair data and snapshot factories
"""

from tests.helpers.constants import (
    ONE_E18,
    POOL_ADDRESS,
    POOL_ID,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    USDC,
    WETH,
)
from tests.helpers.factories import make_pair, make_pool_snapshot, make_pool_state

__all__ = [
    # Constants
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "WETH",
    "USDC",
    "POOL_ID",
    "POOL_ADDRESS",
    "ONE_E18",
    # Factories
    "make_pool_state",
    "make_pair",
    "make_pool_snapshot",
]
