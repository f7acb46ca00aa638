"""Pool snapshots, pair data and the pricing model interface.

A PoolState is a point-in-time snapshot of what the settlement engine reports
for a pool. Pricing never works on the snapshot directly: each query slices it
into pair data for one (token_in, token_out) direction, which the pool type's
PricingModel turns into swap amounts, spot prices and derivatives.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Protocol, runtime_checkable

from seesaw.math.fixed_point import FP_DECIMALS, ONE, fp_is_close
from seesaw.models.types import normalize_address

from .errors import InvalidPoolState, TokenNotInPoolError

# Normalized weights must sum to one within this tolerance
WEIGHT_SUM_TOLERANCE = Decimal("1e-9")


class PoolType(str, Enum):
    """Pool types known to the settlement engine."""

    WEIGHTED = "weighted"
    STABLE = "stable"
    ELEMENT = "element"
    META_STABLE = "metaStable"
    LINEAR = "linear"


class SwapType(str, Enum):
    """Whether the trade fixes the input or the output amount."""

    EXACT_IN = "exactIn"
    EXACT_OUT = "exactOut"


@dataclass(frozen=True)
class PoolState:
    """Snapshot of a pool's on-chain-visible data.

    Attributes:
        id: Pool id used by the settlement engine (32-byte hex string)
        address: Pool contract address
        tokens: Token addresses, in the pool's registration order
        balances: Token balances in token units, parallel to tokens
        weights: Normalized weights, parallel to tokens (sum to 1)
        swap_fee: Swap fee as a fraction (e.g., 0.003 for 0.3%)
        decimals: Token decimals, parallel to tokens. Empty means 18 for all.
        pool_type: Pool type, selects the pricing model
    """

    id: str
    address: str
    tokens: tuple[str, ...]
    balances: tuple[Decimal, ...]
    weights: tuple[Decimal, ...]
    swap_fee: Decimal
    decimals: tuple[int, ...] = ()
    pool_type: PoolType = PoolType.WEIGHTED

    def __post_init__(self) -> None:
        n_tokens = len(self.tokens)
        if len(self.balances) != n_tokens or len(self.weights) != n_tokens:
            raise InvalidPoolState(
                f"Pool {self.id}: {n_tokens} tokens, {len(self.balances)} balances, "
                f"{len(self.weights)} weights"
            )
        if self.decimals and len(self.decimals) != n_tokens:
            raise InvalidPoolState(
                f"Pool {self.id}: {n_tokens} tokens but {len(self.decimals)} decimals"
            )
        if not 0 <= self.swap_fee < 1:
            raise InvalidPoolState(f"Pool {self.id}: swap fee must be in [0, 1), got {self.swap_fee}")
        for token, balance in zip(self.tokens, self.balances, strict=True):
            if balance < 0:
                raise InvalidPoolState(f"Pool {self.id}: negative balance {balance} for {token}")
        for token, weight in zip(self.tokens, self.weights, strict=True):
            if weight < 0:
                raise InvalidPoolState(f"Pool {self.id}: negative weight {weight} for {token}")
        if self.pool_type == PoolType.WEIGHTED and not fp_is_close(
            sum(self.weights, Decimal(0)), ONE, rel_tol=Decimal(0), abs_tol=WEIGHT_SUM_TOLERANCE
        ):
            raise InvalidPoolState(f"Pool {self.id}: weights sum to {sum(self.weights)}, expected 1")

    def index_of(self, token: str) -> int:
        """Return the index of token in the pool (case-insensitive).

        Raises:
            TokenNotInPoolError: If the pool does not contain token
        """
        token_norm = normalize_address(token)
        for i, pool_token in enumerate(self.tokens):
            if normalize_address(pool_token) == token_norm:
                return i
        raise TokenNotInPoolError(f"Pool {self.id} does not contain {token}")

    def decimals_of(self, index: int) -> int:
        """Return the decimals of the token at index (18 when not provided)."""
        if not self.decimals:
            return FP_DECIMALS
        return self.decimals[index]

    def with_balance(self, token: str, new_balance: Decimal) -> PoolState:
        """Return a new snapshot with token's balance replaced.

        Raises:
            TokenNotInPoolError: If the pool does not contain token
        """
        index = self.index_of(token)
        balances = self.balances[:index] + (new_balance,) + self.balances[index + 1 :]
        return replace(self, balances=balances)


@dataclass(frozen=True)
class PoolPairBase:
    """A (token_in, token_out) slice of a pool snapshot.

    Built fresh for every pricing query and never mutated.
    """

    id: str
    address: str
    pool_type: PoolType
    token_in: str
    token_out: str
    decimals_in: int
    decimals_out: int
    balance_in: Decimal
    balance_out: Decimal
    swap_fee: Decimal

    def __post_init__(self) -> None:
        if not 0 <= self.swap_fee < 1:
            raise InvalidPoolState(f"Swap fee must be in [0, 1), got {self.swap_fee}")
        if self.balance_in < 0 or self.balance_out < 0:
            raise InvalidPoolState(
                f"Balances must be non-negative, got {self.balance_in} / {self.balance_out}"
            )


@runtime_checkable
class PricingModel(Protocol):
    """Interface every pool type's pricing implements.

    Amounts and prices are Decimal in token units. Spot prices are quoted as
    tokenIn per tokenOut.
    """

    pool_type: PoolType

    def parse_pool_pair_data(self, token_in: str, token_out: str) -> PoolPairBase:
        """Slice the pool into pair data for trading token_in for token_out."""
        ...

    def pool_pair_data(self, index_in: int, index_out: int) -> PoolPairBase:
        """Slice the pool into pair data by token index."""
        ...

    def spot_price(self, pair: PoolPairBase) -> Decimal:
        """Current fee-inclusive spot price of the pair."""
        ...

    def swap_amount(self, pair: PoolPairBase, amount: Decimal, swap_type: SwapType) -> Decimal:
        """Amount out for an exact input, or amount in for an exact output."""
        ...

    def spot_price_after_swap(
        self, pair: PoolPairBase, amount: Decimal, swap_type: SwapType
    ) -> Decimal:
        """Spot price right after a trade of the given size."""
        ...

    def derivative_spot_price_after_swap(
        self, pair: PoolPairBase, amount: Decimal, swap_type: SwapType
    ) -> Decimal:
        """Derivative of spot_price_after_swap with respect to the trade size."""
        ...

    def get_limit_amount_swap(self, pair: PoolPairBase, swap_type: SwapType) -> Decimal:
        """Largest trade size the pool accepts in the given direction."""
        ...

    def get_normalized_liquidity(self, pair: PoolPairBase) -> Decimal:
        """Inverse-slippage liquidity measure, in tokenOut."""
        ...
