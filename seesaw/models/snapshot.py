"""Pydantic models for pool snapshots, price snapshots and trade instructions.

These are the wire forms exchanged with the settlement engine, the price feed
and the HTTP API. Amounts, weights and fees use the on-chain integer
representation (uint256 decimal strings); conversion to Decimal happens in
seesaw.pools.parsing.
"""

from pydantic import BaseModel, Field, RootModel

from seesaw.models.types import Address, Bytes, Bytes32, Uint256


class PoolSnapshot(BaseModel):
    """A pool as reported by the settlement engine's pool-tokens query.

    Weights and swap fee are 18-decimal fixed point; balances are raw token
    amounts in each token's own decimals.
    """

    id: Bytes32 = Field(description="Pool id (32-byte hex string)")
    address: Address
    pool_type: str = Field(default="weighted", alias="poolType")
    tokens: list[Address]
    balances: list[Uint256]
    weights: list[Uint256]
    swap_fee: Uint256 = Field(alias="swapFee")
    decimals: list[int] | None = Field(
        default=None,
        description="Token decimals, parallel to tokens. Defaults to 18 for every token.",
    )

    model_config = {"populate_by_name": True}


class HistoricalPricesFile(RootModel[dict[int, dict[str, float]]]):
    """Timestamp (ms) -> reference prices, as stored on disk."""


class TradeInstructionModel(BaseModel):
    """A single swap step for the settlement engine's batch swap."""

    pool_id: Bytes32 = Field(alias="poolId")
    asset_in_index: int = Field(alias="assetInIndex", ge=0)
    asset_out_index: int = Field(alias="assetOutIndex", ge=0)
    amount: Uint256 = Field(description="Exact amount in, in token_in base units")
    user_data: Bytes = Field(default="0x", alias="userData")

    model_config = {"populate_by_name": True}
