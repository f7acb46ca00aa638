"""Request and response models for the HTTP API."""

from pydantic import BaseModel, Field

from seesaw.models.snapshot import PoolSnapshot, TradeInstructionModel
from seesaw.models.types import Address

# Upper bound on per-request Newton steps; the solver runs inline on the event loop
MAX_NUM_ITERATIONS = 1000


class ArbitrageRequest(BaseModel):
    """A pool snapshot and the reference prices to evaluate it against."""

    pool: PoolSnapshot
    prices: dict[str, float] = Field(description="Token address -> market price")
    num_iterations: int | None = Field(
        default=None,
        alias="numIterations",
        ge=0,
        le=MAX_NUM_ITERATIONS,
        description="Newton refinement steps. Defaults to the server configuration.",
    )

    model_config = {"populate_by_name": True}


class ArbitrageResponse(BaseModel):
    """The arbitrage trade, if any, or the reason the pool could not be priced."""

    trade: TradeInstructionModel | None = None
    error: str | None = None


class SpotPriceRequest(BaseModel):
    pool: PoolSnapshot
    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")

    model_config = {"populate_by_name": True}


class SpotPriceResponse(BaseModel):
    spot_price: str = Field(alias="spotPrice", description="token_in per token_out, fee included")

    model_config = {"populate_by_name": True}
