"""API endpoints for arbitrage sizing."""

from decimal import Decimal

import structlog
from fastapi import APIRouter, Depends, HTTPException

from seesaw.arbitrage.config import ArbitrageConfig
from seesaw.arbitrage.opportunity import ArbitrageOppFinder, TradeInstruction
from seesaw.math.fixed_point import FixedPointError
from seesaw.models.api import (
    ArbitrageRequest,
    ArbitrageResponse,
    SpotPriceRequest,
    SpotPriceResponse,
)
from seesaw.models.snapshot import TradeInstructionModel
from seesaw.pools import PoolError, parse_pool_snapshot, pricing_model_for
from seesaw.prices import PriceFeedError

logger = structlog.get_logger()

router = APIRouter()


def get_finder() -> ArbitrageOppFinder:
    """Dependency provider for the arbitrage finder.

    Override this in tests to inject a different finder:
        app.dependency_overrides[get_finder] = lambda: finder

    The default finder is configured from the environment on every request.
    """
    return ArbitrageOppFinder(ArbitrageConfig.from_env())


def _to_model(instruction: TradeInstruction) -> TradeInstructionModel:
    return TradeInstructionModel(
        pool_id=instruction.pool_id,
        asset_in_index=instruction.asset_in_index,
        asset_out_index=instruction.asset_out_index,
        amount=str(instruction.raw_amount),
        user_data=instruction.user_data,
    )


@router.post("/arbitrage")
async def arbitrage(
    request: ArbitrageRequest,
    finder: ArbitrageOppFinder = Depends(get_finder),
) -> ArbitrageResponse:
    """Size the arbitrage trade that moves a pool to the reference prices.

    Error Handling:
        - Invalid request schema: Returns 422 Validation Error (Pydantic)
        - Pool, price or arithmetic error: Returns 200 with trade null and the
          error message
    """
    logger.info(
        "received_arbitrage_request",
        pool_id=request.pool.id,
        tokens=len(request.pool.tokens),
        num_iterations=request.num_iterations,
    )

    if request.num_iterations is not None:
        finder = ArbitrageOppFinder(ArbitrageConfig(num_iterations=request.num_iterations))

    try:
        pool_state = parse_pool_snapshot(request.pool)
        instruction = finder.find(pool_state, request.prices)
    except (PoolError, PriceFeedError, FixedPointError) as e:
        logger.warning(
            "arbitrage_request_failed",
            pool_id=request.pool.id,
            error=str(e),
            error_type=type(e).__name__,
        )
        return ArbitrageResponse(error=str(e))

    if instruction is None:
        return ArbitrageResponse()
    return ArbitrageResponse(trade=_to_model(instruction))


@router.post("/spot-price")
async def spot_price(request: SpotPriceRequest) -> SpotPriceResponse:
    """Fee-inclusive spot price of token_out in token_in.

    Pool errors return 400 with the error message.
    """
    try:
        model = pricing_model_for(parse_pool_snapshot(request.pool))
        pair = model.parse_pool_pair_data(request.token_in, request.token_out)
        price: Decimal = model.spot_price(pair)
    except (PoolError, FixedPointError) as e:
        logger.warning("spot_price_request_failed", pool_id=request.pool.id, error=str(e))
        raise HTTPException(status_code=400, detail=str(e)) from e

    return SpotPriceResponse(spot_price=str(price))
