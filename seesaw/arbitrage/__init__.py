"""Arbitrage detection and trade sizing."""

from seesaw.arbitrage.config import (
    DEFAULT_ARBITRAGE_CONFIG,
    DEFAULT_NUM_ITERATIONS,
    ArbitrageConfig,
)
from seesaw.arbitrage.encoding import encode_batch_swap_step, to_batch_swap_step
from seesaw.arbitrage.opportunity import (
    ArbitrageOppFinder,
    TradeInstruction,
    identify_arbitrage_opp,
)
from seesaw.arbitrage.spot_price import (
    get_amount_in_for_spot_price,
    get_amount_in_for_spot_price_no_fees,
    get_extra_amount_in,
)

__all__ = [
    # Configuration
    "ArbitrageConfig",
    "DEFAULT_ARBITRAGE_CONFIG",
    "DEFAULT_NUM_ITERATIONS",
    # Opportunity
    "ArbitrageOppFinder",
    "TradeInstruction",
    "identify_arbitrage_opp",
    # Sizing
    "get_amount_in_for_spot_price",
    "get_amount_in_for_spot_price_no_fees",
    "get_extra_amount_in",
    # Encoding
    "to_batch_swap_step",
    "encode_batch_swap_step",
]
