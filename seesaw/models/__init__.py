"""Wire models and shared types."""

from seesaw.models.api import (
    ArbitrageRequest,
    ArbitrageResponse,
    SpotPriceRequest,
    SpotPriceResponse,
)
from seesaw.models.snapshot import (
    HistoricalPricesFile,
    PoolSnapshot,
    TradeInstructionModel,
)
from seesaw.models.types import Address, Bytes, Bytes32, Uint256, normalize_address

__all__ = [
    "PoolSnapshot",
    "HistoricalPricesFile",
    "TradeInstructionModel",
    "ArbitrageRequest",
    "ArbitrageResponse",
    "SpotPriceRequest",
    "SpotPriceResponse",
    "Address",
    "Bytes",
    "Bytes32",
    "Uint256",
    "normalize_address",
]
