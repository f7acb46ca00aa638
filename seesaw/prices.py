"""Reference price snapshots from an external market-data feed.

Only the data contract lives here: the feed itself (e.g. a historical
market-chart API) is an external collaborator. A snapshot maps token address
to market price; historical prices map a millisecond timestamp to a snapshot.

Prices are floats: they are an approximate external signal, converted to
Decimal (through str) only when a pricing ratio is formed.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterator, Mapping, Sequence
from decimal import Decimal
from pathlib import Path
from typing import TypeAlias

import structlog

from seesaw.math.fixed_point import fp_div
from seesaw.models.snapshot import HistoricalPricesFile
from seesaw.models.types import normalize_address

logger = structlog.get_logger()

ReferencePriceSnapshot: TypeAlias = Mapping[str, float]
HistoricalPrices: TypeAlias = dict[int, dict[str, float]]


class PriceFeedError(Exception):
    """Base error for reference price data."""

    pass


class MissingReferencePrice(PriceFeedError):
    """Token has no usable (positive) reference price in the snapshot."""

    pass


def get_reference_price(snapshot: ReferencePriceSnapshot, token: str) -> float:
    """Look up a token's reference price with case-insensitive address matching.

    Raises:
        MissingReferencePrice: If the token is absent or its price is not a
            positive finite number
    """
    price = snapshot.get(token)
    if price is None:
        token_norm = normalize_address(token)
        for addr, addr_price in snapshot.items():
            if normalize_address(addr) == token_norm:
                price = addr_price
                break

    if price is None:
        raise MissingReferencePrice(f"No reference price for {token}")
    if not math.isfinite(price) or price <= 0:
        raise MissingReferencePrice(
            f"Reference price for {token} must be positive and finite, got {price}"
        )
    return price


def reference_ratio(snapshot: ReferencePriceSnapshot, token_in: str, token_out: str) -> Decimal:
    """Market price of token_out expressed in token_in.

    This is the value a pool's spot price (tokenIn per tokenOut) converges to
    once arbitrage has run.
    """
    price_in = get_reference_price(snapshot, token_in)
    price_out = get_reference_price(snapshot, token_out)
    return fp_div(Decimal(str(price_out)), Decimal(str(price_in)))


def correlate_price_series(
    series_by_token: Mapping[str, Sequence[tuple[int, float]]],
) -> HistoricalPrices:
    """Align per-token price series into timestamped snapshots.

    The feed returns one [(timestamp_ms, price), ...] series per token,
    sampled at the same cadence. Entries are matched by position and keyed by
    the first token's timestamp. Series of unequal length are truncated to
    the shortest one.

    Args:
        series_by_token: Token address -> price series, in feed order

    Returns:
        Timestamp -> {token: price}
    """
    if not series_by_token:
        return {}

    tokens = list(series_by_token)
    lengths = {token: len(series_by_token[token]) for token in tokens}
    n_points = min(lengths.values())
    if len(set(lengths.values())) > 1:
        logger.warning("price_series_length_mismatch", lengths=lengths, using=n_points)

    first_series = series_by_token[tokens[0]]
    historical: HistoricalPrices = {}
    for i in range(n_points):
        timestamp = int(first_series[i][0])
        historical[timestamp] = {token: series_by_token[token][i][1] for token in tokens}
    return historical


def load_historical_prices(path: Path | str) -> HistoricalPrices:
    """Load historical prices from a JSON file of {"<timestamp>": {"<token>": price}}."""
    with open(path) as f:
        data = json.load(f)
    return HistoricalPricesFile.model_validate(data).root


def iter_snapshots(prices: HistoricalPrices) -> Iterator[tuple[int, dict[str, float]]]:
    """Yield (timestamp, snapshot) pairs in ascending time order."""
    for timestamp in sorted(prices):
        yield timestamp, prices[timestamp]


__all__ = [
    "ReferencePriceSnapshot",
    "HistoricalPrices",
    "PriceFeedError",
    "MissingReferencePrice",
    "get_reference_price",
    "reference_ratio",
    "correlate_price_series",
    "load_historical_prices",
    "iter_snapshots",
]
