"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from seesaw.pools import PoolState
from tests.helpers import TOKEN_A, TOKEN_B, make_pool_state


@pytest.fixture
def balanced_pool() -> PoolState:
    """50/50 pool with 1000 of each token and a 0.3% fee."""
    return make_pool_state()


@pytest.fixture
def skewed_pool() -> PoolState:
    """30/70 pool with 1000 of each token and a 0.3% fee."""
    return make_pool_state(weights=("0.3", "0.7"))


@pytest.fixture
def reference_prices() -> dict[str, float]:
    """Token B worth 2.5 token A."""
    return {TOKEN_A: 1.0, TOKEN_B: 2.5}


@pytest.fixture
def prices_file(tmp_path: Path) -> Path:
    """Three historical price snapshots written to a JSON file."""
    path = tmp_path / "prices.json"
    data = {
        "1000": {TOKEN_A: 1.0, TOKEN_B: 1.0},
        "2000": {TOKEN_A: 1.0, TOKEN_B: 1.2},
        "3000": {TOKEN_A: 1.2, TOKEN_B: 1.0},
    }
    path.write_text(json.dumps(data))
    return path
