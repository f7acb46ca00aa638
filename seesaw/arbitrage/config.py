"""Arbitrage configuration."""

import os
from dataclasses import dataclass

# Newton refinement steps after the closed-form estimate
DEFAULT_NUM_ITERATIONS = 10


@dataclass(frozen=True)
class ArbitrageConfig:
    """Configuration for arbitrage sizing.

    Attributes:
        num_iterations: Fixed number of Newton refinement steps the spot price
            solver runs (default: 10). There is no tolerance-based early exit.
    """

    num_iterations: int = DEFAULT_NUM_ITERATIONS

    def __post_init__(self) -> None:
        if self.num_iterations < 0:
            raise ValueError(f"num_iterations must be non-negative, got {self.num_iterations}")

    @classmethod
    def from_env(cls) -> "ArbitrageConfig":
        """Build configuration from environment variables.

        - SEESAW_NUM_ITERATIONS: Newton refinement steps (default: 10)
        """
        return cls(
            num_iterations=int(os.environ.get("SEESAW_NUM_ITERATIONS", DEFAULT_NUM_ITERATIONS)),
        )


# Default configuration instance
DEFAULT_ARBITRAGE_CONFIG = ArbitrageConfig()
