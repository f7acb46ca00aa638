"""HTTP API for arbitrage sizing."""
