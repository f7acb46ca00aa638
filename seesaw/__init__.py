"""Seesaw: arbitrage sizing for weighted product pools."""

__version__ = "0.1.0"
