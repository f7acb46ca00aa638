"""Shared token and pool constants for tests.

All addresses are lowercase for consistency with normalize_address().

Usage:
    from tests.helpers import TOKEN_A, TOKEN_B
"""

# =============================================================================
# Tokens
# =============================================================================

TOKEN_A = "0x" + "a" * 40
TOKEN_B = "0x" + "b" * 40
TOKEN_C = "0x" + "c" * 40

# Real mainnet tokens, for tests that want realistic addresses
WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"  # Wrapped Ether (18 decimals)
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"  # USD Coin (6 decimals)

# =============================================================================
# Pools
# =============================================================================

POOL_ID = "0x" + "11" * 32
POOL_ADDRESS = "0x" + "11" * 20

# 18-decimal fixed point one
ONE_E18 = 10**18
