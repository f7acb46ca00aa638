"""BatchSwapStep encoding for the settlement engine.

A trade instruction maps onto one vault swap step:

    struct BatchSwapStep {
        bytes32 poolId;
        uint256 assetInIndex;
        uint256 assetOutIndex;
        uint256 amount;
        bytes userData;
    }
"""

from __future__ import annotations

import re
from typing import Any

from eth_abi import encode  # type: ignore[attr-defined]

from .opportunity import TradeInstruction

BATCH_SWAP_STEP_TYPE = "(bytes32,uint256,uint256,uint256,bytes)"

_POOL_ID_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")
_HEX_RE = re.compile(r"^0x([0-9a-fA-F]{2})*$")


def _pool_id_bytes(pool_id: str) -> bytes:
    if not _POOL_ID_RE.match(pool_id):
        raise ValueError(f"Pool id must be a 32-byte hex string, got {pool_id!r}")
    return bytes.fromhex(pool_id[2:])


def _user_data_bytes(user_data: str) -> bytes:
    if not _HEX_RE.match(user_data):
        raise ValueError(f"userData must be an even-length hex string, got {user_data!r}")
    return bytes.fromhex(user_data[2:])


def to_batch_swap_step(instruction: TradeInstruction) -> dict[str, Any]:
    """Settlement engine swap step in JSON form.

    The amount is the input token's base units as a decimal string.

    Raises:
        ValueError: If the pool id is not a 32-byte hex string
    """
    _pool_id_bytes(instruction.pool_id)
    return {
        "poolId": instruction.pool_id,
        "assetInIndex": instruction.asset_in_index,
        "assetOutIndex": instruction.asset_out_index,
        "amount": str(instruction.raw_amount),
        "userData": instruction.user_data,
    }


def encode_batch_swap_step(instruction: TradeInstruction) -> bytes:
    """ABI-encode a trade instruction as a BatchSwapStep tuple.

    Raises:
        ValueError: If the pool id or user data is not valid hex
    """
    return encode(
        [BATCH_SWAP_STEP_TYPE],
        [
            (
                _pool_id_bytes(instruction.pool_id),
                instruction.asset_in_index,
                instruction.asset_out_index,
                instruction.raw_amount,
                _user_data_bytes(instruction.user_data),
            )
        ],
    )


__all__ = ["BATCH_SWAP_STEP_TYPE", "to_batch_swap_step", "encode_batch_swap_step"]
