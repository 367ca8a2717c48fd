"""
Soroswap router operations

add_liquidity, remove_liquidity and swap_exact_tokens_for_tokens calls
against a router contract. Each call ends with a u64 unix-time deadline.
"""

import math
import time
from typing import Optional, Sequence

from stellar_sdk import InvokeHostFunction, scval

from ..soroban import invoke_contract_op, to_address, to_address_vec, to_i128
from ...config import config as global_config
from ...types.args import Amount


# One hour, the intended router deadline
DEFAULT_DEADLINE_HORIZON_SECONDS = 3600

# What earlier clients actually sent: 36,000,000 ms labelled as one hour
LEGACY_DEADLINE_HORIZON_SECONDS = 36_000


def router_deadline(now: Optional[float] = None, horizon_seconds: Optional[int] = None) -> int:
    """
    Unix-time deadline for a router call

    floor(now + horizon_seconds), with now defaulting to time.time() and the
    horizon to config.router.deadline_seconds.
    """
    if now is None:
        now = time.time()
    if horizon_seconds is None:
        horizon_seconds = global_config.router.deadline_seconds
    return math.floor(now + horizon_seconds)


def add_liquidity_op(
    router_id: str,
    token_a: str,
    token_b: str,
    amount_a_desired: Amount,
    amount_b_desired: Amount,
    amount_a_min: Amount,
    amount_b_min: Amount,
    to: str,
    deadline: int,
) -> InvokeHostFunction:
    return invoke_contract_op(
        router_id,
        "add_liquidity",
        [
            to_address(token_a),
            to_address(token_b),
            to_i128(amount_a_desired),
            to_i128(amount_b_desired),
            to_i128(amount_a_min),
            to_i128(amount_b_min),
            to_address(to),
            scval.to_uint64(deadline),
        ],
    )


def remove_liquidity_op(
    router_id: str,
    token_a: str,
    token_b: str,
    liquidity: Amount,
    amount_a_min: Amount,
    amount_b_min: Amount,
    to: str,
    deadline: int,
) -> InvokeHostFunction:
    return invoke_contract_op(
        router_id,
        "remove_liquidity",
        [
            to_address(token_a),
            to_address(token_b),
            to_i128(liquidity),
            to_i128(amount_a_min),
            to_i128(amount_b_min),
            to_address(to),
            scval.to_uint64(deadline),
        ],
    )


def swap_exact_tokens_for_tokens_op(
    router_id: str,
    amount_in: Amount,
    amount_out_min: Amount,
    path: Sequence[str],
    to: str,
    deadline: int,
) -> InvokeHostFunction:
    """Swap along path (token contract ids, first is sold, last is bought)"""
    if len(path) < 2:
        raise ValueError("swap path needs at least two tokens")
    return invoke_contract_op(
        router_id,
        "swap_exact_tokens_for_tokens",
        [
            to_i128(amount_in),
            to_i128(amount_out_min),
            to_address_vec(path),
            to_address(to),
            scval.to_uint64(deadline),
        ],
    )
