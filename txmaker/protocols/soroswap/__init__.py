"""
Soroswap AMM support

- router: add/remove liquidity and swap operations against the router contract
- api: router contract discovery over the Soroswap REST API
"""

from .router import (
    DEFAULT_DEADLINE_HORIZON_SECONDS,
    LEGACY_DEADLINE_HORIZON_SECONDS,
    router_deadline,
    add_liquidity_op,
    remove_liquidity_op,
    swap_exact_tokens_for_tokens_op,
)
from .api import SoroswapAPI, get_router_contract_address

__all__ = [
    "DEFAULT_DEADLINE_HORIZON_SECONDS",
    "LEGACY_DEADLINE_HORIZON_SECONDS",
    "router_deadline",
    "add_liquidity_op",
    "remove_liquidity_op",
    "swap_exact_tokens_for_tokens_op",
    "SoroswapAPI",
    "get_router_contract_address",
]
