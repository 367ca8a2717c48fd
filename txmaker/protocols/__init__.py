"""
Operation factories

Pure functions that turn action arguments into stellar_sdk operations:
- classic: payment and liquidity-pool deposit/withdraw
- soroban: generic contract invocation and token mint
- soroswap: router calls and router discovery
"""

from .classic import (
    DEPOSIT_PRICE_TOLERANCE,
    payment_op,
    compute_price_band,
    liquidity_pool_deposit_op,
    liquidity_pool_withdraw_op,
)
from .soroban import invoke_contract_op, mint_op, to_i128, to_address, to_address_vec
from .soroswap import (
    LEGACY_DEADLINE_HORIZON_SECONDS,
    router_deadline,
    add_liquidity_op,
    remove_liquidity_op,
    swap_exact_tokens_for_tokens_op,
    SoroswapAPI,
    get_router_contract_address,
)

__all__ = [
    "DEPOSIT_PRICE_TOLERANCE",
    "payment_op",
    "compute_price_band",
    "liquidity_pool_deposit_op",
    "liquidity_pool_withdraw_op",
    "invoke_contract_op",
    "mint_op",
    "to_i128",
    "to_address",
    "to_address_vec",
    "LEGACY_DEADLINE_HORIZON_SECONDS",
    "router_deadline",
    "add_liquidity_op",
    "remove_liquidity_op",
    "swap_exact_tokens_for_tokens_op",
    "SoroswapAPI",
    "get_router_contract_address",
]
