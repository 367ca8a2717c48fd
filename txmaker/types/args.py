"""
Argument types for TxMaker actions

Amounts for classic operations are decimal strings in asset units
(e.g. "10.5"). Amounts for contract calls are integers in the token's
smallest unit and may be passed as int or numeric string.
"""

from dataclasses import dataclass
from typing import List, Union

from stellar_sdk import Asset, LiquidityPoolAsset

from .common import TestAccount


Amount = Union[str, int]


@dataclass(frozen=True)
class PaymentArgs:
    """Direct asset transfer"""
    source: TestAccount
    destination: str
    asset: Asset
    amount: str


@dataclass(frozen=True)
class LiquidityPoolDepositArgs:
    """
    Deposit into a classic liquidity pool

    The accepted price band is derived from max_reserve_a / max_reserve_b.
    """
    source: TestAccount
    pool_asset: LiquidityPoolAsset
    max_reserve_a: str
    max_reserve_b: str


@dataclass(frozen=True)
class LiquidityPoolWithdrawArgs:
    """Withdraw pool shares from a classic liquidity pool"""
    source: TestAccount
    pool_asset: LiquidityPoolAsset
    amount: str
    min_amount_a: str
    min_amount_b: str


@dataclass(frozen=True)
class MintTokensArgs:
    """Mint tokens on a Soroban token contract"""
    source: TestAccount
    contract_id: str
    destination: str
    amount: Amount


@dataclass(frozen=True)
class AddLiquiditySoroswapArgs:
    """Soroswap router add_liquidity"""
    source: TestAccount
    to: TestAccount
    token_a: str
    token_b: str
    amount_a_desired: Amount
    amount_b_desired: Amount
    amount_a_min: Amount
    amount_b_min: Amount


@dataclass(frozen=True)
class RemoveLiquiditySoroswapArgs:
    """Soroswap router remove_liquidity"""
    source: TestAccount
    to: TestAccount
    token_a: str
    token_b: str
    liquidity: Amount
    amount_a_min: Amount
    amount_b_min: Amount


@dataclass(frozen=True)
class SwapExactTokensForTokensArgs:
    """Soroswap router swap_exact_tokens_for_tokens along a token path"""
    source: TestAccount
    to: TestAccount
    amount_in: Amount
    amount_out_min: Amount
    path: List[str]
