"""
Type definitions for the Stellar transaction maker
"""

from .common import (
    TestAccount,
    create_address,
    get_xlm_asset,
    make_pool_asset,
    get_liquidity_pool_id,
)
from .args import (
    PaymentArgs,
    LiquidityPoolDepositArgs,
    LiquidityPoolWithdrawArgs,
    MintTokensArgs,
    AddLiquiditySoroswapArgs,
    RemoveLiquiditySoroswapArgs,
    SwapExactTokensForTokensArgs,
)
from .result import TxResult, TxStatus, FundResult, FundStatus, PriceBand

__all__ = [
    # Common types
    "TestAccount",
    "create_address",
    "get_xlm_asset",
    "make_pool_asset",
    "get_liquidity_pool_id",
    # Action arguments
    "PaymentArgs",
    "LiquidityPoolDepositArgs",
    "LiquidityPoolWithdrawArgs",
    "MintTokensArgs",
    "AddLiquiditySoroswapArgs",
    "RemoveLiquiditySoroswapArgs",
    "SwapExactTokensForTokensArgs",
    # Results
    "TxResult",
    "TxStatus",
    "FundResult",
    "FundStatus",
    "PriceBand",
]
