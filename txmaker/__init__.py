"""
TxMaker - Transaction maker for Stellar test networks

Provides atomic operations for:
- Payments (classic)
- Liquidity pool deposit / withdraw (classic)
- Token minting (Soroban)
- Soroswap add / remove liquidity and swaps (Soroban)
- Friendbot account funding

Supported networks: standalone, testnet
"""

__version__ = "0.1.0"

from .client import TxMaker, TxMakerConfig
from .types import (
    TestAccount,
    create_address,
    get_xlm_asset,
    make_pool_asset,
    get_liquidity_pool_id,
    PaymentArgs,
    LiquidityPoolDepositArgs,
    LiquidityPoolWithdrawArgs,
    MintTokensArgs,
    AddLiquiditySoroswapArgs,
    RemoveLiquiditySoroswapArgs,
    SwapExactTokensForTokensArgs,
    TxResult,
    TxStatus,
    FundResult,
    FundStatus,
    PriceBand,
)
from .errors import (
    ErrorCode,
    TxMakerError,
    RpcError,
    TransactionError,
    ConfigurationError,
)
from .infra import get_network_passphrase, wait_for_confirmation
from .protocols import compute_price_band, router_deadline, get_router_contract_address
from .utils import hex_to_bytes, get_asset_balance, log_error_result_codes

__all__ = [
    "__version__",
    # Client
    "TxMaker",
    "TxMakerConfig",
    # Accounts and assets
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
    # Errors
    "ErrorCode",
    "TxMakerError",
    "RpcError",
    "TransactionError",
    "ConfigurationError",
    # Helpers
    "get_network_passphrase",
    "wait_for_confirmation",
    "compute_price_band",
    "router_deadline",
    "get_router_contract_address",
    "hex_to_bytes",
    "get_asset_balance",
    "log_error_result_codes",
]
