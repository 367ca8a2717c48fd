"""
Small helpers shared by the client and callers
"""

import logging
from typing import Any, Dict, Iterable, Optional, Union

from stellar_sdk import Asset, LiquidityPoolAsset
from stellar_sdk.exceptions import BaseHorizonError

logger = logging.getLogger(__name__)


def hex_to_bytes(hex_string: str) -> bytes:
    """
    Decode a hex string (e.g. a WASM hash) into bytes

    Raises:
        ValueError: odd number of digits or non-hex characters
    """
    if len(hex_string) % 2 != 0:
        raise ValueError("Must have an even number of hex digits to convert to bytes")
    return bytes.fromhex(hex_string)


def get_result_codes(error: BaseException) -> Dict[str, Any]:
    """Horizon extras.result_codes carried by an error, or {}"""
    if not isinstance(error, BaseHorizonError):
        return {}
    extras = error.extras or {}
    return extras.get("result_codes") or {}


def log_error_result_codes(error: BaseException) -> Dict[str, Any]:
    """
    Log why a submission failed

    Horizon rejections are logged by their result codes
    (e.g. {"transaction": "tx_failed", "operations": ["op_underfunded"]}),
    anything else by the error itself. Returns the result codes found.
    """
    result_codes = get_result_codes(error)
    if result_codes:
        logger.error(f"Transaction rejected, result codes: {result_codes}")
    else:
        logger.error(f"Transaction error: {error}")
    return result_codes


def _balance_matches(balance: Dict[str, Any], asset: Union[Asset, LiquidityPoolAsset]) -> bool:
    asset_type = balance.get("asset_type")

    if isinstance(asset, LiquidityPoolAsset):
        return (
            asset_type == "liquidity_pool_shares"
            and balance.get("liquidity_pool_id") == asset.liquidity_pool_id
        )
    if asset.is_native():
        return asset_type == "native"
    return (
        balance.get("asset_code") == asset.code
        and balance.get("asset_issuer") == asset.issuer
    )


def get_asset_balance(
    balances: Iterable[Dict[str, Any]],
    asset: Union[Asset, LiquidityPoolAsset],
) -> Optional[str]:
    """
    Find an asset's balance in a Horizon account "balances" list

    Args:
        balances: The account record's balances entries
        asset: Native, credit, or liquidity pool asset

    Returns:
        Balance as a decimal string, or None when the account holds no
        trustline for the asset
    """
    for balance in balances:
        if _balance_matches(balance, asset):
            return balance.get("balance")
    return None
