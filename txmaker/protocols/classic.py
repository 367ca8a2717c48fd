"""
Classic ledger operations

Payment and liquidity-pool deposit/withdraw builders. Pure functions, no I/O.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from stellar_sdk import Asset, LiquidityPoolAsset
from stellar_sdk import LiquidityPoolDeposit, LiquidityPoolWithdraw, Payment

from ..types import PriceBand, get_liquidity_pool_id


# Accepted deviation from the reserve ratio for pool deposits
DEPOSIT_PRICE_TOLERANCE = Decimal("0.1")

# Prices on the ledger carry 7 decimal places
PRICE_QUANTUM = Decimal("0.0000001")


def payment_op(destination: str, asset: Asset, amount: str) -> Payment:
    """Direct transfer of amount of asset to destination"""
    return Payment(destination=destination, asset=asset, amount=amount)


def compute_price_band(
    max_reserve_a: Union[str, Decimal],
    max_reserve_b: Union[str, Decimal],
    tolerance: Decimal = DEPOSIT_PRICE_TOLERANCE,
) -> PriceBand:
    """
    Price band accepted for a pool deposit

    exact = reserve_a / reserve_b, bounds are exact * (1 -/+ tolerance)
    rounded half-up to 7 decimal places.

    Example:
        compute_price_band("200", "100")
        # PriceBand(exact=Decimal("2"), min_price="1.8000000", max_price="2.2000000")
    """
    reserve_a = Decimal(str(max_reserve_a))
    reserve_b = Decimal(str(max_reserve_b))
    if reserve_b == 0:
        raise ValueError("max_reserve_b must be non-zero to derive a deposit price")

    exact = reserve_a / reserve_b
    min_price = (exact - exact * tolerance).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
    max_price = (exact + exact * tolerance).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)

    return PriceBand(exact=exact, min_price=f"{min_price:f}", max_price=f"{max_price:f}")


def liquidity_pool_deposit_op(
    pool_id: str,
    max_reserve_a: str,
    max_reserve_b: str,
) -> LiquidityPoolDeposit:
    """Deposit up to the given reserves within a +/-10% price band"""
    band = compute_price_band(max_reserve_a, max_reserve_b)
    return LiquidityPoolDeposit(
        liquidity_pool_id=pool_id,
        max_amount_a=max_reserve_a,
        max_amount_b=max_reserve_b,
        min_price=band.min_price,
        max_price=band.max_price,
    )


def liquidity_pool_withdraw_op(
    pool_asset: LiquidityPoolAsset,
    amount: str,
    min_amount_a: str,
    min_amount_b: str,
) -> LiquidityPoolWithdraw:
    """Withdraw pool shares; the pool id is derived from the asset pair"""
    return LiquidityPoolWithdraw(
        liquidity_pool_id=get_liquidity_pool_id(pool_asset),
        amount=amount,
        min_amount_a=min_amount_a,
        min_amount_b=min_amount_b,
    )
