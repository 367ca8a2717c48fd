"""
Common type definitions: test accounts and asset helpers
"""

from dataclasses import dataclass

from stellar_sdk import Asset, Keypair, LiquidityPoolAsset
from stellar_sdk.liquidity_pool_asset import LIQUIDITY_POOL_FEE_V18


@dataclass(frozen=True)
class TestAccount:
    """
    Keypair reference for a test account

    Attributes:
        private_key: Secret seed (S...)
        public_key: Account id (G...)
    """
    private_key: str
    public_key: str

    # Not a test case
    __test__ = False

    def __repr__(self) -> str:
        return f"TestAccount({self.public_key[:8]}...)"

    @property
    def keypair(self) -> Keypair:
        return Keypair.from_secret(self.private_key)

    @classmethod
    def random(cls) -> "TestAccount":
        """Generate a new random keypair"""
        keypair = Keypair.random()
        return cls(private_key=keypair.secret, public_key=keypair.public_key)

    @classmethod
    def from_secret(cls, secret: str) -> "TestAccount":
        """Build from a secret seed, deriving the public key"""
        keypair = Keypair.from_secret(secret)
        return cls(private_key=keypair.secret, public_key=keypair.public_key)


def create_address() -> TestAccount:
    """Generate a new random test account"""
    return TestAccount.random()


def get_xlm_asset() -> Asset:
    """The network's native asset (XLM)"""
    return Asset.native()


def make_pool_asset(asset_a: Asset, asset_b: Asset, fee: int = LIQUIDITY_POOL_FEE_V18) -> LiquidityPoolAsset:
    """
    Build a constant-product pool asset from two assets in any order

    The ledger requires the pair in lexicographic order; the assets are
    swapped when needed.
    """
    if not LiquidityPoolAsset.is_valid_lexicographic_order(asset_a, asset_b):
        asset_a, asset_b = asset_b, asset_a
    return LiquidityPoolAsset(asset_a, asset_b, fee)


def get_liquidity_pool_id(pool_asset: LiquidityPoolAsset) -> str:
    """
    Deterministic pool id for a pool asset

    Hex-encoded SHA-256 of the canonical constant-product pool parameters.
    """
    return pool_asset.liquidity_pool_id
