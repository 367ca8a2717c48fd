"""
Infrastructure layer for the Stellar transaction maker

Provides:
- Network passphrase resolution
- TxBuilder: envelope assembly and signing
- wait_for_confirmation: Soroban RPC status polling
- FriendbotClient: test account funding
- Correlation ID helpers for structured logs
"""

from .network import (
    STANDALONE,
    TESTNET,
    NETWORK_PASSPHRASES,
    get_network_passphrase,
    is_supported_network,
)
from .tx_builder import TxBuilder, TxBuilderConfig
from .confirmation import wait_for_confirmation
from .friendbot import FriendbotClient, ACCOUNT_ALREADY_EXISTS
from .correlation import (
    CorrelationContext,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
    log_with_correlation,
)

__all__ = [
    "STANDALONE",
    "TESTNET",
    "NETWORK_PASSPHRASES",
    "get_network_passphrase",
    "is_supported_network",
    "TxBuilder",
    "TxBuilderConfig",
    "wait_for_confirmation",
    "FriendbotClient",
    "ACCOUNT_ALREADY_EXISTS",
    "CorrelationContext",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
    "log_with_correlation",
]
