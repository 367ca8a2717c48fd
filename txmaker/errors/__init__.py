"""
Error definitions for the Stellar transaction maker
"""

from .exceptions import (
    ErrorCode,
    TxMakerError,
    RpcError,
    TransactionError,
    ConfigurationError,
)

__all__ = [
    "ErrorCode",
    "TxMakerError",
    "RpcError",
    "TransactionError",
    "ConfigurationError",
]
