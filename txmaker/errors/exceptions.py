"""
Exception definitions for the Stellar transaction maker
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """
    Unified error codes for transaction operations

    1xxx - RPC / transport errors
    2xxx - Transaction errors
    9xxx - Configuration errors
    """
    # RPC errors (recoverable)
    RPC_CONNECTION_FAILED = "1001"
    RPC_TIMEOUT = "1002"
    RPC_RATE_LIMITED = "1003"
    RPC_INVALID_RESPONSE = "1004"

    # Transaction errors
    TX_BUILD_FAILED = "2001"
    TX_PREPARE_FAILED = "2002"
    TX_SEND_FAILED = "2003"
    TX_CONFIRMATION_TIMEOUT = "2004"
    TX_CONFIRMATION_CANCELLED = "2005"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"
    NETWORK_UNSUPPORTED = "9003"


class TxMakerError(Exception):
    """
    Base exception for all transaction maker errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        recoverable: Whether the error might succeed on retry
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"

    @property
    def should_retry(self) -> bool:
        """Indicate if the operation should be retried"""
        return self.recoverable


class RpcError(TxMakerError):
    """
    Transport errors talking to Horizon, Soroban RPC or the HTTP helpers

    Raised when:
    - Connection to an endpoint fails
    - Request times out
    - Rate limit is hit
    - Invalid response received
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RPC_CONNECTION_FAILED,
        original_error: Optional[Exception] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=True,
            original_error=original_error,
            details={"endpoint": endpoint} if endpoint else None,
        )
        self.endpoint = endpoint

    @classmethod
    def connection_failed(cls, endpoint: str, error: Exception = None) -> "RpcError":
        return cls(
            f"Failed to connect to endpoint: {endpoint}",
            ErrorCode.RPC_CONNECTION_FAILED,
            original_error=error,
            endpoint=endpoint,
        )

    @classmethod
    def timeout(cls, endpoint: str, timeout_seconds: float) -> "RpcError":
        return cls(
            f"Request timed out after {timeout_seconds}s",
            ErrorCode.RPC_TIMEOUT,
            endpoint=endpoint,
        )

    @classmethod
    def rate_limited(cls, endpoint: str) -> "RpcError":
        return cls(
            f"Rate limited by {endpoint}",
            ErrorCode.RPC_RATE_LIMITED,
            endpoint=endpoint,
        )

    @classmethod
    def invalid_response(cls, endpoint: str, reason: str) -> "RpcError":
        return cls(
            f"Invalid response from {endpoint}: {reason}",
            ErrorCode.RPC_INVALID_RESPONSE,
            endpoint=endpoint,
        )


class TransactionError(TxMakerError):
    """
    Transaction assembly and execution errors

    Raised when:
    - The envelope cannot be built
    - Soroban simulation (prepare) fails
    - Soroban RPC rejects the signed envelope
    - Confirmation does not arrive before the deadline or is cancelled
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TX_SEND_FAILED,
        tx_hash: Optional[str] = None,
        recoverable: bool = False,
        details: Optional[dict] = None,
    ):
        merged = {"tx_hash": tx_hash}
        if details:
            merged.update(details)
        super().__init__(
            message,
            code,
            recoverable=recoverable,
            details=merged,
        )
        self.tx_hash = tx_hash

    @classmethod
    def build_failed(cls, reason: str) -> "TransactionError":
        return cls(f"Failed to build transaction: {reason}", ErrorCode.TX_BUILD_FAILED)

    @classmethod
    def prepare_failed(cls, error: str) -> "TransactionError":
        return cls(
            f"Transaction simulation failed: {error}",
            ErrorCode.TX_PREPARE_FAILED,
        )

    @classmethod
    def send_failed(
        cls,
        error: str,
        tx_hash: Optional[str] = None,
        error_result_xdr: Optional[str] = None,
        recoverable: bool = False,
    ) -> "TransactionError":
        return cls(
            f"Failed to send transaction: {error}",
            ErrorCode.TX_SEND_FAILED,
            tx_hash=tx_hash,
            recoverable=recoverable,
            details={"error_result_xdr": error_result_xdr} if error_result_xdr else None,
        )

    @classmethod
    def confirmation_timeout(cls, tx_hash: str, timeout_seconds: float) -> "TransactionError":
        # The transaction may still land; callers can look it up by hash
        return cls(
            f"Transaction {tx_hash} not confirmed after {timeout_seconds}s",
            ErrorCode.TX_CONFIRMATION_TIMEOUT,
            tx_hash=tx_hash,
            recoverable=True,
        )

    @classmethod
    def confirmation_cancelled(cls, tx_hash: str) -> "TransactionError":
        return cls(
            f"Confirmation wait for {tx_hash} was cancelled",
            ErrorCode.TX_CONFIRMATION_CANCELLED,
            tx_hash=tx_hash,
        )


class ConfigurationError(TxMakerError):
    """
    Configuration-related errors - fatal, never retried

    Raised when:
    - The network name is not supported
    - Required configuration is missing
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)

    @classmethod
    def unsupported_network(cls, network: str) -> "ConfigurationError":
        return cls(
            f"Unsupported network '{network}'. Only standalone and testnet are supported.",
            ErrorCode.NETWORK_UNSUPPORTED,
        )
