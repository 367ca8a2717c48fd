"""
Result type definitions for transactions, funding and price bands
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional


class TxStatus(Enum):
    """Terminal transaction status as seen by the caller"""
    SUCCESS = "success"
    FAILED = "failed"
    ERROR = "error"  # never reached a terminal ledger state


@dataclass
class TxResult:
    """
    Transaction execution result

    Attributes:
        status: Terminal status
        tx_hash: Transaction hash (hex)
        ledger: Ledger sequence the transaction was applied in
        result_xdr: TransactionResult XDR (base64)
        result_meta_xdr: TransactionMeta XDR (base64)
        error: Error message if failed or errored
        error_code: Error code for programmatic handling
        result_codes: Horizon result codes for rejected transactions
        recoverable: Whether the error is recoverable (can retry)
        exception: The exception that produced an ERROR result
    """
    status: TxStatus
    tx_hash: Optional[str] = None
    ledger: Optional[int] = None
    result_xdr: Optional[str] = None
    result_meta_xdr: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    result_codes: Dict[str, Any] = field(default_factory=dict)
    recoverable: bool = False
    exception: Optional[BaseException] = field(default=None, repr=False, compare=False)

    @property
    def is_success(self) -> bool:
        return self.status == TxStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        return self.status == TxStatus.FAILED

    @property
    def is_error(self) -> bool:
        return self.status == TxStatus.ERROR

    @classmethod
    def success(cls, tx_hash: str, **kwargs) -> "TxResult":
        """Create successful result"""
        return cls(status=TxStatus.SUCCESS, tx_hash=tx_hash, **kwargs)

    @classmethod
    def failed(cls, error: str, tx_hash: str = None, **kwargs) -> "TxResult":
        """Create failed result (ledger rejected the transaction)"""
        return cls(status=TxStatus.FAILED, tx_hash=tx_hash, error=error, **kwargs)

    @classmethod
    def from_exception(cls, error: BaseException) -> "TxResult":
        """Wrap a transport or validation failure"""
        code = getattr(error, "code", None)
        return cls(
            status=TxStatus.ERROR,
            tx_hash=getattr(error, "tx_hash", None),
            error=str(error),
            error_code=code.value if code is not None else None,
            recoverable=getattr(error, "recoverable", False),
            exception=error,
        )

    @classmethod
    def from_confirmation(cls, tx_hash: str, response: Any) -> "TxResult":
        """
        Convert a terminal Soroban getTransaction response

        Args:
            tx_hash: Hash that was polled
            response: GetTransactionResponse with SUCCESS or FAILED status
        """
        status = getattr(response.status, "value", response.status)
        common = dict(
            ledger=getattr(response, "ledger", None),
            result_xdr=getattr(response, "result_xdr", None),
            result_meta_xdr=getattr(response, "result_meta_xdr", None),
        )
        if status == "SUCCESS":
            return cls.success(tx_hash, **common)
        return cls.failed(f"Transaction {tx_hash} failed on-chain", tx_hash=tx_hash, **common)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict view; errors collapse to {"status": "error", "error": ...}"""
        if self.is_error:
            return {"status": self.status.value, "error": self.error}
        data: Dict[str, Any] = {
            "status": self.status.value,
            "hash": self.tx_hash,
            "ledger": self.ledger,
            "result_xdr": self.result_xdr,
            "result_meta_xdr": self.result_meta_xdr,
        }
        if self.is_failed:
            data["error"] = self.error
            data["result_codes"] = self.result_codes
        return data

    def __str__(self) -> str:
        if self.is_success:
            hash_display = f"{self.tx_hash[:16]}..." if self.tx_hash else "no hash"
            return f"TxResult(SUCCESS, {hash_display})"
        return f"TxResult({self.status.value}, error={self.error})"


class FundStatus(Enum):
    """Friendbot funding outcome"""
    FUNDED = "funded"
    ALREADY_FUNDED = "already_funded"
    ERROR = "error"


@dataclass
class FundResult:
    """
    Result of asking friendbot to fund an account

    ALREADY_FUNDED counts as success so funding is idempotent.
    """
    status: FundStatus
    public_key: str
    detail: Optional[str] = None
    response: Optional[dict] = None

    @property
    def is_success(self) -> bool:
        return self.status in (FundStatus.FUNDED, FundStatus.ALREADY_FUNDED)


@dataclass(frozen=True)
class PriceBand:
    """
    Accepted execution price range for a pool deposit

    Attributes:
        exact: reserve_a / reserve_b
        min_price: Lower bound, 7 decimal places
        max_price: Upper bound, 7 decimal places
    """
    exact: Decimal
    min_price: str
    max_price: str

    def as_list(self) -> List[str]:
        return [self.min_price, self.max_price]
