"""
Transaction builder

Provides utilities for:
- Building fee-stamped, time-bounded envelopes
- Signing with the source account's keypair
- Re-signing envelopes returned by Soroban simulation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from stellar_sdk import Account, Keypair, TransactionBuilder, TransactionEnvelope
from stellar_sdk.operation import Operation

from .network import get_network_passphrase
from ..errors import TransactionError
from ..config import config as global_config

logger = logging.getLogger(__name__)


@dataclass
class TxBuilderConfig:
    """
    Transaction builder runtime configuration

    Allows per-builder overrides while pulling defaults from the global
    config (txmaker.config.TxConfig).

    Usage:
        # Use all defaults from environment
        builder = TxBuilder("testnet")

        # Override specific settings
        builder = TxBuilder("testnet", config=TxBuilderConfig(base_fee=200))
    """
    base_fee: int = None
    timeout_seconds: int = None

    def __post_init__(self):
        """Apply defaults from global config for any unset values"""
        if self.base_fee is None:
            self.base_fee = global_config.tx.base_fee
        if self.timeout_seconds is None:
            self.timeout_seconds = global_config.tx.timeout_seconds


class TxBuilder:
    """
    Builds and signs transaction envelopes for one network

    The network passphrase is resolved once at construction, so an
    unsupported network fails before any transaction is built.

    Usage:
        builder = TxBuilder("standalone")
        account = await horizon.load_account(keypair.public_key)
        envelope = builder.build(account, keypair, payment_op(...))
    """

    def __init__(self, network: str, config: Optional[TxBuilderConfig] = None):
        self._network = network
        self._passphrase = get_network_passphrase(network)
        self._config = config or TxBuilderConfig()

    @property
    def network(self) -> str:
        return self._network

    @property
    def network_passphrase(self) -> str:
        return self._passphrase

    def build(
        self,
        source: Account,
        signer: Keypair,
        *operations: Operation,
    ) -> TransactionEnvelope:
        """
        Build and sign a transaction

        Args:
            source: Source account with a fresh sequence number
            signer: Keypair of the source account
            operations: One or more operations, applied in order

        Returns:
            Signed TransactionEnvelope
        """
        if not operations:
            raise TransactionError.build_failed("at least one operation is required")

        builder = TransactionBuilder(
            source_account=source,
            network_passphrase=self._passphrase,
            base_fee=self._config.base_fee,
        )
        for op in operations:
            builder.append_operation(op)

        envelope = builder.set_timeout(self._config.timeout_seconds).build()
        envelope.sign(signer)

        logger.debug(
            f"Built transaction with {len(operations)} operation(s) "
            f"for {signer.public_key[:8]}... on {self._network}"
        )
        return envelope

    @staticmethod
    def sign_prepared(envelope: TransactionEnvelope, signer: Keypair) -> TransactionEnvelope:
        """Sign an envelope returned by Soroban prepare_transaction"""
        envelope.sign(signer)
        return envelope
