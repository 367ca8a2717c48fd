"""
TxMaker - Unified entry point for Stellar test transactions

Builds, signs, submits and confirms classic and Soroban transactions
against a standalone or testnet network.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

import httpx
from stellar_sdk import Asset, LiquidityPoolAsset, ServerAsync, SorobanServerAsync
from stellar_sdk.exceptions import (
    BaseHorizonError,
    ConnectionError as StellarConnectionError,
    NotFoundError,
    PrepareTransactionException,
)
from stellar_sdk.operation import Operation
from stellar_sdk.soroban_rpc import SendTransactionStatus

from .config import config as global_config
from .errors import ConfigurationError, RpcError, TransactionError
from .infra import (
    CorrelationContext,
    FriendbotClient,
    TxBuilder,
    TxBuilderConfig,
    get_network_passphrase,
    log_with_correlation,
    wait_for_confirmation,
)
from .protocols import (
    add_liquidity_op,
    get_router_contract_address,
    liquidity_pool_deposit_op,
    liquidity_pool_withdraw_op,
    mint_op,
    payment_op,
    remove_liquidity_op,
    router_deadline,
    swap_exact_tokens_for_tokens_op,
)
from .types import (
    AddLiquiditySoroswapArgs,
    FundResult,
    LiquidityPoolDepositArgs,
    LiquidityPoolWithdrawArgs,
    MintTokensArgs,
    PaymentArgs,
    RemoveLiquiditySoroswapArgs,
    SwapExactTokensForTokensArgs,
    TestAccount,
    TxResult,
    get_liquidity_pool_id,
)
from .utils import get_asset_balance, log_error_result_codes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TxMakerConfig:
    """
    Immutable client configuration

    Unset fields default from the environment (txmaker.config.StellarConfig).
    The network is validated at construction.

    Usage:
        cfg = TxMakerConfig(network="testnet",
                            horizon_url="https://horizon-testnet.stellar.org",
                            soroban_url="https://soroban-testnet.stellar.org",
                            friendbot_uri="https://friendbot.stellar.org?addr=")
    """
    horizon_url: str = None
    soroban_url: str = None
    friendbot_uri: str = None
    router_contract_address: str = None
    network: str = None
    allow_http: bool = None

    def __post_init__(self):
        defaults = global_config.stellar
        for name, default in (
            ("horizon_url", defaults.horizon_url),
            ("soroban_url", defaults.soroban_url),
            ("friendbot_uri", defaults.friendbot_url),
            ("router_contract_address", defaults.router_contract_address),
            ("network", defaults.network),
            ("allow_http", defaults.allow_http),
        ):
            if getattr(self, name) is None:
                object.__setattr__(self, name, default)

        get_network_passphrase(self.network)

        if not self.allow_http:
            for name in ("horizon_url", "soroban_url", "friendbot_uri"):
                if getattr(self, name).startswith("http://"):
                    raise ConfigurationError.invalid(name, "plain http is disabled (ALLOW_HTTP=false)")

    @property
    def network_passphrase(self) -> str:
        return get_network_passphrase(self.network)


class TxMaker:
    """
    Stellar transaction maker

    Every action returns a TxResult instead of raising; only
    ConfigurationError escapes. The one exception is a missing router
    address, which router actions report as an ERROR result with code
    CONFIG_MISSING. Classic operations go through Horizon,
    contract invocations through Soroban RPC, and both are confirmed by
    polling Soroban RPC for the transaction hash.

    Concurrent actions from the same source account race on its sequence
    number; serialize them on the caller side.

    Usage:
        async with TxMaker(TxMakerConfig(network="standalone")) as maker:
            alice, bob = create_address(), create_address()
            await maker.fund_account(alice)
            result = await maker.payment(PaymentArgs(
                source=alice, destination=bob.public_key,
                asset=get_xlm_asset(), amount="10",
            ))
    """

    def __init__(
        self,
        config: Optional[TxMakerConfig] = None,
        horizon: Optional[ServerAsync] = None,
        soroban: Optional[SorobanServerAsync] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        tx_config: Optional[TxBuilderConfig] = None,
    ):
        """
        Initialize TxMaker

        Args:
            config: Endpoints, network and router (defaults from environment)
            horizon: Horizon server to use instead of a lazily created one
            soroban: Soroban RPC server to use instead of a lazily created one
            http_client: AsyncClient shared with friendbot
            tx_config: Fee and timeout overrides for built transactions
        """
        self._config = config or TxMakerConfig()
        self._tx_builder = TxBuilder(self._config.network, config=tx_config)

        self._horizon = horizon
        self._owns_horizon = horizon is None
        self._soroban = soroban
        self._owns_soroban = soroban is None
        self._friendbot = FriendbotClient(self._config.friendbot_uri, client=http_client)

    @classmethod
    async def discover(
        cls,
        api_uri: str,
        config: Optional[TxMakerConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        **kwargs,
    ) -> "TxMaker":
        """
        Build a TxMaker whose router address comes from the Soroswap API

        Raises:
            ConfigurationError: no router is published for the network
            RpcError: the API could not be reached
        """
        config = config or TxMakerConfig()
        router = await get_router_contract_address(api_uri, config.network, client=http_client)
        logger.info(f"Discovered Soroswap router {router} on {config.network}")
        config = TxMakerConfig(
            horizon_url=config.horizon_url,
            soroban_url=config.soroban_url,
            friendbot_uri=config.friendbot_uri,
            router_contract_address=router,
            network=config.network,
            allow_http=config.allow_http,
        )
        return cls(config, http_client=http_client, **kwargs)

    @property
    def config(self) -> TxMakerConfig:
        return self._config

    @property
    def tx_builder(self) -> TxBuilder:
        return self._tx_builder

    @property
    def horizon(self) -> ServerAsync:
        """Horizon server, created on first use"""
        if self._horizon is None:
            self._horizon = ServerAsync(horizon_url=self._config.horizon_url)
        return self._horizon

    @property
    def soroban(self) -> SorobanServerAsync:
        """Soroban RPC server, created on first use"""
        if self._soroban is None:
            self._soroban = SorobanServerAsync(server_url=self._config.soroban_url)
        return self._soroban

    # =========================================================================
    # Pipelines
    # =========================================================================

    async def _run(self, action: str, pipeline: Callable[[], Awaitable[TxResult]]) -> TxResult:
        """Run one action under a correlation id and map failures to a TxResult"""
        with CorrelationContext(action):
            try:
                return await pipeline()
            except ConfigurationError:
                raise
            except BaseHorizonError as e:
                result_codes = log_error_result_codes(e)
                if e.status == 400 and result_codes:
                    return TxResult.failed(
                        f"Transaction rejected: {result_codes.get('transaction', 'unknown')}",
                        result_codes=result_codes,
                    )
                return TxResult.from_exception(e)
            except StellarConnectionError as e:
                log_error_result_codes(e)
                return TxResult.from_exception(RpcError(f"Connection failed during {action}: {e}", original_error=e))
            except Exception as e:
                log_error_result_codes(e)
                return TxResult.from_exception(e)

    async def _confirm(self, action: str, tx_hash: str) -> TxResult:
        response = await wait_for_confirmation(
            tx_hash,
            self.soroban,
            poll_interval=global_config.tx.poll_interval,
            timeout=global_config.tx.effective_confirmation_timeout,
        )
        result = TxResult.from_confirmation(tx_hash, response)
        log_with_correlation(
            logger,
            logging.INFO if result.is_success else logging.WARNING,
            f"{tx_hash} -> {result.status.value}",
            action,
        )
        return result

    async def _submit_classic(
        self,
        action: str,
        source: TestAccount,
        build_op: Callable[[], Operation],
    ) -> TxResult:
        """Horizon load -> build+sign -> submit -> confirm"""
        keypair = source.keypair
        account = await self.horizon.load_account(keypair.public_key)
        envelope = self._tx_builder.build(account, keypair, build_op())
        tx_hash = envelope.hash_hex()

        log_with_correlation(logger, logging.INFO, f"Submitting {tx_hash} to Horizon", action)
        await self.horizon.submit_transaction(envelope)
        return await self._confirm(action, tx_hash)

    async def _invoke_contract(
        self,
        action: str,
        source: TestAccount,
        build_op: Callable[[], Operation],
    ) -> TxResult:
        """Soroban load -> build+sign -> simulate -> re-sign -> send -> confirm"""
        keypair = source.keypair
        account = await self.soroban.load_account(keypair.public_key)
        envelope = self._tx_builder.build(account, keypair, build_op())

        try:
            prepared = await self.soroban.prepare_transaction(envelope)
        except PrepareTransactionException as e:
            raise TransactionError.prepare_failed(str(e)) from e
        self._tx_builder.sign_prepared(prepared, keypair)

        response = await self.soroban.send_transaction(prepared)
        if response.status == SendTransactionStatus.ERROR:
            raise TransactionError.send_failed(
                "rejected by Soroban RPC",
                tx_hash=response.hash,
                error_result_xdr=response.error_result_xdr,
            )
        if response.status == SendTransactionStatus.TRY_AGAIN_LATER:
            raise TransactionError.send_failed(
                "Soroban RPC asked to try again later",
                tx_hash=response.hash,
                recoverable=True,
            )

        log_with_correlation(logger, logging.INFO, f"Sent {response.hash} ({response.status.value})", action)
        return await self._confirm(action, response.hash)

    def _require_router(self) -> Optional[TxResult]:
        if not self._config.router_contract_address:
            logger.error("Router contract address is not configured")
            return TxResult.from_exception(ConfigurationError.missing("ROUTER_CONTRACT_ADDRESS"))
        return None

    # =========================================================================
    # Classic actions
    # =========================================================================

    async def payment(self, args: PaymentArgs) -> TxResult:
        return await self._run("payment", lambda: self._submit_classic(
            "payment",
            args.source,
            lambda: payment_op(args.destination, args.asset, args.amount),
        ))

    async def liquidity_pool_deposit(self, args: LiquidityPoolDepositArgs) -> TxResult:
        """Deposit into a constant-product pool within a +/-10% price band"""
        return await self._run("pool_deposit", lambda: self._submit_classic(
            "pool_deposit",
            args.source,
            lambda: liquidity_pool_deposit_op(
                get_liquidity_pool_id(args.pool_asset),
                args.max_reserve_a,
                args.max_reserve_b,
            ),
        ))

    async def liquidity_pool_withdraw(self, args: LiquidityPoolWithdrawArgs) -> TxResult:
        return await self._run("pool_withdraw", lambda: self._submit_classic(
            "pool_withdraw",
            args.source,
            lambda: liquidity_pool_withdraw_op(
                args.pool_asset,
                args.amount,
                args.min_amount_a,
                args.min_amount_b,
            ),
        ))

    # =========================================================================
    # Contract actions
    # =========================================================================

    async def mint_tokens(self, args: MintTokensArgs) -> TxResult:
        """Call mint(destination, amount) on a token contract; source must be its admin"""
        return await self._run("mint", lambda: self._invoke_contract(
            "mint",
            args.source,
            lambda: mint_op(args.contract_id, args.destination, args.amount),
        ))

    async def add_liquidity_soroswap(self, args: AddLiquiditySoroswapArgs) -> TxResult:
        missing = self._require_router()
        if missing is not None:
            return missing
        return await self._run("add_liquidity", lambda: self._invoke_contract(
            "add_liquidity",
            args.source,
            lambda: add_liquidity_op(
                self._config.router_contract_address,
                args.token_a,
                args.token_b,
                args.amount_a_desired,
                args.amount_b_desired,
                args.amount_a_min,
                args.amount_b_min,
                args.to.public_key,
                router_deadline(),
            ),
        ))

    async def remove_liquidity_soroswap(self, args: RemoveLiquiditySoroswapArgs) -> TxResult:
        missing = self._require_router()
        if missing is not None:
            return missing
        return await self._run("remove_liquidity", lambda: self._invoke_contract(
            "remove_liquidity",
            args.source,
            lambda: remove_liquidity_op(
                self._config.router_contract_address,
                args.token_a,
                args.token_b,
                args.liquidity,
                args.amount_a_min,
                args.amount_b_min,
                args.to.public_key,
                router_deadline(),
            ),
        ))

    async def swap_exact_tokens_for_tokens_soroswap(self, args: SwapExactTokensForTokensArgs) -> TxResult:
        missing = self._require_router()
        if missing is not None:
            return missing
        return await self._run("swap", lambda: self._invoke_contract(
            "swap",
            args.source,
            lambda: swap_exact_tokens_for_tokens_op(
                self._config.router_contract_address,
                args.amount_in,
                args.amount_out_min,
                args.path,
                args.to.public_key,
                router_deadline(),
            ),
        ))

    # =========================================================================
    # Accounts
    # =========================================================================

    async def fund_account(self, account: TestAccount) -> FundResult:
        """Fund through friendbot; an already funded account is not an error"""
        with CorrelationContext("fund"):
            result = await self._friendbot.fund(account.public_key)
            log_with_correlation(logger, logging.INFO, f"{account.public_key[:8]}... -> {result.status.value}", "fund")
            return result

    async def get_asset_balance(
        self,
        public_key: str,
        asset: Union[Asset, LiquidityPoolAsset],
    ) -> Optional[str]:
        """
        Current balance of asset held by public_key

        Returns None when the account does not exist or holds no trustline
        for the asset.
        """
        try:
            record = await self.horizon.accounts().account_id(public_key).call()
        except NotFoundError:
            return None
        return get_asset_balance(record.get("balances", []), asset)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def close(self):
        """Close the connections this client opened"""
        if self._owns_horizon and self._horizon is not None:
            await self._horizon.close()
            self._horizon = None
        if self._owns_soroban and self._soroban is not None:
            await self._soroban.close()
            self._soroban = None
        await self._friendbot.close()

    async def __aenter__(self) -> "TxMaker":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return f"TxMaker(network={self._config.network}, horizon={self._config.horizon_url})"
