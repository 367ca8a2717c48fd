"""
Unit tests for the TxMaker facade

Horizon and Soroban RPC are replaced by mocks; transactions are built and
signed for real.
"""

import asyncio
import copy
import json
import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
from stellar_sdk import Account, Address, Asset, Keypair, StrKey, TransactionEnvelope, scval
from stellar_sdk.client.response import Response
from stellar_sdk.exceptions import (
    BadRequestError,
    ConnectionError as StellarConnectionError,
    NotFoundError,
    PrepareTransactionException,
)
from stellar_sdk.soroban_rpc import GetTransactionStatus, SendTransactionStatus

from txmaker import (
    AddLiquiditySoroswapArgs,
    ConfigurationError,
    LiquidityPoolDepositArgs,
    LiquidityPoolWithdrawArgs,
    MintTokensArgs,
    PaymentArgs,
    RemoveLiquiditySoroswapArgs,
    SwapExactTokensForTokensArgs,
    TxMaker,
    TxMakerConfig,
    create_address,
    get_xlm_asset,
    make_pool_asset,
)
from txmaker.types import FundStatus

ROUTER = StrKey.encode_contract(bytes(32))
TOKEN_A = StrKey.encode_contract(bytes([1] * 32))
TOKEN_B = StrKey.encode_contract(bytes([2] * 32))
SENT_HASH = "cd" * 32


def make_config(router: str = ROUTER, network: str = "standalone") -> TxMakerConfig:
    return TxMakerConfig(
        horizon_url="http://localhost:8000",
        soroban_url="http://localhost:8000/soroban/rpc",
        friendbot_uri="http://localhost:8000/friendbot?addr=",
        router_contract_address=router,
        network=network,
        allow_http=True,
    )


def confirmed(status=GetTransactionStatus.SUCCESS) -> SimpleNamespace:
    return SimpleNamespace(status=status, ledger=99, result_xdr="AAAA", result_meta_xdr="BBBB")


def make_horizon() -> MagicMock:
    horizon = MagicMock()
    horizon.load_account = AsyncMock(side_effect=lambda pk: Account(pk, 100))
    horizon.submit_transaction = AsyncMock(return_value={"successful": True})
    horizon.close = AsyncMock()
    return horizon


def simulated(envelope: TransactionEnvelope) -> TransactionEnvelope:
    """Like SorobanServerAsync.prepare_transaction: a fresh, unsigned copy"""
    prepared = copy.deepcopy(envelope)
    prepared.signatures = []
    return prepared


def make_soroban(send_status=SendTransactionStatus.PENDING) -> MagicMock:
    soroban = MagicMock()
    soroban.load_account = AsyncMock(side_effect=lambda pk: Account(pk, 200))
    soroban.prepare_transaction = AsyncMock(side_effect=simulated)
    soroban.send_transaction = AsyncMock(return_value=SimpleNamespace(
        status=send_status,
        hash=SENT_HASH,
        error_result_xdr="AAAAERR" if send_status == SendTransactionStatus.ERROR else None,
    ))
    soroban.get_transaction = AsyncMock(return_value=confirmed())
    soroban.close = AsyncMock()
    return soroban


def horizon_rejection(result_codes: dict) -> BadRequestError:
    body = {"title": "Transaction Failed", "status": 400, "extras": {"result_codes": result_codes}}
    return BadRequestError(Response(400, json.dumps(body), {}, "http://localhost:8000/transactions"))


class TestTxMakerConfig(unittest.TestCase):

    def test_unsupported_network_rejected(self):
        with self.assertRaises(ConfigurationError):
            make_config(network="public")

    def test_passphrase(self):
        self.assertEqual(make_config(network="testnet").network_passphrase, "Test SDF Network ; September 2015")

    def test_frozen(self):
        cfg = make_config()
        with self.assertRaises(Exception):
            cfg.network = "testnet"

    def test_http_disallowed(self):
        with self.assertRaises(ConfigurationError):
            TxMakerConfig(
                horizon_url="http://localhost:8000",
                soroban_url="https://rpc.example",
                friendbot_uri="https://friendbot.example?addr=",
                network="testnet",
                allow_http=False,
            )


class TestClassicPipeline(unittest.TestCase):
    """Horizon submission, Soroban RPC confirmation"""

    def setUp(self):
        self.horizon = make_horizon()
        self.soroban = make_soroban()
        self.maker = TxMaker(make_config(), horizon=self.horizon, soroban=self.soroban)
        self.alice = create_address()
        self.bob = create_address()

    def test_payment_success(self):
        result = asyncio.run(self.maker.payment(PaymentArgs(
            source=self.alice,
            destination=self.bob.public_key,
            asset=get_xlm_asset(),
            amount="10",
        )))

        self.assertTrue(result.is_success, result)
        self.assertEqual(result.ledger, 99)

        self.horizon.load_account.assert_awaited_once_with(self.alice.public_key)
        envelope = self.horizon.submit_transaction.await_args.args[0]
        self.assertIsInstance(envelope, TransactionEnvelope)
        self.assertEqual(envelope.transaction.sequence, 101)
        self.assertEqual(len(envelope.signatures), 1)
        # Confirmation is tracked through Soroban RPC by the envelope hash
        self.soroban.get_transaction.assert_awaited_once_with(envelope.hash_hex())
        self.assertEqual(result.tx_hash, envelope.hash_hex())

    def test_payment_failed_on_chain(self):
        self.soroban.get_transaction.return_value = confirmed(GetTransactionStatus.FAILED)

        result = asyncio.run(self.maker.payment(PaymentArgs(
            source=self.alice, destination=self.bob.public_key, asset=get_xlm_asset(), amount="10",
        )))

        self.assertTrue(result.is_failed)

    def test_horizon_rejection_carries_result_codes(self):
        codes = {"transaction": "tx_failed", "operations": ["op_underfunded"]}
        self.horizon.submit_transaction.side_effect = horizon_rejection(codes)

        result = asyncio.run(self.maker.payment(PaymentArgs(
            source=self.alice, destination=self.bob.public_key, asset=get_xlm_asset(), amount="10",
        )))

        self.assertTrue(result.is_failed)
        self.assertEqual(result.result_codes, codes)
        self.assertIn("tx_failed", result.error)
        self.soroban.get_transaction.assert_not_awaited()

    def test_missing_account_is_error_result(self):
        self.horizon.load_account.side_effect = NotFoundError(
            Response(404, json.dumps({"title": "Resource Missing", "status": 404}), {}, "http://localhost:8000")
        )

        result = asyncio.run(self.maker.payment(PaymentArgs(
            source=self.alice, destination=self.bob.public_key, asset=get_xlm_asset(), amount="10",
        )))

        self.assertTrue(result.is_error)
        self.horizon.submit_transaction.assert_not_awaited()

    def test_connection_error_is_recoverable(self):
        self.horizon.load_account.side_effect = StellarConnectionError("connection refused")

        result = asyncio.run(self.maker.payment(PaymentArgs(
            source=self.alice, destination=self.bob.public_key, asset=get_xlm_asset(), amount="10",
        )))

        self.assertTrue(result.is_error)
        self.assertEqual(result.error_code, "1001")
        self.assertTrue(result.recoverable)

    def test_pool_deposit_and_withdraw(self):
        usd = Asset("USD", Keypair.random().public_key)
        pool_asset = make_pool_asset(get_xlm_asset(), usd)

        deposit = asyncio.run(self.maker.liquidity_pool_deposit(LiquidityPoolDepositArgs(
            source=self.alice, pool_asset=pool_asset, max_reserve_a="200", max_reserve_b="100",
        )))
        withdraw = asyncio.run(self.maker.liquidity_pool_withdraw(LiquidityPoolWithdrawArgs(
            source=self.alice, pool_asset=pool_asset, amount="50", min_amount_a="0", min_amount_b="0",
        )))

        self.assertTrue(deposit.is_success)
        self.assertTrue(withdraw.is_success)
        self.assertEqual(self.horizon.submit_transaction.await_count, 2)

    def test_zero_reserve_is_error_result(self):
        usd = Asset("USD", Keypair.random().public_key)

        result = asyncio.run(self.maker.liquidity_pool_deposit(LiquidityPoolDepositArgs(
            source=self.alice,
            pool_asset=make_pool_asset(get_xlm_asset(), usd),
            max_reserve_a="200",
            max_reserve_b="0",
        )))

        self.assertTrue(result.is_error)
        self.horizon.submit_transaction.assert_not_awaited()


class TestContractPipeline(unittest.TestCase):
    """Soroban simulation, submission and confirmation"""

    def setUp(self):
        self.horizon = make_horizon()
        self.soroban = make_soroban()
        self.maker = TxMaker(make_config(), horizon=self.horizon, soroban=self.soroban)
        self.admin = create_address()
        self.user = create_address()

    def _mint(self):
        return asyncio.run(self.maker.mint_tokens(MintTokensArgs(
            source=self.admin, contract_id=TOKEN_A, destination=self.user.public_key, amount=1000,
        )))

    def test_mint_success(self):
        result = self._mint()

        self.assertTrue(result.is_success, result)
        self.assertEqual(result.tx_hash, SENT_HASH)
        self.soroban.load_account.assert_awaited_once_with(self.admin.public_key)
        self.soroban.prepare_transaction.assert_awaited_once()
        self.soroban.get_transaction.assert_awaited_once_with(SENT_HASH)
        self.horizon.submit_transaction.assert_not_awaited()

        # Re-signed after simulation, once, over the prepared envelope
        built = self.soroban.prepare_transaction.await_args.args[0]
        sent = self.soroban.send_transaction.await_args.args[0]
        self.assertIsNot(sent, built)
        self.assertEqual(len(sent.signatures), 1)
        self.admin.keypair.verify(sent.hash(), sent.signatures[0].signature)

    def test_simulation_failure(self):
        self.soroban.prepare_transaction.side_effect = PrepareTransactionException("HostError", MagicMock())

        result = self._mint()

        self.assertTrue(result.is_error)
        self.assertEqual(result.error_code, "2002")
        self.soroban.send_transaction.assert_not_awaited()

    def test_send_error_status(self):
        self.maker = TxMaker(make_config(), horizon=self.horizon,
                             soroban=make_soroban(SendTransactionStatus.ERROR))

        result = self._mint()

        self.assertTrue(result.is_error)
        self.assertEqual(result.error_code, "2003")
        self.assertEqual(result.tx_hash, SENT_HASH)
        self.assertFalse(result.recoverable)

    def test_try_again_later_is_recoverable(self):
        self.maker = TxMaker(make_config(), horizon=self.horizon,
                             soroban=make_soroban(SendTransactionStatus.TRY_AGAIN_LATER))

        result = self._mint()

        self.assertTrue(result.is_error)
        self.assertTrue(result.recoverable)

    @patch("txmaker.client.router_deadline", return_value=1_700_003_600)
    def test_router_actions(self, mock_deadline):
        add = asyncio.run(self.maker.add_liquidity_soroswap(AddLiquiditySoroswapArgs(
            source=self.user, to=self.user, token_a=TOKEN_A, token_b=TOKEN_B,
            amount_a_desired=1000, amount_b_desired=2000, amount_a_min=0, amount_b_min=0,
        )))
        remove = asyncio.run(self.maker.remove_liquidity_soroswap(RemoveLiquiditySoroswapArgs(
            source=self.user, to=self.user, token_a=TOKEN_A, token_b=TOKEN_B,
            liquidity=500, amount_a_min=0, amount_b_min=0,
        )))
        swap = asyncio.run(self.maker.swap_exact_tokens_for_tokens_soroswap(SwapExactTokensForTokensArgs(
            source=self.user, to=self.user, amount_in=100, amount_out_min=90, path=[TOKEN_A, TOKEN_B],
        )))

        self.assertTrue(add.is_success)
        self.assertTrue(remove.is_success)
        self.assertTrue(swap.is_success)
        self.assertEqual(mock_deadline.call_count, 3)

        sent = self.soroban.send_transaction.await_args_list[0].args[0]
        invocation = sent.transaction.operations[0].host_function.invoke_contract
        self.assertEqual(invocation.function_name.sc_symbol, b"add_liquidity")
        self.assertEqual(Address.from_xdr_sc_address(invocation.contract_address).address, ROUTER)
        self.assertEqual(scval.from_uint64(invocation.args[-1]), 1_700_003_600)

    def test_router_missing_is_error_result(self):
        maker = TxMaker(make_config(router=""), horizon=self.horizon, soroban=self.soroban)

        result = asyncio.run(maker.swap_exact_tokens_for_tokens_soroswap(SwapExactTokensForTokensArgs(
            source=self.user, to=self.user, amount_in=100, amount_out_min=90, path=[TOKEN_A, TOKEN_B],
        )))

        self.assertTrue(result.is_error)
        self.assertEqual(result.error_code, "9002")
        self.soroban.load_account.assert_not_awaited()


class TestAccounts(unittest.TestCase):

    def test_fund_account(self):
        async def run():
            transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"successful": True}))
            async with httpx.AsyncClient(transport=transport) as client:
                maker = TxMaker(make_config(), horizon=make_horizon(), soroban=make_soroban(), http_client=client)
                return await maker.fund_account(create_address())

        self.assertEqual(asyncio.run(run()).status, FundStatus.FUNDED)

    def test_get_asset_balance(self):
        horizon = make_horizon()
        account_call = horizon.accounts.return_value.account_id.return_value
        account_call.call = AsyncMock(return_value={
            "balances": [{"balance": "10000.0000000", "asset_type": "native"}],
        })
        maker = TxMaker(make_config(), horizon=horizon, soroban=make_soroban())
        pk = create_address().public_key

        self.assertEqual(asyncio.run(maker.get_asset_balance(pk, get_xlm_asset())), "10000.0000000")
        horizon.accounts.return_value.account_id.assert_called_with(pk)

    def test_get_asset_balance_missing_account(self):
        horizon = make_horizon()
        horizon.accounts.return_value.account_id.return_value.call = AsyncMock(side_effect=NotFoundError(
            Response(404, json.dumps({"status": 404}), {}, "http://localhost:8000")
        ))
        maker = TxMaker(make_config(), horizon=horizon, soroban=make_soroban())

        self.assertIsNone(asyncio.run(maker.get_asset_balance(create_address().public_key, get_xlm_asset())))


class TestLifecycle(unittest.TestCase):

    def test_injected_services_not_closed(self):
        horizon, soroban = make_horizon(), make_soroban()

        async def run():
            async with TxMaker(make_config(), horizon=horizon, soroban=soroban):
                pass

        asyncio.run(run())
        horizon.close.assert_not_awaited()
        soroban.close.assert_not_awaited()

    def test_discover(self):
        routers = [{"network": "standalone", "router_id": "r", "router_address": ROUTER}]

        async def run():
            transport = httpx.MockTransport(lambda request: httpx.Response(200, json=routers))
            async with httpx.AsyncClient(transport=transport) as client:
                return await TxMaker.discover(
                    "http://localhost:3000",
                    config=make_config(router=""),
                    http_client=client,
                    horizon=make_horizon(),
                    soroban=make_soroban(),
                )

        maker = asyncio.run(run())
        self.assertEqual(maker.config.router_contract_address, ROUTER)

    def test_discover_unknown_network(self):
        routers = [{"network": "testnet", "router_id": "r", "router_address": ROUTER}]

        async def run():
            transport = httpx.MockTransport(lambda request: httpx.Response(200, json=routers))
            async with httpx.AsyncClient(transport=transport) as client:
                await TxMaker.discover("http://localhost:3000", config=make_config(), http_client=client)

        with self.assertRaises(ConfigurationError):
            asyncio.run(run())


if __name__ == "__main__":
    unittest.main()
