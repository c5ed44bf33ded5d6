"""
Tests for the contract clients and the shared transaction pipeline.
"""
from unittest.mock import MagicMock, PropertyMock

import pytest
from web3 import Web3
from web3.exceptions import Web3Exception

from ccip_sdk.config import CCIPConfig, CCIPContext
from ccip_sdk.contracts import (
    ERC20Client, OnRampClient, RouterClient, TokenAdminRegistryClient, TokenPoolClient
)
from ccip_sdk.contracts.base import DEFAULT_GAS_LIMIT
from ccip_sdk.exceptions import ContractCallError, SigningRequiredError, TransactionError
from ccip_sdk.models import ZERO_ADDRESS, EVM2AnyMessage, TxReceipt
from ccip_sdk.provider import SigningProvider
from tests.conftest import (
    TEST_OWNER, TEST_POOL, TEST_RECEIVER, TEST_REGISTRY, TEST_ROUTER, TOKEN_A, SOLANA_DEVNET
)

TX_HASH = b"\xbb" * 32


def _receipt(status=1, block_number=100):
    return {
        "transactionHash": TX_HASH,
        "blockNumber": block_number,
        "blockHash": b"\xcc" * 32,
        "status": status,
        "gasUsed": 21000,
        "from": TEST_OWNER,
        "to": TEST_ROUTER,
        "logs": [],
    }


@pytest.fixture
def chain(mock_w3):
    mock_w3.eth.send_raw_transaction.return_value = TX_HASH
    mock_w3.eth.wait_for_transaction_receipt.return_value = _receipt()
    return mock_w3


def _message():
    return EVM2AnyMessage(receiver=TEST_RECEIVER, data="0x", fee_token=ZERO_ADDRESS)


class TestRouterClient:

    def test_uses_configured_router_address(self, signing_context):
        router = RouterClient(signing_context)
        assert router.address == Web3.to_checksum_address(TEST_ROUTER)

    def test_is_chain_supported(self, signing_context):
        router = RouterClient(signing_context)
        router.contract.functions.isChainSupported.return_value.call.return_value = True

        assert router.is_chain_supported(SOLANA_DEVNET) is True
        router.contract.functions.isChainSupported.assert_called_with(SOLANA_DEVNET)

    def test_get_fee_passes_router_struct(self, signing_context):
        router = RouterClient(signing_context)
        router.contract.functions.getFee.return_value.call.return_value = 12345

        assert router.get_fee(SOLANA_DEVNET, _message()) == 12345
        selector, struct = router.contract.functions.getFee.call_args[0]
        assert selector == SOLANA_DEVNET
        assert struct == (bytes.fromhex("ab" * 32), b"", [], ZERO_ADDRESS, b"")

    def test_read_failure_is_wrapped(self, signing_context):
        router = RouterClient(signing_context)
        router.contract.functions.getFee.return_value.call.side_effect = RuntimeError("execution reverted")

        with pytest.raises(ContractCallError) as exc_info:
            router.get_fee(SOLANA_DEVNET, _message())

        assert exc_info.value.contract == "Router"
        assert exc_info.value.operation == "getFee"
        assert "execution reverted" in str(exc_info.value)

    def test_ccip_send_pipeline(self, signing_context, chain, mock_signer):
        router = RouterClient(signing_context)
        fn = router.contract.functions.ccipSend.return_value
        fn.estimate_gas.return_value = 100000
        fn.build_transaction.return_value = {"data": "0x"}

        receipt = router.ccip_send(SOLANA_DEVNET, _message(), value=500)

        assert receipt["status"] == 1
        fn.estimate_gas.assert_called_once_with({"from": TEST_OWNER, "value": 500})
        tx_params = fn.build_transaction.call_args[0][0]
        assert tx_params["gas"] == 110000
        assert tx_params["value"] == 500
        assert tx_params["nonce"] == 7
        assert tx_params["gasPrice"] == 1_000_000_000
        mock_signer.sign_transaction.assert_called_once_with({"data": "0x"})
        chain.eth.send_raw_transaction.assert_called_once_with(b"\x01\x02")

    def test_gas_estimation_falls_back_to_default(self, signing_context, chain):
        router = RouterClient(signing_context)
        fn = router.contract.functions.ccipSend.return_value
        fn.estimate_gas.side_effect = Exception("cannot estimate")

        router.ccip_send(SOLANA_DEVNET, _message())

        assert fn.build_transaction.call_args[0][0]["gas"] == DEFAULT_GAS_LIMIT

    def test_reverted_send_raises_with_hash(self, signing_context, chain):
        chain.eth.wait_for_transaction_receipt.return_value = _receipt(status=0)
        router = RouterClient(signing_context)

        with pytest.raises(TransactionError, match="reverted") as exc_info:
            router.ccip_send(SOLANA_DEVNET, _message())

        assert exc_info.value.tx_hash == "0x" + "bb" * 32

    def test_signing_failure(self, signing_context, chain, mock_signer):
        mock_signer.sign_transaction.side_effect = ValueError("locked")
        router = RouterClient(signing_context)

        with pytest.raises(TransactionError, match="Failed to sign ccipSend"):
            router.ccip_send(SOLANA_DEVNET, _message())
        chain.eth.send_raw_transaction.assert_not_called()

    def test_web3_errors_are_reraised(self, signing_context, chain):
        chain.eth.send_raw_transaction.side_effect = Web3Exception("nonce too low")
        router = RouterClient(signing_context)

        with pytest.raises(Web3Exception, match="nonce too low"):
            router.ccip_send(SOLANA_DEVNET, _message())

    def test_other_send_errors_become_transaction_errors(self, signing_context, chain):
        chain.eth.send_raw_transaction.side_effect = ConnectionError("reset")
        router = RouterClient(signing_context)

        with pytest.raises(TransactionError, match="Failed to send ccipSend"):
            router.ccip_send(SOLANA_DEVNET, _message())

    def test_send_requires_signer(self, read_only_context, mock_w3):
        router = RouterClient(read_only_context)

        with pytest.raises(SigningRequiredError, match="Router.ccipSend"):
            router.ccip_send(SOLANA_DEVNET, _message())
        mock_w3.eth.send_raw_transaction.assert_not_called()


class TestConfirmations:

    def _context(self, w3, signer, config_confirmations=None, context_confirmations=None):
        return CCIPContext(
            provider=SigningProvider(w3=w3, signer=signer),
            config=CCIPConfig(router_address=TEST_ROUTER, confirmations=config_confirmations),
            confirmations=context_confirmations,
        )

    @pytest.mark.parametrize(
        "custom, context_value, config_value, expected",
        [
            (5, 4, 2, 5),
            (None, 4, 2, 4),
            (None, None, 2, 2),
            (None, None, None, 3),
            (0, 4, 2, 0),
        ]
    )
    def test_resolution_order(self, mock_w3, mock_signer, custom, context_value, config_value, expected):
        context = self._context(mock_w3, mock_signer, config_value, context_value)
        assert context.resolve_confirmations(custom) == expected

    def test_waits_for_additional_blocks(self, chain, mock_signer):
        context = self._context(chain, mock_signer, config_confirmations=3)
        block_number = PropertyMock(side_effect=[100, 101, 102])
        type(chain.eth).block_number = block_number
        router = RouterClient(context)

        receipt = router.wait_for_transaction(TX_HASH)

        assert receipt["blockNumber"] == 100
        assert block_number.call_count == 3

    def test_single_confirmation_does_not_poll(self, chain, mock_signer):
        context = self._context(chain, mock_signer, config_confirmations=5)
        block_number = PropertyMock(return_value=100)
        type(chain.eth).block_number = block_number
        router = RouterClient(context)

        router.wait_for_transaction(TX_HASH, custom_confirmations=1)

        block_number.assert_not_called()

    def test_send_override_controls_wait(self, signing_context, chain):
        block_number = PropertyMock(side_effect=[100, 101])
        type(chain.eth).block_number = block_number
        router = RouterClient(signing_context)

        router.ccip_send(SOLANA_DEVNET, _message(), confirmations=2)

        assert block_number.call_count == 2


class TestERC20Client:

    def test_allowance_and_balance(self, signing_context):
        token = ERC20Client(signing_context, TOKEN_A)
        token.contract.functions.allowance.return_value.call.return_value = 42
        token.contract.functions.balanceOf.return_value.call.return_value = 7

        assert token.get_allowance(TEST_OWNER, TEST_ROUTER) == 42
        assert token.get_balance(TEST_OWNER) == 7
        token.contract.functions.allowance.assert_called_once_with(
            Web3.to_checksum_address(TEST_OWNER), Web3.to_checksum_address(TEST_ROUTER)
        )

    def test_decimals_are_cached(self, signing_context):
        token = ERC20Client(signing_context, TOKEN_A)
        token.contract.functions.decimals.return_value.call.return_value = 6

        assert token.format_amount(1_500_000) == "1.5"
        assert token.get_decimals() == 6
        assert token.contract.functions.decimals.return_value.call.call_count == 1

    def test_approve_returns_receipt_model(self, signing_context, chain):
        token = ERC20Client(signing_context, TOKEN_A)

        receipt = token.approve(TEST_ROUTER, 1000)

        assert isinstance(receipt, TxReceipt)
        assert receipt.tx_hash == "0x" + "bb" * 32
        assert receipt.block_hash == "0x" + "cc" * 32
        token.contract.functions.approve.assert_called_once_with(Web3.to_checksum_address(TEST_ROUTER), 1000)

    def test_approve_requires_signer(self, read_only_context):
        token = ERC20Client(read_only_context, TOKEN_A)
        with pytest.raises(SigningRequiredError, match="ERC20.approve"):
            token.approve(TEST_ROUTER, 1000)


class TestRegistryClients:

    def test_static_config_from_tuple(self, signing_context):
        onramp = OnRampClient(signing_context, "0x2222222222222222222222222222222222222222")
        onramp.contract.functions.getStaticConfig.return_value.call.return_value = (
            SOLANA_DEVNET, ZERO_ADDRESS, ZERO_ADDRESS, TEST_REGISTRY
        )

        assert onramp.get_token_admin_registry() == TEST_REGISTRY
        assert onramp.get_static_config()["chainSelector"] == SOLANA_DEVNET

    def test_token_support(self, signing_context):
        registry = TokenAdminRegistryClient(signing_context, TEST_REGISTRY)
        registry.contract.functions.getPool.return_value.call.side_effect = [TEST_POOL, ZERO_ADDRESS]

        assert registry.is_token_supported(TOKEN_A) is True
        assert registry.is_token_supported(TOKEN_A) is False

    def test_pool_chain_support(self, signing_context):
        pool = TokenPoolClient(signing_context, TEST_POOL)
        pool.contract.functions.isSupportedChain.return_value.call.return_value = False

        assert pool.is_supported_chain(SOLANA_DEVNET) is False
        pool.contract.functions.isSupportedChain.assert_called_once_with(SOLANA_DEVNET)

    def test_pool_read_failure(self, signing_context):
        pool = TokenPoolClient(signing_context, TEST_POOL)
        pool.contract.functions.getToken.return_value.call.side_effect = RuntimeError("boom")

        with pytest.raises(ContractCallError, match="TokenPool getToken failed"):
            pool.get_token()
