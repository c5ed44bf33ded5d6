"""
Pytest fixtures for the CCIP SDK tests.
"""
import time
from unittest.mock import MagicMock

import pytest
from web3.providers.rpc import HTTPProvider

from ccip_sdk.config import CCIPConfig, CCIPContext, NetworkConfig
from ccip_sdk.provider import ReadOnlyProvider, SigningProvider

# Constants for testing
TEST_RPC_URL = "https://rpc.example.com"
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_ROUTER = "0x1234567890123456789012345678901234567890"
TEST_OWNER = "0x9999999999999999999999999999999999999999"
TEST_ONRAMP = "0x2222222222222222222222222222222222222222"
TEST_REGISTRY = "0x3333333333333333333333333333333333333333"
TEST_POOL = "0x4444444444444444444444444444444444444444"
TOKEN_A = "0x1111111111111111111111111111111111111111"
TOKEN_B = "0x5555555555555555555555555555555555555555"
LINK_TOKEN = "0x7777777777777777777777777777777777777777"
SOLANA_DEVNET = 16423721717087811551
TEST_RECEIVER = "0x" + "ab" * 32


# Make time.sleep instantaneous so retries don't slow the suite down
@pytest.fixture(autouse=True)
def _fast_sleep(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda *_a, **_kw: None)


@pytest.fixture(autouse=True)
def _patch_http_provider(monkeypatch):
    """
    Stub every Web3 HTTP call so no DNS / network traffic is triggered.
    """
    def _dummy(self, method, params=None, _=None):
        if method == "eth_chainId":
            return {"jsonrpc": "2.0", "id": 1, "result": "0xaa36a7"}   # sepolia
        return {"jsonrpc": "2.0", "id": 1, "result": "0x0"}

    monkeypatch.setattr(HTTPProvider, "make_request", _dummy, raising=True)


@pytest.fixture(autouse=True)
def _reset_network_cache():
    yield
    NetworkConfig._networks_cache = None


@pytest.fixture
def mock_w3():
    w3 = MagicMock()
    w3.eth.block_number = 100
    w3.eth.gas_price = 1_000_000_000
    w3.eth.get_transaction_count.return_value = 7
    return w3


@pytest.fixture
def mock_signer():
    signer = MagicMock()
    signer.address = TEST_OWNER
    signer.sign_transaction.return_value.raw_transaction = b"\x01\x02"
    return signer


@pytest.fixture
def signing_context(mock_w3, mock_signer):
    return CCIPContext(
        provider=SigningProvider(w3=mock_w3, signer=mock_signer),
        config=CCIPConfig(router_address=TEST_ROUTER, confirmations=1),
    )


@pytest.fixture
def read_only_context(mock_w3):
    return CCIPContext(
        provider=ReadOnlyProvider(w3=mock_w3),
        config=CCIPConfig(router_address=TEST_ROUTER, confirmations=1),
    )


class TokenClientFactory:
    """Hands out one MagicMock ERC20 client per token address"""

    def __init__(self):
        self.clients = {}
        self.calls = []

    def get(self, address):
        key = address.lower()
        if key not in self.clients:
            client = MagicMock(name=f"erc20-{key}")
            client.address = address
            client.get_symbol.return_value = "TKN"
            client.format_amount.side_effect = lambda amount: str(amount)
            client.get_allowance.return_value = 0
            self.clients[key] = client
        return self.clients[key]

    def __call__(self, context, address, logger=None):
        self.calls.append(address)
        return self.get(address)


@pytest.fixture
def token_clients():
    return TokenClientFactory()
