"""
Providers and signers.

A client holds exactly one provider, chosen when it is constructed:
``ReadOnlyProvider`` for queries, ``SigningProvider`` when transactions must
be sent.
"""
import urllib.parse
from dataclasses import dataclass
from typing import Dict, Any, Optional, Protocol, Union

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from web3 import Web3
from eth_account import Account
from eth_account.signers.local import LocalAccount


class Signer(Protocol):
    """Protocol for custom signers"""
    address: str

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        """Sign transaction and return signed tx object"""
        ...


class LocalSigner:
    """Signer backed by a private key held in memory"""

    def __init__(self, private_key: str):
        self._account: LocalAccount = Account.from_key(private_key)

    @property
    def address(self) -> str:
        return self._account.address

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        return self._account.sign_transaction(transaction_dict)


@dataclass(frozen=True)
class ReadOnlyProvider:
    """Network access without signing capabilities"""
    w3: Web3

    @property
    def can_sign(self) -> bool:
        return False


@dataclass(frozen=True)
class SigningProvider:
    """Network access plus a signer for transactions"""
    w3: Web3
    signer: Signer

    @property
    def can_sign(self) -> bool:
        return True

    @property
    def address(self) -> str:
        return self.signer.address


Provider = Union[ReadOnlyProvider, SigningProvider]


def validate_rpc_url(rpc_url: str) -> None:
    """
    Reject plaintext RPC URLs unless they point at the local machine.

    Raises:
        ValueError: If the URL doesn't use https (unless it's localhost/127.0.0.1)
    """
    parsed = urllib.parse.urlparse(rpc_url)
    host = parsed.netloc.split(':')[0] if parsed.netloc else ''
    is_local = host in ('localhost', '127.0.0.1')
    if parsed.scheme != 'https' and not is_local:
        raise ValueError(f"rpc_url must use https:// for security (got: {parsed.scheme}://)")


def create_session(retry_count: int = 3) -> requests.Session:
    """HTTP session that retries 5xx responses and connection errors"""
    session = requests.Session()
    retries = Retry(
        total=retry_count,
        backoff_factor=0.5,
        status_forcelist=[500, 502, 503, 504],
        allowed_methods=["GET", "POST"],
        raise_on_status=False,
        connect=retry_count,
        read=retry_count,
        other=retry_count
    )
    session.mount("http://", HTTPAdapter(max_retries=retries))
    session.mount("https://", HTTPAdapter(max_retries=retries))
    return session


def create_web3(rpc_url: str, retry_count: int = 3, timeout: int = 30) -> Web3:
    """Web3 instance over a retrying HTTP session"""
    validate_rpc_url(rpc_url)
    provider = Web3.HTTPProvider(
        rpc_url,
        request_kwargs={"timeout": timeout},
        session=create_session(retry_count),
    )
    return Web3(provider)


def create_provider(
    w3: Web3,
    private_key: Optional[str] = None,
    signer: Optional[Signer] = None,
) -> Provider:
    """
    Resolve the provider variant once.

    A custom signer takes precedence over a private key; with neither the
    provider is read-only.
    """
    if signer is not None:
        return SigningProvider(w3=w3, signer=signer)
    if private_key:
        return SigningProvider(w3=w3, signer=LocalSigner(private_key))
    return ReadOnlyProvider(w3=w3)
