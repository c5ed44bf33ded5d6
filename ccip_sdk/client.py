"""
CCIPClient - Main client for sending CCIP cross-chain messages from EVM chains.
"""
import logging
from typing import List, Optional, Sequence, Union

from web3 import Web3
from web3.types import TxReceipt as Web3TxReceipt

from .approvals import ApprovalCoordinator
from .config import CCIPConfig, CCIPContext, NetworkConfig
from .contracts import (
    ERC20Client, OnRampClient, RouterClient, TokenAdminRegistryClient, TokenPoolClient
)
from .exceptions import (
    ChainNotSupportedForTokenError, CriticalConfigurationError, NetworkError,
    SigningRequiredError, TokenNotSupportedError, UnsupportedDestinationError
)
from .models import FeeQuote, FeeRequest, MessageRequest, SendResult, TokenAmount
from .provider import Signer, SigningProvider, create_provider, create_web3
from .receipts import extract_ccip_message
from .utils import get_ccip_explorer_url, is_native_token, to_hex

GENERIC_EXPLORER_URL = "https://blockscan.com"


class CCIPClient:
    """
    Client for sending CCIP messages (data, tokens, or both) across chains.

    A send runs these stages in order and stops at the first failure:
    1. Check the router supports the destination chain
    2. Quote the fee
    3. Validate every token's pool supports the destination (token sends only)
    4. Approve the router for transfer amounts and the fee
    5. Submit ccipSend, attaching the fee as value when paying natively
    6. Decode the message id from the receipt

    Read-only operations (fee quotes, chain support) work without a signer.
    """

    def __init__(
        self,
        router_address: str,
        rpc_url: Optional[str] = None,
        private_key: Optional[str] = None,
        signer: Optional[Signer] = None,
        confirmations: Optional[int] = None,
        expected_chain_id: Optional[int] = None,
        retry_count: int = 3,
        timeout: int = 30,
        log_level: int = logging.INFO,
        logger: Optional[logging.Logger] = None,
        w3: Optional[Web3] = None,
    ):
        """
        Initialize the CCIPClient

        Args:
            router_address: CCIP Router contract address on the source chain
            rpc_url: RPC endpoint URL (required unless ``w3`` is given)
            private_key: Private key for signing (optional)
            signer: Custom signer object (takes precedence over private_key)
            confirmations: Confirmations to wait for on every transaction
            expected_chain_id: Chain ID checked by assert_chain_id
            retry_count: Number of retries for RPC HTTP requests
            timeout: Timeout for RPC HTTP requests in seconds
            log_level: Level applied to the client's logger
            logger: Optional logger instance
            w3: Pre-built Web3 instance

        Raises:
            ValueError: If neither rpc_url nor w3 is provided, or the URL is not https
        """
        if w3 is None:
            if not rpc_url:
                raise ValueError("Either rpc_url or w3 must be provided")
            w3 = create_web3(rpc_url, retry_count=retry_count, timeout=timeout)

        self.rpc_url = rpc_url
        self.logger = logger or logging.getLogger(__name__)
        self.logger.setLevel(log_level)
        self.w3 = w3
        self._expected_chain_id = expected_chain_id
        self._network_name: Optional[str] = None

        self.config = CCIPConfig(
            router_address=router_address,
            confirmations=confirmations,
            log_level=log_level,
        )
        self.context = CCIPContext(
            provider=create_provider(w3, private_key=private_key, signer=signer),
            config=self.config,
            logger=self.logger,
        )
        self.router = RouterClient(self.context, logger=self.logger)
        self.approvals = ApprovalCoordinator(self.context, self.router.address, logger=self.logger)

        self.logger.debug(
            f"Initialized CCIPClient (router={self.router.address}, "
            f"signer={'yes' if self.can_sign else 'no'}, confirmations={confirmations or 'default'})"
        )

    @classmethod
    def from_network(
        cls,
        network: str,
        private_key: Optional[str] = None,
        signer: Optional[Signer] = None,
        rpc_url: Optional[str] = None,
        **kwargs
    ) -> "CCIPClient":
        """
        Create a client from the packaged network configuration.

        Args:
            network: Network name (e.g. "ethereum-sepolia")
            private_key: Private key for signing (optional)
            signer: Custom signer (optional)
            rpc_url: Override for the network's RPC URL
            **kwargs: Passed through to the constructor
        """
        kwargs.setdefault("confirmations", NetworkConfig.get_confirmations(network))
        client = cls(
            router_address=NetworkConfig.get_router_address(network),
            rpc_url=NetworkConfig.get_rpc_url(network, override=rpc_url),
            private_key=private_key,
            signer=signer,
            expected_chain_id=NetworkConfig.get_chain_id(network),
            **kwargs
        )
        client._network_name = network
        return client

    @classmethod
    def read_only(cls, network: str, rpc_url: Optional[str] = None, **kwargs) -> "CCIPClient":
        """Client without signing capabilities, for fee quotes and lookups"""
        kwargs.pop("private_key", None)
        kwargs.pop("signer", None)
        return cls.from_network(network, rpc_url=rpc_url, **kwargs)

    @property
    def can_sign(self) -> bool:
        return isinstance(self.context.provider, SigningProvider)

    @property
    def address(self) -> str:
        """
        Signer address

        Raises:
            SigningRequiredError: If the client has no signer
        """
        if not self.can_sign:
            raise SigningRequiredError("Reading the sender address")
        return self.context.provider.address

    def is_chain_supported(self, chain_selector: int) -> bool:
        """Whether the router can route messages to ``chain_selector``"""
        return self.router.is_chain_supported(chain_selector)

    def get_fee(self, request: FeeRequest) -> FeeQuote:
        """
        Quote the fee for a message

        Args:
            request: Destination selector plus the message to price

        Returns:
            Fee quote in units of the message's fee token
        """
        try:
            fee = self.router.get_fee(request.destination_chain_selector, request.message)
        except Exception as e:
            self.logger.error(f"Error calculating fee: {e}")
            raise
        return FeeQuote(token=request.message.fee_token, amount=fee)

    def send(self, request: MessageRequest, confirmations: Optional[int] = None) -> SendResult:
        """
        Send a CCIP message

        Args:
            request: Message to send
            confirmations: Override for the confirmation count of the approvals
                and the send

        Returns:
            Send result; message id fields are empty when the receipt could not
            be decoded, the transaction itself is final either way

        Raises:
            UnsupportedDestinationError: If the router does not support the destination
            TokenNotSupportedError: If a token has no registered pool
            ChainNotSupportedForTokenError: If a token pool does not support the destination
            CriticalConfigurationError: If the OnRamp or TokenAdminRegistry is unset on-chain
            SigningRequiredError: If the client has no signer
            ApprovalError: If an approval transaction fails
            TransactionError: If the send transaction fails
        """
        selector = request.destination_chain_selector
        self.logger.debug(f"Preparing CCIP message for chain {selector}")

        if not self.is_chain_supported(selector):
            error = UnsupportedDestinationError(selector)
            self.logger.error(str(error))
            raise error

        message = request.to_message()
        fee = self.get_fee(FeeRequest(destination_chain_selector=selector, message=message))
        self.logger.info(f"Estimated fee: {fee.amount}")

        token_amounts: List[TokenAmount] = list(request.token_amounts or [])
        if token_amounts:
            registry_address = self.resolve_token_admin_registry(selector)
            self.validate_token_transfers(registry_address, token_amounts, selector)

        self.approvals.ensure_approvals(token_amounts, fee, confirmations=confirmations)

        value = fee.amount if is_native_token(request.fee_token) else 0
        if value:
            self.logger.debug(f"Setting transaction value to {value}")

        receipt = self.router.ccip_send(selector, message, value=value, confirmations=confirmations)
        return self._build_result(receipt)

    def resolve_token_admin_registry(self, chain_selector: int) -> str:
        """
        Find the TokenAdminRegistry through the router's OnRamp for a lane.

        Raises:
            CriticalConfigurationError: If either address is the zero address
        """
        self.logger.debug("Fetching TokenAdminRegistry address from chain")
        on_ramp_address = self.router.get_on_ramp(chain_selector)
        if is_native_token(on_ramp_address):
            message = f"Critical error: No OnRamp found for destination chain {chain_selector}"
            self.logger.error(message)
            raise CriticalConfigurationError(message, chain_selector=chain_selector)
        self.logger.debug(f"Found OnRamp at {on_ramp_address} for chain {chain_selector}")

        on_ramp = OnRampClient(self.context, on_ramp_address, logger=self.logger)
        registry_address = on_ramp.get_token_admin_registry()
        if is_native_token(registry_address):
            message = "Critical error: TokenAdminRegistry address is zero address"
            self.logger.error(message)
            raise CriticalConfigurationError(message, chain_selector=chain_selector)

        self.logger.debug(f"Found TokenAdminRegistry at {registry_address}")
        return registry_address

    def validate_token_transfers(
        self,
        registry_address: str,
        token_amounts: Sequence[TokenAmount],
        chain_selector: int
    ) -> None:
        """
        Check every token has a pool that supports the destination chain.

        All tokens are checked before any approval is sent.
        """
        self.logger.debug("Validating token transfers for destination chain")
        registry = TokenAdminRegistryClient(self.context, registry_address, logger=self.logger)

        for token_amount in token_amounts:
            token = token_amount.token
            pool_address = registry.get_pool(token)
            if is_native_token(pool_address):
                error = TokenNotSupportedError(token)
                self.logger.error(str(error))
                raise error

            pool = TokenPoolClient(self.context, pool_address, logger=self.logger)
            if not pool.is_supported_chain(chain_selector):
                error = ChainNotSupportedForTokenError(chain_selector, token, pool_address)
                self.logger.error(str(error))
                raise error

            self.logger.debug(
                f"Token {token} is supported for destination chain {chain_selector} with pool {pool_address}"
            )

    def token(self, address: str) -> ERC20Client:
        """ERC20 client sharing this client's provider"""
        return ERC20Client(self.context, address, logger=self.logger)

    def _build_result(self, receipt: Web3TxReceipt) -> SendResult:
        tx_hash = to_hex(receipt["transactionHash"])
        block_number = receipt.get("blockNumber")
        self.logger.info(f"Transaction sent: {tx_hash}")

        try:
            ccip_message = extract_ccip_message(receipt)
        except Exception as e:
            self.logger.warning(f"Failed to decode CCIPMessageSent event: {e}")
            ccip_message = None

        if ccip_message is None:
            self.logger.warning("Could not extract message ID from transaction receipt")
            return SendResult(transaction_hash=tx_hash, block_number=block_number)

        self.logger.info(f"Message ID: {ccip_message.message_id}")
        return SendResult(
            transaction_hash=tx_hash,
            message_id=ccip_message.message_id,
            block_number=block_number,
            destination_chain_selector=str(ccip_message.dest_chain_selector),
            sequence_number=str(ccip_message.sequence_number),
        )

    def assert_chain_id(self) -> None:
        """
        Verify the RPC endpoint serves the expected chain.

        Raises:
            NetworkError: If the chain ID differs or cannot be read
        """
        if self._expected_chain_id is None:
            self.logger.warning("No expected chain ID set, skipping chain ID validation")
            return
        try:
            actual = self.w3.eth.chain_id
        except Exception as e:
            raise NetworkError(f"Failed to validate chain ID: {e}") from e
        if actual != self._expected_chain_id:
            network = self._network_name or "configured network"
            raise NetworkError(
                f"Chain ID mismatch for {network}: expected {self._expected_chain_id}, got {actual}"
            )

    def tx_url(self, tx_hash: Union[str, bytes]) -> str:
        """Block explorer link for a source-chain transaction"""
        explorer = None
        if self._network_name:
            explorer = NetworkConfig.get_explorer_url(self._network_name)
        return f"{explorer or GENERIC_EXPLORER_URL}/tx/{to_hex(tx_hash)}"

    def message_url(self, message_id: Union[str, bytes]) -> str:
        """CCIP explorer link for a message"""
        return get_ccip_explorer_url(to_hex(message_id))
