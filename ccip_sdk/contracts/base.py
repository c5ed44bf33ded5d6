"""
Base class for the contract-specific clients.
"""
import logging
import time
from typing import Any, Callable, Dict, Optional, TypeVar

from web3 import Web3
from web3.exceptions import Web3Exception
from web3.types import TxReceipt as Web3TxReceipt

from ..config import CCIPContext
from ..exceptions import (
    ContractCallError, SigningRequiredError, TransactionError
)
from ..provider import Signer, SigningProvider

T = TypeVar('T')

DEFAULT_GAS_LIMIT = 300000
RECEIPT_TIMEOUT = 120  # seconds


class BaseContract:
    """
    Thin wrapper around one deployed contract.

    Read calls go through ``_call`` and write calls through
    ``_send_transaction``, which signs with the provider's signer and waits
    for the configured number of confirmations.
    """

    CONTRACT_NAME = "Contract"
    ABI: list = []

    def __init__(
        self,
        context: CCIPContext,
        address: str,
        logger: Optional[logging.Logger] = None
    ):
        self.context = context
        self.address = Web3.to_checksum_address(address)
        self.logger = logger or context.logger or logging.getLogger(__name__)
        self.contract = self.w3.eth.contract(address=self.address, abi=self.ABI)

    @property
    def w3(self) -> Web3:
        return self.context.provider.w3

    @property
    def has_signer(self) -> bool:
        return isinstance(self.context.provider, SigningProvider)

    def _require_signer(self, operation: str) -> Signer:
        if not self.has_signer:
            raise SigningRequiredError(f"{self.CONTRACT_NAME}.{operation}")
        return self.context.provider.signer

    def _call(self, operation: str, build: Callable[[], Any]) -> Any:
        """Execute a read call, wrapping failures with the contract identity"""
        try:
            return build().call()
        except Exception as e:
            self.logger.error(f"Error calling {self.CONTRACT_NAME}.{operation} at {self.address}: {e}")
            raise ContractCallError(self.CONTRACT_NAME, self.address, operation, e) from e

    def _send_transaction(
        self,
        operation: str,
        fn: Any,
        value: int = 0,
        gas: Optional[int] = None,
        confirmations: Optional[int] = None,
    ) -> Web3TxReceipt:
        """
        Sign, submit and confirm a contract write.

        Args:
            operation: Name of the contract method, used in logs and errors
            fn: Bound contract function (``contract.functions.x(...)``)
            value: Native currency to attach, in wei
            gas: Gas limit (estimated with 10% headroom if None)
            confirmations: Override for the confirmation count

        Returns:
            The confirmed web3 receipt

        Raises:
            SigningRequiredError: If the client has no signer
            TransactionError: If signing or submission fails, or the receipt reverted
            Web3Exception: Errors raised by web3 while submitting are re-raised as-is
        """
        signer = self._require_signer(operation)
        from_address = signer.address

        try:
            nonce = self.w3.eth.get_transaction_count(from_address)

            if gas is None:
                try:
                    gas = fn.estimate_gas({'from': from_address, 'value': value})
                    # Add 10% buffer to gas estimate
                    gas = int(gas * 1.1)
                    self.logger.debug(f"Estimated gas for {operation}: {gas}")
                except Exception as e:
                    gas = DEFAULT_GAS_LIMIT
                    self.logger.warning(f"Gas estimation failed for {operation}, using default: {gas}. Error: {e}")

            tx_params: Dict[str, Any] = {
                'from': from_address,
                'nonce': nonce,
                'gas': gas,
                'value': value,
                'gasPrice': self.w3.eth.gas_price,
            }
            tx = fn.build_transaction(tx_params)

            try:
                signed_tx = signer.sign_transaction(tx)
            except Exception as e:
                self.logger.error(f"Transaction signing failed: {e}")
                raise TransactionError(f"Failed to sign {operation} transaction: {str(e)}")

            try:
                tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
            except Exception as e:
                self.logger.error(f"Failed to send {operation} transaction: {e}")
                if isinstance(e, Web3Exception):
                    raise
                raise TransactionError(f"Failed to send {operation} transaction: {str(e)}")

            tx_hash_hex = _hex(tx_hash)
            self.logger.info(f"{self.CONTRACT_NAME}.{operation} transaction sent: {tx_hash_hex}")

            receipt = self.wait_for_transaction(tx_hash, confirmations)
        except (TransactionError, Web3Exception):
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error during {operation}: {e}")
            raise TransactionError(f"{operation} transaction failed: {str(e)}")

        if receipt.get("status", 1) == 0:
            self.logger.error(f"{self.CONTRACT_NAME}.{operation} transaction reverted: {tx_hash_hex}")
            raise TransactionError(f"{operation} transaction reverted: {tx_hash_hex}", tx_hash=tx_hash_hex)
        return receipt

    def wait_for_transaction(
        self,
        tx_hash: Any,
        custom_confirmations: Optional[int] = None,
        poll_interval: float = 1.0,
    ) -> Web3TxReceipt:
        """
        Wait until the transaction is mined and buried under enough blocks.

        The confirmation count is resolved on every call:
        custom override > context > config > default (3).
        """
        confirmations = self.context.resolve_confirmations(custom_confirmations)
        self.logger.debug(f"Transaction {_hex(tx_hash)} sent, waiting for {confirmations} confirmations...")

        receipt = self.w3.eth.wait_for_transaction_receipt(
            tx_hash,
            timeout=RECEIPT_TIMEOUT,
            poll_latency=poll_interval
        )
        if confirmations <= 1:
            return receipt

        target_block = receipt["blockNumber"] + confirmations - 1
        deadline = time.monotonic() + RECEIPT_TIMEOUT
        while self.w3.eth.block_number < target_block:
            if time.monotonic() > deadline:
                raise TransactionError(
                    f"Timed out waiting for {confirmations} confirmations of {_hex(tx_hash)}",
                    tx_hash=_hex(tx_hash)
                )
            time.sleep(poll_interval)
        return receipt


def _hex(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return '0x' + bytes(value).hex()
    return str(value)
