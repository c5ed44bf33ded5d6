"""
Client for ERC20 token contracts.
"""
import logging
from typing import Optional

from web3 import Web3

from ..config import CCIPContext
from ..models import TxReceipt
from ..receipts import convert_receipt
from ..utils import format_units
from ..abi import ERC20_ABI
from .base import BaseContract


class ERC20Client(BaseContract):
    """Balance, allowance and approval for one ERC20 token"""

    CONTRACT_NAME = "ERC20"
    ABI = ERC20_ABI

    def __init__(
        self,
        context: CCIPContext,
        address: str,
        logger: Optional[logging.Logger] = None
    ):
        super().__init__(context, address, logger)
        self._decimals: Optional[int] = None

    def get_symbol(self) -> str:
        return self._call("symbol", lambda: self.contract.functions.symbol())

    def get_decimals(self) -> int:
        # Decimals are immutable for a deployed token
        if self._decimals is None:
            self._decimals = int(self._call("decimals", lambda: self.contract.functions.decimals()))
        return self._decimals

    def get_balance(self, address: str) -> int:
        return int(self._call(
            "balanceOf",
            lambda: self.contract.functions.balanceOf(Web3.to_checksum_address(address))
        ))

    def get_allowance(self, owner: str, spender: str) -> int:
        return int(self._call(
            "allowance",
            lambda: self.contract.functions.allowance(
                Web3.to_checksum_address(owner),
                Web3.to_checksum_address(spender)
            )
        ))

    def approve(self, spender: str, amount: int, confirmations: Optional[int] = None) -> TxReceipt:
        """
        Approve ``spender`` for ``amount`` and wait for confirmation.

        Raises:
            SigningRequiredError: If the client has no signer
            TransactionError: If the approval cannot be submitted or reverts
        """
        self.logger.info(f"Approving {amount} tokens of {self.address} for {spender}")
        fn = self.contract.functions.approve(Web3.to_checksum_address(spender), amount)
        receipt = self._send_transaction("approve", fn, confirmations=confirmations)
        return convert_receipt(receipt)

    def format_amount(self, amount: int) -> str:
        """Amount with decimals applied, for logging"""
        return format_units(amount, self.get_decimals())
