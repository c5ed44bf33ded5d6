"""
Client for the CCIP Router contract.
"""
import logging
from typing import Optional

from web3.types import TxReceipt as Web3TxReceipt

from ..config import CCIPContext
from ..models import EVM2AnyMessage
from ..abi import ROUTER_ABI
from .base import BaseContract


class RouterClient(BaseContract):
    """Chain support, fee quotes and ccipSend on the Router"""

    CONTRACT_NAME = "Router"
    ABI = ROUTER_ABI

    def __init__(self, context: CCIPContext, logger: Optional[logging.Logger] = None):
        super().__init__(context, context.config.router_address, logger)
        self.logger.debug(f"Initialized RouterClient at {self.address}")

    def is_chain_supported(self, chain_selector: int) -> bool:
        self.logger.debug(f"Checking if chain {chain_selector} is supported")
        return bool(self._call(
            "isChainSupported",
            lambda: self.contract.functions.isChainSupported(chain_selector)
        ))

    def get_fee(self, dest_chain_selector: int, message: EVM2AnyMessage) -> int:
        """
        Quote the fee for a message, in units of ``message.fee_token``.

        The quote is only valid for these exact message parameters.
        """
        self.logger.debug(f"Calculating CCIP fee for chain {dest_chain_selector}")
        fee = self._call(
            "getFee",
            lambda: self.contract.functions.getFee(dest_chain_selector, message.to_router_struct())
        )
        self.logger.debug(f"Fee calculation successful: {fee}")
        return int(fee)

    def get_on_ramp(self, dest_chain_selector: int) -> str:
        return self._call(
            "getOnRamp",
            lambda: self.contract.functions.getOnRamp(dest_chain_selector)
        )

    def ccip_send(
        self,
        dest_chain_selector: int,
        message: EVM2AnyMessage,
        value: int = 0,
        confirmations: Optional[int] = None,
    ) -> Web3TxReceipt:
        """
        Submit ccipSend and wait for confirmation.

        Args:
            dest_chain_selector: Destination chain selector
            message: Message to send
            value: Native fee to attach when paying in native currency
            confirmations: Override for the confirmation count

        Returns:
            The confirmed web3 receipt
        """
        self.logger.info("Sending CCIP message...")
        fn = self.contract.functions.ccipSend(dest_chain_selector, message.to_router_struct())
        return self._send_transaction("ccipSend", fn, value=value, confirmations=confirmations)
