"""
Receipt conversion and CCIPMessageSent event extraction.
"""
import logging
from typing import Any, Mapping, Optional

from web3 import Web3
from web3.logs import DISCARD
from web3.types import TxReceipt as Web3TxReceipt

from .abi import ONRAMP_ABI
from .models import CCIPMessage, TxReceipt
from .utils import to_hex

logger = logging.getLogger(__name__)

# Contract object without an address: only used to decode events
_ONRAMP_EVENTS = Web3().eth.contract(abi=ONRAMP_ABI).events


def _plain(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return to_hex(value)
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def convert_receipt(web3_receipt: Web3TxReceipt) -> TxReceipt:
    """
    Convert Web3 receipt to our TxReceipt model

    Args:
        web3_receipt: The Web3 transaction receipt

    Returns:
        Our TxReceipt model
    """
    receipt_dict = _plain(dict(web3_receipt))
    receipt_dict.setdefault("logs", [])
    return TxReceipt.model_validate(receipt_dict)


def extract_ccip_message(receipt: Optional[Web3TxReceipt]) -> Optional[CCIPMessage]:
    """
    Find the CCIPMessageSent event in a receipt.

    Logs from other contracts are skipped. Returns None when no log decodes
    to a message with a message id.
    """
    if not receipt or not receipt.get("logs"):
        return None

    events = _ONRAMP_EVENTS.CCIPMessageSent().process_receipt(receipt, errors=DISCARD)
    for event in events:
        message = _plain(event["args"]["message"])
        header = message.get("header") if isinstance(message, dict) else None
        if not header or not header.get("messageId"):
            continue
        return CCIPMessage(
            message_id=header["messageId"],
            source_chain_selector=header["sourceChainSelector"],
            dest_chain_selector=header["destChainSelector"],
            sequence_number=header["sequenceNumber"],
            nonce=header.get("nonce", 0),
            sender=message.get("sender"),
            receiver=message.get("receiver"),
            data=message.get("data"),
            fee_token=message.get("feeToken"),
            fee_token_amount=message.get("feeTokenAmount"),
            token_amounts=message.get("tokenAmounts") or [],
        )
    logger.debug("No CCIPMessageSent event found in receipt")
    return None
