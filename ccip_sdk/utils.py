"""
Utility functions for the CCIP SDK.
"""
from decimal import Decimal
from typing import Union

from .models import ZERO_ADDRESS, MessageStatus

CCIP_EXPLORER_URL = "https://ccip.chain.link"


def is_native_token(token: str) -> bool:
    """True if ``token`` is the native-currency sentinel"""
    return not token or token.lower() == ZERO_ADDRESS


def normalize_address(address: str) -> str:
    return address.lower()


def format_units(amount: int, decimals: int) -> str:
    """
    Format an integer amount of smallest units as a decimal string.

    Display only; amounts are never converted back from this form.
    """
    if decimals == 0:
        return str(amount)
    value = Decimal(amount).scaleb(-decimals)
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0")
        if text.endswith("."):
            text += "0"
    return text


def to_hex(value: Union[str, bytes, bytearray]) -> str:
    """0x-prefixed hex for bytes; strings are returned with a 0x prefix"""
    if isinstance(value, (bytes, bytearray)):
        return '0x' + bytes(value).hex()
    return value if value.startswith('0x') else '0x' + value


def get_message_status_string(state: int) -> str:
    try:
        return MessageStatus(state).name
    except ValueError:
        return "UNKNOWN"


def get_ccip_explorer_url(message_id: str) -> str:
    """CCIP explorer link for a message id"""
    return f"{CCIP_EXPLORER_URL}/msg/{to_hex(message_id)}"
