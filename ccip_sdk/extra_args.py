"""
Encoding of CCIP extraArgs and destination addresses.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import base58
from eth_abi import encode as abi_encode

logger = logging.getLogger(__name__)

SVM_EXTRA_ARGS_V1_TAG = "0x1f3b3aba"
GENERIC_EXTRA_ARGS_V2_TAG = "0x181dcf10"
ZERO_HASH = "0x" + "00" * 32

DEFAULT_COMPUTE_UNITS = 200000


@dataclass
class SolanaExtraArgsOptions:
    """Execution parameters for a Solana destination"""
    compute_units: int = DEFAULT_COMPUTE_UNITS
    account_is_writable_bitmap: int = 0
    allow_out_of_order_execution: bool = True
    token_receiver: Optional[str] = None
    accounts: List[str] = field(default_factory=list)


def encode_solana_address(address: Optional[str]) -> str:
    """
    Encode a base58 Solana address as 0x-prefixed bytes32 hex.

    Empty values and values that are already hex are returned unchanged.
    """
    if not address or address == ZERO_HASH or address.startswith("0x"):
        return address
    return "0x" + base58.b58decode(address).hex()


def hex_to_solana_address(hex_address: str) -> str:
    """Inverse of encode_solana_address"""
    clean = hex_address[2:] if hex_address.startswith("0x") else hex_address
    return base58.b58encode(bytes.fromhex(clean)).decode("ascii")


def _bytes32(value: str) -> bytes:
    raw = bytes.fromhex(value[2:] if value.startswith("0x") else value)
    if len(raw) != 32:
        raise ValueError(f"Expected a 32-byte value, got {len(raw)} bytes")
    return raw


def encode_svm_extra_args(options: Optional[SolanaExtraArgsOptions] = None) -> str:
    """
    Encode SVMExtraArgsV1: the tag followed by
    ``tuple(uint32,uint64,bool,bytes32,bytes32[])``.
    """
    options = options or SolanaExtraArgsOptions()
    token_receiver = encode_solana_address(options.token_receiver) or ZERO_HASH
    accounts = [_bytes32(encode_solana_address(a)) for a in options.accounts]

    logger.debug(
        f"Encoding Solana extra args: computeUnits={options.compute_units} "
        f"bitmap={options.account_is_writable_bitmap} "
        f"allowOutOfOrderExecution={options.allow_out_of_order_execution} "
        f"tokenReceiver={token_receiver} accounts={len(accounts)}"
    )

    encoded = abi_encode(
        ["(uint32,uint64,bool,bytes32,bytes32[])"],
        [(
            options.compute_units,
            options.account_is_writable_bitmap,
            options.allow_out_of_order_execution,
            _bytes32(token_receiver),
            accounts,
        )]
    )
    return SVM_EXTRA_ARGS_V1_TAG + encoded.hex()


def encode_generic_extra_args_v2(gas_limit: int = 200000, allow_out_of_order_execution: bool = True) -> str:
    """GenericExtraArgsV2 for EVM destinations"""
    encoded = abi_encode(["(uint256,bool)"], [(gas_limit, allow_out_of_order_execution)])
    return GENERIC_EXTRA_ARGS_V2_TAG + encoded.hex()
