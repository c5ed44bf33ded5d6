"""
Builders for Solana-destination message requests.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from .config import CHAIN_SELECTORS
from .extra_args import SolanaExtraArgsOptions, encode_solana_address, encode_svm_extra_args
from .models import MessageRequest, TokenAmount

logger = logging.getLogger(__name__)

TokenAmountLike = Union[TokenAmount, Dict[str, Any]]


def _token_amounts(token_amounts: Optional[Iterable[TokenAmountLike]]) -> List[TokenAmount]:
    # Zero amounts are dropped
    result = []
    for ta in token_amounts or []:
        if isinstance(ta, TokenAmount):
            token, amount = ta.token, ta.amount
        else:
            token, amount = ta["token"], int(ta["amount"])
        if amount:
            result.append(TokenAmount(token=token, amount=amount))
    return result


def _encode_data(data: Optional[str]) -> str:
    """Hex passes through; plain text is UTF-8 encoded"""
    if not data:
        return "0x"
    if data.startswith("0x"):
        return data
    return "0x" + data.encode("utf-8").hex()


def create_solana_message(
    receiver: str,
    fee_token: str,
    destination_chain_selector: int = CHAIN_SELECTORS["solana-devnet"],
    token_amounts: Optional[Iterable[TokenAmountLike]] = None,
    data: Optional[str] = None,
    solana_params: Optional[SolanaExtraArgsOptions] = None,
) -> MessageRequest:
    """
    Build a request for a Solana destination.

    The receiver is base58-decoded to bytes32 and extraArgs are encoded as
    SVMExtraArgsV1. Compute units default to 0 here, which is what a pure
    token transfer to a wallet needs.

    Raises:
        ValueError: If the receiver is missing
    """
    if not receiver:
        raise ValueError("Receiver address is required")

    params = solana_params or SolanaExtraArgsOptions(compute_units=0)
    if params.accounts:
        logger.info(f"Solana accounts to include: [{', '.join(params.accounts)}]")
    else:
        logger.debug("No additional Solana accounts specified")

    return MessageRequest(
        destination_chain_selector=destination_chain_selector,
        receiver=encode_solana_address(receiver),
        token_amounts=_token_amounts(token_amounts),
        fee_token=fee_token,
        data=_encode_data(data),
        extra_args=encode_svm_extra_args(params),
    )


def create_token_transfer(receiver: str, fee_token: str, token_amounts, **kwargs) -> MessageRequest:
    """Token-only transfer; at least one token amount is required"""
    if not token_amounts:
        raise ValueError("Token amounts are required for token transfer")
    return create_solana_message(receiver, fee_token, token_amounts=token_amounts, **kwargs)


def create_arbitrary_message(receiver: str, fee_token: str, data: str, **kwargs) -> MessageRequest:
    """Data-only message; any token amounts are discarded"""
    kwargs.pop("token_amounts", None)
    return create_solana_message(receiver, fee_token, token_amounts=[], data=data, **kwargs)


def create_data_and_tokens_message(
    receiver: str,
    fee_token: str,
    data: str,
    token_amounts,
    **kwargs
) -> MessageRequest:
    """Message carrying both data and tokens"""
    if not data:
        raise ValueError("Data is required for data and tokens message")
    if not token_amounts:
        raise ValueError("Token amounts are required for data and tokens message")
    return create_solana_message(receiver, fee_token, token_amounts=token_amounts, data=data, **kwargs)
