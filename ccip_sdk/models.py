"""
Data models for the CCIP SDK.
"""
from enum import IntEnum
from typing import Dict, Any, Optional, List, Tuple, Union

from hexbytes import HexBytes
from pydantic import BaseModel, Field, field_validator

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def _to_bytes(value: Union[str, bytes, None]) -> bytes:
    if value is None:
        return b""
    return bytes(HexBytes(value))


def _require_hex(value: Union[str, bytes, None]) -> Union[str, bytes, None]:
    """Raise ValueError for strings that do not decode as hex"""
    if isinstance(value, str):
        try:
            HexBytes(value)
        except ValueError as e:
            raise ValueError(f"Expected hex-encoded bytes, got {value!r}") from e
    return value


class TokenAmount(BaseModel):
    """Token and amount in the token's smallest unit"""
    token: str
    amount: int = Field(..., ge=0)

    def as_tuple(self) -> Tuple[str, int]:
        return (self.token, self.amount)


class EVM2AnyMessage(BaseModel):
    """Message as understood by the Router contract"""
    receiver: Union[str, bytes]
    data: Optional[Union[str, bytes]] = None
    token_amounts: Optional[List[TokenAmount]] = Field(None, alias="tokenAmounts")
    fee_token: str = Field(..., alias="feeToken")
    extra_args: Union[str, bytes] = Field(b"", alias="extraArgs")

    class Config:
        populate_by_name = True

    @field_validator("receiver", "data", "extra_args")
    @classmethod
    def _check_hex(cls, value):
        return _require_hex(value)

    def to_router_struct(self) -> Tuple[bytes, bytes, List[Tuple[str, int]], str, bytes]:
        """
        Build the tuple passed to Router.getFee / Router.ccipSend.

        Missing data becomes empty bytes and missing token amounts an empty list.
        """
        return (
            _to_bytes(self.receiver),
            _to_bytes(self.data),
            [ta.as_tuple() for ta in (self.token_amounts or [])],
            self.fee_token,
            _to_bytes(self.extra_args),
        )


class FeeRequest(BaseModel):
    """Fee calculation request"""
    destination_chain_selector: int = Field(..., alias="destinationChainSelector", ge=0)
    message: EVM2AnyMessage

    class Config:
        populate_by_name = True


class FeeQuote(BaseModel):
    """Fee quoted by the router, in units of `token`"""
    token: str
    amount: int = Field(..., ge=0)


class MessageRequest(BaseModel):
    """Cross-chain message request: data, tokens, or both"""
    destination_chain_selector: int = Field(..., alias="destinationChainSelector", ge=0)
    receiver: Union[str, bytes]
    data: Optional[Union[str, bytes]] = None
    token_amounts: Optional[List[TokenAmount]] = Field(None, alias="tokenAmounts")
    fee_token: str = Field(ZERO_ADDRESS, alias="feeToken")
    extra_args: Union[str, bytes] = Field(b"", alias="extraArgs")

    class Config:
        populate_by_name = True

    @field_validator("receiver", "data", "extra_args")
    @classmethod
    def _check_hex(cls, value):
        return _require_hex(value)

    @field_validator("token_amounts", mode="before")
    @classmethod
    def _coerce_token_amounts(cls, value):
        if value is None:
            return value
        return [
            ta if isinstance(ta, (TokenAmount, dict)) else {"token": ta[0], "amount": ta[1]}
            for ta in value
        ]

    @property
    def uses_native_fee(self) -> bool:
        return self.fee_token.lower() == ZERO_ADDRESS

    def to_message(self) -> EVM2AnyMessage:
        """Normalized router message: data defaults to empty bytes, tokens to []"""
        return EVM2AnyMessage(
            receiver=self.receiver,
            data=self.data if self.data is not None else "0x",
            token_amounts=list(self.token_amounts or []),
            fee_token=self.fee_token,
            extra_args=self.extra_args,
        )

    def to_fee_request(self) -> FeeRequest:
        return FeeRequest(
            destination_chain_selector=self.destination_chain_selector,
            message=self.to_message(),
        )


class SendResult(BaseModel):
    """Result of a cross-chain send"""
    transaction_hash: str = Field(..., alias="transactionHash")
    message_id: Optional[str] = Field(None, alias="messageId")
    block_number: Optional[int] = Field(None, alias="blockNumber")
    destination_chain_selector: Optional[str] = Field(None, alias="destinationChainSelector")
    sequence_number: Optional[str] = Field(None, alias="sequenceNumber")

    class Config:
        populate_by_name = True


class CCIPMessage(BaseModel):
    """CCIPMessageSent payload decoded from an OnRamp log"""
    message_id: str = Field(..., alias="messageId")
    source_chain_selector: int = Field(..., alias="sourceChainSelector")
    dest_chain_selector: int = Field(..., alias="destChainSelector")
    sequence_number: int = Field(..., alias="sequenceNumber")
    nonce: int = 0
    sender: Optional[str] = None
    receiver: Optional[str] = None
    data: Optional[str] = None
    fee_token: Optional[str] = Field(None, alias="feeToken")
    fee_token_amount: Optional[int] = Field(None, alias="feeTokenAmount")
    token_amounts: List[Dict[str, Any]] = Field(default_factory=list, alias="tokenAmounts")

    class Config:
        populate_by_name = True


class MessageStatus(IntEnum):
    """Execution state of a CCIP message on the destination chain"""
    UNTRIGGERED = 0
    IN_PROGRESS = 1
    SUCCESS = 2
    FAILURE = 3


class TxReceipt(BaseModel):
    """Transaction receipt from the blockchain"""
    tx_hash: str = Field(..., alias="transactionHash")
    block_number: int = Field(..., alias="blockNumber")
    block_hash: str = Field(..., alias="blockHash")
    status: int
    gas_used: int = Field(..., alias="gasUsed")
    from_address: str = Field(..., alias="from")
    to_address: Optional[str] = Field(None, alias="to")
    logs: List[Dict[str, Any]]

    class Config:
        populate_by_name = True
