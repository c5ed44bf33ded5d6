"""
Tests for the request and result models.
"""
import pytest
from pydantic import ValidationError

from ccip_sdk.models import (
    ZERO_ADDRESS, EVM2AnyMessage, MessageRequest, SendResult, TokenAmount
)
from tests.conftest import LINK_TOKEN, TEST_RECEIVER, TOKEN_A, SOLANA_DEVNET


def test_token_amount_rejects_negative():
    with pytest.raises(ValidationError):
        TokenAmount(token=TOKEN_A, amount=-1)


def test_message_request_defaults_to_native_fee():
    request = MessageRequest(destination_chain_selector=SOLANA_DEVNET, receiver=TEST_RECEIVER)

    assert request.fee_token == ZERO_ADDRESS
    assert request.uses_native_fee


def test_message_request_accepts_camel_case_and_tuples():
    request = MessageRequest(
        destinationChainSelector=SOLANA_DEVNET,
        receiver=TEST_RECEIVER,
        tokenAmounts=[(TOKEN_A, 5), {"token": TOKEN_A, "amount": 6}],
        feeToken=LINK_TOKEN,
    )

    assert request.token_amounts == [TokenAmount(token=TOKEN_A, amount=5), TokenAmount(token=TOKEN_A, amount=6)]
    assert not request.uses_native_fee


def test_to_message_normalizes_optional_fields():
    request = MessageRequest(destination_chain_selector=SOLANA_DEVNET, receiver=TEST_RECEIVER)

    receiver, data, token_amounts, fee_token, extra_args = request.to_message().to_router_struct()

    assert receiver == bytes.fromhex("ab" * 32)
    assert data == b""
    assert token_amounts == []
    assert fee_token == ZERO_ADDRESS
    assert extra_args == b""


def test_router_struct_with_tokens():
    message = EVM2AnyMessage(
        receiver=b"\x01" * 32,
        data="0x6869",
        token_amounts=[TokenAmount(token=TOKEN_A, amount=9)],
        fee_token=LINK_TOKEN,
        extra_args="0x1f3b3aba",
    )

    assert message.to_router_struct() == (
        b"\x01" * 32, b"hi", [(TOKEN_A, 9)], LINK_TOKEN, bytes.fromhex("1f3b3aba")
    )


def test_fee_request_from_message_request():
    request = MessageRequest(destination_chain_selector=SOLANA_DEVNET, receiver=TEST_RECEIVER, fee_token=LINK_TOKEN)
    fee_request = request.to_fee_request()

    assert fee_request.destination_chain_selector == SOLANA_DEVNET
    assert fee_request.message.fee_token == LINK_TOKEN


def test_send_result_aliases():
    result = SendResult(transactionHash="0x01", messageId="0x02", blockNumber=5)

    assert result.model_dump(by_alias=True)["messageId"] == "0x02"
    assert result.sequence_number is None


@pytest.mark.parametrize("field", ["receiver", "data", "extra_args"])
def test_message_request_rejects_non_hex_strings(field):
    fields = dict(destination_chain_selector=SOLANA_DEVNET, receiver=TEST_RECEIVER)
    fields[field] = "hello"

    with pytest.raises(ValueError, match="Expected hex-encoded bytes"):
        MessageRequest(**fields)


def test_router_message_rejects_non_hex_data():
    with pytest.raises(ValueError, match="Expected hex-encoded bytes"):
        EVM2AnyMessage(receiver=TEST_RECEIVER, data="hello", fee_token=LINK_TOKEN)
