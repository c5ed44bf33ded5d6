#!/usr/bin/env python3
"""
Send tokens and a short message from Ethereum Sepolia to Solana Devnet.
"""
import logging
import os

from ccip_sdk import CCIPClient, NetworkConfig, TokenValidator
from ccip_sdk.message_factory import create_data_and_tokens_message
from ccip_sdk.models import TokenAmount


def main():
    """
    Demonstrate a token transfer with data to a Solana wallet.

    This example shows how to:
    1. Initialize the client from a network configuration
    2. Check the sender holds enough of the token
    3. Build a Solana message and send it
    4. Get explorer URLs for the transaction and the message
    """
    PRIVATE_KEY = os.environ.get("PRIVATE_KEY")
    TOKEN_ADDRESS = os.environ.get("TOKEN_ADDRESS")
    SOLANA_RECEIVER = os.environ.get("SOLANA_RECEIVER")
    FEE_TOKEN = os.environ.get("FEE_TOKEN", "link")

    if not PRIVATE_KEY or not TOKEN_ADDRESS or not SOLANA_RECEIVER:
        print("ERROR: PRIVATE_KEY, TOKEN_ADDRESS and SOLANA_RECEIVER environment variables are required")
        return

    logging.basicConfig(level=logging.INFO)

    network = "ethereum-sepolia"
    client = CCIPClient.from_network(network, private_key=PRIVATE_KEY)
    client.assert_chain_id()
    print(f"Connected to network: {network} as {client.address}")

    amount = int(os.environ.get("AMOUNT", "10000000000000000"))
    token_amounts = [TokenAmount(token=TOKEN_ADDRESS, amount=amount)]
    TokenValidator(client.context).validate_token_amounts(client.address, token_amounts)

    request = create_data_and_tokens_message(
        receiver=SOLANA_RECEIVER,
        fee_token=NetworkConfig.get_fee_token(network, FEE_TOKEN),
        data="Hello from Sepolia",
        token_amounts=token_amounts,
    )

    try:
        result = client.send(request)
    except Exception as e:
        print(f"Error sending message: {str(e)}")
        return

    print(f"Transaction hash: {result.transaction_hash}")
    print(f"Transaction URL: {client.tx_url(result.transaction_hash)}")
    if result.message_id:
        print(f"Message ID: {result.message_id}")
        print(f"Track it at: {client.message_url(result.message_id)}")
    else:
        print("Message ID could not be read from the receipt; check the transaction in the explorer")


if __name__ == "__main__":
    main()
