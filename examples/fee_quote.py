#!/usr/bin/env python3
"""
Quote CCIP fees without a signer.
"""
from ccip_sdk import CCIPClient, CHAIN_SELECTORS, NetworkConfig
from ccip_sdk.message_factory import create_arbitrary_message

SOLANA_RECEIVER = "11111111111111111111111111111111"


def main():
    print("Available networks:")
    for network_name in NetworkConfig.load_networks().keys():
        print(f"  - {network_name}")
    print()

    network = "ethereum-sepolia"
    client = CCIPClient.read_only(network)
    destination = CHAIN_SELECTORS["solana-devnet"]

    if not client.is_chain_supported(destination):
        print(f"Router on {network} does not support chain {destination}")
        return

    for choice in ("native", "link"):
        request = create_arbitrary_message(
            SOLANA_RECEIVER,
            NetworkConfig.get_fee_token(network, choice),
            "fee quote",
            destination_chain_selector=destination,
        )
        quote = client.get_fee(request.to_fee_request())
        print(f"Fee in {choice}: {quote.amount} (token {quote.token})")


if __name__ == "__main__":
    main()
