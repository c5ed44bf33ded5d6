"""
Minimal ABIs for the CCIP contracts used by the SDK.
"""

_TOKEN_AMOUNT_COMPONENTS = [
    {"internalType": "address", "name": "token", "type": "address"},
    {"internalType": "uint256", "name": "amount", "type": "uint256"},
]

_EVM2ANY_MESSAGE = {
    "components": [
        {"internalType": "bytes", "name": "receiver", "type": "bytes"},
        {"internalType": "bytes", "name": "data", "type": "bytes"},
        {
            "components": _TOKEN_AMOUNT_COMPONENTS,
            "internalType": "struct Client.EVMTokenAmount[]",
            "name": "tokenAmounts",
            "type": "tuple[]",
        },
        {"internalType": "address", "name": "feeToken", "type": "address"},
        {"internalType": "bytes", "name": "extraArgs", "type": "bytes"},
    ],
    "internalType": "struct Client.EVM2AnyMessage",
    "name": "message",
    "type": "tuple",
}

_DEST_CHAIN_SELECTOR = {"internalType": "uint64", "name": "destinationChainSelector", "type": "uint64"}

ROUTER_ABI = [
    {
        "inputs": [{"internalType": "uint64", "name": "chainSelector", "type": "uint64"}],
        "name": "isChainSupported",
        "outputs": [{"internalType": "bool", "name": "supported", "type": "bool"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [_DEST_CHAIN_SELECTOR, _EVM2ANY_MESSAGE],
        "name": "getFee",
        "outputs": [{"internalType": "uint256", "name": "fee", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [_DEST_CHAIN_SELECTOR, _EVM2ANY_MESSAGE],
        "name": "ccipSend",
        "outputs": [{"internalType": "bytes32", "name": "", "type": "bytes32"}],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [_DEST_CHAIN_SELECTOR],
        "name": "getOnRamp",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
]

_RAMP_MESSAGE_HEADER = {
    "components": [
        {"internalType": "bytes32", "name": "messageId", "type": "bytes32"},
        {"internalType": "uint64", "name": "sourceChainSelector", "type": "uint64"},
        {"internalType": "uint64", "name": "destChainSelector", "type": "uint64"},
        {"internalType": "uint64", "name": "sequenceNumber", "type": "uint64"},
        {"internalType": "uint64", "name": "nonce", "type": "uint64"},
    ],
    "internalType": "struct Internal.RampMessageHeader",
    "name": "header",
    "type": "tuple",
}

_EVM2ANY_TOKEN_TRANSFER = {
    "components": [
        {"internalType": "address", "name": "sourcePoolAddress", "type": "address"},
        {"internalType": "bytes", "name": "destTokenAddress", "type": "bytes"},
        {"internalType": "bytes", "name": "extraData", "type": "bytes"},
        {"internalType": "uint256", "name": "amount", "type": "uint256"},
        {"internalType": "bytes", "name": "destExecData", "type": "bytes"},
    ],
    "internalType": "struct Internal.EVM2AnyTokenTransfer[]",
    "name": "tokenAmounts",
    "type": "tuple[]",
}

ONRAMP_ABI = [
    {
        "inputs": [],
        "name": "getStaticConfig",
        "outputs": [
            {
                "components": [
                    {"internalType": "uint64", "name": "chainSelector", "type": "uint64"},
                    {"internalType": "address", "name": "rmnRemote", "type": "address"},
                    {"internalType": "address", "name": "nonceManager", "type": "address"},
                    {"internalType": "address", "name": "tokenAdminRegistry", "type": "address"},
                ],
                "internalType": "struct OnRamp.StaticConfig",
                "name": "",
                "type": "tuple",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "uint64", "name": "destChainSelector", "type": "uint64"},
            {"indexed": True, "internalType": "uint64", "name": "sequenceNumber", "type": "uint64"},
            {
                "components": [
                    _RAMP_MESSAGE_HEADER,
                    {"internalType": "address", "name": "sender", "type": "address"},
                    {"internalType": "bytes", "name": "data", "type": "bytes"},
                    {"internalType": "bytes", "name": "receiver", "type": "bytes"},
                    {"internalType": "bytes", "name": "extraArgs", "type": "bytes"},
                    {"internalType": "address", "name": "feeToken", "type": "address"},
                    {"internalType": "uint256", "name": "feeTokenAmount", "type": "uint256"},
                    {"internalType": "uint256", "name": "feeValueJuels", "type": "uint256"},
                    _EVM2ANY_TOKEN_TRANSFER,
                ],
                "indexed": False,
                "internalType": "struct Internal.EVM2AnyRampMessage",
                "name": "message",
                "type": "tuple",
            },
        ],
        "name": "CCIPMessageSent",
        "type": "event",
    },
]

TOKEN_ADMIN_REGISTRY_ABI = [
    {
        "inputs": [{"internalType": "address", "name": "token", "type": "address"}],
        "name": "getPool",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
]

TOKEN_POOL_ABI = [
    {
        "inputs": [{"internalType": "uint64", "name": "remoteChainSelector", "type": "uint64"}],
        "name": "isSupportedChain",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "getToken",
        "outputs": [{"internalType": "contract IERC20", "name": "token", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
]

ERC20_ABI = [
    {
        "inputs": [],
        "name": "symbol",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "decimals",
        "outputs": [{"internalType": "uint8", "name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "address", "name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "address", "name": "owner", "type": "address"},
            {"internalType": "address", "name": "spender", "type": "address"},
        ],
        "name": "allowance",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "address", "name": "spender", "type": "address"},
            {"internalType": "uint256", "name": "value", "type": "uint256"},
        ],
        "name": "approve",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]
