"""
CCIP SDK - send cross-chain messages and token transfers from EVM chains.
"""
from .version import __version__
from .client import CCIPClient
from .approvals import ApprovalCoordinator, ApprovalEntry, build_approval_plan
from .config import CCIPConfig, CCIPContext, NetworkConfig, CHAIN_SELECTORS
from .models import (
    ZERO_ADDRESS, TokenAmount, EVM2AnyMessage, FeeRequest, FeeQuote,
    MessageRequest, SendResult, CCIPMessage, MessageStatus, TxReceipt
)
from .provider import LocalSigner, ReadOnlyProvider, SigningProvider, Signer
from .receipts import extract_ccip_message
from .extra_args import (
    SolanaExtraArgsOptions, encode_solana_address, encode_svm_extra_args,
    encode_generic_extra_args_v2, hex_to_solana_address
)
from .message_factory import (
    create_solana_message, create_token_transfer, create_arbitrary_message,
    create_data_and_tokens_message
)
from .validation import TokenValidator, TokenDetails
from .exceptions import (
    CCIPError, UnsupportedDestinationError, TokenNotSupportedError,
    ChainNotSupportedForTokenError, SigningRequiredError, CriticalConfigurationError,
    TransactionError, ApprovalError, ContractCallError, InsufficientBalanceError,
    NetworkError
)

__all__ = [
    "CCIPClient",
    "ApprovalCoordinator",
    "ApprovalEntry",
    "build_approval_plan",
    "CCIPConfig",
    "CCIPContext",
    "NetworkConfig",
    "CHAIN_SELECTORS",
    "ZERO_ADDRESS",
    "TokenAmount",
    "EVM2AnyMessage",
    "FeeRequest",
    "FeeQuote",
    "MessageRequest",
    "SendResult",
    "CCIPMessage",
    "MessageStatus",
    "TxReceipt",
    "LocalSigner",
    "ReadOnlyProvider",
    "SigningProvider",
    "Signer",
    "extract_ccip_message",
    "SolanaExtraArgsOptions",
    "encode_solana_address",
    "encode_svm_extra_args",
    "encode_generic_extra_args_v2",
    "hex_to_solana_address",
    "create_solana_message",
    "create_token_transfer",
    "create_arbitrary_message",
    "create_data_and_tokens_message",
    "TokenValidator",
    "TokenDetails",
    "CCIPError",
    "UnsupportedDestinationError",
    "TokenNotSupportedError",
    "ChainNotSupportedForTokenError",
    "SigningRequiredError",
    "CriticalConfigurationError",
    "TransactionError",
    "ApprovalError",
    "ContractCallError",
    "InsufficientBalanceError",
    "NetworkError",
    "__version__",
]
