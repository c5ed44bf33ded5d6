"""
Exceptions for the CCIP SDK.

Validation errors fail fast and are never retried. Transaction errors are
raised when a submitted transaction reverts or cannot be submitted.
"""
from typing import Optional


class CCIPError(Exception):
    """Base exception for all CCIP SDK errors."""
    pass


class UnsupportedDestinationError(CCIPError):
    """Raised when the router does not support the destination chain."""

    def __init__(self, chain_selector: int):
        self.chain_selector = chain_selector
        super().__init__(f"Destination chain {chain_selector} is not supported")


class TokenNotSupportedError(CCIPError):
    """Raised when a token has no pool registered in the TokenAdminRegistry."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(
            f"Token {token} is not supported (no pool found in TokenAdminRegistry)"
        )


class ChainNotSupportedForTokenError(CCIPError):
    """Raised when a token's pool does not support the destination chain."""

    def __init__(self, chain_selector: int, token: str, pool: str):
        self.chain_selector = chain_selector
        self.token = token
        self.pool = pool
        super().__init__(
            f"Destination chain {chain_selector} is not supported for token "
            f"{token} (pool address: {pool})"
        )


class SigningRequiredError(CCIPError):
    """Raised when a write operation is attempted without a signer."""

    def __init__(self, operation: str = "This operation"):
        self.operation = operation
        super().__init__(
            f"{operation} requires signing capabilities. Initialize the client with a signer."
        )


class CriticalConfigurationError(CCIPError):
    """
    Raised when on-chain CCIP infrastructure is misconfigured.

    A zero OnRamp or a zero TokenAdminRegistry address cannot be fixed by
    retrying the read.
    """

    def __init__(self, message: str, chain_selector: Optional[int] = None):
        self.chain_selector = chain_selector
        super().__init__(message)


class TransactionError(CCIPError):
    """Raised when a transaction cannot be signed, submitted, or reverts."""

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        self.tx_hash = tx_hash
        super().__init__(message)


class ApprovalError(TransactionError):
    """Raised when a token approval transaction fails."""

    def __init__(self, token: str, message: str, tx_hash: Optional[str] = None):
        self.token = token
        super().__init__(f"Approval failed for token {token}: {message}", tx_hash=tx_hash)


class ContractCallError(CCIPError):
    """Raised when a read call against a contract fails."""

    def __init__(self, contract: str, address: str, operation: str, cause: Exception):
        self.contract = contract
        self.address = address
        self.operation = operation
        self.cause = cause
        super().__init__(f"{contract} {operation} failed at {address}: {cause}")


class InsufficientBalanceError(CCIPError):
    """Raised when a holder's token balance is below the transfer amount."""

    def __init__(self, token: str, symbol: str, balance: str, required: str):
        self.token = token
        self.symbol = symbol
        super().__init__(
            f"Insufficient {symbol} balance. Have {balance}, need {required}"
        )


class NetworkError(CCIPError):
    """Raised when the connected network does not match the configuration."""
    pass
