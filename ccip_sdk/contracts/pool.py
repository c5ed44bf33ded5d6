"""
Client for token pool contracts.
"""
from ..abi import TOKEN_POOL_ABI
from .base import BaseContract


class TokenPoolClient(BaseContract):
    """Lock/burn pool for a single token"""

    CONTRACT_NAME = "TokenPool"
    ABI = TOKEN_POOL_ABI

    def is_supported_chain(self, chain_selector: int) -> bool:
        self.logger.debug(f"Checking if chain {chain_selector} is supported by token pool {self.address}")
        return bool(self._call(
            "isSupportedChain",
            lambda: self.contract.functions.isSupportedChain(chain_selector)
        ))

    def get_token(self) -> str:
        return self._call("getToken", lambda: self.contract.functions.getToken())
