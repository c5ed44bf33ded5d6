"""
Clients for the OnRamp and TokenAdminRegistry contracts.
"""
import logging
from typing import Any, Dict, Optional

from web3 import Web3

from ..config import CCIPContext
from ..models import ZERO_ADDRESS
from ..abi import ONRAMP_ABI, TOKEN_ADMIN_REGISTRY_ABI
from .base import BaseContract

_STATIC_CONFIG_FIELDS = ("chainSelector", "rmnRemote", "nonceManager", "tokenAdminRegistry")


class OnRampClient(BaseContract):
    """Read access to an OnRamp's static configuration"""

    CONTRACT_NAME = "OnRamp"
    ABI = ONRAMP_ABI

    def get_static_config(self) -> Dict[str, Any]:
        result = self._call("getStaticConfig", lambda: self.contract.functions.getStaticConfig())
        if isinstance(result, dict):
            return dict(result)
        return dict(zip(_STATIC_CONFIG_FIELDS, result))

    def get_token_admin_registry(self) -> str:
        return self.get_static_config()["tokenAdminRegistry"]


class TokenAdminRegistryClient(BaseContract):
    """Maps tokens to their administrative pool"""

    CONTRACT_NAME = "TokenAdminRegistry"
    ABI = TOKEN_ADMIN_REGISTRY_ABI

    def __init__(
        self,
        context: CCIPContext,
        address: str,
        logger: Optional[logging.Logger] = None
    ):
        super().__init__(context, address, logger)
        self.logger.debug(f"Initialized TokenAdminRegistryClient at {self.address}")

    def get_pool(self, token: str) -> str:
        """Pool address for a token; the zero address means unregistered"""
        self.logger.debug(f"Getting pool for token {token}")
        return self._call("getPool", lambda: self.contract.functions.getPool(Web3.to_checksum_address(token)))

    def is_token_supported(self, token: str) -> bool:
        return self.get_pool(token).lower() != ZERO_ADDRESS
