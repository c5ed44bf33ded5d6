"""
Network and client configuration for the CCIP SDK.
"""
import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from typing import Dict, Any, Optional

from pydantic import BaseModel, Field

from .models import ZERO_ADDRESS
from .provider import Provider

DEFAULT_CONFIRMATIONS = 3

# Well-known destination chain selectors
CHAIN_SELECTORS: Dict[str, int] = {
    "ethereum-sepolia": 16015286601757825753,
    "avalanche-fuji": 14767482510784806043,
    "arbitrum-sepolia": 3478487238524512106,
    "solana-devnet": 16423721717087811551,
}


class CCIPConfig(BaseModel):
    """Client configuration, fixed for the lifetime of a client"""
    router_address: str = Field(..., alias="routerAddress")
    confirmations: Optional[int] = Field(None, ge=0)
    log_level: int = Field(logging.INFO, alias="logLevel")

    class Config:
        populate_by_name = True
        frozen = True


@dataclass(frozen=True)
class CCIPContext:
    """Provider, configuration and logger shared by the contract clients"""
    provider: Provider
    config: CCIPConfig
    logger: Optional[logging.Logger] = None
    confirmations: Optional[int] = None

    def resolve_confirmations(self, custom: Optional[int] = None) -> int:
        """custom override > context > config > default"""
        for value in (custom, self.confirmations, self.config.confirmations):
            if value is not None:
                return value
        return DEFAULT_CONFIRMATIONS


class NetworkConfig:
    """Lookup of per-network settings from the packaged networks.json"""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        if cls._networks_cache is None:
            text = resources.files("ccip_sdk").joinpath("networks.json").read_text(encoding="utf-8")
            cls._networks_cache = json.loads(text)
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: str) -> Dict[str, Any]:
        networks = cls.load_networks()
        if network not in networks:
            available = ", ".join(sorted(networks.keys()))
            raise ValueError(f"Unknown network '{network}'. Available networks: {available}")
        return networks[network]

    @classmethod
    def get_rpc_url(cls, network: str, override: Optional[str] = None) -> str:
        """
        Resolve the RPC URL: explicit override, then ``<NETWORK>_RPC_URL``
        from the environment, then the packaged default.
        """
        if override:
            return override
        env_var = f"{network.upper().replace('-', '_')}_RPC_URL"
        env_value = os.environ.get(env_var)
        if env_value:
            return env_value
        return cls.get_network(network)["rpc"]

    @classmethod
    def get_chain_id(cls, network: str) -> int:
        return int(cls.get_network(network)["chainId"])

    @classmethod
    def get_chain_selector(cls, network: str) -> int:
        return int(cls.get_network(network)["chainSelector"])

    @classmethod
    def get_router_address(cls, network: str) -> str:
        return cls.get_network(network)["router"]

    @classmethod
    def get_confirmations(cls, network: str) -> Optional[int]:
        return cls.get_network(network).get("confirmations")

    @classmethod
    def get_explorer_url(cls, network: str) -> Optional[str]:
        return cls.get_network(network).get("explorer")

    @classmethod
    def get_fee_token(cls, network: str, fee_token: Optional[str] = None) -> str:
        """
        Map a fee token choice to an address.

        Accepts "link" (the default), "native", "wrapped"/"wrapped-native",
        or an explicit address.
        """
        choice = (fee_token or "link").lower()
        config = cls.get_network(network)
        if choice == "native":
            return ZERO_ADDRESS
        if choice == "link":
            return config["linkToken"]
        if choice in ("wrapped", "wrapped-native"):
            return config["wrappedNative"]
        if choice.startswith("0x") and len(choice) == 42:
            return fee_token
        raise ValueError(
            f"Invalid fee token '{fee_token}'. Use 'link', 'native', 'wrapped' or a token address"
        )

    @classmethod
    def get_client_config(cls, network: str, log_level: int = logging.INFO) -> CCIPConfig:
        return CCIPConfig(
            router_address=cls.get_router_address(network),
            confirmations=cls.get_confirmations(network),
            log_level=log_level,
        )
