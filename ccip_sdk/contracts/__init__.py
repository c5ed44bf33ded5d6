"""
Contract clients for the CCIP Router, OnRamp, TokenAdminRegistry, token
pools and ERC20 tokens.
"""
from .base import BaseContract
from .router import RouterClient
from .registry import OnRampClient, TokenAdminRegistryClient
from .pool import TokenPoolClient
from .token import ERC20Client

__all__ = [
    'BaseContract', 'RouterClient', 'OnRampClient', 'TokenAdminRegistryClient',
    'TokenPoolClient', 'ERC20Client',
]
