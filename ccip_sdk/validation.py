"""
Token balance validation ahead of a transfer.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .config import CCIPContext
from .contracts.token import ERC20Client
from .exceptions import InsufficientBalanceError
from .models import TokenAmount
from .utils import format_units, normalize_address


@dataclass
class TokenDetails:
    """Metadata and balance for one token held by an address"""
    token_client: ERC20Client
    token_address: str
    token_symbol: str
    token_decimals: int
    token_balance: int


class TokenValidator:
    """Checks that a holder can cover the token amounts of a message"""

    def __init__(self, context: CCIPContext, logger: Optional[logging.Logger] = None):
        self.context = context
        self.logger = logger or context.logger or logging.getLogger(__name__)

    def get_token_details(self, holder: str, token_addresses: Sequence[str]) -> List[TokenDetails]:
        """
        Read symbol, decimals and balance for each token.

        Raises:
            ValueError: If no token addresses are given
        """
        if not token_addresses:
            raise ValueError("No token addresses provided")

        results = []
        for token_address in token_addresses:
            client = ERC20Client(self.context, token_address, logger=self.logger)
            symbol = client.get_symbol()
            decimals = client.get_decimals()
            balance = client.get_balance(holder)
            self.logger.info(f"Token: {symbol} ({token_address})")
            self.logger.info(f"Token Balance: {format_units(balance, decimals)} {symbol}")
            results.append(TokenDetails(client, token_address, symbol, decimals, balance))
        return results

    def validate_token_amounts(
        self,
        holder: str,
        token_amounts: Sequence[TokenAmount]
    ) -> Dict[str, int]:
        """
        Verify ``holder`` has at least each amount.

        Amounts of a token listed more than once are summed before comparing.

        Returns:
            Required amount per normalized token address

        Raises:
            ValueError: If no token amounts are given
            InsufficientBalanceError: If any balance is short
        """
        if not token_amounts:
            raise ValueError("No token amounts provided for validation")

        required: Dict[str, int] = {}
        for ta in token_amounts:
            key = normalize_address(ta.token)
            required[key] = required.get(key, 0) + ta.amount

        unique_tokens = list({normalize_address(ta.token): ta.token for ta in token_amounts}.values())
        details = {normalize_address(d.token_address): d for d in self.get_token_details(holder, unique_tokens)}

        for key, amount in required.items():
            detail = details[key]
            if detail.token_balance < amount:
                raise InsufficientBalanceError(
                    detail.token_address,
                    detail.token_symbol,
                    format_units(detail.token_balance, detail.token_decimals),
                    format_units(amount, detail.token_decimals),
                )
            self.logger.info(
                f"Transfer Amount: {format_units(amount, detail.token_decimals)} {detail.token_symbol}"
            )
        return required
