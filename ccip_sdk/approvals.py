"""
Token approval coordination for CCIP sends.

Transfer tokens and the fee token are merged into one allowance plan before
any transaction is sent. Fee-token entries carry a 20% buffer so that the
allowance still covers the fee if the on-chain quote moves between
``getFee`` and ``ccipSend``, and are approved before plain transfer tokens.
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from web3 import Web3
from web3.exceptions import Web3Exception

from .config import CCIPContext
from .contracts.token import ERC20Client
from .exceptions import (
    ApprovalError, ContractCallError, SigningRequiredError, TransactionError
)
from .models import FeeQuote, TokenAmount
from .provider import SigningProvider
from .utils import is_native_token, normalize_address

FEE_BUFFER_PERCENT = 20

# Allowance verification after an approval lands
VERIFY_INITIAL_DELAY = 2.0  # seconds
VERIFY_BACKOFF = 1.5
VERIFY_MAX_DELAY = 10.0
VERIFY_RETRIES = 3


def apply_fee_buffer(amount: int) -> int:
    """amount plus 20%, rounded down"""
    return amount + (amount * FEE_BUFFER_PERCENT) // 100


@dataclass(frozen=True)
class ApprovalEntry:
    """Allowance the router needs for one token"""
    token: str
    required_amount: int
    is_fee_token: bool

    @property
    def target_amount(self) -> int:
        if self.is_fee_token:
            return apply_fee_buffer(self.required_amount)
        return self.required_amount


def build_approval_plan(
    transfer_tokens: Sequence[TokenAmount],
    fee: FeeQuote
) -> List[ApprovalEntry]:
    """
    Merge transfer and fee requirements into one entry per token.

    A fee token that is also transferred gets a single entry for the sum of
    both amounts. A native fee adds no entry. Fee entries come first.
    """
    plan: Dict[str, ApprovalEntry] = {}
    for token_amount in transfer_tokens:
        key = normalize_address(token_amount.token)
        existing = plan.get(key)
        amount = token_amount.amount + (existing.required_amount if existing else 0)
        plan[key] = ApprovalEntry(token=key, required_amount=amount, is_fee_token=False)

    if not is_native_token(fee.token):
        key = normalize_address(fee.token)
        existing = plan.get(key)
        amount = fee.amount + (existing.required_amount if existing else 0)
        plan[key] = ApprovalEntry(token=key, required_amount=amount, is_fee_token=True)

    fee_entries = [entry for entry in plan.values() if entry.is_fee_token]
    transfer_entries = [entry for entry in plan.values() if not entry.is_fee_token]
    return fee_entries + transfer_entries


class ApprovalCoordinator:
    """
    Ensures the router holds enough allowance for every token a send pulls.

    Approvals are sent one at a time and each is awaited before the next, so
    a single signer never has two approvals in flight.
    """

    def __init__(
        self,
        context: CCIPContext,
        spender: str,
        logger: Optional[logging.Logger] = None,
        token_client_factory: Callable[..., ERC20Client] = ERC20Client,
    ):
        self.context = context
        self.spender = Web3.to_checksum_address(spender)
        self.logger = logger or context.logger or logging.getLogger(__name__)
        self._token_client_factory = token_client_factory

    def ensure_approvals(
        self,
        transfer_tokens: Sequence[TokenAmount],
        fee: FeeQuote,
        owner: Optional[str] = None,
        confirmations: Optional[int] = None
    ) -> None:
        """
        Approve the router for transfer amounts plus the fee where needed.

        Args:
            transfer_tokens: Tokens carried by the message
            fee: Fee quote for the message
            owner: Token owner (defaults to the signer's address)
            confirmations: Override for the confirmation count of each approval

        Raises:
            SigningRequiredError: If the client was built without a signer
            ApprovalError: If an approval transaction fails or reverts
        """
        provider = self.context.provider
        if not isinstance(provider, SigningProvider):
            raise SigningRequiredError("Token approval")
        owner = owner or provider.address

        plan = build_approval_plan(transfer_tokens, fee)
        if not plan:
            self.logger.debug("No token approvals needed")
            return

        self.logger.debug(f"Processing approvals for {len(plan)} tokens")
        for entry in plan:
            self._approve_if_needed(entry, owner, confirmations)

    def _token_client(self, token: str) -> ERC20Client:
        return self._token_client_factory(
            self.context, Web3.to_checksum_address(token), logger=self.logger
        )

    def _approve_if_needed(
        self,
        entry: ApprovalEntry,
        owner: str,
        confirmations: Optional[int] = None
    ) -> None:
        token_client = self._token_client(entry.token)
        symbol = self._symbol(token_client, entry.token)
        target = entry.target_amount

        if entry.is_fee_token:
            self.logger.debug(
                f"Adding {FEE_BUFFER_PERCENT}% buffer to fee token approval: "
                f"{entry.required_amount} -> {target}"
            )

        allowance = token_client.get_allowance(owner, self.spender)
        self.logger.debug(
            f"Token allowance check: {symbol} ({entry.token}) required={target} "
            f"current={allowance} role={'fee token' if entry.is_fee_token else 'transfer token'}"
        )

        if allowance >= target:
            self.logger.info(
                f"{symbol} already has sufficient allowance: {self._display(token_client, allowance)} "
                f"(needed: {self._display(token_client, target)})"
            )
            return

        self.logger.info(f"Approving {self._display(token_client, target)} {symbol} for CCIP Router")
        try:
            token_client.approve(self.spender, target, confirmations=confirmations)
        except (TransactionError, Web3Exception) as e:
            self.logger.error(f"Error approving {symbol}: {e}")
            raise ApprovalError(entry.token, str(e), tx_hash=getattr(e, "tx_hash", None)) from e

        self.logger.info(f"{symbol} approved for CCIP Router")
        self.verify_allowance(token_client, owner, target, symbol)

    def verify_allowance(
        self,
        token_client: ERC20Client,
        owner: str,
        required_amount: int,
        symbol: str = "token"
    ) -> bool:
        """
        Re-read the allowance until it reflects a confirmed approval.

        The first check is undelayed and runs right after the approval
        confirms. Up to three delayed re-reads follow, waiting 2s, then 1.5x
        longer each time (capped at 10s). A shortfall that outlasts the
        re-reads is logged and tolerated; the send itself is the authoritative
        check.

        Returns:
            True if the allowance was seen at or above ``required_amount``
        """
        delay = VERIFY_INITIAL_DELAY
        current = None
        for attempt in range(VERIFY_RETRIES + 1):
            if attempt:
                time.sleep(delay)
                delay = min(delay * VERIFY_BACKOFF, VERIFY_MAX_DELAY)
            retries_left = VERIFY_RETRIES - attempt
            try:
                current = token_client.get_allowance(owner, self.spender)
            except ContractCallError as e:
                self.logger.error(f"Error verifying allowance for {symbol}: {e}")
                continue

            self.logger.debug(
                f"On-chain allowance verification for {symbol}: required={required_amount} "
                f"actual={current} attempt={attempt + 1}"
            )
            if current >= required_amount:
                self.logger.info(f"Verified on-chain allowance for {symbol}: {current} (required: {required_amount})")
                return True

            if retries_left > 0:
                self.logger.warning(
                    f"Allowance verification failed for {symbol}: required {required_amount} "
                    f"but found {current}. Retrying in {delay}s... ({retries_left} attempts left)"
                )

        self.logger.error(
            f"Failed to verify allowance for {symbol} after multiple attempts: "
            f"required {required_amount} but found {current}. "
            f"Transaction might fail due to insufficient allowance."
        )
        return False

    def _symbol(self, token_client: ERC20Client, token: str) -> str:
        try:
            return token_client.get_symbol()
        except ContractCallError:
            return token

    def _display(self, token_client: ERC20Client, amount: int) -> str:
        try:
            return token_client.format_amount(amount)
        except ContractCallError:
            return str(amount)
