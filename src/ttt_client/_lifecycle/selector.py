# Area: Lifecycle
"""
ttt_client._lifecycle.selector — Funding account selection
==========================================================

Picks the token account that pays a stake. The caller learns whether
the owner has no account for the mint at all (NoFundingAccountError)
or only accounts that are too poor (InsufficientFundsError).
"""

import logging
from typing import Callable, List, Sequence

from .._game.models import FundingAccount
from ..errors import InsufficientFundsError, NoFundingAccountError
from .decisions import parse_selection

logger = logging.getLogger("ttt_client.selector")

# Receives the qualifying accounts, returns the user's 1-based answer.
ChooseFn = Callable[[Sequence[FundingAccount]], str]


def qualifying_accounts(
    candidates: Sequence[FundingAccount],
    required: int,
) -> List[FundingAccount]:
    return [account for account in candidates if account.balance >= required]


def choose_funding_account(
    candidates: Sequence[FundingAccount],
    owner: str,
    mint: str,
    required: int,
    choose: ChooseFn,
) -> FundingAccount:
    """
    Select one funding account with ``balance >= required``.

    Args:
        candidates: Token accounts as returned by the ledger
        owner: Address that must own the account
        mint: Mint the account must hold
        required: Minimum balance in base units
        choose: Called only when several accounts qualify

    Raises:
        NoFundingAccountError: No account exists for this owner and mint
        InsufficientFundsError: Accounts exist but none holds ``required``
        InvalidSelectionError: The choice answer is out of range
    """
    owned = [
        account for account in candidates
        if account.owner_address == owner and account.owning_mint == mint
    ]
    if not owned:
        raise NoFundingAccountError(owner, mint)

    qualifying = qualifying_accounts(owned, required)
    if not qualifying:
        best_balance = max(account.balance for account in owned)
        raise InsufficientFundsError(owner, mint, required, best_balance)

    if len(qualifying) == 1:
        logger.debug(f"Auto-selected funding account {qualifying[0].address}")
        return qualifying[0]

    answer = choose(qualifying)
    selected = qualifying[parse_selection(answer, len(qualifying))]
    logger.debug(f"Selected funding account {selected.address}")
    return selected


class AccountSelector:
    """Fetches the owner's token accounts and selects one of them."""

    def __init__(self, gateway):
        self._gateway = gateway

    def select(
        self,
        owner: str,
        mint: str,
        required: int,
        choose: ChooseFn,
    ) -> FundingAccount:
        candidates = self._gateway.fetch_token_accounts(owner, mint)
        return choose_funding_account(candidates, owner, mint, required, choose)
