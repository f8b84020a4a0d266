# Area: Ledger
"""
ttt_client._ledger.gateway — Ledger Gateway interface
=====================================================

The orchestrator and the account selector talk to the ledger only
through this interface. Implementations fetch records and submit
instructions; they never interpret game rules.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .._game.models import FundingAccount, Game, MintInfo


class LedgerGateway(ABC):
    """
    Abstract ledger client.

    Fetch operations return fresh snapshots. Submit operations raise
    SubmitError when the instruction is rejected and TransportError
    when the endpoint cannot be reached.
    """

    @property
    @abstractmethod
    def local_address(self) -> str:
        """Address of the signing player."""

    @abstractmethod
    def fetch_record(self, address: str) -> Optional[Game]:
        """Fetch one game record, or None if it does not exist."""

    @abstractmethod
    def fetch_records_by_discriminator(self, discriminator: bytes) -> List[Tuple[str, Game]]:
        """Fetch every program-owned record whose data starts with ``discriminator``."""

    @abstractmethod
    def fetch_token_accounts(self, owner: str, mint: str) -> List[FundingAccount]:
        """Fetch all token accounts of ``owner`` holding ``mint``."""

    @abstractmethod
    def fetch_mint_info(self, mint: str) -> Optional[MintInfo]:
        """Fetch decimals and supply of a mint, or None if it is not a mint."""

    @abstractmethod
    def submit_create(
        self,
        player_one: str,
        player_two: str,
        stake: int,
        funding_account: FundingAccount,
    ) -> str:
        """Create a new game and return its address."""

    @abstractmethod
    def submit_accept(self, game_address: str, funding_account: FundingAccount) -> str:
        """Accept a game as player two. Returns the transaction signature."""

    @abstractmethod
    def submit_move(self, game_address: str, row: int, column: int) -> str:
        """Mark a tile. Returns the transaction signature."""

    @abstractmethod
    def submit_close(self, game_address: str) -> str:
        """Settle stakes and close a finished game. Returns the transaction signature."""
