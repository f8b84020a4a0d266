"""
ttt_client — Stake-backed tic-tac-toe client
============================================

Drives a two-player tic-tac-toe game whose authoritative state lives in
an on-chain program. The client never evaluates game rules: it submits
instructions, polls the game record and reacts to what it observes.

Quick Start:
    ttt-client --keypair ~/.config/solana/id.json

From Python:
    from ttt_client import (
        ConsolePrompter, GameOrchestrator, SolanaGateway,
        load_config, load_keypair,
    )
    config = load_config("config.json")
    gateway = SolanaGateway(config, load_keypair(config.keypair_path))
    GameOrchestrator(gateway, ConsolePrompter()).run_menu()

Testing without a ledger:
    Subclass LedgerGateway (and Prompter) with in-memory versions and
    hand them to GameOrchestrator.
"""

from ._client_config import ClientConfig, load_config
from ._game import (
    Board,
    Draw,
    FundingAccount,
    Game,
    GameStatus,
    MintInfo,
    Over,
    Tile,
    Turn,
    Unaccepted,
)
from ._ledger import LedgerGateway, SolanaGateway, load_keypair
from ._lifecycle import (
    AccountSelector,
    ActionResult,
    GameOrchestrator,
    MenuAction,
    Outcome,
    StatePoller,
)
from .errors import (
    TicTacToeClientError,
    ConfigError,
    TransportError,
    InputError,
    LookupFailure,
    NoFundingAccountError,
    InsufficientFundsError,
    InvalidSelectionError,
    SubmitError,
    RecordDecodeError,
)
from .prompter import ConsolePrompter, Prompter
from .validators import is_valid_address, is_valid_number, to_base_units

__all__ = [
    # Main classes
    "GameOrchestrator",
    "ActionResult",
    "AccountSelector",
    "StatePoller",
    "LedgerGateway",
    "SolanaGateway",
    "Prompter",
    "ConsolePrompter",
    "MenuAction",
    "Outcome",
    # Config
    "ClientConfig",
    "load_config",
    "load_keypair",
    # Game model
    "Board",
    "Tile",
    "Game",
    "GameStatus",
    "Unaccepted",
    "Turn",
    "Draw",
    "Over",
    "FundingAccount",
    "MintInfo",
    # Validators
    "is_valid_address",
    "is_valid_number",
    "to_base_units",
    # Errors
    "TicTacToeClientError",
    "ConfigError",
    "TransportError",
    "InputError",
    "LookupFailure",
    "NoFundingAccountError",
    "InsufficientFundsError",
    "InvalidSelectionError",
    "SubmitError",
    "RecordDecodeError",
]
__version__ = "1.0.0"
