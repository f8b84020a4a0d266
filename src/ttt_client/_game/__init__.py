# Area: Game
"""
Game record model and its on-ledger binary layout.

This package contains:
- Typed, immutable snapshots of a game record
- The GameStatus sum type
- Decoding of the raw account bytes
"""

from .models import (
    BOARD_SIZE,
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
    describe_status,
)
from .layout import (
    GAME_DISCRIMINATOR,
    account_discriminator,
    decode_game,
)

__all__ = [
    "BOARD_SIZE",
    "Board",
    "Draw",
    "FundingAccount",
    "Game",
    "GameStatus",
    "MintInfo",
    "Over",
    "Tile",
    "Turn",
    "Unaccepted",
    "describe_status",
    "GAME_DISCRIMINATOR",
    "account_discriminator",
    "decode_game",
]
