# Area: Game
"""
ttt_client._game.models — Game state model
==========================================

Typed snapshot of a fetched game record. Snapshots are immutable:
the authoritative record lives on the ledger and every read is a
fresh fetch.

GameStatus is a closed sum type with four variants:
    Unaccepted: created, player two has not staked yet
    Turn(index): active, ``index`` (0 or 1) moves next
    Draw: terminal, no winner
    Over(winner): terminal, ``winner`` is one of the players
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple, Union

from ..errors import RecordDecodeError

BOARD_SIZE = 3


class Tile(Enum):
    EMPTY = "empty"
    X = "x"
    O = "o"

    @property
    def symbol(self) -> str:
        return {Tile.EMPTY: " ", Tile.X: "X", Tile.O: "O"}[self]


@dataclass(frozen=True)
class Board:
    """A 3x3 grid of tiles, indexed ``[row][column]`` from 0."""

    rows: Tuple[Tuple[Tile, ...], ...]

    def __post_init__(self):
        if len(self.rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in self.rows):
            raise RecordDecodeError("board must be 3x3")

    @classmethod
    def empty(cls) -> "Board":
        return cls(tuple((Tile.EMPTY,) * BOARD_SIZE for _ in range(BOARD_SIZE)))

    def tile(self, row: int, column: int) -> Tile:
        return self.rows[row][column]

    def is_occupied(self, row: int, column: int) -> bool:
        return self.rows[row][column] is not Tile.EMPTY

    def empty_count(self) -> int:
        return sum(1 for tile in self.tiles() if tile is Tile.EMPTY)

    def tiles(self) -> Iterator[Tile]:
        for row in self.rows:
            yield from row


# ══════════════════════════════════════════════════════════════
# GAME STATUS
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Unaccepted:
    pass


@dataclass(frozen=True)
class Turn:
    index: int

    def __post_init__(self):
        if self.index not in (0, 1):
            raise RecordDecodeError(f"turn index must be 0 or 1, got {self.index}")


@dataclass(frozen=True)
class Draw:
    pass


@dataclass(frozen=True)
class Over:
    winner: str


GameStatus = Union[Unaccepted, Turn, Draw, Over]


def describe_status(status: GameStatus) -> str:
    if isinstance(status, Unaccepted):
        return "unaccepted"
    if isinstance(status, Turn):
        return f"turn:{status.index}"
    if isinstance(status, Draw):
        return "draw"
    if isinstance(status, Over):
        return f"over:{status.winner}"
    raise TypeError(f"Unknown game status: {status!r}")


# ══════════════════════════════════════════════════════════════
# RECORDS
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Game:
    """
    Snapshot of one on-ledger game record.

    Attributes:
        players: The two distinct player addresses, creator first
        board: Current board
        state: Current GameStatus
        stake_mint: Mint of the staked token
        stake_amount: Stake per player, in the mint's smallest unit
    """

    players: Tuple[str, str]
    board: Board
    state: GameStatus
    stake_mint: str
    stake_amount: int

    def __post_init__(self):
        if len(self.players) != 2:
            raise RecordDecodeError(f"expected 2 players, got {len(self.players)}")
        if self.players[0] == self.players[1]:
            raise RecordDecodeError("both players have the same address")
        if self.stake_amount < 0:
            raise RecordDecodeError("stake amount cannot be negative")

    def has_player(self, address: str) -> bool:
        return address in self.players


@dataclass(frozen=True)
class FundingAccount:
    """A token account that can post a stake."""

    address: str
    owning_mint: str
    owner_address: str
    balance: int


@dataclass(frozen=True)
class MintInfo:
    address: str
    decimals: int
    supply: int
