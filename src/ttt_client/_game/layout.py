# Area: Game
"""
ttt_client._game.layout — On-ledger binary layout of a game record
==================================================================

The remote program stores games as Anchor accounts (borsh encoding):

    discriminator  8 bytes   sha256("account:Game")[:8]
    players        2 x 32    public keys
    board          9 x Option<Symbol>   0 = None, 1 + (0 = X, 1 = O)
    state          tag u8    0 Unaccepted | 1 Turn{index u8}
                             2 Draw | 3 Over{winner 32 bytes}
    stake_mint     32        public key
    stake_amount   u64 LE

The board and state are variable length, so fields are read with a
moving cursor rather than a fixed struct format.
"""

from __future__ import annotations
import hashlib
import struct
from typing import List, Tuple

from solders.pubkey import Pubkey

from ..errors import RecordDecodeError
from .models import (
    BOARD_SIZE,
    Board,
    Draw,
    Game,
    GameStatus,
    Over,
    Tile,
    Turn,
    Unaccepted,
)

PUBKEY_LENGTH = 32

_SYMBOL_TAGS = {0: Tile.X, 1: Tile.O}

STATUS_UNACCEPTED = 0
STATUS_TURN = 1
STATUS_DRAW = 2
STATUS_OVER = 3


def account_discriminator(name: str) -> bytes:
    """Anchor account discriminator: first 8 bytes of sha256("account:<name>")."""
    return hashlib.sha256(f"account:{name}".encode("utf-8")).digest()[:8]


GAME_DISCRIMINATOR = account_discriminator("Game")


class _Cursor:
    """Sequential reader over a byte buffer."""

    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def take(self, size: int, field: str) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise RecordDecodeError(
                f"truncated record while reading {field} "
                f"(need {end} bytes, have {len(self.data)})"
            )
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def u8(self, field: str) -> int:
        return self.take(1, field)[0]

    def u64(self, field: str) -> int:
        return struct.unpack("<Q", self.take(8, field))[0]

    def pubkey(self, field: str) -> str:
        return str(Pubkey.from_bytes(self.take(PUBKEY_LENGTH, field)))


def decode_game(data: bytes) -> Game:
    """
    Decode raw account bytes into a Game snapshot.

    Raises:
        RecordDecodeError: On a foreign discriminator, truncated data,
            unknown enum tags, or an invalid record
    """
    cursor = _Cursor(data)
    if cursor.take(8, "discriminator") != GAME_DISCRIMINATOR:
        raise RecordDecodeError("account discriminator does not match Game")

    players = (cursor.pubkey("players[0]"), cursor.pubkey("players[1]"))
    board = _decode_board(cursor)
    state = _decode_status(cursor)
    stake_mint = cursor.pubkey("stake_mint")
    stake_amount = cursor.u64("stake_amount")

    return Game(
        players=players,
        board=board,
        state=state,
        stake_mint=stake_mint,
        stake_amount=stake_amount,
    )


def _decode_board(cursor: _Cursor) -> Board:
    rows: List[Tuple[Tile, ...]] = []
    for row in range(BOARD_SIZE):
        tiles = []
        for column in range(BOARD_SIZE):
            field = f"board[{row}][{column}]"
            option = cursor.u8(field)
            if option == 0:
                tiles.append(Tile.EMPTY)
            elif option == 1:
                symbol = cursor.u8(field)
                if symbol not in _SYMBOL_TAGS:
                    raise RecordDecodeError(f"unknown symbol tag {symbol} at {field}")
                tiles.append(_SYMBOL_TAGS[symbol])
            else:
                raise RecordDecodeError(f"invalid option tag {option} at {field}")
        rows.append(tuple(tiles))
    return Board(tuple(rows))


def _decode_status(cursor: _Cursor) -> GameStatus:
    tag = cursor.u8("state")
    if tag == STATUS_UNACCEPTED:
        return Unaccepted()
    if tag == STATUS_TURN:
        return Turn(index=cursor.u8("state.turn.index"))
    if tag == STATUS_DRAW:
        return Draw()
    if tag == STATUS_OVER:
        return Over(winner=cursor.pubkey("state.over.winner"))
    raise RecordDecodeError(f"unknown state tag {tag}")
