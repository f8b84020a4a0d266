# Area: Lifecycle
"""
ttt_client._lifecycle.decisions — Pure lifecycle decisions
==========================================================

Functions from "latest snapshot + user answer" to "what happens next".
None of them perform I/O, so the whole state machine can be exercised
without a terminal or a ledger.
"""

from __future__ import annotations
from typing import Tuple

from .._game.models import (
    BOARD_SIZE,
    Board,
    Draw,
    Game,
    GameStatus,
    Over,
    Turn,
    Unaccepted,
)
from ..errors import InputError, InvalidSelectionError, TicTacToeClientError
from ..validators import is_valid_number
from .enums import MenuAction, Outcome, PlayAction

OUTCOME_MESSAGES = {
    Outcome.WON: "$$$$ You won the game $$$$",
    Outcome.LOST: "You lost the game :(",
    Outcome.DRAW: "---- Game tied ----",
}


# ══════════════════════════════════════════════════════════════
# ANSWER PARSING
# ══════════════════════════════════════════════════════════════

def parse_menu_choice(answer: str) -> MenuAction:
    try:
        return MenuAction(answer.strip())
    except ValueError:
        raise InputError("Invalid input...") from None


def parse_confirmation(answer: str) -> bool:
    """Parse a y/n answer. Anything else is an InputError."""
    normalized = answer.strip().lower()
    if normalized == "y":
        return True
    if normalized == "n":
        return False
    raise InputError("Invalid input...")


def parse_selection(answer: str, count: int) -> int:
    """
    Parse a 1-based choice among ``count`` options.

    Returns:
        The zero-based index of the chosen option

    Raises:
        InvalidSelectionError: If the answer is not a whole number in [1, count]
    """
    text = answer.strip()
    if not is_valid_number(text) or "." in text:
        raise InvalidSelectionError(answer, count)
    position = int(text)
    if position < 1 or position > count:
        raise InvalidSelectionError(answer, count)
    return position - 1


def _parse_coordinate(token: str) -> int:
    whole, _, fraction = token.partition(".")
    if not whole or fraction.strip("0"):
        raise InputError("Your provided input is not numeric...")
    return int(whole)


def parse_tile_input(text: str, board: Board) -> Tuple[int, int]:
    """
    Parse "row column" into a free tile on ``board``.

    Checks run in a fixed order: split on the first space, validate the
    row token, parse it, validate the (trimmed) column token, parse it,
    bounds-check both, then check the tile is empty.

    Raises:
        InputError: With a message naming the first failed check
    """
    text = text.strip()
    space_index = text.find(" ")
    if space_index == -1:
        raise InputError("Please enter space separated values for row and column")

    row_token = text[:space_index]
    if not is_valid_number(row_token):
        raise InputError("Your provided input is not numeric...")
    row = _parse_coordinate(row_token)

    column_token = text[space_index + 1:].strip()
    if not is_valid_number(column_token):
        raise InputError("Your provided input is invalid...")
    column = _parse_coordinate(column_token)

    if row < 0 or row >= BOARD_SIZE or column < 0 or column >= BOARD_SIZE:
        raise InputError("The provided input is out of bounds for 3x3 board...")
    if board.is_occupied(row, column):
        raise InputError("The specified tile is already occupied...")
    return row, column


# ══════════════════════════════════════════════════════════════
# TURN OWNERSHIP
# ══════════════════════════════════════════════════════════════

def local_player_index(game: Game, address: str) -> int:
    """Index of ``address`` in the game, fixed once at game entry."""
    if not game.has_player(address):
        raise TicTacToeClientError(f"{address} is not a player in this game")
    return 0 if game.players[0] == address else 1


def opponent_of(game: Game, address: str) -> str:
    return game.players[1] if game.players[0] == address else game.players[0]


def next_play_action(status: GameStatus, local_index: int) -> PlayAction:
    if isinstance(status, Turn):
        return PlayAction.MOVE if status.index == local_index else PlayAction.WAIT
    if isinstance(status, (Draw, Over)):
        return PlayAction.FINISH
    if isinstance(status, Unaccepted):
        return PlayAction.WAIT
    raise TypeError(f"Unknown game status: {status!r}")


def is_wait_over(status: GameStatus, local_index: int) -> bool:
    """True once the opponent has moved (turn is ours) or the game ended."""
    if isinstance(status, Turn):
        return status.index == local_index
    if isinstance(status, (Draw, Over)):
        return True
    if isinstance(status, Unaccepted):
        return False
    raise TypeError(f"Unknown game status: {status!r}")


def has_been_accepted(status: GameStatus) -> bool:
    if isinstance(status, Unaccepted):
        return False
    if isinstance(status, (Turn, Draw, Over)):
        return True
    raise TypeError(f"Unknown game status: {status!r}")


# ══════════════════════════════════════════════════════════════
# TERMINAL HANDLING
# ══════════════════════════════════════════════════════════════

def outcome_for(status: GameStatus, local_address: str) -> Outcome:
    """
    Outcome of a finished game from the local player's point of view.

    Raises:
        ValueError: If the status is not terminal
    """
    if isinstance(status, Over):
        return Outcome.WON if status.winner == local_address else Outcome.LOST
    if isinstance(status, Draw):
        return Outcome.DRAW
    if isinstance(status, (Turn, Unaccepted)):
        raise ValueError("game is not finished")
    raise TypeError(f"Unknown game status: {status!r}")


def should_close(local_index: int) -> bool:
    """Only the creator (player index 0) closes the record."""
    return local_index == 0


# ══════════════════════════════════════════════════════════════
# DISCOVERY FILTERS
# ══════════════════════════════════════════════════════════════

def is_accept_candidate(game: Game, address: str) -> bool:
    return game.players[1] == address and isinstance(game.state, Unaccepted)


def is_resume_candidate(game: Game, address: str) -> bool:
    return game.has_player(address) and isinstance(game.state, Turn)
