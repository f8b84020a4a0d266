# Area: Prompter
"""
ttt_client.prompter — Line-based user interaction
=================================================

The orchestrator never calls ``input``/``print`` directly. It talks to
a Prompter, so tests can script the answers and a different front end
can replace the console.
"""

import sys
from abc import ABC, abstractmethod
from typing import List

from ._game.models import Board, BOARD_SIZE

BOARD_RULE = "----------------------------------"


def render_board(board: Board) -> List[str]:
    """
    Render a board as printable lines.

    Example:
        ----------------------------------
          X  ||     ||  O
        ----------------------------------
    """
    lines = [BOARD_RULE]
    for row in range(BOARD_SIZE):
        symbols = [board.tile(row, column).symbol for column in range(BOARD_SIZE)]
        lines.append("  " + "  ||  ".join(symbols))
        lines.append(BOARD_RULE)
    return lines


class Prompter(ABC):
    """Source of user answers and sink for user-facing messages."""

    @abstractmethod
    def ask(self, message: str) -> str:
        """Show ``message`` and return one line of input."""

    @abstractmethod
    def show(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass

    def show_board(self, board: Board) -> None:
        for line in render_board(board):
            self.show(line)


class ConsolePrompter(Prompter):
    """Prompter on stdin/stdout, errors on stderr."""

    def ask(self, message: str) -> str:
        return input(message)

    def show(self, message: str) -> None:
        print(message)

    def error(self, message: str) -> None:
        print(message, file=sys.stderr)
