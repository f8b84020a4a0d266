# Area: Prompter Tests
"""Tests for board rendering and the console prompter."""

from unittest.mock import patch

from ttt_client._game.models import Board, Tile
from ttt_client.prompter import BOARD_RULE, ConsolePrompter, render_board

from conftest import board_with


class TestRenderBoard:
    """Tests for render_board."""

    def test_empty_board(self):
        lines = render_board(Board.empty())
        assert len(lines) == 7
        assert lines[0] == BOARD_RULE
        assert lines[1] == "     ||     ||   "
        assert lines[2] == BOARD_RULE

    def test_marks(self):
        board = board_with((0, 0, Tile.X), (0, 2, Tile.O))
        board = board_with((2, 1, Tile.X), board=board)
        lines = render_board(board)
        assert lines[1] == "  X  ||     ||  O"
        assert lines[5] == "     ||  X  ||   "


class TestConsolePrompter:
    """Tests for ConsolePrompter."""

    def test_ask_reads_a_line(self):
        with patch("builtins.input", return_value="2") as fake_input:
            assert ConsolePrompter().ask("Choice: ") == "2"
        fake_input.assert_called_once_with("Choice: ")

    def test_show_and_error_streams(self, capsys):
        prompter = ConsolePrompter()
        prompter.show("hello")
        prompter.error("bad")
        captured = capsys.readouterr()
        assert captured.out == "hello\n"
        assert captured.err == "bad\n"

    def test_show_board(self, capsys):
        ConsolePrompter().show_board(Board.empty())
        out = capsys.readouterr().out.splitlines()
        assert out == render_board(Board.empty())
