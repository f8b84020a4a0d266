# Area: Lifecycle Tests
"""Tests for the resume-game flow of GameOrchestrator."""

import pytest

from ttt_client._game.models import Draw, MintInfo, Over, Tile, Turn, Unaccepted
from ttt_client._lifecycle.enums import ClientPhase, MenuAction, Outcome
from ttt_client.errors import InvalidSelectionError, NoGamesFoundError

from conftest import ME, MINT, OPPONENT, STRANGER, board_with, make_game, new_address

FIRST = new_address()
SECOND = new_address()


@pytest.fixture
def ongoing(gateway):
    gateway.mints[MINT] = MintInfo(MINT, 6, 10**12)
    return gateway


class TestResumeSingleGame:
    """One ongoing game is resumed without a choice."""

    def test_resume_and_win(self, orchestrator, ongoing, prompter):
        board = board_with((0, 0, Tile.X), (2, 2, Tile.O))
        ongoing.records[FIRST] = make_game(players=(ME, OPPONENT), state=Turn(0), board=board)
        ongoing.records[SECOND] = make_game(players=(OPPONENT, STRANGER), state=Turn(0))
        ongoing.move_results = [Over(ME)]
        prompter.answers = ["1 1"]

        result = orchestrator.resume_game()

        assert result.action is MenuAction.RESUME_GAME
        assert result.game_address == FIRST
        assert result.outcome is Outcome.WON
        assert result.phase is ClientPhase.CLOSED
        assert "One ongoing game found" in prompter.shown
        assert f"Opponent: {OPPONENT}" in prompter.shown
        assert f"Staked tokens: 1 of {MINT}" in prompter.shown
        assert "Turns remaining: 7" in prompter.shown


class TestResumeSeveralGames:
    """Several ongoing games are listed and chosen by number."""

    def test_choose_second_game(self, orchestrator, ongoing, prompter):
        ongoing.records[FIRST] = make_game(players=(ME, OPPONENT), state=Turn(1))
        ongoing.records[SECOND] = make_game(players=(OPPONENT, ME), state=Turn(1))
        ongoing.records[new_address()] = make_game(players=(ME, OPPONENT), state=Unaccepted())
        ongoing.move_results = [Draw()]
        prompter.answers = ["2", "0 1"]

        result = orchestrator.resume_game()

        assert "Your ongoing games" in prompter.shown
        assert prompter.shown.count("Turns remaining: 9") == 2
        assert result.game_address == SECOND
        assert result.outcome is Outcome.DRAW
        assert result.phase is ClientPhase.TERMINAL
        assert ongoing.attempts == [("play", 0, 1)]

    def test_invalid_choice(self, orchestrator, ongoing, prompter):
        ongoing.records[FIRST] = make_game(players=(ME, OPPONENT), state=Turn(1))
        ongoing.records[SECOND] = make_game(players=(OPPONENT, ME), state=Turn(1))
        prompter.answers = ["0"]

        result = orchestrator.resume_game()

        assert isinstance(result.error, InvalidSelectionError)
        assert result.game_address is None
        assert ongoing.attempts == []


class TestResumeNothing:
    """No ongoing games."""

    def test_finished_and_pending_games_are_not_resumable(self, orchestrator, ongoing, prompter):
        ongoing.records[FIRST] = make_game(state=Draw())
        ongoing.records[SECOND] = make_game(state=Unaccepted())

        result = orchestrator.resume_game()

        assert isinstance(result.error, NoGamesFoundError)
        assert prompter.errors == ["You have no ongoing games at the moment"]
        assert result.phase is ClientPhase.ABORTED
