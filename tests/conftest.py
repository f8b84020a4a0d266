# Area: Test Fixtures
"""Shared fixtures: an in-memory ledger gateway and a scripted prompter."""

import struct
from typing import Callable, Dict, List, Optional, Tuple
from unittest.mock import MagicMock

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ttt_client._game.models import (
    Board,
    Draw,
    FundingAccount,
    Game,
    MintInfo,
    Tile,
    Turn,
    Unaccepted,
)
from ttt_client._game.layout import (
    GAME_DISCRIMINATOR,
    STATUS_DRAW,
    STATUS_OVER,
    STATUS_TURN,
    STATUS_UNACCEPTED,
)
from ttt_client._ledger.gateway import LedgerGateway
from ttt_client._lifecycle.orchestrator import GameOrchestrator
from ttt_client._lifecycle.poller import StatePoller
from ttt_client._shared.activity_logger import LedgerActivityLogger
from ttt_client.errors import SubmitError
from ttt_client.prompter import Prompter


def new_address() -> str:
    return str(Keypair().pubkey())


ME = new_address()
OPPONENT = new_address()
STRANGER = new_address()
MINT = new_address()
GAME_ADDRESS = new_address()

_TILE_TAGS = {Tile.X: 0, Tile.O: 1}


def make_game(
    players: Tuple[str, str] = (ME, OPPONENT),
    state=None,
    board: Optional[Board] = None,
    stake_mint: str = MINT,
    stake_amount: int = 1_000_000,
) -> Game:
    return Game(
        players=players,
        board=board or Board.empty(),
        state=state if state is not None else Turn(0),
        stake_mint=stake_mint,
        stake_amount=stake_amount,
    )


def board_with(*marks: Tuple[int, int, Tile], board: Optional[Board] = None) -> Board:
    """Copy of ``board`` (empty by default) with ``(row, column, tile)`` marks applied."""
    rows = [list(row) for row in (board or Board.empty()).rows]
    for row, column, tile in marks:
        rows[row][column] = tile
    return Board(tuple(tuple(row) for row in rows))


def encode_game(game: Game) -> bytes:
    """Raw account bytes for ``game``, as the program would store it."""
    parts = [GAME_DISCRIMINATOR]
    parts.extend(bytes(Pubkey.from_string(p)) for p in game.players)
    for tile in game.board.tiles():
        parts.append(b"\x00" if tile is Tile.EMPTY else bytes((1, _TILE_TAGS[tile])))
    state = game.state
    if isinstance(state, Unaccepted):
        parts.append(bytes((STATUS_UNACCEPTED,)))
    elif isinstance(state, Turn):
        parts.append(bytes((STATUS_TURN, state.index)))
    elif isinstance(state, Draw):
        parts.append(bytes((STATUS_DRAW,)))
    else:
        parts.append(bytes((STATUS_OVER,)) + bytes(Pubkey.from_string(state.winner)))
    parts.append(bytes(Pubkey.from_string(game.stake_mint)))
    parts.append(struct.pack("<Q", game.stake_amount))
    return b"".join(parts)


class FakeGateway(LedgerGateway):
    """
    In-memory ledger.

    ``queue_snapshots`` makes the next fetch_record calls for an address
    return the given games in order (each becomes the stored record).
    ``fail`` makes the next submission of an instruction raise SubmitError,
    optionally mutating the ledger first.
    ``move_results`` lists the status applied after each successful move;
    without it the turn simply alternates.
    """

    def __init__(self, local_address: str = ME):
        self._local_address = local_address
        self.records: Dict[str, Game] = {}
        self.token_accounts: List[FundingAccount] = []
        self.mints: Dict[str, MintInfo] = {}
        self.next_game_address = GAME_ADDRESS
        self.move_results: List = []
        self.attempts: List[tuple] = []
        self.fetch_calls: List[str] = []
        self._snapshots: Dict[str, List[Optional[Game]]] = {}
        self._failures: Dict[str, Tuple[SubmitError, Optional[Callable[[], None]]]] = {}

    @property
    def local_address(self) -> str:
        return self._local_address

    # ── Scripting helpers ──

    def queue_snapshots(self, address: str, *games: Optional[Game]) -> None:
        self._snapshots.setdefault(address, []).extend(games)

    def fail(self, instruction: str, then: Optional[Callable[[], None]] = None) -> None:
        error = SubmitError(instruction, "custom program error: 0x1771")
        self._failures[instruction] = (error, then)

    def _maybe_fail(self, instruction: str) -> None:
        if instruction in self._failures:
            error, then = self._failures.pop(instruction)
            if then is not None:
                then()
            raise error

    # ── Fetch ──

    def fetch_record(self, address: str) -> Optional[Game]:
        self.fetch_calls.append(address)
        queue = self._snapshots.get(address)
        if queue:
            snapshot = queue.pop(0)
            if snapshot is None:
                self.records.pop(address, None)
            else:
                self.records[address] = snapshot
            return snapshot
        return self.records.get(address)

    def fetch_records_by_discriminator(self, discriminator: bytes):
        return list(self.records.items())

    def fetch_token_accounts(self, owner: str, mint: str) -> List[FundingAccount]:
        return [
            account for account in self.token_accounts
            if account.owner_address == owner and account.owning_mint == mint
        ]

    def fetch_mint_info(self, mint: str) -> Optional[MintInfo]:
        return self.mints.get(mint)

    # ── Submit ──

    def submit_create(self, player_one, player_two, stake, funding_account) -> str:
        self.attempts.append(("initialize", player_one, player_two, stake, funding_account.address))
        self._maybe_fail("initialize")
        address = self.next_game_address
        self.records[address] = Game(
            players=(player_one, player_two),
            board=Board.empty(),
            state=Unaccepted(),
            stake_mint=funding_account.owning_mint,
            stake_amount=stake,
        )
        return address

    def submit_accept(self, game_address, funding_account) -> str:
        self.attempts.append(("accept", game_address, funding_account.address))
        self._maybe_fail("accept")
        game = self.records[game_address]
        self.records[game_address] = _replace(game, state=Turn(0))
        return "accept-signature"

    def submit_move(self, game_address, row, column) -> str:
        self.attempts.append(("play", row, column))
        self._maybe_fail("play")
        game = self.records[game_address]
        mark = Tile.X if game.state.index == 0 else Tile.O
        if self.move_results:
            state = self.move_results.pop(0)
        else:
            state = Turn(1 - game.state.index)
        self.records[game_address] = _replace(
            game, board=board_with((row, column, mark), board=game.board), state=state
        )
        return "play-signature"

    def submit_close(self, game_address) -> str:
        self.attempts.append(("close", game_address))
        self._maybe_fail("close")
        del self.records[game_address]
        return "close-signature"


def _replace(game: Game, **changes) -> Game:
    fields = {
        "players": game.players,
        "board": game.board,
        "state": game.state,
        "stake_mint": game.stake_mint,
        "stake_amount": game.stake_amount,
    }
    fields.update(changes)
    return Game(**fields)


class ScriptedPrompter(Prompter):
    """Answers prompts from a fixed list and records everything shown."""

    def __init__(self, answers=None):
        self.answers = list(answers or [])
        self.prompts: List[str] = []
        self.shown: List[str] = []
        self.errors: List[str] = []

    def ask(self, message: str) -> str:
        self.prompts.append(message)
        if not self.answers:
            raise AssertionError(f"No scripted answer left for prompt {message!r}")
        return self.answers.pop(0)

    def show(self, message: str) -> None:
        self.shown.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def prompter():
    return ScriptedPrompter()


@pytest.fixture
def activity():
    return MagicMock(spec=LedgerActivityLogger)


@pytest.fixture
def orchestrator(gateway, prompter, activity):
    poller = StatePoller(gateway, interval_seconds=0, activity=activity)
    return GameOrchestrator(gateway, prompter, poller=poller, activity=activity)
