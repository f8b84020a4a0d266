# Area: Lifecycle
"""
ttt_client._lifecycle.orchestrator — Game lifecycle orchestrator
================================================================

Drives one menu action (new game, accept, resume) from the first prompt
to the close instruction. Every decision is taken by a function in
``decisions`` on a freshly fetched snapshot; this module only performs
the I/O around them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from .._game.models import FundingAccount, Game, MintInfo
from .._shared.activity_logger import LedgerActivityLogger, get_activity_logger
from ..errors import (
    InputError,
    InvalidSelectionError,
    LookupFailure,
    MintNotFoundError,
    NoGamesFoundError,
    PollCancelledError,
    RecordDecodeError,
    RecordNotFoundError,
    StakeExceedsBalanceError,
    SubmitError,
    TicTacToeClientError,
)
from ..prompter import Prompter
from ..validators import format_amount, is_public_key, is_valid_address, to_base_units
from .decisions import (
    OUTCOME_MESSAGES,
    has_been_accepted,
    is_wait_over,
    local_player_index,
    next_play_action,
    opponent_of,
    outcome_for,
    parse_confirmation,
    parse_menu_choice,
    parse_selection,
    parse_tile_input,
    should_close,
)
from .discovery import find_accept_candidates, find_resume_candidates
from .enums import ClientEvent, ClientPhase, MenuAction, Outcome, PlayAction
from .poller import DEFAULT_POLL_INTERVAL, StatePoller
from .selector import AccountSelector
from .state_machine import ClientStateMachine

logger = logging.getLogger("ttt_client.lifecycle.orchestrator")

SEPARATOR = "----------------------------------"

# Errors an action reports and recovers from. TransportError is not here.
HANDLED_ERRORS = (
    LookupFailure,
    InvalidSelectionError,
    InputError,
    RecordDecodeError,
    SubmitError,
    PollCancelledError,
)


@dataclass
class ActionResult:
    """
    What one menu action ended with.

    Attributes:
        action: The menu action that ran
        completed: True if the game reached a terminal status
        phase: Final lifecycle phase
        game_address: Game the action worked on, if one was chosen
        outcome: Result for the local player, if the game finished
        error: The handled error that aborted the action
    """
    action: MenuAction
    completed: bool
    phase: ClientPhase
    game_address: Optional[str] = None
    outcome: Optional[Outcome] = None
    error: Optional[TicTacToeClientError] = None


class GameOrchestrator:
    """
    Runs the create / accept / resume flows against a LedgerGateway.

    Args:
        gateway: The ledger gateway (real or fake)
        prompter: Source of user answers and sink for messages
        poller: Polling helper; built from ``poll_interval`` if omitted
        selector: Funding account selector; built from ``gateway`` if omitted
        activity: Activity logger for OBSERVED/ERROR lines
        poll_interval: Seconds between polls when ``poller`` is omitted
    """

    def __init__(
        self,
        gateway,
        prompter: Prompter,
        poller: Optional[StatePoller] = None,
        selector: Optional[AccountSelector] = None,
        activity: Optional[LedgerActivityLogger] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self.gateway = gateway
        self.prompter = prompter
        self.activity = activity or get_activity_logger()
        self.poller = poller or StatePoller(gateway, poll_interval, self.activity)
        self.selector = selector or AccountSelector(gateway)
        self.state_machine = ClientStateMachine()
        self._game_address: Optional[str] = None
        self._outcome: Optional[Outcome] = None

    # ── Menu ─────────────────────────────────────────────────

    def run_menu(self) -> Optional[ActionResult]:
        """Show the menu, read one choice and run it. None on a bad choice."""
        self.prompter.show("What would you like to do?")
        self.prompter.show("1.Start a new game\n2.Accept a game\n3.Resume a game")
        try:
            choice = parse_menu_choice(self.prompter.ask(""))
        except InputError as e:
            self.prompter.error(str(e))
            return None
        return self.run_action(choice)

    def run_action(self, action: MenuAction) -> ActionResult:
        handlers = {
            MenuAction.NEW_GAME: (ClientEvent.CREATE_REQUESTED, self._new_game),
            MenuAction.ACCEPT_GAME: (ClientEvent.ACCEPT_REQUESTED, self._accept_game),
            MenuAction.RESUME_GAME: (ClientEvent.RESUME_REQUESTED, self._resume_game),
        }
        event, body = handlers[action]
        return self._guarded(action, event, body)

    def new_game(self) -> ActionResult:
        return self.run_action(MenuAction.NEW_GAME)

    def accept_game(self) -> ActionResult:
        return self.run_action(MenuAction.ACCEPT_GAME)

    def resume_game(self) -> ActionResult:
        return self.run_action(MenuAction.RESUME_GAME)

    def cancel_polling(self) -> bool:
        """Cancel a running poll. Returns False if nothing was polling."""
        if not self.poller.is_waiting:
            return False
        self.poller.cancel()
        return True

    def _guarded(
        self,
        action: MenuAction,
        event: ClientEvent,
        body: Callable[[], Optional[Outcome]],
    ) -> ActionResult:
        self.state_machine.reset()
        self.poller.reset()
        self._game_address = None
        self._outcome = None
        self.state_machine.transition(event)
        try:
            outcome = body()
        except HANDLED_ERRORS as e:
            self._report(e)
            self.state_machine.abort()
            return ActionResult(
                action=action,
                completed=self._outcome is not None,
                phase=self.state_machine.current_phase,
                game_address=self._game_address,
                outcome=self._outcome,
                error=e,
            )
        finally:
            self.activity.set_game(None)
        return ActionResult(
            action=action,
            completed=(
                outcome is not None
                or self.state_machine.current_phase is ClientPhase.CLOSED
            ),
            phase=self.state_machine.current_phase,
            game_address=self._game_address,
            outcome=outcome,
        )

    def _report(self, error: TicTacToeClientError) -> None:
        if isinstance(error, SubmitError):
            logger.error(error.format_error_log())
            self.activity.log_error(str(error))
        else:
            logger.warning(f"{type(error).__name__}: {error}")
        self.prompter.error(str(error))

    # ── Create ───────────────────────────────────────────────

    def _new_game(self) -> Optional[Outcome]:
        me = self.gateway.local_address
        opponent = self.prompter.ask("Enter the address of player 2: ").strip()
        mint = self.prompter.ask("Enter the mint address of token to stake: ").strip()
        if not (is_valid_address(opponent) and is_public_key(opponent)):
            raise InputError("Player address provided is not a valid address...")
        if not (is_valid_address(mint) and is_public_key(mint)):
            raise InputError("Mint address provided is not a valid address...")
        if opponent == me:
            raise InputError("Both the players in a game can not be same...")

        mint_info = self._mint_info(mint)
        self.prompter.show(
            f"Total supply of token: {format_amount(mint_info.supply, mint_info.decimals)}"
        )
        self.prompter.show(
            f"Smallest denomination: {format_amount(1, mint_info.decimals)}"
        )

        # Any non-zero balance can fund a create; the amount is checked below.
        account = self.selector.select(me, mint, 1, self._funding_chooser(mint_info))
        self._show_funding_account(account, mint_info)

        stake = to_base_units(
            self.prompter.ask("Enter the amount of tokens to stake: "), mint_info.decimals
        )
        if stake > account.balance:
            raise StakeExceedsBalanceError(stake, account.balance)

        address = self.gateway.submit_create(me, opponent, stake, account)
        self._enter_game(address)
        self.state_machine.transition(ClientEvent.GAME_CREATED)
        self.prompter.show(f"Created game account with address {address}")

        self.prompter.show("Waiting for opponent to accept the game...")
        self.poller.wait_for(address, lambda game: has_been_accepted(game.state))
        self.state_machine.transition(ClientEvent.GAME_ACCEPTED)
        return self._play(address)

    # ── Accept ───────────────────────────────────────────────

    def _accept_game(self) -> Optional[Outcome]:
        me = self.gateway.local_address
        candidates = find_accept_candidates(self.gateway, me)
        if not candidates:
            raise NoGamesFoundError("accept")

        if len(candidates) == 1:
            address, game = candidates[0]
            mint_info = self._mint_info(game.stake_mint)
            self.prompter.show("You have one game to accept")
            self._show_accept_summary(address, game, mint_info)
            if not parse_confirmation(self.prompter.ask("\nWill you accept this game?(y/n): ")):
                self.prompter.show("Exiting...")
                self.state_machine.abort()
                return None
        else:
            self.prompter.show("Games waiting for your acceptance")
            for position, (address, game) in enumerate(candidates, start=1):
                self.prompter.show(f"Game {position}")
                self._show_accept_summary(address, game, self._mint_info(game.stake_mint))
                self.prompter.show(SEPARATOR)
            index = parse_selection(
                self.prompter.ask("\nEnter game number to accept: "), len(candidates)
            )
            address, game = candidates[index]
            mint_info = self._mint_info(game.stake_mint)

        self._enter_game(address)
        account = self.selector.select(
            me, game.stake_mint, game.stake_amount, self._funding_chooser(mint_info)
        )
        self._show_funding_account(account, mint_info)

        try:
            self.gateway.submit_accept(address, account)
        except SubmitError as e:
            refreshed = self.gateway.fetch_record(address)
            if refreshed is None or not has_been_accepted(refreshed.state):
                raise
            self._report(e)
            logger.warning(f"Accept of {address} was rejected but the game is already active")

        self.state_machine.transition(ClientEvent.GAME_ACCEPTED)
        return self._play(address)

    def _show_accept_summary(self, address: str, game: Game, mint_info: MintInfo) -> None:
        self.prompter.show(f"Address: {address}")
        self.prompter.show(f"Opponent: {game.players[0]}")
        self.prompter.show(f"Stake token: {mint_info.address}")
        self.prompter.show(
            f"Stake amount: {format_amount(game.stake_amount, mint_info.decimals)}"
        )

    # ── Resume ───────────────────────────────────────────────

    def _resume_game(self) -> Optional[Outcome]:
        me = self.gateway.local_address
        candidates = find_resume_candidates(self.gateway, me)
        if not candidates:
            raise NoGamesFoundError("resume")

        if len(candidates) == 1:
            address, game = candidates[0]
            self.prompter.show("One ongoing game found")
            self._show_resume_summary(address, game, me)
        else:
            self.prompter.show("Your ongoing games")
            for position, (address, game) in enumerate(candidates, start=1):
                self.prompter.show(f"Game {position}")
                self._show_resume_summary(address, game, me)
                self.prompter.show(SEPARATOR)
            index = parse_selection(
                self.prompter.ask("\nWhich game would you like to resume?: "), len(candidates)
            )
            address, game = candidates[index]

        self._enter_game(address)
        self.state_machine.transition(ClientEvent.GAME_SELECTED)
        return self._play(address)

    def _show_resume_summary(self, address: str, game: Game, me: str) -> None:
        mint_info = self._mint_info(game.stake_mint)
        self.prompter.show(f"Address: {address}")
        self.prompter.show(f"Opponent: {opponent_of(game, me)}")
        self.prompter.show(
            f"Staked tokens: {format_amount(game.stake_amount, mint_info.decimals)} "
            f"of {game.stake_mint}"
        )
        self.prompter.show(f"Turns remaining: {game.board.empty_count()}")

    # ── Play ─────────────────────────────────────────────────

    def _play(self, address: str) -> Optional[Outcome]:
        me = self.gateway.local_address
        game = self._refresh(address)
        local_index = local_player_index(game, me)
        logger.info(f"Playing {address} as player {local_index}")

        while True:
            self.prompter.show_board(game.board)
            action = next_play_action(game.state, local_index)

            if action is PlayAction.FINISH:
                self.state_machine.transition(ClientEvent.GAME_FINISHED)
                return self._finish(address, game, local_index)

            try:
                if action is PlayAction.MOVE:
                    row, column = self._read_move(game.board)
                    try:
                        self.gateway.submit_move(address, row, column)
                    except SubmitError as e:
                        # The turn may have moved on; decide again on a fresh snapshot.
                        self._report(e)
                    game = self._refresh(address)
                else:
                    self.prompter.show("Waiting for other player's move...")
                    game = self.poller.wait_for(
                        address, lambda snapshot: is_wait_over(snapshot.state, local_index)
                    )
            except RecordNotFoundError:
                # Only player 0 closes, so the record can only vanish under player 1
                # once the game is over.
                if should_close(local_index):
                    raise
                self._closed_by_opponent(address)
                return None

    def _closed_by_opponent(self, address: str) -> None:
        logger.info(f"Game {address} was closed by the opponent before its result was seen")
        self.activity.log_observed("Closed")
        self.state_machine.transition(ClientEvent.GAME_FINISHED)
        self.state_machine.transition(ClientEvent.GAME_CLOSED)
        self.prompter.show("The game has ended and your opponent closed the game account")

    def _read_move(self, board) -> Tuple[int, int]:
        while True:
            text = self.prompter.ask(
                "Enter row & column to place your mark(space separated): "
            )
            try:
                return parse_tile_input(text, board)
            except InputError as e:
                self.prompter.error(str(e))

    # ── Terminal ─────────────────────────────────────────────

    def _finish(self, address: str, game: Game, local_index: int) -> Outcome:
        outcome = outcome_for(game.state, self.gateway.local_address)
        self._outcome = outcome
        self.prompter.show(OUTCOME_MESSAGES[outcome])
        if should_close(local_index):
            self._close(address)
            self.state_machine.transition(ClientEvent.GAME_CLOSED)
        return outcome

    def _close(self, address: str) -> None:
        try:
            self.gateway.submit_close(address)
        except SubmitError as e:
            if self.gateway.fetch_record(address) is not None:
                raise
            self._report(e)
            logger.info(f"Game {address} is already closed")

    # ── Helpers ──────────────────────────────────────────────

    def _enter_game(self, address: str) -> None:
        self._game_address = address
        self.activity.set_game(address)

    def _refresh(self, address: str) -> Game:
        game = self.gateway.fetch_record(address)
        if game is None:
            raise RecordNotFoundError(address)
        return game

    def _mint_info(self, mint: str) -> MintInfo:
        info = self.gateway.fetch_mint_info(mint)
        if info is None:
            raise MintNotFoundError(mint)
        return info

    def _funding_chooser(
        self, mint_info: MintInfo
    ) -> Callable[[Sequence[FundingAccount]], str]:
        def choose(accounts: Sequence[FundingAccount]) -> str:
            for position, account in enumerate(accounts, start=1):
                balance = format_amount(account.balance, mint_info.decimals)
                self.prompter.show(f"{position}. Account: {account.address}, Balance: {balance}")
            return self.prompter.ask("Choose the token account for staking: ")
        return choose

    def _show_funding_account(self, account: FundingAccount, mint_info: MintInfo) -> None:
        self.prompter.show(f"Token account address: {account.address}")
        self.prompter.show(
            f"Token balance: {format_amount(account.balance, mint_info.decimals)}"
        )
