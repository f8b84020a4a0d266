# Area: Lifecycle
"""
ttt_client._lifecycle — Client-side game lifecycle
==================================================

State machine, pure decision functions, funding account selection,
discovery, polling and the orchestrator that ties them together.
"""

from .decisions import (
    OUTCOME_MESSAGES,
    has_been_accepted,
    is_accept_candidate,
    is_resume_candidate,
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
from .discovery import discover_games, find_accept_candidates, find_resume_candidates
from .enums import ClientEvent, ClientPhase, MenuAction, Outcome, PlayAction
from .orchestrator import ActionResult, GameOrchestrator
from .poller import StatePoller
from .selector import AccountSelector, choose_funding_account, qualifying_accounts
from .state_machine import ClientStateMachine, TRANSITIONS

__all__ = [
    "AccountSelector",
    "ActionResult",
    "ClientEvent",
    "ClientPhase",
    "ClientStateMachine",
    "GameOrchestrator",
    "MenuAction",
    "OUTCOME_MESSAGES",
    "Outcome",
    "PlayAction",
    "StatePoller",
    "TRANSITIONS",
    "choose_funding_account",
    "discover_games",
    "find_accept_candidates",
    "find_resume_candidates",
    "has_been_accepted",
    "is_accept_candidate",
    "is_resume_candidate",
    "is_wait_over",
    "local_player_index",
    "next_play_action",
    "opponent_of",
    "outcome_for",
    "parse_confirmation",
    "parse_menu_choice",
    "parse_selection",
    "parse_tile_input",
    "qualifying_accounts",
    "should_close",
]
