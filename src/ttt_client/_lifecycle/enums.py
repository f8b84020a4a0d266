# Area: Lifecycle
"""
ttt_client._lifecycle.enums — Lifecycle enums
=============================================

Phases and events of the client-side game lifecycle, plus the small
vocabularies the decision functions return.
"""

from enum import Enum


class ClientPhase(Enum):
    """
    Phases of one client action.

    Phase transitions:
    IDLE -> CREATING (on CREATE_REQUESTED)
    IDLE -> ACCEPTING (on ACCEPT_REQUESTED)
    IDLE -> RESUMING (on RESUME_REQUESTED)
    CREATING -> AWAITING_ACCEPT (on GAME_CREATED)
    AWAITING_ACCEPT -> PLAYING (on GAME_ACCEPTED)
    ACCEPTING -> PLAYING (on GAME_ACCEPTED)
    RESUMING -> PLAYING (on GAME_SELECTED)
    PLAYING -> TERMINAL (on GAME_FINISHED)
    TERMINAL -> CLOSED (on GAME_CLOSED)
    Any non-final phase -> ABORTED (on abort)
    """
    IDLE = "IDLE"
    CREATING = "CREATING"
    AWAITING_ACCEPT = "AWAITING_ACCEPT"
    ACCEPTING = "ACCEPTING"
    RESUMING = "RESUMING"
    PLAYING = "PLAYING"
    TERMINAL = "TERMINAL"
    CLOSED = "CLOSED"
    ABORTED = "ABORTED"


class ClientEvent(Enum):
    """
    Events that move the lifecycle forward.

    - CREATE_REQUESTED / ACCEPT_REQUESTED / RESUME_REQUESTED: menu choice
    - GAME_CREATED: create instruction confirmed
    - GAME_ACCEPTED: accept confirmed, or observed while waiting
    - GAME_SELECTED: an ongoing game was picked for resuming
    - GAME_FINISHED: a terminal status was observed
    - GAME_CLOSED: close instruction confirmed (or record already gone)
    """
    CREATE_REQUESTED = "CREATE_REQUESTED"
    ACCEPT_REQUESTED = "ACCEPT_REQUESTED"
    RESUME_REQUESTED = "RESUME_REQUESTED"
    GAME_CREATED = "GAME_CREATED"
    GAME_ACCEPTED = "GAME_ACCEPTED"
    GAME_SELECTED = "GAME_SELECTED"
    GAME_FINISHED = "GAME_FINISHED"
    GAME_CLOSED = "GAME_CLOSED"


class MenuAction(Enum):
    NEW_GAME = "1"
    ACCEPT_GAME = "2"
    RESUME_GAME = "3"


class PlayAction(Enum):
    """What the play loop does with the latest snapshot."""
    MOVE = "MOVE"        # local player's turn: read a tile and submit
    WAIT = "WAIT"        # opponent's turn: poll until it changes
    FINISH = "FINISH"    # terminal status: report and maybe close


class Outcome(Enum):
    WON = "WON"
    LOST = "LOST"
    DRAW = "DRAW"
