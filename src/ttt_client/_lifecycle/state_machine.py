# Area: Lifecycle
"""
ttt_client._lifecycle.state_machine — Client lifecycle state machine
====================================================================

Tracks which phase of create → accept → play → close the current
action is in, and rejects out-of-order transitions.
"""

import logging
from typing import Optional

from .enums import ClientEvent, ClientPhase

logger = logging.getLogger("ttt_client.lifecycle.state_machine")

# Valid state transitions: {current_phase: {event: next_phase}}
TRANSITIONS = {
    ClientPhase.IDLE: {
        ClientEvent.CREATE_REQUESTED: ClientPhase.CREATING,
        ClientEvent.ACCEPT_REQUESTED: ClientPhase.ACCEPTING,
        ClientEvent.RESUME_REQUESTED: ClientPhase.RESUMING,
    },
    ClientPhase.CREATING: {
        ClientEvent.GAME_CREATED: ClientPhase.AWAITING_ACCEPT,
    },
    ClientPhase.AWAITING_ACCEPT: {
        ClientEvent.GAME_ACCEPTED: ClientPhase.PLAYING,
    },
    ClientPhase.ACCEPTING: {
        ClientEvent.GAME_ACCEPTED: ClientPhase.PLAYING,
    },
    ClientPhase.RESUMING: {
        ClientEvent.GAME_SELECTED: ClientPhase.PLAYING,
    },
    ClientPhase.PLAYING: {
        ClientEvent.GAME_FINISHED: ClientPhase.TERMINAL,
    },
    ClientPhase.TERMINAL: {
        ClientEvent.GAME_CLOSED: ClientPhase.CLOSED,
    },
    ClientPhase.CLOSED: {},
    ClientPhase.ABORTED: {},
}

FINAL_PHASES = {ClientPhase.CLOSED, ClientPhase.ABORTED}


class ClientStateMachine:
    """
    State machine for one client action.

    Attributes:
        current_phase: The current phase
        aborted_from: Phase the action was in when it was aborted
    """

    def __init__(self):
        self.current_phase = ClientPhase.IDLE
        self.aborted_from: Optional[ClientPhase] = None

    def can_transition(self, event: ClientEvent) -> bool:
        return event in TRANSITIONS.get(self.current_phase, {})

    def transition(self, event: ClientEvent) -> ClientPhase:
        """
        Execute a transition.

        Raises:
            ValueError: If ``event`` is not valid in the current phase
        """
        if not self.can_transition(event):
            raise ValueError(
                f"Invalid transition: {event.value} from {self.current_phase.value}"
            )
        next_phase = TRANSITIONS[self.current_phase][event]
        logger.info(f"Phase: {self.current_phase.value} → {next_phase.value}")
        self.current_phase = next_phase
        return next_phase

    def abort(self) -> None:
        """Move to ABORTED from any non-final phase."""
        if self.current_phase in FINAL_PHASES:
            return
        logger.info(f"Phase: {self.current_phase.value} → ABORTED")
        self.aborted_from = self.current_phase
        self.current_phase = ClientPhase.ABORTED

    def reset(self) -> None:
        self.current_phase = ClientPhase.IDLE
        self.aborted_from = None
