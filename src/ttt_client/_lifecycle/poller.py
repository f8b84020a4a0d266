# Area: Lifecycle
"""
ttt_client._lifecycle.poller — Cancellable state polling
========================================================

Re-fetches a game record on a fixed interval until a predicate holds.
The sleep is an ``Event.wait`` so another thread (the SIGINT handler)
can cancel it. No timeout and no backoff: the wait ends only on an
observed change, a vanished record, or cancellation.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .._game.models import Game, describe_status
from .._shared.activity_logger import LedgerActivityLogger, get_activity_logger
from ..errors import PollCancelledError, RecordNotFoundError

logger = logging.getLogger("ttt_client.lifecycle.poller")

DEFAULT_POLL_INTERVAL = 2.0


class StatePoller:
    """
    Polls one game record until ``predicate(game)`` is true.

    Attributes:
        interval_seconds: Delay before every fetch
        is_waiting: True while ``wait_for`` is running
    """

    def __init__(
        self,
        gateway,
        interval_seconds: float = DEFAULT_POLL_INTERVAL,
        activity: Optional[LedgerActivityLogger] = None,
    ):
        self._gateway = gateway
        self.interval_seconds = interval_seconds
        self._activity = activity or get_activity_logger()
        self._cancelled = threading.Event()
        self.is_waiting = False

    def wait_for(self, address: str, predicate: Callable[[Game], bool]) -> Game:
        """
        Block until a fetched snapshot of ``address`` satisfies ``predicate``.

        Returns:
            The first snapshot that satisfied the predicate

        Raises:
            PollCancelledError: If ``cancel()`` was called
            RecordNotFoundError: If the record disappeared
        """
        self._cancelled.clear()
        self.is_waiting = True
        polls = 0
        try:
            while True:
                if self._cancelled.wait(self.interval_seconds):
                    logger.info(f"Polling {address} cancelled after {polls} fetches")
                    raise PollCancelledError(f"Stopped waiting on game {address}")
                game = self._gateway.fetch_record(address)
                polls += 1
                if game is None:
                    raise RecordNotFoundError(address)
                if predicate(game):
                    logger.debug(f"Polling {address} done after {polls} fetches")
                    self._activity.log_observed(describe_status(game.state))
                    return game
        finally:
            self.is_waiting = False

    def cancel(self) -> None:
        self._cancelled.set()

    def reset(self) -> None:
        self._cancelled.clear()
