# Area: Shared
"""
ttt_client._shared.activity_logger — Ledger activity lines
==========================================================

One colored terminal line per ledger interaction the player cares
about: instructions sent, state changes observed while polling, and
errors. Every line is mirrored to the package logger for the file log.
"""

from __future__ import annotations
import logging
import sys
from datetime import datetime
from typing import Optional

GREEN = "\033[32m"         # Instructions
ORANGE = "\033[38;5;208m"  # Observed state
RED = "\033[31m"           # Errors
RESET = "\033[0m"

EXPLORER_URL = "https://explorer.solana.com/tx/{signature}?cluster={cluster}"

INSTRUCTION_DISPLAY_NAMES = {
    "initialize": "CREATE-GAME",
    "accept": "ACCEPT-GAME",
    "play": "PLACE-MARK",
    "close": "CLOSE-GAME",
}

logger = logging.getLogger("ttt_client.activity")


class LedgerActivityLogger:
    """Logger for instructions sent and states observed."""

    def __init__(self, cluster: str = "devnet"):
        self.cluster = cluster
        self._current_game: str = "-"

    def set_game(self, game_address: Optional[str]) -> None:
        self._current_game = game_address or "-"

    def explorer_url(self, signature: str) -> str:
        return EXPLORER_URL.format(signature=signature, cluster=self.cluster)

    def _now(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

    def log_sent(self, instruction: str, signature: str) -> None:
        display = INSTRUCTION_DISPLAY_NAMES.get(instruction, instruction)
        line = (
            f"{GREEN}{self._now()} | GAME: {self._current_game} | SENT     | "
            f"{display:12} | {self.explorer_url(signature)}{RESET}"
        )
        print(line, file=sys.stdout)
        logger.info(
            "Sent %s: %s", instruction, signature,
            extra={"instruction": instruction, "signature": signature,
                   "game_address": self._current_game},
        )

    def log_observed(self, status: str) -> None:
        line = (
            f"{ORANGE}{self._now()} | GAME: {self._current_game} | OBSERVED | "
            f"{status}{RESET}"
        )
        print(line, file=sys.stdout)
        logger.info("Observed %s", status, extra={"game_address": self._current_game})

    def log_error(self, description: str) -> None:
        line = f"{RED}[ERROR] {self._now()} | {description}{RESET}"
        print(line, file=sys.stderr)
        logger.error(description, extra={"game_address": self._current_game})


# Global singleton instance
_activity_logger: Optional[LedgerActivityLogger] = None


def get_activity_logger() -> LedgerActivityLogger:
    """Get or create the global activity logger instance."""
    global _activity_logger
    if _activity_logger is None:
        _activity_logger = LedgerActivityLogger()
    return _activity_logger


def configure_activity_logger(cluster: str) -> LedgerActivityLogger:
    """Point explorer links at ``cluster`` and return the shared instance."""
    activity = get_activity_logger()
    activity.cluster = cluster
    return activity
