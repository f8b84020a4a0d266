# Area: Lifecycle
"""
ttt_client._lifecycle.discovery — Game discovery
================================================

Linear scan over every game record owned by the program, filtered on
the client. There is no server-side index by player.
"""

import logging
from typing import Callable, List, Tuple

from .._game.layout import GAME_DISCRIMINATOR
from .._game.models import Game
from .decisions import is_accept_candidate, is_resume_candidate

logger = logging.getLogger("ttt_client.lifecycle.discovery")


def discover_games(
    gateway,
    predicate: Callable[[Game], bool],
) -> List[Tuple[str, Game]]:
    records = gateway.fetch_records_by_discriminator(GAME_DISCRIMINATOR)
    matches = [(address, game) for address, game in records if predicate(game)]
    logger.info(f"Discovery: {len(matches)} of {len(records)} game records match")
    return matches


def find_accept_candidates(gateway, address: str) -> List[Tuple[str, Game]]:
    """Unaccepted games where ``address`` is the invited player."""
    return discover_games(gateway, lambda game: is_accept_candidate(game, address))


def find_resume_candidates(gateway, address: str) -> List[Tuple[str, Game]]:
    """Games in progress where ``address`` is either player."""
    return discover_games(gateway, lambda game: is_resume_candidate(game, address))
