"""
Bracket construction entry point.
"""
import logging
from typing import List

from .errors import BracketConfigurationError
from .models import SINGLE_ELIMINATION, DOUBLE_ELIMINATION, TeamStanding, TournamentBracket, check_bracket_type
from .elimination import build_single_elimination_bracket
from .double_elimination import build_double_elimination_bracket

logger = logging.getLogger(__name__)


def build_bracket(tournament_id: str, standings: List[TeamStanding],
                  bracket_type: str = SINGLE_ELIMINATION) -> TournamentBracket:
    """
    Build the full elimination bracket for ranked ``standings``.

    Raises BracketConfigurationError for empty standings, a single team or
    an unknown bracket type, and UnsupportedSeedingError past 8 teams.
    """
    if not standings:
        raise BracketConfigurationError('No team standings provided for bracket generation')
    check_bracket_type(bracket_type)
    if len(standings) < 2:
        raise BracketConfigurationError('At least 2 teams are required to build a bracket')

    if bracket_type == DOUBLE_ELIMINATION:
        bracket = build_double_elimination_bracket(tournament_id, standings)
    else:
        bracket = build_single_elimination_bracket(tournament_id, standings)

    logger.info("Generated %s bracket for tournament %s (%d teams, %d games)",
                bracket_type, tournament_id, len(standings), bracket.total_games)
    return bracket
