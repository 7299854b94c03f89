"""
Single elimination bracket generation.
"""
import logging
from typing import List, Dict

from .errors import BracketConfigurationError
from .models import (
    BYE, SINGLE_ELIMINATION, WINNERS_SIDE,
    BracketMatch, TeamStanding, TournamentBracket,
)
from .seeding import calculate_bracket_rounds, calculate_bracket_games, generate_seeding

logger = logging.getLogger(__name__)


def get_round_name(teams_in_round: int) -> str:
    """Get the name of a round based on number of teams."""
    if teams_in_round == 2:
        return "Final"
    elif teams_in_round == 4:
        return "Semifinal"
    elif teams_in_round == 8:
        return "Quarterfinal"
    else:
        return f"Round of {teams_in_round}"


def games_in_round(total_rounds: int, round: int) -> int:
    """Number of matches in a round of a full bracket."""
    return 2 ** (total_rounds - round)


def round_offset(total_rounds: int, round: int) -> int:
    """Number of games numbered before the first game of ``round``."""
    return 2 ** total_rounds - 2 ** (total_rounds - round + 1)


def winners_game_number(total_rounds: int, round: int, index: int) -> int:
    """Game number of the ``index``-th (0-based) match of ``round``."""
    return round_offset(total_rounds, round) + index + 1


def winners_next_game_number(total_rounds: int, round: int, index: int):
    """Game the winner of a match advances into, None for the final."""
    if round >= total_rounds:
        return None
    return winners_game_number(total_rounds, round + 1, index // 2)


def create_first_round_matches(seeding: List[str], standings: List[TeamStanding]) -> List[BracketMatch]:
    """
    Pair adjacent seeding positions into round 1 matches.

    A pair with one BYE becomes a bye match: the team is placed at home and
    is already recorded as the winner.
    """
    seeds: Dict[str, int] = {s.team_id: s.seed for s in standings}
    total_rounds = calculate_bracket_rounds(len(seeding))
    matches = []

    for index in range(len(seeding) // 2):
        team1 = seeding[2 * index]
        team2 = seeding[2 * index + 1]
        game_number = winners_game_number(total_rounds, 1, index)
        next_game = winners_next_game_number(total_rounds, 1, index)

        if team1 == BYE and team2 == BYE:
            raise BracketConfigurationError(f"Seeding positions {2 * index} and {2 * index + 1} are both byes")
        elif team1 == BYE or team2 == BYE:
            team = team2 if team1 == BYE else team1
            matches.append(BracketMatch(
                game_number, 1,
                home_team_id=team,
                home_team_seed=seeds.get(team),
                winner_team_id=team,
                is_bye=True,
                next_game_number=next_game,
            ))
        else:
            matches.append(BracketMatch(
                game_number, 1,
                home_team_id=team1,
                away_team_id=team2,
                home_team_seed=seeds.get(team1),
                away_team_seed=seeds.get(team2),
                next_game_number=next_game,
            ))

    return matches


def create_placeholder_rounds(total_rounds: int, side: str = WINNERS_SIDE) -> List[BracketMatch]:
    """Empty matches for rounds 2..total_rounds, filled in as winners are reported."""
    matches = []
    for round in range(2, total_rounds + 1):
        for index in range(games_in_round(total_rounds, round)):
            matches.append(BracketMatch(
                winners_game_number(total_rounds, round, index),
                round,
                next_game_number=winners_next_game_number(total_rounds, round, index),
                bracket_side=side,
            ))
    return matches


def build_single_elimination_bracket(tournament_id: str, standings: List[TeamStanding]) -> TournamentBracket:
    """Build a single elimination bracket from ranked standings."""
    num_teams = len(standings)
    total_rounds = calculate_bracket_rounds(num_teams)
    seeding = generate_seeding(standings, SINGLE_ELIMINATION)

    matches = create_first_round_matches(seeding, standings)
    matches.extend(create_placeholder_rounds(total_rounds))

    logger.debug("Built single elimination bracket for %s: %d teams, %d rounds, %d matches",
                 tournament_id, num_teams, total_rounds, len(matches))
    return TournamentBracket(
        tournament_id,
        SINGLE_ELIMINATION,
        matches,
        total_rounds,
        calculate_bracket_games(num_teams, SINGLE_ELIMINATION),
    )
