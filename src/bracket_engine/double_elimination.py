"""
Double elimination bracket generation.

In double elimination:
- Teams must lose twice to be eliminated
- Winners Bracket: Teams that haven't lost yet, seeded like single elimination
- Losers Bracket: Teams that have lost once
- Championship: Winners bracket champion vs Losers bracket champion

Game numbers run through the winners bracket first, then the losers
bracket, then the championship game.
"""
import logging
import math
from typing import List

from .models import (
    DOUBLE_ELIMINATION, LOSERS_SIDE, CHAMPIONSHIP_SIDE,
    BracketMatch, TeamStanding, TournamentBracket,
)
from .seeding import calculate_bracket_rounds, calculate_bracket_games, generate_seeding
from .elimination import create_first_round_matches, create_placeholder_rounds, winners_game_number

logger = logging.getLogger(__name__)


def get_losers_round_name(round_num: int, total_losers_rounds: int) -> str:
    """Get the name for a losers bracket round (1-indexed)."""
    rounds_from_end = total_losers_rounds - round_num
    if rounds_from_end == 0:
        return "Losers Final"
    elif rounds_from_end == 1:
        return "Losers Semifinal"
    else:
        return f"Losers Round {round_num}"


def get_winners_round_name(teams_in_round: int) -> str:
    """Get the name for a winners bracket round."""
    if teams_in_round == 2:
        return "Winners Final"
    elif teams_in_round == 4:
        return "Winners Semifinal"
    elif teams_in_round == 8:
        return "Winners Quarterfinal"
    else:
        return f"Winners Round of {teams_in_round}"


def calculate_losers_bracket_rounds(winners_rounds: int) -> int:
    """
    Calculate number of rounds in losers bracket.

    Pattern: minor, major, minor, major, ... ending with a major round.
    Minor rounds pair losers bracket survivors, major rounds bring in the
    losers of the next winners round.
    """
    if winners_rounds < 2:
        return 0
    return 2 * (winners_rounds - 1)


def losers_games_in_round(winners_rounds: int, losers_round: int) -> int:
    """Matches in a losers round: rounds 1 and 2 hold 2^(R-2), rounds 3 and 4 hold 2^(R-3), ..."""
    return 2 ** (winners_rounds - 1 - math.ceil(losers_round / 2))


def losers_game_number(winners_rounds: int, losers_round: int, index: int) -> int:
    """Game number of the ``index``-th (0-based) match of a losers round."""
    number = 2 ** winners_rounds - 1
    for earlier in range(1, losers_round):
        number += losers_games_in_round(winners_rounds, earlier)
    return number + index + 1


def championship_game_number(winners_rounds: int) -> int:
    """Last game number: (2^R - 1) winners games plus (2^R - 2) losers games, plus one."""
    return 2 ** (winners_rounds + 1) - 2


def _loser_drop_game_number(winners_rounds: int, round: int, index: int) -> int:
    """Losers bracket game the loser of a winners match drops into."""
    if winners_rounds == 1:
        return championship_game_number(winners_rounds)
    if round == 1:
        return losers_game_number(winners_rounds, 1, index // 2)
    return losers_game_number(winners_rounds, 2 * (round - 1), index)


def _create_winners_bracket(standings: List[TeamStanding], winners_rounds: int) -> List[BracketMatch]:
    seeding = generate_seeding(standings, DOUBLE_ELIMINATION)
    matches = create_first_round_matches(seeding, standings)
    matches.extend(create_placeholder_rounds(winners_rounds))

    for match in matches:
        round_start = winners_game_number(winners_rounds, match.round, 0)
        index = match.game_number - round_start
        if match.round == winners_rounds:
            match.next_game_number = championship_game_number(winners_rounds)
        if not match.is_bye:
            match.loser_next_game_number = _loser_drop_game_number(winners_rounds, match.round, index)
    return matches


def _create_losers_bracket(winners_rounds: int) -> List[BracketMatch]:
    total_losers_rounds = calculate_losers_bracket_rounds(winners_rounds)
    matches = []
    for losers_round in range(1, total_losers_rounds + 1):
        for index in range(losers_games_in_round(winners_rounds, losers_round)):
            if losers_round == total_losers_rounds:
                next_game = championship_game_number(winners_rounds)
            elif losers_round % 2 == 1:
                next_game = losers_game_number(winners_rounds, losers_round + 1, index)
            else:
                next_game = losers_game_number(winners_rounds, losers_round + 1, index // 2)
            matches.append(BracketMatch(
                losers_game_number(winners_rounds, losers_round, index),
                losers_round,
                next_game_number=next_game,
                bracket_side=LOSERS_SIDE,
            ))
    return matches


def build_double_elimination_bracket(tournament_id: str, standings: List[TeamStanding]) -> TournamentBracket:
    """
    Build a double elimination bracket from ranked standings.

    The reported round count is the winners bracket round count plus one
    for the championship round.
    """
    num_teams = len(standings)
    winners_rounds = calculate_bracket_rounds(num_teams)

    matches = _create_winners_bracket(standings, winners_rounds)
    matches.extend(_create_losers_bracket(winners_rounds))
    matches.append(BracketMatch(
        championship_game_number(winners_rounds),
        winners_rounds + 1,
        bracket_side=CHAMPIONSHIP_SIDE,
    ))

    logger.debug("Built double elimination bracket for %s: %d teams, %d matches",
                 tournament_id, num_teams, len(matches))
    return TournamentBracket(
        tournament_id,
        DOUBLE_ELIMINATION,
        matches,
        winners_rounds + 1,
        calculate_bracket_games(num_teams, DOUBLE_ELIMINATION),
    )
