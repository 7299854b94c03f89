"""
Round robin standings.

Folds completed game results into one TeamStanding per team and ranks them:
wins -> run differential -> runs scored -> team name.
"""
import logging
from typing import List, Dict, Iterable, Optional

from .errors import BracketConfigurationError
from .models import Team, GameResult, TeamStanding

logger = logging.getLogger(__name__)


def _as_team(team) -> Team:
    if isinstance(team, Team):
        return team
    return Team.from_dict(team)


def _as_game(game) -> GameResult:
    if isinstance(game, GameResult):
        return game
    return GameResult.from_dict(game)


def determine_game_winner(game: GameResult) -> Optional[str]:
    """Return the winning team id, or None for a tied game."""
    if game.home_score > game.away_score:
        return game.home_team_id
    if game.away_score > game.home_score:
        return game.away_team_id
    return None


def standings_sort_key(standing: TeamStanding):
    name = str(standing.team_name)
    return (-standing.wins, -standing.run_differential, -standing.runs_scored, name.casefold(), name)


def compute_standings(teams: Iterable, games: Iterable) -> List[TeamStanding]:
    """
    Compute ranked standings from round robin results.

    ``teams`` holds Team objects or ``{id, name}`` dicts, ``games`` holds
    GameResult objects or dicts. Only completed games count. A tied game
    accrues runs and a game played but neither a win nor a loss.

    Raises BracketConfigurationError when a game references a team that is
    not in ``teams``.
    """
    standings: Dict[str, TeamStanding] = {}
    for team in teams:
        team = _as_team(team)
        if team.team_id in standings:
            raise BracketConfigurationError(f"Duplicate team id: {team.team_id}")
        standings[team.team_id] = TeamStanding(team.team_id, team.name)

    counted = 0
    for game in games:
        game = _as_game(game)
        if not game.is_completed:
            continue

        for team_id in (game.home_team_id, game.away_team_id):
            if team_id not in standings:
                raise BracketConfigurationError(
                    f"Game references unknown team {team_id!r}"
                )

        home = standings[game.home_team_id]
        away = standings[game.away_team_id]

        home.games_played += 1
        away.games_played += 1

        home.runs_scored += game.home_score
        home.runs_allowed += game.away_score
        away.runs_scored += game.away_score
        away.runs_allowed += game.home_score

        winner = determine_game_winner(game)
        if winner == game.home_team_id:
            home.wins += 1
            away.losses += 1
        elif winner == game.away_team_id:
            away.wins += 1
            home.losses += 1
        else:
            logger.debug("Tied game %s vs %s counted without a decision",
                         game.home_team_id, game.away_team_id)
        counted += 1

    # sorted() is stable, so fully tied teams keep input order
    ranked = sorted(standings.values(), key=standings_sort_key)
    for index, standing in enumerate(ranked):
        standing.seed = index + 1

    logger.debug("Computed standings for %d teams from %d completed games", len(ranked), counted)
    return ranked
