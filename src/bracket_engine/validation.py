"""
Bracket structure validation.

validate_bracket runs four independent checks (structure, progression,
team consistency, completeness) and concatenates their findings. Errors make
a bracket invalid; warnings are informational only.
"""
import logging
from collections import defaultdict
from typing import List, Dict, Tuple

from .models import (
    BRACKET_TYPES, SINGLE_ELIMINATION, DOUBLE_ELIMINATION,
    WINNERS_SIDE, LOSERS_SIDE, CHAMPIONSHIP_SIDE,
    BracketMatch, TeamStanding, TournamentBracket, ValidationResult,
)
from .seeding import calculate_bracket_rounds, calculate_bracket_games, calculate_byes
from .double_elimination import calculate_losers_bracket_rounds, losers_games_in_round

logger = logging.getLogger(__name__)


def _group_by_round(matches: List[BracketMatch]) -> Dict[Tuple[str, int], List[BracketMatch]]:
    grouped = defaultdict(list)
    for match in matches:
        grouped[(match.bracket_side, match.round)].append(match)
    return grouped


def _winners_rounds(bracket: TournamentBracket) -> int:
    if bracket.bracket_type == DOUBLE_ELIMINATION:
        return bracket.total_rounds - 1
    return bracket.total_rounds


def validate_structure(bracket: TournamentBracket) -> ValidationResult:
    """Game numbering, bye shape and advancement references."""
    result = ValidationResult()
    matches = bracket.matches

    if not bracket.tournament_id:
        result.errors.append('Tournament ID is required')
    if bracket.bracket_type not in BRACKET_TYPES:
        result.errors.append(f"Invalid bracket type: {bracket.bracket_type}")
    if not matches:
        result.errors.append('Bracket must contain at least one match')
        return result

    game_numbers = [m.game_number for m in matches]
    known = set(game_numbers)
    if len(known) != len(game_numbers):
        result.errors.append('Duplicate game numbers found in bracket')

    highest = max(game_numbers)
    for number in range(1, highest + 1):
        if number not in known:
            result.errors.append(f"Missing game number: {number}")

    for match in matches:
        if match.game_number <= 0:
            result.errors.append(f"Invalid game number: {match.game_number}")
        if match.round <= 0:
            result.errors.append(f"Invalid round number {match.round} in game {match.game_number}")

        if match.is_bye:
            if match.away_team_id:
                result.errors.append(f"Bye match {match.game_number} should not have an away team")
            if not match.winner_team_id:
                result.errors.append(f"Bye match {match.game_number} should have a winner")
        if match.winner_team_id and match.winner_team_id not in match.teams:
            result.errors.append(
                f"Winner {match.winner_team_id} of game {match.game_number} did not play in it"
            )

        for label, target in (('Next', match.next_game_number), ('Loser next', match.loser_next_game_number)):
            if target is None:
                continue
            if target not in known:
                result.errors.append(f"{label} game number {target} of game {match.game_number} does not exist")
            elif target <= match.game_number:
                result.errors.append(
                    f"{label} game number {target} of game {match.game_number} does not advance forward"
                )

    finals = [m for m in matches if m.next_game_number is None]
    if len(finals) != 1:
        result.errors.append(f"Expected exactly one final game, found {len(finals)}")

    return result


def _expected_round_sizes(bracket: TournamentBracket) -> Dict[Tuple[str, int], int]:
    winners_rounds = _winners_rounds(bracket)
    expected = {}
    for round in range(1, winners_rounds + 1):
        expected[(WINNERS_SIDE, round)] = 2 ** (winners_rounds - round)
    if bracket.bracket_type == DOUBLE_ELIMINATION:
        for round in range(1, calculate_losers_bracket_rounds(winners_rounds) + 1):
            expected[(LOSERS_SIDE, round)] = losers_games_in_round(winners_rounds, round)
        expected[(CHAMPIONSHIP_SIDE, bracket.total_rounds)] = 1
    return expected


def validate_progression(bracket: TournamentBracket) -> ValidationResult:
    """Round contiguity, round sizes and winner advancement."""
    result = ValidationResult()
    by_round = _group_by_round(bracket.matches)

    rounds_by_side = defaultdict(list)
    for side, round in by_round:
        rounds_by_side[side].append(round)
    for side in (WINNERS_SIDE, LOSERS_SIDE):
        rounds = sorted(rounds_by_side.get(side, []))
        for previous, current in zip(rounds, rounds[1:]):
            if current != previous + 1:
                result.errors.append(
                    f"Missing {side} round {previous + 1} between rounds {previous} and {current}"
                )

    if bracket.bracket_type in BRACKET_TYPES and bracket.total_rounds > 0:
        expected = _expected_round_sizes(bracket)
        for key in sorted(set(expected) | set(by_round)):
            side, round = key
            actual = len(by_round.get(key, []))
            wanted = expected.get(key, 0)
            if actual != wanted:
                result.errors.append(f"Round {round} ({side}) has {actual} games, expected {wanted}")

    by_number = {m.game_number: m for m in bracket.matches}
    for match in bracket.matches:
        if match.winner_team_id and match.next_game_number:
            next_match = by_number.get(match.next_game_number)
            if next_match and match.winner_team_id not in next_match.teams:
                result.warnings.append(
                    f"Winner of game {match.game_number} not yet assigned to game {match.next_game_number}"
                )
        loser = match.loser_team_id
        if loser and match.loser_next_game_number:
            drop_match = by_number.get(match.loser_next_game_number)
            if drop_match and loser not in drop_match.teams:
                result.warnings.append(
                    f"Loser of game {match.game_number} not yet assigned to game {match.loser_next_game_number}"
                )

    return result


def validate_team_consistency(bracket: TournamentBracket, standings: List[TeamStanding]) -> ValidationResult:
    """Known teams only, nobody plays itself, nobody twice in one round."""
    result = ValidationResult()
    team_ids = {s.team_id for s in standings}

    seen = set()
    for match in bracket.matches:
        for team_id in match.teams + ([match.winner_team_id] if match.winner_team_id else []):
            if team_id not in team_ids and team_id not in seen:
                result.errors.append(f"Unknown team ID found in bracket: {team_id}")
            seen.add(team_id)

        if match.home_team_id and match.home_team_id == match.away_team_id:
            result.errors.append(
                f"Team {match.home_team_id} cannot play against itself in game {match.game_number}"
            )

    for (side, round), round_matches in sorted(_group_by_round(bracket.matches).items()):
        in_round = set()
        for match in round_matches:
            for team_id in match.teams:
                if team_id in in_round:
                    result.errors.append(f"Team {team_id} appears multiple times in {side} round {round}")
                in_round.add(team_id)

    return result


def validate_completeness(bracket: TournamentBracket, standings: List[TeamStanding]) -> ValidationResult:
    """Totals match the closed-form counts and every team starts in round 1."""
    result = ValidationResult()
    num_teams = len(standings)

    if bracket.bracket_type not in BRACKET_TYPES:
        result.errors.append(f"Invalid bracket type: {bracket.bracket_type}")
        return result

    expected_games = calculate_bracket_games(num_teams, bracket.bracket_type)
    if bracket.total_games != expected_games:
        result.errors.append(f"Expected {expected_games} games, but bracket has {bracket.total_games}")

    expected_rounds = calculate_bracket_rounds(num_teams)
    if bracket.bracket_type == SINGLE_ELIMINATION:
        if bracket.total_rounds != expected_rounds:
            result.errors.append(f"Expected {expected_rounds} rounds, but bracket has {bracket.total_rounds}")
    elif bracket.total_rounds != expected_rounds + 1:
        result.errors.append(
            f"Expected {expected_rounds + 1} rounds for double elimination, "
            f"but bracket has {bracket.total_rounds}"
        )

    first_round = set()
    for match in bracket.matches_in_round(1, WINNERS_SIDE):
        first_round.update(match.teams)
    for standing in standings:
        if standing.team_id not in first_round:
            result.errors.append(f"Team {standing.team_id} not found in first round")

    byes = calculate_byes(num_teams)
    if byes:
        result.warnings.append(f"{byes} first round bye(s) needed for {num_teams} teams")

    return result


def validate_bracket(bracket: TournamentBracket, standings: List[TeamStanding]) -> ValidationResult:
    """Run every bracket check and combine the findings."""
    result = ValidationResult()
    result.merge(validate_structure(bracket))
    result.merge(validate_progression(bracket))
    result.merge(validate_team_consistency(bracket, standings))
    result.merge(validate_completeness(bracket, standings))

    if not result.is_valid:
        logger.warning("Bracket %s failed validation with %d error(s): %s",
                       bracket.tournament_id, len(result.errors), '; '.join(result.errors))
    return result
