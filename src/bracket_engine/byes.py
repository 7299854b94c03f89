"""
First round bye assignment for brackets whose team count is not a power of 2.
"""
from typing import List

from .models import BYE, SINGLE_ELIMINATION, ByeAssignment, TeamStanding, ValidationResult, check_bracket_type
from .seeding import calculate_byes, calculate_bracket_rounds, generate_seeding


def calculate_first_game_round(bye_round: int) -> int:
    """Round in which a team with a bye plays its first game."""
    return bye_round + 1


def calculate_first_game_number(bye_game_number: int, total_rounds: int) -> int:
    """
    Game number a first round bye feeds into.

    Round 1 holds 2^(total_rounds-1) games, and round 1 games 2k-1 and 2k
    both feed round 2 game k.
    """
    games_in_first_round = 2 ** (total_rounds - 1)
    return games_in_first_round + (bye_game_number + 1) // 2


def assign_byes(standings: List[TeamStanding], bracket_type: str = SINGLE_ELIMINATION) -> List[ByeAssignment]:
    """
    Determine which teams receive a first round bye.

    Returns one ByeAssignment per team paired with BYE in the seeding, top
    seeds first. Empty when the team count is a power of 2.
    """
    check_bracket_type(bracket_type)
    if calculate_byes(len(standings)) == 0:
        return []

    seeding = generate_seeding(standings, bracket_type)
    total_rounds = calculate_bracket_rounds(len(standings))
    by_id = {s.team_id: s for s in standings}

    assignments = []
    for position in range(0, len(seeding), 2):
        pair = (seeding[position], seeding[position + 1])
        if pair.count(BYE) != 1:
            continue
        team_id = pair[0] if pair[1] == BYE else pair[1]
        standing = by_id[team_id]
        bye_game_number = position // 2 + 1
        assignments.append(ByeAssignment(
            team_id=team_id,
            team_name=standing.team_name,
            seed=standing.seed,
            bye_round=1,
            next_game_number=calculate_first_game_number(bye_game_number, total_rounds),
        ))

    assignments.sort(key=lambda a: a.seed)
    return assignments


def validate_bye_assignments(assignments: List[ByeAssignment], standings: List[TeamStanding]) -> ValidationResult:
    """Check that byes went to the right number of top seeds."""
    result = ValidationResult()
    expected = calculate_byes(len(standings))

    if len(assignments) != expected:
        result.errors.append(f"Expected {expected} byes, but {len(assignments)} were assigned")

    team_ids = [s.team_id for s in standings]
    bye_team_ids = [a.team_id for a in assignments]
    top_seeds = team_ids[:expected]

    for team_id in bye_team_ids:
        if team_id not in team_ids:
            result.errors.append(f"Unknown team {team_id} assigned a bye")
        elif team_id not in top_seeds:
            result.errors.append(f"Team {team_id} is not a top seed but was assigned a bye")

    if len(set(bye_team_ids)) != len(bye_team_ids):
        result.errors.append('Duplicate teams found in bye assignments')

    for assignment in assignments:
        if assignment.next_game_number is None or assignment.next_game_number <= 0:
            result.errors.append(f"Invalid next game number for team {assignment.team_id}")

    return result
