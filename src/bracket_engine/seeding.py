"""
Bracket seeding.

Places ranked teams at their canonical first round positions so the top
seeds cannot meet before the later rounds. Empty positions become byes.
"""
import math
from typing import List

from .errors import BracketConfigurationError, UnsupportedSeedingError
from .models import BYE, SINGLE_ELIMINATION, TeamStanding, ValidationResult, check_bracket_type

# Highest rank (0-based) the canonical position table covers
MAX_SEEDED_RANK = 7


def calculate_bracket_size(num_teams: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    if num_teams <= 0:
        return 0
    return 2 ** math.ceil(math.log2(num_teams))


def calculate_byes(num_teams: int) -> int:
    """Calculate number of byes needed."""
    return calculate_bracket_size(num_teams) - num_teams


def calculate_bracket_rounds(num_teams: int) -> int:
    """Number of rounds in a single elimination bracket."""
    if num_teams <= 1:
        return 0
    return math.ceil(math.log2(num_teams))


def calculate_bracket_games(num_teams: int, bracket_type: str) -> int:
    """
    Closed-form game count for a bracket.

    Single elimination: every team but the champion loses once.
    Double elimination: 2 * (n - 1) - 1.
    """
    check_bracket_type(bracket_type)
    if bracket_type == SINGLE_ELIMINATION:
        return num_teams - 1
    return 2 * (num_teams - 1) - 1


def get_seeding_position(rank: int, size: int) -> int:
    """
    Get the bracket position (0-based) for a team's rank (0-based).

    For 8 positions this yields seeds 1, 8, 5, 4, 3, 6, 7, 2 from top to
    bottom, giving first round pairs 1v8, 5v4, 3v6, 7v2.
    """
    if rank == 0:
        return 0
    if rank == 1:
        return size - 1
    if rank == 2:
        return size // 2
    if rank == 3:
        return size // 2 - 1
    if rank == 4:
        return 2
    if rank == 5:
        return size - 3
    if rank == 6:
        return size - 2
    if rank == 7:
        return 1
    raise UnsupportedSeedingError(
        f"Seeding position not implemented for rank {rank} with size {size}; "
        f"brackets are limited to {MAX_SEEDED_RANK + 1} teams"
    )


def _single_elimination_seeding(standings: List[TeamStanding]) -> List[str]:
    num_teams = len(standings)
    if num_teams > MAX_SEEDED_RANK + 1:
        raise UnsupportedSeedingError(
            f"Cannot seed {num_teams} teams; brackets are limited to {MAX_SEEDED_RANK + 1} teams"
        )

    size = calculate_bracket_size(num_teams)
    seeding = [BYE] * size
    for rank, standing in enumerate(standings):
        seeding[get_seeding_position(rank, size)] = standing.team_id
    return seeding


def generate_seeding(standings: List[TeamStanding], bracket_type: str = SINGLE_ELIMINATION) -> List[str]:
    """
    Return first round positions for ranked ``standings``.

    The result has one entry per bracket position (next power of two); each
    entry is a team id or ``BYE``. Double elimination uses the single
    elimination seeding for its winners bracket.
    """
    if not standings:
        raise BracketConfigurationError('No team standings provided for bracket seeding')
    check_bracket_type(bracket_type)
    return _single_elimination_seeding(standings)


def validate_seeding(seeding: List[str], standings: List[TeamStanding]) -> ValidationResult:
    """Check a seeding array against the standings it was built from."""
    result = ValidationResult()
    team_ids = [s.team_id for s in standings]
    seeded_ids = [team_id for team_id in seeding if team_id != BYE]

    for team_id in team_ids:
        if team_id not in seeded_ids:
            result.errors.append(f"Team {team_id} not found in bracket seeding")

    for team_id in seeded_ids:
        if team_id not in team_ids:
            result.errors.append(f"Unknown team {team_id} found in bracket seeding")

    length = len(seeding)
    if length == 0 or (length & (length - 1)) != 0:
        result.errors.append(f"Bracket seeding length {length} is not a power of 2")

    if len(set(seeded_ids)) != len(seeded_ids):
        result.errors.append('Duplicate teams found in bracket seeding')

    byes = length - len(seeded_ids)
    if byes != calculate_byes(len(team_ids)):
        result.errors.append(
            f"Expected {calculate_byes(len(team_ids))} byes in bracket seeding, found {byes}"
        )

    return result
