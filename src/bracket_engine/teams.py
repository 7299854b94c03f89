"""
Random team assignment for a player roster.

Randomness always comes from a ``random.Random`` supplied by the caller, so a
fixed seed reproduces the same teams.
"""
import math
import random
from typing import List, Dict, Optional

from .models import Team

BASE_TEAM_NAMES = [
    'The Ringers', 'Clutch Hitters', 'Home Run Heroes', 'Diamond Dogs',
    'The Underdogs', 'Power Hitters', 'Base Runners', 'The Sluggers',
    'Thunder Bolts', 'Lightning Strikes', 'The Crushers', 'Ace Pitchers',
    'Grand Slammers', 'The Bombers', 'Fast Ballers', 'The Wildcards',
    'Strike Zone', 'The Mavericks', 'The Dominators', 'Victory Squad',
    'The Titans', 'Storm Chasers', 'The Dynamos', 'Fire Ballers',
    'The Rockets', 'Thunder Cats', 'The Phoenixes', 'The Hurricanes',
]


def shuffled(items: List, rng: random.Random) -> List:
    """Return a shuffled copy of items."""
    copy = list(items)
    rng.shuffle(copy)
    return copy


def generate_team_names(count: int, rng: random.Random) -> List[str]:
    if count <= len(BASE_TEAM_NAMES):
        return shuffled(BASE_TEAM_NAMES, rng)[:count]
    names = list(BASE_TEAM_NAMES)
    for i in range(len(BASE_TEAM_NAMES), count):
        names.append(f"Team {i + 1}")
    return names


def calculate_optimal_team_distribution(player_count: int, preferred_team_size: int) -> Dict:
    """
    Split players into the fewest teams of at most preferred_team_size,
    spreading the remainder one extra player at a time from the first team.
    """
    if player_count <= 0 or preferred_team_size <= 0:
        return {'teamCount': 0, 'actualTeamSize': 0, 'remainder': 0, 'distribution': []}

    team_count = math.ceil(player_count / preferred_team_size)
    base_size = player_count // team_count
    remainder = player_count % team_count
    distribution = [base_size + 1 if i < remainder else base_size for i in range(team_count)]

    return {
        'teamCount': team_count,
        'actualTeamSize': base_size,
        'remainder': remainder,
        'distribution': distribution,
    }


def randomize_teams(players: List, team_size: int, rng: random.Random,
                    team_names: Optional[List[str]] = None) -> List[Team]:
    """Shuffle players into balanced teams using the distribution above."""
    if not players or team_size <= 0:
        return []

    order = shuffled(players, rng)
    sizes = calculate_optimal_team_distribution(len(order), team_size)['distribution']
    names = team_names if team_names else generate_team_names(len(sizes), rng)

    teams = []
    start = 0
    for i, size in enumerate(sizes):
        teams.append(Team(f"team-{i + 1}", names[i], order[start:start + size]))
        start += size
    return teams
