import yaml
import os
from itertools import combinations
from bracket_engine.models import Team, GameResult

SCHEDULED = 'scheduled'


def load_teams(file_path):
    """
    Load teams from YAML.

    Accepts a list of {id, name} records or a mapping of id -> name.
    """
    if not os.path.exists(file_path):
        return []
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file)
    if not data:
        return []
    if isinstance(data, dict):
        return [Team(team_id, name if name else team_id) for team_id, name in data.items()]
    return [Team.from_dict(record) for record in data]


def load_games(file_path):
    """Load game results from a YAML file with a top-level ``games`` list."""
    if not os.path.exists(file_path):
        return []
    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file)
    if not data:
        return []
    return [GameResult.from_dict(game) for game in data.get('games', [])]


def calculate_round_robin_games(num_teams):
    """Every team plays every other team once."""
    if num_teams < 2:
        return 0
    return num_teams * (num_teams - 1) // 2


def generate_pool_play_games(teams):
    """Create one scheduled game for every pairing of teams, alternating home side."""
    games = []
    if len(teams) < 2:
        print(f"Warning: fewer than 2 teams ({len(teams)} found). Skipping game generation.")
        return games
    for index, (team1, team2) in enumerate(combinations(teams, 2)):
        home, away = (team1, team2) if index % 2 == 0 else (team2, team1)
        games.append(GameResult(home.team_id, away.team_id, status=SCHEDULED))
    return games


def main():
    import sys

    script_dir = os.path.dirname(__file__)
    base_dir = os.path.dirname(script_dir)

    # Use command line argument if provided, otherwise use default path
    teams_file = sys.argv[1] if len(sys.argv) > 1 else os.path.join(base_dir, 'data', 'teams.yaml')

    teams = load_teams(teams_file)

    if not teams:
        return

    names = {team.team_id: team.name for team in teams}
    games = generate_pool_play_games(teams)
    print(f"# Pool play ({len(games)} games)")
    for game in games:
        print(f"{names[game.home_team_id]} vs {names[game.away_team_id]}")


if __name__ == '__main__':
    main()
