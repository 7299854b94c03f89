"""
Tests for loading teams and results and for generating pool play games.
"""
import yaml

from generate_matches import (
    load_teams,
    load_games,
    calculate_round_robin_games,
    generate_pool_play_games,
)
from bracket_engine.models import Team


class TestLoadTeams:
    """Tests for load_teams."""

    def test_list_of_records(self, tmp_path):
        path = tmp_path / 'teams.yaml'
        path.write_text(yaml.dump([{'id': 'A', 'name': 'Aces'}, {'id': 'B', 'name': 'Bombers'}]))
        teams = load_teams(str(path))
        assert [(t.team_id, t.name) for t in teams] == [('A', 'Aces'), ('B', 'Bombers')]

    def test_mapping_of_ids(self, tmp_path):
        path = tmp_path / 'teams.yaml'
        path.write_text("A: Aces\nB:\n")
        teams = load_teams(str(path))
        assert [(t.team_id, t.name) for t in teams] == [('A', 'Aces'), ('B', 'B')]

    def test_missing_file(self, tmp_path):
        assert load_teams(str(tmp_path / 'nope.yaml')) == []

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'teams.yaml'
        path.write_text('')
        assert load_teams(str(path)) == []


class TestLoadGames:
    """Tests for load_games."""

    def test_games_list(self, tmp_path):
        path = tmp_path / 'results.yaml'
        path.write_text(yaml.dump({'games': [
            {'homeTeamId': 'A', 'awayTeamId': 'B', 'homeScore': 3, 'awayScore': 2, 'status': 'completed'},
            {'homeTeamId': 'C', 'awayTeamId': 'A', 'homeScore': 0, 'awayScore': 0, 'status': 'scheduled'},
        ]}))
        games = load_games(str(path))
        assert len(games) == 2
        assert games[0].home_score == 3
        assert not games[1].is_completed

    def test_missing_file(self, tmp_path):
        assert load_games(str(tmp_path / 'results.yaml')) == []


class TestPoolPlay:
    """Tests for round robin game generation."""

    def test_calculate_round_robin_games(self):
        assert calculate_round_robin_games(1) == 0
        assert calculate_round_robin_games(4) == 6
        assert calculate_round_robin_games(5) == 10

    def test_every_pair_plays_once(self):
        teams = [Team(t, t) for t in ['A', 'B', 'C', 'D']]
        games = generate_pool_play_games(teams)
        assert len(games) == 6
        pairs = {frozenset((g.home_team_id, g.away_team_id)) for g in games}
        assert len(pairs) == 6
        assert all(g.status == 'scheduled' for g in games)

    def test_home_side_alternates(self):
        teams = [Team(t, t) for t in ['A', 'B', 'C']]
        games = generate_pool_play_games(teams)
        assert [(g.home_team_id, g.away_team_id) for g in games] == [('A', 'B'), ('C', 'A'), ('B', 'C')]

    def test_too_few_teams(self):
        assert generate_pool_play_games([Team('A', 'A')]) == []
