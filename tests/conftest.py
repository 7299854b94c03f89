"""
Shared pytest fixtures for bracket engine tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from bracket_engine.models import Team, GameResult, TeamStanding


@pytest.fixture
def client():
    """Create a test client for the Flask app."""
    from app import app
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def temp_data_dir(tmp_path, monkeypatch):
    """Point the Flask app's data files at a temporary directory."""
    import app as app_module

    monkeypatch.setattr(app_module, 'DATA_DIR', str(tmp_path))
    monkeypatch.setattr(app_module, 'TEAMS_FILE', str(tmp_path / 'teams.yaml'))
    monkeypatch.setattr(app_module, 'RESULTS_FILE', str(tmp_path / 'results.yaml'))
    monkeypatch.setattr(app_module, 'SETTINGS_FILE', str(tmp_path / 'settings.yaml'))
    monkeypatch.setattr(app_module, 'BRACKET_FILE', str(tmp_path / 'bracket.yaml'))
    return tmp_path


@pytest.fixture
def four_teams():
    """Teams A-D."""
    return [Team('A', 'Aces'), Team('B', 'Bombers'), Team('C', 'Crushers'), Team('D', 'Dynamos')]


@pytest.fixture
def four_team_games():
    """
    Round robin results giving A 2-0 (+10), B 1-1 (+2), C 1-1 (-2), D 0-2 (-10).
    """
    return [
        GameResult('A', 'D', 6, 1),
        GameResult('A', 'C', 7, 2),
        GameResult('B', 'D', 8, 3),
        GameResult('C', 'B', 5, 2),
    ]


@pytest.fixture
def make_standings():
    """Factory for already ranked standings; seeds follow list order."""
    def _make(team_ids):
        return [
            TeamStanding(team_id, f"Team {team_id}", seed=index + 1)
            for index, team_id in enumerate(team_ids)
        ]
    return _make


@pytest.fixture
def team_ids():
    """Team ids for up to eight teams."""
    return ['A', 'B', 'C', 'D', 'E', 'F', 'G', 'H']
