"""
Flask web application for the tournament bracket engine.

Standings and brackets are computed on request; the generated bracket is
persisted to ``bracket.yaml`` in the data directory so results can be
recorded against it game by game.
"""
import os
import random
import yaml
from filelock import FileLock
from flask import Flask, request, jsonify

from bracket_engine.errors import BracketConfigurationError, BracketProgressError
from bracket_engine.models import TeamStanding, TournamentBracket
from bracket_engine.standings import compute_standings
from bracket_engine.byes import assign_byes
from bracket_engine.builder import build_bracket
from bracket_engine.validation import validate_bracket
from bracket_engine.progression import advance_byes, record_result, get_bracket_progress
from bracket_engine.teams import randomize_teams
from generate_matches import load_teams, load_games
from settings import get_data_dir, load_settings

app = Flask(__name__)

DATA_DIR = get_data_dir()
TEAMS_FILE = os.path.join(DATA_DIR, 'teams.yaml')
RESULTS_FILE = os.path.join(DATA_DIR, 'results.yaml')
SETTINGS_FILE = os.path.join(DATA_DIR, 'settings.yaml')
BRACKET_FILE = os.path.join(DATA_DIR, 'bracket.yaml')


def _data_lock():
    os.makedirs(DATA_DIR, exist_ok=True)
    return FileLock(os.path.join(DATA_DIR, '.lock'), timeout=10)


def _request_data() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BracketConfigurationError('Request body must be a JSON object')
    return data


def load_stored_bracket():
    """Load the persisted bracket and its standings, or (None, None)."""
    if not os.path.exists(BRACKET_FILE):
        return None, None
    with open(BRACKET_FILE, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    if not data or 'bracket' not in data:
        app.logger.warning(f'No bracket found in {BRACKET_FILE}')
        return None, None
    bracket = TournamentBracket.from_dict(data['bracket'])
    standings = [TeamStanding.from_dict(s) for s in data.get('standings', [])]
    return bracket, standings


def save_bracket(bracket, standings):
    """Write the bracket and the standings it was seeded from."""
    with open(BRACKET_FILE, 'w', encoding='utf-8') as f:
        yaml.dump({
            'bracket': bracket.to_dict(),
            'standings': [s.to_dict() for s in standings],
        }, f, default_flow_style=False, sort_keys=False)


def compute_stored_standings():
    return compute_standings(load_teams(TEAMS_FILE), load_games(RESULTS_FILE))


@app.errorhandler(BracketConfigurationError)
@app.errorhandler(BracketProgressError)
def handle_engine_error(error):
    app.logger.warning(f'Rejected request to {request.path}: {error}')
    return jsonify({'success': False, 'error': str(error)}), 400


@app.route('/api/standings', methods=['GET'])
def api_stored_standings():
    """Standings from the teams and results files."""
    standings = compute_stored_standings()
    return jsonify({'success': True, 'standings': [s.to_dict() for s in standings]})


@app.route('/api/standings', methods=['POST'])
def api_standings():
    """Standings for the posted teams and games."""
    data = _request_data()
    standings = compute_standings(data.get('teams', []), data.get('games', []))
    return jsonify({'success': True, 'standings': [s.to_dict() for s in standings]})


@app.route('/api/bracket', methods=['POST'])
def api_preview_bracket():
    """Build, but do not store, a bracket for the posted teams and games."""
    data = _request_data()
    settings = load_settings(SETTINGS_FILE)
    bracket_type = data.get('bracketType', settings['bracket_type'])
    tournament_id = data.get('tournamentId', settings['tournament_id'])

    standings = compute_standings(data.get('teams', []), data.get('games', []))
    bracket = build_bracket(tournament_id, standings, bracket_type)
    validation = validate_bracket(bracket, standings)
    return jsonify({
        'success': True,
        'bracket': bracket.to_dict(),
        'standings': [s.to_dict() for s in standings],
        'byes': [b.to_dict() for b in assign_byes(standings, bracket_type)],
        'validation': validation.to_dict(),
    })


@app.route('/api/bracket', methods=['GET'])
def api_stored_bracket():
    bracket, _ = load_stored_bracket()
    if bracket is None:
        return jsonify({'success': False, 'error': 'No bracket has been generated'}), 404
    return jsonify({'success': True, 'bracket': bracket.to_dict()})


@app.route('/api/bracket/generate', methods=['POST'])
def api_generate_bracket():
    """Build the bracket from the data files and store it if it validates."""
    settings = load_settings(SETTINGS_FILE)
    standings = compute_stored_standings()
    bracket = advance_byes(build_bracket(settings['tournament_id'], standings, settings['bracket_type']))
    validation = validate_bracket(bracket, standings)
    if not validation.is_valid:
        return jsonify({'success': False, 'validation': validation.to_dict()}), 422

    with _data_lock():
        save_bracket(bracket, standings)
    app.logger.info(f"Stored {bracket.bracket_type} bracket for {bracket.tournament_id} "
                    f"with {len(standings)} teams")
    return jsonify({'success': True, 'bracket': bracket.to_dict(), 'validation': validation.to_dict()})


@app.route('/api/bracket/result', methods=['POST'])
def api_record_result():
    """Record an elimination game score on the stored bracket."""
    data = _request_data()
    try:
        game_number = int(data['gameNumber'])
        home_score = int(data['homeScore'])
        away_score = int(data['awayScore'])
    except (KeyError, TypeError, ValueError):
        raise BracketConfigurationError('gameNumber, homeScore and awayScore are required integers')

    with _data_lock():
        bracket, standings = load_stored_bracket()
        if bracket is None:
            return jsonify({'success': False, 'error': 'No bracket has been generated'}), 404
        match = record_result(bracket, game_number, home_score, away_score)
        save_bracket(bracket, standings)

    return jsonify({
        'success': True,
        'match': match.to_dict(),
        'progress': get_bracket_progress(bracket),
    })


@app.route('/api/bracket/progress', methods=['GET'])
def api_bracket_progress():
    bracket, _ = load_stored_bracket()
    if bracket is None:
        return jsonify({'success': False, 'error': 'No bracket has been generated'}), 404
    return jsonify({'success': True, 'progress': get_bracket_progress(bracket)})


@app.route('/api/bracket/validate', methods=['POST'])
def api_validate_bracket():
    """Validate a posted bracket against posted standings."""
    data = _request_data()
    if 'bracket' not in data:
        raise BracketConfigurationError('Request must include a bracket')
    bracket = TournamentBracket.from_dict(data['bracket'])
    standings = [TeamStanding.from_dict(s) for s in data.get('standings', [])]
    return jsonify({'success': True, 'validation': validate_bracket(bracket, standings).to_dict()})


@app.route('/api/teams/randomize', methods=['POST'])
def api_randomize_teams():
    """Shuffle a posted player list into teams; a seed makes the draw repeatable."""
    data = _request_data()
    settings = load_settings(SETTINGS_FILE)
    team_size = int(data.get('teamSize', settings['team_size']))
    seed = data.get('seed', settings['random_seed'])
    teams = randomize_teams(data.get('players', []), team_size, random.Random(seed))
    return jsonify({'success': True, 'teams': [t.to_dict() for t in teams]})


if __name__ == '__main__':
    app.run(debug=True)
