"""
Tests for the command line entry point.
"""
import json

import yaml

from main import main


def _write_teams(data_dir, count):
    teams = [{'id': chr(ord('A') + i), 'name': f"Team {chr(ord('A') + i)}"} for i in range(count)]
    (data_dir / 'teams.yaml').write_text(yaml.dump(teams))


class TestMain:
    """Tests for main()."""

    def test_text_output(self, tmp_path, capsys):
        _write_teams(tmp_path, 4)
        assert main(['--data-dir', str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert '--- Standings ---' in out
        assert 'Single Elimination Bracket (2 rounds, 3 games)' in out
        assert '[Semifinal]' in out
        assert '[Final]' in out

    def test_json_output(self, tmp_path, capsys):
        _write_teams(tmp_path, 3)
        assert main(['--data-dir', str(tmp_path), '--json']) == 0
        data = json.loads(capsys.readouterr().out)
        assert data['bracket']['totalGames'] == 2
        assert data['byes'][0]['teamId'] == 'A'
        assert data['validation']['isValid'] is True

    def test_double_elimination_round_names(self, tmp_path, capsys):
        _write_teams(tmp_path, 4)
        assert main(['--data-dir', str(tmp_path), '--bracket-type', 'double_elimination']) == 0
        out = capsys.readouterr().out
        assert '[Winners Semifinal]' in out
        assert '[Losers Final]' in out
        assert '[Championship]' in out

    def test_settings_file_sets_bracket_type(self, tmp_path, capsys):
        _write_teams(tmp_path, 2)
        (tmp_path / 'settings.yaml').write_text(yaml.dump({'bracket_type': 'double_elimination'}))
        assert main(['--data-dir', str(tmp_path), '--json']) == 0
        assert json.loads(capsys.readouterr().out)['bracket']['bracketType'] == 'double_elimination'

    def test_no_teams(self, tmp_path, capsys):
        assert main(['--data-dir', str(tmp_path)]) == 1
        assert 'No teams loaded' in capsys.readouterr().err

    def test_configuration_error(self, tmp_path, capsys):
        _write_teams(tmp_path, 9)
        assert main(['--data-dir', str(tmp_path)]) == 2
        assert 'Error:' in capsys.readouterr().err

    def test_unknown_bracket_type(self, tmp_path, capsys):
        _write_teams(tmp_path, 4)
        assert main(['--data-dir', str(tmp_path), '--bracket-type', 'ladder']) == 2
