"""
Tests for settings.yaml loading.
"""
import pytest
import yaml

from bracket_engine.errors import BracketConfigurationError
from settings import get_data_dir, get_default_settings, load_settings


class TestSettings:
    """Tests for the settings helpers."""

    def test_defaults_when_file_missing(self, tmp_path):
        assert load_settings(str(tmp_path / 'settings.yaml')) == get_default_settings()

    def test_file_overrides_defaults(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text(yaml.dump({'tournament_id': 'fall', 'bracket_type': 'double_elimination'}))
        settings = load_settings(str(path))
        assert settings['tournament_id'] == 'fall'
        assert settings['bracket_type'] == 'double_elimination'
        assert settings['team_size'] == 4

    def test_unknown_bracket_type_rejected(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text(yaml.dump({'bracket_type': 'swiss'}))
        with pytest.raises(BracketConfigurationError):
            load_settings(str(path))

    def test_data_dir_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv('TOURNAMENT_DATA_DIR', str(tmp_path))
        assert get_data_dir() == str(tmp_path)
