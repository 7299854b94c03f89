"""
Tournament settings stored in ``settings.yaml``.
"""
import os
import yaml
from bracket_engine.models import SINGLE_ELIMINATION, check_bracket_type

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_DATA_DIR = os.path.join(BASE_DIR, 'data')


def get_data_dir():
    return os.environ.get('TOURNAMENT_DATA_DIR', DEFAULT_DATA_DIR)


def get_default_settings():
    return {
        'tournament_id': 'default',
        'bracket_type': SINGLE_ELIMINATION,
        'team_size': 4,
        'random_seed': None,
    }


def load_settings(path):
    """Load settings from YAML, merging with defaults and checking the bracket type."""
    settings = get_default_settings()
    if os.path.exists(path):
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        if data:
            settings.update(data)
    check_bracket_type(settings['bracket_type'])
    return settings
