"""
Value objects shared by the standings, seeding and bracket modules.

Every object serializes with camelCase keys. ``from_dict`` also accepts the
snake_case spelling of each key so older call sites can feed the engine.
"""
from typing import List, Dict, Optional

from .errors import BracketConfigurationError

BYE = 'BYE'
SINGLE_ELIMINATION = 'single_elimination'
DOUBLE_ELIMINATION = 'double_elimination'
BRACKET_TYPES = (SINGLE_ELIMINATION, DOUBLE_ELIMINATION)

WINNERS_SIDE = 'winners'
LOSERS_SIDE = 'losers'
CHAMPIONSHIP_SIDE = 'championship'

COMPLETED = 'completed'


def _get(data: Dict, camel: str, snake: str, default=None):
    if camel in data:
        return data[camel]
    return data.get(snake, default)


def _drop_none(data: Dict) -> Dict:
    return {k: v for k, v in data.items() if v is not None}


def check_bracket_type(bracket_type: str) -> str:
    """Return bracket_type unchanged or raise if it is not a known type."""
    if bracket_type not in BRACKET_TYPES:
        raise BracketConfigurationError(
            f"Unsupported bracket type: {bracket_type!r} "
            f"(expected one of {', '.join(BRACKET_TYPES)})"
        )
    return bracket_type


class Team:
    def __init__(self, team_id, name, players=None):
        self.team_id = team_id
        self.name = name
        self.players = players if players else []

    def to_dict(self):
        data = {'id': self.team_id, 'name': self.name}
        if self.players:
            data['players'] = list(self.players)
        return data

    @classmethod
    def from_dict(cls, data):
        team_id = data.get('id', _get(data, 'teamId', 'team_id'))
        name = data.get('name', _get(data, 'teamName', 'team_name', team_id))
        if team_id is None:
            raise BracketConfigurationError(f"Team record has no id: {data!r}")
        return cls(team_id, name, data.get('players'))

    def __repr__(self):
        return f"Team(team_id={self.team_id}, name={self.name})"


class GameResult:
    """A finished (or scheduled) round robin game as reported by scoring."""

    def __init__(self, home_team_id, away_team_id, home_score=0, away_score=0, status=COMPLETED):
        if home_team_id == away_team_id:
            raise BracketConfigurationError(f"Team {home_team_id} cannot play against itself")
        self.home_team_id = home_team_id
        self.away_team_id = away_team_id
        self.home_score = home_score
        self.away_score = away_score
        self.status = status

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED

    def to_dict(self):
        return {
            'homeTeamId': self.home_team_id,
            'awayTeamId': self.away_team_id,
            'homeScore': self.home_score,
            'awayScore': self.away_score,
            'status': self.status,
        }

    @classmethod
    def from_dict(cls, data):
        home = _get(data, 'homeTeamId', 'home_team_id')
        away = _get(data, 'awayTeamId', 'away_team_id')
        if home is None or away is None:
            raise BracketConfigurationError(f"Game record is missing a team id: {data!r}")
        status = data.get('status', COMPLETED)
        scores = []
        for camel, snake in (('homeScore', 'home_score'), ('awayScore', 'away_score')):
            value = _get(data, camel, snake, 0)
            valid = not isinstance(value, bool) and isinstance(value, int) and value >= 0
            if not valid:
                if status == COMPLETED:
                    raise BracketConfigurationError(
                        f"Score {camel} must be a non-negative integer, got {value!r}"
                    )
                # unfinished games never reach standings
                value = 0
            scores.append(value)
        return cls(home, away, scores[0], scores[1], status)

    def __repr__(self):
        return (f"GameResult({self.home_team_id} {self.home_score} - "
                f"{self.away_score} {self.away_team_id}, status={self.status})")


class TeamStanding:
    def __init__(self, team_id, team_name, wins=0, losses=0, runs_scored=0,
                 runs_allowed=0, games_played=0, seed=None):
        self.team_id = team_id
        self.team_name = team_name
        self.wins = wins
        self.losses = losses
        self.runs_scored = runs_scored
        self.runs_allowed = runs_allowed
        self.games_played = games_played
        self.seed = seed

    @property
    def run_differential(self) -> int:
        return self.runs_scored - self.runs_allowed

    @property
    def win_percentage(self) -> float:
        decisions = self.wins + self.losses
        if decisions == 0:
            return 0.0
        return self.wins / decisions

    def to_dict(self):
        return _drop_none({
            'teamId': self.team_id,
            'teamName': self.team_name,
            'wins': self.wins,
            'losses': self.losses,
            'runsScored': self.runs_scored,
            'runsAllowed': self.runs_allowed,
            'runDifferential': self.run_differential,
            'gamesPlayed': self.games_played,
            'winPercentage': round(self.win_percentage, 3),
            'seed': self.seed,
        })

    @classmethod
    def from_dict(cls, data):
        return cls(
            _get(data, 'teamId', 'team_id'),
            _get(data, 'teamName', 'team_name'),
            wins=data.get('wins', 0),
            losses=data.get('losses', 0),
            runs_scored=_get(data, 'runsScored', 'runs_scored', 0),
            runs_allowed=_get(data, 'runsAllowed', 'runs_allowed', 0),
            games_played=_get(data, 'gamesPlayed', 'games_played', 0),
            seed=data.get('seed'),
        )

    def __repr__(self):
        return (f"TeamStanding(team_id={self.team_id}, seed={self.seed}, "
                f"record={self.wins}-{self.losses}, diff={self.run_differential:+d})")


class BracketMatch:
    def __init__(self, game_number, round, home_team_id=None, away_team_id=None,
                 home_team_seed=None, away_team_seed=None, winner_team_id=None,
                 is_bye=False, next_game_number=None, loser_next_game_number=None,
                 bracket_side=WINNERS_SIDE):
        self.game_number = game_number
        self.round = round
        self.home_team_id = home_team_id
        self.away_team_id = away_team_id
        self.home_team_seed = home_team_seed
        self.away_team_seed = away_team_seed
        self.winner_team_id = winner_team_id
        self.is_bye = is_bye
        self.next_game_number = next_game_number
        self.loser_next_game_number = loser_next_game_number
        self.bracket_side = bracket_side

    @property
    def teams(self) -> List[str]:
        return [t for t in (self.home_team_id, self.away_team_id) if t is not None]

    @property
    def loser_team_id(self) -> Optional[str]:
        if self.is_bye or self.winner_team_id is None:
            return None
        for team_id in self.teams:
            if team_id != self.winner_team_id:
                return team_id
        return None

    def to_dict(self):
        data = _drop_none({
            'gameNumber': self.game_number,
            'round': self.round,
            'homeTeamId': self.home_team_id,
            'awayTeamId': self.away_team_id,
            'homeTeamSeed': self.home_team_seed,
            'awayTeamSeed': self.away_team_seed,
            'winnerTeamId': self.winner_team_id,
            'nextGameNumber': self.next_game_number,
            'loserNextGameNumber': self.loser_next_game_number,
        })
        data['isBye'] = self.is_bye
        data['bracketSide'] = self.bracket_side
        return data

    @classmethod
    def from_dict(cls, data):
        game_number = _get(data, 'gameNumber', 'game_number', 0)
        round = _get(data, 'round', 'round_number', 0)
        for field, value in (('gameNumber', game_number), ('round', round)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise BracketConfigurationError(f"Match {field} must be an integer, got {value!r}")
        return cls(
            game_number,
            round,
            home_team_id=_get(data, 'homeTeamId', 'home_team_id'),
            away_team_id=_get(data, 'awayTeamId', 'away_team_id'),
            home_team_seed=_get(data, 'homeTeamSeed', 'home_team_seed'),
            away_team_seed=_get(data, 'awayTeamSeed', 'away_team_seed'),
            winner_team_id=_get(data, 'winnerTeamId', 'winner_team_id'),
            is_bye=bool(_get(data, 'isBye', 'is_bye', False)),
            next_game_number=_get(data, 'nextGameNumber', 'next_game_number'),
            loser_next_game_number=_get(data, 'loserNextGameNumber', 'loser_next_game_number'),
            bracket_side=_get(data, 'bracketSide', 'bracket_side', WINNERS_SIDE),
        )

    def __repr__(self):
        return (f"BracketMatch(game={self.game_number}, round={self.round}, "
                f"side={self.bracket_side}, {self.home_team_id} vs {self.away_team_id}, "
                f"next={self.next_game_number})")


class TournamentBracket:
    def __init__(self, tournament_id, bracket_type, matches, total_rounds, total_games):
        self.tournament_id = tournament_id
        self.bracket_type = bracket_type
        self.matches = matches
        self.total_rounds = total_rounds
        self.total_games = total_games

    def get_match(self, game_number) -> Optional[BracketMatch]:
        for match in self.matches:
            if match.game_number == game_number:
                return match
        return None

    def matches_in_round(self, round, side=None) -> List[BracketMatch]:
        return [m for m in self.matches
                if m.round == round and (side is None or m.bracket_side == side)]

    def to_dict(self):
        return {
            'tournamentId': self.tournament_id,
            'bracketType': self.bracket_type,
            'matches': [m.to_dict() for m in self.matches],
            'totalRounds': self.total_rounds,
            'totalGames': self.total_games,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            _get(data, 'tournamentId', 'tournament_id'),
            _get(data, 'bracketType', 'bracket_type'),
            [BracketMatch.from_dict(m) for m in data.get('matches', [])],
            _get(data, 'totalRounds', 'total_rounds', 0),
            _get(data, 'totalGames', 'total_games', 0),
        )

    def __repr__(self):
        return (f"TournamentBracket(tournament_id={self.tournament_id}, "
                f"type={self.bracket_type}, games={len(self.matches)}, rounds={self.total_rounds})")


class ByeAssignment:
    def __init__(self, team_id, team_name, seed, bye_round, next_game_number):
        self.team_id = team_id
        self.team_name = team_name
        self.seed = seed
        self.bye_round = bye_round
        self.next_game_number = next_game_number

    def to_dict(self):
        return {
            'teamId': self.team_id,
            'teamName': self.team_name,
            'seed': self.seed,
            'byeRound': self.bye_round,
            'nextGameNumber': self.next_game_number,
        }

    def __repr__(self):
        return (f"ByeAssignment(team_id={self.team_id}, seed={self.seed}, "
                f"next_game_number={self.next_game_number})")


class ValidationResult:
    def __init__(self, errors=None, warnings=None):
        self.errors = errors if errors else []
        self.warnings = warnings if warnings else []

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self

    def to_dict(self):
        return {
            'isValid': self.is_valid,
            'errors': list(self.errors),
            'warnings': list(self.warnings),
        }

    def __repr__(self):
        return f"ValidationResult(errors={self.errors}, warnings={self.warnings})"
