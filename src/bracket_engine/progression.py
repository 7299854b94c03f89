"""
Applying elimination game results to a built bracket.

Winners move to their ``next_game_number`` match and, in double
elimination, losers drop to their ``loser_next_game_number`` match. Within
a target match the feeders are ordered winner feeds first, then loser feeds,
each by game number; the first feeder fills the home slot and the second
the away slot.

A match whose other feeder can never produce a team (the loser of a bye,
or a losers bracket match nobody reaches) is a walkover: the team present
advances as if it had a bye.
"""
import logging
from typing import List, Dict, Tuple, Optional

from .errors import BracketProgressError
from .models import BracketMatch, TournamentBracket

logger = logging.getLogger(__name__)

WINNER_FEED = 'winner'
LOSER_FEED = 'loser'


def _feeders(bracket: TournamentBracket, target: BracketMatch) -> List[Tuple[BracketMatch, str]]:
    winner_feeds = [m for m in bracket.matches if m.next_game_number == target.game_number]
    loser_feeds = [m for m in bracket.matches if m.loser_next_game_number == target.game_number]
    winner_feeds.sort(key=lambda m: m.game_number)
    loser_feeds.sort(key=lambda m: m.game_number)
    return [(m, WINNER_FEED) for m in winner_feeds] + [(m, LOSER_FEED) for m in loser_feeds]


def _seed_of(match: BracketMatch, team_id: str) -> Optional[int]:
    if team_id == match.home_team_id:
        return match.home_team_seed
    if team_id == match.away_team_id:
        return match.away_team_seed
    return None


def _is_dead(bracket: TournamentBracket, match: BracketMatch) -> bool:
    """True when no team can ever reach ``match``."""
    if match.teams or match.winner_team_id:
        return False
    return all(_feed_is_dead(bracket, source, kind) for source, kind in _feeders(bracket, match))


def _feed_is_dead(bracket: TournamentBracket, source: BracketMatch, kind: str) -> bool:
    if kind == LOSER_FEED and source.winner_team_id and len(source.teams) < 2:
        # byes and walkovers have no loser
        return True
    return _is_dead(bracket, source)


def _place(bracket: TournamentBracket, source: BracketMatch, kind: str, team_id: str):
    target_number = source.next_game_number if kind == WINNER_FEED else source.loser_next_game_number
    target = bracket.get_match(target_number)
    if target is None:
        raise BracketProgressError(f"Game {source.game_number} feeds unknown game {target_number}")

    slot = _feeders(bracket, target).index((source, kind))
    seed = _seed_of(source, team_id)
    current = target.home_team_id if slot == 0 else target.away_team_id
    if current == team_id:
        return
    if current is not None:
        raise BracketProgressError(
            f"Game {target.game_number} already has {current} in the slot fed by game {source.game_number}"
        )

    if slot == 0:
        target.home_team_id = team_id
        target.home_team_seed = seed
    else:
        target.away_team_id = team_id
        target.away_team_seed = seed
    logger.debug("Advanced %s from game %d to game %d (%s)",
                 team_id, source.game_number, target.game_number, 'home' if slot == 0 else 'away')


def _resolve_walkovers(bracket: TournamentBracket) -> int:
    resolved = 0
    changed = True
    while changed:
        changed = False
        for match in sorted(bracket.matches, key=lambda m: m.game_number):
            if match.winner_team_id or len(match.teams) != 1:
                continue
            feeders = _feeders(bracket, match)
            empty_slot = 0 if match.home_team_id is None else 1
            if empty_slot < len(feeders):
                source, kind = feeders[empty_slot]
                if not _feed_is_dead(bracket, source, kind):
                    continue

            team_id = match.teams[0]
            seed = _seed_of(match, team_id)
            match.home_team_id, match.home_team_seed = team_id, seed
            match.away_team_id, match.away_team_seed = None, None
            match.is_bye = True
            match.winner_team_id = team_id
            logger.debug("Game %d is a walkover for %s", match.game_number, team_id)
            if match.next_game_number is not None:
                _place(bracket, match, WINNER_FEED, team_id)
            resolved += 1
            changed = True
    return resolved


def advance_byes(bracket: TournamentBracket) -> TournamentBracket:
    """Move every bye winner into its next match and settle any walkovers."""
    for match in sorted(bracket.matches, key=lambda m: m.game_number):
        if match.is_bye and match.winner_team_id and match.next_game_number is not None:
            _place(bracket, match, WINNER_FEED, match.winner_team_id)
    _resolve_walkovers(bracket)
    return bracket


def record_result(bracket: TournamentBracket, game_number: int,
                  home_score: int, away_score: int) -> BracketMatch:
    """
    Record the final score of an elimination game and advance its teams.

    Raises BracketProgressError when the game is unknown, is a bye, is
    already decided, does not have both teams yet, or ended tied.
    """
    match = bracket.get_match(game_number)
    if match is None:
        raise BracketProgressError(f"Game {game_number} does not exist in this bracket")
    if match.is_bye:
        raise BracketProgressError(f"Game {game_number} is a bye and cannot take a result")
    if match.winner_team_id:
        raise BracketProgressError(f"Game {game_number} already has a winner ({match.winner_team_id})")
    if not (match.home_team_id and match.away_team_id):
        raise BracketProgressError(f"Game {game_number} does not have both teams assigned yet")
    if home_score == away_score:
        raise BracketProgressError(f"Game {game_number} cannot end tied in an elimination bracket")

    if home_score > away_score:
        winner, loser = match.home_team_id, match.away_team_id
    else:
        winner, loser = match.away_team_id, match.home_team_id
    match.winner_team_id = winner
    logger.info("Game %d won by %s (%d-%d)", game_number, winner,
                max(home_score, away_score), min(home_score, away_score))

    if match.next_game_number is not None:
        _place(bracket, match, WINNER_FEED, winner)
    if match.loser_next_game_number is not None:
        _place(bracket, match, LOSER_FEED, loser)
    _resolve_walkovers(bracket)
    return match


def get_bracket_progress(bracket: TournamentBracket) -> Dict:
    """Summarize how far a bracket has been played."""
    live = [m for m in sorted(bracket.matches, key=lambda m: m.game_number) if not _is_dead(bracket, m)]
    completed = [m for m in live if m.winner_team_id]
    pending = [m for m in live if not m.winner_team_id]
    finals = [m for m in bracket.matches if m.next_game_number is None]
    champion = finals[0].winner_team_id if len(finals) == 1 else None

    next_match = pending[0] if pending else None
    return {
        'tournamentId': bracket.tournament_id,
        'totalMatches': len(live),
        'completedMatches': len(completed),
        'currentRound': next_match.round if next_match else bracket.total_rounds,
        'currentSide': next_match.bracket_side if next_match else None,
        'nextGameNumber': next_match.game_number if next_match else None,
        'isComplete': champion is not None,
        'champion': champion,
    }
