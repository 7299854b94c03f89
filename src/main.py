# Command line entry point: standings and elimination bracket from the data files

import argparse
import json
import logging
import os
import sys
from bracket_engine.errors import BracketConfigurationError
from bracket_engine.standings import compute_standings
from bracket_engine.byes import assign_byes
from bracket_engine.builder import build_bracket
from bracket_engine.validation import validate_bracket
from bracket_engine.elimination import get_round_name
from bracket_engine.double_elimination import get_winners_round_name, get_losers_round_name, calculate_losers_bracket_rounds
from bracket_engine.models import WINNERS_SIDE, LOSERS_SIDE, DOUBLE_ELIMINATION
from generate_matches import load_teams, load_games
from settings import get_data_dir, load_settings


def describe_round(bracket, match):
    if match.bracket_side == LOSERS_SIDE:
        return get_losers_round_name(match.round, calculate_losers_bracket_rounds(bracket.total_rounds - 1))
    if match.bracket_side == WINNERS_SIDE:
        winners_rounds = bracket.total_rounds - 1 if bracket.bracket_type == DOUBLE_ELIMINATION else bracket.total_rounds
        teams_in_round = 2 ** (winners_rounds - match.round + 1)
        if bracket.bracket_type == DOUBLE_ELIMINATION:
            return get_winners_round_name(teams_in_round)
        return get_round_name(teams_in_round)
    return "Championship"


def print_standings(standings):
    print("\n--- Standings ---")
    print(f"{'Seed':>4}  {'Team':<24} {'W':>3} {'L':>3} {'RS':>4} {'RA':>4} {'Diff':>5}")
    for s in standings:
        print(f"{s.seed:>4}  {s.team_name:<24} {s.wins:>3} {s.losses:>3} "
              f"{s.runs_scored:>4} {s.runs_allowed:>4} {s.run_differential:>+5}")


def print_bracket(bracket, standings, byes):
    names = {s.team_id: s.team_name for s in standings}
    print(f"\n--- {bracket.bracket_type.replace('_', ' ').title()} Bracket "
          f"({bracket.total_rounds} rounds, {bracket.total_games} games) ---")
    for bye in byes:
        print(f"  Bye: #{bye.seed} {bye.team_name} advances to game {bye.next_game_number}")
    for match in bracket.matches:
        home = names.get(match.home_team_id, 'TBD')
        away = 'BYE' if match.is_bye else names.get(match.away_team_id, 'TBD')
        target = f" -> game {match.next_game_number}" if match.next_game_number else ""
        print(f"  Game {match.game_number:>2} [{describe_round(bracket, match)}]: {home} vs {away}{target}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Compute standings and the elimination bracket.')
    parser.add_argument('--data-dir', default=get_data_dir(), help='Directory holding teams.yaml and results.yaml')
    parser.add_argument('--bracket-type', help='single_elimination or double_elimination (overrides settings.yaml)')
    parser.add_argument('--json', action='store_true', help='Print the bracket as JSON instead of text')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        settings = load_settings(os.path.join(args.data_dir, 'settings.yaml'))
        bracket_type = args.bracket_type or settings['bracket_type']
        teams = load_teams(os.path.join(args.data_dir, 'teams.yaml'))
        games = load_games(os.path.join(args.data_dir, 'results.yaml'))

        if not teams:
            print(f"No teams loaded. Check {os.path.join(args.data_dir, 'teams.yaml')}", file=sys.stderr)
            return 1

        standings = compute_standings(teams, games)
        bracket = build_bracket(settings['tournament_id'], standings, bracket_type)
        byes = assign_byes(standings, bracket_type)
    except BracketConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    validation = validate_bracket(bracket, standings)

    if args.json:
        print(json.dumps({
            'standings': [s.to_dict() for s in standings],
            'bracket': bracket.to_dict(),
            'byes': [b.to_dict() for b in byes],
            'validation': validation.to_dict(),
        }, indent=2))
    else:
        print_standings(standings)
        print_bracket(bracket, standings, byes)
        for error in validation.errors:
            print(f"Error: {error}", file=sys.stderr)

    return 0 if validation.is_valid else 3


if __name__ == '__main__':
    sys.exit(main())
