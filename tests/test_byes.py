"""
Unit tests for first round bye assignment.
"""
import pytest

from bracket_engine.byes import (
    assign_byes,
    calculate_first_game_number,
    calculate_first_game_round,
    validate_bye_assignments,
)
from bracket_engine.errors import BracketConfigurationError
from bracket_engine.models import ByeAssignment, DOUBLE_ELIMINATION


class TestByeHelpers:
    """Tests for the bye arithmetic helpers."""

    def test_first_game_round(self):
        assert calculate_first_game_round(1) == 2

    def test_first_game_number_eight_slot_bracket(self):
        """Round 1 games 1-2 feed game 5, games 3-4 feed game 6."""
        assert calculate_first_game_number(1, 3) == 5
        assert calculate_first_game_number(2, 3) == 5
        assert calculate_first_game_number(3, 3) == 6
        assert calculate_first_game_number(4, 3) == 6

    def test_first_game_number_four_slot_bracket(self):
        assert calculate_first_game_number(1, 2) == 3
        assert calculate_first_game_number(2, 2) == 3


class TestAssignByes:
    """Tests for assign_byes."""

    def test_power_of_two_has_no_byes(self, make_standings):
        assert assign_byes(make_standings(['A', 'B', 'C', 'D'])) == []
        assert assign_byes(make_standings(['A', 'B'])) == []

    def test_three_teams(self, make_standings):
        byes = assign_byes(make_standings(['A', 'B', 'C']))
        assert [(b.team_id, b.seed, b.bye_round, b.next_game_number) for b in byes] == [('A', 1, 1, 3)]

    def test_five_teams(self, make_standings):
        byes = assign_byes(make_standings(['A', 'B', 'C', 'D', 'E']))
        assert [b.team_id for b in byes] == ['A', 'B', 'C']
        assert [b.next_game_number for b in byes] == [5, 6, 6]

    def test_six_teams(self, make_standings):
        byes = assign_byes(make_standings(['A', 'B', 'C', 'D', 'E', 'F']))
        assert [(b.team_id, b.next_game_number) for b in byes] == [('A', 5), ('B', 6)]

    def test_seven_teams(self, make_standings):
        byes = assign_byes(make_standings(['A', 'B', 'C', 'D', 'E', 'F', 'G']))
        assert [(b.team_id, b.next_game_number) for b in byes] == [('A', 5)]

    def test_sorted_by_seed(self, make_standings, team_ids):
        for num_teams in range(2, 9):
            byes = assign_byes(make_standings(team_ids[:num_teams]))
            assert [b.seed for b in byes] == sorted(b.seed for b in byes)

    def test_team_name_carried(self, make_standings):
        byes = assign_byes(make_standings(['A', 'B', 'C']))
        assert byes[0].team_name == 'Team A'

    def test_double_elimination_same_as_single(self, make_standings):
        standings = make_standings(['A', 'B', 'C', 'D', 'E'])
        single = [b.to_dict() for b in assign_byes(standings)]
        double = [b.to_dict() for b in assign_byes(standings, DOUBLE_ELIMINATION)]
        assert single == double

    def test_unknown_bracket_type_without_byes(self, make_standings):
        """Four teams need no byes, but the bracket type is still checked."""
        with pytest.raises(BracketConfigurationError, match='Unsupported bracket type'):
            assign_byes(make_standings(['A', 'B', 'C', 'D']), 'swiss')


class TestValidateByeAssignments:
    """Tests for validate_bye_assignments."""

    def test_generated_byes_are_valid(self, make_standings, team_ids):
        for num_teams in range(2, 9):
            standings = make_standings(team_ids[:num_teams])
            assert validate_bye_assignments(assign_byes(standings), standings).is_valid

    def test_wrong_count(self, make_standings):
        standings = make_standings(['A', 'B', 'C', 'D', 'E'])
        result = validate_bye_assignments(assign_byes(standings)[:2], standings)
        assert 'Expected 3 byes, but 2 were assigned' in result.errors

    def test_bye_to_lower_seed(self, make_standings):
        standings = make_standings(['A', 'B', 'C'])
        result = validate_bye_assignments([ByeAssignment('C', 'Team C', 3, 1, 3)], standings)
        assert 'Team C is not a top seed but was assigned a bye' in result.errors

    def test_unknown_team(self, make_standings):
        standings = make_standings(['A', 'B', 'C'])
        result = validate_bye_assignments([ByeAssignment('Z', 'Zed', 1, 1, 3)], standings)
        assert 'Unknown team Z assigned a bye' in result.errors

    def test_bad_next_game_number(self, make_standings):
        standings = make_standings(['A', 'B', 'C'])
        result = validate_bye_assignments([ByeAssignment('A', 'Team A', 1, 1, 0)], standings)
        assert 'Invalid next game number for team A' in result.errors
