"""Tests for the CP-SAT matcher."""
import pytest

from pair_rotation.models.pair import Pair, all_pairs
from pair_rotation.solver.base import MatcherStatus
from pair_rotation.solver.cp_sat import CpSatMatcher
from pair_rotation.solver.matcher import find_matching


@pytest.fixture
def matcher():
    return CpSatMatcher(time_limit_seconds=10)


class TestCpSatMatcher:
    """Tests for CpSatMatcher.find_matching."""

    def test_empty_required(self, matcher):
        assert matcher.find_matching(set(), []) == set()

    def test_perfect_matching(self, matcher, team):
        allowed = all_pairs(team)
        matching = matcher.find_matching(team, allowed)

        assert matching is not None
        covered = sorted(person for pair in matching for person in pair)
        assert covered == sorted(team)
        assert matching <= set(allowed)
        assert matcher.get_status() == MatcherStatus.MATCHED

    def test_only_allowed_pairs_used(self, matcher, roster4):
        allowed = [Pair("A", "D"), Pair("B", "C"), Pair("A", "B")]
        assert matcher.find_matching(roster4, allowed) == {Pair("A", "D"), Pair("B", "C")}

    def test_infeasible(self, matcher, roster4):
        allowed = [Pair("A", "B"), Pair("A", "C"), Pair("B", "C")]
        assert matcher.find_matching(roster4, allowed) is None
        assert matcher.get_status() == MatcherStatus.INFEASIBLE

    def test_infeasible_without_isolated_person(self, matcher):
        """Every person has an allowed pair, but no perfect matching exists."""
        required = {"A", "B", "C", "D", "E", "F"}
        # Two triangles: each has odd size, so neither can be covered
        allowed = [Pair("A", "B"), Pair("B", "C"), Pair("A", "C"),
                   Pair("D", "E"), Pair("E", "F"), Pair("D", "F")]
        assert matcher.find_matching(required, allowed) is None

    def test_odd_required(self, matcher, roster3):
        assert matcher.find_matching(roster3, all_pairs(roster3)) is None

    @pytest.mark.parametrize("excluded", [
        [],
        [("A", "B")],
        [("A", "B"), ("C", "D")],
        [("A", "B"), ("A", "C"), ("A", "D")],
    ])
    def test_agrees_with_backtracking_on_feasibility(self, matcher, roster4, excluded):
        blocked = {Pair(*p) for p in excluded}
        allowed = [p for p in all_pairs(roster4) if p not in blocked]

        expected = find_matching(roster4, allowed)
        actual = matcher.find_matching(roster4, allowed)

        assert (expected is None) == (actual is None)
