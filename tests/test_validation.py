"""Tests for round validation."""
import logging

from pair_rotation.models.distribution import Distribution
from pair_rotation.solver.history import HistoryLedger
from pair_rotation.solver.validation import validate_distribution


class TestValidateDistribution:
    """Tests for validate_distribution."""

    def test_valid_round(self, roster4):
        round_ = Distribution.from_pairs([("A", "C"), ("B", "D")])
        history = HistoryLedger.from_records([[("A", "B"), ("C", "D")]])

        result = validate_distribution(round_, roster4, history=history)

        assert result.is_valid
        assert sum(result.as_dict().values()) == 0

    def test_uncovered_person(self, roster4):
        result = validate_distribution(Distribution.from_pairs([("A", "B")]), roster4)
        assert result.uncovered == 2
        assert not result.is_valid

    def test_unknown_person(self, roster4):
        round_ = Distribution.from_pairs([("A", "B"), ("C", "Z")], leftover="D")
        result = validate_distribution(round_, roster4)
        assert result.unknown_people == 1
        assert result.bad_leftover == 1

    def test_leftover_on_odd_roster_ok(self, roster3):
        result = validate_distribution(Distribution.from_pairs([("A", "B")], leftover="C"), roster3)
        assert result.is_valid

    def test_repeat_detected(self, roster4):
        history = HistoryLedger.from_records([[("A", "B"), ("C", "D")]])
        round_ = Distribution.from_pairs([("A", "B"), ("C", "D")])

        result = validate_distribution(round_, roster4, history=history)

        assert result.repeats == 2
        assert {v.type for v in result.violations} == {"repeat"}

    def test_desired_repeat_allowed(self, roster4):
        history = HistoryLedger.from_records([[("A", "B"), ("C", "D")]])
        round_ = Distribution.from_pairs([("A", "B"), ("C", "D")])

        result = validate_distribution(round_, roster4, desires=[("A", "B")], history=history)

        assert result.repeats == 1

    def test_missing_desire(self, roster4):
        round_ = Distribution.from_pairs([("A", "C"), ("B", "D")])
        result = validate_distribution(round_, roster4, desires=[("A", "B")])
        assert result.missing_desires == 1

    def test_blocked(self, roster4):
        round_ = Distribution.from_pairs([("A", "B"), ("C", "D")])
        result = validate_distribution(round_, roster4, blocked=[("D", "C")])
        assert result.blocked == 1

    def test_violations_logged(self, roster4, caplog):
        with caplog.at_level(logging.WARNING):
            validate_distribution(Distribution.from_pairs([("A", "B")]), roster4)
        assert "✗" in caplog.text
        assert "uncovered" in caplog.text
