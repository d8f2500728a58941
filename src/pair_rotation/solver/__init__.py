# pair_rotation/solver - Matching engines, history ledger and round planner
from .base import BaseMatcher, MatcherStats, MatcherStatus
from .cp_sat import CpSatMatcher
from .history import HistoryLedger
from .matcher import BacktrackingMatcher, find_matching
from .planner import PlanResult, RotationPlanner, plan_next_round, validate_desires
from .validation import ValidationResult, Violation, validate_distribution

__all__ = [
    "plan_next_round",
    "RotationPlanner",
    "PlanResult",
    "validate_desires",
    "HistoryLedger",
    "find_matching",
    "BaseMatcher",
    "BacktrackingMatcher",
    "CpSatMatcher",
    "MatcherStatus",
    "MatcherStats",
    "validate_distribution",
    "ValidationResult",
    "Violation",
]
