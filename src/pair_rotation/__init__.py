"""Pair rotation planner: repeat-avoiding rounds of pairs for a roster."""
from pair_rotation.errors import (
    InfeasibleError,
    InvalidDesireError,
    InvalidPairError,
    RotationError,
    SearchTimeout,
)
from pair_rotation.models import Distribution, MatcherBackend, Pair, PlannerConfig, all_pairs, canonicalize
from pair_rotation.solver import HistoryLedger, PlanResult, RotationPlanner, find_matching, plan_next_round

__version__ = "0.3.0"

__all__ = [
    "plan_next_round",
    "RotationPlanner",
    "PlanResult",
    "PlannerConfig",
    "MatcherBackend",
    "HistoryLedger",
    "Distribution",
    "Pair",
    "all_pairs",
    "canonicalize",
    "find_matching",
    "RotationError",
    "InvalidPairError",
    "InvalidDesireError",
    "InfeasibleError",
    "SearchTimeout",
]
