# pair_rotation/models - Data models for the rotation planner
from .constraints import MatcherBackend, PlannerConfig
from .distribution import Distribution
from .pair import Pair, Person, all_pairs, as_pair, canonicalize

__all__ = [
    "Pair", "Person", "all_pairs", "as_pair", "canonicalize",
    "Distribution",
    "PlannerConfig", "MatcherBackend",
]
