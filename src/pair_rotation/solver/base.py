"""
Abstract Base Matcher
=====================
Defines the interface every matching engine (backtracking, CP-SAT) implements,
so the planner can swap engines without changing its contract:
required persons + ordered allowed pairs → one matching or None.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Sequence, Set

from pair_rotation.models.pair import Pair


class MatcherStatus(Enum):
    """Outcome of the last search."""
    MATCHED = "matched"
    INFEASIBLE = "infeasible"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


@dataclass
class MatcherStats:
    """Statistics of the last search, for logging."""
    status: MatcherStatus = MatcherStatus.UNKNOWN
    steps: int = 0
    solve_time_seconds: float = 0.0


class BaseMatcher(ABC):
    """Abstract base class for matching engines."""

    def __init__(self):
        self.stats = MatcherStats()

    @abstractmethod
    def find_matching(
        self,
        required: Iterable[Any],
        allowed: Sequence[Pair],
    ) -> Optional[Set[Pair]]:
        """
        Find a perfect matching of ``required`` using only ``allowed`` pairs.

        Returns:
            The set of chosen pairs, or None when no matching exists.

        Raises:
            SearchTimeout: the engine's budget ran out before an answer.
        """

    def get_status(self) -> MatcherStatus:
        return self.stats.status

    def get_solve_time(self) -> float:
        return self.stats.solve_time_seconds
