"""
Backtracking Matcher
====================
Finds one perfect matching of a set of persons using only an ordered list of
allowed pairs.

The search scans the allowed list in order. For each pair whose two persons
are still unmatched it commits to that pair and recurses on the remaining
suffix of the list only; earlier pairs are never revisited. The first complete
matching found is returned, so the result depends only on the order of the
allowed list.

Worst case is exponential in the number of allowed pairs. Rosters of a few
dozen people are fine; for more, use the CP-SAT engine.
"""
import time
from typing import Any, FrozenSet, Iterable, List, Optional, Sequence, Set

from pair_rotation.errors import SearchTimeout
from pair_rotation.models.pair import Pair
from pair_rotation.solver.base import BaseMatcher, MatcherStatus, MatcherStats
from pair_rotation.utils.logging_setup import get_logger

logger = get_logger("pair_rotation.solver.matcher")


class BacktrackingMatcher(BaseMatcher):
    """
    First-fit recursive matcher with an optional search budget.

    Args:
        max_steps: Maximum number of committed pairs to try (0 = unlimited)
        time_limit_seconds: Wall-clock budget per search (0 = unlimited)
    """

    def __init__(self, max_steps: int = 0, time_limit_seconds: float = 0.0):
        super().__init__()
        self.max_steps = max_steps
        self.time_limit_seconds = time_limit_seconds
        self._steps = 0
        self._deadline: Optional[float] = None
        self._started = 0.0

    def find_matching(
        self,
        required: Iterable[Any],
        allowed: Sequence[Pair],
    ) -> Optional[Set[Pair]]:
        required = frozenset(required)
        allowed = list(allowed)

        self._steps = 0
        self._started = time.monotonic()
        self._deadline = self._started + self.time_limit_seconds if self.time_limit_seconds > 0 else None

        logger.debug(f"Matching {len(required)} persons over {len(allowed)} allowed pairs")

        try:
            if len(required) % 2:
                result = None
            else:
                result = self._search(required, allowed, 0)
        except SearchTimeout:
            self.stats = MatcherStats(MatcherStatus.TIMEOUT, self._steps, self._elapsed())
            raise

        status = MatcherStatus.MATCHED if result is not None else MatcherStatus.INFEASIBLE
        self.stats = MatcherStats(status, self._steps, self._elapsed())
        logger.debug(f"Search {status.value} after {self._steps} steps")
        return set(result) if result is not None else None

    def _search(self, required: FrozenSet[Any], allowed: List[Pair], start: int) -> Optional[List[Pair]]:
        if not required:
            return []

        usable = [
            idx for idx in range(start, len(allowed))
            if allowed[idx].first in required and allowed[idx].second in required
        ]

        # Someone with no usable pair left cannot be matched on this branch
        reachable = {person for idx in usable for person in allowed[idx]}
        if len(reachable) < len(required):
            return None

        for idx in usable:
            pair = allowed[idx]

            self._tick()
            rest = self._search(required - {pair.first, pair.second}, allowed, idx + 1)
            if rest is not None:
                rest.append(pair)
                return rest

        return None

    def _tick(self):
        self._steps += 1
        if self.max_steps and self._steps > self.max_steps:
            raise SearchTimeout(
                f"Matcher exceeded {self.max_steps} search steps",
                steps=self._steps,
                elapsed=self._elapsed(),
            )
        if self._deadline is not None and time.monotonic() > self._deadline:
            raise SearchTimeout(
                f"Matcher exceeded {self.time_limit_seconds}s time limit",
                steps=self._steps,
                elapsed=self._elapsed(),
            )

    def _elapsed(self) -> float:
        return time.monotonic() - self._started


def find_matching(required: Iterable[Any], allowed: Sequence[Pair]) -> Optional[Set[Pair]]:
    """
    Find a perfect matching of ``required`` using only ``allowed`` pairs.

    Returns the empty set for an empty ``required`` and None when no matching
    exists (including any odd-sized ``required``). No search budget applies.
    """
    return BacktrackingMatcher().find_matching(required, allowed)
