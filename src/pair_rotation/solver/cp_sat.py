"""
CP-SAT Matcher
==============
Exact-cover model of the matching problem on OR-Tools CP-SAT.

Key model:
- Variables: use[pair] = 1 if the allowed pair is part of the round
- Constraint: every required person is covered by exactly one chosen pair

Same contract as the backtracking matcher. Use it when rosters grow beyond a
few dozen people and first-fit backtracking gets slow on tight histories.
"""
import time
from typing import Any, Dict, Iterable, Optional, Sequence, Set

from ortools.sat.python import cp_model

from pair_rotation.errors import SearchTimeout
from pair_rotation.models.pair import Pair
from pair_rotation.solver.base import BaseMatcher, MatcherStats, MatcherStatus
from pair_rotation.utils.logging_setup import get_logger

logger = get_logger("pair_rotation.solver.cp_sat")


class CpSatMatcher(BaseMatcher):
    """
    Matching engine backed by CP-SAT.

    Args:
        time_limit_seconds: Solver time limit (0 = unlimited)
        num_workers: Parallel search workers; 1 keeps results reproducible
        random_seed: Solver seed
    """

    def __init__(self, time_limit_seconds: float = 0.0, num_workers: int = 1, random_seed: int = 0):
        super().__init__()
        self.time_limit_seconds = time_limit_seconds
        self.num_workers = num_workers
        self.random_seed = random_seed

    def find_matching(
        self,
        required: Iterable[Any],
        allowed: Sequence[Pair],
    ) -> Optional[Set[Pair]]:
        start_time = time.monotonic()
        required = set(required)

        if not required:
            self.stats = MatcherStats(MatcherStatus.MATCHED, 0, time.monotonic() - start_time)
            return set()

        usable = [p for p in dict.fromkeys(allowed) if p.first in required and p.second in required]

        incident: Dict[Any, list] = {person: [] for person in required}
        for pair in usable:
            incident[pair.first].append(pair)
            incident[pair.second].append(pair)

        if len(required) % 2 or any(not pairs for pairs in incident.values()):
            logger.debug("Matching trivially infeasible (odd size or isolated person)")
            self.stats = MatcherStats(MatcherStatus.INFEASIBLE, 0, time.monotonic() - start_time)
            return None

        model = cp_model.CpModel()
        use = {pair: model.NewBoolVar(f"use_{idx}") for idx, pair in enumerate(usable)}

        for person, pairs in incident.items():
            model.Add(sum(use[p] for p in pairs) == 1)

        logger.debug(f"CP-SAT model: {len(use)} pair variables, {len(incident)} cover constraints")

        solver = cp_model.CpSolver()
        if self.time_limit_seconds > 0:
            solver.parameters.max_time_in_seconds = self.time_limit_seconds
        solver.parameters.num_workers = self.num_workers
        solver.parameters.random_seed = self.random_seed
        solver.parameters.log_search_progress = False

        status = solver.Solve(model)
        elapsed = time.monotonic() - start_time
        branches = int(solver.NumBranches())

        status_name = {
            cp_model.OPTIMAL: "optimal",
            cp_model.FEASIBLE: "feasible",
            cp_model.INFEASIBLE: "infeasible",
            cp_model.MODEL_INVALID: "invalid",
            cp_model.UNKNOWN: "unknown",
        }.get(status, "unknown")
        logger.debug(f"CP-SAT status={status_name}, time={elapsed:.3f}s, branches={branches}")

        if status in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            self.stats = MatcherStats(MatcherStatus.MATCHED, branches, elapsed)
            return {pair for pair, var in use.items() if solver.Value(var) == 1}

        if status == cp_model.INFEASIBLE:
            self.stats = MatcherStats(MatcherStatus.INFEASIBLE, branches, elapsed)
            return None

        if status == cp_model.MODEL_INVALID:
            self.stats = MatcherStats(MatcherStatus.UNKNOWN, branches, elapsed)
            raise RuntimeError(f"CP-SAT rejected the matching model: {model.Validate()}")

        self.stats = MatcherStats(MatcherStatus.TIMEOUT, branches, elapsed)
        raise SearchTimeout(
            f"CP-SAT gave no answer within {self.time_limit_seconds}s",
            steps=branches,
            elapsed=elapsed,
        )
