"""
Rotation Planner
================
Produces the next round of pairs for a roster.

Algorithm:
    1. Reject bad desires before any search (outside roster, overlapping, blocked)
    2. Split the roster into names bound by desires and free names
    3. If the free names are odd, rank leftover candidates: least recently
       left over first, ties broken by descending name
    4. Loop over a private copy of the history window:
         disallowed = pairs used in retained rounds + blocked pairs
         for each leftover candidate: match the remaining free names using
         only pairs outside `disallowed`; first success wins
         otherwise forget the oldest round and retry
    5. When nothing is left to forget and still no matching: InfeasibleError

The loop runs at most len(window) + 1 times; each forgotten round only
removes pairs from `disallowed`, so feasibility never decreases.
"""
import time
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set, Union

from pair_rotation.errors import InfeasibleError, InvalidDesireError
from pair_rotation.models.constraints import PlannerConfig
from pair_rotation.models.distribution import Distribution
from pair_rotation.models.pair import Pair, all_pairs, as_pair
from pair_rotation.solver.base import BaseMatcher
from pair_rotation.solver.history import HistoryLedger
from pair_rotation.utils.logging_setup import SolverLogger, get_logger
from pair_rotation.utils.structured_logging import get_structured_logger

logger = get_logger("pair_rotation.solver.planner")
slog = SolverLogger("pair_rotation.solver.planner")
events = get_structured_logger("pair_rotation.solver.planner")

HistoryInput = Union[HistoryLedger, Iterable[Any], None]


@dataclass
class PlanResult:
    """A planned round plus how much history had to be given up to get it."""
    distribution: Distribution
    forgotten: List[Distribution] = field(default_factory=list)  # Oldest first
    window_size: int = 0  # Rounds still constraining the result
    attempts: int = 1
    solve_time_seconds: float = 0.0
    stats: Dict = field(default_factory=dict)

    @property
    def forgotten_count(self) -> int:
        return len(self.forgotten)


def validate_desires(roster: Set[Any], desires: Iterable[Any], blocked: FrozenSet[Pair] = frozenset()) -> Set[Pair]:
    """
    Canonicalize desires and check them against the roster.

    Raises:
        InvalidPairError: a desire pairs a person with themselves
        InvalidDesireError: a desire is outside the roster, shares a person
            with another desire, or is blocked
    """
    pairs = {as_pair(d) for d in desires}
    bound: Dict[Any, Pair] = {}

    for pair in sorted(pairs):
        for person in pair:
            if person not in roster:
                raise InvalidDesireError(f"Desired pair {pair!r}: {person!r} is not in the roster")
            if person in bound:
                raise InvalidDesireError(
                    f"{person!r} appears in two desired pairs: {bound[person]!r} and {pair!r}"
                )
            bound[person] = pair
        if pair in blocked:
            raise InvalidDesireError(f"Desired pair {pair!r} is blocked")

    return pairs


def _as_ledger(history: HistoryInput) -> HistoryLedger:
    if history is None:
        return HistoryLedger()
    if isinstance(history, HistoryLedger):
        return history
    return HistoryLedger.from_records(history)


class RotationPlanner:
    """
    Plans rounds with the configured matcher.

    Args:
        config: Planner configuration (defaults to PlannerConfig())
        matcher: Explicit matcher instance, overriding config.matcher
    """

    def __init__(self, config: Optional[PlannerConfig] = None, matcher: Optional[BaseMatcher] = None):
        self.config = config or PlannerConfig()
        self.matcher = matcher or self.config.build_matcher()

    def plan(
        self,
        roster: Iterable[Any],
        desires: Iterable[Any] = (),
        history: HistoryInput = None,
        blocked: Iterable[Any] = (),
    ) -> PlanResult:
        """
        Plan the next round.

        Args:
            roster: Persons to distribute
            desires: Pairs that must appear in the round
            history: Past rounds, oldest first (never mutated)
            blocked: Pairs that must never be formed

        Returns:
            PlanResult with the distribution and the rounds forgotten to reach it

        Raises:
            InvalidPairError, InvalidDesireError: bad input, before any search
            InfeasibleError: no round exists even with the whole window forgotten
            SearchTimeout: the matcher ran out of budget
        """
        start_time = time.monotonic()
        roster = set(roster)
        blocked = frozenset(as_pair(b) for b in blocked)
        desired = validate_desires(roster, desires, blocked)

        full_history = _as_ledger(history)
        if self.config.history_window > 0:
            working = full_history.latest(self.config.history_window)
        else:
            working = full_history.copy()

        bound_names = {person for pair in desired for person in pair}
        free_names = roster - bound_names

        slog.phase("Planning round")
        logger.info(
            f"Roster: {len(roster)} people, {len(desired)} desired pairs, "
            f"{len(free_names)} free, history window {len(working)}/{len(full_history)} rounds"
        )

        leftover_candidates = self._leftover_candidates(free_names, full_history)
        if leftover_candidates != [None]:
            slog.detail("leftover order", leftover_candidates)

        forgotten: List[Distribution] = []
        attempts = 0

        while True:
            attempts += 1
            disallowed = working.pairs_ever_used() | blocked

            slog.enter(f"Attempt {attempts}: {len(working)} rounds retained, {len(disallowed)} pairs disallowed")
            found = self._match_with_leftover(free_names, leftover_candidates, disallowed)
            slog.exit(f"Attempt {attempts}: {'infeasible' if found is None else 'matched'}")

            if found is not None:
                matching, leftover = found
                distribution = Distribution(pairs=frozenset(desired | matching), leftover=leftover)
                result = PlanResult(
                    distribution=distribution,
                    forgotten=forgotten,
                    window_size=len(working),
                    attempts=attempts,
                    solve_time_seconds=time.monotonic() - start_time,
                    stats={
                        "matcher": type(self.matcher).__name__,
                        "search_steps": self.matcher.stats.steps,
                    },
                )
                slog.step(f"Planned {len(distribution)} pairs in {attempts} attempt(s)")
                if forgotten:
                    logger.warning(f"Forgot {len(forgotten)} oldest round(s) to find a feasible round")
                events.info(
                    "round_planned",
                    pairs=len(distribution),
                    leftover=leftover,
                    forgotten=len(forgotten),
                    window=len(working),
                    attempts=attempts,
                )
                return result

            oldest = working.oldest() if len(working) else None
            if working.forget_oldest():
                forgotten.append(oldest)
            else:
                logger.error(f"No feasible round after {attempts} attempts with history exhausted")
                events.error("round_infeasible", attempts=attempts, forgotten=len(forgotten))
                raise InfeasibleError(
                    f"Cannot schedule this round: no matching for {len(free_names)} free people "
                    f"even after forgetting all {len(forgotten)} history round(s)",
                    attempts=attempts,
                    forgotten=len(forgotten),
                )
            events.info("history_forgotten", remaining=len(working), forgotten=len(forgotten))

    def _match_with_leftover(self, free_names: Set[Any], leftover_candidates: List[Any], disallowed: Set[Pair]):
        for leftover in leftover_candidates:
            required = free_names - {leftover} if leftover is not None else free_names
            candidates = [p for p in all_pairs(required) if p not in disallowed]
            slog.detail("candidates", f"{len(candidates)} allowed pairs for {len(required)} people")

            matching = self.matcher.find_matching(required, candidates)
            if matching is not None:
                return matching, leftover
        return None

    @staticmethod
    def _leftover_candidates(free_names: Set[Any], history: HistoryLedger) -> List[Any]:
        if len(free_names) % 2 == 0:
            return [None]
        # Descending first, then a stable sort keeps descending order among ties
        by_name = sorted(free_names, reverse=True)
        return sorted(by_name, key=history.last_leftover_index)


def plan_next_round(
    roster: Iterable[Any],
    desires: Iterable[Any] = (),
    history: HistoryInput = None,
    blocked: Iterable[Any] = (),
    config: Optional[PlannerConfig] = None,
) -> Distribution:
    """Plan the next round and return only its distribution."""
    return RotationPlanner(config).plan(roster, desires, history, blocked).distribution
