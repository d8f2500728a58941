"""
Validation
==========
Independent checks of a planned round against roster, desires, blocked
pairs and the history window it was planned with.
"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from pair_rotation.models.distribution import Distribution
from pair_rotation.models.pair import as_pair
from pair_rotation.solver.history import HistoryLedger
from pair_rotation.utils.logging_setup import get_logger, log_constraint

logger = get_logger("pair_rotation.solver.validation")


@dataclass
class Violation:
    """Single violation with details."""
    type: str  # "unknown_person", "uncovered", "bad_leftover", "missing_desire", "repeat", "blocked"
    message: str
    person: Any = None
    pair: Any = None


@dataclass
class ValidationResult:
    """Violation counts for a round."""
    unknown_people: int = 0      # Paired persons outside the roster
    uncovered: int = 0           # Roster members neither paired nor left over
    bad_leftover: int = 0        # Leftover on an even roster
    missing_desires: int = 0     # Desired pairs absent from the round
    repeats: int = 0             # Pairs already used in the history window
    blocked: int = 0             # Pairs that must never be formed

    violations: List[Violation] = field(default_factory=list)

    def add_violation(self, v: Violation):
        self.violations.append(v)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def as_dict(self) -> Dict[str, int]:
        return {
            "unknown_people": self.unknown_people,
            "uncovered": self.uncovered,
            "bad_leftover": self.bad_leftover,
            "missing_desires": self.missing_desires,
            "repeats": self.repeats,
            "blocked": self.blocked,
        }


def validate_distribution(
    distribution: Distribution,
    roster: Iterable[Any],
    desires: Iterable[Any] = (),
    history: Optional[HistoryLedger] = None,
    blocked: Iterable[Any] = (),
) -> ValidationResult:
    """
    Check a round.

    Pair disjointness is enforced by Distribution itself; this covers the rest:
    every roster member covered exactly once, at most one leftover and only on
    an odd roster, desires present, no blocked pair, and no pair from
    ``history`` except desired ones.

    Args:
        distribution: The round to check
        roster: Persons the round was planned for
        desires: Pairs that had to appear
        history: The retained window the round was planned against
        blocked: Pairs that must never appear
    """
    result = ValidationResult()
    roster = set(roster)
    desired = {as_pair(d) for d in desires}
    blocked = {as_pair(b) for b in blocked}

    covered = distribution.people()
    for person in sorted(covered - roster, key=repr):
        result.unknown_people += 1
        result.add_violation(Violation("unknown_person", f"{person!r} is not in the roster", person=person))

    for person in sorted(roster - covered, key=repr):
        result.uncovered += 1
        result.add_violation(Violation("uncovered", f"{person!r} has no pair and is not the leftover", person=person))

    if distribution.leftover is not None and len(roster) % 2 == 0:
        result.bad_leftover += 1
        result.add_violation(Violation(
            "bad_leftover",
            f"{distribution.leftover!r} left over on an even roster",
            person=distribution.leftover,
        ))

    for pair in sorted(desired - distribution.pairs):
        result.missing_desires += 1
        result.add_violation(Violation("missing_desire", f"Desired pair {pair!r} is missing", pair=pair))

    for pair in sorted(distribution.pairs & blocked):
        result.blocked += 1
        result.add_violation(Violation("blocked", f"Blocked pair {pair!r} was formed", pair=pair))

    if history is not None:
        used = Counter(p for round_ in history for p in round_.pairs)
        for pair in sorted((distribution.pairs - desired) & set(used)):
            result.repeats += 1
            result.add_violation(Violation(
                "repeat",
                f"Pair {pair!r} repeats a pairing from {used[pair]} retained round(s)",
                pair=pair,
            ))

    for name, count in result.as_dict().items():
        log_constraint(logger, name, count == 0, f"{count} violation(s)" if count else "")

    return result
