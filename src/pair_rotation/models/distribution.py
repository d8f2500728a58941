"""Distribution (one round of pairs) model."""
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set

import pandas as pd

from pair_rotation.errors import InvalidPairError
from pair_rotation.models.pair import Pair, as_pair


@dataclass(frozen=True)
class Distribution:
    """
    One round: disjoint pairs plus the person left without a partner.

    ``leftover`` is the explicit "no partner this round" marker; it is part of
    the value (equality, serialization, coverage), not an implicit omission.
    """
    pairs: FrozenSet[Pair] = field(default_factory=frozenset)
    leftover: Optional[Any] = None

    def __post_init__(self):
        pairs = frozenset(as_pair(p) for p in self.pairs)
        object.__setattr__(self, "pairs", pairs)

        seen: Set[Any] = set()
        for pair in pairs:
            for person in pair:
                if person in seen:
                    raise InvalidPairError(f"{person!r} appears in more than one pair")
                seen.add(person)
        if self.leftover is not None and self.leftover in seen:
            raise InvalidPairError(f"Leftover {self.leftover!r} is also paired")

    def __len__(self):
        return len(self.pairs)

    def __iter__(self):
        return iter(self.sorted_pairs())

    def __contains__(self, pair) -> bool:
        return as_pair(pair) in self.pairs

    def people(self) -> Set[Any]:
        """Every person covered by this round, leftover included."""
        covered = {person for pair in self.pairs for person in pair}
        if self.leftover is not None:
            covered.add(self.leftover)
        return covered

    def partner_of(self, person: Any) -> Optional[Any]:
        """Partner of ``person``; None when left over. KeyError when absent."""
        if person == self.leftover:
            return None
        for pair in self.pairs:
            if person in pair:
                return pair.other(person)
        raise KeyError(person)

    def sorted_pairs(self) -> List[Pair]:
        return sorted(self.pairs)

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization."""
        return {
            "pairs": [list(p.as_tuple()) for p in self.sorted_pairs()],
            "leftover": self.leftover,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "Distribution":
        """Create from dictionary."""
        return cls(
            pairs=frozenset(as_pair(p) for p in d.get("pairs", [])),
            leftover=d.get("leftover"),
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable, leftover: Optional[Any] = None) -> "Distribution":
        return cls(pairs=frozenset(as_pair(p) for p in pairs), leftover=leftover)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per pair, plus one row with an empty partner for the leftover."""
        rows = [{"person_a": p.first, "person_b": p.second} for p in self.sorted_pairs()]
        if self.leftover is not None:
            rows.append({"person_a": self.leftover, "person_b": ""})
        if not rows:
            return pd.DataFrame(columns=["person_a", "person_b"])
        return pd.DataFrame(rows)

    def __repr__(self):
        body = ", ".join(repr(p) for p in self.sorted_pairs())
        if self.leftover is not None:
            return f"Distribution({body}; leftover={self.leftover!r})"
        return f"Distribution({body})"
