"""
History Ledger
==============
Ordered record of past rounds, oldest first.

The ledger only ever shrinks from the front (``forget_oldest``): when the
pairs used in the retained rounds make the next round infeasible, dropping
the oldest round relaxes the constraint while keeping the most recent rounds'
no-repeat guarantee the longest.
"""
from collections import deque
from typing import Any, Deque, Iterable, Iterator, Mapping, Set, Tuple

from pair_rotation.models.distribution import Distribution
from pair_rotation.models.pair import Pair


def _as_distribution(record: Any) -> Distribution:
    if isinstance(record, Distribution):
        return record
    if isinstance(record, Mapping):
        return Distribution.from_dict(record)
    return Distribution.from_pairs(record)


class HistoryLedger:
    """Past rounds, oldest first, normalized to canonical pairs."""

    def __init__(self, rounds: Iterable[Distribution] = ()):
        self._rounds: Deque[Distribution] = deque(_as_distribution(r) for r in rounds)

    @classmethod
    def from_records(cls, records: Iterable[Any]) -> "HistoryLedger":
        """
        Build a ledger from persisted records.

        Each record may be a Distribution, a ``{"pairs": [...], "leftover": ...}``
        mapping, or a plain iterable of two-person pairs.
        """
        return cls(_as_distribution(r) for r in records)

    def __len__(self):
        return len(self._rounds)

    def __iter__(self) -> Iterator[Distribution]:
        return iter(self._rounds)

    def __repr__(self):
        return f"HistoryLedger({len(self._rounds)} rounds)"

    @property
    def rounds(self) -> Tuple[Distribution, ...]:
        return tuple(self._rounds)

    def pairs_ever_used(self) -> Set[Pair]:
        """Union of all pairs across retained rounds."""
        used: Set[Pair] = set()
        for distribution in self._rounds:
            used |= distribution.pairs
        return used

    def forget_oldest(self) -> bool:
        """Drop the oldest round. Returns False if there was nothing to forget."""
        if not self._rounds:
            return False
        self._rounds.popleft()
        return True

    def oldest(self) -> Distribution:
        return self._rounds[0]

    def copy(self) -> "HistoryLedger":
        return HistoryLedger(self._rounds)

    def latest(self, count: int) -> "HistoryLedger":
        """A new ledger holding only the ``count`` most recent rounds."""
        if count <= 0:
            return HistoryLedger()
        return HistoryLedger(list(self._rounds)[-count:])

    def append(self, distribution: Distribution) -> "HistoryLedger":
        """A new ledger with ``distribution`` recorded as the newest round."""
        return HistoryLedger([*self._rounds, _as_distribution(distribution)])

    def last_leftover_index(self, person: Any) -> int:
        """Index of the most recent round where ``person`` sat out, -1 if never."""
        for idx in range(len(self._rounds) - 1, -1, -1):
            if self._rounds[idx].leftover == person:
                return idx
        return -1
