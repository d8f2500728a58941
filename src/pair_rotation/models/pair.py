"""Canonical unordered pairs over an ordered roster."""
from dataclasses import dataclass
from itertools import combinations
from typing import Any, Hashable, Iterable, Iterator, List

from pair_rotation.errors import InvalidPairError
from pair_rotation.utils.logging_setup import log_function_call

# Any hashable, totally ordered identifier (names in practice).
Person = Hashable


@dataclass(frozen=True, order=True)
class Pair:
    """
    Unordered combination of two distinct persons.

    Always stored as ``(min, max)``, so ``Pair("Bob", "Alice")`` and
    ``Pair("Alice", "Bob")`` are the same value.
    """
    first: Any
    second: Any

    def __post_init__(self):
        if self.first == self.second:
            raise InvalidPairError(f"Cannot pair {self.first!r} with itself")
        if self.second < self.first:
            low, high = self.second, self.first
            object.__setattr__(self, "first", low)
            object.__setattr__(self, "second", high)

    def __iter__(self) -> Iterator[Any]:
        yield self.first
        yield self.second

    def __contains__(self, person: Any) -> bool:
        return person == self.first or person == self.second

    def __repr__(self):
        return f"({self.first!r}, {self.second!r})"

    def other(self, person: Any) -> Any:
        """Return the partner of ``person`` in this pair."""
        if person == self.first:
            return self.second
        if person == self.second:
            return self.first
        raise KeyError(person)

    def disjoint(self, other: "Pair") -> bool:
        return self.first not in other and self.second not in other

    def as_tuple(self) -> tuple:
        return (self.first, self.second)


def canonicalize(a: Any, b: Any) -> Pair:
    """Return the canonical ``(min, max)`` pair; raises InvalidPairError when ``a == b``."""
    return Pair(a, b)


def as_pair(value: Any) -> Pair:
    """Normalize a Pair or any two-item iterable (tuple, list, JSON array) to a Pair."""
    if isinstance(value, Pair):
        return value
    if isinstance(value, (str, bytes)):
        raise InvalidPairError(f"Expected two persons, got {value!r}")
    try:
        items = list(value)
    except TypeError:
        raise InvalidPairError(f"Expected two persons, got {value!r}") from None
    if len(items) != 2:
        raise InvalidPairError(f"Expected two persons, got {len(items)}: {value!r}")
    return canonicalize(items[0], items[1])


@log_function_call
def all_pairs(persons: Iterable[Any]) -> List[Pair]:
    """
    Enumerate every unordered pair over ``persons`` exactly once.

    Pairs come out ascending by ``(first, second)``, which fixes the order the
    matcher scans them in. For ``n`` persons there are ``n * (n - 1) / 2`` pairs.
    """
    ordered = sorted(set(persons))
    return [Pair(a, b) for a, b in combinations(ordered, 2)]
