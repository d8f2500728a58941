"""Tests for canonical pairs and pair enumeration."""
import pytest

from pair_rotation.errors import InvalidPairError
from pair_rotation.models.pair import Pair, all_pairs, as_pair, canonicalize


class TestCanonicalize:
    """Tests for Pair canonicalization."""

    def test_orders_members(self):
        """Smaller person always comes first."""
        pair = canonicalize("Bob", "Alice")
        assert pair.first == "Alice"
        assert pair.second == "Bob"

    def test_both_orders_are_the_same_pair(self):
        assert canonicalize("A", "B") == canonicalize("B", "A")
        assert hash(Pair("A", "B")) == hash(Pair("B", "A"))
        assert len({Pair("A", "B"), Pair("B", "A")}) == 1

    def test_equal_persons_rejected(self):
        with pytest.raises(InvalidPairError):
            canonicalize("A", "A")

    def test_invalid_pair_is_value_error(self):
        """Callers catching ValueError also catch bad pairs."""
        with pytest.raises(ValueError):
            Pair(3, 3)

    def test_numeric_ids(self):
        assert canonicalize(7, 2).as_tuple() == (2, 7)

    def test_other_and_contains(self):
        pair = Pair("Alice", "Bob")
        assert "Alice" in pair
        assert "Eve" not in pair
        assert pair.other("Alice") == "Bob"
        assert pair.other("Bob") == "Alice"
        with pytest.raises(KeyError):
            pair.other("Eve")

    def test_disjoint(self):
        assert Pair("A", "B").disjoint(Pair("C", "D"))
        assert not Pair("A", "B").disjoint(Pair("B", "C"))

    def test_pairs_sort_lexicographically(self):
        pairs = [Pair("B", "C"), Pair("A", "D"), Pair("A", "B")]
        assert sorted(pairs) == [Pair("A", "B"), Pair("A", "D"), Pair("B", "C")]


class TestAsPair:
    """Tests for normalizing caller input to pairs."""

    def test_from_list(self):
        assert as_pair(["D", "C"]) == Pair("C", "D")

    def test_pair_passthrough(self):
        pair = Pair("A", "B")
        assert as_pair(pair) is pair

    @pytest.mark.parametrize("value", [["A"], ["A", "B", "C"], "AB", 5])
    def test_malformed(self, value):
        with pytest.raises(InvalidPairError):
            as_pair(value)


class TestAllPairs:
    """Tests for the candidate pair universe."""

    @pytest.mark.parametrize("n", [0, 1, 2, 3, 4, 7, 10])
    def test_count(self, n):
        persons = {f"P{i:02d}" for i in range(n)}
        assert len(all_pairs(persons)) == n * (n - 1) // 2

    def test_order_is_ascending(self, roster4):
        assert all_pairs(roster4) == [
            Pair("A", "B"), Pair("A", "C"), Pair("A", "D"),
            Pair("B", "C"), Pair("B", "D"), Pair("C", "D"),
        ]

    def test_every_pair_canonical_and_unique(self, team):
        pairs = all_pairs(team)
        assert len(set(pairs)) == len(pairs)
        assert all(p.first < p.second for p in pairs)

    def test_input_order_irrelevant(self):
        assert all_pairs(["C", "A", "B"]) == all_pairs(["A", "B", "C"])

    def test_duplicates_collapse(self):
        assert all_pairs(["A", "B", "A"]) == [Pair("A", "B")]
