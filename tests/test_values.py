"""Tests for result value types."""

from vecset import parse
from vecset.values import Leaf, OrderedCollection, UnorderedCollection, is_value, structurally_equal


def ordered(*items):
    return OrderedCollection.of(items)


def unordered(*items):
    return UnorderedCollection.of(items)


class TestEquality:
    """Deep structural equality and hashing."""

    def test_leaf_equality(self):
        assert Leaf("a") == Leaf("a")
        assert Leaf("a") != Leaf("b")
        assert Leaf("0") != "0"

    def test_unordered_deduplicates_leaves(self):
        assert len(unordered(Leaf("a"), Leaf("a"), Leaf("b"))) == 2

    def test_unordered_ignores_order(self):
        assert unordered(Leaf("a"), Leaf("b")) == unordered(Leaf("b"), Leaf("a"))

    def test_ordered_respects_order(self):
        assert ordered(Leaf("a"), Leaf("b")) != ordered(Leaf("b"), Leaf("a"))

    def test_ordered_members_deduplicate_by_structure(self):
        one_two = ordered(Leaf("1"), Leaf("2"))
        assert len(unordered(one_two, ordered(Leaf("1"), Leaf("2")))) == 1
        assert len(unordered(one_two, ordered(Leaf("2"), Leaf("1")))) == 2

    def test_unordered_members_deduplicate_by_membership(self):
        first = unordered(Leaf("1"), Leaf("2"))
        second = unordered(Leaf("2"), Leaf("1"), Leaf("1"))
        assert len(unordered(first, second)) == 1

    def test_kinds_never_compare_equal(self):
        assert ordered() != unordered()
        assert ordered(Leaf("a")) != unordered(Leaf("a"))

    def test_values_are_hashable(self):
        lookup = {parse("[a, {b}]"): "found"}
        assert lookup[parse("[a,{b}]")] == "found"

    def test_is_value(self):
        assert is_value(Leaf("a"))
        assert is_value(ordered())
        assert is_value(unordered())
        assert not is_value("a")


class TestContainerHelpers:
    """Sequence-like helpers."""

    def test_len_and_iter(self):
        value = parse("[a, b, c]")
        assert len(value) == 3
        assert [item.text for item in value] == ["a", "b", "c"]

    def test_contains(self):
        value = parse("{a, [b]}")
        assert Leaf("a") in value
        assert ordered(Leaf("b")) in value
        assert Leaf("b") not in value

    def test_pattern_matching(self):
        match parse("[x, {y}]"):
            case OrderedCollection(items=(Leaf(text=first), UnorderedCollection(items=rest))):
                assert first == "x"
                assert rest == frozenset({Leaf("y")})
            case _:
                raise AssertionError("value did not match")


class TestToPython:
    """Conversion to plain Python objects."""

    def test_leaf(self):
        assert parse("0").to_python() == "0"

    def test_ordered(self):
        assert parse("[a, [b]]").to_python() == ["a", ["b"]]

    def test_unordered_members(self):
        assert parse("{a, [b, c], {d}}").to_python() == frozenset({"a", ("b", "c"), frozenset({"d"})})


class TestDeepValues:
    """Hashing, comparison and conversion of deeply nested values."""

    DEPTH = 3000

    def chain(self, leaf="0", wrap=ordered):
        value = Leaf(leaf)
        for _ in range(self.DEPTH):
            value = wrap(value)
        return value

    def test_hash_is_stable(self):
        assert hash(self.chain()) == hash(self.chain())

    def test_equality(self):
        assert self.chain() == self.chain()
        assert self.chain() != self.chain("1")
        assert self.chain() != self.chain(wrap=unordered)

    def test_membership(self):
        assert len(unordered(self.chain(), self.chain(), self.chain("1"))) == 2

    def test_structurally_equal_with_unordered_members(self):
        left = unordered(self.chain(), self.chain("1", wrap=unordered))
        right = unordered(self.chain("1", wrap=unordered), self.chain())
        assert structurally_equal(left, right)

    def test_to_python_nested_in_unordered(self):
        value = unordered(self.chain()).to_python()
        (member,) = value
        for _ in range(self.DEPTH):
            assert isinstance(member, tuple)
            (member,) = member
        assert member == "0"
