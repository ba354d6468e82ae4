"""Result values produced by the collapser.

A value is one of three frozen dataclasses. Equality and hashing are deep
and structural, so containers can be members of unordered collections and
duplicates collapse the way set members should.

Containers compute their hash once, from the already stored hashes of their
members, and compare with an explicit stack. Nothing here recurses, so values
of any nesting depth can be hashed, compared and converted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Tuple, Union


@dataclass(frozen=True)
class Leaf:
    """A terminal string value. Never coerced."""

    text: str

    def to_python(self) -> str:
        return self.text


class _Container:
    """Shared equality, hashing and conversion for both collection kinds."""

    items: Any
    _hash: int

    def _set_hash(self, tag: str, member_hashes: Any) -> None:
        object.__setattr__(self, "_hash", hash((tag, member_hashes)))

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not is_value(other):
            return NotImplemented
        return structurally_equal(self, other)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.items)

    def to_python(self) -> Any:
        return _to_python(self)


@dataclass(frozen=True, eq=False)
class OrderedCollection(_Container):
    """Elements in insertion order (``[...]``)."""

    items: Tuple["Value", ...] = ()
    _hash: int = field(init=False, repr=False, compare=False, default=0)

    def __post_init__(self) -> None:
        self._set_hash("ordered", tuple(hash(item) for item in self.items))

    @classmethod
    def of(cls, items: Iterable["Value"]) -> "OrderedCollection":
        return cls(tuple(items))


@dataclass(frozen=True, eq=False)
class UnorderedCollection(_Container):
    """Distinct elements with no significant order (``{...}``)."""

    items: FrozenSet["Value"] = frozenset()
    _hash: int = field(init=False, repr=False, compare=False, default=0)

    def __post_init__(self) -> None:
        self._set_hash("unordered", frozenset(hash(item) for item in self.items))

    @classmethod
    def of(cls, items: Iterable["Value"]) -> "UnorderedCollection":
        return cls(frozenset(items))

    def __contains__(self, item: object) -> bool:
        return item in self.items


Value = Union[Leaf, OrderedCollection, UnorderedCollection]


def is_value(obj: object) -> bool:
    return isinstance(obj, (Leaf, OrderedCollection, UnorderedCollection))


def structurally_equal(left: Value, right: Value) -> bool:
    """Compare two values member by member without recursion."""
    pending: List[Tuple[Value, Value]] = [(left, right)]
    while pending:
        a, b = pending.pop()
        if a is b:
            continue
        if type(a) is not type(b) or hash(a) != hash(b):
            return False
        if isinstance(a, Leaf):
            if a.text != b.text:
                return False
            continue
        if len(a.items) != len(b.items):
            return False
        if isinstance(a, OrderedCollection):
            pending.extend(zip(a.items, b.items))
            continue

        # Members of each side are pairwise distinct, so pairing by hash is enough
        by_hash: Dict[int, List[Value]] = {}
        for member in b.items:
            by_hash.setdefault(hash(member), []).append(member)
        for member in a.items:
            candidates = by_hash.get(hash(member), [])
            if len(candidates) == 1:
                pending.append((member, candidates[0]))
            elif not any(structurally_equal(member, candidate) for candidate in candidates):
                return False
    return True


def _to_python(value: Value) -> Any:
    # Members of a frozenset must be hashable, so ordered values below an
    # unordered one become tuples instead of lists
    stack: List[Tuple[Value, bool, bool]] = [(value, False, False)]
    out: List[Any] = []

    while stack:
        item, frozen, expanded = stack.pop()
        if isinstance(item, Leaf):
            out.append(item.text)
            continue

        if not expanded:
            stack.append((item, frozen, True))
            child_frozen = frozen or isinstance(item, UnorderedCollection)
            stack.extend((child, child_frozen, False) for child in reversed(tuple(item.items)))
            continue

        split = len(out) - len(item.items)
        parts = out[split:]
        del out[split:]
        if isinstance(item, UnorderedCollection):
            out.append(frozenset(parts))
        elif frozen:
            out.append(tuple(parts))
        else:
            out.append(parts)

    return out[0]


__all__ = [
    "Leaf",
    "OrderedCollection",
    "UnorderedCollection",
    "Value",
    "is_value",
    "structurally_equal",
]
