"""Collapse a finished node arena into a result value."""

from __future__ import annotations

from typing import Dict, List, Tuple

from .errors import TreeCompositionError
from .nodes import NodeArena, NodeKind
from .values import Leaf, OrderedCollection, UnorderedCollection, Value


def collapse(arena: NodeArena) -> Value:
    """
    Reduce ``arena`` to the single value held by its root.

    The root holds the implicit ordered container, which in turn holds the
    document's one top-level value; that value is what gets returned. The
    walk is an explicit-stack post-order traversal, so it is safe for any
    nesting depth the builder accepted.

    Raises:
        TreeCompositionError: If the arena does not hold exactly one
            top-level value.
    """
    wrapper = arena[arena.top_level()]
    if len(wrapper.children) != 1:
        raise TreeCompositionError(
            f"Expected one top-level value, found {len(wrapper.children)}"
        )
    start = wrapper.children[0]

    results: Dict[int, Value] = {}
    stack: List[Tuple[int, bool]] = [(start, False)]
    while stack:
        index, expanded = stack.pop()
        node = arena[index]

        if node.kind is NodeKind.LEAF:
            results[index] = Leaf(node.payload)
            continue

        if not expanded:
            stack.append((index, True))
            stack.extend((child, False) for child in reversed(node.children))
            continue

        items = [results.pop(child) for child in node.children]
        if node.kind is NodeKind.ORDERED:
            results[index] = OrderedCollection.of(items)
        elif node.kind is NodeKind.UNORDERED:
            results[index] = UnorderedCollection.of(items)
        else:
            raise TreeCompositionError(f"Unexpected {node.kind.name} node inside the tree")

    return results[start]


__all__ = ["collapse"]
