"""Intermediate node tree built by the tree builder.

Nodes live in an arena (a plain list) and refer to each other by index. The
root sentinel is always index 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List, Optional

from .errors import TreeCompositionError
from .lexer import Token

ROOT_INDEX = 0


class NodeKind(Enum):
    ROOT = auto()
    ORDERED = auto()
    UNORDERED = auto()
    LEAF = auto()


@dataclass
class Node:
    """One node of the intermediate tree."""

    kind: NodeKind
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    payload: Optional[str] = None
    token: Optional[Token] = None
    # The ordered container wrapping the whole document
    implicit: bool = False

    @property
    def is_root(self) -> bool:
        return self.kind is NodeKind.ROOT

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    @property
    def is_container(self) -> bool:
        return self.kind in (NodeKind.ORDERED, NodeKind.UNORDERED)


class NodeArena:
    """Growable list of nodes addressed by index."""

    def __init__(self) -> None:
        self.nodes: List[Node] = [Node(kind=NodeKind.ROOT)]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    @property
    def root(self) -> Node:
        return self.nodes[ROOT_INDEX]

    def add(
        self,
        kind: NodeKind,
        parent: int,
        *,
        payload: Optional[str] = None,
        token: Optional[Token] = None,
        implicit: bool = False,
    ) -> int:
        """Create a node of ``kind`` under ``parent`` and return its index."""
        if kind is NodeKind.ROOT:
            raise TreeCompositionError("The root node cannot be nested")
        if kind is NodeKind.LEAF and payload is None:
            raise TreeCompositionError("Leaf nodes need a payload")
        if not 0 <= parent < len(self.nodes):
            raise TreeCompositionError(f"No node at index {parent}")

        owner = self.nodes[parent]
        if owner.is_leaf:
            raise TreeCompositionError("Cannot add child to leaf node")
        if owner.is_root and owner.children:
            raise TreeCompositionError("The root node holds exactly one value")

        index = len(self.nodes)
        self.nodes.append(Node(
            kind=kind,
            parent=parent,
            payload=payload,
            token=token,
            implicit=implicit,
        ))
        owner.children.append(index)
        return index

    def parent_of(self, index: int) -> int:
        parent = self.nodes[index].parent
        if parent is None:
            raise TreeCompositionError("The root node has no parent")
        return parent

    def top_level(self) -> int:
        """Index of the single value held by the root."""
        children = self.root.children
        if len(children) != 1:
            raise TreeCompositionError("The root node holds exactly one value")
        return children[0]


__all__ = ["ROOT_INDEX", "NodeKind", "Node", "NodeArena"]
