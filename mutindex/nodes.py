"""Syntax node model shared by every part of mutindex.

Nodes are frozen dataclasses so they are hashable and compare structurally.
A node never changes after construction; helpers such as `with_child` and
`without_child` return fresh nodes instead.

Children are either other nodes or atoms. Atoms carry the payload of leaf
kinds (the identifier of a NAME, the value of an INT) and the selector of a
CALL, and are never mutated on their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class NodeKind(Enum):
    """Every node kind the mutation framework knows about."""

    NIL = "nil"
    TRUE = "true"
    FALSE = "false"
    NAME = "name"
    INT = "int"
    STR = "str"
    IRANGE = "irange"
    ERANGE = "erange"
    CALL = "call"
    INDEX = "index"
    INDEX_ASSIGN = "index_assign"
    OP_ASSIGN = "op_assign"


class MutationContractError(AssertionError):
    """Raised when a node does not have the shape its kind requires.

    This is a bug at the parser/dispatcher boundary, not a recoverable
    condition, so it derives from AssertionError.
    """

    def __init__(self, kind: NodeKind, message: str):
        self.kind = kind
        super().__init__(f"{kind.name}: {message}")


Atom = Union[str, int, None]
Child = Union["Node", Atom]


@dataclass(frozen=True)
class Node:
    """An immutable syntax node: a kind tag plus an ordered tuple of children."""

    kind: NodeKind
    children: tuple[Child, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence but always store a tuple so the node stays hashable.
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def with_child(self, position: int, child: Child) -> Node:
        """Return a copy of this node with the child at `position` replaced."""
        children = list(self.children)
        children[position] = child
        return Node(self.kind, tuple(children))

    def without_child(self, position: int) -> Node:
        """Return a copy of this node with the child at `position` removed."""
        children = list(self.children)
        del children[position]
        return Node(self.kind, tuple(children))


def s(kind: NodeKind, *children: Child) -> Node:
    """Build a node of `kind` from explicit children."""
    return Node(kind, children)


N_NIL = s(NodeKind.NIL)
N_TRUE = s(NodeKind.TRUE)
N_FALSE = s(NodeKind.FALSE)

SINGLETONS: tuple[Node, ...] = (N_NIL, N_TRUE, N_FALSE)


def is_node(child: Child) -> bool:
    return isinstance(child, Node)


def n_nil(child: Child) -> bool:
    """Return True if `child` is the nil singleton."""
    return child == N_NIL


def n_irange(child: Child) -> bool:
    """Return True if `child` is an inclusive range."""
    return isinstance(child, Node) and child.kind is NodeKind.IRANGE


def n_range(child: Child) -> bool:
    return isinstance(child, Node) and child.kind in (NodeKind.IRANGE, NodeKind.ERANGE)


def n_int(child: Child, value: int | None = None) -> bool:
    """Return True if `child` is an integer literal, optionally of a given value."""
    if not (isinstance(child, Node) and child.kind is NodeKind.INT):
        return False
    return value is None or child.children == (value,)


def n_assignable(child: Child) -> bool:
    """Return True if `child` may stand on the left of a compound assignment."""
    return isinstance(child, Node) and child.kind in (NodeKind.NAME, NodeKind.INDEX_ASSIGN)


def name(identifier: str) -> Node:
    return s(NodeKind.NAME, identifier)


def int_lit(value: int) -> Node:
    return s(NodeKind.INT, value)


def str_lit(value: str) -> Node:
    return s(NodeKind.STR, value)
