"""
Mutators for leaf kinds: singletons, names, integer and string literals,
and ranges.

These exist so that recursion through receivers and index expressions can
reach the bottom of the tree. Each one is a small, fixed rule set.
"""

from __future__ import annotations

from typing import Iterator

from mutindex.config import MutationConfig
from mutindex.mutators.base import emit, emit_singletons, mutate_child
from mutindex.mutators.dispatch import handle
from mutindex.nodes import (
    N_FALSE,
    N_NIL,
    N_TRUE,
    MutationContractError,
    Node,
    NodeKind,
    int_lit,
    is_node,
    s,
    str_lit,
)

RANGE_INVERSE = {
    NodeKind.IRANGE: NodeKind.ERANGE,
    NodeKind.ERANGE: NodeKind.IRANGE,
}


def _payload(node: Node, expected: type) -> object:
    if len(node.children) != 1 or not isinstance(node.children[0], expected):
        raise MutationContractError(
            node.kind, f"expected a single {expected.__name__} payload, got {node.children!r}"
        )
    return node.children[0]


@handle(NodeKind.NIL)
def mutate_nil(node: Node, config: MutationConfig, asgn_target: bool = False) -> Iterator[Node]:
    # nil is already the weakest replacement there is.
    yield from ()


@handle(NodeKind.TRUE, NodeKind.FALSE)
def mutate_boolean(node: Node, config: MutationConfig, asgn_target: bool = False) -> Iterator[Node]:
    yield from emit(node, N_FALSE if node.kind is NodeKind.TRUE else N_TRUE)
    yield from emit(node, N_NIL)


@handle(NodeKind.NAME)
def mutate_name(node: Node, config: MutationConfig, asgn_target: bool = False) -> Iterator[Node]:
    _payload(node, str)
    yield from emit_singletons(node)


@handle(NodeKind.INT)
def mutate_int(node: Node, config: MutationConfig, asgn_target: bool = False) -> Iterator[Node]:
    """Replace an integer with the singletons and a few nearby values."""
    value = _payload(node, int)
    yield from emit_singletons(node)

    seen = {value}
    for candidate in (0, 1, -value, value + 1, value - 1):
        if candidate in seen:
            continue
        seen.add(candidate)
        yield from emit(node, int_lit(candidate))


@handle(NodeKind.STR)
def mutate_str(node: Node, config: MutationConfig, asgn_target: bool = False) -> Iterator[Node]:
    value = _payload(node, str)
    yield from emit_singletons(node)
    if value:
        yield from emit(node, str_lit(""))


@handle(NodeKind.IRANGE, NodeKind.ERANGE)
def mutate_range(node: Node, config: MutationConfig, asgn_target: bool = False) -> Iterator[Node]:
    """Swap inclusive and exclusive ranges, then mutate each bound."""
    if len(node.children) != 2 or not all(is_node(bound) for bound in node.children):
        raise MutationContractError(node.kind, "expected lower and upper bound nodes")

    yield from emit_singletons(node)
    yield from emit(node, s(RANGE_INVERSE[node.kind], *node.children))
    yield from mutate_child(node, 0, config)
    yield from mutate_child(node, 1, config)
