"""
Mutators for method calls and compound assignments.
"""

from __future__ import annotations

from typing import Iterator

from mutindex.config import MutationConfig
from mutindex.mutators.base import (
    delete_child,
    emit,
    emit_propagation,
    emit_singletons,
    mutate_child,
)
from mutindex.mutators.dispatch import handle
from mutindex.nodes import MutationContractError, Node, NodeKind, is_node, n_assignable

# CALL children are (receiver, selector, *arguments).
FIRST_ARGUMENT = 2


@handle(NodeKind.CALL)
def mutate_call(node: Node, config: MutationConfig, asgn_target: bool = False) -> Iterator[Node]:
    """Mutate the receiver and each argument of a call; the selector is kept."""
    if len(node.children) < 2 or not isinstance(node.children[1], str):
        raise MutationContractError(node.kind, "expected a receiver slot and a selector")
    receiver = node.children[0]

    yield from emit_singletons(node)
    if receiver is not None:
        yield from emit(node, receiver)
        yield from mutate_child(node, 0, config)

    for position in range(FIRST_ARGUMENT, len(node.children)):
        yield from emit_propagation(node, node.children[position])
        yield from delete_child(node, position)
        yield from mutate_child(node, position, config)


@handle(NodeKind.OP_ASSIGN)
def mutate_op_assign(
    node: Node, config: MutationConfig, asgn_target: bool = False
) -> Iterator[Node]:
    """Mutate both sides of `target op= value`.

    The target is recursed into as a compound-assignment target and only
    mutations that can still be assigned to are kept.
    """
    if (
        len(node.children) != 3
        or not is_node(node.children[0])
        or not isinstance(node.children[1], str)
        or not is_node(node.children[2])
    ):
        raise MutationContractError(node.kind, "expected (target, operator, value)")

    yield from mutate_child(node, 0, config, asgn_target=True, predicate=n_assignable)
    yield from mutate_child(node, 2, config)
