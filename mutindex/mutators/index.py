"""
Mutation operators for indexed access: `a[i, ...]` and `a[i, ...] = v`.

The read and assignment operators share `_emit_index_mutations`, which
covers singleton substitution, receiver mutation, accessor-form and
range-drop rewrites and per-index structural mutation. The assignment
operator then adds the read degradation and, when the node owns its value,
value propagation and value mutation.

An assignment node used as the target of a compound assignment (`a[i] += v`)
has no value child. The dispatcher tells us via `asgn_target`.
"""

from __future__ import annotations

from typing import Iterator

from mutindex.config import MutationConfig
from mutindex.mutators.base import (
    children_indices,
    delete_child,
    emit,
    emit_propagation,
    emit_receiver_mutations,
    emit_singletons,
    mutate_child,
)
from mutindex.mutators.dispatch import handle
from mutindex.nodes import (
    MutationContractError,
    Node,
    NodeKind,
    is_node,
    n_int,
    n_irange,
    n_nil,
    s,
)

# Index positions: everything after the receiver, or everything between the
# receiver and the trailing value.
NO_VALUE_SPAN = slice(1, None)
REGULAR_SPAN = slice(1, -1)


def _check_shape(node: Node, minimum: int) -> None:
    if len(node.children) < minimum:
        raise MutationContractError(
            node.kind,
            f"expected at least {minimum} children, got {len(node.children)}",
        )
    for position, child in enumerate(node.children):
        if not is_node(child):
            raise MutationContractError(
                node.kind, f"child {position} must be a node, got {child!r}"
            )


def _emit_accessor_forms(
    node: Node, receiver: Node, indices: tuple[Node, ...], config: MutationConfig
) -> Iterator[Node]:
    for selector in config.accessor_selectors:
        yield from emit(node, s(NodeKind.CALL, receiver, selector, *indices))


def _emit_drop_mutation(
    node: Node, receiver: Node, indices: tuple[Node, ...], config: MutationConfig
) -> Iterator[Node]:
    """Rewrite `foo[n..-1]` to `foo.drop(n)`."""
    if len(indices) != 1 or not n_irange(indices[0]) or len(indices[0].children) != 2:
        return
    start, ending = indices[0].children
    if not n_int(ending, -1):
        return
    yield from emit(node, s(NodeKind.CALL, receiver, config.drop_selector, start))


def _mutate_indices(node: Node, config: MutationConfig, index_span: slice) -> Iterator[Node]:
    for position in children_indices(node, index_span):
        yield from emit_propagation(node, node.children[position])
        yield from delete_child(node, position)
        yield from mutate_child(node, position, config)


def _emit_index_mutations(
    node: Node, config: MutationConfig, index_span: slice
) -> Iterator[Node]:
    receiver = node.children[0]
    indices = node.children[index_span]

    yield from emit_singletons(node)
    yield from emit_receiver_mutations(node, config, lambda mutation: not n_nil(mutation))
    yield from emit(node, receiver)
    yield from _emit_accessor_forms(node, receiver, indices, config)
    yield from _emit_drop_mutation(node, receiver, indices, config)
    yield from _mutate_indices(node, config, index_span)


@handle(NodeKind.INDEX)
def mutate_index_read(
    node: Node, config: MutationConfig, asgn_target: bool = False
) -> Iterator[Node]:
    """Yield the mutants of a read-form index node `receiver[indices...]`."""
    _check_shape(node, 1)
    yield from _emit_index_mutations(node, config, NO_VALUE_SPAN)


@handle(NodeKind.INDEX_ASSIGN)
def mutate_index_assign(
    node: Node, config: MutationConfig, asgn_target: bool = False
) -> Iterator[Node]:
    """Yield the mutants of an assignment-form index node.

    In the regular layout the last child is the assigned value. When
    `asgn_target` is set the node is the left side of a compound assignment
    and every child after the receiver is an index.
    """
    _check_shape(node, 1 if asgn_target else 2)
    index_span = NO_VALUE_SPAN if asgn_target else REGULAR_SPAN
    value = None if asgn_target else node.children[-1]

    yield from _emit_index_mutations(node, config, index_span)
    yield from emit(node, s(NodeKind.INDEX, node.children[0], *node.children[index_span]))

    if value is None:
        return

    yield from emit_propagation(node, value)
    yield from mutate_child(node, len(node.children) - 1, config)
