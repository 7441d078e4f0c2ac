"""
Generic node-mutation primitives.

These are the building blocks every kind-specific mutator composes. They are
plain generator functions over an immutable input node: "emitting" a mutant
means yielding it, so callers combine primitives with `yield from` and the
whole result stays lazy.
"""

from __future__ import annotations

from typing import Callable, Iterator

from mutindex.config import MutationConfig
from mutindex.mutators.dispatch import mutate
from mutindex.nodes import SINGLETONS, Child, Node, is_node


def emit(node: Node, candidate: Child) -> Iterator[Node]:
    """Yield `candidate` unless it is identical to the node being mutated."""
    if is_node(candidate) and candidate != node:
        yield candidate


def emit_singletons(node: Node) -> Iterator[Node]:
    """Yield the nil, true and false singletons as whole-node replacements."""
    for singleton in SINGLETONS:
        yield from emit(node, singleton)


def emit_propagation(node: Node, child: Child) -> Iterator[Node]:
    """Yield `child` standalone, discarding the surrounding node."""
    yield from emit(node, child)


def delete_child(node: Node, position: int) -> Iterator[Node]:
    """Yield a copy of `node` with the child at `position` removed."""
    yield from emit(node, node.without_child(position))


def mutate_child(
    node: Node,
    position: int,
    config: MutationConfig,
    asgn_target: bool = False,
    predicate: Callable[[Node], bool] | None = None,
) -> Iterator[Node]:
    """Yield one copy of `node` per recursive mutation of the child at `position`.

    Atom children have no mutations. When `predicate` is given, mutations of
    the child that fail it are skipped.
    """
    child = node.children[position]
    if not is_node(child):
        return
    for mutation in mutate(child, config, asgn_target):
        if predicate is None or predicate(mutation):
            yield from emit(node, node.with_child(position, mutation))


def emit_receiver_mutations(
    node: Node, config: MutationConfig, predicate: Callable[[Node], bool]
) -> Iterator[Node]:
    """Mutate the receiver (child 0), keeping only mutations accepted by `predicate`."""
    yield from mutate_child(node, 0, config, predicate=predicate)


def children_indices(node: Node, span: slice) -> range:
    """Return the absolute child positions denoted by `span`.

    `slice(1, None)` means "position 1 to the end" and `slice(1, -1)` means
    "position 1 to all but the last".
    """
    return range(len(node.children))[span]
