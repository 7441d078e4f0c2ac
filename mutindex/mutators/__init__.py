"""
The `mutindex.mutators` package contains the dispatch table, the generic
mutation primitives and the kind-specific mutators.

Importing the package registers every handler and verifies that each node
kind has one. `generate_mutants` is the entry point used by the engine and
the command line.
"""

from __future__ import annotations

from typing import Iterator

from mutindex.config import DEFAULT_CONFIG, MutationConfig
from mutindex.mutators import calls, index, literals  # noqa: F401  (registers handlers)
from mutindex.mutators.dispatch import HANDLERS, check_exhaustive, handle, mutate
from mutindex.nodes import Node

check_exhaustive()


class Mutants:
    """A lazy, restartable sequence of the mutants of one node.

    Every iteration runs generation again from scratch, so consumers may stop
    early or iterate more than once and always see the same ordered result.
    """

    def __init__(self, node: Node, config: MutationConfig, asgn_target: bool = False):
        self.node = node
        self.config = config
        self.asgn_target = asgn_target

    def __iter__(self) -> Iterator[Node]:
        return mutate(self.node, self.config, self.asgn_target)

    def materialize(self) -> tuple[Node, ...]:
        return tuple(self)

    def __repr__(self) -> str:
        return f"Mutants({self.node!r}, asgn_target={self.asgn_target})"


def generate_mutants(
    node: Node, config: MutationConfig | None = None, *, asgn_target: bool = False
) -> Mutants:
    """Return the mutants of `node`, optionally as a compound-assignment target."""
    return Mutants(node, config or DEFAULT_CONFIG, asgn_target)


__all__ = [
    "HANDLERS",
    "Mutants",
    "generate_mutants",
    "handle",
    "mutate",
]
