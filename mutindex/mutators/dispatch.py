"""
Kind-keyed dispatch for the mutation framework.

Each node kind is routed to exactly one handler, registered with the
`handle` decorator. A handler is a generator function taking
`(node, config, asgn_target)` and yielding mutant nodes. The table is closed:
`check_exhaustive` is run once all handler modules are imported and refuses
to continue if any `NodeKind` lacks a handler.
"""

from __future__ import annotations

import sys
from typing import Callable, Iterator

from mutindex.config import MutationConfig
from mutindex.nodes import MutationContractError, Node, NodeKind

Handler = Callable[[Node, MutationConfig, bool], Iterator[Node]]

HANDLERS: dict[NodeKind, Handler] = {}


def handle(*kinds: NodeKind) -> Callable[[Handler], Handler]:
    """Register the decorated generator as the handler for `kinds`."""

    def register(handler: Handler) -> Handler:
        for kind in kinds:
            if kind in HANDLERS:
                raise RuntimeError(
                    f"{kind.name} already handled by {HANDLERS[kind].__name__}, "
                    f"cannot register {handler.__name__}"
                )
            HANDLERS[kind] = handler
        return handler

    return register


def check_exhaustive() -> None:
    """Raise if some node kind has no registered handler."""
    missing = [kind.name for kind in NodeKind if kind not in HANDLERS]
    if missing:
        raise RuntimeError(f"No mutation handler for node kinds: {', '.join(missing)}")


def mutate(node: Node, config: MutationConfig, asgn_target: bool = False) -> Iterator[Node]:
    """Yield every mutant of `node` produced by its kind's handler."""
    handler = HANDLERS.get(node.kind)
    if handler is None:
        raise MutationContractError(node.kind, "no mutation handler registered")
    if config.verbose:
        layout = " (compound-assignment target)" if asgn_target else ""
        print(
            f"    -> Mutating {node.kind.name} node with {len(node.children)} children{layout}",
            file=sys.stderr,
        )
    yield from handler(node, config, asgn_target)
