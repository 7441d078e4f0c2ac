"""
mutindex generates mutation-testing mutants for indexed-access expressions.

Feed a `Node` to `generate_mutants` and iterate the result; see
`mutindex.sexp` for reading nodes from text.
"""

from mutindex.config import PRESETS, MutationConfig
from mutindex.mutators import Mutants, generate_mutants
from mutindex.nodes import MutationContractError, Node, NodeKind, s

__all__ = [
    "MutationConfig",
    "MutationContractError",
    "Mutants",
    "Node",
    "NodeKind",
    "PRESETS",
    "generate_mutants",
    "s",
]
