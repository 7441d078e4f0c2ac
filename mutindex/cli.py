#!/usr/bin/env python3
"""
Command-line front end: print the mutants of a single node expression.

Usage:
    mutindex "(index (name a) (int 1))"
    mutindex "(index_assign (name a) (int 1))" --asgn-target --format sexp
    python -m mutindex "(index (name a) (irange (int 1) (int -1)))" --stats

Exit codes:
    0 - mutants printed
    1 - the expression could not be read
    2 - the node violates the shape its kind requires (internal error)
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from typing import Iterable

import psutil

from mutindex.config import PRESETS, MutationConfig
from mutindex.mutators import generate_mutants
from mutindex.nodes import MutationContractError, Node
from mutindex.sexp import SexpError, dumps, loads
from mutindex.unparse import unparse


def unique(mutants: Iterable[Node]) -> list[Node]:
    """Drop structurally equal repeats, keeping first occurrences in order."""
    seen: set[Node] = set()
    result = []
    for mutant in mutants:
        if mutant not in seen:
            seen.add(mutant)
            result.append(mutant)
    return result


def collect_stats(count: int, started: float) -> dict:
    """Summarize a generation run: mutant count, elapsed time and process RSS."""
    return {
        "mutants": count,
        "elapsed_ms": round((time.perf_counter() - started) * 1000, 3),
        "process_rss_mb": round(psutil.Process().memory_info().rss / (1024 * 1024), 2),
    }


def format_mutants(mutants: list[Node], output_format: str, asgn_target: bool) -> str:
    if output_format == "sexp":
        return "\n".join(dumps(mutant) for mutant in mutants)
    rendered = [unparse(mutant, asgn_target=asgn_target) for mutant in mutants]
    if output_format == "json":
        return json.dumps(rendered, indent=2)
    return "\n".join(rendered)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate the mutants of an indexed-access node expression."
    )
    parser.add_argument("expression", help="Node to mutate, as an s-expression.")
    parser.add_argument(
        "--asgn-target",
        action="store_true",
        help="Treat an index_assign node as the target of a compound assignment (no value).",
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="default",
        help="Accessor-name preset used for accessor-form substitutions.",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["source", "sexp", "json"],
        default="source",
        help="How to print each mutant.",
    )
    parser.add_argument(
        "--unique",
        action="store_true",
        help="Drop structurally equal repeats from the output.",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print a summary with mutant count, elapsed time and memory use to stderr.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print dispatcher details while mutating.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse args, generate the mutants and print them."""
    args = build_parser().parse_args(argv)

    try:
        node = loads(args.expression)
    except SexpError as e:
        print(f"[!] Error: Could not read expression: {e}", file=sys.stderr)
        return 1

    config = MutationConfig.from_preset(args.preset, verbose=args.verbose)
    started = time.perf_counter()
    try:
        mutants = list(generate_mutants(node, config, asgn_target=args.asgn_target))
    except MutationContractError as e:
        print(f"[!] Internal error: malformed {e.kind.name} node: {e}", file=sys.stderr)
        return 2

    if args.unique:
        mutants = unique(mutants)

    if mutants:
        print(format_mutants(mutants, args.output_format, args.asgn_target))

    if args.stats:
        stats = collect_stats(len(mutants), started)
        print(f"[+] Generation stats: {json.dumps(stats)}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
