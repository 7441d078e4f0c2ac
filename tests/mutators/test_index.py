#!/usr/bin/env python3
"""
Tests for the indexed-access mutators.

This module contains unit tests for the read and assignment operators
defined in mutindex/mutators/index.py
"""

import unittest

from mutindex.config import MutationConfig
from mutindex.mutators import generate_mutants
from mutindex.nodes import (
    N_FALSE,
    N_NIL,
    N_TRUE,
    MutationContractError,
    NodeKind,
    int_lit,
    name,
    s,
)

A = name("a")


def index(*children):
    return s(NodeKind.INDEX, *children)


def index_assign(*children):
    return s(NodeKind.INDEX_ASSIGN, *children)


def call(receiver, selector, *arguments):
    return s(NodeKind.CALL, receiver, selector, *arguments)


def irange(lower, upper):
    return s(NodeKind.IRANGE, int_lit(lower), int_lit(upper))


class TestIndexRead(unittest.TestCase):
    """Test the read-form operator on `a[i, ...]`."""

    def test_single_index_full_sequence(self):
        """Test the exact ordered mutants of `a[1]`."""
        node = index(A, int_lit(1))

        mutants = list(generate_mutants(node))

        expected = [
            N_NIL,
            N_TRUE,
            N_FALSE,
            index(N_TRUE, int_lit(1)),
            index(N_FALSE, int_lit(1)),
            A,
            call(A, "at", int_lit(1)),
            call(A, "fetch", int_lit(1)),
            call(A, "key?", int_lit(1)),
            int_lit(1),
            index(A),
            index(A, N_NIL),
            index(A, N_TRUE),
            index(A, N_FALSE),
            index(A, int_lit(0)),
            index(A, int_lit(-1)),
            index(A, int_lit(2)),
        ]
        self.assertEqual(mutants, expected)

    def test_singletons_receiver_and_accessors_emitted_once(self):
        """Test that singletons, receiver-only and accessor forms appear exactly once."""
        node = index(A, name("i"), name("j"))

        mutants = list(generate_mutants(node))

        for candidate in (N_NIL, N_TRUE, N_FALSE, A):
            self.assertEqual(mutants.count(candidate), 1, candidate)
        for selector in ("at", "fetch", "key?"):
            accessor = call(A, selector, name("i"), name("j"))
            self.assertEqual(mutants.count(accessor), 1, selector)

    def test_nil_receiver_is_suppressed(self):
        """Test that the receiver is never replaced by nil inside the index node."""
        node = index(A, int_lit(1))

        mutants = list(generate_mutants(node))

        self.assertNotIn(index(N_NIL, int_lit(1)), mutants)
        self.assertIn(index(N_TRUE, int_lit(1)), mutants)

    def test_zero_indices(self):
        """Test `a[]`: no per-index mutants, accessors called without arguments."""
        node = index(A)

        mutants = list(generate_mutants(node))

        self.assertIn(call(A, "fetch"), mutants)
        self.assertIn(A, mutants)
        self.assertEqual(len(mutants), 3 + 2 + 1 + 3)

    def test_receiver_mutations_reach_nested_nodes(self):
        """Test that receiver mutation recurses into a nested index."""
        inner = index(name("b"), int_lit(0))
        node = index(inner, int_lit(1))

        mutants = list(generate_mutants(node))

        self.assertIn(index(name("b"), int_lit(1)), mutants)
        self.assertIn(index(index(name("b"), int_lit(1)), int_lit(1)), mutants)
        self.assertIn(index(call(name("b"), "fetch", int_lit(0)), int_lit(1)), mutants)

    def test_per_index_structural_mutation(self):
        """Test propagation, deletion and recursion for each index position."""
        i, j = name("i"), name("j")
        node = index(A, i, j)

        mutants = list(generate_mutants(node))

        # Index alone
        self.assertIn(i, mutants)
        self.assertIn(j, mutants)
        # Index removed
        self.assertIn(index(A, j), mutants)
        self.assertIn(index(A, i), mutants)
        # Recursive mutation with the other children unchanged
        for singleton in (N_NIL, N_TRUE, N_FALSE):
            self.assertIn(index(A, singleton, j), mutants)
            self.assertIn(index(A, i, singleton), mutants)

    def test_deep_index_recursion(self):
        """Test that index mutation reaches arbitrary depth."""
        node = index(A, index(name("b"), int_lit(1)))

        mutants = list(generate_mutants(node))

        self.assertIn(index(A, index(name("b"), int_lit(0))), mutants)
        self.assertIn(index(A, call(name("b"), "at", int_lit(1))), mutants)

    def test_never_emits_input(self):
        """Test that no mutant is structurally equal to its input."""
        for node in (
            index(A),
            index(A, int_lit(1)),
            index(A, irange(1, -1)),
            index(A, name("i"), name("j")),
        ):
            with self.subTest(node=node):
                self.assertNotIn(node, list(generate_mutants(node)))


class TestDropRewrite(unittest.TestCase):
    """Test the `a[n..-1]` -> `a.drop(n)` rewrite."""

    def test_range_to_end_emits_drop(self):
        """Test `a[1..-1]` emits accessors keyed on the range plus `a.drop(1)`."""
        node = index(A, irange(1, -1))

        mutants = list(generate_mutants(node))

        self.assertIn(call(A, "drop", int_lit(1)), mutants)
        for selector in ("at", "fetch", "key?"):
            self.assertIn(call(A, selector, irange(1, -1)), mutants)
        self.assertIn(A, mutants)
        self.assertIn(N_NIL, mutants)

    def test_drop_follows_accessor_forms(self):
        """Test that the drop rewrite comes right after the accessor forms."""
        node = index(A, irange(2, -1))

        mutants = list(generate_mutants(node))

        position = mutants.index(call(A, "key?", irange(2, -1)))
        self.assertEqual(mutants[position + 1], call(A, "drop", int_lit(2)))

    def test_other_upper_bound_has_no_drop(self):
        """Test `a[1..5]` does not emit a drop rewrite."""
        mutants = list(generate_mutants(index(A, irange(1, 5))))

        self.assertFalse(any(m.kind is NodeKind.CALL and m.children[1] == "drop" for m in mutants))

    def test_exclusive_range_has_no_drop(self):
        """Test `a[1...-1]` does not emit a drop rewrite."""
        node = index(A, s(NodeKind.ERANGE, int_lit(1), int_lit(-1)))

        mutants = list(generate_mutants(node))

        self.assertNotIn(call(A, "drop", int_lit(1)), mutants)

    def test_two_indices_have_no_drop(self):
        """Test `a[i, j]` and `a[1..-1, 2]` do not emit a drop rewrite."""
        for node in (
            index(A, name("i"), name("j")),
            index(A, irange(1, -1), int_lit(2)),
        ):
            with self.subTest(node=node):
                mutants = list(generate_mutants(node))
                self.assertNotIn(call(A, "drop", int_lit(1)), mutants)

    def test_drop_selector_is_configurable(self):
        """Test that the drop selector comes from the configuration."""
        config = MutationConfig(drop_selector="skip")

        mutants = list(generate_mutants(index(A, irange(3, -1)), config))

        self.assertIn(call(A, "skip", int_lit(3)), mutants)
        self.assertNotIn(call(A, "drop", int_lit(3)), mutants)


class TestIndexAssign(unittest.TestCase):
    """Test the assignment-form operator on `a[i, ...] = v`."""

    def test_regular_layout(self):
        """Test `a[1] = 2`: read candidates, read degradation, value candidates."""
        node = index_assign(A, int_lit(1), int_lit(2))

        mutants = list(generate_mutants(node))

        # Read-operator candidates over receiver and index only
        for candidate in (N_NIL, N_TRUE, N_FALSE, A, int_lit(1)):
            self.assertIn(candidate, mutants)
        self.assertIn(call(A, "at", int_lit(1)), mutants)
        self.assertNotIn(call(A, "at", int_lit(1), int_lit(2)), mutants)
        self.assertIn(index_assign(N_TRUE, int_lit(1), int_lit(2)), mutants)
        self.assertIn(index_assign(A, int_lit(2)), mutants)
        self.assertIn(index_assign(A, int_lit(0), int_lit(2)), mutants)
        # Read degradation
        self.assertIn(index(A, int_lit(1)), mutants)
        # Value alone and value mutations
        self.assertIn(int_lit(2), mutants)
        for value in (N_NIL, N_TRUE, N_FALSE, int_lit(0), int_lit(1), int_lit(-2), int_lit(3)):
            self.assertIn(index_assign(A, int_lit(1), value), mutants)

    def test_regular_layout_tail_order(self):
        """Test that degradation, value-only and value mutations close the sequence."""
        node = index_assign(A, int_lit(1), int_lit(2))

        mutants = list(generate_mutants(node))

        self.assertEqual(
            mutants[-9:],
            [
                index(A, int_lit(1)),
                int_lit(2),
                index_assign(A, int_lit(1), N_NIL),
                index_assign(A, int_lit(1), N_TRUE),
                index_assign(A, int_lit(1), N_FALSE),
                index_assign(A, int_lit(1), int_lit(0)),
                index_assign(A, int_lit(1), int_lit(1)),
                index_assign(A, int_lit(1), int_lit(-2)),
                index_assign(A, int_lit(1), int_lit(3)),
            ],
        )

    def test_compound_target_layout(self):
        """Test `a[1]` as the target of `a[1] += 2`: no value slot."""
        node = index_assign(A, int_lit(1))

        mutants = list(generate_mutants(node, asgn_target=True))

        expected = [
            N_NIL,
            N_TRUE,
            N_FALSE,
            index_assign(N_TRUE, int_lit(1)),
            index_assign(N_FALSE, int_lit(1)),
            A,
            call(A, "at", int_lit(1)),
            call(A, "fetch", int_lit(1)),
            call(A, "key?", int_lit(1)),
            int_lit(1),
            index_assign(A),
            index_assign(A, N_NIL),
            index_assign(A, N_TRUE),
            index_assign(A, N_FALSE),
            index_assign(A, int_lit(0)),
            index_assign(A, int_lit(-1)),
            index_assign(A, int_lit(2)),
            index(A, int_lit(1)),
        ]
        self.assertEqual(mutants, expected)

    def test_layout_changes_meaning_of_last_child(self):
        """Test the same children read as `a[] = 1` without the target flag."""
        node = index_assign(A, int_lit(1))

        mutants = list(generate_mutants(node))

        self.assertIn(call(A, "at"), mutants)
        self.assertNotIn(call(A, "at", int_lit(1)), mutants)
        self.assertIn(index(A), mutants)
        self.assertIn(index_assign(A, int_lit(2)), mutants)

    def test_compound_target_with_range_emits_drop(self):
        """Test the drop rewrite also applies to a compound target."""
        node = index_assign(A, irange(1, -1))

        mutants = list(generate_mutants(node, asgn_target=True))

        self.assertIn(call(A, "drop", int_lit(1)), mutants)
        self.assertIn(index(A, irange(1, -1)), mutants)

    def test_regular_range_index_emits_drop(self):
        """Test `a[1..-1] = v` emits the drop rewrite but ignores the value."""
        node = index_assign(A, irange(1, -1), name("v"))

        mutants = list(generate_mutants(node))

        self.assertIn(call(A, "drop", int_lit(1)), mutants)
        self.assertIn(name("v"), mutants)

    def test_regular_layout_with_two_indices(self):
        """Test `a[i, j] = v`: every index between receiver and value is mutated."""
        i, j, v = name("i"), name("j"), name("v")
        node = index_assign(A, i, j, v)

        mutants = list(generate_mutants(node))

        # Each index alone, removed, and mutated in place
        self.assertIn(i, mutants)
        self.assertIn(j, mutants)
        self.assertIn(index_assign(A, j, v), mutants)
        self.assertIn(index_assign(A, i, v), mutants)
        self.assertIn(index_assign(A, N_NIL, j, v), mutants)
        self.assertIn(index_assign(A, i, N_NIL, v), mutants)
        # Accessor forms take the indices but not the value
        for selector in ("at", "fetch", "key?"):
            self.assertIn(call(A, selector, i, j), mutants)
            self.assertNotIn(call(A, selector, i, j, v), mutants)
        # The value is never deleted as if it were an index
        self.assertNotIn(index_assign(A, i, j), mutants)
        # Read degradation, value alone, value mutation
        self.assertIn(index(A, i, j), mutants)
        self.assertIn(v, mutants)
        self.assertIn(index_assign(A, i, j, N_TRUE), mutants)


class TestGenerationContract(unittest.TestCase):
    """Test laziness, determinism and contract violations."""

    def test_restartable_and_deterministic(self):
        """Test that re-iterating and regenerating give the same ordered sequence."""
        node = index_assign(A, irange(1, -1), int_lit(2))
        mutants = generate_mutants(node)

        first = list(mutants)
        second = list(mutants)
        third = list(generate_mutants(index_assign(A, irange(1, -1), int_lit(2))))

        self.assertEqual(first, second)
        self.assertEqual(first, third)
        self.assertEqual(mutants.materialize(), tuple(first))

    def test_consumer_can_stop_early(self):
        """Test that pulling one mutant does not affect later iterations."""
        mutants = generate_mutants(index(A, int_lit(1)))

        self.assertEqual(next(iter(mutants)), N_NIL)
        self.assertEqual(len(list(mutants)), 17)

    def test_index_without_receiver_is_contract_violation(self):
        """Test that an INDEX node with no children is rejected with its kind."""
        with self.assertRaises(MutationContractError) as ctx:
            list(generate_mutants(index()))

        self.assertIs(ctx.exception.kind, NodeKind.INDEX)
        self.assertIn("INDEX", str(ctx.exception))

    def test_regular_assign_needs_value(self):
        """Test that a regular assignment with only a receiver is rejected."""
        with self.assertRaises(MutationContractError) as ctx:
            list(generate_mutants(index_assign(A)))

        self.assertIn("INDEX_ASSIGN", str(ctx.exception))
        # The same node is a valid compound target.
        self.assertIn(index(A), list(generate_mutants(index_assign(A), asgn_target=True)))

    def test_atom_index_is_contract_violation(self):
        """Test that an atom in an index position is rejected."""
        with self.assertRaises(MutationContractError):
            list(generate_mutants(index(A, "i")))

    def test_violation_is_isolated(self):
        """Test that a failing node does not affect generation for another node."""
        with self.assertRaises(MutationContractError):
            list(generate_mutants(index()))

        self.assertEqual(len(list(generate_mutants(index(A, int_lit(1))))), 17)

    def test_python_preset_accessors(self):
        """Test the Python accessor preset."""
        config = MutationConfig.from_preset("python")

        mutants = list(generate_mutants(index(A, int_lit(1)), config))

        self.assertIn(call(A, "get", int_lit(1)), mutants)
        self.assertIn(call(A, "__getitem__", int_lit(1)), mutants)
        self.assertIn(call(A, "__contains__", int_lit(1)), mutants)
        self.assertNotIn(call(A, "fetch", int_lit(1)), mutants)


if __name__ == "__main__":
    unittest.main(verbosity=2)
