"""Tests for the expand/collapse state machine."""

from __future__ import annotations

import unittest

from astlens.syntax_tree import SyntaxNode, assign_paths
from astlens.tree_pane import CollapseState, build_visual_tree


def _nested_tree() -> SyntaxNode:
    leaf = SyntaxNode("Identifier", {"name": "deep"})
    inner = SyntaxNode("ExpressionStatement", {"expression": leaf})
    block = SyntaxNode("BlockStatement", {"body": [inner]})
    other = SyntaxNode("EmptyStatement")
    return SyntaxNode("Program", {"body": [block, other]})


def _ids():
    tree = build_visual_tree(assign_paths(_nested_tree()))
    ids = {visual.path: visual.node_id for visual in tree.nodes}
    return tree, ids


class CollapseStateTests(unittest.TestCase):
    def test_only_nodes_with_children_are_stateful_and_start_expanded(self) -> None:
        tree, ids = _ids()
        state = CollapseState.for_tree(tree)

        self.assertEqual(
            state.stateful_ids(),
            frozenset({ids["root"], ids["root.body.0"], ids["root.body.0.body.0"]}),
        )
        self.assertTrue(all(state.is_expanded(node_id) for node_id in state.stateful_ids()))
        self.assertEqual(state.collapsed_ids(), frozenset())

    def test_toggle_flips_stateful_nodes_and_ignores_leaves(self) -> None:
        tree, ids = _ids()
        state = CollapseState.for_tree(tree)

        self.assertTrue(state.toggle(ids["root.body.0"]))
        self.assertTrue(state.is_collapsed(ids["root.body.0"]))
        self.assertTrue(state.toggle(ids["root.body.0"]))
        self.assertTrue(state.is_expanded(ids["root.body.0"]))

        self.assertFalse(state.toggle(ids["root.body.1"]))
        self.assertFalse(state.is_collapsed(ids["root.body.1"]))
        self.assertFalse(state.is_expanded(ids["root.body.1"]))

    def test_visibility_is_and_of_ancestor_states(self) -> None:
        tree, ids = _ids()
        state = CollapseState.for_tree(tree)
        leaf = ids["root.body.0.body.0.expression"]

        self.assertTrue(state.is_visible(leaf))
        state.toggle(ids["root"])
        self.assertFalse(state.is_visible(leaf))
        self.assertTrue(state.is_visible(ids["root"]))

        state.toggle(ids["root"])
        state.toggle(ids["root.body.0.body.0"])
        self.assertFalse(state.is_visible(leaf))
        self.assertTrue(state.is_visible(ids["root.body.0.body.0"]))
        self.assertFalse(state.is_visible(999))

    def test_expand_all_and_collapse_all_are_absolute(self) -> None:
        tree, ids = _ids()
        state = CollapseState.for_tree(tree)
        state.toggle(ids["root.body.0"])

        state.expand_all()
        state.collapse_all()
        self.assertEqual(state.collapsed_ids(), state.stateful_ids())

        state.toggle(ids["root"])
        state.collapse_all()
        state.expand_all()
        self.assertEqual(state.collapsed_ids(), frozenset())

    def test_expand_ancestors_reports_changed_nodes(self) -> None:
        tree, ids = _ids()
        state = CollapseState.for_tree(tree)
        state.collapse_all()
        leaf = ids["root.body.0.body.0.expression"]

        changed = state.expand_ancestors(leaf)

        self.assertEqual(changed, [ids["root.body.0.body.0"], ids["root.body.0"], ids["root"]])
        self.assertTrue(state.is_visible(leaf))
        self.assertEqual(state.expand_ancestors(leaf), [])
