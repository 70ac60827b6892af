"""Tests for viewer session lifecycle and snapshot replacement."""

from __future__ import annotations

import json
import unittest

from astlens.errors import MissingContainerError, NotAttachedError
from astlens.loader import SnapshotLoadRequest, SnapshotLoadResult
from astlens.parsing.provider import build_fallback_tree
from astlens.session import ViewerSession
from astlens.state import Snapshot, ViewerEvents
from astlens.ui_theme import PLAIN_THEME


class _RecordingSurface:
    def __init__(self) -> None:
        self.draws: list[tuple[list[str], list[str]]] = []

    def draw(self, tree_rows: list[str], source_rows: list[str]) -> None:
        self.draws.append((tree_rows, source_rows))


def _snapshot(source: str) -> Snapshot:
    return Snapshot(root=build_fallback_tree(source), source=source)


def _session(events: ViewerEvents | None = None) -> tuple[ViewerSession, _RecordingSurface]:
    session = ViewerSession(events, theme=PLAIN_THEME, no_color=True)
    surface = _RecordingSurface()
    session.attach({"viewer": surface}, "viewer")
    return session, surface


class ViewerSessionTests(unittest.TestCase):
    def test_attach_to_missing_container_raises(self) -> None:
        session = ViewerSession()

        with self.assertRaises(MissingContainerError) as ctx:
            session.attach({"other": _RecordingSurface()}, "viewer")

        self.assertEqual(str(ctx.exception), "Container with id 'viewer' not found")

    def test_render_before_attach_raises(self) -> None:
        session = ViewerSession()
        session.replace_snapshot(_snapshot("alpha\n"))

        with self.assertRaises(NotAttachedError):
            session.render()

    def test_actions_without_snapshot_are_no_ops(self) -> None:
        session, surface = _session()

        self.assertIsNone(session.select_by_line(1))
        self.assertIsNone(session.select_by_path("root"))
        self.assertFalse(session.toggle(0))
        self.assertEqual(session.search("alpha"), frozenset())
        self.assertIsNone(session.export_json())
        self.assertIsNone(session.selected_details())
        self.assertFalse(session.render())
        self.assertEqual(surface.draws, [])

    def test_replacement_discards_previous_view_state(self) -> None:
        session, _surface = _session()
        session.replace_snapshot(_snapshot("alpha\nbeta\n"))
        session.collapse_all()
        session.search("beta")
        session.select_by_line(2)

        state = session.replace_snapshot(_snapshot("gamma\n"))

        self.assertEqual(session.generation, 2)
        self.assertIs(session.state, state)
        self.assertIsNone(state.selected_id)
        self.assertIsNone(state.source_line)
        self.assertEqual(state.highlighted_paths, frozenset())
        self.assertEqual(state.collapse.collapsed_ids(), frozenset())
        self.assertIsNone(state.paths.node_at("root.body.1"))
        self.assertIsNone(session.select_by_path("root.body.1"))

    def test_stale_render_is_discarded(self) -> None:
        session, surface = _session()
        session.replace_snapshot(_snapshot("alpha\n"))
        ticket = session.begin_render()
        tree_rows, source_rows = session.build_rows(ticket)

        session.replace_snapshot(_snapshot("beta\n"))

        self.assertFalse(session.commit_render(ticket, tree_rows, source_rows))
        self.assertEqual(surface.draws, [])
        self.assertTrue(session.render())
        self.assertEqual(surface.draws[0][1][0], "  1│ beta")

    def test_render_draws_plain_rows(self) -> None:
        session, surface = _session()
        session.replace_snapshot(_snapshot("alpha\n\nbeta"))
        session.select_by_line(3)

        self.assertTrue(session.render())

        tree_rows, source_rows = surface.draws[0]
        self.assertEqual(
            tree_rows,
            [
                "▾ Program",
                "  ▾ ExpressionStatement",
                '      Literal "alpha"',
                "  ▾ [ExpressionStatement]",
                '      Literal "beta"',
            ],
        )
        self.assertEqual(source_rows, ["  1│ alpha", "  2│ ", "  3>│ beta"])

    def test_click_node_toggles_then_selects(self) -> None:
        nodes: list[tuple[str, int | None]] = []
        lines: list[int] = []
        session, _surface = _session(
            ViewerEvents(
                on_line_selected=lines.append,
                on_node_selected=lambda path, line: nodes.append((path, line)),
            )
        )
        state = session.replace_snapshot(_snapshot("alpha\nbeta\n"))
        node_id = state.visual.for_path("root.body.1").node_id

        self.assertEqual(session.click_node(node_id), "root.body.1")

        self.assertTrue(state.collapse.is_collapsed(node_id))
        self.assertEqual(state.selected_path, "root.body.1")
        self.assertEqual(nodes, [("root.body.1", 2)])
        self.assertEqual(lines, [2])
        self.assertIsNone(session.click_node(10_000))

    def test_superseded_load_result_is_dropped(self) -> None:
        session, _surface = _session()
        request = SnapshotLoadRequest(request_id=1, path=None)
        result = SnapshotLoadResult(request=request, snapshot=_snapshot("alpha\n"))

        self.assertFalse(session.apply_load_result(result, latest_request_id=2))
        self.assertIsNone(session.state)
        self.assertTrue(session.apply_load_result(result, latest_request_id=1))
        self.assertEqual(session.generation, 1)

    def test_failed_load_result_keeps_current_snapshot(self) -> None:
        session, _surface = _session()
        state = session.replace_snapshot(_snapshot("alpha\n"))
        failed = SnapshotLoadResult(request=SnapshotLoadRequest(request_id=3, path=None), error="nope")

        self.assertFalse(session.apply_load_result(failed, latest_request_id=3))
        self.assertIs(session.state, state)

    def test_sessions_do_not_share_state(self) -> None:
        first, _ = _session()
        second, _ = _session()
        first.replace_snapshot(_snapshot("alpha\nbeta\n"))
        second.replace_snapshot(_snapshot("alpha\nbeta\n"))

        first.select_by_line(2)
        first.collapse_all()

        self.assertIsNone(second.state.selected_id)
        self.assertEqual(second.state.collapse.collapsed_ids(), frozenset())
        self.assertEqual(second.generation, 1)

    def test_export_json_uses_estree_shape(self) -> None:
        session, _surface = _session()
        session.replace_snapshot(_snapshot("alpha\n"))

        data = json.loads(session.export_json())

        self.assertEqual(data["type"], "Program")
        self.assertEqual(data["body"][0]["expression"], {"type": "Literal", "value": "alpha"})
        self.assertEqual(data["body"][0]["loc"]["start"], {"line": 1, "column": 0})

    def test_selected_details_follow_selection(self) -> None:
        session, _surface = _session()
        session.replace_snapshot(_snapshot("alpha\n"))

        self.assertIsNone(session.selected_details())
        session.select_by_path("root.body.0.expression")
        details = session.selected_details()

        self.assertEqual(details.kind, "Literal")
        self.assertEqual(details.value, '"alpha"')
        self.assertEqual(json.loads(details.raw_json), {"type": "Literal", "value": "alpha"})
