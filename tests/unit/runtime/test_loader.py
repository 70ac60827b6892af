"""Tests for snapshot loading and the background snapshot loader."""

from __future__ import annotations

import json
import tempfile
import threading
import time
import unittest
from pathlib import Path

from astlens.errors import SnapshotLoadError
from astlens.loader import SnapshotLoader, load_snapshot, snapshot_from_estree
from astlens.parsing.provider import build_fallback_tree
from astlens.state import Snapshot
from astlens.syntax_tree import Span


def _wait_for_results(
    loader: SnapshotLoader,
    *,
    expected_count: int,
    timeout_seconds: float = 1.0,
) -> list:
    deadline = time.monotonic() + timeout_seconds
    out: list = []
    while time.monotonic() < deadline:
        out.extend(loader.drain_results())
        if len(out) >= expected_count:
            break
        time.sleep(0.01)
    return out


class LoadSnapshotTests(unittest.TestCase):
    def test_unknown_suffix_loads_fallback_tree(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "notes.txt"
            target.write_text("first\nsecond\n", encoding="utf-8")

            snapshot = load_snapshot(target)

        self.assertTrue(snapshot.is_fallback)
        self.assertEqual(snapshot.source, "first\nsecond\n")
        self.assertEqual(snapshot.path, target)
        self.assertEqual(snapshot.source_lines, ["first", "second", ""])
        self.assertEqual(len(snapshot.root.get("body")), 2)

    def test_estree_json_replaces_parser(self) -> None:
        tree = {
            "type": "Program",
            "loc": {"start": {"line": 1, "column": 0}, "end": {"line": 1, "column": 6}},
            "body": [
                {
                    "type": "ExpressionStatement",
                    "loc": {"start": {"line": 1, "column": 0}, "end": {"line": 1, "column": 6}},
                    "expression": {"type": "Identifier", "name": "x"},
                }
            ],
        }
        with tempfile.TemporaryDirectory() as tmp:
            source_path = Path(tmp) / "app.js"
            source_path.write_text("x;\n", encoding="utf-8")
            ast_path = Path(tmp) / "app.json"
            ast_path.write_text(json.dumps(tree), encoding="utf-8")

            snapshot = load_snapshot(source_path, ast_path=ast_path)

        self.assertFalse(snapshot.is_fallback)
        self.assertEqual(snapshot.language, "javascript")
        self.assertEqual(snapshot.root.kind, "Program")
        self.assertEqual(snapshot.root.get("body")[0].span, Span(1, 0, 1, 6))

    def test_missing_source_raises_load_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SnapshotLoadError):
                load_snapshot(Path(tmp) / "missing.txt")

    def test_malformed_ast_json_raises_load_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source_path = Path(tmp) / "app.js"
            source_path.write_text("x;\n", encoding="utf-8")
            ast_path = Path(tmp) / "app.json"
            ast_path.write_text("{not json", encoding="utf-8")

            with self.assertRaises(SnapshotLoadError):
                load_snapshot(source_path, ast_path=ast_path)

    def test_too_deeply_nested_ast_json_raises_load_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source_path = Path(tmp) / "app.js"
            source_path.write_text("x;\n", encoding="utf-8")
            ast_path = Path(tmp) / "app.json"
            depth = 200_000
            ast_path.write_text('{"type": "Program", "body": ' + "[" * depth + "]" * depth + "}", encoding="utf-8")

            with self.assertRaises(SnapshotLoadError):
                load_snapshot(source_path, ast_path=ast_path)

    def test_estree_document_must_be_object(self) -> None:
        with self.assertRaises(SnapshotLoadError):
            snapshot_from_estree("x;\n", [1, 2, 3])


class SnapshotLoaderTests(unittest.TestCase):
    def test_schedule_loads_snapshot_in_background(self) -> None:
        calls: list[Path] = []

        def load(path: Path, **_kwargs) -> Snapshot:
            calls.append(path)
            return Snapshot(root=build_fallback_tree("a"), source="a", path=path)

        loader = SnapshotLoader(load=load)
        request_id = loader.schedule(Path("a.txt"))

        results = _wait_for_results(loader, expected_count=1)
        self.assertEqual(calls, [Path("a.txt")])
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].request.request_id, request_id)
        self.assertEqual(loader.latest_request_id, request_id)
        self.assertEqual(results[0].snapshot.path, Path("a.txt"))

    def test_pending_requests_collapse_to_latest(self) -> None:
        calls: list[str] = []
        first_started = threading.Event()
        allow_first_finish = threading.Event()

        def load(path: Path, **_kwargs) -> Snapshot:
            if path.name == "first.txt":
                first_started.set()
                allow_first_finish.wait(timeout=1.0)
            calls.append(path.name)
            return Snapshot(root=build_fallback_tree(path.name), source=path.name, path=path)

        loader = SnapshotLoader(load=load)
        loader.schedule(Path("first.txt"))
        self.assertTrue(first_started.wait(timeout=1.0))
        loader.schedule(Path("second.txt"))
        latest = loader.schedule(Path("third.txt"))
        allow_first_finish.set()

        results = _wait_for_results(loader, expected_count=2)
        self.assertEqual(len(results), 2)
        self.assertListEqual(calls, ["first.txt", "third.txt"])
        self.assertEqual(loader.latest_request_id, latest)
        current = [result for result in results if result.request.request_id == latest]
        self.assertEqual(len(current), 1)

    def test_load_errors_are_reported_as_results(self) -> None:
        def load(path: Path, **_kwargs) -> Snapshot:
            raise SnapshotLoadError(f"Failed to read {path}")

        loader = SnapshotLoader(load=load)
        loader.schedule(Path("gone.txt"))

        results = _wait_for_results(loader, expected_count=1)
        self.assertEqual(len(results), 1)
        self.assertIsNone(results[0].snapshot)
        self.assertEqual(results[0].error, "Failed to read gone.txt")


if __name__ == "__main__":
    unittest.main()
