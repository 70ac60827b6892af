"""Tests for the order-preserving JSON export."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from astlens.errors import ExportError
from astlens.syntax_tree import DEFAULT_EXPORT_FILENAME, SyntaxNode, export_tree_json, from_estree, write_export

ESTREE = {
    "type": "Program",
    "start": 0,
    "end": 14,
    "loc": {"start": {"line": 1, "column": 0}, "end": {"line": 1, "column": 14}},
    "sourceType": "module",
    "body": [
        {
            "type": "ExpressionStatement",
            "expression": {
                "type": "ArrayExpression",
                "elements": [None, {"type": "Literal", "value": 1, "raw": "1"}],
            },
        }
    ],
}


class ExportTests(unittest.TestCase):
    def test_export_is_faithful_to_estree_input(self) -> None:
        exported = json.loads(export_tree_json(from_estree(ESTREE)))

        self.assertEqual(exported, ESTREE)
        self.assertEqual(list(exported), list(ESTREE))
        self.assertEqual(list(exported["body"][0]), ["type", "expression"])

    def test_untyped_objects_round_trip_without_a_type_key(self) -> None:
        regex_literal = {"type": "Literal", "value": {}, "regex": {"pattern": "a", "flags": "g"}, "raw": "/a/g"}
        program = {"type": "Program", "body": [{"type": "ExpressionStatement", "expression": regex_literal}]}

        self.assertEqual(json.loads(export_tree_json(from_estree(regex_literal))), regex_literal)
        self.assertEqual(json.loads(export_tree_json(from_estree(program))), program)

    def test_non_string_type_on_untyped_object_is_kept_as_data(self) -> None:
        data = {"type": "Program", "options": {"type": 3, "strict": True}}

        self.assertEqual(json.loads(export_tree_json(from_estree(data))), data)

    def test_too_deep_tree_raises_export_error(self) -> None:
        root = SyntaxNode("Leaf")
        for _ in range(100_000):
            root = SyntaxNode("Wrap", {"inner": root})

        with self.assertRaises(ExportError):
            export_tree_json(root)

    def test_export_serializes_foreign_scalars_as_text(self) -> None:
        root = SyntaxNode("Program", {"path": Path("a.js"), "body": []})

        self.assertEqual(json.loads(export_tree_json(root, indent=None)), {"type": "Program", "path": "a.js", "body": []})

    def test_write_export_uses_default_name_for_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = write_export(from_estree(ESTREE), Path(tmp))

            self.assertEqual(target.name, DEFAULT_EXPORT_FILENAME)
            text = target.read_text(encoding="utf-8")
            self.assertTrue(text.endswith("}\n"))
            self.assertEqual(json.loads(text), ESTREE)
