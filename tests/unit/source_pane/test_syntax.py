"""Tests for text sanitization and Pygments highlighting.

Line structure must survive colorization so source rows stay aligned with
line numbers from the tree.
"""

import re
import unittest
from pathlib import Path

from astlens.source_pane.syntax import colorize_source, sanitize_terminal_text

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


class HighlightSanitizationTests(unittest.TestCase):
    def test_sanitize_terminal_text_escapes_control_bytes_but_keeps_common_whitespace(self) -> None:
        source = "a\tb\nc\rd\x07e\x1bf"
        sanitized = sanitize_terminal_text(source)

        self.assertEqual(sanitized, "a\tb\nc\rd\\x07e\\x1bf")
        self.assertNotIn("\x07", sanitized)
        self.assertNotIn("\x1b", sanitized)

    def test_colorize_keeps_leading_blank_lines(self) -> None:
        source = "\n\nx = 1\n"

        rendered = colorize_source(source, Path("demo.py"))

        self.assertEqual(ANSI_RE.sub("", rendered), source)

    def test_colorize_does_not_add_trailing_newline(self) -> None:
        rendered = colorize_source("alpha", Path("notes.txt"))

        self.assertEqual(ANSI_RE.sub("", rendered), "alpha")

    def test_unknown_style_falls_back_to_default(self) -> None:
        source = "let x = 1;\n"

        rendered = colorize_source(source, language="javascript", style="no-such-style")

        self.assertEqual(ANSI_RE.sub("", rendered), source)


if __name__ == "__main__":
    unittest.main()
