"""Source-pane helpers: loading, highlighting, and row rendering."""

from __future__ import annotations

from .syntax import DEFAULT_STYLE, colorize_source, read_text, sanitize_terminal_text

__all__ = [
    "DEFAULT_STYLE",
    "colorize_source",
    "read_text",
    "sanitize_terminal_text",
]
