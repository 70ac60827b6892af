"""Source parsing collaborator (Tree-sitter with a line-based fallback)."""

from __future__ import annotations

from .languages import LANGUAGE_BY_SUFFIX, language_for_path
from .provider import build_fallback_tree, load_parser, parse_source
from .types import ParseIssue, ParseResult

__all__ = [
    "LANGUAGE_BY_SUFFIX",
    "language_for_path",
    "build_fallback_tree",
    "load_parser",
    "parse_source",
    "ParseIssue",
    "ParseResult",
]
