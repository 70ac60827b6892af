"""Parsing collaborator producing tree snapshots from source text.

Uses Tree-sitter grammars when one is configured for the language and falls
back to a coarse one-statement-per-line tree otherwise, so the viewer always
has something to index and navigate.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from tree_sitter_language_pack import get_parser

from ..syntax_tree.convert import from_tree_sitter
from ..syntax_tree.types import Span, SyntaxNode
from .languages import ERROR_NODE_TYPE, MISSING_PARSER_ERROR
from .types import ParseIssue, ParseResult

logger = logging.getLogger(__name__)

MAX_REPORTED_ISSUES = 50


@lru_cache(maxsize=32)
def load_parser(language_name: str):
    """Load a Tree-sitter parser from ``tree_sitter_language_pack``.

    Returns ``(parser, error_message)``.
    """
    try:
        return get_parser(language_name), None
    except Exception as exc:
        return None, f"Failed to load Tree-sitter parser for {language_name}: {exc}"


def build_fallback_tree(source: str) -> SyntaxNode:
    """Build a coarse ``Program`` tree with one statement per non-blank line.

    Statements carry a single-line span; their ``Literal`` expressions do not,
    so only statements show up in the line index.
    """
    lines = source.split("\n")
    body: list[SyntaxNode] = []
    for line_number, line in enumerate(lines, start=1):
        text = line.strip()
        if not text:
            continue
        span = Span(line_number, 0, line_number, len(line))
        body.append(
            SyntaxNode(
                kind="ExpressionStatement",
                fields={
                    "expression": SyntaxNode(kind="Literal", fields={"value": text}),
                    "loc": span.to_loc(),
                },
                span=span,
            )
        )
    program_span = Span(1, 0, len(lines), 0)
    return SyntaxNode(
        kind="Program",
        fields={"body": body, "loc": program_span.to_loc()},
        span=program_span,
    )


def _collect_tree_sitter_issues(root) -> list[ParseIssue]:
    issues: list[ParseIssue] = []
    if not root.has_error:
        return issues

    def walk(node) -> None:
        if len(issues) >= MAX_REPORTED_ISSUES:
            return
        row, column = node.start_point
        if node.type == ERROR_NODE_TYPE:
            issues.append(ParseIssue("Syntax error", line=int(row) + 1, column=int(column), code="ERROR"))
        elif node.is_missing:
            issues.append(
                ParseIssue(f"Missing {node.type}", line=int(row) + 1, column=int(column), code="MISSING")
            )
        if node.has_error:
            for child in node.children:
                walk(child)

    walk(root)
    return issues


def _fallback_result(source: str, language: str | None, message: str) -> ParseResult:
    logger.warning("Using fallback tree: %s", message)
    return ParseResult(
        root=build_fallback_tree(source),
        language=language,
        issues=(ParseIssue(message),),
        is_fallback=True,
    )


def parse_source(source: str, language: str | None) -> ParseResult:
    """Parse ``source`` into a ``SyntaxNode`` tree.

    Syntax errors keep the degraded Tree-sitter tree and are reported as
    issues. Missing grammars or parser failures yield the fallback tree.
    """
    if language is None:
        return _fallback_result(source, None, "No Tree-sitter grammar configured for this file.")

    parser, parser_error = load_parser(language)
    if parser is None:
        return _fallback_result(source, language, parser_error or MISSING_PARSER_ERROR)

    source_bytes = source.encode("utf-8", errors="replace")
    try:
        tree = parser.parse(source_bytes)
    except Exception as exc:
        return _fallback_result(source, language, f"Tree-sitter parse failed: {exc}")

    issues = _collect_tree_sitter_issues(tree.root_node)
    if issues:
        logger.info("Parsed %s with %d syntax issue(s)", language, len(issues))
    return ParseResult(
        root=from_tree_sitter(tree.root_node, source_bytes),
        language=language,
        issues=tuple(issues),
    )
