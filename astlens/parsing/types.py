"""Parse-result datatypes shared by the parsing provider and loader."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..syntax_tree.types import SyntaxNode


@dataclass(frozen=True)
class ParseIssue:
    """One parser complaint; ``line`` is 1-based when known."""

    message: str
    line: int | None = None
    column: int | None = None
    code: str | None = None


@dataclass(frozen=True)
class ParseResult:
    """Tree produced for a source text, possibly degraded."""

    root: SyntaxNode
    language: str | None
    issues: tuple[ParseIssue, ...] = field(default_factory=tuple)
    is_fallback: bool = False
