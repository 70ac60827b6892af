"""Syntax-tree datatypes consumed by the cross-reference engine.

Nodes are open-ended: the engine never switches on node kinds. Anything that
exposes ``kind``, ``span`` and ``iter_fields()`` is traversed the same way.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class Span:
    """Inclusive source extent with 1-based lines and 0-based columns."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    @property
    def line_extent(self) -> int:
        return self.end_line - self.start_line

    @property
    def column_extent(self) -> int:
        return self.end_column - self.start_column

    def covered_lines(self) -> range:
        """Lines touched by this span, clamped to line 1."""
        return range(max(1, self.start_line), self.end_line + 1)

    def to_loc(self) -> dict[str, dict[str, int]]:
        """Return the span in ESTree ``loc`` shape."""
        return {
            "start": {"line": self.start_line, "column": self.start_column},
            "end": {"line": self.end_line, "column": self.end_column},
        }

    @classmethod
    def from_loc(cls, loc: object) -> Span | None:
        """Build a span from an ESTree ``loc`` mapping, or ``None`` if malformed."""
        if not isinstance(loc, dict):
            return None
        start = loc.get("start")
        end = loc.get("end")
        if not isinstance(start, dict) or not isinstance(end, dict):
            return None
        try:
            return cls(
                start_line=int(start["line"]),
                start_column=int(start.get("column", 0)),
                end_line=int(end["line"]),
                end_column=int(end.get("column", 0)),
            )
        except (KeyError, TypeError, ValueError):
            return None


@runtime_checkable
class NodeLike(Protocol):
    """Capability shared by every traversable tree node."""

    kind: str
    span: Span | None

    def iter_fields(self) -> Iterable[tuple[str, object]]: ...


@dataclass(eq=False)
class SyntaxNode:
    """Generic tree node with insertion-ordered fields.

    A field holds a child node, a sequence of nodes (``None`` holes allowed),
    or a scalar. Equality and hashing are by identity. ``typed`` is false for
    nodes made from input objects that carried no type of their own.
    """

    kind: str
    fields: dict[str, object] = field(default_factory=dict)
    span: Span | None = None
    typed: bool = True

    def iter_fields(self) -> Iterator[tuple[str, object]]:
        return iter(self.fields.items())

    def get(self, name: str, default: object = None) -> object:
        return self.fields.get(name, default)


def is_node(value: object) -> bool:
    """Return whether ``value`` can be traversed as a tree node."""
    return isinstance(value, NodeLike)


def is_node_sequence(value: object) -> bool:
    """Return whether ``value`` is a non-empty sequence of nodes/holes."""
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return False
    has_node = False
    for item in value:
        if item is None:
            continue
        if not is_node(item):
            return False
        has_node = True
    return has_node


def iter_child_fields(node: NodeLike) -> Iterator[tuple[str, int | None, NodeLike]]:
    """Yield ``(field, index, child)`` for node-bearing fields in field order.

    ``index`` is ``None`` for single-child fields. Holes in sequences keep
    their index but are skipped.
    """
    for name, value in node.iter_fields():
        if is_node(value):
            yield name, None, value
        elif is_node_sequence(value):
            for index, item in enumerate(value):
                if item is not None:
                    yield name, index, item


def iter_child_nodes(node: NodeLike) -> Iterator[NodeLike]:
    for _name, _index, child in iter_child_fields(node):
        yield child


def has_children(node: NodeLike) -> bool:
    return next(iter_child_nodes(node), None) is not None
