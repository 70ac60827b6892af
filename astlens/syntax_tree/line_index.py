"""Line-number to node cross-reference index.

One depth-first walk produces both the path table and the per-line entries,
so both always describe the same snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from .paths import PathTable, walk_with_paths
from .types import NodeLike, Span

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineEntry:
    """One node covering a line; ``order`` is its pre-order traversal rank."""

    path: str
    kind: str
    span: Span
    order: int

    @property
    def specificity_key(self) -> tuple[int, int, int]:
        """Smaller spans first; equal sizes keep traversal order."""
        return (self.span.line_extent, self.span.column_extent, self.order)


class LineIndex:
    """Read-only mapping of 1-based line numbers to innermost-first entries.

    Lines covered by no node are absent, never present with an empty tuple.
    """

    def __init__(self, entries_by_line: dict[int, tuple[LineEntry, ...]]) -> None:
        self._entries_by_line = entries_by_line

    def entries_for(self, line: int) -> tuple[LineEntry, ...]:
        return self._entries_by_line.get(line, ())

    def most_specific(self, line: int) -> LineEntry | None:
        entries = self._entries_by_line.get(line)
        if not entries:
            return None
        return entries[0]

    def lines(self) -> list[int]:
        return sorted(self._entries_by_line)

    def __contains__(self, line: object) -> bool:
        return line in self._entries_by_line

    def __len__(self) -> int:
        return len(self._entries_by_line)

    def __iter__(self) -> Iterator[int]:
        return iter(self.lines())


@dataclass(frozen=True)
class IndexedTree:
    """Path table and line index built from the same walk."""

    paths: PathTable
    line_index: LineIndex


def index_snapshot(root: NodeLike) -> IndexedTree:
    """Walk ``root`` once, assigning paths and collecting line entries.

    Nodes without a span are still descended into but add no entries.
    """
    paths = PathTable(root=root)
    buckets: dict[int, list[LineEntry]] = {}
    unspanned = 0
    for order, (path, node, parent_path) in enumerate(walk_with_paths(root)):
        paths.add(path, node, parent_path)
        span = node.span
        if span is None:
            unspanned += 1
            continue
        entry = LineEntry(path=path, kind=node.kind, span=span, order=order)
        for line in span.covered_lines():
            buckets.setdefault(line, []).append(entry)

    entries_by_line = {
        line: tuple(sorted(entries, key=lambda item: item.specificity_key))
        for line, entries in buckets.items()
    }
    logger.debug(
        "Indexed %d nodes (%d without span) across %d lines",
        len(paths),
        unspanned,
        len(entries_by_line),
    )
    return IndexedTree(paths=paths, line_index=LineIndex(entries_by_line))


def build_line_index(root: NodeLike) -> LineIndex:
    return index_snapshot(root).line_index
