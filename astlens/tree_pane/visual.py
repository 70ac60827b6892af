"""Render-time visual nodes for the tree pane.

Each drawn node instance gets an opaque integer id. Ids are distinct from
path addresses and only live as long as one rendered snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count

from ..syntax_tree.labels import DEFAULT_SUMMARY_MAX_CHARS, node_summary
from ..syntax_tree.paths import PathTable
from ..syntax_tree.types import Span


@dataclass(frozen=True)
class VisualNode:
    """One drawn tree row before visibility filtering."""

    node_id: int
    path: str
    kind: str
    summary: str
    depth: int
    parent_id: int | None
    span: Span | None
    has_children: bool

    @property
    def label(self) -> str:
        """Text matched by search: kind plus inline summary."""
        return f"{self.kind} {self.summary}" if self.summary else self.kind


@dataclass
class VisualTree:
    """Visual nodes in draw (pre-order) order with id/path lookups."""

    nodes: list[VisualNode] = field(default_factory=list)
    _by_id: dict[int, VisualNode] = field(default_factory=dict, repr=False)
    _by_path: dict[str, VisualNode] = field(default_factory=dict, repr=False)

    def add(self, visual: VisualNode) -> None:
        self.nodes.append(visual)
        self._by_id[visual.node_id] = visual
        self._by_path[visual.path] = visual

    def get(self, node_id: int) -> VisualNode | None:
        return self._by_id.get(node_id)

    def for_path(self, path: str) -> VisualNode | None:
        return self._by_path.get(path)

    def __len__(self) -> int:
        return len(self.nodes)


def build_visual_tree(
    paths: PathTable,
    summary_max_chars: int = DEFAULT_SUMMARY_MAX_CHARS,
) -> VisualTree:
    """Assign visual ids to every node of ``paths`` in traversal order."""
    tree = VisualTree()
    ids = count()
    id_by_path: dict[str, int] = {}
    depth_by_path: dict[str, int] = {}
    all_paths = paths.paths()
    parents_with_children = {paths.parent_path(path) for path in all_paths}
    for path in all_paths:
        node = paths.node_at(path)
        if node is None:
            continue
        parent_path = paths.parent_path(path)
        depth = 0 if parent_path is None else depth_by_path[parent_path] + 1
        node_id = next(ids)
        id_by_path[path] = node_id
        depth_by_path[path] = depth
        tree.add(
            VisualNode(
                node_id=node_id,
                path=path,
                kind=node.kind or "Unknown",
                summary=node_summary(node, summary_max_chars),
                depth=depth,
                parent_id=None if parent_path is None else id_by_path[parent_path],
                span=node.span,
                has_children=path in parents_with_children,
            )
        )
    return tree
