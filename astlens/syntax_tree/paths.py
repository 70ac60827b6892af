"""Dotted path addresses for nodes within one tree snapshot.

A path is the chain of field selectors from the root, rendered as
``root.body.0.declarations.0.init``. Paths are only meaningful against the
snapshot that produced them; owners drop every stored path on replacement.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .types import NodeLike, is_node, is_node_sequence, iter_child_fields

ROOT_PATH = "root"
_MISSING = object()


@dataclass(frozen=True)
class PathSegment:
    """One field selector; ``index`` is set for sequence members."""

    field: str
    index: int | None = None

    def render(self) -> str:
        if self.index is None:
            return self.field
        return f"{self.field}.{self.index}"


def child_path(parent_path: str, field_name: str, index: int | None) -> str:
    return f"{parent_path}.{PathSegment(field_name, index).render()}"


def parse_path(path: str) -> tuple[str, ...] | None:
    """Split a dotted path into raw tokens after ``root``.

    Returns ``None`` when ``path`` does not start at the root. Whether a digit
    token is an index depends on the tree, so tokens stay unclassified here.
    """
    parts = path.strip().split(".")
    if not parts or parts[0] != ROOT_PATH:
        return None
    if any(not part for part in parts[1:]):
        return None
    return tuple(parts[1:])


def walk_with_paths(root: NodeLike) -> Iterator[tuple[str, NodeLike, str | None]]:
    """Depth-first pre-order walk yielding ``(path, node, parent_path)``.

    Fields are visited in document order and sequence members in sequence
    order. A node object met twice is only yielded the first time.
    """
    seen: set[int] = set()
    stack: list[tuple[str, NodeLike, str | None]] = [(ROOT_PATH, root, None)]
    while stack:
        path, node, parent_path = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        yield path, node, parent_path
        children = [
            (child_path(path, field_name, index), child, path)
            for field_name, index, child in iter_child_fields(node)
        ]
        stack.extend(reversed(children))


@dataclass
class PathTable:
    """Bidirectional node/path lookup for a single snapshot."""

    root: NodeLike
    _path_by_node: dict[int, str] = field(default_factory=dict, repr=False)
    _node_by_path: dict[str, NodeLike] = field(default_factory=dict, repr=False)
    _parent_by_path: dict[str, str | None] = field(default_factory=dict, repr=False)

    def add(self, path: str, node: NodeLike, parent_path: str | None) -> None:
        self._path_by_node[id(node)] = path
        self._node_by_path[path] = node
        self._parent_by_path[path] = parent_path

    def path_of(self, node: NodeLike) -> str | None:
        """Return the path of ``node``, or ``None`` if it is not in this snapshot."""
        path = self._path_by_node.get(id(node))
        if path is None or self._node_by_path.get(path) is not node:
            return None
        return path

    def node_at(self, path: str) -> NodeLike | None:
        """Resolve ``path``; unknown or stale paths resolve to ``None``."""
        return self._node_by_path.get(path)

    def parent_path(self, path: str) -> str | None:
        return self._parent_by_path.get(path)

    def ancestor_paths(self, path: str) -> list[str]:
        """Return ancestor paths nearest-first, excluding ``path`` itself."""
        out: list[str] = []
        parent = self._parent_by_path.get(path)
        while parent is not None:
            out.append(parent)
            parent = self._parent_by_path.get(parent)
        return out

    def paths(self) -> list[str]:
        """All paths in traversal order."""
        return list(self._node_by_path)

    def __len__(self) -> int:
        return len(self._node_by_path)

    def __contains__(self, path: object) -> bool:
        return path in self._node_by_path


def assign_paths(root: NodeLike) -> PathTable:
    table = PathTable(root=root)
    for path, node, parent_path in walk_with_paths(root):
        table.add(path, node, parent_path)
    return table


def resolve_path(root: NodeLike, path: str) -> NodeLike | None:
    """Walk ``path`` structurally from ``root`` without a prebuilt table.

    Returns ``None`` whenever a selector does not lead to a node.
    """
    tokens = parse_path(path)
    if tokens is None:
        return None
    current: NodeLike = root
    i = 0
    while i < len(tokens):
        value = dict(current.iter_fields()).get(tokens[i], _MISSING)
        i += 1
        if is_node(value):
            current = value
            continue
        if not is_node_sequence(value) or i >= len(tokens):
            return None
        token = tokens[i]
        i += 1
        if not token.isdigit():
            return None
        index = int(token)
        if index >= len(value) or value[index] is None:
            return None
        current = value[index]
    return current

