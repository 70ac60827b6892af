"""Generic syntax-tree model, path addressing, and line cross-referencing.

Defines ``SyntaxNode``/``Span`` plus snapshot-scoped path tables.
Also builds the line index, node labels, adapters, and JSON export.
"""

from __future__ import annotations

from .convert import from_estree, from_tree_sitter
from .export import DEFAULT_EXPORT_FILENAME, export_tree_json, node_to_data, write_export
from .labels import DEFAULT_SUMMARY_MAX_CHARS, node_summary
from .line_index import IndexedTree, LineEntry, LineIndex, build_line_index, index_snapshot
from .paths import (
    ROOT_PATH,
    PathSegment,
    PathTable,
    assign_paths,
    parse_path,
    resolve_path,
    walk_with_paths,
)
from .types import NodeLike, Span, SyntaxNode, has_children, is_node, iter_child_nodes

__all__ = [
    "NodeLike",
    "Span",
    "SyntaxNode",
    "has_children",
    "is_node",
    "iter_child_nodes",
    "ROOT_PATH",
    "PathSegment",
    "PathTable",
    "assign_paths",
    "parse_path",
    "resolve_path",
    "walk_with_paths",
    "IndexedTree",
    "LineEntry",
    "LineIndex",
    "build_line_index",
    "index_snapshot",
    "DEFAULT_SUMMARY_MAX_CHARS",
    "node_summary",
    "from_estree",
    "from_tree_sitter",
    "DEFAULT_EXPORT_FILENAME",
    "export_tree_json",
    "node_to_data",
    "write_export",
]
