"""Tree-pane components: visual ids, collapse state, row rendering and node details.

Selection sync lives in ``astlens.tree_pane.selection``.
"""

from __future__ import annotations

from .collapse import CollapseState
from .details import NodeDetails, format_property_value, node_details, render_details_rows
from .rendering import format_visual_row, render_tree_rows, visible_nodes
from .visual import VisualNode, VisualTree, build_visual_tree

__all__ = [
    "CollapseState",
    "NodeDetails",
    "VisualNode",
    "VisualTree",
    "build_visual_tree",
    "format_property_value",
    "format_visual_row",
    "node_details",
    "render_details_rows",
    "render_tree_rows",
    "visible_nodes",
]
