"""Two-way selection sync between source lines and tree nodes.

Both entry points share one reveal sequence: clear the previous marker,
force ancestors expanded, mark the node, notify listeners. Repeating a call
with the same argument leaves state unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..state import ViewerEvents, ViewState
from .visual import VisualNode

logger = logging.getLogger(__name__)


@dataclass
class SelectionSynchronizer:
    """Resolve line or path clicks against one ``ViewState``."""

    state: ViewState
    events: ViewerEvents

    def _reveal(self, visual: VisualNode) -> None:
        state = self.state
        state.selected_id = None
        state.collapse.expand_ancestors(visual.node_id)
        state.selected_id = visual.node_id

    def select_by_line(self, line: int) -> str | None:
        """Select the most specific node covering ``line``.

        Lines with no covering node are a silent no-op. Returns the selected
        path, or ``None``.
        """
        state = self.state
        entry = state.line_index.most_specific(line)
        if entry is None:
            logger.debug("No node covers line %d", line)
            return None
        visual = state.visual.for_path(entry.path)
        if visual is None:
            logger.debug("Line %d maps to undrawn path %s", line, entry.path)
            return None
        self._reveal(visual)
        state.source_line = line
        self.events.node_selected(entry.path, entry.span.start_line)
        return entry.path

    def select_by_path(self, path: str) -> str | None:
        """Select the node at ``path`` and scroll the source to its start.

        Paths that no longer resolve in the current snapshot are ignored.
        """
        state = self.state
        node = state.paths.node_at(path)
        visual = state.visual.for_path(path) if node is not None else None
        if visual is None:
            logger.debug("Ignoring stale path %s", path)
            return None
        self._reveal(visual)
        start_line = node.span.start_line if node.span is not None else None
        if start_line is not None:
            state.source_line = start_line
        self.events.node_selected(path, start_line)
        if start_line is not None:
            self.events.line_selected(start_line)
        return path

    def clear(self) -> None:
        self.state.selected_id = None
