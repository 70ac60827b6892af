"""Viewer session: owns the active snapshot and routes user actions.

Snapshot replacement is one atomic step: paths, line index, visual tree and
collapse state are built first, then a single ``ViewState`` reference is
swapped under a lock. Renders carry a generation ticket and are dropped if
the snapshot changed while they were in flight.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from .errors import MissingContainerError, NotAttachedError
from .loader import SnapshotLoadResult
from .search.nodes import SearchEngine
from .source_pane.rendering import render_source_rows
from .source_pane.syntax import DEFAULT_STYLE
from .state import Snapshot, ViewerEvents, ViewState
from .syntax_tree.export import DEFAULT_EXPORT_INDENT, export_tree_json
from .syntax_tree.labels import DEFAULT_SUMMARY_MAX_CHARS
from .syntax_tree.line_index import index_snapshot
from .tree_pane.collapse import CollapseState
from .tree_pane.details import NodeDetails, node_details
from .tree_pane.rendering import render_tree_rows
from .tree_pane.selection import SelectionSynchronizer
from .tree_pane.visual import build_visual_tree
from .ui_theme import UITheme

logger = logging.getLogger(__name__)


class RenderSurface(Protocol):
    """Drawing target for the tree and source panes."""

    def draw(self, tree_rows: list[str], source_rows: list[str]) -> None: ...


@dataclass(frozen=True)
class RenderTicket:
    """Handle for one render pass bound to the state it started from."""

    generation: int
    state: ViewState


@dataclass(frozen=True)
class _ActiveView:
    state: ViewState
    selection: SelectionSynchronizer
    search: SearchEngine


def build_view_state(
    snapshot: Snapshot,
    generation: int = 0,
    summary_max_chars: int = DEFAULT_SUMMARY_MAX_CHARS,
) -> ViewState:
    """Index ``snapshot`` and create fresh collapse/selection state for it."""
    indexed = index_snapshot(snapshot.root)
    visual = build_visual_tree(indexed.paths, summary_max_chars)
    return ViewState(
        snapshot=snapshot,
        paths=indexed.paths,
        line_index=indexed.line_index,
        visual=visual,
        collapse=CollapseState.for_tree(visual),
        generation=generation,
    )


class ViewerSession:
    """One independent tree/source viewer instance."""

    def __init__(
        self,
        events: ViewerEvents | None = None,
        *,
        summary_max_chars: int = DEFAULT_SUMMARY_MAX_CHARS,
        style: str = DEFAULT_STYLE,
        theme: UITheme | None = None,
        no_color: bool = False,
    ) -> None:
        self.events = events or ViewerEvents()
        self.summary_max_chars = summary_max_chars
        self.style = style
        self.theme = theme
        self.no_color = no_color
        self._lock = threading.Lock()
        self._generation = 0
        self._active: _ActiveView | None = None
        self._surface: RenderSurface | None = None

    def attach(self, surfaces: Mapping[str, RenderSurface], container_id: str) -> RenderSurface:
        """Bind the session to the surface registered as ``container_id``."""
        surface = surfaces.get(container_id)
        if surface is None:
            raise MissingContainerError(container_id)
        self._surface = surface
        return surface

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def state(self) -> ViewState | None:
        active = self._active
        return active.state if active is not None else None

    def _require_active(self) -> _ActiveView | None:
        active = self._active
        if active is None:
            logger.debug("Ignoring action without a snapshot")
        return active

    def replace_snapshot(self, snapshot: Snapshot) -> ViewState:
        """Atomically replace the snapshot and every state derived from it."""
        with self._lock:
            generation = self._generation + 1
            state = build_view_state(snapshot, generation, self.summary_max_chars)
            self._active = _ActiveView(
                state=state,
                selection=SelectionSynchronizer(state=state, events=self.events),
                search=SearchEngine(state=state, events=self.events),
            )
            self._generation = generation
        logger.debug(
            "Snapshot generation %d: %d nodes, %d indexed lines",
            generation,
            len(state.paths),
            len(state.line_index),
        )
        return state

    def apply_load_result(self, result: SnapshotLoadResult, latest_request_id: int) -> bool:
        """Apply a background load result unless a newer request superseded it."""
        if result.request.request_id != latest_request_id:
            logger.debug("Dropping superseded load %d", result.request.request_id)
            return False
        if result.snapshot is None:
            return False
        self.replace_snapshot(result.snapshot)
        return True

    def select_by_line(self, line: int) -> str | None:
        active = self._require_active()
        if active is None:
            return None
        return active.selection.select_by_line(line)

    def select_by_path(self, path: str) -> str | None:
        active = self._require_active()
        if active is None:
            return None
        return active.selection.select_by_path(path)

    def toggle(self, node_id: int) -> bool:
        active = self._require_active()
        if active is None:
            return False
        return active.state.collapse.toggle(node_id)

    def click_node(self, node_id: int) -> str | None:
        """Tree header click: flip the node's collapse state, then select it."""
        active = self._require_active()
        if active is None:
            return None
        visual = active.state.visual.get(node_id)
        if visual is None:
            return None
        active.state.collapse.toggle(node_id)
        return active.selection.select_by_path(visual.path)

    def expand_all(self) -> None:
        active = self._require_active()
        if active is not None:
            active.state.collapse.expand_all()

    def collapse_all(self) -> None:
        active = self._require_active()
        if active is not None:
            active.state.collapse.collapse_all()

    def search(self, query: str) -> frozenset[str]:
        active = self._require_active()
        if active is None:
            return frozenset()
        return active.search.search(query)

    def export_json(self, indent: int | None = DEFAULT_EXPORT_INDENT) -> str | None:
        active = self._require_active()
        if active is None:
            return None
        return export_tree_json(active.state.snapshot.root, indent=indent)

    def selected_details(self) -> NodeDetails | None:
        """Details of the selected node, or ``None`` without a selection."""
        active = self._require_active()
        if active is None:
            return None
        path = active.state.selected_path
        node = active.state.paths.node_at(path) if path is not None else None
        if node is None:
            return None
        return node_details(node)

    def begin_render(self) -> RenderTicket | None:
        active = self._active
        if active is None:
            return None
        return RenderTicket(generation=active.state.generation, state=active.state)

    def build_rows(self, ticket: RenderTicket) -> tuple[list[str], list[str]]:
        state = ticket.state
        tree_rows = render_tree_rows(
            state.visual,
            state.collapse,
            selected_id=state.selected_id,
            highlighted_paths=state.highlighted_paths,
            search_query=state.search_query,
            theme=self.theme,
        )
        source_rows = render_source_rows(
            state.snapshot,
            state.line_index,
            selected_line=state.source_line,
            style=self.style,
            no_color=self.no_color,
            theme=self.theme,
        )
        return tree_rows, source_rows

    def commit_render(self, ticket: RenderTicket, tree_rows: list[str], source_rows: list[str]) -> bool:
        """Draw rows unless the snapshot was replaced since ``ticket`` was issued."""
        if self._surface is None:
            raise NotAttachedError()
        with self._lock:
            if ticket.generation != self._generation:
                logger.debug(
                    "Discarding stale render for generation %d (current %d)",
                    ticket.generation,
                    self._generation,
                )
                return False
            self._surface.draw(tree_rows, source_rows)
        return True

    def render(self) -> bool:
        if self._surface is None:
            raise NotAttachedError()
        ticket = self.begin_render()
        if ticket is None:
            return False
        tree_rows, source_rows = self.build_rows(ticket)
        return self.commit_render(ticket, tree_rows, source_rows)
