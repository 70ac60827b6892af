"""Snapshot and per-snapshot view state.

``ViewState`` is the explicit, mutable state object handed to selection and
search handlers. It is created whole for each snapshot and discarded whole
when the snapshot is replaced.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .parsing.types import ParseIssue
from .syntax_tree.line_index import LineIndex
from .syntax_tree.paths import PathTable
from .syntax_tree.types import NodeLike
from .tree_pane.collapse import CollapseState
from .tree_pane.visual import VisualTree


@dataclass(frozen=True)
class Snapshot:
    """One parsed tree together with the exact source text it came from."""

    root: NodeLike
    source: str
    path: Path | None = None
    language: str | None = None
    issues: tuple[ParseIssue, ...] = ()
    is_fallback: bool = False

    @property
    def source_lines(self) -> list[str]:
        """Source split on ``\\n`` so line ``n`` is ``source_lines[n - 1]``."""
        return [line[:-1] if line.endswith("\r") else line for line in self.source.split("\n")]


@dataclass
class ViewerEvents:
    """Optional callbacks consumed by the rendering layer."""

    on_line_selected: Callable[[int], None] | None = None
    on_node_selected: Callable[[str, int | None], None] | None = None
    on_search_result: Callable[[frozenset[str]], None] | None = None

    def line_selected(self, line: int) -> None:
        if self.on_line_selected is not None:
            self.on_line_selected(line)

    def node_selected(self, path: str, start_line: int | None) -> None:
        if self.on_node_selected is not None:
            self.on_node_selected(path, start_line)

    def search_result(self, paths: frozenset[str]) -> None:
        if self.on_search_result is not None:
            self.on_search_result(paths)


@dataclass
class ViewState:
    snapshot: Snapshot
    paths: PathTable
    line_index: LineIndex
    visual: VisualTree
    collapse: CollapseState
    generation: int = 0
    selected_id: int | None = None
    source_line: int | None = None
    search_query: str = ""
    search_matches: tuple[str, ...] = ()
    highlighted_paths: frozenset[str] = field(default_factory=frozenset)

    @property
    def selected_path(self) -> str | None:
        if self.selected_id is None:
            return None
        visual = self.visual.get(self.selected_id)
        return visual.path if visual is not None else None
