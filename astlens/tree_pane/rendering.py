"""Formatting helpers for tree-pane rows."""

from __future__ import annotations

from collections.abc import Iterator

from ..ui_theme import DEFAULT_THEME, UITheme
from .collapse import CollapseState
from .visual import VisualNode, VisualTree


def visible_nodes(tree: VisualTree, collapse: CollapseState) -> Iterator[VisualNode]:
    """Yield drawn nodes in order, skipping subtrees under collapsed nodes."""
    hidden_below_depth: int | None = None
    for visual in tree.nodes:
        if hidden_below_depth is not None:
            if visual.depth > hidden_below_depth:
                continue
            hidden_below_depth = None
        yield visual
        if collapse.is_collapsed(visual.node_id):
            hidden_below_depth = visual.depth


def highlight_substring(text: str, query: str, emphasis: str, reset: str) -> str:
    """Emphasize the first case-insensitive occurrence of ``query``."""
    if not query or not emphasis:
        return text
    idx = text.casefold().find(query.casefold())
    if idx < 0:
        return text
    end = idx + len(query)
    return text[:idx] + emphasis + text[idx:end] + reset + text[end:]


def format_visual_row(
    visual: VisualNode,
    collapse: CollapseState,
    *,
    selected: bool = False,
    highlighted: bool = False,
    search_query: str = "",
    theme: UITheme | None = None,
) -> str:
    """Render one tree row as ANSI-styled display text."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    indent = "  " * visual.depth
    if collapse.is_stateful(visual.node_id):
        marker = "▸ " if collapse.is_collapsed(visual.node_id) else "▾ "
    else:
        marker = "  "

    kind_text = visual.kind
    summary_text = visual.summary
    if highlighted:
        kind_text = highlight_substring(kind_text, search_query, active_theme.tree_search_emphasis, reset)
        summary_text = highlight_substring(summary_text, search_query, active_theme.tree_search_emphasis, reset)

    body = f"{active_theme.kind_color(visual.kind)}{kind_text}{reset}"
    if summary_text:
        body += f" {active_theme.tree_summary}{summary_text}{reset}"
    if highlighted:
        if active_theme.tree_search_match:
            body = f"{active_theme.tree_search_match}{body}{reset}"
        else:
            body += " *"
    if selected:
        if active_theme.reverse:
            body = f"{active_theme.reverse}{body}{reset}"
        else:
            body = f"[{body}]"
    return f"{indent}{active_theme.tree_marker}{marker}{reset}{body}"


def render_tree_rows(
    tree: VisualTree,
    collapse: CollapseState,
    *,
    selected_id: int | None = None,
    highlighted_paths: frozenset[str] = frozenset(),
    search_query: str = "",
    theme: UITheme | None = None,
) -> list[str]:
    """Render every visible tree row."""
    return [
        format_visual_row(
            visual,
            collapse,
            selected=visual.node_id == selected_id,
            highlighted=visual.path in highlighted_paths,
            search_query=search_query,
            theme=theme,
        )
        for visual in visible_nodes(tree, collapse)
    ]
