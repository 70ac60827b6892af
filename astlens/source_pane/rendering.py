"""Source-pane row rendering with line-number gutter and highlight."""

from __future__ import annotations

from ..state import Snapshot
from ..syntax_tree.line_index import LineIndex
from ..ui_theme import DEFAULT_THEME, UITheme
from .syntax import DEFAULT_STYLE, colorize_source, sanitize_terminal_text

GUTTER_WIDTH = 3


def format_source_row(
    line_number: int,
    text: str,
    *,
    mapped: bool,
    selected: bool,
    theme: UITheme | None = None,
) -> str:
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    marker = "│" if mapped else " "
    gutter = f"{active_theme.source_line_number}{line_number:>{GUTTER_WIDTH}}{reset}"
    marker_text = f"{active_theme.source_mapped_marker}{marker}{reset}"
    if selected:
        if active_theme.reverse:
            return f"{gutter}{marker_text} {active_theme.reverse}{text}{reset}"
        return f"{gutter}>{marker} {text}"
    return f"{gutter}{marker_text} {text}"


def render_source_rows(
    snapshot: Snapshot,
    line_index: LineIndex,
    *,
    selected_line: int | None = None,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
    theme: UITheme | None = None,
) -> list[str]:
    """Render the snapshot source, one row per ``\\n``-separated line.

    Lines present in ``line_index`` carry a marker; ``selected_line`` is drawn
    in reverse video.
    """
    source = sanitize_terminal_text(snapshot.source)
    if not no_color and source:
        source = colorize_source(source, snapshot.path, snapshot.language, style)
    lines = source.split("\n")
    rows: list[str] = []
    for idx, text in enumerate(lines, start=1):
        rows.append(
            format_source_row(
                idx,
                text.rstrip("\r"),
                mapped=idx in line_index,
                selected=idx == selected_line,
                theme=theme,
            )
        )
    return rows
