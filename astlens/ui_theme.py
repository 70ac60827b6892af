"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes for the tree and source panes. Syntax
highlighting style for source code remains a separate Pygments setting.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reverse: str
    reset: str
    tree_marker: str
    tree_kind_default: str
    tree_summary: str
    tree_search_match: str
    tree_search_emphasis: str
    source_line_number: str
    source_mapped_marker: str
    kind_colors: dict[str, str] = field(default_factory=dict)

    def kind_color(self, kind: str) -> str:
        return self.kind_colors.get(kind, self.tree_kind_default)


_DEFAULT_KIND_COLORS = {
    "Program": "\033[38;5;79m",
    "FunctionDeclaration": "\033[38;5;187m",
    "FunctionExpression": "\033[38;5;187m",
    "ArrowFunctionExpression": "\033[38;5;187m",
    "VariableDeclaration": "\033[38;5;75m",
    "Identifier": "\033[38;5;117m",
    "Literal": "\033[38;5;174m",
    "JSXElement": "\033[38;5;111m",
    "JSXText": "\033[38;5;174m",
    "ImportDeclaration": "\033[38;5;176m",
    "ExportDefaultDeclaration": "\033[38;5;176m",
    "CallExpression": "\033[38;5;221m",
    "MemberExpression": "\033[38;5;117m",
    "BlockStatement": "\033[38;5;244m",
    "ReturnStatement": "\033[38;5;176m",
    "ERROR": "\033[1;38;5;203m",
}

DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    reset="\033[0m",
    tree_marker="\033[38;5;252m",
    tree_kind_default="\033[1;38;5;252m",
    tree_summary="\033[3;38;5;117m",
    tree_search_match="\033[48;5;94m",
    tree_search_emphasis="\033[7;1m",
    source_line_number="\033[38;5;102m",
    source_mapped_marker="\033[38;5;32m",
    kind_colors=_DEFAULT_KIND_COLORS,
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    reset="\033[0m",
    tree_marker="\033[38;5;39m",
    tree_kind_default="\033[1;38;5;153m",
    tree_summary="\033[3;38;5;110m",
    tree_search_match="\033[48;5;24m",
    tree_search_emphasis="\033[7;1m",
    source_line_number="\033[38;5;67m",
    source_mapped_marker="\033[38;5;45m",
    kind_colors={kind: "\033[38;5;45m" for kind in ("Program", "FunctionDeclaration", "CallExpression")},
)

PLAIN_THEME = UITheme(
    name="plain",
    reverse="",
    reset="",
    tree_marker="",
    tree_kind_default="",
    tree_summary="",
    tree_search_match="",
    tree_search_emphasis="",
    source_line_number="",
    source_mapped_marker="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
