"""Detail panel for the selected node.

Shows the node's type, name and value, a one-line preview of every
property except position data, and the node's own JSON export.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass

from ..errors import ExportError
from ..syntax_tree.export import DEFAULT_EXPORT_INDENT, export_tree_json, node_to_data
from ..syntax_tree.types import NodeLike, is_node
from ..ui_theme import DEFAULT_THEME, UITheme

POSITION_KEYS = frozenset({"start", "end", "loc", "range"})


@dataclass(frozen=True)
class NodeDetails:
    kind: str
    name: str | None
    value: str | None
    properties: tuple[tuple[str, str], ...]
    raw_json: str | None


def format_property_value(value: object) -> str:
    """One-line preview: quoted strings, ``Array(n)``, ``Object{keys}``."""
    if value is None:
        return "null"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_node(value):
        value = node_to_data(value)
    if isinstance(value, dict):
        return "Object{" + ", ".join(str(key) for key in value) + "}"
    if isinstance(value, Sequence) and not isinstance(value, bytes):
        return f"Array({len(value)})"
    return str(value)


def _value_json(value: object) -> str:
    if is_node(value):
        value = node_to_data(value)
    try:
        return json.dumps(value, ensure_ascii=False, default=str)
    except (ValueError, RecursionError):
        return str(value)


def node_details(node: NodeLike) -> NodeDetails:
    data = node_to_data(node)
    name = data.get("name")
    if isinstance(name, str):
        name_text = name or None
    else:
        name_text = format_property_value(name) if name else None
    try:
        raw_json = export_tree_json(node, indent=DEFAULT_EXPORT_INDENT)
    except ExportError:
        raw_json = None
    return NodeDetails(
        kind=node.kind or "Unknown",
        name=name_text,
        value=_value_json(data["value"]) if "value" in data else None,
        properties=tuple(
            (key, format_property_value(value)) for key, value in data.items() if key not in POSITION_KEYS
        ),
        raw_json=raw_json,
    )


def render_details_rows(details: NodeDetails, theme: UITheme | None = None) -> list[str]:
    """Render ``details`` as display rows for the terminal."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    heading = active_theme.tree_marker
    rows = [f"{heading}Basic Information{reset}"]
    rows.append(f"  Type: {active_theme.kind_color(details.kind)}{details.kind}{reset}")
    if details.name is not None:
        rows.append(f"  Name: {details.name}")
    if details.value is not None:
        rows.append(f"  Value: {details.value}")
    rows.append(f"{heading}All Properties{reset}")
    for key, preview in details.properties:
        rows.append(f"  {key}: {active_theme.tree_summary}{preview}{reset}")
    rows.append(f"{heading}Raw JSON{reset}")
    if details.raw_json is None:
        rows.append("  (too deeply nested to show)")
    else:
        rows.extend(f"  {line}" for line in details.raw_json.splitlines())
    return rows
