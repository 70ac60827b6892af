"""Display labels for tree nodes (kind plus a short inline summary)."""

from __future__ import annotations

import json
from collections.abc import Callable

from .export import node_to_data
from .types import NodeLike, is_node

DEFAULT_SUMMARY_MAX_CHARS = 30


def _fields(node: object) -> dict[str, object]:
    if not is_node(node):
        return {}
    return dict(node.iter_fields())


def _field(node: object, *names: str) -> object:
    """Follow nested field names, returning ``None`` when any hop is missing."""
    current = node
    for name in names:
        current = _fields(current).get(name)
        if current is None:
            return None
    return current


def _count(node: NodeLike, name: str) -> int:
    value = _fields(node).get(name)
    if isinstance(value, (list, tuple)):
        return len(value)
    return 0


def _json_value(value: object) -> str:
    if is_node(value):
        value = node_to_data(value)
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        return str(value)


def _summarize_function_declaration(node: NodeLike, max_chars: int) -> str:
    name = _field(node, "id", "name") or "anonymous"
    return f"{name}({_count(node, 'params')} params)"


def _summarize_function_expression(node: NodeLike, max_chars: int) -> str:
    return f"({_count(node, 'params')} params)"


def _summarize_jsx_text(node: NodeLike, max_chars: int) -> str:
    text = str(_fields(node).get("value") or "").strip()
    if not text:
        return ""
    clipped = text[:max_chars] + ("..." if len(text) > max_chars else "")
    return f'"{clipped}"'


def _summarize_call(node: NodeLike, max_chars: int) -> str:
    callee = _field(node, "callee", "name") or _field(node, "callee", "property", "name") or "unknown"
    return f"{callee}({_count(node, 'arguments')} args)"


_SUMMARIZERS: dict[str, Callable[[NodeLike, int], str]] = {
    "Identifier": lambda node, _max: str(_fields(node).get("name") or ""),
    "Literal": lambda node, _max: _json_value(_fields(node).get("value")),
    "FunctionDeclaration": _summarize_function_declaration,
    "FunctionExpression": _summarize_function_expression,
    "ArrowFunctionExpression": _summarize_function_expression,
    "JSXElement": lambda node, _max: f"<{_field(node, 'openingElement', 'name', 'name') or 'unknown'}>",
    "JSXText": _summarize_jsx_text,
    "ImportDeclaration": lambda node, _max: f'from "{_field(node, "source", "value")}"',
    "VariableDeclaration": lambda node, _max: f"{_fields(node).get('kind')} ({_count(node, 'declarations')})",
    "CallExpression": _summarize_call,
    "MemberExpression": lambda node, _max: (
        f"{_field(node, 'object', 'name') or '?'}.{_field(node, 'property', 'name') or '?'}"
    ),
}


def _generic_summary(node: NodeLike, max_chars: int) -> str:
    """Summary for catalogs without a dedicated formatter (e.g. Tree-sitter)."""
    fields = _fields(node)
    for name in ("name", "text"):
        value = fields.get(name)
        if isinstance(value, str) and value.strip():
            text = " ".join(value.split())
            return text[:max_chars] + ("..." if len(text) > max_chars else "")
    if "value" in fields and not is_node(fields["value"]):
        return _json_value(fields["value"])
    return ""


def node_summary(node: NodeLike, max_chars: int = DEFAULT_SUMMARY_MAX_CHARS) -> str:
    """Return the short inline summary shown next to a node's kind."""
    summarizer = _SUMMARIZERS.get(node.kind, _generic_summary)
    return summarizer(node, max_chars)

