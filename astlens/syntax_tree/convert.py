"""Adapters turning parser output into ``SyntaxNode`` trees.

ESTree JSON (Babel/Acorn/Esprima output) and Tree-sitter nodes are both
mapped onto the same generic node shape; no node kind is special-cased.
"""

from __future__ import annotations

from collections.abc import Mapping

from .types import Span, SyntaxNode

# Keys carried as scalars and never descended into.
ESTREE_METADATA_KEYS = frozenset({"type", "start", "end", "loc", "range", "raw", "extra"})
TREE_SITTER_CHILDREN_FIELD = "children"
TREE_SITTER_TEXT_FIELD = "text"


def _estree_shell(data: Mapping[str, object]) -> SyntaxNode:
    kind = data.get("type")
    typed = isinstance(kind, str) and bool(kind)
    return SyntaxNode(
        kind=kind if typed else "Unknown",
        span=Span.from_loc(data.get("loc")),
        typed=typed,
    )


def _adopt_estree(value: object, pending: list[tuple[Mapping[str, object], SyntaxNode]]) -> object:
    if not isinstance(value, Mapping):
        return value
    child = _estree_shell(value)
    pending.append((value, child))
    return child


def from_estree(data: Mapping[str, object]) -> SyntaxNode:
    """Convert one ESTree mapping (and everything below it) into a ``SyntaxNode``.

    Objects without a ``type`` become untyped ``Unknown`` nodes, so the export
    writes them back without one. Field order follows the mapping order.
    Nesting depth is bounded by memory, not the interpreter stack.
    """
    root = _estree_shell(data)
    pending: list[tuple[Mapping[str, object], SyntaxNode]] = [(data, root)]
    while pending:
        source, node = pending.pop()
        for key, value in source.items():
            if key == "type" and node.typed:
                continue
            if key in ESTREE_METADATA_KEYS:
                node.fields[key] = value
            elif isinstance(value, list):
                node.fields[key] = [_adopt_estree(item, pending) for item in value]
            else:
                node.fields[key] = _adopt_estree(value, pending)
    return root


def _tree_sitter_span(node) -> Span:
    start_row, start_col = node.start_point
    end_row, end_col = node.end_point
    return Span(
        start_line=int(start_row) + 1,
        start_column=int(start_col),
        end_line=int(end_row) + 1,
        end_column=int(end_col),
    )


def _cursor_field_name(cursor) -> str | None:
    # py-tree-sitter >= 0.22 exposes a property; older releases a method.
    if hasattr(cursor, "field_name"):
        return cursor.field_name
    return cursor.current_field_name()


def _named_children_with_fields(node) -> list[tuple[str | None, object]]:
    out: list[tuple[str | None, object]] = []
    cursor = node.walk()
    if not cursor.goto_first_child():
        return out
    while True:
        child = cursor.node
        if child.is_named:
            out.append((_cursor_field_name(cursor), child))
        if not cursor.goto_next_sibling():
            break
    return out


def _node_text(source_bytes: bytes, node) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _tree_sitter_shell(node) -> SyntaxNode:
    return SyntaxNode(kind=str(node.type), span=_tree_sitter_span(node))


def from_tree_sitter(node, source_bytes: bytes) -> SyntaxNode:
    """Convert a Tree-sitter node into a ``SyntaxNode`` tree.

    Named children with a grammar field name land under that field (a list
    when the field repeats); other named children land under ``children``.
    Leaves keep their source text under ``text``.
    """
    root = _tree_sitter_shell(node)
    pending = [(node, root)]
    while pending:
        ts_node, converted = pending.pop()
        grouped: dict[str, list[SyntaxNode]] = {}
        for field_name, child in _named_children_with_fields(ts_node):
            child_node = _tree_sitter_shell(child)
            grouped.setdefault(field_name or TREE_SITTER_CHILDREN_FIELD, []).append(child_node)
            pending.append((child, child_node))

        fields = converted.fields
        for key, children in grouped.items():
            if key != TREE_SITTER_CHILDREN_FIELD and len(children) == 1:
                fields[key] = children[0]
            else:
                fields[key] = children
        if not grouped:
            fields[TREE_SITTER_TEXT_FIELD] = _node_text(source_bytes, ts_node)
        fields["loc"] = converted.span.to_loc()
    return root
