"""JSON export of a full tree snapshot.

The dump is order preserving and contains only tree data; collapse ids and
the selection marker live in view state and never reach the tree.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from ..errors import ExportError
from .types import NodeLike, is_node

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_FILENAME = "ast-tree.json"
DEFAULT_EXPORT_INDENT = 2


def _empty_container(value: object) -> dict[str, object] | list[object] | None:
    if is_node(value) or isinstance(value, dict):
        return {}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return [None] * len(value)
    return None


def node_to_data(node: NodeLike) -> dict[str, object]:
    """Return ``{"type": kind, **fields}`` with nested nodes converted.

    Untyped nodes get no ``type`` key, so their input objects come back as
    they were read.
    """
    data: dict[str, object] = {}
    pending: list[tuple[object, dict[str, object] | list[object]]] = [(node, data)]
    while pending:
        source, out = pending.pop()
        if is_node(source):
            if getattr(source, "typed", True):
                out["type"] = source.kind
            items = source.iter_fields()
        elif isinstance(source, dict):
            items = ((str(key), value) for key, value in source.items())
        else:
            items = enumerate(source)
        for key, value in items:
            container = _empty_container(value)
            out[key] = value if container is None else container
            if container is not None:
                pending.append((value, container))
    return data


def export_tree_json(root: NodeLike, indent: int | None = DEFAULT_EXPORT_INDENT) -> str:
    """Serialize ``root`` as JSON text.

    Raises ``ExportError`` when the tree nests deeper than the JSON encoder
    can follow.
    """
    data = node_to_data(root)
    try:
        return json.dumps(data, indent=indent, ensure_ascii=False, default=str)
    except RecursionError as exc:
        raise ExportError("Tree is too deeply nested to export as JSON.") from exc


def write_export(root: NodeLike, target: Path, indent: int | None = DEFAULT_EXPORT_INDENT) -> Path:
    """Write the JSON export to ``target`` (a directory gets the default name)."""
    if target.is_dir():
        target = target / DEFAULT_EXPORT_FILENAME
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(export_tree_json(root, indent=indent) + "\n", encoding="utf-8")
    logger.info("Exported tree to %s", target)
    return target
