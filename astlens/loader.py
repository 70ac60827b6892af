"""Snapshot loading: read source, obtain a tree, and hand back a ``Snapshot``.

``SnapshotLoader`` runs loads on one background worker with latest-request-wins
semantics; results are drained and applied on the UI thread.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from queue import Empty, Queue

from .errors import SnapshotLoadError
from .parsing.languages import language_for_path
from .parsing.provider import parse_source
from .source_pane.syntax import read_text
from .state import Snapshot
from .syntax_tree.convert import from_estree

logger = logging.getLogger(__name__)


def snapshot_from_source(
    source: str,
    path: Path | None = None,
    language: str | None = None,
) -> Snapshot:
    """Parse ``source`` and wrap the result as a snapshot."""
    if language is None and path is not None:
        language = language_for_path(path)
    result = parse_source(source, language)
    return Snapshot(
        root=result.root,
        source=source,
        path=path,
        language=result.language,
        issues=result.issues,
        is_fallback=result.is_fallback,
    )


def snapshot_from_estree(source: str, tree_data: object, path: Path | None = None) -> Snapshot:
    """Wrap a pre-parsed ESTree JSON document (Babel, Acorn, ...) as a snapshot."""
    if not isinstance(tree_data, dict):
        raise SnapshotLoadError("ESTree document must be a JSON object.")
    return Snapshot(
        root=from_estree(tree_data),
        source=source,
        path=path,
        language="javascript",
    )


def load_snapshot(
    path: Path,
    language: str | None = None,
    ast_path: Path | None = None,
) -> Snapshot:
    """Read ``path`` and build its snapshot.

    With ``ast_path`` the tree comes from that ESTree JSON file instead of the
    Tree-sitter provider.
    """
    try:
        source = read_text(path)
    except OSError as exc:
        raise SnapshotLoadError(f"Failed to read {path}: {exc}") from exc

    if ast_path is None:
        return snapshot_from_source(source, path=path, language=language)

    try:
        tree_data = json.loads(read_text(ast_path))
    except (OSError, ValueError, RecursionError) as exc:
        raise SnapshotLoadError(f"Failed to read AST JSON {ast_path}: {exc}") from exc
    return snapshot_from_estree(source, tree_data, path=path)


@dataclass(frozen=True)
class SnapshotLoadRequest:
    """One snapshot load job."""

    request_id: int
    path: Path
    language: str | None = None
    ast_path: Path | None = None


@dataclass(frozen=True)
class SnapshotLoadResult:
    """Completed load; exactly one of ``snapshot``/``error`` is set."""

    request: SnapshotLoadRequest
    snapshot: Snapshot | None = None
    error: str | None = None


class SnapshotLoader:
    """Single-threaded latest-request-wins snapshot loader."""

    def __init__(self, load: Callable[..., Snapshot] = load_snapshot) -> None:
        self._load = load
        self._lock = threading.Lock()
        self._pending: SnapshotLoadRequest | None = None
        self._running = False
        self._next_request_id = 1
        self._latest_request_id = 0
        self._results: Queue[SnapshotLoadResult] = Queue()

    @property
    def latest_request_id(self) -> int:
        with self._lock:
            return self._latest_request_id

    def _worker(self) -> None:
        while True:
            with self._lock:
                request = self._pending
                self._pending = None
                if request is None:
                    self._running = False
                    return

            try:
                snapshot = self._load(request.path, language=request.language, ast_path=request.ast_path)
            except SnapshotLoadError as exc:
                logger.warning("Snapshot load %d failed: %s", request.request_id, exc)
                self._results.put(SnapshotLoadResult(request=request, error=str(exc)))
                continue
            self._results.put(SnapshotLoadResult(request=request, snapshot=snapshot))

    def schedule(
        self,
        path: Path,
        *,
        language: str | None = None,
        ast_path: Path | None = None,
    ) -> int:
        """Queue/replace pending load work and return its request id."""
        with self._lock:
            request_id = self._next_request_id
            self._next_request_id += 1
            self._latest_request_id = request_id
            self._pending = SnapshotLoadRequest(
                request_id=request_id,
                path=path,
                language=language,
                ast_path=ast_path,
            )
            if self._running:
                return request_id
            self._running = True

        worker = threading.Thread(
            target=self._worker,
            name="astlens-snapshot-loader",
            daemon=True,
        )
        worker.start()
        return request_id

    def drain_results(self) -> list[SnapshotLoadResult]:
        """Drain all completed load results."""
        out: list[SnapshotLoadResult] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out


__all__ = [
    "SnapshotLoadRequest",
    "SnapshotLoadResult",
    "SnapshotLoader",
    "load_snapshot",
    "snapshot_from_estree",
    "snapshot_from_source",
]
