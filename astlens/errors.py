"""Exception types raised by astlens."""

from __future__ import annotations


class AstLensError(Exception):
    """Base class for astlens failures surfaced to callers."""


class MissingContainerError(AstLensError):
    """The rendering surface a viewer was asked to attach to does not exist."""

    def __init__(self, container_id: str) -> None:
        super().__init__(f"Container with id '{container_id}' not found")
        self.container_id = container_id


class NotAttachedError(AstLensError):
    """Rendering was requested before the viewer was attached to a surface."""

    def __init__(self) -> None:
        super().__init__("Viewer not attached. Call attach() first.")


class SnapshotLoadError(AstLensError):
    """Source text for a snapshot could not be read."""


class ExportError(AstLensError):
    """A tree could not be serialized for export."""
