"""Node-label search with ancestor reveal."""

from __future__ import annotations

from .nodes import SearchEngine, label_matches

__all__ = ["SearchEngine", "label_matches"]
