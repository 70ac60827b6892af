"""Label search over tree nodes.

Search highlights and reveals; it never hides non-matching nodes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..state import ViewerEvents, ViewState

logger = logging.getLogger(__name__)


def label_matches(label: str, query: str) -> bool:
    """Case-insensitive substring test used for node labels."""
    return query.casefold() in label.casefold()


@dataclass
class SearchEngine:
    """Highlight nodes whose rendered label contains the query."""

    state: ViewState
    events: ViewerEvents

    def clear(self) -> None:
        state = self.state
        state.search_query = ""
        state.search_matches = ()
        state.highlighted_paths = frozenset()

    def search(self, query: str) -> frozenset[str]:
        """Return matching paths and expand every ancestor of each match.

        A blank query clears highlights without touching collapse state.
        """
        state = self.state
        if not query.strip():
            self.clear()
            self.events.search_result(frozenset())
            return frozenset()

        matches: list[str] = []
        for visual in state.visual.nodes:
            if not label_matches(visual.label, query):
                continue
            matches.append(visual.path)
            state.collapse.expand_ancestors(visual.node_id)

        result = frozenset(matches)
        state.search_query = query
        state.search_matches = tuple(matches)
        state.highlighted_paths = result
        logger.debug("Search %r matched %d nodes", query, len(matches))
        self.events.search_result(result)
        return result
