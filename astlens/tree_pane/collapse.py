"""Expand/collapse state machine for visual tree nodes.

Only nodes with children are stateful; they start ``expanded``. A node is
visible when every ancestor is expanded, which is computed from the parent
chain rather than stored per descendant.
"""

from __future__ import annotations

from .visual import VisualTree


class CollapseState:
    """Collapsed-set bookkeeping keyed by visual node id."""

    def __init__(self) -> None:
        self._parent: dict[int, int | None] = {}
        self._stateful: set[int] = set()
        self._collapsed: set[int] = set()

    @classmethod
    def for_tree(cls, tree: VisualTree) -> CollapseState:
        state = cls()
        for visual in tree.nodes:
            state.register(visual.node_id, visual.parent_id, visual.has_children)
        return state

    def register(self, node_id: int, parent_id: int | None, has_children: bool) -> None:
        """Record one drawn node; stateful nodes start expanded."""
        self._parent[node_id] = parent_id
        if has_children:
            self._stateful.add(node_id)
        else:
            self._stateful.discard(node_id)
        self._collapsed.discard(node_id)

    def is_stateful(self, node_id: int) -> bool:
        return node_id in self._stateful

    def is_collapsed(self, node_id: int) -> bool:
        return node_id in self._collapsed

    def is_expanded(self, node_id: int) -> bool:
        return node_id in self._stateful and node_id not in self._collapsed

    def collapsed_ids(self) -> frozenset[int]:
        return frozenset(self._collapsed)

    def stateful_ids(self) -> frozenset[int]:
        return frozenset(self._stateful)

    def toggle(self, node_id: int) -> bool:
        """Flip ``node_id``; returns whether a transition happened (leaves: no)."""
        if node_id not in self._stateful:
            return False
        if node_id in self._collapsed:
            self._collapsed.discard(node_id)
        else:
            self._collapsed.add(node_id)
        return True

    def expand(self, node_id: int) -> bool:
        if node_id not in self._collapsed:
            return False
        self._collapsed.discard(node_id)
        return True

    def expand_all(self) -> None:
        self._collapsed.clear()

    def collapse_all(self) -> None:
        self._collapsed = set(self._stateful)

    def ancestors(self, node_id: int) -> list[int]:
        """Ancestor ids nearest-first."""
        out: list[int] = []
        parent = self._parent.get(node_id)
        while parent is not None:
            out.append(parent)
            parent = self._parent.get(parent)
        return out

    def expand_ancestors(self, node_id: int) -> list[int]:
        """Force every ancestor expanded; returns ids that changed state."""
        return [ancestor for ancestor in self.ancestors(node_id) if self.expand(ancestor)]

    def is_visible(self, node_id: int) -> bool:
        if node_id not in self._parent:
            return False
        return all(ancestor not in self._collapsed for ancestor in self.ancestors(node_id))
