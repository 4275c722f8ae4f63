"""Selection and expansion state kept apart from filesystem-derived trees."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pydantic import BaseModel, Field

from freepo.tree.models import PathNode


def selected_paths(forest: Iterable[PathNode]) -> list[str]:
    """Return enabled node paths in pre-order (parent before children)."""
    return [node.path for root in forest for node in root.iter_preorder() if node.enabled]


def set_enabled(node: PathNode, enabled: bool) -> None:
    """Set the flag on *node* and its whole subtree."""
    for item in node.iter_preorder():
        item.enabled = enabled


def find_node(forest: Iterable[PathNode], path: str) -> PathNode | None:
    """Return the first node whose path equals *path*, in pre-order."""
    for root in forest:
        for node in root.iter_preorder():
            if node.path == path:
                return node
    return None


def remove_enabled_roots(forest: Sequence[PathNode]) -> list[PathNode]:
    """Drop roots that are enabled; their descendants go with them."""
    return [root for root in forest if not root.enabled]


class NodeState(BaseModel):
    """UI flags for one path."""

    enabled: bool = False
    expanded: bool = False


class SelectionState(BaseModel):
    """Path -> NodeState mapping that survives tree rebuilds."""

    nodes: dict[str, NodeState] = Field(default_factory=dict)

    @classmethod
    def capture(cls, forest: Iterable[PathNode]) -> SelectionState:
        """Record the flags of every node that has one set."""
        state = cls()
        state.update_from(forest)
        return state

    def update_from(self, forest: Iterable[PathNode]) -> None:
        """Overwrite entries for every path in *forest*; other entries are kept."""
        for root in forest:
            for node in root.iter_preorder():
                if node.enabled or node.expanded:
                    self.nodes[node.path] = NodeState(
                        enabled=node.enabled, expanded=node.expanded
                    )
                else:
                    self.nodes.pop(node.path, None)

    def apply(self, forest: Iterable[PathNode]) -> None:
        """Restore recorded flags onto freshly built trees, in place.

        Paths that are no longer in the forest are left in the mapping.
        """
        for root in forest:
            for node in root.iter_preorder():
                state = self.nodes.get(node.path)
                if state is not None:
                    node.enabled = state.enabled
                    node.expanded = state.expanded

    def to_dict(self) -> dict:
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict) -> SelectionState:
        return cls.model_validate(data)
