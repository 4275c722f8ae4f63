"""Pydantic models and errors for the path tree subsystem."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator


class TreeBuildError(Exception):
    """A root's tree could not be built; carries the root and failing path."""

    def __init__(self, root: str, path: str, cause: Exception | None = None) -> None:
        self.root = root
        self.path = path
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"building tree for {root} failed at {path}{detail}")


class TraversalRace(TreeBuildError):
    """A path listed by its parent vanished or became unreadable mid-walk."""


class RuleFileUnreadable(TreeBuildError):
    """An ignore-rule file exists but cannot be read or decoded."""


class PathNode(BaseModel):
    """A file or directory in a built path tree."""

    name: str
    path: str = Field(description="Absolute filesystem path, identity of the node")
    kind: Literal["file", "directory"]
    enabled: bool = False
    expanded: bool = False
    children: list[PathNode] = Field(default_factory=list)

    @model_validator(mode="after")
    def _files_have_no_children(self) -> PathNode:
        if self.kind == "file" and self.children:
            raise ValueError(f"file node {self.path!r} cannot have children")
        return self

    @property
    def is_dir(self) -> bool:
        return self.kind == "directory"

    def iter_preorder(self):
        """Yield this node, then each child subtree in order."""
        yield self
        for child in self.children:
            yield from child.iter_preorder()

    def structure(self) -> dict:
        """Return the filesystem-derived part of the tree, without UI flags."""
        return {
            "name": self.name,
            "path": self.path,
            "kind": self.kind,
            "children": [child.structure() for child in self.children],
        }
