"""Filtered filesystem trees: ignore rules, walker, forest and selection."""

from freepo.tree.forest import build_forest, build_forest_sync
from freepo.tree.ignore import IgnoreRules, load_ignore_rules, read_rule_file
from freepo.tree.models import PathNode, RuleFileUnreadable, TraversalRace, TreeBuildError
from freepo.tree.selection import (
    NodeState,
    SelectionState,
    find_node,
    remove_enabled_roots,
    selected_paths,
    set_enabled,
)
from freepo.tree.walker import TreeBuilder

__all__ = [
    "IgnoreRules",
    "NodeState",
    "PathNode",
    "RuleFileUnreadable",
    "SelectionState",
    "TraversalRace",
    "TreeBuildError",
    "TreeBuilder",
    "build_forest",
    "build_forest_sync",
    "find_node",
    "load_ignore_rules",
    "read_rule_file",
    "remove_enabled_roots",
    "selected_paths",
    "set_enabled",
]
