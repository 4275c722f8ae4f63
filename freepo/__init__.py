"""Freepo - pick paths, browse them as an ignore-filtered tree, report on a selection."""

from freepo.config import FreepoConfig, load_config
from freepo.report import ReportError, ReportRunner
from freepo.storage import RootStore
from freepo.tree import PathNode, TreeBuilder, build_forest, selected_paths

__version__ = "0.1.0"

__all__ = [
    "FreepoConfig",
    "PathNode",
    "ReportError",
    "ReportRunner",
    "RootStore",
    "TreeBuilder",
    "build_forest",
    "load_config",
    "selected_paths",
]
