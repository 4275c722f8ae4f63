"""Persistence of the user's root path list and selection state."""

from freepo.storage.roots import RootStore, merge_root_paths
from freepo.storage.selection import load_selection, save_selection

__all__ = ["RootStore", "load_selection", "merge_root_paths", "save_selection"]
