"""RootStore: persists the ordered list of root paths as JSON."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from freepo.config.models import StorageConfig

logger = logging.getLogger(__name__)


def merge_root_paths(existing: Iterable[str], new: Iterable[str]) -> list[str]:
    """Concatenate and dedup by exact string, first occurrence wins."""
    return list(dict.fromkeys([*existing, *new]))


class RootStore:
    """Reads and writes ``{"paths": [...]}`` at a fixed location."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    @classmethod
    def from_config(cls, config: StorageConfig) -> RootStore:
        return cls(config.paths_file)

    def load(self) -> list[str]:
        """Return stored paths; a missing or corrupt file yields []."""
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Failed to load root paths from %s: %s", self.path, e)
            return []
        paths = data.get("paths") if isinstance(data, dict) else None
        if not isinstance(paths, list):
            return []
        return [p for p in paths if isinstance(p, str)]

    def save(self, paths: Iterable[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"paths": list(paths)}
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.debug("saved %d root paths to %s", len(payload["paths"]), self.path)

    def add(self, new_paths: Iterable[str]) -> list[str]:
        """Append *new_paths* not already stored; return the saved list."""
        updated = merge_root_paths(self.load(), new_paths)
        self.save(updated)
        return updated

    def remove(self, paths: Iterable[str]) -> list[str]:
        """Drop exact matches of *paths*; return the saved list."""
        doomed = set(paths)
        remaining = [p for p in self.load() if p not in doomed]
        self.save(remaining)
        return remaining
