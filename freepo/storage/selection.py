"""Load and save SelectionState as JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from freepo.tree.selection import SelectionState

logger = logging.getLogger(__name__)


def load_selection(path: str | Path) -> SelectionState:
    """Return the stored selection, or an empty one if missing or corrupt."""
    path = Path(path).expanduser()
    if not path.exists():
        return SelectionState()
    try:
        return SelectionState.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValidationError, OSError) as e:
        logger.warning("Failed to load selection from %s: %s", path, e)
        return SelectionState()


def save_selection(path: str | Path, state: SelectionState) -> None:
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(state.to_dict(), indent=2), encoding="utf-8")
