"""Built-in report generator: a file map plus fenced file contents."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path, PurePath

logger = logging.getLogger(__name__)

BINARY_SNIFF_BYTES = 1024


@dataclass
class _MapNode:
    name: str
    children: dict[str, _MapNode] = field(default_factory=dict)


def _insert_path(roots: dict[str, _MapNode], path: str) -> None:
    pure = PurePath(path)
    parts = [p for p in (pure.parts[1:] if pure.anchor else pure.parts) if p not in ("", ".")]
    if not parts:
        return
    level = roots
    for part in parts:
        node = level.setdefault(part, _MapNode(part))
        level = node.children


def _render_map(lines: list[str], node: _MapNode, prefix: str, is_last: bool) -> None:
    lines.append(f"{prefix}{'└── ' if is_last else '├── '}{node.name}")
    child_prefix = prefix + ("    " if is_last else "│   ")
    names = sorted(node.children)
    for i, name in enumerate(names):
        _render_map(lines, node.children[name], child_prefix, i == len(names) - 1)


def render_file_map(paths: Sequence[str]) -> str:
    """Render the existing *paths* as one merged tree, children sorted by name."""
    roots: dict[str, _MapNode] = {}
    for path in paths:
        if Path(path).exists():
            _insert_path(roots, path)
        else:
            logger.warning("Path does not exist and will be skipped: %s", path)

    lines: list[str] = []
    names = sorted(roots)
    for i, name in enumerate(names):
        _render_map(lines, roots[name], "", i == len(names) - 1)
    return "\n".join(lines) + "\n" if lines else ""


def is_binary_file(path: Path) -> bool:
    """Treat a NUL byte in the first kilobyte as binary."""
    try:
        with path.open("rb") as handle:
            return b"\x00" in handle.read(BINARY_SNIFF_BYTES)
    except OSError:
        return False


def _render_file(path_str: str) -> str:
    path = Path(path_str)
    fence = path.suffix[1:] or "text"
    if is_binary_file(path):
        body = "[Binary file]\n"
    else:
        try:
            body = path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            body = "[Could not read file]\n"
        if body and not body.endswith("\n"):
            body += "\n"
    return f'<file path="{path_str}">\n```{fence}\n{body}```\n</file>\n'


def render_report(paths: Sequence[str]) -> str:
    """Render the full ``<codex>`` report for the selected *paths*."""
    contents = "".join(_render_file(p) for p in paths if Path(p).is_file())
    return (
        "<codex>\n"
        "<file_map>\n"
        f"{render_file_map(paths)}"
        "</file_map>\n"
        "<file_contents>\n"
        f"{contents}"
        "</file_contents>\n"
        "</codex>\n"
    )
