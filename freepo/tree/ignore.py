"""Layered gitignore-style rules: global rule file first, local .repoignore second."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from pathspec import GitIgnoreSpec

from freepo.tree.models import RuleFileUnreadable

logger = logging.getLogger(__name__)

LOCAL_RULE_FILENAME = ".repoignore"

# The application directory is the installed package itself.
APP_DIR = Path(__file__).resolve().parent.parent
DEFAULT_GLOBAL_RULE_FILE = APP_DIR / LOCAL_RULE_FILENAME


def read_rule_file(path: Path, root: str | None = None) -> list[str]:
    """Return the lines of a rule file, or [] when there is no such file.

    A file that exists but cannot be read or decoded raises
    RuleFileUnreadable: that is a misconfiguration, not an absence.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError):
        return []
    except (OSError, UnicodeDecodeError) as e:
        raise RuleFileUnreadable(root or str(path), str(path), e) from e
    lines = text.splitlines()
    logger.debug("loaded %d rule lines from %s", len(lines), path)
    return lines


@dataclass(frozen=True)
class IgnoreRules:
    """Merged rule set answering whether a base-relative path is ignored."""

    spec: GitIgnoreSpec
    line_count: int = field(default=0)

    @classmethod
    def from_lines(
        cls,
        global_lines: Iterable[str] = (),
        local_lines: Iterable[str] = (),
    ) -> IgnoreRules:
        # Later lines win, so local rules can re-include globally ignored paths.
        lines = [*global_lines, *local_lines]
        return cls(spec=GitIgnoreSpec.from_lines(lines), line_count=len(lines))

    def ignores(self, relative_path: str) -> bool:
        """Match a forward-slash relative path; directories end with '/'."""
        return self.spec.match_file(relative_path)

    @staticmethod
    def relative_key(base_dir: str | os.PathLike, path: str | os.PathLike, is_dir: bool) -> str:
        """Build the query string for *path* relative to *base_dir*."""
        rel = PurePath(os.path.relpath(path, base_dir)).as_posix()
        return rel + "/" if is_dir else rel


def load_ignore_rules(
    base_dir: str | os.PathLike,
    global_file: str | os.PathLike | None = None,
    local_filename: str = LOCAL_RULE_FILENAME,
    root: str | None = None,
) -> IgnoreRules:
    """Read the global and local rule files and merge them for *base_dir*."""
    global_path = Path(global_file).expanduser() if global_file else DEFAULT_GLOBAL_RULE_FILE
    global_lines = read_rule_file(global_path, root)
    local_lines = read_rule_file(Path(base_dir) / local_filename, root)
    return IgnoreRules.from_lines(global_lines, local_lines)
