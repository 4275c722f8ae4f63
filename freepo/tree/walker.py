"""Recursive, concurrent filesystem walker producing PathNode trees."""

from __future__ import annotations

import asyncio
import logging
import os
import stat
from collections.abc import Callable
from typing import Any, TypeVar

from freepo.config.models import FreepoConfig
from freepo.tree.ignore import LOCAL_RULE_FILENAME, IgnoreRules, load_ignore_rules
from freepo.tree.models import PathNode, TraversalRace

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _node_name(path: str) -> str:
    return os.path.basename(os.path.normpath(path))


class TreeBuilder:
    """Builds one filtered tree per root path.

    Blocking stat/listdir calls run in worker threads via asyncio.to_thread(),
    so sibling subtrees are walked concurrently on one event loop.
    """

    def __init__(
        self,
        global_rule_file: str | os.PathLike | None = None,
        local_filename: str = LOCAL_RULE_FILENAME,
        max_concurrency: int | None = None,
    ) -> None:
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        self.global_rule_file = global_rule_file
        self.local_filename = local_filename
        self.max_concurrency = max_concurrency

    @classmethod
    def from_config(cls, config: FreepoConfig) -> TreeBuilder:
        return cls(
            global_rule_file=config.ignore.global_file,
            local_filename=config.ignore.local_filename,
            max_concurrency=config.walker.max_concurrency,
        )

    async def build(self, root_path: str) -> PathNode | None:
        """Build the tree for *root_path*, or return None if it cannot be statted.

        Errors after the initial stat (TraversalRace, RuleFileUnreadable)
        propagate to the caller.
        """
        try:
            root_stat = await asyncio.to_thread(os.stat, root_path)
        except (OSError, ValueError) as e:
            logger.warning("Could not stat path %s: %s", root_path, e)
            return None

        if stat.S_ISDIR(root_stat.st_mode):
            base_dir = root_path
        else:
            base_dir = os.path.dirname(root_path) or os.curdir

        rules = await asyncio.to_thread(
            load_ignore_rules,
            base_dir,
            self.global_rule_file,
            self.local_filename,
            root_path,
        )
        walk = _RootWalk(root_path, base_dir, rules, self.max_concurrency)
        node = await walk.visit(root_path, root_stat)
        logger.debug("built tree for %s (base %s)", root_path, base_dir)
        return node


class _RootWalk:
    """State shared by every visit of a single root build."""

    def __init__(
        self,
        root: str,
        base_dir: str,
        rules: IgnoreRules,
        max_concurrency: int | None,
    ) -> None:
        self.root = root
        self.base_dir = base_dir
        self.rules = rules
        # Created per build so the semaphore binds to the running loop.
        self._limit = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def _fs(self, func: Callable[..., T], *args: Any) -> T:
        if self._limit is None:
            return await asyncio.to_thread(func, *args)
        async with self._limit:
            return await asyncio.to_thread(func, *args)

    async def visit(self, path: str, st: os.stat_result | None = None) -> PathNode | None:
        if st is None:
            try:
                st = await self._fs(os.stat, path)
            except OSError as e:
                raise TraversalRace(self.root, path, e) from e
        is_dir = stat.S_ISDIR(st.st_mode)

        # The root itself is never matched, only its descendants.
        if path != self.root:
            key = IgnoreRules.relative_key(self.base_dir, path, is_dir)
            if self.rules.ignores(key):
                logger.debug("ignored %s", key)
                return None

        name = _node_name(path)
        if not is_dir:
            return PathNode(name=name, path=path, kind="file")

        try:
            entries = await self._fs(os.listdir, path)
        except OSError as e:
            raise TraversalRace(self.root, path, e) from e

        # gather() returns results in submission order, i.e. listing order.
        visited = await asyncio.gather(
            *(self.visit(os.path.join(path, entry)) for entry in entries)
        )
        children = [child for child in visited if child is not None]
        return PathNode(name=name, path=path, kind="directory", children=children)
