"""Builds the ordered forest of per-root trees."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from freepo.tree.models import PathNode, TreeBuildError
from freepo.tree.walker import TreeBuilder

logger = logging.getLogger(__name__)


async def _build_isolated(builder: TreeBuilder, root_path: str) -> PathNode | None:
    try:
        return await builder.build(root_path)
    except TreeBuildError as e:
        logger.warning("Dropping root %s: %s", root_path, e)
        return None


async def build_forest(
    root_paths: Sequence[str], builder: TreeBuilder | None = None
) -> list[PathNode]:
    """Build every root concurrently; unavailable or failed roots are dropped.

    Output order follows *root_paths*. Duplicates are not collapsed.
    """
    builder = builder or TreeBuilder()
    trees = await asyncio.gather(*(_build_isolated(builder, p) for p in root_paths))
    forest = [tree for tree in trees if tree is not None]
    logger.info("built %d of %d root trees", len(forest), len(root_paths))
    return forest


def build_forest_sync(
    root_paths: Sequence[str], builder: TreeBuilder | None = None
) -> list[PathNode]:
    """Run build_forest() on a fresh event loop."""
    return asyncio.run(build_forest(root_paths, builder))
