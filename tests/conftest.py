"""Shared test fixtures for freepo."""

from pathlib import Path

import pytest

from freepo.config.models import FreepoConfig
from freepo.tree.models import PathNode
from freepo.tree.walker import TreeBuilder


def make_tree(base: Path, spec: dict) -> Path:
    """Create files and directories from a nested dict.

    A str value is file content; a dict value is a subdirectory.
    """
    base.mkdir(parents=True, exist_ok=True)
    for name, value in spec.items():
        target = base / name
        if isinstance(value, dict):
            make_tree(target, value)
        else:
            target.write_text(value)
    return base


@pytest.fixture
def sample_config():
    return FreepoConfig()


@pytest.fixture
def global_rules(tmp_path):
    """Path of a global rule file outside every test tree (absent until written)."""
    return tmp_path / "app" / ".repoignore"


@pytest.fixture
def builder(global_rules):
    return TreeBuilder(global_rule_file=global_rules)


@pytest.fixture
def project(tmp_path):
    """A small project tree with a mix of ignorable and kept entries."""
    return make_tree(
        tmp_path / "project",
        {
            "src": {"main.py": "print('hi')\n", "util.py": "def f(): pass\n"},
            "build": {"out.o": "\x00\x01"},
            "debug.log": "log\n",
            "important.log": "keep\n",
            "README.md": "# Project\n",
        },
    )


@pytest.fixture
def sample_forest():
    """Root A (enabled) with children A/x (enabled) and A/y (disabled)."""
    return [
        PathNode(
            name="A",
            path="/r/A",
            kind="directory",
            enabled=True,
            children=[
                PathNode(name="x", path="/r/A/x", kind="file", enabled=True),
                PathNode(name="y", path="/r/A/y", kind="file", enabled=False),
            ],
        )
    ]
