"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import FreepoConfig


def load_config(cli_path: str | None = None) -> FreepoConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults.

    Relative rule-file and storage paths in a config file are taken relative
    to the directory holding that file.
    """
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./freepo.yaml"),
        Path.home() / ".freepo" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                config = FreepoConfig(**_expand_env_vars(raw))
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e
            return _anchor_paths(config, path.resolve().parent)

    return FreepoConfig()


def _anchor(value: str, base: Path) -> str:
    if value.startswith("~") or os.path.isabs(value):
        return value
    return str(base / value)


def _anchor_paths(config: FreepoConfig, base: Path) -> FreepoConfig:
    """Rebase relative file settings onto *base*; ``~`` and absolute paths are kept."""
    if config.ignore.global_file:
        config.ignore.global_file = _anchor(config.ignore.global_file, base)
    config.storage.paths_file = _anchor(config.storage.paths_file, base)
    config.storage.selection_file = _anchor(config.storage.selection_file, base)
    return config


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `freepo config init`
DEFAULT_CONFIG_TEMPLATE = """\
# freepo.yaml

# Ignore rules
ignore:
  # global_file: "/path/to/global/.repoignore"   # default: <install dir>/.repoignore
  local_filename: ".repoignore"

# Tree walker
walker:
  max_concurrency: null          # bound on in-flight filesystem calls, e.g. 64

# Root path list
storage:
  paths_file: "~/.freepo/user-data.json"
  selection_file: "~/.freepo/selection.json"

# Report generation
report:
  # command: ["generate_report"]   # external generator; default: built-in
  timeout: 120

# Logging
log_level: "info"              # debug | info | warn | error
"""
