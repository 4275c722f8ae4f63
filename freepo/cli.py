"""CLI entry point for freepo."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from freepo.config import FreepoConfig, load_config
from freepo.config.loader import DEFAULT_CONFIG_TEMPLATE
from freepo.report import ReportError, ReportRunner
from freepo.storage import RootStore, load_selection, save_selection
from freepo.tree import (
    PathNode,
    SelectionState,
    TreeBuilder,
    build_forest_sync,
    find_node,
    remove_enabled_roots,
    selected_paths,
    set_enabled,
)

app = typer.Typer(
    name="freepo",
    help="Browse files as an ignore-filtered tree and build a report from a selection.",
)

config_app = typer.Typer(help="Manage freepo configuration.")
app.add_typer(config_app, name="config")

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# Global state
_config: FreepoConfig | None = None


def _get_config() -> FreepoConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to freepo.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    logging.basicConfig(
        level=_LOG_LEVELS[_config.log_level],
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _absolute(paths: list[str]) -> list[str]:
    return [os.path.abspath(os.path.expanduser(p)) for p in paths]


def _load_forest(cfg: FreepoConfig) -> tuple[list[PathNode], SelectionState]:
    """Build the stored roots and restore the stored selection onto them."""
    roots = RootStore.from_config(cfg.storage).load()
    forest = build_forest_sync(roots, TreeBuilder.from_config(cfg))
    state = load_selection(cfg.storage.selection_file)
    state.apply(forest)
    return forest, state


def _node_label(node: PathNode) -> str:
    mark = "[green]✔[/green] " if node.enabled else "  "
    if node.is_dir:
        return f"{mark}[bold blue]{escape(node.name)}/[/bold blue]"
    return f"{mark}{escape(node.name)}"


def _add_branch(parent: Tree, node: PathNode) -> None:
    branch = parent.add(_node_label(node))
    for child in node.children:
        _add_branch(branch, child)


def _display_forest(forest: list[PathNode]) -> None:
    """Display the forest as a Rich tree."""
    tree = Tree(f"[bold]Roots[/bold] ({len(forest)})")
    for root in forest:
        _add_branch(tree, root)
    rprint(tree)


@app.command()
def add(
    paths: list[str] = typer.Argument(..., help="Files or directories to add as roots"),
) -> None:
    """Add root paths and show the resulting tree."""
    cfg = _get_config()
    new_paths = _absolute(paths)
    for p in new_paths:
        if not os.path.exists(p):
            rprint(f"[yellow]Warning:[/yellow] does not exist, kept but not shown: {p}")
    updated = RootStore.from_config(cfg.storage).add(new_paths)
    rprint(f"[green]Roots:[/green] {len(updated)}")
    forest, _ = _load_forest(cfg)
    _display_forest(forest)


@app.command()
def remove(
    paths: list[str] = typer.Argument(None, help="Root paths to remove"),
    selected: bool = typer.Option(False, "--selected", help="Remove every selected root"),
) -> None:
    """Remove root paths."""
    cfg = _get_config()
    doomed = _absolute(paths or [])
    if selected:
        forest, _ = _load_forest(cfg)
        kept = {root.path for root in remove_enabled_roots(forest)}
        doomed.extend(root.path for root in forest if root.path not in kept)
    if not doomed:
        rprint("[yellow]Nothing to remove.[/yellow]")
        raise typer.Exit(1)
    remaining = RootStore.from_config(cfg.storage).remove(doomed)
    rprint(f"[green]Removed[/green] {len(set(doomed))} path(s); {len(remaining)} root(s) left.")


@app.command()
def roots() -> None:
    """List stored root paths."""
    cfg = _get_config()
    stored = RootStore.from_config(cfg.storage).load()
    if not stored:
        rprint("[yellow]No roots yet.[/yellow] Use `freepo add PATH`.")
        return
    table = Table(title=f"Roots ({len(stored)})")
    table.add_column("Path", style="cyan")
    table.add_column("Status", justify="center")
    for p in stored:
        status = "[green]ok[/green]" if os.path.exists(p) else "[red]unavailable[/red]"
        table.add_row(p, status)
    rprint(table)


@app.command()
def tree(
    as_json: bool = typer.Option(False, "--json", help="Print the forest as JSON"),
) -> None:
    """Build and show the filtered tree of every stored root."""
    cfg = _get_config()
    forest, _ = _load_forest(cfg)
    if as_json:
        typer.echo(json.dumps([root.model_dump() for root in forest], indent=2))
        return
    _display_forest(forest)


@app.command()
def select(
    paths: list[str] = typer.Argument(None, help="Paths to select, with their subtrees"),
    off: bool = typer.Option(False, "--off", help="Deselect instead of select"),
    clear: bool = typer.Option(False, "--clear", help="Deselect everything first"),
) -> None:
    """Select (or deselect) paths in the tree."""
    cfg = _get_config()
    forest, state = _load_forest(cfg)
    if clear:
        state = SelectionState()
        for root in forest:
            set_enabled(root, False)

    for p in _absolute(paths or []):
        node = find_node(forest, p)
        if node is None:
            rprint(f"[yellow]Not in tree:[/yellow] {p}")
            continue
        set_enabled(node, not off)

    state.update_from(forest)
    save_selection(cfg.storage.selection_file, state)
    rprint(f"[green]{len(selected_paths(forest))} path(s) selected.[/green]")


@app.command()
def report(
    select_paths: Annotated[
        list[str] | None,
        typer.Option("--select", "-s", help="Report on these paths instead of the stored selection"),
    ] = None,
    output: str | None = typer.Option(None, "--output", "-o", help="Write report to file"),
) -> None:
    """Generate a report from the selected paths."""
    cfg = _get_config()
    forest, _ = _load_forest(cfg)

    if select_paths:
        for root in forest:
            set_enabled(root, False)
        for p in _absolute(select_paths):
            node = find_node(forest, p)
            if node is None:
                rprint(f"[yellow]Not in tree:[/yellow] {p}")
                continue
            set_enabled(node, True)

    paths = selected_paths(forest)
    if not paths:
        rprint("[red]Error:[/red] Nothing selected. Use `freepo select PATH` or --select.")
        raise typer.Exit(1)

    try:
        text = ReportRunner(cfg.report).generate(paths)
    except ReportError as e:
        rprint(f"[red]Error generating report:[/red] {e}")
        raise typer.Exit(1)

    if output:
        Path(output).write_text(text, encoding="utf-8")
        rprint(f"[green]Written to[/green] {output} ({len(paths)} paths)")
    else:
        typer.echo(text, nl=False)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default freepo.yaml in current directory."""
    target = Path("freepo.yaml")
    if target.exists() and not force:
        rprint("[yellow]freepo.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
