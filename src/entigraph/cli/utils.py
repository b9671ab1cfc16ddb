"""
CLI Utilities - Shared helpers for entigraph commands.

Formatted printing, the options every session command accepts, and building
a started session from them.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.markup import escape
from rich.tree import Tree

from ..config import load_settings
from ..core.errors import EntiGraphError
from ..graph.display import DisplayGraph
from ..session import ExplorationSession


def echo_success(message: str) -> None:
    """Print a success message in green."""
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """Print an error message in red, to stderr."""
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """Print a warning message in yellow."""
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="[%X]",
    )


SESSION_OPTIONS = [
    click.option("-c", "--config", "config_file", type=click.Path(dir_okay=False),
                 help="YAML configuration file (default: ./entigraph.yaml)"),
    click.option("--datasource", type=click.Choice(["database", "csv"], case_sensitive=False),
                 help="Data source type, overrides datasource_type"),
    click.option("--max-nodes", type=int, help="Max entities shown per expanded attribute"),
    click.option("--tool-tip/--no-tool-tip", default=None, help="Show the header a node came from on hover"),
    click.option("--seed", help="Value of the first center node, overrides first_node_entry"),
]


def session_options(func):
    """Options shared by commands that open a session."""
    for option in reversed(SESSION_OPTIONS):
        func = option(func)
    return func


def collect_overrides(
    datasource: Optional[str],
    max_nodes: Optional[int],
    tool_tip: Optional[bool],
    seed: Optional[str],
) -> Dict[str, Any]:
    overrides = {
        "datasource_type": datasource,
        "default_max_nodes": max_nodes,
        "use_tool_tip": tool_tip,
        "first_node_entry": seed,
    }
    return {k: v for k, v in overrides.items() if v is not None}


def open_session(config_file: Optional[str], overrides: Dict[str, Any]) -> ExplorationSession:
    """
    Load settings, build the loader and load the root node.

    Exits with status 1 on any configuration or setup problem.
    """
    session = None
    try:
        settings = load_settings(Path(config_file) if config_file else None, overrides)
        session = ExplorationSession.from_settings(settings)
        session.start(settings.first_node_entry)
        return session
    except EntiGraphError as e:
        if session is not None:
            session.close()
        echo_error(str(e))
        raise SystemExit(1)


def render_tree(graph: DisplayGraph) -> Tree:
    """Rich tree of the visible part of the display graph."""
    root = graph.root
    if root is None:
        return Tree("(empty)")

    def label(index: int) -> str:
        node = graph.get_node(index)
        tree_node = graph.resolve(index)
        if tree_node.is_center:
            text = f"[bold]{escape(node.label)}[/bold]"
        else:
            text = f"[cyan]{escape(node.label)}[/cyan] [dim]({escape(tree_node.header)})[/dim]"
        if not tree_node.has_children():
            text += " [dim]·[/dim]"
        else:
            children = graph.children(index)
            if children and not children[0].visible:
                text += " [yellow]+[/yellow]"
        return text

    spanning = graph.spanning_tree()

    def grow(index: int, branch: Tree) -> None:
        for child in spanning.get(index, []):
            if graph.get_node(child).visible:
                grow(child, branch.add(label(child)))

    tree = Tree(label(root.index))
    grow(root.index, tree)
    return tree
