"""
Explore Command - Interactive session in the terminal.

Each `open <label>` is a double-click on that node: it expands it the first
time and collapses / re-expands it afterwards.
"""

import shlex
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from ...core.types import ClickAction
from ...graph.export import write_export
from ...session import ExplorationSession
from ..utils import collect_overrides, open_session, render_tree, session_options

console = Console()

HELP_TEXT = """\
[bold]Commands[/bold]
  open <label>     expand, collapse or re-expand a node (double-click)
  hover <label>    show which column a node's value came from
  show             print the visible graph
  export <file>    write the graph as .json, .dot or .html
  stats            node and edge counts
  help             this text
  quit             leave the session
"""


def _describe(outcome) -> str:
    node = escape(outcome.node)
    if outcome.action == ClickAction.TOGGLED:
        if outcome.visible is None:
            return f"'{node}' has nothing to collapse"
        return f"{'Expanded' if outcome.visible else 'Collapsed'} '{node}'"
    if outcome.action == ClickAction.NOTHING_FOUND:
        return f"Nothing related to '{node}' was found"
    return f"Opened '{node}': {outcome.new_nodes} new nodes, {outcome.new_edges} new links"


def _stats_table(session: ExplorationSession) -> Table:
    table = Table(show_header=False, box=None)
    for key, value in session.graph.get_stats().items():
        table.add_row(key.replace("_", " "), str(value))
    return table


def run_command(session: ExplorationSession, line: str) -> bool:
    """Run one interactive command; returns False when the session should end."""
    try:
        parts = shlex.split(line)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        return True
    if not parts:
        return True

    command, args = parts[0].lower(), " ".join(parts[1:])

    if command in ("quit", "exit", "q"):
        return False
    if command == "help":
        console.print(HELP_TEXT)
    elif command == "show":
        console.print(render_tree(session.graph))
    elif command == "stats":
        console.print(_stats_table(session))
    elif command == "open" and args:
        result = session.click(args)
        if result.is_ok():
            console.print(_describe(result.unwrap()))
            console.print(render_tree(session.graph))
        else:
            console.print(f"[red]{escape(str(result.error))}[/red]")
    elif command == "hover" and args:
        if session.graph.find(args) is None:
            console.print(f"[red]There is no node labelled '{escape(args)}' in the graph.[/red]")
        else:
            header = session.hover(args)
            console.print(escape(header) if header else "[dim]Tool tips are disabled.[/dim]")
    elif command == "export" and args:
        try:
            path = write_export(session.graph, Path(args))
        except (ValueError, OSError) as e:
            console.print(f"[red]{escape(str(e))}[/red]")
        else:
            console.print(f"[green]Wrote {escape(str(path))}[/green]")
    else:
        console.print(f"[yellow]Unknown command '{escape(line)}'. Type 'help'.[/yellow]")
    return True


@click.command()
@session_options
def explore(config_file, datasource, max_nodes, tool_tip, seed):
    """
    Explore the entity graph interactively.

    \b
    Example:
      entigraph explore -c entigraph.yaml
      > open Boston
      > open Boston      (collapses it again)
    """
    overrides = collect_overrides(datasource, max_nodes, tool_tip, seed)
    with open_session(config_file, overrides) as session:
        console.print(render_tree(session.graph))
        console.print("[dim]Type 'help' for commands.[/dim]")
        while True:
            try:
                line = Prompt.ask("[bold]entigraph[/bold]", console=console)
            except (EOFError, KeyboardInterrupt):
                break
            if not run_command(session, line):
                break
