"""
Show Command - Non-interactive expansion.

Starts a session, applies the given clicks in order and prints the result,
either as a tree, as JSON, or into an export file.
"""

import json
from pathlib import Path

import click
from rich.console import Console

from ...core.types import ClickAction, ClickOutcome
from ...graph.export import open_visualization, to_dict, write_export
from ..utils import collect_overrides, echo_error, echo_success, echo_warning, open_session, render_tree, session_options

console = Console()


@click.command()
@session_options
@click.option("--click", "clicks", multiple=True, help="Label to double-click; repeatable, applied in order")
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write the graph to a .json, .dot or .html file")
@click.option("--json", "as_json", is_flag=True, help="Print clicks and graph as JSON")
@click.option("--all", "include_hidden", is_flag=True, help="Include collapsed nodes in JSON output")
@click.option("--open", "open_browser", is_flag=True, help="Open the HTML view in a browser")
def show(config_file, datasource, max_nodes, tool_tip, seed, clicks, output, as_json, include_hidden, open_browser):
    """
    Build the graph from the configured seed and print it.

    \b
    Example:
      entigraph show --click Boston --click Bob -o people.html
    """
    overrides = collect_overrides(datasource, max_nodes, tool_tip, seed)
    failed = False

    with open_session(config_file, overrides) as session:
        outcomes = []
        for label in clicks:
            result = session.click(label)
            if result.is_ok():
                outcomes.append(result.unwrap())
            else:
                failed = True
                outcomes.append(ClickOutcome(action=ClickAction.FAILED, node=label))
                if not as_json:
                    echo_warning(f"{label}: {result.error}")

        if as_json:
            click.echo(json.dumps({
                "clicks": [o.model_dump(mode="json") for o in outcomes],
                "graph": to_dict(session.graph, include_hidden=include_hidden),
            }, indent=2))
        else:
            console.print(render_tree(session.graph))

        if output:
            try:
                path = write_export(session.graph, Path(output))
            except (ValueError, OSError) as e:
                echo_error(str(e))
                raise SystemExit(1)
            if not as_json:
                echo_success(f"Generated: {path}")

        if open_browser:
            html_path = output if output and Path(output).suffix.lower() in (".html", ".htm") else "entigraph.html"
            open_visualization(session.graph, html_path)

    if failed:
        raise SystemExit(2)
