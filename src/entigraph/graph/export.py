"""
Static exports of the display graph.

- JSON: nodes, edges and stats
- DOT: visible nodes and edges for Graphviz
- HTML: a single page rendering the visible graph with vis-network
"""

import json
import webbrowser
from pathlib import Path
from typing import Any, Dict

from .display import DisplayGraph

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>entigraph</title>
    <script src="https://unpkg.com/vis-network/standalone/umd/vis-network.min.js"></script>
    <style>
        body { margin: 0; font-family: -apple-system, "Segoe UI", Roboto, sans-serif; background: #fafafa; }
        #graph { width: 100vw; height: 100vh; }
    </style>
</head>
<body>
    <div id="graph"></div>
    <script>
        const data = __GRAPH_DATA__;
        const nodes = new vis.DataSet(data.nodes.map(n => ({
            id: n.id,
            label: n.label,
            title: n.header,
            shape: "box",
            color: n.role === "center"
                ? { background: "#ffffff", border: "#000000" }
                : { background: "#f1f5f9", border: "#64748b" },
            font: { color: "#640000" },
        })));
        const edges = new vis.DataSet(data.edges.map(e => ({ from: e.source, to: e.target })));
        new vis.Network(document.getElementById("graph"), { nodes, edges }, {
            physics: { solver: "forceAtlas2Based" },
            interaction: { hover: true },
        });
    </script>
</body>
</html>
"""


def to_dict(graph: DisplayGraph, include_hidden: bool = False) -> Dict[str, Any]:
    return graph.to_dict(include_hidden=include_hidden)


def to_json(graph: DisplayGraph, include_hidden: bool = False) -> str:
    return json.dumps(to_dict(graph, include_hidden), indent=2)


def _dot_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def to_dot(graph: DisplayGraph) -> str:
    """Graphviz DOT text of the visible part of the graph."""
    lines = ["graph entigraph {", "    node [shape=box];"]
    for node in graph.iter_nodes():
        if not node.visible:
            continue
        tree_node = graph.resolve(node)
        style = "" if tree_node.is_center else ", style=rounded"
        lines.append(
            f'    n{node.index} [label="{_dot_escape(node.label)}", '
            f'tooltip="{_dot_escape(tree_node.header)}"{style}];'
        )
    for edge in graph.iter_edges():
        if edge.visible:
            lines.append(f"    n{edge.source} -- n{edge.target};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def generate_html(graph: DisplayGraph) -> str:
    """HTML page with the visible graph embedded as JSON."""
    json_data = json.dumps(to_dict(graph))
    return HTML_TEMPLATE.replace("__GRAPH_DATA__", json_data)


def write_export(graph: DisplayGraph, output_path: Path) -> Path:
    """
    Write the graph in the format named by the file suffix.

    Raises:
        ValueError: for a suffix other than .json, .dot or .html.
    """
    output_path = Path(output_path)
    suffix = output_path.suffix.lower()
    if suffix == ".json":
        content = to_json(graph)
    elif suffix == ".dot":
        content = to_dot(graph)
    elif suffix in (".html", ".htm"):
        content = generate_html(graph)
    else:
        raise ValueError(f"Unsupported format: {output_path.suffix} (supported: .json, .dot, .html)")
    output_path.write_text(content, encoding="utf-8")
    return output_path


def open_visualization(graph: DisplayGraph, output_path: str = "entigraph.html") -> str:
    """Write the HTML export and open it in the browser."""
    out_file = write_export(graph, Path(output_path))
    webbrowser.open(out_file.resolve().as_uri())
    return str(out_file)
