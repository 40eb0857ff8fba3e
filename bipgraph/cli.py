"""CLI entry point for bipgraph."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from bipgraph.core.exceptions import BipGraphError
from bipgraph.core.graph import BipartiteGraph, load_json, to_dot, write_dot
from bipgraph.core.graph.analysis import find_cycle
from bipgraph.core.graph.traversal import connected_components
from bipgraph.core.models import NodeType

app = typer.Typer(
    name="bipgraph",
    help="Inspect bipartite graphs stored as JSON edge lists.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

_FILE_HELP = "JSON document: {nr1, nr2, edges: [[n1, n2], ...]}"


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def open_graph(path: Path) -> BipartiteGraph:
    """Load a graph or exit with the error message."""
    try:
        return load_json(path)
    except BipGraphError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


@app.command()
def stats(
    path: Annotated[Path, typer.Argument(help=_FILE_HELP, exists=True)],
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show node and edge counts, connectivity and tree status."""
    graph = open_graph(path)
    result = {
        "nr1": graph.nr1,
        "nr2": graph.nr2,
        "edges": graph.num_edges,
        "components": len(connected_components(graph)),
        "connected": graph.is_connected(),
        "tree": graph.is_tree(),
    }

    if output_json:
        print(json.dumps(result))
        return

    table = Table(title=path.name, show_header=False)
    table.add_column("key", style="cyan")
    table.add_column("value")
    table.add_row("Type-1 nodes", str(result["nr1"]))
    table.add_row("Type-2 nodes", str(result["nr2"]))
    table.add_row("Edges", str(result["edges"]))
    table.add_row("Components", str(result["components"]))
    table.add_row("Connected", "[green]yes[/]" if result["connected"] else "[yellow]no[/]")
    table.add_row("Tree", "[green]yes[/]" if result["tree"] else "[yellow]no[/]")
    console.print(table)


@app.command()
def neighbors(
    path: Annotated[Path, typer.Argument(help=_FILE_HELP, exists=True)],
    node_type: Annotated[str, typer.Argument(help="Node type: 1 or 2")],
    node: Annotated[int, typer.Argument(help="Node id")],
    second_order: Annotated[
        bool, typer.Option("--second-order", "-s", help="Show same-type nodes two hops away")
    ] = False,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show the neighbor records of one node."""
    graph = open_graph(path)
    try:
        kind = NodeType.parse(node_type)
        records = graph.neighbors(kind, node)
        delta = graph.second_order_neighbors(kind, node) if second_order else None
    except (BipGraphError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    if output_json:
        result: dict[str, object] = {
            "type": kind.value,
            "node": node,
            "neighbors": [{"iter": r.iter, "node": r.node, "dual": r.dual} for r in records],
        }
        if delta is not None:
            result["second_order"] = delta
        print(json.dumps(result))
        return

    console.print(f"[bold cyan]{kind.name} node {node}[/] (degree {len(records)})")
    if not records:
        console.print("  [dim]No neighbors[/]")
    for rec in records:
        target = f"{kind.other.name} node {rec.node}"
        console.print(f"  \\[{rec.iter}] -> {target} [dim](dual {rec.dual})[/]")
    if delta is not None:
        shown = ", ".join(str(n) for n in delta) or "none"
        console.print(f"  [green]Second-order:[/] {shown}")


@app.command()
def dot(
    path: Annotated[Path, typer.Argument(help=_FILE_HELP, exists=True)],
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write to file instead of stdout")
    ] = None,
) -> None:
    """Render the graph in GraphViz .dot syntax."""
    graph = open_graph(path)
    if output is None:
        print(to_dot(graph), end="")
        return
    with output.open("w", encoding="utf-8") as stream:
        write_dot(graph, stream)
    console.print(f"[green]Wrote[/green] {output}")


@app.command()
def cycle(
    path: Annotated[Path, typer.Argument(help=_FILE_HELP, exists=True)],
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Report whether the graph is a tree and show one cycle if it has any."""
    graph = open_graph(path)
    found = find_cycle(graph)

    if output_json:
        result = {
            "tree": graph.is_tree(),
            "cycle": [[t.value, n] for t, n in found] if found else None,
        }
        print(json.dumps(result))
        return

    console.print("[green]Tree[/green]" if graph.is_tree() else "[yellow]Not a tree[/yellow]")
    if found:
        walk = " -- ".join(("x" if t is NodeType.TYPE1 else "y") + str(n) for t, n in found)
        console.print(f"Cycle: {walk}")
    else:
        console.print("[dim]No cycles[/]")


if __name__ == "__main__":
    app()
