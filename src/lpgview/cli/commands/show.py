"""
Show Command - Compile a document and summarize the enriched graph.
"""

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...core.errors import LpgviewError
from ..utils import echo_json, echo_warning, fail, load_view

console = Console()


@click.command()
@click.argument("document", type=click.Path(dir_okay=False))
@click.option("--seed", type=int, default=None, help="Seed for coordinates and layout")
@click.option("--json", "as_json", is_flag=True, help="Output the graph as JSON")
def show(document: str, seed: int | None, as_json: bool):
    """
    Compile DOCUMENT and list its nodes by community.
    """
    try:
        view = load_view(document, seed=seed)
    except LpgviewError as e:
        fail(e, as_json)

    graph = view.graph
    if as_json:
        echo_json(graph.to_dict())
        return

    stats = graph.get_stats()
    console.print(
        f"[bold]{document}[/bold]: {stats['total_nodes']} nodes, "
        f"{stats['total_edges']} edges, {stats['communities']} communities"
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("Node")
    table.add_column("Label")
    table.add_column("Community", justify="right")
    table.add_column("Degree", justify="right")

    nodes = sorted(
        graph.iter_nodes(),
        key=lambda n: (n.community if n.community is not None else -1, n.id),
    )
    for node in nodes:
        label = f"[{node.color}]●[/] {escape(str(node.label))}"
        if node.isPlaceholder:
            label += " [dim](placeholder)[/dim]"
        table.add_row(
            escape(node.id),
            label,
            str(node.community),
            str(len(graph.edges_of(node.id))),
        )
    console.print(table)

    if stats["placeholders"]:
        echo_warning(
            f"{stats['placeholders']} node(s) referenced by relationships but never defined"
        )
