"""
Neighbors Command - Show what stays in focus when a node is hovered.
"""

from typing import List

import click
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from ...core.errors import LpgviewError
from ..utils import echo_json, fail, load_view, require_node

console = Console()


# --- API Models ---
class FocusEdge(BaseModel):
    source: str
    target: str
    label: str


class NeighborhoodResponse(BaseModel):
    node_id: str
    neighbors: List[str]
    dimmed: List[str]
    edges: List[FocusEdge]
    hidden_edges: int


@click.command()
@click.argument("document", type=click.Path(dir_okay=False))
@click.argument("node_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def neighbors(document: str, node_id: str, as_json: bool):
    """
    List the one-hop neighborhood of NODE_ID in both directions.
    """
    try:
        view = load_view(document)
        require_node(view, node_id)
    except LpgviewError as e:
        fail(e, as_json)

    view.enter_node(node_id)
    frame = view.render()

    focused = sorted(n for n in view.hover.focus.neighbors if n != node_id)
    dimmed = sorted(n for n, d in frame.nodes.items() if d.zIndex == 0)
    edges = [
        FocusEdge(source=e.source, target=e.target, label=e.label)
        for e in frame.edges.values()
        if not e.hidden
    ]
    response = NeighborhoodResponse(
        node_id=node_id,
        neighbors=focused,
        dimmed=dimmed,
        edges=edges,
        hidden_edges=len(frame.edges) - len(edges),
    )

    if as_json:
        echo_json(response.model_dump())
        return

    console.print(f"[bold]{node_id}[/bold]: {len(focused)} neighbor(s), {len(dimmed)} dimmed")
    table = Table(show_header=True, header_style="bold")
    table.add_column("Source")
    table.add_column("Relation")
    table.add_column("Target")
    for edge in edges:
        table.add_row(edge.source, edge.label, edge.target)
    console.print(table)
