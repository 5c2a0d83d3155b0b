"""
Inspect Command - Show the inspector panel for one node.
"""

import click
from rich.console import Console

from ...core.errors import LpgviewError
from ..utils import echo_json, fail, load_view, require_node

console = Console()


@click.command()
@click.argument("document", type=click.Path(dir_okay=False))
@click.argument("node_id")
@click.option("--json", "as_json", is_flag=True, help="Output the node snapshot as JSON")
def inspect_node(document: str, node_id: str, as_json: bool):
    """
    Show label, link and description of NODE_ID.
    """
    try:
        view = load_view(document)
        require_node(view, node_id)
    except LpgviewError as e:
        fail(e, as_json)

    inspector = view.click_node(node_id)

    if as_json:
        echo_json(inspector.model_dump(mode="json"))
        return

    console.print(inspector.render())
