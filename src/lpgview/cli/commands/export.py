"""
Export Command - Write the rendered graph as HTML or JSON.
"""

import sys
from pathlib import Path

import click

from ...core.errors import LpgviewError
from ...graph.visualize import generate_html, generate_json, open_visualization
from ..utils import echo_error, echo_info, echo_success, fail, load_view


@click.command()
@click.argument("document", type=click.Path(dir_okay=False))
@click.option("-o", "--output", default="graph.html", help="Output file (.html or .json)")
@click.option("--seed", type=int, default=None, help="Seed for coordinates and layout")
@click.option("--no-open", is_flag=True, help="Do not open the HTML file in a browser")
def export(document: str, output: str, seed: int | None, no_open: bool):
    """
    Export DOCUMENT as an interactive page or a JSON render frame.
    """
    try:
        view = load_view(document, seed=seed)
    except LpgviewError as e:
        fail(e)

    output_path = Path(output)
    frame = view.render()

    if output_path.suffix == ".json":
        output_path.write_text(generate_json(view.graph, frame), encoding="utf-8")
        echo_success(f"Generated: {output_path}")
        return

    if output_path.suffix != ".html":
        echo_error(f"Unsupported format: {output_path.suffix}")
        click.echo("Supported: .html, .json")
        sys.exit(1)

    if no_open:
        output_path.write_text(generate_html(view.graph, frame, title=Path(document).name), encoding="utf-8")
    else:
        open_visualization(view.graph, frame, str(output_path), title=Path(document).name)
    echo_success(f"Generated: {output_path}")
    echo_info(f"Open: file://{output_path.absolute()}")
