"""
Demo Command - Write the example document.
"""

import sys
from pathlib import Path

import click

from ...core.demo import DemoManager
from ..utils import echo_error, echo_info, echo_success


@click.command()
@click.option("-d", "--dir", "directory", default=".", type=click.Path(file_okay=False),
              help="Directory to write the demo document into")
@click.option("--force", is_flag=True, help="Overwrite an existing demo document")
def demo(directory: str, force: bool):
    """
    Create a demo document with two clusters and a placeholder node.
    """
    manager = DemoManager(Path(directory))
    try:
        path = manager.provision(overwrite=force)
    except FileExistsError as e:
        echo_error(str(e))
        echo_info("Use --force to overwrite it.")
        sys.exit(1)

    echo_success(f"Demo document created: {path}")
    echo_info(f"Next: lpgview show {path}")
    echo_info(f"      lpgview search {path} epistem")
