"""
lpgview CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import demo, export, files, inspect_node, neighbors, search, show
from .utils import configure_logging


@click.group()
@click.version_option(package_name="lpgview")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """lpgview: Knowledge graph viewer for TOML documents.

    Compiles a document of nodes and relationships into a graph, detects
    communities, lays it out and lets you search and inspect it.

    \b
    Quick Start:
      lpgview demo
      lpgview show demo.toml
      lpgview search demo.toml epistem
      lpgview export demo.toml -o graph.html
    """
    configure_logging(verbose)


# Register commands
main.add_command(show.show)
main.add_command(search.search)
main.add_command(inspect_node.inspect_node, name="inspect")
main.add_command(neighbors.neighbors)
main.add_command(export.export)
main.add_command(files.files)
main.add_command(demo.demo)

if __name__ == "__main__":
    main()
