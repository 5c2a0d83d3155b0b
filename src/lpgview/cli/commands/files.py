"""
Files Command - List the documents available from the storage backend.
"""

import asyncio
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ...config import ProviderKind, get_settings
from ...core.errors import LpgviewError
from ...storage import DocumentLoader, create_provider
from ..utils import echo_json, echo_warning, fail

console = Console()


@click.command()
@click.option(
    "--provider",
    type=click.Choice([p.value for p in ProviderKind]),
    default=None,
    help="Storage backend (defaults to LPGVIEW_PROVIDER)",
)
@click.option(
    "--root",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for the local backend (defaults to LPGVIEW_ROOT_DIR)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def files(provider: Optional[str], root: Optional[str], as_json: bool):
    """
    Connect to the storage backend and list documents.
    """
    settings = get_settings()
    overrides = {}
    if provider:
        overrides["provider"] = ProviderKind(provider)
    if root:
        overrides["root_dir"] = root
    if overrides:
        settings = settings.model_validate({**settings.model_dump(), **overrides})

    try:
        loader = DocumentLoader(create_provider(settings))
        listing = asyncio.run(loader.connect())
    except LpgviewError as e:
        fail(e, as_json)

    if as_json:
        echo_json([f.model_dump() for f in listing])
        return

    if not listing:
        echo_warning(f"No documents found in {loader.provider.provider_name}")
        return

    table = Table(show_header=True, header_style="bold", title=loader.provider.provider_name)
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Modified")
    for meta in listing:
        table.add_row(meta.id, meta.name, meta.updated_at or "")
    console.print(table)
