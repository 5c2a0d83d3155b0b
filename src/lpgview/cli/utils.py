"""
Shared helpers for the lpgview commands.

Styled status lines, the JSON response envelope, logging setup and the
read-compile-enrich path every document command starts with.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import click

from ..config import get_settings
from ..core.errors import LpgviewError, StorageError
from ..graph.view import GraphView
from ..storage.loader import build_view


def echo_success(message: str) -> None:
    """Green line prefixed with a checkmark."""
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """Red line on stderr, so --json stdout stays parseable."""
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """Dimmed, indented follow-up line under a status message."""
    click.echo(click.style(f"   {message}", dim=True))


def echo_json(data: Any) -> None:
    """Print a success envelope to stdout."""
    click.echo(json.dumps({"meta": {"status": "success"}, "data": data}, default=str))


def fail(error: Exception, as_json: bool = False) -> NoReturn:
    """
    Report an error and exit with status 1.

    In JSON mode the error is printed as an envelope on stdout so callers
    parsing the output always receive valid JSON.
    """
    if as_json:
        click.echo(json.dumps({
            "meta": {"status": "error"},
            "error": {"message": str(error), "type": type(error).__name__},
        }))
    else:
        echo_error(str(error))
    sys.exit(1)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def load_view(document: str, seed: Optional[int] = None) -> GraphView:
    """
    Compile and enrich a document file into a view.

    Args:
        document (str): Path to a ``.toml`` (or legacy ``.lpg``) document.
        seed (Optional[int]): Layout seed; falls back to ``LPGVIEW_LAYOUT_SEED``.

    Raises:
        LpgviewError: If the file cannot be read or does not compile.
    """
    settings = get_settings()
    path = Path(document)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Cannot read {document}: {e.strerror or e}") from e

    return build_view(
        text,
        name=path.name,
        seed=settings.layout_seed if seed is None else seed,
        emphasis_seconds=settings.emphasis_seconds,
        search_limit=settings.search_limit,
    )


def require_node(view: GraphView, node_id: str) -> None:
    if not view.graph.has_node(node_id):
        raise LpgviewError(f"Node not found: {node_id}")
