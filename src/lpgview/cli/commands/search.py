"""
Search Command - Fuzzy search over node labels, descriptions, links and tags.
"""

from typing import List, Optional

import click
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ...core.errors import LpgviewError
from ...graph.search import SearchResult, highlight_segments, snippet
from ..utils import echo_json, echo_warning, fail, load_view

console = Console()


# --- API Models ---
class SearchHit(BaseModel):
    node_id: str
    label: str
    score: float
    matched_keys: List[str]
    snippet: str


def _to_hit(result: SearchResult) -> SearchHit:
    return SearchHit(
        node_id=result.node_id,
        label=str(result.record.get("label") or result.node_id),
        score=round(result.score, 6),
        matched_keys=sorted({m.key for m in result.matches}),
        snippet=snippet(result),
    )


def _highlighted_label(result: SearchResult) -> Text:
    label = str(result.record.get("label") or result.node_id)
    match = result.match_for("label")
    text = Text()
    if match is None:
        text.append(label)
        return text
    for segment, is_match in highlight_segments(label, match.indices):
        text.append(segment, style="bold yellow" if is_match else None)
    return text


@click.command()
@click.argument("document", type=click.Path(dir_okay=False))
@click.argument("query")
@click.option("-n", "--limit", type=int, default=None, help="Maximum number of results")
@click.option("--json", "as_json", is_flag=True, help="Output results as JSON")
def search(document: str, query: str, limit: Optional[int], as_json: bool):
    """
    Search DOCUMENT for QUERY (typos are tolerated).
    """
    try:
        view = load_view(document)
    except LpgviewError as e:
        fail(e, as_json)

    results = view.index.search(query, limit=limit)

    if as_json:
        echo_json([_to_hit(r).model_dump() for r in results])
        return

    if not results:
        echo_warning(f"No matches for '{query}'")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Node")
    table.add_column("Score", justify="right")
    table.add_column("Context")
    for rank, result in enumerate(results, start=1):
        table.add_row(
            str(rank),
            _highlighted_label(result),
            f"{result.score:.4f}",
            snippet(result),
        )
    console.print(table)
