"""Enrichment, search and interaction controllers over a knowledge graph."""

from .emphasis import EmphasisTracker
from .enrichment import EnrichmentPipeline
from .highlight import HoverController
from .search import SearchIndex, SearchResult
from .selection import InspectorView, SelectionController
from .view import GraphView

__all__ = [
    "EmphasisTracker",
    "EnrichmentPipeline",
    "GraphView",
    "HoverController",
    "InspectorView",
    "SearchIndex",
    "SearchResult",
    "SelectionController",
]
