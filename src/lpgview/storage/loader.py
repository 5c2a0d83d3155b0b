"""
Document Loader.

Fetches a document from a storage provider, compiles and enriches it, and
publishes the resulting view. Each request takes a generation number; a
completion is applied only if no newer request was issued meanwhile, so
out-of-order completions can never replace a newer document.

A failed load leaves the previously published document untouched.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..core.errors import AuthError, StorageError
from ..core.graph import KnowledgeGraph
from ..graph.emphasis import EmphasisTracker
from ..graph.enrichment import EnrichmentPipeline
from ..graph.view import GraphView
from ..parsing.compiler import GraphCompiler
from ..parsing.decoder import DocumentFormat, decode_document
from .base import FileMeta, StorageProvider

logger = logging.getLogger(__name__)


@dataclass
class LoadedDocument:
    name: str
    text: str
    graph: KnowledgeGraph
    view: GraphView
    generation: int
    file_id: Optional[str] = None


def build_view(
    text: str,
    name: str = "document.toml",
    seed: Optional[int] = None,
    pipeline: Optional[EnrichmentPipeline] = None,
    emphasis_seconds: Optional[float] = None,
    search_limit: Optional[int] = None,
) -> GraphView:
    """Decode, compile and enrich a document; return a view over it."""
    records = decode_document(text, DocumentFormat.from_name(name))
    graph = GraphCompiler(rng=random.Random(seed)).compile(records)
    (pipeline if pipeline is not None else EnrichmentPipeline(seed=seed)).run(graph)

    kwargs = {}
    if emphasis_seconds is not None:
        kwargs["emphasis"] = EmphasisTracker(duration=emphasis_seconds)
    if search_limit is not None:
        kwargs["search_limit"] = search_limit
    return GraphView(graph, **kwargs)


class DocumentLoader:
    """
    Loads documents and holds the currently displayed one.

    Args:
        provider: Storage backend; optional when only ``load_text`` is used.
        seed: Seed for initial coordinates and enrichment (None = unseeded).
        on_load: Called with each document that gets published.
    """

    def __init__(
        self,
        provider: Optional[StorageProvider] = None,
        seed: Optional[int] = None,
        pipeline: Optional[EnrichmentPipeline] = None,
        emphasis_seconds: Optional[float] = None,
        search_limit: Optional[int] = None,
        on_load: Optional[Callable[[LoadedDocument], None]] = None,
    ):
        self.provider = provider
        self.seed = seed
        self.pipeline = pipeline
        self.emphasis_seconds = emphasis_seconds
        self.search_limit = search_limit
        self.on_load = on_load
        self.current: Optional[LoadedDocument] = None
        self._generation = 0
        self._in_flight = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    def _require_provider(self) -> StorageProvider:
        if self.provider is None:
            raise StorageError("No storage provider configured")
        return self.provider

    async def connect(self) -> List[FileMeta]:
        """Authenticate if needed and list the available documents."""
        provider = self._require_provider()
        if not provider.is_authenticated():
            if not await provider.authenticate():
                raise AuthError(f"Failed to connect to {provider.provider_name}.")
        self._in_flight += 1
        try:
            return await provider.list_files()
        finally:
            self._in_flight -= 1

    async def load(self, file_id: str, name: Optional[str] = None) -> Optional[LoadedDocument]:
        """
        Read, compile and publish a document.

        Returns:
            The published document, or None when a newer request superseded
            this one while it was reading.
        """
        provider = self._require_provider()
        self._generation += 1
        generation = self._generation

        self._in_flight += 1
        try:
            text = await provider.read_file(file_id)
        except StorageError:
            if generation != self._generation:
                logger.info(f"Discarding failed stale load of {file_id} (generation {generation})")
                return None
            raise
        finally:
            self._in_flight -= 1

        if generation != self._generation:
            logger.debug(
                f"Discarding stale load of {file_id}: generation {generation} < {self._generation}"
            )
            return None

        return self._publish(name or file_id, text, generation, file_id)

    def load_text(self, name: str, text: str) -> LoadedDocument:
        """Publish a document whose text is already in hand (e.g. an upload)."""
        self._generation += 1
        return self._publish(name, text, self._generation, None)

    def _publish(self, name: str, text: str, generation: int, file_id: Optional[str]) -> LoadedDocument:
        view = build_view(
            text,
            name=name,
            seed=self.seed,
            pipeline=self.pipeline,
            emphasis_seconds=self.emphasis_seconds,
            search_limit=self.search_limit,
        )
        document = LoadedDocument(
            name=name,
            text=text,
            graph=view.graph,
            view=view,
            generation=generation,
            file_id=file_id,
        )
        self.current = document
        logger.info(f"Loaded {name}: {view.graph.node_count} nodes, {view.graph.edge_count} edges")
        if self.on_load:
            self.on_load(document)
        return document

    async def save(self, content: str) -> bool:
        """
        Overwrite the current document in its backend.

        On success the current document's text is replaced; its graph and
        view are not recompiled until the next ``load``.
        """
        provider = self._require_provider()
        document = self.current
        if document is None or document.file_id is None:
            raise StorageError("No stored document is open")
        saved = await provider.write_file(document.file_id, content)
        if saved:
            document.text = content
        return saved

    def close(self) -> None:
        """Forget the current document; in-flight loads are superseded."""
        self._generation += 1
        self.current = None
