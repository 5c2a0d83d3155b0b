"""
Graph View - the single owner of an enriched graph and its interaction state.

The view composes display overrides on top of the base attributes instead of
letting controllers write to the graph:

    base attributes -> search emphasis -> hover reducer -> render frame

Every state change (hover, click, search, emphasis expiry) notifies the
subscribers; a render frame is always recomputed in full.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from ..config import CAMERA_DURATION_MS, EMPHASIS_SECONDS, SEARCH_LIMIT
from ..core.graph import KnowledgeGraph
from ..core.types import CameraFocus, EdgeDisplay, NodeDisplay, RenderFrame
from .emphasis import EmphasisTracker
from .highlight import HoverController
from .search import SearchIndex, SearchResult
from .selection import InspectorView, SelectionController

logger = logging.getLogger(__name__)

Listener = Callable[["GraphView"], None]


class GraphView:
    """
    Interactive view over one enriched ``KnowledgeGraph``.

    The search index is built from the graph when the view is created; a new
    document means a new view.
    """

    def __init__(
        self,
        graph: KnowledgeGraph,
        emphasis: Optional[EmphasisTracker] = None,
        search_limit: int = SEARCH_LIMIT,
    ):
        self.graph = graph
        self.hover = HoverController(graph)
        self.selection = SelectionController(graph)
        if emphasis is None:
            emphasis = EmphasisTracker(duration=EMPHASIS_SECONDS)
        self.emphasis = emphasis
        self.index = SearchIndex.build(graph, limit=search_limit)
        self.camera: Optional[CameraFocus] = None
        self.query = ""
        self._listeners: List[Listener] = []

    # --- Subscriptions ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # --- Pointer events ---

    def enter_node(self, node_id: str) -> None:
        if self.hover.enter_node(node_id):
            self._notify()

    def leave_node(self) -> None:
        self.hover.leave_node()
        self._notify()

    def click_node(self, node_id: str) -> Optional[InspectorView]:
        inspector = self.selection.click_node(node_id)
        self._notify()
        return inspector

    def click_stage(self) -> None:
        self.selection.click_stage()
        self._notify()

    def close_inspector(self) -> None:
        self.selection.close()
        self._notify()

    # --- Search ---

    def set_query(self, query: str) -> List[SearchResult]:
        self.query = query
        self._notify()
        return self.results()

    def results(self) -> List[SearchResult]:
        """Results for the current query; empty (hidden) for an empty query."""
        return self.index.search(self.query)

    def select_result(self, node_id: str) -> None:
        """
        Focus the camera on a chosen result and emphasize it briefly.

        When called inside a running event loop, the emphasis expiry is
        scheduled on the loop so listeners see the node shrink back.
        """
        if not self.graph.has_node(node_id):
            logger.debug(f"Ignoring search selection of unknown node: {node_id}")
            return

        data = self.graph.node_attributes(node_id)
        self.camera = CameraFocus(
            node_id=node_id,
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            duration_ms=CAMERA_DURATION_MS,
        )
        entry = self.emphasis.start(node_id, float(data.get("size", 0)))
        self.query = ""
        self._schedule_expiry(entry.expires_at)
        self._notify()

    def _schedule_expiry(self, deadline: float) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        # Expire against the deadline, not the loop clock
        loop.call_later(self.emphasis.duration, self.expire_emphasis, deadline)

    def expire_emphasis(self, now: Optional[float] = None) -> List[str]:
        """Drop finished emphases and notify if anything changed."""
        expired = self.emphasis.expire(now)
        if expired:
            self._notify()
        return expired

    # --- Rendering ---

    def node_display(self, node_id: str, now: Optional[float] = None) -> NodeDisplay:
        data = dict(self.graph.node_attributes(node_id))
        data.update(self.emphasis.overrides(now).get(node_id, {}))
        return self._to_node_display(self.hover.node_display(node_id, data))

    def render(self, now: Optional[float] = None) -> RenderFrame:
        emphasized = self.emphasis.overrides(now)
        nodes: Dict[str, NodeDisplay] = {}
        for node_id, base in self.graph.iter_node_items():
            data: Dict[str, Any] = dict(base)
            data.update(emphasized.get(node_id, {}))
            nodes[node_id] = self._to_node_display(self.hover.node_display(node_id, data))

        edges: Dict[str, EdgeDisplay] = {}
        for source, target, key, base in self.graph.iter_edge_items():
            data = self.hover.edge_display(source, target, dict(base))
            edges[KnowledgeGraph.edge_id(source, target, key)] = EdgeDisplay(
                source=source,
                target=target,
                size=data.get("size", 0),
                color=str(data.get("color", "")),
                label=str(data.get("label", "")),
                zIndex=data.get("zIndex", 0),
                hidden=data.get("hidden", False),
            )

        return RenderFrame(
            nodes=nodes,
            edges=edges,
            camera=self.camera,
            hovered=self.hover.hovered,
            selected=self.selection.selected,
        )

    @staticmethod
    def _to_node_display(data: Dict[str, Any]) -> NodeDisplay:
        return NodeDisplay(
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            color=str(data.get("color", "")),
            size=data.get("size", 0),
            label=str(data.get("label", "")),
            zIndex=data.get("zIndex", 0),
            hidden=data.get("hidden", False),
            highlighted=data.get("highlighted", False),
        )
