"""
Neighbor Highlight Controller.

Hovering a node focuses it and its one-hop neighborhood (both directions):
- Neighborhood nodes keep their look and move to the top layer.
- Every other node turns gray, loses its label and drops to the bottom layer.
- Edges touching the hovered node are thickened and raised; all other
  edges are hidden.

The reducers are pure: they return new display dicts derived from the base
attributes and never write to the graph, so leaving the hover always
restores the base look exactly.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

from ..config import DIMMED_NODE_COLOR, HOVER_EDGE_SIZE
from ..core.graph import KnowledgeGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HoverFocus:
    """The focused state: a hovered node and its neighbor set (itself included)."""
    node_id: str
    neighbors: FrozenSet[str]


def neighbor_set(graph: KnowledgeGraph, node_id: str) -> FrozenSet[str]:
    """``{node_id}`` plus every node one edge away, in either direction."""
    return frozenset(graph.neighbors(node_id) | {node_id})


def reduce_node(node_id: str, data: Dict[str, Any], focus: Optional[HoverFocus]) -> Dict[str, Any]:
    if focus is None:
        return data
    if node_id in focus.neighbors:
        return {**data, "zIndex": 1}
    return {**data, "color": DIMMED_NODE_COLOR, "label": "", "zIndex": 0}


def reduce_edge(
    source: str, target: str, data: Dict[str, Any], focus: Optional[HoverFocus]
) -> Dict[str, Any]:
    if focus is None:
        return data
    if focus.node_id in (source, target):
        return {**data, "size": max(data.get("size", 0), HOVER_EDGE_SIZE), "zIndex": 1}
    return {**data, "hidden": True}


class HoverController:
    """
    Two-state machine: idle (``focus is None``) or focused on one node.

    Entering a different node while focused moves the focus directly; a
    leave event always returns to idle.
    """

    def __init__(self, graph: KnowledgeGraph):
        self.graph = graph
        self.focus: Optional[HoverFocus] = None

    @property
    def hovered(self) -> Optional[str]:
        return self.focus.node_id if self.focus else None

    def enter_node(self, node_id: str) -> bool:
        """
        Focus ``node_id``.

        Returns:
            bool: False if the node is not in the graph (state unchanged).
        """
        if not self.graph.has_node(node_id):
            logger.debug(f"Ignoring hover on unknown node: {node_id}")
            return False
        self.focus = HoverFocus(node_id, neighbor_set(self.graph, node_id))
        return True

    def leave_node(self) -> None:
        self.focus = None

    def node_display(self, node_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return reduce_node(node_id, data, self.focus)

    def edge_display(self, source: str, target: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return reduce_edge(source, target, data, self.focus)
