"""
Core type definitions for lpgview.

Attribute names follow the render contract (``isPlaceholder``, ``zIndex``)
so a node's attribute dict can be handed to a renderer unchanged.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Attributes computed by enrichment; not part of the document's persisted truth
COMPUTED_ATTRIBUTES = frozenset({"community", "x", "y"})


class Node(BaseModel):
    """
    A knowledge graph entity.

    Author-supplied fields beyond the known ones (``link``, ``tags``, ...)
    are kept as extra attributes.
    """
    id: str
    label: str
    description: str = ""
    color: str
    size: float
    x: float = 0.0
    y: float = 0.0
    isPlaceholder: bool = False
    community: Optional[int] = None

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    @property
    def extras(self) -> Dict[str, Any]:
        """Author fields that are not part of the core schema."""
        return dict(self.model_extra or {})

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Node):
            return self.id == other.id
        return False


class Edge(BaseModel):
    """
    Directed, labeled relationship between two nodes.

    ``key`` distinguishes parallel edges between the same ordered pair.
    """
    key: int
    source: str
    target: str
    label: str
    size: float
    color: str

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id


class NodeDisplay(BaseModel):
    """Per-node record handed to the rendering surface."""
    x: float
    y: float
    color: str
    size: float
    label: str
    zIndex: int = 0
    hidden: bool = False
    highlighted: bool = False


class EdgeDisplay(BaseModel):
    """Per-edge record handed to the rendering surface."""
    source: str
    target: str
    size: float
    color: str
    label: str
    zIndex: int = 0
    hidden: bool = False


class CameraFocus(BaseModel):
    """Where the camera should pan after a search result is chosen."""
    node_id: str
    x: float
    y: float
    duration_ms: int


class RenderFrame(BaseModel):
    """
    A complete, freshly computed view of the graph.

    Frames are recomputed in full on every state change, never diffed.
    """
    nodes: Dict[str, NodeDisplay] = Field(default_factory=dict)
    edges: Dict[str, EdgeDisplay] = Field(default_factory=dict)
    camera: Optional[CameraFocus] = None
    hovered: Optional[str] = None
    selected: Optional[str] = None

    def visible_nodes(self) -> List[str]:
        return [node_id for node_id, data in self.nodes.items() if not data.hidden]

    def visible_edges(self) -> List[str]:
        return [edge_id for edge_id, data in self.edges.items() if not data.hidden]

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
