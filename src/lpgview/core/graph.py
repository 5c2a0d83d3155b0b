"""
Knowledge Graph store backed by NetworkX.

This module provides the single owned graph instance shared by the
compiler, the enrichment pipeline and the interaction controllers:
- A multi-relational directed graph (parallel labeled edges allowed)
- Merge-create semantics for nodes (create if absent, never overwrite)
- Refusal of dangling edges (endpoints must already exist)
- Neighborhood queries in either direction
- Statistics and export capabilities
"""

import copy
from collections import Counter
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

import networkx as nx

from .types import COMPUTED_ATTRIBUTES, Edge, Node


class KnowledgeGraph:
    """
    Type-safe wrapper around ``networkx.MultiDiGraph``.

    Node attributes live directly in the networkx attribute dicts so that
    layout and community transforms can read and write them in place.
    """

    def __init__(self):
        self._graph = nx.MultiDiGraph()

    @property
    def graph(self) -> nx.MultiDiGraph:
        """The underlying networkx graph."""
        return self._graph

    def merge_node(self, node_id: str, attributes: Dict[str, Any]) -> bool:
        """
        Create a node with the given attributes only if it is absent.

        An existing node is left untouched.

        Returns:
            bool: True if the node was created.
        """
        if node_id in self._graph:
            return False
        self._graph.add_node(node_id)
        self._graph.nodes[node_id].update(attributes)
        return True

    def add_edge(self, source_id: str, target_id: str, attributes: Dict[str, Any]) -> int:
        """
        Append a directed edge; parallel edges are never deduplicated.

        Raises:
            KeyError: If either endpoint is not in the graph.

        Returns:
            int: The key of the new edge within its (source, target) pair.
        """
        for endpoint in (source_id, target_id):
            if endpoint not in self._graph:
                raise KeyError(f"Edge endpoint not in graph: {endpoint}")
        key = self._graph.add_edge(source_id, target_id)
        self._graph.edges[source_id, target_id, key].update(attributes)
        return key

    def has_node(self, node_id: str) -> bool:
        return node_id in self._graph

    def get_node(self, node_id: str) -> Optional[Node]:
        """Retrieve a node by ID."""
        if node_id not in self._graph:
            return None
        return Node.model_validate({**self._graph.nodes[node_id], "id": node_id})

    def node_attributes(self, node_id: str) -> Dict[str, Any]:
        """Live attribute dict of a node (writes are immediately visible)."""
        return self._graph.nodes[node_id]

    def set_node_attribute(self, node_id: str, name: str, value: Any) -> None:
        self._graph.nodes[node_id][name] = value

    def neighbors(self, node_id: str) -> Set[str]:
        """Nodes one edge away in either direction."""
        if node_id not in self._graph:
            return set()
        return set(self._graph.successors(node_id)) | set(self._graph.predecessors(node_id))

    def edges_of(self, node_id: str) -> List[Edge]:
        """Every edge that has ``node_id`` as source or target."""
        if node_id not in self._graph:
            return []
        seen = {}
        for u, v, k, data in self._graph.out_edges(node_id, keys=True, data=True):
            seen[(u, v, k)] = data
        for u, v, k, data in self._graph.in_edges(node_id, keys=True, data=True):
            seen[(u, v, k)] = data
        return [self._edge(u, v, k, data) for (u, v, k), data in seen.items()]

    def iter_nodes(self) -> Iterator[Node]:
        for node_id, data in self._graph.nodes(data=True):
            yield Node.model_validate({**data, "id": node_id})

    def iter_node_items(self) -> Iterator[Tuple[str, Dict[str, Any]]]:
        """(node_id, live attribute dict) pairs in insertion order."""
        return iter(self._graph.nodes(data=True))

    def iter_edges(self) -> Iterator[Edge]:
        for u, v, k, data in self._graph.edges(keys=True, data=True):
            yield self._edge(u, v, k, data)

    def iter_edge_items(self) -> Iterator[Tuple[str, str, int, Dict[str, Any]]]:
        return iter(self._graph.edges(keys=True, data=True))

    @staticmethod
    def edge_id(source_id: str, target_id: str, key: int) -> str:
        """Stable string identifier for an edge in render payloads."""
        return f"{source_id}->{target_id}#{key}"

    @staticmethod
    def _edge(u: str, v: str, k: int, data: Dict[str, Any]) -> Edge:
        return Edge.model_validate({**data, "key": k, "source": u, "target": v})

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def get_stats(self) -> Dict[str, Any]:
        placeholders = sum(
            1 for _, data in self._graph.nodes(data=True) if data.get("isPlaceholder")
        )
        edge_counts = Counter(
            data.get("label") for _, _, data in self._graph.edges(data=True)
        )
        communities = {
            data["community"]
            for _, data in self._graph.nodes(data=True)
            if data.get("community") is not None
        }
        orphans = sum(1 for n in self._graph.nodes if self._graph.degree(n) == 0)

        return {
            "total_nodes": self.node_count,
            "total_edges": self.edge_count,
            "placeholders": placeholders,
            "edges_by_label": dict(edge_counts),
            "communities": len(communities),
            "orphans": orphans,
        }

    def copy(self) -> "KnowledgeGraph":
        """Deep copy; attribute dicts are not shared with the original."""
        clone = KnowledgeGraph()
        clone._graph = copy.deepcopy(self._graph)
        return clone

    def clear(self) -> None:
        self._graph = nx.MultiDiGraph()

    def to_dict(self, include_computed: bool = True) -> Dict[str, Any]:
        """
        Export nodes and edges as plain data.

        Args:
            include_computed: When False, enrichment attributes
                (community, coordinates) are dropped.
        """
        nodes = []
        for node_id, data in self._graph.nodes(data=True):
            attrs = {
                k: v for k, v in data.items()
                if include_computed or k not in COMPUTED_ATTRIBUTES
            }
            nodes.append({**copy.deepcopy(attrs), "id": node_id})

        edges = [
            {**copy.deepcopy(data), "key": k, "source": u, "target": v}
            for u, v, k, data in self._graph.edges(keys=True, data=True)
        ]
        return {"nodes": nodes, "edges": edges, "stats": self.get_stats()}

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._graph

    def __len__(self) -> int:
        return self.node_count
