"""
Document-to-Graph Compiler.

Builds a ``KnowledgeGraph`` from a decoded record tree in two passes:

1. Explicit node tables: every top-level key except ``relationships``
   becomes a node, with author fields overlaid on the defaults.
2. Relationships (the auto-creator): both endpoints are merge-created as
   placeholders, then an edge is appended unconditionally.

Because merge-create never overwrites, a placeholder can never replace or
downgrade an explicit node, and every edge endpoint exists by construction.
"""

import logging
import random
from typing import Any, Dict, Mapping, Optional

from ..config import (
    COORD_MAX,
    COORD_MIN,
    DEFAULT_EDGE_LABEL,
    DEFINED_NODE_COLOR,
    DEFINED_NODE_SIZE,
    EDGE_COLOR,
    EDGE_SIZE,
    PLACEHOLDER_NODE_COLOR,
    PLACEHOLDER_NODE_SIZE,
    RELATIONSHIPS_KEY,
)
from ..core.errors import ParseError
from ..core.graph import KnowledgeGraph
from .decoder import DocumentFormat, decode_document, validate_tree

logger = logging.getLogger(__name__)

# Relationship fields consumed by the compiler; anything else is copied onto the edge
_RELATIONSHIP_FIELDS = ("source", "target", "type")

# Known node fields and the types the render contract needs
_STRING_FIELDS = ("label", "description", "color")
_NUMBER_FIELDS = ("size", "x", "y")


class GraphCompiler:
    """
    Compiles record trees into knowledge graphs.

    Initial coordinates are drawn from an explicit random source so that
    callers (and tests) can make layouts reproducible by seeding it.
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self.rng = rng or random.Random(seed)

    def compile(self, records: Mapping[str, Any]) -> KnowledgeGraph:
        """
        Build a graph from a decoded record tree.

        Raises:
            ParseError: On a malformed tree or relationship record. No
                partial graph is returned.
        """
        validate_tree(records)
        graph = KnowledgeGraph()

        for key, record in records.items():
            if key == RELATIONSHIPS_KEY:
                continue
            self._add_explicit_node(graph, key, record)

        for index, rel in enumerate(records.get(RELATIONSHIPS_KEY) or []):
            self._add_relationship(graph, index, rel)

        stats = graph.get_stats()
        logger.debug(
            f"Compiled graph: {stats['total_nodes']} nodes "
            f"({stats['placeholders']} placeholders), {stats['total_edges']} edges"
        )
        return graph

    def _random_position(self) -> Dict[str, float]:
        return {
            "x": self.rng.uniform(COORD_MIN, COORD_MAX),
            "y": self.rng.uniform(COORD_MIN, COORD_MAX),
        }

    def _add_explicit_node(self, graph: KnowledgeGraph, node_id: str, record: Dict[str, Any]) -> None:
        _check_node_fields(node_id, record)
        attributes = {
            "label": node_id,
            "description": "",
            "color": DEFINED_NODE_COLOR,
            "size": DEFINED_NODE_SIZE,
            **self._random_position(),
            "isPlaceholder": False,
            **record,
        }
        # An explicit empty label still falls back to the identifier
        if not attributes.get("label"):
            attributes["label"] = node_id
        attributes["isPlaceholder"] = False
        graph.merge_node(node_id, attributes)

    def _placeholder(self, node_id: str) -> Dict[str, Any]:
        return {
            "label": node_id,
            "description": "",
            "color": PLACEHOLDER_NODE_COLOR,
            "size": PLACEHOLDER_NODE_SIZE,
            **self._random_position(),
            "isPlaceholder": True,
        }

    def _add_relationship(self, graph: KnowledgeGraph, index: int, rel: Any) -> None:
        name = f"{RELATIONSHIPS_KEY}[{index}]"
        if not isinstance(rel, dict):
            raise ParseError("relationship must be a table", record=name)

        for field in ("source", "target"):
            value = rel.get(field)
            if value is None or value == "":
                raise ParseError(f"missing '{field}'", record=name)
            if not isinstance(value, str):
                raise ParseError(f"'{field}' must be a string, got {type(value).__name__}", record=name)

        rel_type = rel.get("type")
        if rel_type is not None and not isinstance(rel_type, str):
            raise ParseError(f"'type' must be a string, got {type(rel_type).__name__}", record=name)

        source, target = rel["source"], rel["target"]
        graph.merge_node(source, self._placeholder(source))
        graph.merge_node(target, self._placeholder(target))

        extras = {k: v for k, v in rel.items() if k not in _RELATIONSHIP_FIELDS}
        graph.add_edge(source, target, {
            **extras,
            "label": rel_type or DEFAULT_EDGE_LABEL,
            "size": EDGE_SIZE,
            "color": EDGE_COLOR,
        })


def _check_node_fields(node_id: str, record: Dict[str, Any]) -> None:
    for field in _STRING_FIELDS:
        value = record.get(field)
        if value is not None and not isinstance(value, str):
            raise ParseError(f"'{field}' must be a string, got {type(value).__name__}", record=node_id)
    for field in _NUMBER_FIELDS:
        value = record.get(field)
        if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
            raise ParseError(f"'{field}' must be a number, got {type(value).__name__}", record=node_id)


def compile_document(
    text: str,
    fmt: DocumentFormat = DocumentFormat.TOML,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> KnowledgeGraph:
    """Decode and compile a document in one step."""
    records = decode_document(text, fmt)
    return GraphCompiler(rng=rng, seed=seed).compile(records)
