"""Core graph store, data model and error taxonomy."""

from .errors import (
    AuthError,
    LpgviewError,
    NotFoundError,
    ParseError,
    StorageError,
    UnsupportedOperationError,
)
from .graph import KnowledgeGraph
from .types import Edge, Node

__all__ = [
    "AuthError",
    "Edge",
    "KnowledgeGraph",
    "LpgviewError",
    "Node",
    "NotFoundError",
    "ParseError",
    "StorageError",
    "UnsupportedOperationError",
]
