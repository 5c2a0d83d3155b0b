"""
Selection / Inspector Controller.

Clicking a node selects it and snapshots its attributes for the inspector
panel; clicking the background or closing the panel clears the selection.
Only one node is selected at a time.
"""

import copy
import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field
from rich.console import Group
from rich.markdown import Markdown
from rich.panel import Panel
from rich.text import Text

from ..core.graph import KnowledgeGraph

logger = logging.getLogger(__name__)

EMPTY_DESCRIPTION = "_No additional notes for this node._"
DEFAULT_ACCENT = "#333333"


class InspectorView(BaseModel):
    """Snapshot of a selected node, as shown by the inspector."""
    node_id: str
    label: str
    link: Optional[str] = None
    description: str = ""
    accent_color: str = DEFAULT_ACCENT
    attributes: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_attributes(cls, node_id: str, attributes: Dict[str, Any]) -> "InspectorView":
        snapshot = copy.deepcopy(dict(attributes))
        link = snapshot.get("link")
        return cls(
            node_id=node_id,
            label=str(snapshot.get("label") or node_id),
            link=link if isinstance(link, str) and link else None,
            description=str(snapshot.get("description") or ""),
            accent_color=str(snapshot.get("color") or DEFAULT_ACCENT),
            attributes=snapshot,
        )

    def render(self) -> Panel:
        """Rich panel: accent-colored title, link, Markdown description."""
        parts = []
        if self.link:
            parts.append(Text(self.link, style=f"link {self.link} underline"))
        parts.append(Markdown(self.description or EMPTY_DESCRIPTION))
        return Panel(
            Group(*parts),
            title=Text(self.label, style=f"bold {self.accent_color}"),
            title_align="left",
            border_style=self.accent_color,
        )


class SelectionController:
    """Two-state machine: nothing selected, or exactly one selected node."""

    def __init__(self, graph: KnowledgeGraph):
        self.graph = graph
        self.inspector: Optional[InspectorView] = None

    @property
    def selected(self) -> Optional[str]:
        return self.inspector.node_id if self.inspector else None

    def click_node(self, node_id: str) -> Optional[InspectorView]:
        """Select a node, replacing any previous selection."""
        if not self.graph.has_node(node_id):
            logger.debug(f"Ignoring click on unknown node: {node_id}")
            return self.inspector
        self.inspector = InspectorView.from_attributes(
            node_id, self.graph.node_attributes(node_id)
        )
        return self.inspector

    def click_stage(self) -> None:
        self.inspector = None

    def close(self) -> None:
        self.inspector = None
