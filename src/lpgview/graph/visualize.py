"""
Visualization export.

Serializes a render frame either as a JSON payload (for external renderers)
or as a standalone HTML page drawn with sigma.js. The page reproduces the
hover behavior of the neighbor highlight controller so a static export is
still explorable.
"""

import json
import webbrowser
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import DIMMED_NODE_COLOR, HOVER_EDGE_SIZE
from ..core.graph import KnowledgeGraph
from ..core.types import RenderFrame

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>__TITLE__</title>
    <script src="https://cdn.jsdelivr.net/npm/graphology@0.25.4/dist/graphology.umd.min.js"></script>
    <script src="https://cdn.jsdelivr.net/npm/sigma@2.4.0/build/sigma.min.js"></script>
    <style>
        html, body { margin: 0; height: 100%; background: #1e1e1e; font-family: Inter, sans-serif; }
        #container { width: 100vw; height: 100vh; }
        #inspector {
            position: absolute; right: 20px; top: 20px; width: 350px; max-height: 80vh;
            overflow-y: auto; background: rgba(255, 255, 255, 0.95); padding: 25px;
            border-radius: 12px; display: none; white-space: pre-wrap;
        }
    </style>
</head>
<body>
    <div id="container"></div>
    <div id="inspector"></div>
    <script>
        const payload = __GRAPH_DATA__;
        const graph = new graphology.MultiDirectedGraph();
        for (const [id, data] of Object.entries(payload.frame.nodes)) {
            graph.addNode(id, { ...data, ...(payload.details[id] || {}) });
        }
        for (const [id, data] of Object.entries(payload.frame.edges)) {
            graph.addEdgeWithKey(id, data.source, data.target, data);
        }

        const renderer = new Sigma(graph, document.getElementById("container"), {
            defaultEdgeType: "arrow",
            renderEdgeLabels: true,
        });

        let hovered = null;
        let neighbors = new Set();
        renderer.on("enterNode", ({ node }) => {
            hovered = node;
            neighbors = new Set(graph.neighbors(node));
            neighbors.add(node);
            renderer.refresh();
        });
        renderer.on("leaveNode", () => {
            hovered = null;
            neighbors = new Set();
            renderer.refresh();
        });
        renderer.setSetting("nodeReducer", (node, data) => {
            if (!hovered) return data;
            if (neighbors.has(node)) return { ...data, zIndex: 1 };
            return { ...data, color: "__DIMMED__", label: "", zIndex: 0 };
        });
        renderer.setSetting("edgeReducer", (edge, data) => {
            if (!hovered) return data;
            if (graph.hasExtremity(edge, hovered)) {
                return { ...data, size: Math.max(data.size, __HOVER_EDGE_SIZE__), zIndex: 1 };
            }
            return { ...data, hidden: true };
        });

        const inspector = document.getElementById("inspector");
        renderer.on("clickNode", ({ node }) => {
            const attrs = graph.getNodeAttributes(node);
            inspector.style.display = "block";
            inspector.style.borderTop = `6px solid ${attrs.color}`;
            inspector.textContent = `${attrs.label}\\n${attrs.link || ""}\\n\\n${attrs.description || ""}`;
        });
        renderer.on("clickStage", () => { inspector.style.display = "none"; });
    </script>
</body>
</html>
"""


def build_payload(graph: KnowledgeGraph, frame: RenderFrame) -> Dict[str, Any]:
    """Frame plus the per-node details the inspector needs."""
    details = {}
    for node_id, data in graph.iter_node_items():
        details[node_id] = {
            "description": data.get("description", ""),
            "link": data.get("link") if isinstance(data.get("link"), str) else None,
        }
    return {"frame": frame.to_dict(), "details": details, "stats": graph.get_stats()}


def generate_json(graph: KnowledgeGraph, frame: RenderFrame, indent: Optional[int] = 2) -> str:
    return json.dumps(build_payload(graph, frame), indent=indent, default=str)


def generate_html(graph: KnowledgeGraph, frame: RenderFrame, title: str = "lpgview") -> str:
    """
    Generate the HTML content for the graph visualization.
    """
    json_data = json.dumps(build_payload(graph, frame), default=str).replace("</", "<\\/")
    return (
        HTML_TEMPLATE
        .replace("__TITLE__", title.replace("<", "&lt;"))
        .replace("__DIMMED__", DIMMED_NODE_COLOR)
        .replace("__HOVER_EDGE_SIZE__", str(HOVER_EDGE_SIZE))
        .replace("__GRAPH_DATA__", json_data)
    )


def open_visualization(
    graph: KnowledgeGraph, frame: RenderFrame, output_path: str = "graph.html", title: str = "lpgview"
) -> str:
    """
    Generate and open the visualization in the browser.
    """
    out_file = Path(output_path)
    out_file.write_text(generate_html(graph, frame, title), encoding="utf-8")
    webbrowser.open(out_file.resolve().as_uri())
    return str(out_file)
