"""Diagram exporter with builder pattern API."""

import json
import logging

from .constants import (
    DANGLING_KEEP, DANGLING_DROP, DANGLING_POLICIES, DEFAULT_INDENT, JSON_ENCODING
)
from ..errors import ExportError

logger = logging.getLogger(__name__)


def node_to_dict(node) -> dict:
    """Serialize a node with the field names the diagram canvas expects."""
    data = {"label": node.label}
    if node.is_step:
        data["actions"] = list(node.actions)
    else:
        data["condition"] = node.condition

    record = {
        "id": node.id,
        "type": node.kind,
        "data": data,
        "width": node.width,
        "height": node.height,
    }
    if node.position is not None:
        record["position"] = {"x": node.x, "y": node.y}
    return record


def edge_to_dict(edge) -> dict:
    """Serialize an edge, including its style payload and canvas offsets."""
    return {
        "id": edge.id,
        "source": edge.source,
        "target": edge.target,
        "type": edge.edge_type,
        "animated": edge.animated,
        "style": edge.style,
        "markerEnd": edge.marker_end,
        "data": {
            "offsetX": edge.offset_x,
            "offsetY1": edge.offset_y1,
            "offsetY2": edge.offset_y2,
        },
    }


class DiagramExporter:
    """Exports a compiled SCLGraph as a diagram payload.

    Uses builder pattern for configuration:

        DiagramExporter(graph)
            .set_source_code(content)
            .set_dangling_policy("drop")
            .set_indent(2)
            .export("chart.json")
    """

    def __init__(self, graph):
        """Initialize exporter with a compiled graph.

        Args:
            graph: SCLGraph from the compiler or the loader
        """
        self.graph = graph
        self._indent = DEFAULT_INDENT
        self._dangling_policy = DANGLING_KEEP
        self._source_code = None

    def set_indent(self, indent) -> "DiagramExporter":
        """Set JSON indentation (None for compact output).

        Returns:
            Self for chaining
        """
        self._indent = indent
        return self

    def set_dangling_policy(self, policy: str) -> "DiagramExporter":
        """Choose what happens to edges whose endpoints were never declared.

        Args:
            policy: "keep" (default) or "drop"

        Returns:
            Self for chaining

        Raises:
            ExportError: If the policy is unknown
        """
        if policy not in DANGLING_POLICIES:
            raise ExportError(
                f"Unknown dangling edge policy '{policy}', expected one of {', '.join(DANGLING_POLICIES)}"
            )
        self._dangling_policy = policy
        return self

    def set_source_code(self, code: str) -> "DiagramExporter":
        """Embed the SCL source text in the payload.

        Returns:
            Self for chaining
        """
        self._source_code = code
        return self

    def _edges(self):
        edges = self.graph.edges
        if self._dangling_policy == DANGLING_DROP:
            dangling = {(edge.source, edge.target) for edge in self.graph.dangling_edges()}
            if dangling:
                logger.info("Dropping %d dangling edges", len(dangling))
            edges = [edge for edge in edges if (edge.source, edge.target) not in dangling]
        return edges

    def to_dict(self) -> dict:
        """Build the diagram payload."""
        payload = {}
        if self._source_code is not None:
            payload["code"] = self._source_code
        payload["nodes"] = [node_to_dict(node) for node in self.graph.nodes]
        payload["edges"] = [edge_to_dict(edge) for edge in self._edges()]
        return payload

    def to_string(self) -> str:
        """Build the diagram payload as a JSON string."""
        return json.dumps(self.to_dict(), indent=self._indent, ensure_ascii=False)

    def export(self, filepath: str) -> str:
        """Write the diagram payload to a JSON file.

        Returns:
            Path to exported file
        """
        with open(filepath, "w", encoding=JSON_ENCODING) as f:
            f.write(self.to_string())
        return filepath
