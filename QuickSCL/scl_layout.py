"""Layout request assembly for compiled SCL graphs.

Builds one request per graph from node layout footprints and edge pairs,
submits it to a layout engine, and converts the returned centre anchors
into top-left node positions using the rendered size.
"""

import logging
from typing import Dict, List, Tuple

from .errors import LayoutError
from .layout_engine import LayoutConfig, LayoutNode, LayeredLayoutEngine
from .scl_graph import SCLGraph

logger = logging.getLogger(__name__)


class LayoutRequest:
    """A sized graph ready for a layout engine.

    Attributes:
        nodes: List of LayoutNode (id, layout width, layout height)
        edges: List of (source id, target id)
        config: LayoutConfig
    """

    def __init__(self, nodes: List[LayoutNode], edges: List[Tuple[str, str]],
                 config: LayoutConfig):
        self.nodes = nodes
        self.edges = edges
        self.config = config

    def submit(self, engine) -> Dict[str, Tuple[float, float]]:
        """Run the request through an engine and return centre anchors."""
        return engine.layout(self.nodes, self.edges, self.config)


def build_layout_request(graph: SCLGraph, config: LayoutConfig = None) -> LayoutRequest:
    """Assemble the layout request for a graph.

    Transitions submit their layout reservation width rather than the
    rendered bar width. Dangling edges are passed through unchanged.
    """
    nodes = [LayoutNode(node.id, node.layout_width, node.layout_height) for node in graph.nodes]
    edges = [(edge.source, edge.target) for edge in graph.edges]
    return LayoutRequest(nodes, edges, config or LayoutConfig())


def apply_positions(graph: SCLGraph, anchors: Dict[str, Tuple[float, float]]):
    """Store top-left positions on every node from centre anchors.

    Raises:
        LayoutError: If a node has no anchor
    """
    for node in graph.nodes:
        if node.id not in anchors:
            raise LayoutError(f"Layout engine returned no position for '{node.id}'")
        center_x, center_y = anchors[node.id]
        node.set_position_from_anchor(center_x, center_y)


def layout_graph(graph: SCLGraph, engine=None, config: LayoutConfig = None) -> SCLGraph:
    """Lay out a graph in place and return it.

    Args:
        graph: Compiled SCLGraph
        engine: LayoutEngine instance (default LayeredLayoutEngine)
        config: LayoutConfig (default top-to-bottom, 80/80 spacing, 50 margins)

    Returns:
        The same graph, with node positions set
    """
    engine = engine or LayeredLayoutEngine()
    request = build_layout_request(graph, config)
    anchors = request.submit(engine)
    apply_positions(graph, anchors)
    logger.info("Layout placed %d nodes and %d edges", len(request.nodes), len(request.edges))
    return graph
