"""SCL graph object model.

This module provides classes for representing Sequential Function Charts
compiled from SCL text: Step and Transition nodes, Sequential and Jump
edges, and the SCLGraph container handed to rendering and storage.
"""
from typing import Dict, List, Optional, Tuple

from .constants import (
    STEP_WIDTH, STEP_BASE_HEIGHT, ACTION_HEIGHT_INCREMENT,
    TRANSITION_WIDTH, TRANSITION_HEIGHT,
    TRANSITION_MIN_LAYOUT_WIDTH, CONDITION_CHAR_WIDTH,
    NODE_KIND_STEP, NODE_KIND_TRANSITION,
    EDGE_KIND_SEQUENTIAL, EDGE_KIND_JUMP,
    EDGE_TYPE, EDGE_STROKE, JUMP_DASH_ARRAY, EDGE_MARKER,
)


class SCLNode:
    """Common state of Step and Transition nodes.

    Attributes:
        id: User-chosen name, unique within a graph
        kind: "step" or "transition"
        label: Display text (initialised to id)
        width: Rendered width
        height: Rendered height
        line_number: 1-indexed line of the declaration, None when reloaded
        x: Top-left X coordinate (set after layout)
        y: Top-left Y coordinate (set after layout)
    """

    kind = None

    def __init__(self, id_: str, width: int, height: int, line_number: int = None):
        self.id = id_
        self.label = id_
        self.width = width
        self.height = height
        self.line_number = line_number
        self.x = None
        self.y = None

    @property
    def is_step(self):
        return self.kind == NODE_KIND_STEP

    @property
    def is_transition(self):
        return self.kind == NODE_KIND_TRANSITION

    @property
    def layout_width(self):
        """Width reserved for this node in the layout pass."""
        return self.width

    @property
    def layout_height(self):
        return self.height

    @property
    def position(self) -> Optional[Tuple[float, float]]:
        """Top-left (x, y) or None before layout."""
        if self.x is None or self.y is None:
            return None
        return (self.x, self.y)

    def set_position_from_anchor(self, center_x: float, center_y: float):
        """Convert a centre anchor into this node's top-left corner.

        Uses the rendered size, never the layout reservation.
        """
        self.x = center_x - self.width / 2
        self.y = center_y - self.height / 2


class SCLStep(SCLNode):
    """Represents a step: a system state with an ordered list of actions.

    Each appended action grows the rendered height by a fixed increment.
    """

    kind = NODE_KIND_STEP

    def __init__(self, id_: str, line_number: int = None):
        super().__init__(id_, STEP_WIDTH, STEP_BASE_HEIGHT, line_number)
        self.actions: List[str] = []

    def add_action(self, text: str):
        """Append an action and grow the step."""
        self.actions.append(text)
        self.height += ACTION_HEIGHT_INCREMENT

    def __repr__(self):
        return f"Step({self.id!r}, actions={self.actions!r})"


class SCLTransition(SCLNode):
    """Represents a transition: a guarded edge carrying a condition.

    The bar renders at a fixed size, but the layout pass reserves enough
    horizontal room for the condition text drawn beside it.
    """

    kind = NODE_KIND_TRANSITION

    def __init__(self, id_: str, line_number: int = None):
        super().__init__(id_, TRANSITION_WIDTH, TRANSITION_HEIGHT, line_number)
        self.condition = ""

    def set_condition(self, text: str):
        """Overwrite the condition."""
        self.condition = text

    def extend_condition(self, text: str):
        """Append a continuation line to the condition, space separated."""
        self.condition += " " + text

    @property
    def layout_width(self):
        if self.condition:
            return max(TRANSITION_MIN_LAYOUT_WIDTH, len(self.condition) * CONDITION_CHAR_WIDTH)
        return TRANSITION_MIN_LAYOUT_WIDTH

    def __repr__(self):
        return f"Transition({self.id!r}, condition={self.condition!r})"


def edge_id(source: str, target: str) -> str:
    """Deterministic edge id for an ordered (source, target) pair."""
    return f"e-{source}-{target}"


class SCLEdge:
    """Represents a directed connection between two node ids.

    Endpoints are referential only and may name nodes that were never
    declared. Offsets belong to the diagram canvas; the compiler only
    initialises them to zero.

    Attributes:
        id: "e-<source>-<target>", the serialized name only; edges are
            identified by the ordered (source, target) pair
        source: Source node id
        target: Target node id
        kind: "sequential" or "jump"
        offset_x, offset_y1, offset_y2: Canvas-owned routing offsets
    """

    def __init__(self, source: str, target: str, kind: str = EDGE_KIND_SEQUENTIAL):
        self.id = edge_id(source, target)
        self.source = source
        self.target = target
        self.kind = kind
        self.offset_x = 0
        self.offset_y1 = 0
        self.offset_y2 = 0

    @property
    def is_jump(self):
        return self.kind == EDGE_KIND_JUMP

    @property
    def animated(self):
        return self.is_jump

    @property
    def style(self) -> Dict[str, str]:
        if self.is_jump:
            return {"stroke": EDGE_STROKE, "strokeDasharray": JUMP_DASH_ARRAY}
        return {"stroke": EDGE_STROKE}

    @property
    def marker_end(self) -> Dict[str, str]:
        return {"type": EDGE_MARKER, "color": EDGE_STROKE}

    @property
    def edge_type(self):
        return EDGE_TYPE

    @property
    def offsets(self) -> Tuple[float, float, float]:
        return (self.offset_x, self.offset_y1, self.offset_y2)

    def __repr__(self):
        arrow = "~>" if self.is_jump else "->"
        return f"Edge({self.source} {arrow} {self.target})"


class SCLGraph:
    """Container for a compiled SCL chart.

    Nodes and edges keep declaration order so output is deterministic.
    """

    def __init__(self, nodes: list, edges: list):
        """Initialize SCLGraph with lists of nodes and edges.

        Args:
            nodes: List of SCLStep / SCLTransition objects
            edges: List of SCLEdge objects
        """
        self._nodes_by_id = {node.id: node for node in nodes}
        self._edges_by_pair = {(edge.source, edge.target): edge for edge in edges}

    @property
    def nodes(self):
        """Return list of all nodes."""
        return list(self._nodes_by_id.values())

    @property
    def edges(self):
        """Return list of all edges."""
        return list(self._edges_by_pair.values())

    @property
    def steps(self):
        return [node for node in self._nodes_by_id.values() if node.is_step]

    @property
    def transitions(self):
        return [node for node in self._nodes_by_id.values() if node.is_transition]

    def is_empty(self):
        return not self._nodes_by_id and not self._edges_by_pair

    def get_node(self, id_: str):
        """Get node by id.

        Args:
            id_: Node name

        Returns:
            SCLStep / SCLTransition or None if not found
        """
        return self._nodes_by_id.get(id_)

    def get_edge(self, source: str, target: str):
        """Get the edge for an ordered (source, target) pair, or None."""
        return self._edges_by_pair.get((source, target))

    def edges_from(self, source: str):
        return [edge for edge in self._edges_by_pair.values() if edge.source == source]

    def edges_to(self, target: str):
        return [edge for edge in self._edges_by_pair.values() if edge.target == target]

    def dangling_edges(self):
        """Return edges with at least one endpoint that is not a declared node."""
        return [
            edge for edge in self._edges_by_pair.values()
            if edge.source not in self._nodes_by_id or edge.target not in self._nodes_by_id
        ]

    def canonical(self):
        """Position-free form of the graph, suitable for equality checks."""
        nodes = []
        for node in self._nodes_by_id.values():
            content = tuple(node.actions) if node.is_step else node.condition
            nodes.append((node.id, node.kind, node.label, content,
                          node.width, node.height, node.layout_width))
        edges = [(edge.id, edge.source, edge.target, edge.kind)
                 for edge in self._edges_by_pair.values()]
        return (tuple(nodes), tuple(edges))

    def print_summary(self):
        """Print a human-readable summary of the chart."""
        print("\n" + "=" * 70)
        print("SCL Chart Summary")
        print("=" * 70 + "\n")

        print(f"STEPS: {len(self.steps)}")
        print("-" * 70)
        print(f"{'Name':<16} {'Position':<20} {'Actions'}")
        print("-" * 70)
        for step in self.steps:
            print(f"{step.id:<16} {_format_position(step):<20} {'; '.join(step.actions)}")

        print(f"\nTRANSITIONS: {len(self.transitions)}")
        print("-" * 70)
        print(f"{'Name':<16} {'Position':<20} {'Condition'}")
        print("-" * 70)
        for trans in self.transitions:
            cond_str = trans.condition[:37] + "..." if len(trans.condition) > 40 else trans.condition
            print(f"{trans.id:<16} {_format_position(trans):<20} {cond_str}")

        print(f"\nEDGES: {len(self.edges)}")
        print("-" * 70)
        for edge in self.edges:
            print(f"{edge}")

        print("\n" + "=" * 70 + "\n")


def _format_position(node):
    if node.position is None:
        return "-"
    return f"({node.x:.0f}, {node.y:.0f})"
