"""Layout engine interface.

An engine receives sized node records, directed (source, target) pairs and
a LayoutConfig, and returns a centre anchor for every submitted node.
"""

from typing import Dict, List, Tuple

from .constants import (
    RANKDIRS, DEFAULT_RANKDIR, DEFAULT_NODESEP, DEFAULT_RANKSEP,
    DEFAULT_MARGINX, DEFAULT_MARGINY
)
from ..errors import LayoutError


class LayoutConfig:
    """Graph-level layout settings.

    Attributes:
        rankdir: "TB", "BT", "LR" or "RL"
        nodesep: Gap between neighbouring nodes in the same rank
        ranksep: Gap between consecutive ranks
        marginx: Outer horizontal margin
        marginy: Outer vertical margin
    """

    def __init__(self, rankdir: str = DEFAULT_RANKDIR, nodesep: float = DEFAULT_NODESEP,
                 ranksep: float = DEFAULT_RANKSEP, marginx: float = DEFAULT_MARGINX,
                 marginy: float = DEFAULT_MARGINY):
        rankdir = rankdir.upper()
        if rankdir not in RANKDIRS:
            raise LayoutError(f"Unknown rank direction '{rankdir}'")
        self.rankdir = rankdir
        self.nodesep = nodesep
        self.ranksep = ranksep
        self.marginx = marginx
        self.marginy = marginy

    @property
    def is_horizontal(self):
        return self.rankdir in ("LR", "RL")

    def __repr__(self):
        return (f"LayoutConfig(rankdir={self.rankdir!r}, nodesep={self.nodesep}, "
                f"ranksep={self.ranksep}, marginx={self.marginx}, marginy={self.marginy})")


class LayoutNode:
    """Sized node record submitted to a layout engine."""

    def __init__(self, id_: str, width: float, height: float):
        self.id = id_
        self.width = width
        self.height = height

    def __repr__(self):
        return f"LayoutNode({self.id!r}, {self.width}x{self.height})"


class LayoutEngine:
    """Base class for layout back-ends.

    Subclasses implement layout(); any graph layout library can be
    wrapped this way without touching the compiler.
    """

    def layout(self, nodes: List[LayoutNode], edges: List[Tuple[str, str]],
               config: LayoutConfig) -> Dict[str, Tuple[float, float]]:
        """Compute centre anchors.

        Args:
            nodes: Sized node records
            edges: Directed (source id, target id) pairs; endpoints may
                name ids that are not in nodes
            config: LayoutConfig

        Returns:
            Mapping of every submitted node id to its (x, y) centre
        """
        raise NotImplementedError
