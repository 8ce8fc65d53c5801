"""Layout engine - turns a sized, directed graph into centre anchors.

Public API:
    LayoutEngine - Base class for layout back-ends
    LayeredLayoutEngine - Default layered (Sugiyama-style) layout
    LayoutConfig - Rank direction, spacing and margins
    LayoutNode - Node record submitted to an engine
    layout - Run the default engine

Example usage:
    from QuickSCL.layout_engine import LayoutConfig, LayoutNode, layout

    anchors = layout(
        [LayoutNode("A", 180, 80), LayoutNode("T", 300, 60)],
        [("A", "T")],
        LayoutConfig(),
    )
"""

from .engine import LayoutConfig, LayoutEngine, LayoutNode
from .layered import LayeredLayoutEngine, layout

__all__ = ["LayoutConfig", "LayoutEngine", "LayoutNode", "LayeredLayoutEngine", "layout"]
