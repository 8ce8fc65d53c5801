"""Diagram exporter - serialize compiled charts for rendering and storage.

Public API:
    DiagramExporter - Exporter class with builder pattern
    load_diagram, load_diagram_string, load_diagram_file - Reload payloads

Example usage:
    from QuickSCL import compile_scl
    from QuickSCL.diagram_exporter import DiagramExporter, load_diagram_file

    graph = compile_scl(content)
    DiagramExporter(graph).set_source_code(content).export("chart.json")

    reloaded = load_diagram_file("chart.json")
"""

from .exporter import DiagramExporter, node_to_dict, edge_to_dict
from .loader import load_diagram, load_diagram_string, load_diagram_file

__all__ = [
    "DiagramExporter",
    "node_to_dict",
    "edge_to_dict",
    "load_diagram",
    "load_diagram_string",
    "load_diagram_file",
]
