"""QuickSCL compiler for Sequential Function Charts.

This package compiles SCL, a plain line-oriented text notation for
Sequential Function Charts, into a directed graph of Steps and
Transitions with sizes and positions ready for a diagram canvas.

Example usage:
    from QuickSCL import compile_scl

    graph = compile_scl("STEP Init\nTRANSITION T1\nCONDITION Start=1\nSTEP Run\nJUMP Init")

    for node in graph.nodes:
        print(node.id, node.kind, node.position)
    for edge in graph.edges:
        print(edge.source, "->", edge.target, edge.kind)
"""

from .scl_graph import SCLGraph, SCLNode, SCLStep, SCLTransition, SCLEdge
from .scl_tokenizer import SCLTokenizer, LineType, LineToken, classify_line
from .scl_parser import SCLParser, ParseContext, apply_line
from .scl_compiler import SCLCompiler, EXAMPLE_CODE
from .scl_layout import build_layout_request, apply_positions, layout_graph
from .errors import (
    SCLError, SCLWarning, LayoutError, DiagramFormatError, ExportError,
    DiagnosticCollector
)


def parse_scl(content: str):
    """Build the graph for SCL content without laying it out.

    Args:
        content: SCL source text

    Returns:
        SCLGraph with no positions
    """
    return SCLParser(content).parse()


def compile_scl(content: str, engine=None, config=None):
    """Compile SCL content from a string.

    Args:
        content: SCL source text
        engine: Optional layout engine (default LayeredLayoutEngine)
        config: Optional LayoutConfig

    Returns:
        SCLGraph with positions
    """
    return (
        SCLCompiler(content)
        .set_layout_engine(engine)
        .set_layout_config(config)
        .compile()
    )


def compile_file(file_path: str, engine=None, config=None):
    """Compile an SCL file.

    Args:
        file_path: Path to the SCL file
        engine: Optional layout engine
        config: Optional LayoutConfig

    Returns:
        SCLGraph with positions

    Raises:
        FileNotFoundError: If file doesn't exist
        IOError: If file cannot be read
    """
    with open(file_path, 'r', encoding='utf-8-sig') as f:
        content = f.read()

    return compile_scl(content, engine, config)


__all__ = [
    'SCLGraph',
    'SCLNode',
    'SCLStep',
    'SCLTransition',
    'SCLEdge',
    'SCLTokenizer',
    'LineType',
    'LineToken',
    'classify_line',
    'SCLParser',
    'ParseContext',
    'apply_line',
    'SCLCompiler',
    'EXAMPLE_CODE',
    'build_layout_request',
    'apply_positions',
    'layout_graph',
    'SCLError',
    'SCLWarning',
    'LayoutError',
    'DiagramFormatError',
    'ExportError',
    'DiagnosticCollector',
    'parse_scl',
    'compile_scl',
    'compile_file',
]
