"""SCL compiler with builder pattern API.

Chains the line classifier, the graph builder and the layout request
assembly into a single synchronous call.
"""

import logging

from .layout_engine import LayoutConfig, LayeredLayoutEngine
from .scl_layout import layout_graph
from .scl_parser import SCLParser

logger = logging.getLogger(__name__)

EXAMPLE_CODE = """STEP Init
ACTION Reset=1
TRANSITION T1
CONDITION Start=1
STEP Process
ACTION Run=1
TRANSITION T2
CONDITION Temp>100
STEP CoolDown
ACTION Fan=1
TRANSITION T3
CONDITION Temp<50
JUMP Init

STEP Alarm FROM T2
ACTION Alarm=1
TRANSITION T_Ack
CONDITION Ack=1
JUMP Init"""


class SCLCompiler:
    """Compiles SCL text into a laid-out SCLGraph.

    Uses builder pattern for configuration:

        SCLCompiler(content)
            .set_layout_engine(MyEngine())
            .set_layout_config(LayoutConfig(rankdir="LR"))
            .compile()
    """

    def __init__(self, content: str):
        """Initialize compiler with source text.

        Args:
            content: SCL source text
        """
        self.content = content
        self._engine = None
        self._config = None
        self._parser = None

    def set_layout_engine(self, engine) -> "SCLCompiler":
        """Set the layout engine.

        Args:
            engine: Object with layout(nodes, edges, config) -> anchors

        Returns:
            Self for chaining
        """
        self._engine = engine
        return self

    def set_layout_config(self, config: LayoutConfig) -> "SCLCompiler":
        """Set the layout configuration.

        Returns:
            Self for chaining
        """
        self._config = config
        return self

    @property
    def diagnostics(self):
        """DiagnosticCollector of the last parse, or None before compiling."""
        if self._parser is None:
            return None
        return self._parser.diagnostics

    def parse(self):
        """Build the graph without running the layout engine."""
        self._parser = SCLParser(self.content)
        return self._parser.parse()

    def compile(self):
        """Parse, size and lay out the chart.

        Returns:
            SCLGraph with positions

        Raises:
            LayoutError: If the layout engine fails to place a node
        """
        graph = self.parse()
        layout_graph(graph, self._engine or LayeredLayoutEngine(),
                     self._config or LayoutConfig())
        logger.info("Compiled %d steps, %d transitions, %d edges (%d warnings)",
                    len(graph.steps), len(graph.transitions), len(graph.edges),
                    len(self.diagnostics.warnings))
        return graph
