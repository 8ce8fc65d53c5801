"""Parser for the SCL language.

This module folds classified SCL lines into a graph of Step/Transition
nodes and Sequential/Jump edges. Parsing is lenient: no input makes it
fail, lines that cannot attach anywhere are dropped and recorded as
warnings.
"""

import logging

from .constants import EDGE_KIND_SEQUENTIAL, EDGE_KIND_JUMP
from .errors import DiagnosticCollector
from .scl_graph import SCLEdge, SCLGraph, SCLStep, SCLTransition
from .scl_tokenizer import LineToken, LineType, SCLTokenizer

logger = logging.getLogger(__name__)


class ParseContext:
    """Transient state for one compile run.

    Attributes:
        nodes: Node registry, id -> node, in first-declaration order
        edges: Edge set, (source, target) -> edge, in first-declaration order
        current_node_id: Most recently declared node name, or None
        diagnostics: DiagnosticCollector for dropped/degraded lines
    """

    def __init__(self):
        self.nodes = {}
        self.edges = {}
        self.current_node_id = None
        self.diagnostics = DiagnosticCollector()

    @property
    def current_node(self):
        """Return the node named by the cursor, or None."""
        if self.current_node_id is None:
            return None
        return self.nodes.get(self.current_node_id)

    def declare_node(self, node, line_number: int = None):
        """Register a node, replacing any earlier node with the same id.

        The replacement discards the earlier node's actions or condition.
        Returns the replaced node, or None.
        """
        previous = self.nodes.get(node.id)
        if previous is not None:
            logger.debug("Line %s: redeclaration of %r replaces earlier %s",
                         line_number, node.id, previous.kind)
            self.diagnostics.warn(
                f"'{node.id}' redeclared, earlier {previous.kind} discarded", line_number
            )
        self.nodes[node.id] = node
        return previous

    def add_edge(self, source: str, target: str, kind: str = EDGE_KIND_SEQUENTIAL,
                 line_number: int = None):
        """Add an edge unless the ordered pair already has one.

        The first declaration of a (source, target) pair wins. Returns the
        new edge, or None when nothing was added.
        """
        if not source or not target:
            return None
        pair = (source, target)
        if pair in self.edges:
            logger.debug("Line %s: duplicate edge %s -> %s dropped", line_number, source, target)
            self.diagnostics.warn(f"Duplicate edge {source} -> {target} ignored", line_number)
            return None
        edge = SCLEdge(source, target, kind)
        self.edges[pair] = edge
        return edge

    def to_graph(self):
        return SCLGraph(list(self.nodes.values()), list(self.edges.values()))


def _declare(context: ParseContext, node, token: LineToken, chain_from_kind: str):
    context.declare_node(node, token.line_number)
    if token.source:
        context.add_edge(token.source, node.id, line_number=token.line_number)
    else:
        # Evaluated after the declaration, so a node redeclared under the
        # cursor's own name never chains to itself.
        current = context.current_node
        if current is not None and current.kind == chain_from_kind:
            context.add_edge(current.id, node.id, line_number=token.line_number)
    context.current_node_id = node.id


def _drop(context: ParseContext, token: LineToken, reason: str):
    logger.debug("Line %s: %s: %r", token.line_number, reason, token.text)
    context.diagnostics.warn(f"{reason}: '{token.text}'", token.line_number)


def apply_line(context: ParseContext, token: LineToken) -> ParseContext:
    """Apply one classified line to the parse context.

    Args:
        context: ParseContext to update
        token: LineToken produced by the tokenizer

    Returns:
        The same context, updated
    """
    current = context.current_node

    if token.type == LineType.STEP:
        _declare(context, SCLStep(token.name, token.line_number), token, SCLTransition.kind)

    elif token.type == LineType.TRANSITION:
        _declare(context, SCLTransition(token.name, token.line_number), token, SCLStep.kind)

    elif token.type == LineType.ACTION:
        if current is not None and current.is_step:
            current.add_action(token.content)
        else:
            _drop(context, token, "ACTION outside of a step ignored")

    elif token.type == LineType.CONDITION:
        if current is not None and current.is_transition:
            current.set_condition(token.content)
        else:
            _drop(context, token, "CONDITION outside of a transition ignored")

    elif token.type == LineType.JUMP:
        if context.current_node_id and token.name:
            context.add_edge(context.current_node_id, token.name, EDGE_KIND_JUMP,
                             line_number=token.line_number)
        else:
            _drop(context, token, "JUMP without a current node ignored")

    elif token.type == LineType.CONTINUATION:
        if current is not None and current.is_transition and current.condition:
            current.extend_condition(token.content)
        else:
            _drop(context, token, "Unrecognised line discarded")

    else:
        _drop(context, token, "Malformed declaration ignored")

    return context


class SCLParser:
    """Parser for the SCL language.

    Consumes classified lines from the tokenizer and folds them into a
    ParseContext, one line at a time with no backtracking.
    """

    def __init__(self, content: str):
        """Initialize parser with source text.

        Args:
            content: Full SCL source text
        """
        self.content = content
        self.tokenizer = SCLTokenizer(content)
        self.tokens = []
        self.context = ParseContext()

    @property
    def diagnostics(self):
        return self.context.diagnostics

    def parse(self):
        """Parse the source and return an SCLGraph without positions.

        Returns:
            SCLGraph containing the declared nodes and edges
        """
        self.context = ParseContext()
        self.tokens = self.tokenizer.tokenize()

        for token in self.tokens:
            apply_line(self.context, token)

        graph = self.context.to_graph()
        logger.debug("Parsed %d lines into %d nodes and %d edges",
                     len(self.tokens), len(graph.nodes), len(graph.edges))
        return graph
