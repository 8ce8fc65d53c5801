"""Unit tests for scl_parser.py"""

import os
import sys
import pytest

# Add parent directory to path for imports
TEST_DIR = os.path.dirname(os.path.abspath(__file__))
QUICKSCL_DIR = os.path.dirname(TEST_DIR)
WORKSPACE_DIR = os.path.dirname(QUICKSCL_DIR)
sys.path.insert(0, WORKSPACE_DIR)

from QuickSCL import parse_scl, compile_scl, compile_file, EXAMPLE_CODE
from QuickSCL.constants import STEP_BASE_HEIGHT, ACTION_HEIGHT_INCREMENT
from QuickSCL.errors import SCLError
from QuickSCL.scl_graph import SCLStep, SCLTransition
from QuickSCL.scl_parser import ParseContext, SCLParser, apply_line
from QuickSCL.scl_tokenizer import LineToken, LineType, classify_line


def edge_pairs(graph):
    return [(edge.source, edge.target) for edge in graph.edges]


class TestImplicitChaining:
    """Test sequencing between alternating steps and transitions."""

    def test_alternation_chaining(self):
        """Test STEP/TRANSITION/STEP produces exactly two edges."""
        graph = parse_scl("STEP A\nTRANSITION T\nSTEP B")

        assert edge_pairs(graph) == [("A", "T"), ("T", "B")]

    def test_step_after_step_does_not_chain(self):
        """Test no edge between two consecutive steps."""
        graph = parse_scl("STEP A\nSTEP B\nTRANSITION T1\nTRANSITION T2")

        assert edge_pairs(graph) == [("B", "T1")]

    def test_first_declaration_has_no_edge(self):
        """Test a lone declaration has nothing to chain from."""
        graph = parse_scl("TRANSITION T")

        assert graph.edges == []
        assert graph.get_node("T").is_transition

    def test_from_overrides_implicit_chain(self):
        """Test explicit FROM suppresses the implicit edge."""
        graph = parse_scl("STEP A\nTRANSITION T\nSTEP B FROM A")

        assert ("A", "B") in edge_pairs(graph)
        assert ("T", "B") not in edge_pairs(graph)
        assert len(graph.edges) == 2

    def test_from_ignores_source_kind(self):
        """Test FROM links regardless of the source's kind."""
        graph = parse_scl("TRANSITION T1\nTRANSITION T2 FROM T1")

        assert edge_pairs(graph) == [("T1", "T2")]

    def test_keywords_case_insensitive(self):
        """Test lowercase source compiles the same as uppercase."""
        lower = parse_scl("step a\ntransition t\ncondition X\nstep b")
        upper = parse_scl("STEP a\nTRANSITION t\nCONDITION X\nSTEP b")

        assert lower.canonical() == upper.canonical()


class TestContentLines:
    """Test ACTION, CONDITION, JUMP and continuation handling."""

    def test_action_accumulation(self):
        """Test actions append in order and grow the step."""
        graph = parse_scl("STEP S\nACTION a=1\nACTION b=2")
        step = graph.get_node("S")

        assert step.actions == ["a=1", "b=2"]
        assert step.height == STEP_BASE_HEIGHT + 2 * ACTION_HEIGHT_INCREMENT

    def test_action_on_transition_is_ignored(self):
        """Test ACTION under a transition is a silent no-op."""
        parser = SCLParser("TRANSITION T\nACTION x=1")
        graph = parser.parse()
        trans = graph.get_node("T")

        assert not hasattr(trans, "actions")
        assert trans.condition == ""
        assert len(parser.diagnostics.warnings) == 1
        assert parser.diagnostics.warnings[0].line_number == 2

    def test_action_without_node_is_ignored(self):
        """Test ACTION before any declaration is dropped."""
        graph = parse_scl("ACTION x=1\nSTEP S")

        assert graph.get_node("S").actions == []

    def test_condition_overwrites(self):
        """Test a second CONDITION replaces the first."""
        graph = parse_scl("TRANSITION T\nCONDITION a\nCONDITION b")

        assert graph.get_node("T").condition == "b"

    def test_condition_on_step_is_ignored(self):
        """Test CONDITION under a step is a no-op."""
        graph = parse_scl("STEP S\nCONDITION X>1")

        assert not hasattr(graph.get_node("S"), "condition")

    def test_condition_continuation(self):
        """Test continuation lines extend a non-empty condition."""
        graph = parse_scl("TRANSITION T\nCONDITION X>1\nmore text\n   AND Y<2  ")

        assert graph.get_node("T").condition == "X>1 more text AND Y<2"

    def test_continuation_before_condition_is_lost(self):
        """Test continuation text without a CONDITION is discarded."""
        graph = parse_scl("TRANSITION T\nmore text\nCONDITION X>1")

        assert graph.get_node("T").condition == "X>1"

    def test_continuation_after_step_is_lost(self):
        """Test continuation only attaches to the current transition."""
        graph = parse_scl("TRANSITION T\nCONDITION a\nSTEP S\nmore")

        assert graph.get_node("T").condition == "a"
        assert graph.get_node("S").actions == []

    def test_jump_edge_marking(self):
        """Test JUMP produces a single animated, dashed jump edge."""
        graph = parse_scl("STEP A\nJUMP Init")

        assert len(graph.edges) == 1
        edge = graph.edges[0]
        assert (edge.source, edge.target) == ("A", "Init")
        assert edge.is_jump
        assert edge.animated is True
        assert edge.style["strokeDasharray"] == "5,5"

    def test_connect_is_jump(self):
        """Test CONNECT behaves like JUMP."""
        graph = parse_scl("TRANSITION T\nCONNECT S1")

        assert graph.get_edge("T", "S1").is_jump

    def test_jump_without_current_node(self):
        """Test JUMP before any declaration adds nothing."""
        graph = parse_scl("JUMP Init")

        assert graph.is_empty()

    def test_jump_does_not_move_cursor(self):
        """Test the cursor stays on the jumping node."""
        graph = parse_scl("STEP A\nJUMP Init\nACTION x=1")

        assert graph.get_node("A").actions == ["x=1"]


class TestPolicies:
    """Test redeclaration, duplicate and dangling edge policies."""

    def test_redeclaration_replaces_node(self):
        """Test last declaration wins and discards content."""
        graph = parse_scl("STEP S\nACTION a=1\nSTEP B\nSTEP S")
        step = graph.get_node("S")

        assert step.actions == []
        assert step.height == STEP_BASE_HEIGHT
        assert [node.id for node in graph.nodes] == ["S", "B"]

    def test_redeclaration_can_change_kind(self):
        """Test a step redeclared as a transition without a self edge."""
        graph = parse_scl("STEP X\nTRANSITION X")

        assert graph.get_node("X").is_transition
        assert graph.edges == []

    def test_duplicate_edge_first_wins(self):
        """Test an implicit edge duplicating a jump is dropped."""
        graph = parse_scl("STEP A\nJUMP T\nTRANSITION T")

        assert len(graph.edges) == 1
        assert graph.get_edge("A", "T").is_jump

    def test_duplicate_from_and_implicit_chain(self):
        """Test FROM then implicit chain of the same pair gives one edge."""
        graph = parse_scl("STEP A\nTRANSITION T FROM A\nSTEP A\nTRANSITION T")

        assert edge_pairs(graph).count(("A", "T")) == 1
        assert edge_pairs(graph) == [("A", "T"), ("T", "A")]

    def test_pairs_with_colliding_ids_are_distinct(self):
        """Test edges are deduplicated by pair, not by their serialized id."""
        graph = parse_scl("STEP C FROM A-B\nSTEP B-C FROM A")

        assert edge_pairs(graph) == [("A-B", "C"), ("A", "B-C")]
        assert [e.id for e in graph.edges] == ["e-A-B-C", "e-A-B-C"]
        assert graph.get_edge("A", "B-C").target == "B-C"

    def test_dangling_tolerance(self):
        """Test FROM an undeclared node keeps the edge."""
        graph = parse_scl("STEP A FROM Ghost")

        assert edge_pairs(graph) == [("Ghost", "A")]
        assert graph.get_node("Ghost") is None
        assert graph.dangling_edges() == graph.edges

    def test_declare_node_returns_previous(self):
        """Test the replace policy directly."""
        context = ParseContext()
        first = SCLStep("S")
        second = SCLTransition("S")

        assert context.declare_node(first) is None
        assert context.declare_node(second) is first
        assert context.nodes["S"] is second
        assert context.diagnostics.has_warnings()

    def test_add_edge_drops_duplicates(self):
        """Test the first-wins edge policy directly."""
        context = ParseContext()

        assert context.add_edge("A", "B") is not None
        assert context.add_edge("A", "B", "jump") is None
        assert context.edges[("A", "B")].kind == "sequential"
        assert context.add_edge("", "B") is None

    def test_warning_report(self):
        """Test warnings are reported in line order with their line numbers."""
        parser = SCLParser("STEP A\nCONDITION x\nSTEP A")
        parser.parse()
        report = parser.diagnostics.format()

        assert "1. Line 2: CONDITION outside of a transition ignored: 'CONDITION x'" in report
        assert "2. Line 3: 'A' redeclared, earlier step discarded" in report
        with pytest.raises(SCLError, match="Line 3"):
            parser.diagnostics.raise_if_any()


class TestFold:
    """Test single-line transitions of the parse state."""

    def test_apply_line_moves_cursor(self):
        """Test declarations move the cursor."""
        context = ParseContext()
        apply_line(context, classify_line("STEP A", 1))
        assert context.current_node_id == "A"

        apply_line(context, classify_line("TRANSITION T", 2))
        assert context.current_node_id == "T"
        assert list(context.edges) == [("A", "T")]

    def test_apply_line_returns_context(self):
        """Test the fold returns the context it was given."""
        context = ParseContext()

        assert apply_line(context, classify_line("STEP A")) is context

    def test_malformed_declaration_ignored(self):
        """Test malformed declarations neither create nodes nor raise."""
        context = ParseContext()
        apply_line(context, LineToken(LineType.MALFORMED, "STEP ???", 3))

        assert context.nodes == {}
        assert context.current_node_id is None
        assert context.diagnostics.warnings[0].line_number == 3


class TestWholeCharts:
    """Test complete charts."""

    def test_empty_text(self):
        """Test empty input yields an empty graph."""
        assert parse_scl("").is_empty()
        assert parse_scl("  \n\n  ").is_empty()
        assert compile_scl("").is_empty()

    def test_file_with_byte_order_mark(self, tmp_path):
        """Test a BOM-prefixed UTF-8 file keeps its first declaration."""
        path = tmp_path / "chart.scl"
        path.write_bytes("STEP Init\nTRANSITION T1\nSTEP Run".encode("utf-8-sig"))
        graph = compile_file(str(path))

        assert [n.id for n in graph.nodes] == ["Init", "T1", "Run"]
        assert edge_pairs(graph) == [("Init", "T1"), ("T1", "Run")]

    def test_example_chart(self):
        """Test the bundled example chart."""
        graph = parse_scl(EXAMPLE_CODE)

        assert [n.id for n in graph.steps] == ["Init", "Process", "CoolDown", "Alarm"]
        assert [n.id for n in graph.transitions] == ["T1", "T2", "T3", "T_Ack"]
        assert edge_pairs(graph) == [
            ("Init", "T1"), ("T1", "Process"), ("Process", "T2"),
            ("T2", "CoolDown"), ("CoolDown", "T3"), ("T3", "Init"),
            ("T2", "Alarm"), ("Alarm", "T_Ack"), ("T_Ack", "Init"),
        ]
        assert [e.id for e in graph.edges if e.is_jump] == ["e-T3-Init", "e-T_Ack-Init"]
        assert graph.get_node("T2").condition == "Temp>100"

    def test_determinism(self):
        """Test compiling twice yields equal canonical graphs."""
        first = compile_scl(EXAMPLE_CODE)
        second = compile_scl(EXAMPLE_CODE)

        assert first.canonical() == second.canonical()
        assert [n.position for n in first.nodes] == [n.position for n in second.nodes]

    def test_garbage_never_raises(self):
        """Test odd input degrades instead of failing."""
        graph = compile_scl("???\nFROM x\nCONDITION\nACTION\nJUMP\nSTEP A FROM\nTRANSITION")

        assert [n.id for n in graph.nodes] == ["A"]
