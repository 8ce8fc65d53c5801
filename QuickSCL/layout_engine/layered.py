"""Layered (Sugiyama-style) layout on top of networkx.

Phases:
  1. Cycle removal (reverse DFS back-edges, drop self-loops)
  2. Rank assignment (longest path from sources)
  3. Crossing minimisation (barycenter sweeps)
  4. Coordinate assignment (node sizes, spacing, margins, rank direction)

The result is deterministic: every tie is broken by submission order.
"""

import logging
from typing import Dict, List, Tuple

import networkx as nx

from .constants import ORDERING_SWEEPS, RANKDIR_BT, RANKDIR_RL
from .engine import LayoutConfig, LayoutEngine, LayoutNode
from ..errors import LayoutError

logger = logging.getLogger(__name__)

_ON_STACK = 1
_DONE = 2


def build_digraph(nodes: List[LayoutNode], edges: List[Tuple[str, str]]) -> nx.DiGraph:
    """Build a DiGraph from node records and edge pairs.

    Edge endpoints that were not submitted become zero-size placeholders.
    """
    graph = nx.DiGraph()
    for node in nodes:
        graph.add_node(node.id, width=node.width, height=node.height, placeholder=False)
    for source, target in edges:
        for endpoint in (source, target):
            if endpoint not in graph:
                graph.add_node(endpoint, width=0, height=0, placeholder=True)
        graph.add_edge(source, target)
    return graph


def find_back_edges(graph: nx.DiGraph, order: Dict[str, int]) -> set:
    """Return the edges that close a cycle in a DFS over the graph.

    Roots are visited sources first, then everything else, each group in
    submission order. Self-loops are not reported.
    """
    def successors(node):
        return iter(sorted(graph.successors(node), key=order.get))

    sources = [n for n in graph.nodes if not any(p != n for p in graph.predecessors(n))]
    roots = sorted(sources, key=order.get) + sorted(graph.nodes, key=order.get)

    state = {}
    back_edges = set()
    for root in roots:
        if root in state:
            continue
        state[root] = _ON_STACK
        stack = [(root, successors(root))]
        while stack:
            node, children = stack[-1]
            for child in children:
                if child == node:
                    continue
                child_state = state.get(child)
                if child_state is None:
                    state[child] = _ON_STACK
                    stack.append((child, successors(child)))
                    break
                if child_state == _ON_STACK:
                    back_edges.add((node, child))
            else:
                state[node] = _DONE
                stack.pop()
    return back_edges


def make_acyclic(graph: nx.DiGraph, order: Dict[str, int]) -> nx.DiGraph:
    """Copy of the graph with back-edges reversed and self-loops removed."""
    back_edges = find_back_edges(graph, order)
    dag = nx.DiGraph()
    dag.add_nodes_from(graph.nodes(data=True))
    for source, target in graph.edges():
        if source == target:
            continue
        if (source, target) in back_edges:
            dag.add_edge(target, source)
        else:
            dag.add_edge(source, target)
    return dag


def assign_ranks(dag: nx.DiGraph, order: Dict[str, int]) -> Dict[str, int]:
    """Longest-path ranking; nodes without predecessors get rank 0."""
    ranks = {}
    for node in nx.lexicographical_topological_sort(dag, key=order.get):
        preds = [ranks[p] + 1 for p in dag.predecessors(node)]
        ranks[node] = max(preds) if preds else 0
    return ranks


def count_crossings(dag: nx.DiGraph, layers: List[List[str]]) -> int:
    """Count crossings between edges joining adjacent layers."""
    crossings = 0
    for upper, lower in zip(layers, layers[1:]):
        upper_pos = {node: i for i, node in enumerate(upper)}
        lower_pos = {node: i for i, node in enumerate(lower)}
        segments = [
            (upper_pos[u], lower_pos[v])
            for u in upper for v in dag.successors(u) if v in lower_pos
        ]
        for i, (a1, b1) in enumerate(segments):
            for a2, b2 in segments[i + 1:]:
                if (a1 - a2) * (b1 - b2) < 0:
                    crossings += 1
    return crossings


def _sweep(dag: nx.DiGraph, layers: List[List[str]], ranks: Dict[str, int], downward: bool):
    position = {node: i for layer in layers for i, node in enumerate(layer)}
    indices = range(1, len(layers)) if downward else range(len(layers) - 2, -1, -1)
    for r in indices:
        layer = layers[r]

        def barycenter(node):
            if downward:
                neighbours = [p for p in dag.predecessors(node) if ranks[p] < r]
            else:
                neighbours = [s for s in dag.successors(node) if ranks[s] > r]
            if not neighbours:
                return position[node]
            return sum(position[n] for n in neighbours) / len(neighbours)

        keyed = sorted(layer, key=lambda n: (barycenter(n), position[n]))
        layers[r] = keyed
        for i, node in enumerate(keyed):
            position[node] = i


def order_layers(dag: nx.DiGraph, ranks: Dict[str, int], order: Dict[str, int]) -> List[List[str]]:
    """Order nodes within each rank to reduce edge crossings."""
    layer_count = max(ranks.values()) + 1 if ranks else 0
    layers = [[] for _ in range(layer_count)]
    for node in sorted(dag.nodes, key=order.get):
        layers[ranks[node]].append(node)

    best = [list(layer) for layer in layers]
    best_crossings = count_crossings(dag, best)
    for i in range(ORDERING_SWEEPS):
        _sweep(dag, layers, ranks, downward=(i % 2 == 0))
        crossings = count_crossings(dag, layers)
        if crossings < best_crossings:
            best = [list(layer) for layer in layers]
            best_crossings = crossings
    return best


def assign_coordinates(dag: nx.DiGraph, layers: List[List[str]], ranks: Dict[str, int],
                       config: LayoutConfig) -> Dict[str, Tuple[float, float]]:
    """Place every node and return centre anchors for all of them."""
    horizontal = config.is_horizontal

    def breadth(node):
        attrs = dag.nodes[node]
        return attrs["height"] if horizontal else attrs["width"]

    def depth(node):
        attrs = dag.nodes[node]
        return attrs["width"] if horizontal else attrs["height"]

    # Rank axis
    rank_depths = [max((depth(n) for n in layer), default=0) for layer in layers]
    rank_centres = []
    cursor = 0.0
    for r, rank_depth in enumerate(rank_depths):
        if r > 0:
            cursor += config.ranksep
        rank_centres.append(cursor + rank_depth / 2)
        cursor += rank_depth
    if config.rankdir in (RANKDIR_BT, RANKDIR_RL):
        rank_centres = [cursor - c for c in rank_centres]

    # Order axis: pull each node towards the mean of its placed predecessors
    along = {}
    for r, layer in enumerate(layers):
        right_edge = None
        packed = 0.0
        for node in layer:
            half = breadth(node) / 2
            preds = [along[p] for p in dag.predecessors(node) if p in along and ranks[p] < r]
            desired = sum(preds) / len(preds) if preds else packed + half
            if right_edge is not None:
                desired = max(desired, right_edge + config.nodesep + half)
            along[node] = desired
            right_edge = desired + half
            packed = right_edge + config.nodesep

    anchors = {}
    for node in dag.nodes:
        a = along[node]
        c = rank_centres[ranks[node]]
        anchors[node] = (c, a) if horizontal else (a, c)

    # Translate so the bounding box starts at the margins
    if anchors:
        min_x = min(x - dag.nodes[n]["width"] / 2 for n, (x, _) in anchors.items())
        min_y = min(y - dag.nodes[n]["height"] / 2 for n, (_, y) in anchors.items())
        dx = config.marginx - min_x
        dy = config.marginy - min_y
        anchors = {n: (x + dx, y + dy) for n, (x, y) in anchors.items()}
    return anchors


class LayeredLayoutEngine(LayoutEngine):
    """Default layout back-end: layered drawing of a directed graph."""

    def layout(self, nodes, edges, config=None):
        config = config or LayoutConfig()
        graph = build_digraph(nodes, edges)
        order = {node: i for i, node in enumerate(graph.nodes)}

        dag = make_acyclic(graph, order)
        ranks = assign_ranks(dag, order)
        layers = order_layers(dag, ranks, order)
        anchors = assign_coordinates(dag, layers, ranks, config)

        result = {}
        for node in nodes:
            if node.id not in anchors:
                raise LayoutError(f"No position computed for node '{node.id}'")
            result[node.id] = anchors[node.id]

        logger.debug("Laid out %d nodes (%d placeholders) over %d ranks",
                     len(result), graph.number_of_nodes() - len(result), len(layers))
        return result


def layout(nodes: List[LayoutNode], edges: List[Tuple[str, str]],
           config: LayoutConfig = None) -> Dict[str, Tuple[float, float]]:
    """Lay out a graph with the default LayeredLayoutEngine."""
    return LayeredLayoutEngine().layout(nodes, edges, config)
