"""Reload persisted diagram payloads without re-parsing SCL text."""

import json

from .constants import JSON_ENCODING
from ..constants import NODE_KIND_STEP, NODE_KIND_TRANSITION, EDGE_KIND_JUMP, EDGE_KIND_SEQUENTIAL
from ..errors import DiagramFormatError
from ..scl_graph import SCLEdge, SCLGraph, SCLStep, SCLTransition


def _require(record: dict, key: str, where: str):
    if not isinstance(record, dict) or key not in record:
        raise DiagramFormatError(f"{where} is missing '{key}'")
    return record[key]


def _optional_object(record: dict, key: str, where: str) -> dict:
    value = record.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DiagramFormatError(f"{where} has a non-object '{key}'")
    return value


def _load_node(record: dict, index: int):
    where = f"Node #{index}"
    id_ = _require(record, "id", where)
    kind = _require(record, "type", where)
    data = _optional_object(record, "data", where)

    if kind == NODE_KIND_STEP:
        node = SCLStep(id_)
        actions = data.get("actions") or []
        if not isinstance(actions, list):
            raise DiagramFormatError(f"{where} has non-list 'actions'")
        node.actions = list(actions)
    elif kind == NODE_KIND_TRANSITION:
        node = SCLTransition(id_)
        node.condition = data.get("condition") or ""
    else:
        raise DiagramFormatError(f"{where} has unknown type '{kind}'")

    node.label = data.get("label", id_)
    node.width = record.get("width", node.width)
    node.height = record.get("height", node.height)

    position = record.get("position")
    if position is not None:
        try:
            node.x = position["x"]
            node.y = position["y"]
        except (KeyError, TypeError) as e:
            raise DiagramFormatError(f"{where} has an invalid position") from e
    return node


def _load_edge(record: dict, index: int):
    where = f"Edge #{index}"
    source = _require(record, "source", where)
    target = _require(record, "target", where)
    kind = EDGE_KIND_JUMP if record.get("animated") else EDGE_KIND_SEQUENTIAL

    edge = SCLEdge(source, target, kind)
    data = _optional_object(record, "data", where)
    edge.offset_x = data.get("offsetX", 0)
    edge.offset_y1 = data.get("offsetY1", 0)
    edge.offset_y2 = data.get("offsetY2", 0)
    return edge


def load_diagram(payload: dict) -> SCLGraph:
    """Rebuild an SCLGraph from a persisted diagram payload.

    Args:
        payload: Dict with "nodes" and "edges" lists

    Returns:
        SCLGraph with the stored sizes, positions and edge offsets

    Raises:
        DiagramFormatError: If the payload is not a diagram
    """
    if not isinstance(payload, dict):
        raise DiagramFormatError("Diagram payload must be an object")
    nodes = payload.get("nodes", [])
    edges = payload.get("edges", [])
    if not isinstance(nodes, list) or not isinstance(edges, list):
        raise DiagramFormatError("Diagram 'nodes' and 'edges' must be lists")

    return SCLGraph(
        [_load_node(record, i) for i, record in enumerate(nodes, 1)],
        [_load_edge(record, i) for i, record in enumerate(edges, 1)],
    )


def load_diagram_string(content: str) -> SCLGraph:
    """Rebuild an SCLGraph from a JSON string."""
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as e:
        raise DiagramFormatError(f"Invalid diagram JSON: {e.msg}", e.lineno) from e
    return load_diagram(payload)


def load_diagram_file(file_path: str) -> SCLGraph:
    """Rebuild an SCLGraph from a JSON file written by DiagramExporter."""
    with open(file_path, "r", encoding=JSON_ENCODING) as f:
        return load_diagram_string(f.read())
