"""
loader.py

Build a GraphSnapshot from the node/edge JSON exported by the visual builder.

Two node shapes are accepted:
1) flat:    {"id": "3", "nodeType": "answer", "config": {"questionId": 1}}
2) editor:  {"id": "3", "type": "answer", "data": {"nodeType": "answer", "config": {...}}}

Edges use the editor's field names (``sourceHandle`` / ``targetHandle`` may be
absent or null).
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..model.core import Edge, GraphFormatError, GraphSnapshot, Node

logger = logging.getLogger(__name__)


def _require_list(payload: Mapping[str, Any], key: str) -> List[Any]:
    value = payload.get(key, [])
    if value is None:
        return []
    if not isinstance(value, list):
        raise GraphFormatError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _parse_node(entry: Any, position: int) -> Node:
    if not isinstance(entry, Mapping):
        raise GraphFormatError(f"Node #{position} must be an object")

    node_id = entry.get("id")
    if node_id is None or node_id == "":
        raise GraphFormatError(f"Node #{position} has no id")

    data = entry.get("data") if isinstance(entry.get("data"), Mapping) else {}
    node_type = entry.get("nodeType") or data.get("nodeType") or entry.get("type")
    if not node_type:
        raise GraphFormatError(f"Node '{node_id}' has no nodeType")

    config = entry.get("config")
    if config is None:
        config = data.get("config")
    if config is not None and not isinstance(config, Mapping):
        raise GraphFormatError(f"Node '{node_id}' config must be an object")

    try:
        return Node.create(str(node_id), node_type, config)
    except ValueError as exc:
        raise GraphFormatError(f"Node '{node_id}': {exc}") from exc


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _parse_edge(entry: Any, position: int) -> Edge:
    if not isinstance(entry, Mapping):
        raise GraphFormatError(f"Edge #{position} must be an object")

    source = entry.get("source")
    target = entry.get("target")
    if source is None or target is None:
        raise GraphFormatError(f"Edge #{position} needs both 'source' and 'target'")

    edge_id = entry.get("id") or f"e{source}-{target}"
    return Edge(
        id=str(edge_id),
        source=str(source),
        target=str(target),
        source_handle=_optional_str(entry.get("sourceHandle")),
        target_handle=_optional_str(entry.get("targetHandle")),
    )


def snapshot_from_dict(payload: Mapping[str, Any]) -> GraphSnapshot:
    """
    Convert a decoded ``{"nodes": [...], "edges": [...]}`` document.

    Raises:
        GraphFormatError: If the document violates the input contract
    """
    if not isinstance(payload, Mapping):
        raise GraphFormatError("Graph document must be an object with 'nodes' and 'edges'")

    nodes = [_parse_node(n, i) for i, n in enumerate(_require_list(payload, "nodes"))]
    edges = [_parse_edge(e, i) for i, e in enumerate(_require_list(payload, "edges"))]
    snapshot = GraphSnapshot(nodes, edges)
    logger.debug("Loaded %s", snapshot)
    return snapshot


def load_snapshot(path: Path) -> GraphSnapshot:
    """Read a graph JSON file from disk."""
    with Path(path).open("r", encoding="utf-8") as fh:
        try:
            data: Dict[str, Any] = json.load(fh)
        except json.JSONDecodeError as exc:
            raise GraphFormatError(f"{path}: invalid JSON ({exc})") from exc
    return snapshot_from_dict(data)
