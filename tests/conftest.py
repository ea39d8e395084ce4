"""Shared fixtures for the compiler tests."""

from pathlib import Path

import pytest

from psylang_compiler.graph_builder.loader import load_snapshot
from psylang_compiler.model.core import Edge, GraphSnapshot, Node

FIXTURES = Path(__file__).parent / "fixtures"


def build_snapshot(nodes, edges=()):
    """
    Build a snapshot from compact tuples.

    nodes: (id, nodeType, config) or (id, nodeType)
    edges: (source, target) / (source, target, sourceHandle) /
           (source, target, sourceHandle, targetHandle)
    """
    node_objs = []
    for entry in nodes:
        node_id, node_type = entry[0], entry[1]
        config = entry[2] if len(entry) > 2 else None
        node_objs.append(Node.create(node_id, node_type, config))

    edge_objs = []
    for i, entry in enumerate(edges):
        source, target = entry[0], entry[1]
        source_handle = entry[2] if len(entry) > 2 else None
        target_handle = entry[3] if len(entry) > 3 else None
        edge_objs.append(Edge(f"e{i}", source, target, source_handle, target_handle))

    return GraphSnapshot(node_objs, edge_objs)


@pytest.fixture
def make_snapshot():
    return build_snapshot


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def demo_snapshot() -> GraphSnapshot:
    return load_snapshot(FIXTURES / "demo_scale.json")


@pytest.fixture
def if_elseif_else(make_snapshot):
    """
    score >= 70 -> "high", else if score >= 40 -> "mid", else "low".
    """
    return make_snapshot(
        nodes=[
            ("s", "score", {"questionId": 3}),
            ("n70", "number", {"value": 70}),
            ("n40", "number", {"value": 40}),
            ("c1", "comparison", {"operator": ">="}),
            ("c2", "comparison", {"operator": ">="}),
            ("if", "condition", {"conditionType": "if"}),
            ("elif", "condition", {"conditionType": "elseif"}),
            ("high", "label", {"labelId": 1, "value": "high"}),
            ("mid", "label", {"labelId": 1, "value": "mid"}),
            ("low", "label", {"labelId": 1, "value": "low"}),
        ],
        edges=[
            ("s", "c1", None, "input-a"),
            ("n70", "c1", None, "input-b"),
            ("s", "c2", None, "input-a"),
            ("n40", "c2", None, "input-b"),
            ("c1", "if", None, "condition"),
            ("c2", "elif", None, "condition"),
            ("if", "high", "true"),
            ("if", "elif", "false", "execution"),
            ("elif", "mid", "true"),
            ("elif", "low", "false"),
        ],
    )
