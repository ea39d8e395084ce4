import json

import networkx as nx
import pytest

from psylang_compiler.graph_builder import (
    build_dependency_graph,
    connected_node,
    connected_nodes_from_handle,
    find_cycle_path,
    load_snapshot,
    snapshot_from_dict,
    topological_sort,
)
from psylang_compiler.model import GraphFormatError, NodeType


# =============================================================================
# Dependency graph
# =============================================================================

class TestDependencyGraph:
    def test_every_node_has_entries(self, make_snapshot):
        snapshot = make_snapshot(nodes=[("a", "number"), ("b", "output"), ("lonely", "math")],
                                 edges=[("a", "b")])
        deps = build_dependency_graph(snapshot)
        assert deps.forward == {"a": set(), "b": {"a"}, "lonely": set()}
        assert deps.backward == {"a": {"b"}, "b": set(), "lonely": set()}

    def test_parallel_edges_collapse(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("a", "number"), ("m", "math", {"operator": "-"})],
            edges=[("a", "m", None, "input-a"), ("a", "m", None, "input-b")],
        )
        deps = build_dependency_graph(snapshot)
        assert deps.dependencies("m") == ["a"]

    def test_dependency_order_follows_first_connection(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("m", "math"), ("x", "number"), ("y", "number"), ("z", "number")],
            edges=[("z", "m"), ("x", "m"), ("y", "m"), ("z", "m")],
        )
        assert build_dependency_graph(snapshot).dependencies("m") == ["z", "x", "y"]

    def test_dangling_edges_ignored(self, make_snapshot):
        snapshot = make_snapshot(nodes=[("a", "number"), ("o", "output")],
                                 edges=[("ghost", "o"), ("a", "o"), ("a", "nowhere")])
        deps = build_dependency_graph(snapshot)
        assert deps.dependencies("o") == ["a"]
        assert deps.consumers("a") == ["o"]
        assert len(deps) == 2

    def test_unknown_ids_have_no_dependencies(self, make_snapshot):
        deps = build_dependency_graph(make_snapshot(nodes=[("a", "number")]))
        assert deps.dependencies("missing") == []
        assert deps.first_dependency("a") is None

    def test_graphml_export(self, demo_snapshot, tmp_path):
        path = tmp_path / "demo.graphml"
        build_dependency_graph(demo_snapshot).to_graphml(path)
        graph = nx.read_graphml(path)
        assert graph.number_of_nodes() == len(demo_snapshot.nodes)
        assert graph.nodes["15"]["kind"] == "condition"
        assert graph.edges["15", "18"]["source_handle"] == "true"


class TestHandleLookups:
    def test_connected_node_by_handle(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("a", "number"), ("b", "number"), ("m", "math", {"operator": "/"})],
            edges=[("b", "m", None, "input-b"), ("a", "m", None, "input-a")],
        )
        assert connected_node(snapshot, "m", "input-a") == "a"
        assert connected_node(snapshot, "m", "input-b") == "b"
        assert connected_node(snapshot, "m", "value") is None

    def test_default_port_matches_only_unset_handles(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("a", "number"), ("b", "number"), ("o", "output")],
            edges=[("a", "o", None, "input-a"), ("b", "o")],
        )
        assert connected_node(snapshot, "o") == "b"

    def test_first_edge_wins(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("a", "number"), ("b", "number"), ("x", "assign")],
            edges=[("a", "x", None, "value"), ("b", "x", None, "value")],
        )
        assert connected_node(snapshot, "x", "value") == "a"

    def test_nodes_from_handle(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("c", "condition"), ("l1", "label"), ("l2", "label"), ("l3", "label")],
            edges=[("c", "l2", "true"), ("c", "l1", "false"), ("c", "l1", "true"), ("c", "l2", "true")],
        )
        assert connected_nodes_from_handle(snapshot, "c", "true") == ["l2", "l1"]
        assert connected_nodes_from_handle(snapshot, "c", "false") == ["l1"]
        assert connected_nodes_from_handle(snapshot, "c") == []


# =============================================================================
# Topological sort / cycle detection
# =============================================================================

class TestTopology:
    def test_dependencies_come_first(self, demo_snapshot):
        deps = build_dependency_graph(demo_snapshot)
        order = topological_sort(deps)
        assert sorted(order) == sorted(n.id for n in demo_snapshot.nodes)
        position = {node_id: i for i, node_id in enumerate(order)}
        for edge in demo_snapshot.usable_edges:
            assert position[edge.source] < position[edge.target]

    def test_cycle_returns_empty(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("a", "math"), ("b", "math"), ("c", "math")],
            edges=[("a", "b"), ("b", "c"), ("c", "a")],
        )
        deps = build_dependency_graph(snapshot)
        assert topological_sort(deps) == []
        path = find_cycle_path(deps)
        assert path[0] == path[-1]
        assert set(path) == {"a", "b", "c"}

    def test_self_loop_is_a_cycle(self, make_snapshot):
        snapshot = make_snapshot(nodes=[("a", "math")], edges=[("a", "a")])
        assert topological_sort(build_dependency_graph(snapshot)) == []

    def test_diamond_is_not_a_cycle(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("n", "number"), ("l", "math"), ("r", "math"), ("top", "math")],
            edges=[("n", "l"), ("n", "r"), ("l", "top"), ("r", "top")],
        )
        deps = build_dependency_graph(snapshot)
        assert topological_sort(deps) == ["n", "l", "r", "top"]
        assert find_cycle_path(deps) == []

    def test_empty_graph(self, make_snapshot):
        assert topological_sort(build_dependency_graph(make_snapshot(nodes=[]))) == []


# =============================================================================
# Loader
# =============================================================================

class TestLoader:
    def test_editor_export_shape(self, demo_snapshot):
        assert len(demo_snapshot.nodes) == 27
        assert len(demo_snapshot.edges) == 24
        node = demo_snapshot.get("17")
        assert node.node_type is NodeType.CONDITION
        assert str(node.config.condition_type) == "elseif"
        edge = next(e for e in demo_snapshot.edges if e.id == "e15-18")
        assert (edge.source_handle, edge.target_handle) == ("true", "execution")

    def test_flat_shape_and_null_handles(self):
        snapshot = snapshot_from_dict({
            "nodes": [
                {"id": 1, "nodeType": "number", "config": {"value": 4}},
                {"id": "o", "nodeType": "output"},
            ],
            "edges": [{"source": 1, "target": "o", "sourceHandle": None, "targetHandle": ""}],
        })
        edge = snapshot.edges[0]
        assert edge.id == "e1-o"
        assert edge.source == "1"
        assert edge.source_handle is None and edge.target_handle is None

    @pytest.mark.parametrize("payload", [
        [],
        {"nodes": {"id": "a"}},
        {"nodes": [{"nodeType": "number"}]},
        {"nodes": [{"id": "a"}]},
        {"nodes": [{"id": "a", "nodeType": "teleport"}]},
        {"nodes": [{"id": "a", "nodeType": "number", "config": [1, 2]}]},
        {"nodes": [], "edges": [{"source": "a"}]},
    ])
    def test_contract_violations(self, payload):
        with pytest.raises(GraphFormatError):
            snapshot_from_dict(payload)

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{nodes: ", encoding="utf-8")
        with pytest.raises(GraphFormatError, match="invalid JSON"):
            load_snapshot(path)

    def test_round_trip_through_file(self, tmp_path):
        path = tmp_path / "g.json"
        path.write_text(json.dumps({"nodes": [{"id": "a", "nodeType": "answer"}], "edges": []}),
                        encoding="utf-8")
        assert load_snapshot(path).get("a").config.question_id == 1
