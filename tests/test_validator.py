import logging

from psylang_compiler.diagnostics import (
    Diagnostics,
    DiagnosticsConfig,
    GraphValidator,
    Severity,
    codes,
    lint_connections,
    null_sink,
)


def quiet():
    return Diagnostics(DiagnosticsConfig(sink=null_sink))


class TestGraphValidator:
    def test_unconnected_rules_per_kind(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("a", "answer"), ("s", "score"), ("n", "number"), ("o", "output"),
                   ("l", "label"), ("idle", "math"), ("sink_only", "math")],
            edges=[("s", "o"), ("n", "sink_only"), ("l", "n")],
        )
        ids = [n.id for n in GraphValidator(snapshot, quiet()).unconnected_nodes()]
        # label "l" has only an outgoing edge, so it still counts as cut off
        assert ids == ["a", "l", "idle"]

    def test_answer_without_outgoing_edge(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("a", "answer"), ("s", "score"), ("o", "output")],
            edges=[("o", "a"), ("s", "o")],
        )
        diag = quiet()
        GraphValidator(snapshot, diag).validate()
        assert diag.warnings == ["Found 1 unconnected node(s)."]
        assert diag.events[0]["extra"] == ["a"]
        assert diag.events[0]["count"] == 1

    def test_missing_categories(self, make_snapshot):
        diag = quiet()
        GraphValidator(make_snapshot(nodes=[]), diag).validate()
        assert [e["code"] for e in diag.events] == ["VAL001", "VAL002"]
        assert not diag.has_errors

    def test_clean_graph(self, demo_snapshot):
        diag = quiet()
        GraphValidator(demo_snapshot, diag).validate()
        assert diag.events == []


class TestLintConnections:
    def test_incompatible_and_dangling(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("c", "comparison"), ("o", "output"), ("n", "number")],
            edges=[("c", "o"), ("n", "ghost")],
        )
        diag = quiet()
        assert lint_connections(snapshot, diag) == 1
        assert [e["code"] for e in diag.events] == ["CON002", "CON001"]
        assert diag.messages(Severity.INFO) == ["Edge 'e1' references a missing node and was ignored."]
        assert diag.warnings == ["Edge 'e0' is incompatible: boolean -> number."]
        assert diag.events[1]["expected"] == "number"
        assert diag.events[1]["actual"] == "boolean"

    def test_second_wire_into_ported_math_input(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("n1", "number", {"value": 1}), ("n2", "number", {"value": 2}),
                   ("n3", "number", {"value": 3}), ("m", "math", {"operator": "-"}), ("o", "output")],
            edges=[("n1", "m", None, "input-a"), ("n2", "m", None, "input-a"),
                   ("n3", "m", None, "input-b"), ("m", "o")],
        )
        diag = quiet()
        assert lint_connections(snapshot, diag) == 1
        assert diag.warnings == [
            "Edge 'e1' is a second wire into single-connection port 'm.input-a' and is ignored."
        ]
        event = diag.events[0]
        assert (event["code"], event["node"], event["port"]) == ("CON003", "m", "m.input-a")

    def test_every_surplus_wire_is_reported(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("a", "answer"), ("b", "answer"), ("c", "answer"), ("o", "output")],
            edges=[("a", "o"), ("b", "o"), ("c", "o")],
        )
        diag = quiet()
        assert lint_connections(snapshot, diag) == 2
        assert [e["edge"] for e in diag.events] == ["e1", "e2"]
        assert diag.events[0]["port"] == "o"

    def test_multi_input_ports_accept_many_wires(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("a", "answer"), ("b", "answer"), ("c", "answer"),
                   ("sum", "math", {"operator": "+"}), ("cmp", "comparison"), ("l", "logical")],
            edges=[("a", "sum"), ("b", "sum"), ("c", "sum"),
                   ("a", "cmp"), ("b", "cmp"), ("cmp", "l"), ("cmp", "l")],
        )
        diag = quiet()
        assert lint_connections(snapshot, diag) == 0
        assert diag.events == []

    def test_ports_of_one_node_are_counted_separately(self, make_snapshot):
        snapshot = make_snapshot(
            nodes=[("a", "answer"), ("n", "number"), ("cmp", "comparison", {"operator": "=="})],
            edges=[("a", "cmp", None, "input-a"), ("n", "cmp", None, "input-b"),
                   ("n", "cmp", None, "input-b")],
        )
        diag = quiet()
        assert lint_connections(snapshot, diag) == 1
        assert diag.events[0]["port"] == "cmp.input-b"

    def test_demo_graph_is_clean(self, demo_snapshot):
        diag = quiet()
        assert lint_connections(demo_snapshot, diag) == 0
        assert diag.events == []


class TestDiagnostics:
    def test_template_and_explicit_message(self):
        diag = quiet()
        diag.warn(codes.UNCONNECTED_NODES, count=3)
        diag.warn(codes.NO_OUTPUTS, msg="custom")
        assert diag.warnings == ["Found 3 unconnected node(s).", "custom"]

    def test_missing_placeholder_degrades(self):
        diag = quiet()
        diag.error(codes.CYCLE_DETECTED)
        assert "(missing: cycle)" in diag.errors[0]
        assert diag.has_errors

    def test_sink_receives_line_and_severity(self):
        received = []
        diag = Diagnostics(DiagnosticsConfig(sink=lambda line, level: received.append((line, level))))
        diag.warn(codes.NO_INPUTS, node="n1")
        assert len(received) == 1
        line, level = received[0]
        assert "WARN VAL001 @ n1: No input nodes (Answer/Score)." in line
        assert level is Severity.WARN

    def test_logging_sink_maps_severity(self, caplog):
        diag = Diagnostics()
        with caplog.at_level(logging.DEBUG, logger="psylang_compiler.diagnostics"):
            diag.error(codes.CYCLE_DETECTED, cycle="a -> a")
            diag.info(codes.DANGLING_EDGE, edge="e9")
        levels = [r.levelno for r in caplog.records]
        assert levels == [logging.ERROR, logging.INFO]

    def test_logging_level_ignores_message_text(self, caplog):
        diag = Diagnostics()
        with caplog.at_level(logging.DEBUG, logger="psylang_compiler.diagnostics"):
            diag.warn(codes.INCOMPATIBLE_EDGE, edge="x INFO y", reason="ERROR here")
            diag.info(codes.DANGLING_EDGE, edge="a WARN b")
        assert [r.levelno for r in caplog.records] == [logging.WARNING, logging.INFO]
