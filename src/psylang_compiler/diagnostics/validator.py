"""
Structural checks over a graph snapshot.

Everything reported here is advisory: generated code is returned alongside
the warnings, never withheld because of them.
"""

from typing import List

from ..model.core import GraphSnapshot, Node
from ..model.handles import HandleRole, check_connections, extra_connections, handle_data_type
from ..model.types import NodeType
from .diagnostics import Diagnostics

INPUT_TYPES = (NodeType.ANSWER, NodeType.SCORE)
SINK_TYPES = (NodeType.OUTPUT, NodeType.LABEL)


class GraphValidator:
    """Reports missing input/output categories and unconnected nodes."""

    def __init__(self, snapshot: GraphSnapshot, diagnostics: Diagnostics):
        self.snapshot = snapshot
        self.diag = diagnostics

    def unconnected_nodes(self) -> List[Node]:
        """
        Nodes that are structurally cut off.

        - answer/score: no outgoing edge
        - output/label: no incoming edge
        - anything else: neither incoming nor outgoing edges
        """
        has_incoming = {e.target for e in self.snapshot.usable_edges}
        has_outgoing = {e.source for e in self.snapshot.usable_edges}

        result = []
        for node in self.snapshot.nodes:
            if node.node_type in INPUT_TYPES:
                cut_off = node.id not in has_outgoing
            elif node.node_type in SINK_TYPES:
                cut_off = node.id not in has_incoming
            else:
                cut_off = node.id not in has_incoming and node.id not in has_outgoing
            if cut_off:
                result.append(node)
        return result

    def validate(self) -> None:
        codes = self.diag.codes

        if not self.snapshot.nodes_of_type(*INPUT_TYPES):
            self.diag.warn(codes.NO_INPUTS)
        if not self.snapshot.nodes_of_type(NodeType.OUTPUT):
            self.diag.warn(codes.NO_OUTPUTS)

        unconnected = self.unconnected_nodes()
        if unconnected:
            self.diag.warn(codes.UNCONNECTED_NODES, count=len(unconnected),
                           extra=[n.id for n in unconnected])


def lint_connections(snapshot: GraphSnapshot, diagnostics: Diagnostics) -> int:
    """
    Report wires the editor would have refused, plus dangling wires.

    - CON002: edge to or from a missing node
    - CON001: source and target port kinds do not match
    - CON003: second wire into a single-connection port

    Returns:
        Number of incompatible or surplus edges found
    """
    codes = diagnostics.codes
    for edge in snapshot.dangling_edges:
        diagnostics.info(codes.DANGLING_EDGE, edge=edge.id)

    bad_edges = check_connections(snapshot)
    for edge in bad_edges:
        source_kind = handle_data_type(snapshot.get(edge.source), edge.source_handle, HandleRole.SOURCE)
        target_kind = handle_data_type(snapshot.get(edge.target), edge.target_handle, HandleRole.TARGET)
        diagnostics.warn(
            codes.INCOMPATIBLE_EDGE,
            edge=edge.id,
            expected=str(target_kind) if target_kind else None,
            actual=str(source_kind) if source_kind else None,
            reason=f"{source_kind or 'no output'} -> {target_kind or 'no input'}",
        )

    extras = extra_connections(snapshot)
    for edge in extras:
        port = f"{edge.target}.{edge.target_handle}" if edge.target_handle else edge.target
        diagnostics.warn(codes.EXTRA_CONNECTION, edge=edge.id, node=edge.target, port=port)

    return len(bad_edges) + len(extras)
